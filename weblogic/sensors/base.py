"""Base sensor classes for operator monitoring.

This module defines the base OperatorSensor class that provides lifecycle hooks
for monitoring operator events. All hooks are no-ops by default, allowing
subclasses to override only the events they care about.

Hook conventions:
- Hooks come in pairs: on_X_start() and on_X_complete()
- Start hooks return an optional state dict for tracking multi-phase operations
- Complete hooks receive the state dict from their corresponding start hook
"""

from typing import Dict, Optional, Any, List
import logging

logger = logging.getLogger(__name__)


class OperatorSensor:
    """Base sensor class for WebLogic operator monitoring.

    Hooks cover three categories:
    1. Reconciliation lifecycle (one handled event)
    2. Dependent resource operations (Service and StatefulSet)
    3. Status writes and dropped events

    Example:
        class LoggingSensor(OperatorSensor):
            def on_reconcile_start(self, server_name, namespace, trigger_source):
                return {'start_time': time.time()}

            def on_reconcile_complete(self, server_name, namespace, state, success, error=None):
                duration = time.time() - state['start_time']
                logger.info(f"Reconciled {server_name} in {duration}s")
    """

    # =============================================================================
    # Reconciliation Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        server_name: str,
        namespace: str,
        trigger_source: str,
    ) -> Optional[Dict[str, Any]]:
        """Called when handling of an event begins.

        Args:
            server_name: WeblogicServer resource name
            namespace: Kubernetes namespace
            trigger_source: Event that triggered reconciliation (added, updated, deleted, statefulset)

        Returns:
            Optional state dict passed to on_reconcile_complete
        """
        pass

    def on_reconcile_complete(
        self,
        server_name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called when handling of an event completes.

        Args:
            server_name: WeblogicServer resource name
            namespace: Kubernetes namespace
            state: State dict returned from on_reconcile_start
            success: Whether reconciliation succeeded
            error: Exception if reconciliation failed
        """
        pass

    # =============================================================================
    # Resource Operation Hooks
    # =============================================================================

    def on_resource_sync_start(
        self,
        server_name: str,
        namespace: str,
        resource_type: str,
    ) -> Optional[Dict[str, Any]]:
        """Called when a dependent resource sync begins.

        Args:
            server_name: WeblogicServer owning the resource
            namespace: Kubernetes namespace
            resource_type: Type of resource (Service, StatefulSet)

        Returns:
            Optional state dict passed to on_resource_sync_complete
        """
        pass

    def on_resource_sync_complete(
        self,
        server_name: str,
        namespace: str,
        resource_type: str,
        state: Optional[Dict[str, Any]],
        operation: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called when a dependent resource sync completes.

        Args:
            server_name: WeblogicServer owning the resource
            namespace: Kubernetes namespace
            resource_type: Type of resource
            state: State dict returned from on_resource_sync_start
            operation: Operation performed (ensure, teardown)
            success: Whether operation succeeded
            error: Exception if operation failed
        """
        pass

    # =============================================================================
    # Status and Event Hooks
    # =============================================================================

    def on_status_update(
        self,
        server_name: str,
        namespace: str,
        phase: str,
        update_fields: List[str],
    ) -> None:
        """Called when a status write was persisted.

        Args:
            server_name: WeblogicServer resource name
            namespace: Kubernetes namespace
            phase: Phase written
            update_fields: Status fields that changed (phase, errors)
        """
        pass

    def on_event_dropped(
        self,
        kind: str,
        name: str,
        namespace: str,
        reason: str,
    ) -> None:
        """Called when an event could not be handled and was discarded.

        Args:
            kind: Kind of the object the event was about
            name: Object name
            namespace: Kubernetes namespace
            reason: Error class explaining the drop
        """
        pass

    # =============================================================================
    # Utility Methods
    # =============================================================================

    def asdict(self) -> Dict[str, Any]:
        """Return sensor state as dictionary.

        Overridden by sensors that maintain state.
        """
        return {}
