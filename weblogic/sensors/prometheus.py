"""Prometheus monitoring backend for the WebLogic operator.

PrometheusMonitor turns sensor events into Prometheus metrics:

1. Reconciliation health - duration, throughput, errors
2. Dependent resource sync - operation counts, latency, errors
3. Status writes and dropped events
"""

from typing import Dict, Optional, Any, List
import time
import logging

from prometheus_client import Counter, Histogram, CollectorRegistry, REGISTRY

from weblogic.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class PrometheusMonitor(OperatorSensor):
    """Prometheus metrics monitor for the WebLogic operator.

    Metrics are prefixed `weblogicop_` and labelled by server and namespace.
    They are registered in `registry`, the process-wide default unless given.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        super().__init__()

        # =============================================================================
        # Reconciliation Metrics
        # =============================================================================

        self.reconcile_duration = Histogram(
            'weblogicop_reconcile_duration_seconds',
            'Time spent handling one event',
            labelnames=['server_name', 'namespace', 'trigger_source', 'result'],
            buckets=[0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
            registry=registry,
        )

        self.reconcile_total = Counter(
            'weblogicop_reconcile_total',
            'Total number of reconciliations',
            labelnames=['server_name', 'namespace', 'trigger_source', 'result'],
            registry=registry,
        )

        self.reconcile_errors = Counter(
            'weblogicop_reconcile_errors_total',
            'Total number of reconciliation errors',
            labelnames=['server_name', 'namespace', 'error_type'],
            registry=registry,
        )

        # =============================================================================
        # Kubernetes Resource Sync Metrics
        # =============================================================================

        self.resource_sync_duration = Histogram(
            'weblogicop_resource_sync_duration_seconds',
            'Time spent syncing dependent resources',
            labelnames=['server_name', 'namespace', 'resource_type', 'operation', 'result'],
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        self.resource_sync_total = Counter(
            'weblogicop_resource_sync_total',
            'Total number of dependent resource operations',
            labelnames=['server_name', 'namespace', 'resource_type', 'operation', 'result'],
            registry=registry,
        )

        self.resource_sync_errors = Counter(
            'weblogicop_resource_sync_errors_total',
            'Total number of dependent resource errors',
            labelnames=['server_name', 'namespace', 'resource_type', 'error_type'],
            registry=registry,
        )

        # =============================================================================
        # Status and Event Metrics
        # =============================================================================

        self.status_updates = Counter(
            'weblogicop_status_updates_total',
            'Total number of persisted status writes',
            labelnames=['server_name', 'namespace', 'phase', 'update_field'],
            registry=registry,
        )

        self.events_dropped = Counter(
            'weblogicop_events_dropped_total',
            'Total number of events discarded without reconciliation',
            labelnames=['kind', 'namespace', 'reason'],
            registry=registry,
        )

        logger.info("PrometheusMonitor initialized with all metrics")

    # =============================================================================
    # Reconciliation Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        server_name: str,
        namespace: str,
        trigger_source: str,
    ) -> Optional[Dict[str, Any]]:
        """Record reconciliation start time."""
        return {
            'start_time': time.time(),
            'trigger_source': trigger_source,
        }

    def on_reconcile_complete(
        self,
        server_name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Record reconciliation duration and result."""
        if state:
            duration = time.time() - state['start_time']
            trigger_source = state['trigger_source']
            result = 'success' if success else 'failure'

            self.reconcile_duration.labels(
                server_name=server_name,
                namespace=namespace,
                trigger_source=trigger_source,
                result=result,
            ).observe(duration)

            self.reconcile_total.labels(
                server_name=server_name,
                namespace=namespace,
                trigger_source=trigger_source,
                result=result,
            ).inc()

        if error:
            self.reconcile_errors.labels(
                server_name=server_name,
                namespace=namespace,
                error_type=error.__class__.__name__,
            ).inc()

    # =============================================================================
    # Resource Operation Hooks
    # =============================================================================

    def on_resource_sync_start(
        self,
        server_name: str,
        namespace: str,
        resource_type: str,
    ) -> Optional[Dict[str, Any]]:
        """Record resource sync start time."""
        return {'start_time': time.time()}

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
        """Record resource sync duration and result."""
        result = 'success' if success else 'failure'
        if state:
            duration = time.time() - state['start_time']
            self.resource_sync_duration.labels(
                server_name=server_name,
                namespace=namespace,
                resource_type=resource_type,
                operation=operation,
                result=result,
            ).observe(duration)

        self.resource_sync_total.labels(
            server_name=server_name,
            namespace=namespace,
            resource_type=resource_type,
            operation=operation,
            result=result,
        ).inc()

        if error:
            self.resource_sync_errors.labels(
                server_name=server_name,
                namespace=namespace,
                resource_type=resource_type,
                error_type=error.__class__.__name__,
            ).inc()

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
        """Record status update."""
        for field in update_fields:
            self.status_updates.labels(
                server_name=server_name,
                namespace=namespace,
                phase=phase,
                update_field=field,
            ).inc()

    def on_event_dropped(
        self,
        kind: str,
        name: str,
        namespace: str,
        reason: str,
    ) -> None:
        """Record dropped event."""
        self.events_dropped.labels(
            kind=kind,
            namespace=namespace or "",
            reason=reason,
        ).inc()
