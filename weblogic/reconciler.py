import logging
from logging import Logger
from typing import Awaitable, Optional, TypeVar
from weblogic.client import ClusterClient
from weblogic.events import (
    ServerAdded,
    ServerUpdated,
    ServerDeleted,
    ServerEvent,
    StatefulSetAdded,
    StatefulSetUpdated,
    StatefulSetDeleted,
    StatefulSetEvent,
)
from weblogic.resources import DependentResources, ResourceLocator, WeblogicServers
from weblogic.sensors.base import OperatorSensor
from weblogic.status import StatusStateMachine
from weblogic.types.models.statefulset import StatefulSetSnapshot
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.types.models.weblogicserver_spec import WeblogicServerPhase
from weblogic.types.settings import Settings
from weblogic.utils.errors import OperatorError, ValidationError

T = TypeVar("T")


class Reconciler:
    """Drives dependent resources and status from WeblogicServer and StatefulSet events.

    This is the only place deciding what an error means: failures while
    converging a server become a `Failed` status, failures to resolve a
    stateful set's owner drop the event. Errors raised while writing status
    are logged and the event is considered handled.
    """

    client: ClusterClient
    settings: Settings
    sensor: Optional[OperatorSensor]
    servers: WeblogicServers
    locator: ResourceLocator
    resources: DependentResources
    status: StatusStateMachine
    logger: Logger

    def __init__(
        self,
        client: ClusterClient,
        settings: Settings = None,
        sensor: OperatorSensor = None,
        logger: Logger = None,
    ):
        self.client = client
        self.settings = settings or Settings()
        self.sensor = sensor
        self.logger = logger or logging.getLogger(__name__)
        self.servers = WeblogicServers(client)
        self.locator = ResourceLocator(client, servers=self.servers)
        self.resources = DependentResources(
            client, locator=self.locator, settings=self.settings
        )
        self.status = StatusStateMachine(self.servers, self.settings, sensor=sensor)

    async def handle_server_event(self, event: ServerEvent) -> None:
        if isinstance(event, ServerAdded):
            await self.reconcile_create(event.server, trigger_source="added")
        elif isinstance(event, ServerUpdated):
            if event.is_resync:
                self.logger.debug(
                    f"Skipping resync of {event.new.key} at {event.new.resource_version}"
                )
                return
            await self.reconcile_create(event.new, trigger_source="updated")
        elif isinstance(event, ServerDeleted):
            await self.reconcile_delete(event.server)
        else:
            raise TypeError(f"Unexpected server event: {event!r}")

    async def handle_stateful_set_event(self, event: StatefulSetEvent) -> None:
        if isinstance(event, StatefulSetAdded):
            await self.reconcile_stateful_set(event.stateful_set)
        elif isinstance(event, StatefulSetUpdated):
            await self.reconcile_stateful_set(event.new)
        elif isinstance(event, StatefulSetDeleted):
            await self.reconcile_stateful_set(event.stateful_set)
        else:
            raise TypeError(f"Unexpected stateful set event: {event!r}")

    async def reconcile_create(
        self, server: WeblogicServer, trigger_source: str = "added"
    ) -> None:
        """Converge a new or changed server.

        A server without the ownership label only gets the label in this
        cycle; the resulting update event carries on from there.
        """
        server = WeblogicServer.from_body(server.to_body()).ensure_defaults()
        state = self._on_reconcile_start(server, trigger_source)
        try:
            server.validate()
            if not server.has_server_label():
                self.logger.info(f"Labelling {server.key}")
                await self.servers.update(
                    server,
                    self._label,
                    attempts=self.settings.status_update_max_attempts,
                    delay=self.settings.status_update_retry_delay_seconds,
                )
                self._on_reconcile_complete(server, state, success=True)
                return
            service = await self._sync(
                server, "Service", "ensure", self.resources.ensure_service(server)
            )
            await self._sync(
                server,
                "StatefulSet",
                "ensure",
                self.resources.ensure_stateful_set(server, service),
            )
        except OperatorError as ex:
            if isinstance(ex, ValidationError):
                self.logger.warning(f"{ex}")
            else:
                self.logger.error(f"Failed to reconcile {server.key}: {ex}")
            self._on_reconcile_complete(server, state, success=False, error=ex)
            await self._fail(server, ex)
            return
        self._on_reconcile_complete(server, state, success=True)

    async def reconcile_delete(self, server: WeblogicServer) -> None:
        """Remove the dependent resources of a deleted server.

        The stateful set goes first; the first failure aborts the teardown.
        """
        state = self._on_reconcile_start(server, "deleted")
        try:
            server.validate()
            await self._sync(
                server,
                "StatefulSet",
                "teardown",
                self.resources.teardown_stateful_set(server),
            )
            await self._sync(
                server, "Service", "teardown", self.resources.teardown_service(server)
            )
        except OperatorError as ex:
            self.logger.error(f"Failed to tear down {server.key}: {ex}")
            self._on_reconcile_complete(server, state, success=False, error=ex)
            await self._fail(server, ex)
            return
        finally:
            self.servers.forget(server)
        self._on_reconcile_complete(server, state, success=True)

    async def reconcile_stateful_set(self, stateful_set: StatefulSetSnapshot) -> None:
        """Report the readiness of a stateful set on its owning server."""
        try:
            server = await self.locator.find_server_for_stateful_set(stateful_set)
        except OperatorError as ex:
            self.logger.warning(
                f"Dropping event for StatefulSet {stateful_set.namespace}/{stateful_set.name}: {ex}"
            )
            if self.sensor:
                self.sensor.on_event_dropped(
                    "StatefulSet",
                    stateful_set.name,
                    stateful_set.namespace,
                    ex.__class__.__name__,
                )
            return

        state = self._on_reconcile_start(server, "statefulset")
        phase = self.status.phase_for(
            stateful_set.desired_replicas, stateful_set.ready_replicas
        )
        if phase is None:
            self.logger.debug(
                f"{stateful_set.ready_replicas} ready replicas exceed "
                f"{stateful_set.desired_replicas} desired for {server.key}"
            )
            self._on_reconcile_complete(server, state, success=True)
            return
        try:
            await self.status.set_state(server, phase)
        except OperatorError as ex:
            self.logger.error(f"Failed to update status of {server.key}: {ex}")
            self._on_reconcile_complete(server, state, success=False, error=ex)
            return
        self._on_reconcile_complete(server, state, success=True)

    @staticmethod
    def _label(server: WeblogicServer) -> bool:
        server.ensure_defaults()
        if server.has_server_label():
            return False
        server.add_server_label()
        return True

    async def _fail(self, server: WeblogicServer, error: Exception) -> None:
        try:
            await self.status.set_state(server, WeblogicServerPhase.FAILED, error)
        except OperatorError as ex:
            self.logger.error(f"Failed to record failure of {server.key}: {ex}")

    async def _sync(
        self,
        server: WeblogicServer,
        resource_type: str,
        operation: str,
        step: Awaitable[T],
    ) -> T:
        state = (
            self.sensor.on_resource_sync_start(
                server.name, server.namespace, resource_type
            )
            if self.sensor
            else None
        )
        try:
            result = await step
        except OperatorError as ex:
            if self.sensor:
                self.sensor.on_resource_sync_complete(
                    server.name,
                    server.namespace,
                    resource_type,
                    state,
                    operation,
                    False,
                    ex,
                )
            raise
        if self.sensor:
            self.sensor.on_resource_sync_complete(
                server.name, server.namespace, resource_type, state, operation, True
            )
        return result

    def _on_reconcile_start(self, server: WeblogicServer, trigger_source: str):
        if self.sensor:
            return self.sensor.on_reconcile_start(
                server.name, server.namespace, trigger_source
            )
        return None

    def _on_reconcile_complete(
        self,
        server: WeblogicServer,
        state,
        success: bool,
        error: Exception = None,
    ) -> None:
        if self.sensor:
            self.sensor.on_reconcile_complete(
                server.name, server.namespace, state, success, error
            )
