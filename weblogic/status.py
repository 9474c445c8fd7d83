import logging
from logging import Logger
from typing import List, Optional
from weblogic.resources.weblogicserver import WeblogicServers
from weblogic.sensors.base import OperatorSensor
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.types.models.weblogicserver_spec import WeblogicServerPhase
from weblogic.types.settings import Settings


def phase_for(desired: int, ready: int) -> Optional[WeblogicServerPhase]:
    """Phase a server is in given its workload's desired and ready replicas.

    Returns None when more replicas are ready than desired (a scale-down in
    progress), which leaves the current phase alone.
    """
    if ready < desired:
        return WeblogicServerPhase.PENDING
    if ready == desired:
        return WeblogicServerPhase.RUNNING
    return None


def apply_state(
    server: WeblogicServer, phase: WeblogicServerPhase, error: Exception = None
) -> List[str]:
    """Apply a phase and an optional error to `server` in place.

    The error log only grows, and an error equal to the most recent entry is
    not repeated. Without an error an empty or unset log is (re)initialized to
    an empty list, so `errors` is always defined once status is written.

    Returns:
        The status fields that changed; empty means nothing to persist.
    """
    changed = []
    phase = WeblogicServerPhase(phase)
    if server.phase != phase.value:
        server.phase = phase
        changed.append("phase")

    if error is not None:
        errors = list(server.errors or [])
        message = str(error)
        if not errors or errors[-1] != message:
            errors.append(message)
            server.errors = errors
            changed.append("errors")
    elif not server.errors:
        server.errors = []
        changed.append("errors")
    return changed


class StatusStateMachine:
    """Maintains `status.phase` and `status.errors` of WeblogicServers."""

    servers: WeblogicServers
    settings: Settings
    sensor: Optional[OperatorSensor]
    logger: Logger

    def __init__(
        self,
        servers: WeblogicServers,
        settings: Settings = None,
        sensor: OperatorSensor = None,
        logger: Logger = None,
    ):
        self.servers = servers
        self.settings = settings or Settings()
        self.sensor = sensor
        self.logger = logger or logging.getLogger(__name__)

    phase_for = staticmethod(phase_for)

    async def set_state(
        self,
        server: WeblogicServer,
        phase: WeblogicServerPhase,
        error: Exception = None,
    ) -> WeblogicServer:
        """Move `server` to `phase`, logging `error` if given, and persist it.

        Nothing is written when the transition changes nothing. A write that
        loses a version race is re-applied to the latest object and retried.

        Raises:
            ConflictError: the write kept conflicting until every attempt was used.
            APIError: the write failed otherwise.
        """
        changed: List[str] = []

        def mutate(current: WeblogicServer) -> bool:
            changed[:] = apply_state(current, phase, error)
            return bool(changed)

        updated = await self.servers.update(
            server,
            mutate,
            attempts=self.settings.status_update_max_attempts,
            delay=self.settings.status_update_retry_delay_seconds,
        )
        if changed:
            self.logger.info(
                f"{server.key} is now {updated.phase}"
                + (f": {error}" if error is not None else "")
            )
            if self.sensor:
                self.sensor.on_status_update(
                    server.name, server.namespace, updated.phase, list(changed)
                )
        return updated
