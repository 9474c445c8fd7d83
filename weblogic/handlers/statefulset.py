import kopf
import marshmallow
from logging import Logger
from typing import Any, Mapping
from weblogic.common.models.labels import Labels
from weblogic.events import (
    StatefulSetAdded,
    StatefulSetUpdated,
    StatefulSetDeleted,
    StatefulSetEvent,
)
from weblogic.handlers.stream import EventStream
from weblogic.reconciler import Reconciler
from weblogic.types.models.statefulset import StatefulSetSnapshot
from weblogic.types.schemas.statefulset import StatefulSetSnapshotSchema
from weblogic.types.settings import Settings


class StatefulSetStream(EventStream[StatefulSetSnapshot]):
    kind = "StatefulSet"

    def __init__(self, reconciler: Reconciler, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reconciler = reconciler
        self.schema = StatefulSetSnapshotSchema()

    def parse(self, body: Mapping[str, Any]) -> StatefulSetSnapshot:
        return self.schema.load(dict(body))

    def added(self, obj: StatefulSetSnapshot) -> StatefulSetAdded:
        return StatefulSetAdded(obj)

    def updated(
        self, old: StatefulSetSnapshot, new: StatefulSetSnapshot
    ) -> StatefulSetUpdated:
        return StatefulSetUpdated(old, new)

    def deleted(self, obj: StatefulSetSnapshot) -> StatefulSetDeleted:
        return StatefulSetDeleted(obj)

    async def exists(self, obj: StatefulSetSnapshot) -> bool:
        found = await self.reconciler.locator.get_stateful_set(obj.name, obj.namespace)
        return found is not None

    async def dispatch(self, event: StatefulSetEvent) -> None:
        await self.reconciler.handle_stateful_set_event(event)

    async def handle(self, raw_event: Mapping[str, Any], logger: Logger = None) -> None:
        try:
            await super().handle(raw_event, logger)
        except marshmallow.ValidationError as ex:
            self._drop(ex, logger)

    async def resync(self, body: Mapping[str, Any], logger: Logger = None) -> None:
        try:
            await super().resync(body, logger)
        except marshmallow.ValidationError as ex:
            self._drop(ex, logger)

    def _drop(self, ex: marshmallow.ValidationError, logger: Logger = None) -> None:
        (logger or self.logger).warning(
            f"Dropping unreadable StatefulSet event: {ex.messages}"
        )


def register(
    registry: kopf.OperatorRegistry, reconciler: Reconciler, settings: Settings
) -> StatefulSetStream:
    """Watch the StatefulSets carrying an ownership label."""
    stream = StatefulSetStream(reconciler)

    @kopf.on.event(
        group="apps",
        version="v1",
        plural="statefulsets",
        labels={Labels.SERVER_LABEL: kopf.PRESENT},
        id="statefulset-events",
        registry=registry,
    )
    async def on_statefulset_event(event, logger, **kwargs):
        await stream.handle(event, logger)

    @kopf.timer(
        group="apps",
        version="v1",
        plural="statefulsets",
        labels={Labels.SERVER_LABEL: kopf.PRESENT},
        id="statefulset-resync",
        interval=settings.resync_period_seconds,
        initial_delay=settings.resync_period_seconds,
        registry=registry,
    )
    async def resync_statefulset(body, logger, **kwargs):
        await stream.resync(body, logger)

    return stream
