import asyncio
import logging
from logging import Logger
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")

#: Watch event type of a deletion; kopf reports listings with no type at all
DELETED = "DELETED"


class EventStream(Generic[T]):
    """Turns the raw watch events of one resource kind into typed events.

    The last delivered object of every key is kept so that an update can be
    handed over together with the previous version. Events are handled one at
    a time in delivery order, resyncs included.
    """

    kind: str = ""

    snapshots: Dict[str, T]
    lock: asyncio.Lock
    logger: Logger

    def __init__(self, logger: Logger = None):
        self.snapshots = {}
        self.lock = asyncio.Lock()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, body: Mapping[str, Any]) -> T:
        raise NotImplementedError()

    def key_of(self, obj: T) -> str:
        return f"{obj.namespace}/{obj.name}"

    def added(self, obj: T):
        raise NotImplementedError()

    def updated(self, old: T, new: T):
        raise NotImplementedError()

    def deleted(self, obj: T):
        raise NotImplementedError()

    async def dispatch(self, event) -> None:
        raise NotImplementedError()

    async def exists(self, obj: T) -> bool:
        """Whether `obj` is still in the cluster; checked on every resync."""
        return True

    def translate(self, event_type: Optional[str], body: Mapping[str, Any]):
        """Typed event for a raw one, updating the snapshot store."""
        return self._translate(event_type, self.parse(body))

    def _translate(self, event_type: Optional[str], obj: T):
        key = self.key_of(obj)
        if event_type == DELETED:
            self.snapshots.pop(key, None)
            return self.deleted(obj)
        old = self.snapshots.get(key)
        self.snapshots[key] = obj
        if old is None:
            return self.added(obj)
        return self.updated(old, obj)

    async def handle(self, raw_event: Mapping[str, Any], logger: Logger = None) -> None:
        """Handle one raw watch event, as delivered by kopf."""
        async with self.lock:
            event = self.translate(raw_event.get("type"), raw_event["object"])
            await self._dispatch(event, logger)

    async def resync(self, body: Mapping[str, Any], logger: Logger = None) -> None:
        """Deliver an object again on the resync cadence.

        An object whose version matches its snapshot comes out as an update
        with identical old and new versions. One that no longer exists is
        reported deleted, once; a deletion missed by the watch is caught here.
        """
        async with self.lock:
            obj = self.parse(body)
            key = self.key_of(obj)
            if await self.exists(obj):
                event = self._translate(None, self.snapshots.get(key, obj))
            elif key in self.snapshots:
                event = self._translate(DELETED, self.snapshots[key])
            else:
                return
            await self._dispatch(event, logger)

    async def _dispatch(self, event, logger: Logger = None) -> None:
        (logger or self.logger).debug(f"{self.kind} event: {type(event).__name__}")
        await self.dispatch(event)
