import kopf
from typing import Any, Mapping
from weblogic.events import ServerAdded, ServerUpdated, ServerDeleted, ServerEvent
from weblogic.handlers.stream import EventStream
from weblogic.reconciler import Reconciler
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.types.settings import Settings


class WeblogicServerStream(EventStream[WeblogicServer]):
    kind = WeblogicServer.KIND

    def __init__(self, reconciler: Reconciler, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reconciler = reconciler

    def parse(self, body: Mapping[str, Any]) -> WeblogicServer:
        return WeblogicServer.from_body(body)

    def key_of(self, obj: WeblogicServer) -> str:
        return obj.key

    def added(self, obj: WeblogicServer) -> ServerAdded:
        return ServerAdded(obj)

    def updated(self, old: WeblogicServer, new: WeblogicServer) -> ServerUpdated:
        return ServerUpdated(old, new)

    def deleted(self, obj: WeblogicServer) -> ServerDeleted:
        return ServerDeleted(obj)

    async def exists(self, obj: WeblogicServer) -> bool:
        return await self.reconciler.servers.fetch(obj.name, obj.namespace) is not None

    async def dispatch(self, event: ServerEvent) -> None:
        await self.reconciler.handle_server_event(event)


def register(
    registry: kopf.OperatorRegistry, reconciler: Reconciler, settings: Settings
) -> WeblogicServerStream:
    """Watch WeblogicServers and feed their events to `reconciler`."""
    stream = WeblogicServerStream(reconciler)

    @kopf.on.event(
        group=WeblogicServer.GROUP_NAME,
        version=WeblogicServer.GROUP_VERSION,
        plural=WeblogicServer.PLURAL_NAME,
        id="weblogicserver-events",
        registry=registry,
    )
    async def on_weblogicserver_event(event, logger, **kwargs):
        await stream.handle(event, logger)

    @kopf.timer(
        group=WeblogicServer.GROUP_NAME,
        version=WeblogicServer.GROUP_VERSION,
        plural=WeblogicServer.PLURAL_NAME,
        id="weblogicserver-resync",
        interval=settings.resync_period_seconds,
        initial_delay=settings.resync_period_seconds,
        registry=registry,
    )
    async def resync_weblogicserver(body, logger, **kwargs):
        await stream.resync(body, logger)

    return stream
