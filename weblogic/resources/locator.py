from typing import List, Optional, TypeVar
from kubernetes_asyncio.client import V1Service, V1StatefulSet
from weblogic.common.models.labels import (
    Labels,
    has_server_label,
    server_label_selector,
)
from weblogic.resources.base import BaseResource
from weblogic.resources.weblogicserver import WeblogicServers
from weblogic.types.models.statefulset import StatefulSetSnapshot
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.utils.errors import NotFoundError, NotLabeledError

T = TypeVar("T", V1Service, V1StatefulSet)


def _first_owned(candidates: List[T], server_name: str) -> Optional[T]:
    """Return the first candidate whose ownership label names `server_name`."""
    for candidate in candidates:
        labels = candidate.metadata.labels if candidate.metadata else None
        if has_server_label(labels, server_name):
            return candidate
    return None


class ResourceLocator(BaseResource):
    """Finds the dependent resources of a server, and the server of a workload."""

    servers: WeblogicServers

    def __init__(self, *args, servers: WeblogicServers = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.servers = servers or WeblogicServers(self.client, logger=self.logger)

    async def find_service(self, server: WeblogicServer) -> Optional[V1Service]:
        services = await self.list_services(
            server.namespace, label_selector=server_label_selector(server.name)
        )
        return _first_owned(services, server.name)

    async def find_stateful_set(
        self, server: WeblogicServer
    ) -> Optional[V1StatefulSet]:
        stateful_sets = await self.list_stateful_sets(
            server.namespace, label_selector=server_label_selector(server.name)
        )
        return _first_owned(stateful_sets, server.name)

    async def find_server_for_stateful_set(
        self, stateful_set: StatefulSetSnapshot
    ) -> WeblogicServer:
        """Resolve the server owning a stateful set through its ownership label.

        Raises:
            NotLabeledError: the stateful set carries no ownership label.
            NotFoundError: the labelled server does not exist.
            APIError: the server could not be fetched.
        """
        server_name = Labels(stateful_set.labels).get(Labels.SERVER_LABEL)
        if not server_name:
            raise NotLabeledError(
                f"StatefulSet {stateful_set.namespace}/{stateful_set.name} "
                f"has no '{Labels.SERVER_LABEL}' label"
            )
        return await self.fetch_server(server_name, stateful_set.namespace)

    async def fetch_server(self, name: str, namespace: str) -> WeblogicServer:
        server = await self.servers.fetch(name, namespace)
        if server is None:
            raise NotFoundError(
                f"{WeblogicServer.KIND} {namespace}/{name} not found"
            )
        return server
