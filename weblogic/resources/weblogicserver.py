import asyncio
from collections import defaultdict
from typing import Callable, Dict, Optional
from weblogic.resources.base import BaseResource
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.utils.errors import ConflictError, NotFoundError

#: Applies a change to a server in place; returns False when there was nothing to change.
Mutation = Callable[[WeblogicServer], bool]


class WeblogicServers(BaseResource):
    """Reads and conditionally writes WeblogicServer objects.

    Writes go through `update`, which retries on version conflicts and holds a
    per-server lock so concurrent writers for one server take turns.
    """

    locks: Dict[str, asyncio.Lock]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.locks = defaultdict(asyncio.Lock)

    async def fetch(self, name: str, namespace: str) -> Optional[WeblogicServer]:
        """Fetch the latest version of a server, or None if it does not exist."""
        body = await self.get_custom_object(
            namespace,
            WeblogicServer.GROUP_NAME,
            WeblogicServer.GROUP_VERSION,
            WeblogicServer.PLURAL_NAME,
            name,
        )
        if body is None:
            return None
        return WeblogicServer.from_body(body)

    async def replace(self, server: WeblogicServer) -> WeblogicServer:
        """Persist the whole object, conditional on its resourceVersion."""
        body = await self.replace_custom_object(
            server.namespace,
            WeblogicServer.GROUP_NAME,
            WeblogicServer.GROUP_VERSION,
            WeblogicServer.PLURAL_NAME,
            server.name,
            server.to_body(),
        )
        return WeblogicServer.from_body(body)

    async def update(
        self,
        server: WeblogicServer,
        mutate: Mutation,
        attempts: int = 1,
        delay: float = 0,
    ) -> WeblogicServer:
        """Apply `mutate` to a copy of `server` and persist it.

        On a version conflict the latest object is fetched, `mutate` is applied
        again and the write retried, for at most `attempts` attempts in total.

        Returns:
            The persisted server, or the unchanged server when `mutate`
            reported nothing to do.

        Raises:
            ConflictError: if every attempt conflicted.
            NotFoundError: if the server vanished between attempts.
        """
        attempts = max(1, attempts)
        async with self.locks[server.key]:
            current = WeblogicServer.from_body(server.to_body())
            for attempt in range(1, attempts + 1):
                if not mutate(current):
                    return current
                try:
                    return await self.replace(current)
                except ConflictError as ex:
                    if attempt >= attempts:
                        self.logger.error(
                            f"Giving up updating {server.key} after {attempt} conflicting attempts: {ex}"
                        )
                        raise
                    self.logger.info(
                        f"Conflict updating {server.key} (attempt {attempt}/{attempts}), refetching"
                    )
                if delay:
                    await asyncio.sleep(delay)
                current = await self.fetch(server.name, server.namespace)
                if current is None:
                    raise NotFoundError(f"{WeblogicServer.KIND} {server.key} not found")

    def forget(self, server: WeblogicServer) -> None:
        """Drop the lock held for a deleted server."""
        lock = self.locks.get(server.key)
        if lock is not None and not lock.locked():
            del self.locks[server.key]
