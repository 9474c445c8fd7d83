from kubernetes_asyncio.client import V1DeleteOptions, V1Service, V1StatefulSet
from weblogic.resources.base import BaseResource
from weblogic.resources.locator import ResourceLocator
from weblogic.resources.service import prepare_service
from weblogic.resources.statefulset import prepare_stateful_set
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.types.settings import Settings
from weblogic.utils.errors import NotFoundError


class DependentResources(BaseResource):
    """Creates and removes the service and stateful set of a server.

    Creation is find-or-create, so repeating it converges to one resource of
    each kind. Existing resources are never modified.
    """

    locator: ResourceLocator
    settings: Settings

    def __init__(
        self,
        *args,
        locator: ResourceLocator = None,
        settings: Settings = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.locator = locator or ResourceLocator(self.client, logger=self.logger)
        self.settings = settings or Settings()

    async def ensure_service(self, server: WeblogicServer) -> V1Service:
        service = await self.locator.find_service(server)
        if service is not None:
            return service
        self.logger.info(f"Creating service for {server.key}")
        return await self.create_service(
            server.namespace,
            prepare_service(server, self.WEBLOGIC_OPERATOR_NAME),
        )

    async def ensure_stateful_set(
        self, server: WeblogicServer, service: V1Service
    ) -> V1StatefulSet:
        stateful_set = await self.locator.find_stateful_set(server)
        if stateful_set is not None:
            return stateful_set
        self.logger.info(f"Creating stateful set for {server.key}")
        return await self.create_stateful_set(
            server.namespace,
            prepare_stateful_set(
                server,
                service.metadata.name,
                self.settings.weblogic_image_repository,
                self.WEBLOGIC_OPERATOR_NAME,
            ),
        )

    async def teardown_stateful_set(self, server: WeblogicServer) -> None:
        """Delete the server's stateful set; its pods are removed in the background.

        Raises:
            NotFoundError: the server has no stateful set.
        """
        stateful_set = await self.locator.find_stateful_set(server)
        if stateful_set is None:
            raise NotFoundError(f"No stateful set found for {server.key}")
        self.logger.info(f"Deleting stateful set {stateful_set.metadata.name}")
        await self.delete_stateful_set(
            stateful_set.metadata.name,
            server.namespace,
            delete_options=V1DeleteOptions(propagation_policy="Background"),
        )

    async def teardown_service(self, server: WeblogicServer) -> None:
        """Delete the server's service.

        Raises:
            NotFoundError: the server has no service.
        """
        service = await self.locator.find_service(server)
        if service is None:
            raise NotFoundError(f"No service found for {server.key}")
        self.logger.info(f"Deleting service {service.metadata.name}")
        await self.delete_service(service.metadata.name, server.namespace)
