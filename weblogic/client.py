import logging
from typing import Optional
from kubernetes_asyncio import config
from kubernetes_asyncio.client import (
    AppsV1Api,
    CoreV1Api,
    CustomObjectsApi,
    Configuration,
)
from kubernetes_asyncio.client.api_client import ApiClient

logger = logging.getLogger(__name__)


async def load_cluster_config() -> None:
    """Load Kubernetes config - in-cluster first (production), then local kubeconfig (dev)."""
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        logger.info("In-cluster config not found, trying local kubeconfig")
        try:
            await config.load_kube_config()
            logger.info("Loaded local Kubernetes configuration")
        except config.ConfigException as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise


class ClusterClient:
    """Typed Kubernetes APIs sharing one connection pool.

    Created once by the supervisor and handed to everything that talks to the
    cluster.
    """

    api_client: ApiClient
    core_v1_api: CoreV1Api
    apps_v1_api: AppsV1Api
    custom_objects_api: CustomObjectsApi

    def __init__(
        self,
        api_client: Optional[ApiClient] = None,
        core_v1_api: Optional[CoreV1Api] = None,
        apps_v1_api: Optional[AppsV1Api] = None,
        custom_objects_api: Optional[CustomObjectsApi] = None,
    ):
        self.api_client = api_client if api_client is not None else ApiClient()
        self.core_v1_api = core_v1_api or CoreV1Api(self.api_client)
        self.apps_v1_api = apps_v1_api or AppsV1Api(self.api_client)
        self.custom_objects_api = custom_objects_api or CustomObjectsApi(
            self.api_client
        )

    @classmethod
    async def connect(cls) -> "ClusterClient":
        await load_cluster_config()
        return cls()

    @property
    def configuration(self) -> Configuration:
        return self.api_client.configuration

    async def close(self) -> None:
        await self.api_client.close()
