import logging
from logging import Logger
from typing import Any, Dict, List, Optional
from weblogic.client import ClusterClient
from weblogic.utils.errors import convert_api_exception, not_found_error
from kubernetes_asyncio.client import (
    ApiException,
    V1Service,
    V1StatefulSet,
    V1DeleteOptions,
)


class BaseResource:
    """Kubernetes API access shared by every resource type the operator manages.

    `ApiException`s never leave this class: they are converted into the
    operator's error taxonomy so callers only handle `OperatorError`s.
    """

    WEBLOGIC_OPERATOR_NAME = "weblogic-operator"

    client: ClusterClient
    logger: Logger

    def __init__(self, client: ClusterClient, logger: Optional[Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def list_services(
        self, namespace: str, label_selector: str = None
    ) -> List[V1Service]:
        try:
            services = await self.client.core_v1_api.list_namespaced_service(
                namespace=namespace, label_selector=label_selector
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex
        return list(services.items or [])

    async def create_service(self, namespace: str, service: V1Service) -> V1Service:
        try:
            return await self.client.core_v1_api.create_namespaced_service(
                namespace=namespace, body=service
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex

    async def delete_service(
        self,
        name: str,
        namespace: str,
        delete_options: V1DeleteOptions = None,
    ) -> None:
        try:
            await self.client.core_v1_api.delete_namespaced_service(
                name=name, namespace=namespace, body=delete_options
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex

    async def list_stateful_sets(
        self, namespace: str, label_selector: str = None
    ) -> List[V1StatefulSet]:
        try:
            stateful_sets = await self.client.apps_v1_api.list_namespaced_stateful_set(
                namespace=namespace, label_selector=label_selector
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex
        return list(stateful_sets.items or [])

    async def get_stateful_set(
        self, name: str, namespace: str
    ) -> Optional[V1StatefulSet]:
        try:
            return await self.client.apps_v1_api.read_namespaced_stateful_set(
                name=name, namespace=namespace
            )
        except ApiException as ex:
            if not_found_error(ex):
                return None
            raise convert_api_exception(ex) from ex

    async def create_stateful_set(
        self, namespace: str, stateful_set: V1StatefulSet
    ) -> V1StatefulSet:
        try:
            return await self.client.apps_v1_api.create_namespaced_stateful_set(
                namespace=namespace, body=stateful_set
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex

    async def delete_stateful_set(
        self,
        name: str,
        namespace: str,
        delete_options: V1DeleteOptions = None,
    ) -> None:
        try:
            await self.client.apps_v1_api.delete_namespaced_stateful_set(
                name=name, namespace=namespace, body=delete_options
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex

    async def get_custom_object(
        self,
        namespace: str,
        group: str,
        version: str,
        plural: str,
        name: str,
    ) -> Optional[Dict[str, Any]]:
        try:
            return await self.client.custom_objects_api.get_namespaced_custom_object(
                group=group,
                version=version,
                namespace=namespace,
                plural=plural,
                name=name,
            )
        except ApiException as ex:
            if not_found_error(ex):
                return None
            raise convert_api_exception(ex) from ex

    async def replace_custom_object(
        self,
        namespace: str,
        group: str,
        version: str,
        plural: str,
        name: str,
        body: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Replace a custom object.

        The body carries `metadata.resourceVersion`, which makes the replace
        conditional: a stale version fails with `ConflictError`.
        """
        try:
            return await self.client.custom_objects_api.replace_namespaced_custom_object(
                group=group,
                version=version,
                namespace=namespace,
                plural=plural,
                name=name,
                body=body,
            )
        except ApiException as ex:
            raise convert_api_exception(ex) from ex
