from kubernetes_asyncio.client import (
    V1StatefulSet,
    V1ObjectMeta,
    V1StatefulSetSpec,
    V1LabelSelector,
    V1PodTemplateSpec,
    V1PodSpec,
    V1Container,
    V1ContainerPort,
)
from weblogic.common.models.labels import Labels
from weblogic.resources.service import WEBLOGIC_PORT, WEBLOGIC_PORT_NAME
from weblogic.types.models.weblogicserver import WeblogicServer

COMPONENT_TYPE = "server"
CONTAINER_NAME = "weblogic"


def prepare_image(server: WeblogicServer, image_repository: str) -> str:
    """Container image for the server's WebLogic version."""
    version = server.spec.get("version") or WeblogicServer.DEFAULT_VERSION
    return f"{image_repository}:{version}"


def prepare_stateful_set(
    server: WeblogicServer,
    service_name: str,
    image_repository: str,
    managed_by: str,
) -> V1StatefulSet:
    """Build the stateful set running the server's replicas.

    Expects defaults to have been applied to `server`.
    """
    labels = Labels.generate_default_labels(server.name, COMPONENT_TYPE, managed_by)
    selector = labels.server_selector().as_dict()
    replicas = server.spec.get("replicas")
    if replicas is None:
        replicas = WeblogicServer.DEFAULT_REPLICAS
    return V1StatefulSet(
        api_version="apps/v1",
        kind="StatefulSet",
        metadata=V1ObjectMeta(
            name=server.name, namespace=server.namespace, labels=labels.as_dict()
        ),
        spec=V1StatefulSetSpec(
            replicas=replicas,
            service_name=service_name,
            selector=V1LabelSelector(match_labels=selector),
            template=V1PodTemplateSpec(
                metadata=V1ObjectMeta(labels=labels.as_dict()),
                spec=V1PodSpec(
                    containers=[
                        V1Container(
                            name=CONTAINER_NAME,
                            image=prepare_image(server, image_repository),
                            ports=[
                                V1ContainerPort(
                                    name=WEBLOGIC_PORT_NAME,
                                    container_port=WEBLOGIC_PORT,
                                    protocol="TCP",
                                )
                            ],
                        )
                    ],
                    node_selector=server.spec.get("nodeSelector") or None,
                ),
            ),
        ),
    )
