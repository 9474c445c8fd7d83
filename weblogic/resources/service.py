from kubernetes_asyncio.client import (
    V1Service,
    V1ObjectMeta,
    V1ServiceSpec,
    V1ServicePort,
)
from weblogic.common.models.labels import Labels
from weblogic.types.models.weblogicserver import WeblogicServer

WEBLOGIC_PORT_NAME = "weblogic"
WEBLOGIC_PORT = 7001
COMPONENT_TYPE = "service"


def prepare_service(server: WeblogicServer, managed_by: str) -> V1Service:
    """Build the NodePort service exposing a WeblogicServer."""
    labels = Labels.generate_default_labels(server.name, COMPONENT_TYPE, managed_by)
    return V1Service(
        api_version="v1",
        kind="Service",
        metadata=V1ObjectMeta(
            name=server.name, namespace=server.namespace, labels=labels.as_dict()
        ),
        spec=V1ServiceSpec(
            selector=labels.server_selector().as_dict(),
            type="NodePort",
            ports=[
                V1ServicePort(
                    name=WEBLOGIC_PORT_NAME,
                    protocol="TCP",
                    port=WEBLOGIC_PORT,
                    target_port=WEBLOGIC_PORT,
                )
            ],
        ),
    )
