from typing import Optional, Mapping
from weblogic.types.base import BaseModel


class StatefulSetMetadata(BaseModel):
    name: str
    namespace: Optional[str]
    labels: Optional[Mapping[str, str]]
    resource_version: Optional[str]


class StatefulSetSpecSnapshot(BaseModel):
    replicas: int
    service_name: Optional[str]


class StatefulSetStatusSnapshot(BaseModel):
    replicas: int
    ready_replicas: int


class StatefulSetSnapshot(BaseModel):
    """What the operator observes of a StatefulSet from a watch event."""

    metadata: StatefulSetMetadata
    spec: StatefulSetSpecSnapshot
    status: StatefulSetStatusSnapshot

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.namespace

    @property
    def labels(self) -> Mapping[str, str]:
        return self.metadata.labels or {}

    @property
    def resource_version(self) -> Optional[str]:
        return self.metadata.resource_version

    @property
    def desired_replicas(self) -> int:
        return 1 if self.spec.replicas is None else self.spec.replicas

    @property
    def ready_replicas(self) -> int:
        return self.status.ready_replicas or 0
