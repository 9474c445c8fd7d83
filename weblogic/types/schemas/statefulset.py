from marshmallow import fields
from weblogic.types.base import BaseSchema, EXCLUDE
from weblogic.types.models import (
    StatefulSetMetadata,
    StatefulSetSpecSnapshot,
    StatefulSetStatusSnapshot,
    StatefulSetSnapshot,
)

# Kubernetes defaults spec.replicas to 1 when omitted
DEFAULT_REPLICAS = 1


class StatefulSetMetadataSchema(BaseSchema):
    __model__ = StatefulSetMetadata

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(data_key="name", required=True)
    namespace = fields.Str(data_key="namespace", allow_none=True, load_default=None)
    labels = fields.Dict(
        keys=fields.Str(),
        values=fields.Str(),
        data_key="labels",
        allow_none=True,
        load_default=dict,
    )
    resource_version = fields.Str(
        data_key="resourceVersion", allow_none=True, load_default=None
    )


class StatefulSetSpecSnapshotSchema(BaseSchema):
    __model__ = StatefulSetSpecSnapshot

    class Meta:
        unknown = EXCLUDE

    replicas = fields.Int(
        data_key="replicas", allow_none=True, load_default=DEFAULT_REPLICAS
    )
    service_name = fields.Str(data_key="serviceName", allow_none=True, load_default=None)


class StatefulSetStatusSnapshotSchema(BaseSchema):
    __model__ = StatefulSetStatusSnapshot

    class Meta:
        unknown = EXCLUDE

    replicas = fields.Int(data_key="replicas", allow_none=True, load_default=0)
    ready_replicas = fields.Int(
        data_key="readyReplicas", allow_none=True, load_default=0
    )


class StatefulSetSnapshotSchema(BaseSchema):
    __model__ = StatefulSetSnapshot

    class Meta:
        unknown = EXCLUDE

    metadata = fields.Nested(StatefulSetMetadataSchema(), data_key="metadata", required=True)
    spec = fields.Nested(
        StatefulSetSpecSnapshotSchema(),
        data_key="spec",
        load_default=lambda: StatefulSetSpecSnapshotSchema().load({}),
    )
    status = fields.Nested(
        StatefulSetStatusSnapshotSchema(),
        data_key="status",
        load_default=lambda: StatefulSetStatusSnapshotSchema().load({}),
    )
