from marshmallow import fields, validate, ValidationError
from weblogic.types.base import BaseSchema
from weblogic.types.models import (
    ServerInstance,
    WeblogicServerSpec,
)
from weblogic.common.models.version import Version


def validate_version(value: str) -> None:
    try:
        Version.from_str(value)
    except ValueError as ex:
        raise ValidationError(str(ex))


class Integer(fields.Int):
    """Strict integer that also refuses booleans."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, bool):
            raise self.make_error("invalid")
        return super()._deserialize(value, attr, data, **kwargs)


class ServerInstanceSchema(BaseSchema):
    __model__ = ServerInstance

    host = fields.Str(data_key="host", allow_none=True, load_default=None)
    server_name = fields.Str(data_key="serverName", allow_none=True, load_default=None)
    pod_name = fields.Str(data_key="podName", allow_none=True, load_default=None)
    port = Integer(
        data_key="port",
        strict=True,
        allow_none=True,
        load_default=None,
        validate=validate.Range(min=0, max=65535),
    )


class WeblogicServerSpecSchema(BaseSchema):
    __model__ = WeblogicServerSpec

    version = fields.Str(
        data_key="version",
        allow_none=True,
        load_default=None,
        validate=validate_version,
    )
    managed_server_count = Integer(
        data_key="managedServerCount",
        strict=True,
        allow_none=True,
        load_default=None,
        validate=validate.Range(min=0),
    )
    servers_available = fields.List(
        fields.Nested(ServerInstanceSchema()),
        data_key="serversAvailable",
        allow_none=True,
        load_default=list,
    )
    servers_running = fields.List(
        fields.Nested(ServerInstanceSchema()),
        data_key="serversRunning",
        allow_none=True,
        load_default=list,
    )
    replicas = Integer(
        data_key="replicas",
        strict=True,
        allow_none=True,
        load_default=None,
        validate=validate.Range(min=0),
    )
    node_selector = fields.Dict(
        keys=fields.Str(),
        values=fields.Str(),
        data_key="nodeSelector",
        allow_none=True,
        load_default=None,
    )
