from .weblogicserver_spec import (
    ServerInstanceSchema,
    WeblogicServerSpecSchema,
)
from .statefulset import (
    StatefulSetMetadataSchema,
    StatefulSetSpecSnapshotSchema,
    StatefulSetStatusSnapshotSchema,
    StatefulSetSnapshotSchema,
)

__all__ = [
    "ServerInstanceSchema",
    "WeblogicServerSpecSchema",
    "StatefulSetMetadataSchema",
    "StatefulSetSpecSnapshotSchema",
    "StatefulSetStatusSnapshotSchema",
    "StatefulSetSnapshotSchema",
]
