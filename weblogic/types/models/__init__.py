from .weblogicserver_spec import (
    WeblogicServerPhase,
    ServerInstance,
    WeblogicServerSpec,
)
from .statefulset import (
    StatefulSetMetadata,
    StatefulSetSpecSnapshot,
    StatefulSetStatusSnapshot,
    StatefulSetSnapshot,
)

__all__ = [
    "WeblogicServerPhase",
    "ServerInstance",
    "WeblogicServerSpec",
    "StatefulSetMetadata",
    "StatefulSetSpecSnapshot",
    "StatefulSetStatusSnapshot",
    "StatefulSetSnapshot",
]
