"""Typed change events delivered to the reconciler.

Each stream has a closed set of variants. Updates carry both the previous and
the current object so a resync echo (same resourceVersion) can be told apart
from a real change.
"""

from typing import NamedTuple, Union
from weblogic.types.models.statefulset import StatefulSetSnapshot
from weblogic.types.models.weblogicserver import WeblogicServer


class ServerAdded(NamedTuple):
    server: WeblogicServer


class ServerUpdated(NamedTuple):
    old: WeblogicServer
    new: WeblogicServer

    @property
    def is_resync(self) -> bool:
        return self.old.resource_version == self.new.resource_version


class ServerDeleted(NamedTuple):
    server: WeblogicServer


class StatefulSetAdded(NamedTuple):
    stateful_set: StatefulSetSnapshot


class StatefulSetUpdated(NamedTuple):
    old: StatefulSetSnapshot
    new: StatefulSetSnapshot


class StatefulSetDeleted(NamedTuple):
    stateful_set: StatefulSetSnapshot


ServerEvent = Union[ServerAdded, ServerUpdated, ServerDeleted]
StatefulSetEvent = Union[StatefulSetAdded, StatefulSetUpdated, StatefulSetDeleted]
