import copy
import re
from typing import Any, Dict, List, Mapping, Optional
import marshmallow
from weblogic.common.models.labels import Labels, has_server_label
from weblogic.types.models.weblogicserver_spec import (
    WeblogicServerPhase,
    WeblogicServerSpec,
)
from weblogic.types.schemas.weblogicserver_spec import WeblogicServerSpecSchema
from weblogic.utils.errors import ValidationError

_DNS_1123_LABEL = re.compile(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?")


def _format_messages(messages: Any, prefix: str = "") -> List[str]:
    """Flatten marshmallow error messages into `field: message` strings."""
    if isinstance(messages, dict):
        result = []
        for key, value in messages.items():
            result.extend(_format_messages(value, f"{prefix}{key}."))
        return result
    if isinstance(messages, list):
        return [f"{prefix.rstrip('.')}: {m}" if prefix else str(m) for m in messages]
    return [f"{prefix.rstrip('.')}: {messages}"]


class WeblogicServer:
    """A WeblogicServer custom resource.

    Wraps the raw object body so that every update cycle writes back exactly
    what was read, plus the fields the operator owns: defaulted spec values,
    the ownership label and `status`.
    """

    KIND = "WeblogicServer"
    GROUP_NAME = "weblogic.oracle.com"
    GROUP_VERSION = "v1"
    PLURAL_NAME = "weblogicservers"

    DEFAULT_VERSION = "12.2.1.2"
    DEFAULT_REPLICAS = 1
    DEFAULT_MANAGED_SERVER_COUNT = 1

    _body: Dict[str, Any]

    def __init__(self, body: Mapping[str, Any]) -> None:
        self._body = copy.deepcopy(dict(body))
        self._body.setdefault("apiVersion", f"{self.GROUP_NAME}/{self.GROUP_VERSION}")
        self._body.setdefault("kind", self.KIND)
        self._body.setdefault("metadata", {})
        if self._body.get("spec") is None:
            self._body["spec"] = {}

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> "WeblogicServer":
        return cls(body)

    def to_body(self) -> Dict[str, Any]:
        return copy.deepcopy(self._body)

    def __repr__(self) -> str:
        return f"<{self.KIND} {self.key} rv={self.resource_version}>"

    @property
    def metadata(self) -> Dict[str, Any]:
        return self._body["metadata"]

    @property
    def name(self) -> str:
        return self.metadata.get("name")

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.get("namespace")

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    @property
    def resource_version(self) -> Optional[str]:
        return self.metadata.get("resourceVersion")

    @property
    def labels(self) -> Dict[str, str]:
        return self.metadata.get("labels") or {}

    @property
    def spec(self) -> Dict[str, Any]:
        return self._body["spec"]

    @property
    def status(self) -> Dict[str, Any]:
        return self._body.get("status") or {}

    def _writable_status(self) -> Dict[str, Any]:
        if self._body.get("status") is None:
            self._body["status"] = {}
        return self._body["status"]

    @property
    def phase(self) -> str:
        return self.status.get("phase") or WeblogicServerPhase.UNKNOWN.value

    @phase.setter
    def phase(self, value: WeblogicServerPhase) -> None:
        self._writable_status()["phase"] = WeblogicServerPhase(value).value

    @property
    def errors(self) -> Optional[List[str]]:
        return self.status.get("errors")

    @errors.setter
    def errors(self, value: List[str]) -> None:
        self._writable_status()["errors"] = list(value)

    def has_server_label(self) -> bool:
        return has_server_label(self.labels, self.name)

    def add_server_label(self) -> None:
        labels = self.metadata.get("labels") or {}
        labels.update(Labels.for_server(self.name).as_dict())
        self.metadata["labels"] = labels

    def ensure_defaults(self) -> "WeblogicServer":
        """Fill in the spec fields a user may omit.

        Only unset fields are touched; an explicit `replicas: 0` is kept.
        """
        spec = self.spec
        if not spec.get("version"):
            spec["version"] = self.DEFAULT_VERSION
        if spec.get("replicas") is None:
            spec["replicas"] = self.DEFAULT_REPLICAS
        if spec.get("managedServerCount") is None:
            spec["managedServerCount"] = self.DEFAULT_MANAGED_SERVER_COUNT
        return self

    def validate(self) -> WeblogicServerSpec:
        """Validate identity and spec.

        Raises:
            ValidationError: with every problem found, `; ` separated.
        """
        problems = []
        if not self.name or not _DNS_1123_LABEL.fullmatch(self.name) or len(self.name) > 63:
            problems.append(f"metadata.name: '{self.name}' is not a valid DNS-1123 label")
        try:
            spec = WeblogicServerSpecSchema().load(self.spec)
        except marshmallow.ValidationError as ex:
            spec = None
            problems.extend(_format_messages(ex.messages, "spec."))
        if problems:
            raise ValidationError(
                f"Invalid {self.KIND} {self.key}: " + "; ".join(problems)
            )
        return spec
