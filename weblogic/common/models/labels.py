from typing import Dict, Mapping, Optional


class ResourceLabels:
    #: Ownership label tying a WeblogicServer to its Service and StatefulSet
    SERVER_LABEL = "server-label"


class Labels(ResourceLabels):
    KUBERNETES_DOMAIN = "app.kubernetes.io/"

    KUBERNETES_NAME_LABEL = KUBERNETES_DOMAIN + "name"

    KUBERNETES_INSTANCE_LABEL = KUBERNETES_DOMAIN + "instance"

    KUBERNETES_MANAGED_BY_LABEL = KUBERNETES_DOMAIN + "managed-by"

    APPLICATION_NAME = "weblogic"

    _labels: Dict[str, str]

    def __init__(self, labels: Dict[str, str] = None) -> None:
        self._labels = dict(labels) if labels else dict()

    def update(self, labels: Mapping[str, str]) -> "Labels":
        self._labels.update(dict(labels))
        return self

    def get(self, label: str, default: Optional[str] = None) -> Optional[str]:
        return self._labels.get(label, default)

    def as_dict(self) -> Dict[str, str]:
        """Return labels are dictionary."""
        return self._labels.copy()

    def as_str(self):
        """Return labels as comma separated string."""
        return ",".join([f"{k}={v}" for k, v in self._labels.items()])

    def include(self, label: str, value: str) -> "Labels":
        self.update({label: value})
        return self

    def include_server(self, server_name: str) -> "Labels":
        return self.include(self.SERVER_LABEL, server_name)

    def include_kubernetes_name(self, name: str) -> "Labels":
        return self.include(self.KUBERNETES_NAME_LABEL, name)

    def include_kubernetes_instance(self, instance_name: str) -> "Labels":
        return self.include(self.KUBERNETES_INSTANCE_LABEL, instance_name)

    def include_kubernetes_managed_by(self, operator_name: str) -> "Labels":
        return self.include(self.KUBERNETES_MANAGED_BY_LABEL, operator_name)

    def has_server(self, server_name: str) -> bool:
        """Returns True if the ownership label matches the given server name."""
        return self._labels.get(self.SERVER_LABEL) == server_name

    def server_selector(self) -> "Labels":
        """Labels used to select the pods and resources of a server."""
        return Labels(
            {
                key: self._labels[key]
                for key in [self.SERVER_LABEL]
                if key in self._labels
            }
        )

    def __str__(self):
        return f"Labels<{self._labels}>"

    @classmethod
    def for_server(cls, server_name: str) -> "Labels":
        return Labels().include_server(server_name)

    @classmethod
    def generate_default_labels(
        cls, server_name: str, component_type: str, managed_by: str
    ) -> "Labels":
        labels = Labels()
        return (
            labels.include_server(server_name)
            .include_kubernetes_name(cls.APPLICATION_NAME)
            .include_kubernetes_instance(f"{server_name}-{component_type}")
            .include_kubernetes_managed_by(managed_by)
        )


def has_server_label(labels: Optional[Mapping[str, str]], server_name: str) -> bool:
    """Returns True if the given labels map carries the ownership label of `server_name`."""
    return Labels(labels).has_server(server_name)


def server_label_selector(server_name: str) -> str:
    """Label selector matching every resource owned by `server_name`."""
    return Labels.for_server(server_name).as_str()
