"""Shared fixtures: an in-memory cluster standing in for the Kubernetes API."""

import copy
import itertools
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Tuple
from unittest.mock import Mock, AsyncMock

import pytest
from kubernetes_asyncio.client import ApiException

from weblogic.client import ClusterClient
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.types.schemas.statefulset import StatefulSetSnapshotSchema
from weblogic.types.settings import Settings


def api_exception(status: int, reason: str, body_reason: str = None, message: str = None):
    ex = ApiException(status=status, reason=reason)
    body = {"kind": "Status", "code": status}
    if body_reason:
        body["reason"] = body_reason
    if message:
        body["message"] = message
    ex.body = json.dumps(body)
    return ex


def _matches(labels, selector: str) -> bool:
    if not selector:
        return True
    labels = labels or {}
    for term in selector.split(","):
        key, _, value = term.partition("=")
        if labels.get(key) != value:
            return False
    return True


class FakeCluster:
    """Services, stateful sets and WeblogicServers kept in dictionaries.

    Serves as CoreV1Api, AppsV1Api and CustomObjectsApi at once. Every call is
    recorded in `calls`; `fail_next` makes the next call of a method raise.
    """

    services: Dict[Tuple[str, str], Any]
    stateful_sets: Dict[Tuple[str, str], Any]
    servers: Dict[Tuple[str, str], Dict[str, Any]]
    calls: List[Tuple[str, Dict[str, Any]]]

    def __init__(self):
        self.services = {}
        self.stateful_sets = {}
        self.servers = {}
        self.calls = []
        self.failures = {}
        self._versions = itertools.count(100)

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append((method, kwargs))
        pending = self.failures.get(method)
        if pending:
            raise pending.pop(0)

    def fail_next(self, method: str, exception: Exception) -> None:
        self.failures.setdefault(method, []).append(exception)

    def called(self, method: str) -> List[Dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def next_version(self) -> str:
        return str(next(self._versions))

    # WeblogicServers

    def add_server(self, body: Dict[str, Any]) -> Dict[str, Any]:
        body = copy.deepcopy(body)
        body["metadata"].setdefault("resourceVersion", self.next_version())
        key = (body["metadata"]["namespace"], body["metadata"]["name"])
        self.servers[key] = body
        return copy.deepcopy(body)

    def touch_server(self, namespace: str, name: str, mutate=None) -> Dict[str, Any]:
        """Simulate a concurrent writer."""
        body = self.servers[(namespace, name)]
        if mutate:
            mutate(body)
        body["metadata"]["resourceVersion"] = self.next_version()
        return copy.deepcopy(body)

    def server(self, namespace: str, name: str) -> Dict[str, Any]:
        return self.servers[(namespace, name)]

    async def get_namespaced_custom_object(self, group, version, namespace, plural, name):
        self._record("get_namespaced_custom_object", namespace=namespace, name=name)
        if (namespace, name) not in self.servers:
            raise api_exception(404, "Not Found", "NotFound")
        return copy.deepcopy(self.servers[(namespace, name)])

    async def replace_namespaced_custom_object(
        self, group, version, namespace, plural, name, body
    ):
        self._record(
            "replace_namespaced_custom_object",
            namespace=namespace,
            name=name,
            body=copy.deepcopy(body),
        )
        stored = self.servers.get((namespace, name))
        if stored is None:
            raise api_exception(404, "Not Found", "NotFound")
        if body["metadata"].get("resourceVersion") != stored["metadata"]["resourceVersion"]:
            raise api_exception(
                409,
                "Conflict",
                "Conflict",
                "the object has been modified; please apply your changes to the latest version and try again",
            )
        body = copy.deepcopy(body)
        body["metadata"]["resourceVersion"] = self.next_version()
        self.servers[(namespace, name)] = body
        return copy.deepcopy(body)

    # Services and stateful sets

    def _list(self, store, method, namespace, label_selector):
        self._record(method, namespace=namespace, label_selector=label_selector)
        items = [
            obj
            for (ns, _), obj in store.items()
            if ns == namespace and _matches(obj.metadata.labels, label_selector)
        ]
        return SimpleNamespace(items=items)

    def _create(self, store, method, namespace, body):
        self._record(method, namespace=namespace, body=body)
        key = (namespace, body.metadata.name)
        if key in store:
            raise api_exception(
                409, "Conflict", "AlreadyExists", f"{body.metadata.name} already exists"
            )
        body.metadata.namespace = namespace
        body.metadata.resource_version = self.next_version()
        store[key] = body
        return body

    def _delete(self, store, method, name, namespace, body):
        self._record(method, name=name, namespace=namespace, body=body)
        if (namespace, name) not in store:
            raise api_exception(404, "Not Found", "NotFound")
        del store[(namespace, name)]
        return SimpleNamespace(status="Success")

    async def list_namespaced_service(self, namespace, label_selector=None):
        return self._list(self.services, "list_namespaced_service", namespace, label_selector)

    async def create_namespaced_service(self, namespace, body):
        return self._create(self.services, "create_namespaced_service", namespace, body)

    async def delete_namespaced_service(self, name, namespace, body=None):
        return self._delete(self.services, "delete_namespaced_service", name, namespace, body)

    async def list_namespaced_stateful_set(self, namespace, label_selector=None):
        return self._list(
            self.stateful_sets, "list_namespaced_stateful_set", namespace, label_selector
        )

    async def read_namespaced_stateful_set(self, name, namespace):
        self._record("read_namespaced_stateful_set", name=name, namespace=namespace)
        if (namespace, name) not in self.stateful_sets:
            raise api_exception(404, "Not Found", "NotFound")
        return self.stateful_sets[(namespace, name)]

    async def create_namespaced_stateful_set(self, namespace, body):
        return self._create(
            self.stateful_sets, "create_namespaced_stateful_set", namespace, body
        )

    async def delete_namespaced_stateful_set(self, name, namespace, body=None):
        return self._delete(
            self.stateful_sets, "delete_namespaced_stateful_set", name, namespace, body
        )


@pytest.fixture
def cluster():
    return FakeCluster()


@pytest.fixture
def client(cluster):
    api_client = Mock()
    api_client.close = AsyncMock()
    return ClusterClient(
        api_client=api_client,
        core_v1_api=cluster,
        apps_v1_api=cluster,
        custom_objects_api=cluster,
    )


@pytest.fixture
def settings():
    return Settings(
        status_update_max_attempts=3,
        status_update_retry_delay_seconds=0,
        weblogic_image_repository="registry.example.com/weblogic",
        metrics_enabled=False,
    )


@pytest.fixture
def server_body():
    """Factory of WeblogicServer bodies."""

    def make(
        name: str = "web1",
        namespace: str = "default",
        labels: Dict[str, str] = None,
        spec: Dict[str, Any] = None,
        status: Dict[str, Any] = None,
        resource_version: str = "1",
    ) -> Dict[str, Any]:
        metadata = {"name": name, "namespace": namespace, "resourceVersion": resource_version}
        if labels is not None:
            metadata["labels"] = dict(labels)
        body = {
            "apiVersion": "weblogic.oracle.com/v1",
            "kind": "WeblogicServer",
            "metadata": metadata,
            "spec": dict(spec) if spec is not None else {},
        }
        if status is not None:
            body["status"] = dict(status)
        return body

    return make


@pytest.fixture
def labelled_server(cluster, server_body):
    """A labelled, defaulted `web1` stored in the cluster."""
    body = cluster.add_server(
        server_body(
            labels={"server-label": "web1"},
            spec={"version": "12.2.1.2", "replicas": 1, "managedServerCount": 1},
        )
    )
    return WeblogicServer.from_body(body)


@pytest.fixture
def snapshot():
    """Factory of StatefulSet snapshots as seen in watch events."""

    def make(
        name: str = "web1",
        namespace: str = "default",
        labels: Dict[str, str] = None,
        replicas: int = 1,
        ready_replicas: int = None,
        resource_version: str = "10",
    ):
        body = {
            "apiVersion": "apps/v1",
            "kind": "StatefulSet",
            "metadata": {
                "name": name,
                "namespace": namespace,
                "labels": {"server-label": name} if labels is None else labels,
                "resourceVersion": resource_version,
            },
            "spec": {"replicas": replicas, "serviceName": name},
            "status": {"replicas": replicas},
        }
        if ready_replicas is not None:
            body["status"]["readyReplicas"] = ready_replicas
        return StatefulSetSnapshotSchema().load(body)

    return make
