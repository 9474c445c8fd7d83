"""Unit tests for the WeblogicServer model: defaults, validation, round-trip."""

import pytest

from weblogic.common.models.version import Version
from weblogic.types.models.weblogicserver import WeblogicServer
from weblogic.types.models.weblogicserver_spec import WeblogicServerPhase
from weblogic.types.schemas.statefulset import StatefulSetSnapshotSchema
from weblogic.utils.errors import ValidationError


class TestEnsureDefaults:
    def test_fills_unset_fields(self, server_body):
        server = WeblogicServer.from_body(server_body()).ensure_defaults()
        assert server.spec == {
            "version": "12.2.1.2",
            "replicas": 1,
            "managedServerCount": 1,
        }

    def test_keeps_set_fields(self, server_body):
        spec = {"version": "14.1.1.0", "replicas": 3, "managedServerCount": 2}
        server = WeblogicServer.from_body(server_body(spec=spec)).ensure_defaults()
        assert server.spec == spec

    def test_explicit_zero_replicas_is_kept(self, server_body):
        server = WeblogicServer.from_body(server_body(spec={"replicas": 0}))
        server.ensure_defaults()
        assert server.spec["replicas"] == 0

    def test_idempotent(self, server_body):
        server = WeblogicServer.from_body(server_body(spec={"replicas": 2}))
        once = server.ensure_defaults().to_body()
        assert server.ensure_defaults().to_body() == once

    def test_null_spec(self, server_body):
        body = server_body()
        body["spec"] = None
        server = WeblogicServer.from_body(body).ensure_defaults()
        assert server.spec["version"] == "12.2.1.2"


class TestValidate:
    def test_valid(self, server_body):
        spec = {
            "version": "12.2.1.2",
            "replicas": 2,
            "managedServerCount": 1,
            "nodeSelector": {"disktype": "ssd"},
            "serversRunning": [
                {"host": "10.0.0.1", "serverName": "ms1", "podName": "web1-0", "port": 7001}
            ],
        }
        model = WeblogicServer.from_body(server_body(spec=spec)).validate()
        assert model.replicas == 2
        assert model.node_selector == {"disktype": "ssd"}
        assert model.servers_running[0].pod_name == "web1-0"
        assert model.servers_available == []

    def test_empty_spec_is_valid(self, server_body):
        WeblogicServer.from_body(server_body()).validate()

    @pytest.mark.parametrize(
        "spec,field",
        [
            ({"replicas": -1}, "spec.replicas"),
            ({"replicas": "two"}, "spec.replicas"),
            ({"replicas": True}, "spec.replicas"),
            ({"managedServerCount": False}, "spec.managedServerCount"),
            ({"serversRunning": [{"port": True}]}, "spec.serversRunning"),
            ({"managedServerCount": -3}, "spec.managedServerCount"),
            ({"version": "latest"}, "spec.version"),
            ({"nodeSelector": {"zone": 1}}, "spec.nodeSelector"),
            ({"serversAvailable": [{"port": -1}]}, "spec.serversAvailable"),
        ],
    )
    def test_invalid_spec(self, server_body, spec, field):
        server = WeblogicServer.from_body(server_body(spec=spec))
        with pytest.raises(ValidationError) as exc_info:
            server.validate()
        assert "Invalid WeblogicServer default/web1" in str(exc_info.value)
        assert field in str(exc_info.value)

    @pytest.mark.parametrize("name", ["Web1", "web_1", "-web1", "w" * 64, ""])
    def test_invalid_name(self, server_body, name):
        server = WeblogicServer.from_body(server_body(name=name))
        with pytest.raises(ValidationError, match="metadata.name"):
            server.validate()

    def test_reports_every_problem(self, server_body):
        server = WeblogicServer.from_body(
            server_body(name="Web1", spec={"replicas": -1, "version": "x"})
        )
        with pytest.raises(ValidationError) as exc_info:
            server.validate()
        message = str(exc_info.value)
        assert "metadata.name" in message
        assert "spec.replicas" in message
        assert "spec.version" in message


class TestBody:
    def test_unknown_fields_survive_round_trip(self, server_body):
        body = server_body(spec={"replicas": 1, "customField": {"a": [1, 2]}})
        body["metadata"]["annotations"] = {"note": "keep"}
        body["status"] = {"phase": "Running", "errors": [], "observed": True}
        server = WeblogicServer.from_body(body)
        server.validate()
        assert server.to_body() == body

    def test_body_is_copied(self, server_body):
        body = server_body()
        server = WeblogicServer.from_body(body)
        server.add_server_label()
        server.phase = WeblogicServerPhase.RUNNING
        assert "labels" not in body["metadata"]
        assert "status" not in body

    def test_identity(self, server_body):
        server = WeblogicServer.from_body(server_body(resource_version="42"))
        assert server.key == "default/web1"
        assert server.resource_version == "42"


class TestStatus:
    def test_absent_phase_reads_unknown(self, server_body):
        server = WeblogicServer.from_body(server_body())
        assert server.phase == "Unknown"
        assert server.errors is None
        assert "status" not in server.to_body()

    def test_phase_and_errors(self, server_body):
        server = WeblogicServer.from_body(server_body())
        server.phase = WeblogicServerPhase.FAILED
        server.errors = ["boom"]
        assert server.to_body()["status"] == {"phase": "Failed", "errors": ["boom"]}

    def test_unknown_phase_rejected(self, server_body):
        server = WeblogicServer.from_body(server_body())
        with pytest.raises(ValueError):
            server.phase = "Exploded"


class TestLabel:
    def test_add_server_label(self, server_body):
        server = WeblogicServer.from_body(server_body(labels={"team": "a"}))
        assert not server.has_server_label()
        server.add_server_label()
        assert server.has_server_label()
        assert server.labels == {"team": "a", "server-label": "web1"}

    def test_label_of_another_server(self, server_body):
        server = WeblogicServer.from_body(server_body(labels={"server-label": "web2"}))
        assert not server.has_server_label()


class TestVersion:
    def test_parse(self):
        version = Version.from_str("12.2.1.2")
        assert version.info.major == 12
        assert version.info.micro == 1
        assert version.info.releaselevel == ".2"
        assert str(version) == "12.2.1.2"

    @pytest.mark.parametrize("value", ["12.2", "latest", "12.2.1.", None])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            Version.from_str(value)


class TestStatefulSetSnapshot:
    def test_defaults(self):
        snapshot = StatefulSetSnapshotSchema().load({"metadata": {"name": "web1"}})
        assert snapshot.desired_replicas == 1
        assert snapshot.ready_replicas == 0
        assert snapshot.labels == {}

    def test_fields(self):
        snapshot = StatefulSetSnapshotSchema().load(
            {
                "metadata": {
                    "name": "web1",
                    "namespace": "default",
                    "labels": {"server-label": "web1"},
                    "resourceVersion": "7",
                    "uid": "ignored",
                },
                "spec": {"replicas": 3, "template": {}},
                "status": {"replicas": 3, "readyReplicas": 2},
            }
        )
        assert snapshot.name == "web1"
        assert snapshot.namespace == "default"
        assert snapshot.resource_version == "7"
        assert snapshot.desired_replicas == 3
        assert snapshot.ready_replicas == 2

    def test_null_ready_replicas(self):
        snapshot = StatefulSetSnapshotSchema().load(
            {"metadata": {"name": "web1"}, "status": {"readyReplicas": None}}
        )
        assert snapshot.ready_replicas == 0
