"""
HTTP tests for the manifest endpoint and the admission webhook.
"""

import pytest
from fastapi.testclient import TestClient

from revision_api.app.main import app
from revision_api.app.models import NetworkConfig
from revision_api.app.routers import revisions


@pytest.fixture
def client(controller_config):
    app.dependency_overrides[revisions.controller_config] = lambda: controller_config
    app.dependency_overrides[revisions.network_config] = lambda: NetworkConfig(
        istio_outbound_ip_ranges="10.0.0.0/8",
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


MANIFEST_URL = "/v1alpha1/namespaces/default/revisions/hello-00001/manifest"


class TestManifest:
    def test_render(self, client):
        resp = client.post(MANIFEST_URL, json={
            "uid": "abc",
            "owner_references": [{"kind": "Configuration", "name": "hello", "controller": True}],
            "service_account_name": "builder",
            "container": {
                "image": "gcr.io/example/hello:latest",
                "readinessProbe": {"httpGet": {"path": "/healthz", "port": 9000}},
            },
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["warnings"] == []
        dep = body["deployment"]
        assert dep["apiVersion"] == "apps/v1"
        assert dep["kind"] == "Deployment"
        assert dep["metadata"]["name"] == "hello-00001-deployment"
        assert dep["spec"]["strategy"]["rollingUpdate"] == {"maxSurge": 1, "maxUnavailable": 1}
        template = dep["spec"]["template"]
        assert template["metadata"]["annotations"] == {
            "sidecar.istio.io/inject": "true",
            "traffic.sidecar.istio.io/includeOutboundIPRanges": "10.0.0.0/8",
        }
        pod = template["spec"]
        assert pod["serviceAccountName"] == "builder"
        assert [c["name"] for c in pod["containers"]] == ["user-container", "queue-proxy"]
        user = pod["containers"][0]
        assert user["readinessProbe"]["httpGet"]["port"] == 8012
        assert user["lifecycle"]["preStop"]["httpGet"] == {"path": "/quitquitquit", "port": 8022}

    def test_lifecycle_warning(self, client):
        resp = client.post(MANIFEST_URL, json={
            "container": {
                "image": "hello",
                "lifecycle": {"preStop": {"exec": {"command": ["sleep", "5"]}}},
            },
        })
        assert resp.status_code == 200
        assert resp.json()["warnings"] == ["user lifecycle hook replaced by the queue proxy pre-stop hook"]

    def test_invalid_range_warning(self, client):
        app.dependency_overrides[revisions.network_config] = lambda: NetworkConfig(
            istio_outbound_ip_ranges="bogus",
        )
        resp = client.post(MANIFEST_URL, json={"container": {"image": "hello"}})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["warnings"]) == 1
        assert "bogus" in body["warnings"][0]
        annotations = body["deployment"]["spec"]["template"]["metadata"]["annotations"]
        assert "traffic.sidecar.istio.io/includeOutboundIPRanges" not in annotations

    def test_readiness_without_port(self, client):
        resp = client.post(MANIFEST_URL, json={
            "container": {"image": "hello", "readinessProbe": {"httpGet": {"path": "/healthz"}}},
        })
        assert resp.status_code == 200
        user = resp.json()["deployment"]["spec"]["template"]["spec"]["containers"][0]
        assert user["readinessProbe"]["httpGet"] == {"path": "/healthz", "port": 8012}

    def test_readiness_empty_path_unchanged(self, client):
        resp = client.post(MANIFEST_URL, json={
            "container": {"image": "hello", "readinessProbe": {"httpGet": {"path": "", "port": 9000}}},
        })
        assert resp.status_code == 200
        user = resp.json()["deployment"]["spec"]["template"]["spec"]["containers"][0]
        assert user["readinessProbe"]["httpGet"] == {"path": "", "port": 9000}

    def test_invalid_container(self, client):
        resp = client.post(MANIFEST_URL, json={
            "container": {"image": "hello", "ports": [{"name": "http"}]},
        })
        assert resp.status_code == 422


class TestAdmissionWebhook:
    def _review(self, container):
        return {
            "request": {
                "uid": "req-1",
                "name": "hello-00001",
                "object": {"spec": {"container": container}},
            }
        }

    def test_allowed(self, client):
        resp = client.post("/admission/validate", json=self._review({
            "image": "hello",
            "readinessProbe": {"httpGet": {"path": "/healthz"}},
        }))
        assert resp.status_code == 200
        assert resp.json()["response"] == {"uid": "req-1", "allowed": True}

    @pytest.mark.parametrize("container,field", [
        ({"image": "hello", "name": "app"}, "name"),
        ({"image": "hello", "lifecycle": {"preStop": {"exec": {"command": ["true"]}}}}, "lifecycle"),
        ({"image": "hello", "ports": [{"containerPort": 80}]}, "ports"),
        ({"image": "hello", "resources": {"requests": {"cpu": "2"}}}, "resources"),
        ({"image": "hello", "volumeMounts": [{"name": "data", "mountPath": "/data"}]}, "volumeMounts"),
        ({"image": "hello", "readinessProbe": {"httpGet": {"path": "/", "port": 80}}}, "readinessProbe.httpGet.port"),
    ])
    def test_denied(self, client, container, field):
        resp = client.post("/admission/validate", json=self._review(container))
        body = resp.json()["response"]
        assert body["allowed"] is False
        assert body["status"]["code"] == 403
        assert field in body["status"]["message"]


class TestSchema:
    def test_revision_request_example(self, client):
        schema = client.get("/openapi.json").json()
        example = schema["components"]["schemas"]["RevisionRequest"]["example"]
        assert example["container"]["readinessProbe"] == {"httpGet": {"path": "/healthz"}}
