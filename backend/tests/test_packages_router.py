"""Tests for the hook invocation endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("httpx")

from fastapi.testclient import TestClient

from core.config import Settings
from kernel import Kernel
from services.packages_service.deps import CAPABILITY_RESOURCE_CLIENT
from services.packages_service.plugin import PackagesPlugin
from services.packages_service.schemas import Deployment, DeploymentCondition

from test_hooks import FakeResourceClient


def _payload(kind: str, state: str, package_kind: str | None = None) -> dict:
    return {
        "package": {
            "kind": package_kind or kind,
            "crossplane_version": "v0.11.1",
            "depends_on": [{"provider": "crossplane/provider-aws", "version": "v0.1.1"}],
        },
        "revision": {
            "kind": kind,
            "name": "provider-aws-1234",
            "package": "crossplane/provider-aws:v0.1.1",
            "desired_state": state,
            "uid": "5d2b3c1e",
        },
    }


@pytest.fixture
def fake_client() -> FakeResourceClient:
    return FakeResourceClient()


@pytest.fixture
def client(fake_client: FakeResourceClient):
    kernel = Kernel(settings=Settings())
    kernel.register_plugin(PackagesPlugin())
    kernel.override_capability(CAPABILITY_RESOURCE_CLIENT, fake_client)
    with TestClient(kernel.app) as test_client:
        yield test_client


def test_health(client: TestClient):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_post_active_provider_applies_resources(client: TestClient, fake_client: FakeResourceClient):
    response = client.post("/api/v1/revisions/hooks/post", json=_payload("Provider", "Active"))

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert [(verb, kind) for verb, kind, _ in fake_client.calls] == [
        ("apply", "ServiceAccount"),
        ("apply", "Deployment"),
    ]


def test_pre_inactive_provider_deletes_resources(client: TestClient, fake_client: FakeResourceClient):
    response = client.post("/api/v1/revisions/hooks/pre", json=_payload("Provider", "Inactive"))

    assert response.status_code == 200
    assert [kind for _, kind, _ in fake_client.calls] == ["Deployment", "ServiceAccount"]


def test_kind_mismatch_is_not_retryable(client: TestClient, fake_client: FakeResourceClient):
    response = client.post(
        "/api/v1/revisions/hooks/post",
        json=_payload("Provider", "Active", package_kind="Configuration"),
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {"message": "not a provider package", "retryable": False}
    assert fake_client.calls == []


def test_unavailable_deployment_keeps_message(client: TestClient, fake_client: FakeResourceClient):
    def _unavailable(obj):
        if isinstance(obj, Deployment):
            obj.conditions = [DeploymentCondition(type="Available", status="False", message="boom")]

    fake_client.apply_fn = _unavailable

    response = client.post("/api/v1/revisions/hooks/post", json=_payload("Provider", "Active"))

    assert response.status_code == 409
    assert response.json()["detail"] == {"message": "deployment unavailable: boom", "retryable": True}


def test_apply_failure_is_retryable(client: TestClient, fake_client: FakeResourceClient):
    def _fail(obj):
        raise RuntimeError("boom")

    fake_client.apply_fn = _fail

    response = client.post("/api/v1/revisions/hooks/post", json=_payload("Provider", "Active"))

    assert response.status_code == 503
    assert response.json()["detail"]["message"] == "cannot apply provider package service account: boom"
    assert response.json()["detail"]["retryable"] is True


@pytest.mark.parametrize("phase", ["pre", "post"])
@pytest.mark.parametrize("state", ["Active", "Inactive"])
def test_configuration_revisions_never_touch_resources(client, fake_client, phase, state):
    response = client.post(f"/api/v1/revisions/hooks/{phase}", json=_payload("Configuration", state))

    assert response.status_code == 200
    assert fake_client.calls == []


def test_unknown_phase_is_rejected(client: TestClient):
    response = client.post("/api/v1/revisions/hooks/during", json=_payload("Provider", "Active"))
    assert response.status_code == 422


def test_dependency_must_name_one_package(client: TestClient):
    payload = _payload("Provider", "Active")
    payload["package"]["depends_on"] = [{"version": "v1"}]

    response = client.post("/api/v1/revisions/hooks/post", json=payload)
    assert response.status_code == 422
