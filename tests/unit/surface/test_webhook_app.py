from fastapi.testclient import TestClient
import pytest

from cancellation_resolver.app import create_app
from cancellation_resolver.executor import CancellationExecutor

pytestmark = pytest.mark.integration


@pytest.fixture
def client(frozen_config, fake_store, make_backend, netflix_payload):
    executor = CancellationExecutor(
        frozen_config, store=fake_store, backend=make_backend(netflix_payload)
    )
    return TestClient(create_app(executor=executor))


def test_post_resolves_and_writes(client, fake_store):
    response = client.post("/api/cancel", json={"pageId": "page-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["service"] == "Netflix"
    assert body["cancellationLink"] == "https://www.netflix.com/cancelplan"
    assert body["written"] is True
    assert len(fake_store.updates) == 1


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_other_methods_get_405(client, method):
    response = client.request(method.upper(), "/api/cancel")
    assert response.status_code == 405
    assert response.json()["kind"] == "MethodNotAllowed"
    assert response.headers["allow"] == "POST"


def test_invalid_json_is_400(client):
    response = client.post(
        "/api/cancel",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidRequest"


def test_empty_body_is_400(client):
    response = client.post("/api/cancel")
    assert response.status_code == 400


def test_missing_credentials_without_executor_is_500():
    client = TestClient(create_app())
    response = client.post("/api/cancel", json={"service": "Netflix"})
    assert response.status_code == 500
    assert response.json()["kind"] == "MisconfigurationError"
