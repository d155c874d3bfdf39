import pytest

from cancellation_resolver.core.exceptions import (
    BackendCallError,
    InvalidRequestError,
    StoreReadError,
)
from cancellation_resolver.executor import CancellationExecutor
from cancellation_resolver.handler import handle_request, parse_body, status_for

pytestmark = pytest.mark.unit


@pytest.fixture
def executor(frozen_config, fake_store, make_backend, netflix_payload):
    return CancellationExecutor(
        frozen_config, store=fake_store, backend=make_backend(netflix_payload)
    )


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "patch"])
@pytest.mark.asyncio
async def test_non_post_methods_are_rejected(method, executor, fake_store):
    response = await handle_request(method, {"pageId": "page-1"}, executor=executor)
    assert response.status_code == 405
    assert response.body["kind"] == "MethodNotAllowed"
    assert fake_store.reads == []


@pytest.mark.asyncio
async def test_post_with_page_id_writes_and_returns_record(executor, fake_store):
    response = await handle_request("POST", {"pageId": "page-1"}, executor=executor)

    assert response.ok
    assert response.body["service"] == "Netflix"
    assert response.body["cancellationLink"] == "https://www.netflix.com/cancelplan"
    assert response.body["instructions"] == "Go to Account > Cancel Membership."
    assert fake_store.updates[0][0] == "page-1"


@pytest.mark.asyncio
async def test_snake_case_keys_are_accepted(executor):
    response = await handle_request("post", {"page_id": "page-1"}, executor=executor)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_service_only_request_does_not_write(executor, fake_store):
    response = await handle_request("POST", {"serviceName": "Netflix"}, executor=executor)
    assert response.status_code == 200
    assert response.body["written"] is False
    assert fake_store.updates == []


@pytest.mark.parametrize("body", [None, {}, {"pageId": "  "}, ["page-1"], "page-1"])
@pytest.mark.asyncio
async def test_bad_bodies_are_400(body, executor):
    response = await handle_request("POST", body, executor=executor)
    assert response.status_code == 400
    assert response.body["kind"] == "InvalidRequest"


@pytest.mark.asyncio
async def test_non_string_identifier_is_400(executor):
    response = await handle_request("POST", {"pageId": 12}, executor=executor)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_credentials_are_500_without_network():
    response = await handle_request("POST", {"service": "Netflix"})
    assert response.status_code == 500
    assert response.body["kind"] == "MisconfigurationError"
    assert "HF_TOKEN" in response.body["error"]


@pytest.mark.asyncio
async def test_unresolvable_service_name_is_400(
    frozen_config, make_store, make_backend, service_page, netflix_payload
):
    store = make_store({"page-1": service_page(None)})
    executor = CancellationExecutor(
        frozen_config, store=store, backend=make_backend(netflix_payload)
    )
    response = await handle_request("POST", {"pageId": "page-1"}, executor=executor)
    assert response.status_code == 400
    assert response.body["kind"] == "ServiceNameError"
    assert response.body["stage"] == "ServiceSourceHandler"


@pytest.mark.asyncio
async def test_store_read_failure_is_502_with_raw_body(
    frozen_config, make_store, make_backend, netflix_payload
):
    store = make_store(read_error=StoreReadError("HTTP 404", raw='{"code":"object_not_found"}'))
    executor = CancellationExecutor(
        frozen_config, store=store, backend=make_backend(netflix_payload)
    )
    response = await handle_request("POST", {"pageId": "page-1"}, executor=executor)
    assert response.status_code == 502
    assert response.body["kind"] == "StoreReadError"
    assert response.body["raw"] == '{"code":"object_not_found"}'


@pytest.mark.asyncio
async def test_backend_failure_is_502(frozen_config, fake_store, make_backend):
    executor = CancellationExecutor(
        frozen_config,
        store=fake_store,
        backend=make_backend(error=BackendCallError("HTTP 503", raw="loading")),
    )
    response = await handle_request("POST", {"pageId": "page-1"}, executor=executor)
    assert response.status_code == 502
    assert response.body["kind"] == "BackendCallError"
    assert response.body["stage"] == "APIHandler"


@pytest.mark.asyncio
async def test_incomplete_answer_returns_fallback_and_writes_nothing(
    frozen_config, fake_store, make_backend, chat_completion
):
    payload = chat_completion('{"service": "Netflix"}')
    executor = CancellationExecutor(
        frozen_config, store=fake_store, backend=make_backend(payload)
    )

    response = await handle_request("POST", {"pageId": "page-1"}, executor=executor)

    assert response.status_code == 422
    assert response.body["kind"] == "MissingLink"
    assert response.body["fallback"] is True
    assert "Netflix" in response.body["message"]
    assert response.body["raw"] == payload
    assert fake_store.updates == []


@pytest.mark.asyncio
async def test_unparsable_answer_is_422(frozen_config, fake_store, make_backend):
    executor = CancellationExecutor(
        frozen_config, store=fake_store, backend=make_backend("I cannot help with that.")
    )
    response = await handle_request("POST", {"pageId": "page-1"}, executor=executor)
    assert response.status_code == 422
    assert response.body["kind"] == "UnparsableResponse"
    assert response.body["raw"] == "I cannot help with that."


@pytest.mark.asyncio
async def test_unexpected_errors_are_500(frozen_config):
    class Exploding:
        async def handle(self, command):
            raise RuntimeError("boom")

    executor = CancellationExecutor(frozen_config, pipeline_handlers=[Exploding()])
    response = await handle_request("POST", {"service": "Netflix"}, executor=executor)
    assert response.status_code == 500
    assert response.body == {"success": False, "error": "boom", "kind": "RuntimeError"}


def test_parse_body_prefers_camel_case_keys():
    assert parse_body({"pageId": "a", "page_id": "b", "service": " Max "}) == ("a", "Max")


def test_status_for_plain_errors():
    assert status_for(InvalidRequestError("x")) == 400
    assert status_for(ValueError("x")) == 500
