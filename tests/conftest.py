"""
Global test configuration with support for different test types.
"""

from collections.abc import Callable
import json
import os
from typing import Any

import httpx
import pytest

from cancellation_resolver.config import FrozenConfig, resolve_config

_ISOLATED_PREFIXES = ("CANCEL_RESOLVER_", "NOTION_", "HF_")


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_resolver_env(request, monkeypatch):
    """Ensure a clean credential and CANCEL_RESOLVER_* environment per test.

    Escape hatch: mark a test with @pytest.mark.allow_env_pollution to keep
    the current environment unchanged.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith(_ISOLATED_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    # Avoid DEBUG toggles switching telemetry on
    monkeypatch.delenv("DEBUG", raising=False)


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with mocked HTTP",
        "contract: Interface and behavior contracts",
        "security: Secret-handling guarantees",
        "allow_env_pollution: Skip environment isolation for this test",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def notion_token():
    """Provide a consistent, fake Notion token for tests."""
    return "secret_notion_token_12345_abcdef"


@pytest.fixture
def hf_token():
    """Provide a consistent, fake backend token for tests."""
    return "hf_test_token_67890_ghijkl"


@pytest.fixture
def frozen_config(notion_token, hf_token) -> FrozenConfig:
    """A fully credentialed configuration."""
    return resolve_config(
        {"notion_token": notion_token, "hf_token": hf_token}
    ).to_frozen()


@pytest.fixture
def backend_only_config(hf_token) -> FrozenConfig:
    """A configuration without a Notion token."""
    return resolve_config({"hf_token": hf_token}).to_frozen()


def _chat_completion(content: Any) -> dict[str, Any]:
    """Wrap `content` in a chat-completions response body."""
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def _service_page(service: str | None = "Netflix", page_id: str = "page-1") -> dict[str, Any]:
    """A minimal Notion page with a title-typed Service property."""
    title = [] if service is None else [{"plain_text": service, "type": "text"}]
    return {
        "object": "page",
        "id": page_id,
        "properties": {"Service": {"id": "title", "type": "title", "title": title}},
    }


class FakeStore:
    """In-memory record store recording every call."""

    def __init__(self, pages: dict[str, Any] | None = None, *, read_error=None, write_error=None):
        self.pages = pages or {}
        self.read_error = read_error
        self.write_error = write_error
        self.reads: list[str] = []
        self.updates: list[tuple[str, dict[str, Any]]] = []

    async def retrieve_page(self, page_id: str) -> dict[str, Any]:
        self.reads.append(page_id)
        if self.read_error is not None:
            raise self.read_error
        return self.pages[page_id]

    async def update_page(self, page_id: str, body: dict[str, Any]) -> dict[str, Any]:
        if self.write_error is not None:
            raise self.write_error
        self.updates.append((page_id, body))
        return {"object": "page", "id": page_id}


class FakeBackend:
    """Backend returning a canned payload (or raising a canned error)."""

    def __init__(self, payload: Any = None, *, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate(self, prompt: str, *, model: str) -> Any:
        self.calls.append((prompt, model))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def fake_store():
    return FakeStore({"page-1": _service_page("Netflix")})


@pytest.fixture
def netflix_payload():
    return _chat_completion(
        json.dumps(
            {
                "service": "Netflix",
                "cancellation_link": "https://www.netflix.com/cancelplan",
                "instructions": "Go to Account > Cancel Membership.",
            }
        )
    )


@pytest.fixture
def mock_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build an `httpx.MockTransport` that records the requests it serves.

    Usage:
        transport, seen = mock_transport(httpx.Response(200, json={...}))
    """

    def _build(*responses: httpx.Response | Exception):
        seen: list[httpx.Request] = []
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            item = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(item, Exception):
                raise item
            return item

        return httpx.MockTransport(handler), seen

    return _build


@pytest.fixture
def chat_completion():
    """Factory wrapping content in a chat-completions body."""
    return _chat_completion


@pytest.fixture
def service_page():
    """Factory for Notion pages carrying a Service title property."""
    return _service_page


@pytest.fixture
def make_store():
    """Factory for `FakeStore` instances."""
    return FakeStore


@pytest.fixture
def make_backend():
    """Factory for `FakeBackend` instances."""
    return FakeBackend
