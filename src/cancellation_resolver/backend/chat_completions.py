"""Async client for an OpenAI-compatible chat-completions endpoint.

The default endpoint is the Hugging Face inference router. The client makes
exactly one attempt per call and returns the payload as received; shaping it
into an answer is the normalizer's job.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cancellation_resolver.config.schema import DEFAULT_BACKEND_URL
from cancellation_resolver.core.exceptions import (
    BackendCallError,
    MisconfigurationError,
)

log = logging.getLogger(__name__)


class ChatCompletionsBackend:
    """Sends a single-message chat completion request."""

    def __init__(
        self,
        token: str | None,
        *,
        url: str = DEFAULT_BACKEND_URL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise MisconfigurationError("Hugging Face API key not configured")
        self._token = token
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"ChatCompletionsBackend(url={self.url!r}, token='[REDACTED]')"

    @staticmethod
    def build_request_body(prompt: str, model: str) -> dict[str, Any]:
        return {
            "messages": [{"role": "user", "content": prompt}],
            "model": model,
            "stream": False,
        }

    async def generate(self, prompt: str, *, model: str) -> Any:
        """Return the backend payload for `prompt`.

        A JSON body is returned parsed; any other successful body is
        returned as text.

        Raises:
            BackendCallError: On a non-2xx response or a transport failure.
        """
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.url,
                    headers=headers,
                    json=self.build_request_body(prompt, model),
                )
        except httpx.TimeoutException as e:
            raise BackendCallError(
                f"Backend request timed out after {self.timeout}s", raw=str(e)
            ) from e
        except httpx.HTTPError as e:
            raise BackendCallError(f"Backend request failed: {e}", raw=str(e)) from e

        if not response.is_success:
            log.error("Backend API error: %s", response.text)
            raise BackendCallError(
                f"Backend API error (HTTP {response.status_code})", raw=response.text
            )
        try:
            return response.json()
        except ValueError:
            return response.text
