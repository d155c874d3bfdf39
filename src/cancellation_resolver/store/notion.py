"""Async client for the Notion pages API.

Only the two calls the resolver needs are implemented: retrieving a page and
partially updating its properties. Upstream error bodies are preserved on the
raised exceptions.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cancellation_resolver.config.schema import (
    DEFAULT_NOTION_BASE_URL,
    DEFAULT_NOTION_VERSION,
)
from cancellation_resolver.core.exceptions import (
    MisconfigurationError,
    StoreReadError,
    StoreWriteError,
)

log = logging.getLogger(__name__)


class NotionStoreClient:
    """Reads and updates pages in a Notion workspace."""

    def __init__(
        self,
        token: str | None,
        *,
        base_url: str = DEFAULT_NOTION_BASE_URL,
        notion_version: str = DEFAULT_NOTION_VERSION,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise MisconfigurationError("Notion API key not configured")
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"NotionStoreClient(base_url={self.base_url!r}, token='[REDACTED]')"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }

    def _create_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def retrieve_page(self, page_id: str) -> dict[str, Any]:
        """Return the page object for `page_id`.

        Raises:
            StoreReadError: On a non-2xx response or a transport failure.
        """
        url = f"{self.base_url}/pages/{page_id}"
        try:
            async with self._create_http_client() as client:
                response = await client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            raise StoreReadError(
                f"Failed to retrieve Notion page {page_id}: {e}", raw=str(e)
            ) from e

        if not response.is_success:
            log.error("Notion API error: %s", response.text)
            raise StoreReadError(
                f"Failed to retrieve Notion page (HTTP {response.status_code})",
                raw=response.text,
            )
        try:
            return response.json()
        except ValueError as e:
            raise StoreReadError(
                "Notion returned a non-JSON page body", raw=response.text
            ) from e

    async def update_page(self, page_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial property update to `page_id`.

        Raises:
            StoreWriteError: On a non-2xx response or a transport failure.
        """
        url = f"{self.base_url}/pages/{page_id}"
        try:
            async with self._create_http_client() as client:
                response = await client.patch(url, headers=self._headers(), json=body)
        except httpx.HTTPError as e:
            raise StoreWriteError(
                f"Failed to update Notion page {page_id}: {e}", raw=str(e)
            ) from e

        if not response.is_success:
            log.error("Notion update error: %s", response.text)
            raise StoreWriteError(
                f"Failed to update Notion page (HTTP {response.status_code})",
                raw=response.text,
            )
        try:
            return response.json()
        except ValueError:
            return {}
