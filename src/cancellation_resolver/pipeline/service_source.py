"""Service name resolution stage.

Uses the service name given on the command when there is one; otherwise
reads the target page and extracts the name from its service property.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cancellation_resolver.core.exceptions import (
    CancellationResolverError,
    MisconfigurationError,
    ServiceNameError,
    StoreReadError,
)
from cancellation_resolver.core.types import (
    Failure,
    ResolveCommand,
    ResolvedQuery,
    Result,
    Success,
)
from cancellation_resolver.pipeline.base import BaseAsyncHandler
from cancellation_resolver.properties import extract_service_name

if TYPE_CHECKING:
    from cancellation_resolver.store.base import RecordStore

log = logging.getLogger(__name__)


class ServiceSourceHandler(
    BaseAsyncHandler[ResolveCommand, ResolvedQuery, CancellationResolverError]
):
    """Resolves the service name for a command."""

    def __init__(self, store: RecordStore | None = None) -> None:
        self._store = store

    async def handle(
        self, command: ResolveCommand
    ) -> Result[ResolvedQuery, CancellationResolverError]:
        if command.service_name and command.service_name.strip():
            return Success(
                ResolvedQuery(command=command, service_name=command.service_name.strip())
            )

        if self._store is None:
            return Failure(MisconfigurationError("No record store configured"))

        page_id = command.page_id or ""
        try:
            page = await self._store.retrieve_page(page_id)
        except StoreReadError as e:
            return Failure(e)

        property_name = command.config.service_property
        service_name = extract_service_name(page, property_name)
        if not service_name:
            properties = page.get("properties") if isinstance(page, dict) else None
            return Failure(
                ServiceNameError(
                    "Could not determine service name from Notion page",
                    raw=(properties or {}).get(property_name),
                )
            )

        log.debug("Resolved service %r from page %s", service_name, page_id)
        return Success(
            ResolvedQuery(command=command, service_name=service_name, page=page)
        )
