"""Terminal stage: persists the record and builds the result envelope.

The page is only written when the command targets one and writing is
enabled; incomplete answers never reach this stage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cancellation_resolver.core.exceptions import (
    MisconfigurationError,
    StoreWriteError,
)
from cancellation_resolver.core.types import (
    Failure,
    Result,
    ResultEnvelope,
    Success,
    ValidatedCall,
)
from cancellation_resolver.pipeline.base import BaseAsyncHandler
from cancellation_resolver.store.updates import build_page_update

if TYPE_CHECKING:
    from cancellation_resolver.store.base import RecordStore

log = logging.getLogger(__name__)


class ResultWriter(
    BaseAsyncHandler[
        ValidatedCall, ResultEnvelope, StoreWriteError | MisconfigurationError
    ]
):
    """Writes the validated record to its page and returns the envelope."""

    def __init__(self, store: RecordStore | None = None) -> None:
        self._store = store

    async def handle(
        self, command: ValidatedCall
    ) -> Result[ResultEnvelope, StoreWriteError | MisconfigurationError]:
        cmd = command.command
        config = cmd.config
        written = False

        if cmd.write and cmd.targets_page:
            if self._store is None:
                return Failure(MisconfigurationError("No record store configured"))
            body = build_page_update(
                command.record,
                link_property=config.link_property,
                instructions_property=config.instructions_property,
            )
            try:
                await self._store.update_page(cmd.page_id or "", body)
            except StoreWriteError as e:
                return Failure(e)
            written = True
            log.debug("Updated page %s for %r", cmd.page_id, command.record.service)

        candidate = command.normalized.candidate
        envelope: ResultEnvelope = {
            "success": True,
            **command.record.to_dict(),
            "page_id": cmd.page_id,
            "written": written,
            "extraction_method": candidate.method,
            "payload_shape": candidate.shape.value,
        }
        return Success(envelope)
