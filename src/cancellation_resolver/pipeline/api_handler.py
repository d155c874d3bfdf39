"""Backend call stage.

Makes exactly one backend call per invocation; a failed call ends the
invocation with the upstream body attached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cancellation_resolver.core.exceptions import BackendCallError
from cancellation_resolver.core.types import (
    Failure,
    FinalizedCall,
    PlannedCall,
    Result,
    Success,
)
from cancellation_resolver.pipeline.base import BaseAsyncHandler

if TYPE_CHECKING:
    from cancellation_resolver.backend.base import GenerationBackend

log = logging.getLogger(__name__)


class APIHandler(BaseAsyncHandler[PlannedCall, FinalizedCall, BackendCallError]):
    """Sends the planned prompt to the generative backend."""

    def __init__(self, backend: GenerationBackend) -> None:
        self._backend = backend

    async def handle(
        self, command: PlannedCall
    ) -> Result[FinalizedCall, BackendCallError]:
        log.debug(
            "Calling backend model %s for %r", command.model, command.query.service_name
        )
        try:
            payload = await self._backend.generate(command.prompt, model=command.model)
        except BackendCallError as e:
            return Failure(e)
        return Success(FinalizedCall(planned=command, raw_payload=payload))
