"""Validation stage: candidate to cancellation record."""

from cancellation_resolver.core.exceptions import ValidationError
from cancellation_resolver.core.types import (
    Failure,
    NormalizedCall,
    Result,
    Success,
    ValidatedCall,
)
from cancellation_resolver.pipeline.base import BaseAsyncHandler
from cancellation_resolver.response.validation import validate_candidate


class ValidateHandler(BaseAsyncHandler[NormalizedCall, ValidatedCall, ValidationError]):
    """Rejects incomplete candidates; attaches the raw payload to failures."""

    async def handle(
        self, command: NormalizedCall
    ) -> Result[ValidatedCall, ValidationError]:
        result = validate_candidate(
            command.candidate,
            command.query.service_name,
            raw=command.finalized.raw_payload,
        )
        if isinstance(result, Failure):
            return result
        return Success(ValidatedCall(normalized=command, record=result.value))
