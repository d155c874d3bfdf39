"""Normalization stage: backend payload to cancellation candidate."""

from cancellation_resolver.core.exceptions import UnparsableResponseError
from cancellation_resolver.core.types import (
    Failure,
    FinalizedCall,
    NormalizedCall,
    Result,
    Success,
)
from cancellation_resolver.pipeline.base import BaseAsyncHandler
from cancellation_resolver.response.normalizer import ResponseNormalizer


class NormalizeHandler(
    BaseAsyncHandler[FinalizedCall, NormalizedCall, UnparsableResponseError]
):
    """Runs the response normalizer over the raw payload."""

    def __init__(self, normalizer: ResponseNormalizer | None = None) -> None:
        self.normalizer = normalizer or ResponseNormalizer()

    async def handle(
        self, command: FinalizedCall
    ) -> Result[NormalizedCall, UnparsableResponseError]:
        result = self.normalizer.normalize(command.raw_payload)
        if isinstance(result, Failure):
            return result
        return Success(NormalizedCall(finalized=command, candidate=result.value))
