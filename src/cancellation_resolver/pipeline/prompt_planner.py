"""Planning stage: builds the backend prompt for a resolved query."""

from cancellation_resolver.core.exceptions import ServiceNameError
from cancellation_resolver.core.types import (
    Failure,
    PlannedCall,
    ResolvedQuery,
    Result,
    Success,
)
from cancellation_resolver.pipeline.base import BaseAsyncHandler
from cancellation_resolver.prompts import build_prompt


class PromptPlanner(BaseAsyncHandler[ResolvedQuery, PlannedCall, ServiceNameError]):
    """Pairs the query with its prompt and the configured model."""

    async def handle(
        self, command: ResolvedQuery
    ) -> Result[PlannedCall, ServiceNameError]:
        try:
            prompt = build_prompt(command.service_name)
        except ValueError as e:
            return Failure(ServiceNameError(str(e), raw=command.service_name))
        return Success(
            PlannedCall(query=command, prompt=prompt, model=command.command.config.model)
        )
