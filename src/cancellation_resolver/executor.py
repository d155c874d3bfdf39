"""The primary entry point for running a resolution.

The executor runs the stages strictly in sequence: each stage depends on the
previous one's output, so nothing is parallelized. Credentials are checked
before the first stage so a misconfigured process never makes a network call.
"""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING, Any

from cancellation_resolver.backend.chat_completions import ChatCompletionsBackend
from cancellation_resolver.config import FrozenConfig, require_credentials, resolve_config
from cancellation_resolver.core.exceptions import (
    InvariantViolationError,
    PipelineError,
)
from cancellation_resolver.core.types import (
    Failure,
    FinalizedCall,
    PlannedCall,
    ResolveCommand,
    ResolvedQuery,
    ResultEnvelope,
    Success,
    is_result_envelope,
)
from cancellation_resolver.pipeline.api_handler import APIHandler
from cancellation_resolver.pipeline.normalize_handler import NormalizeHandler
from cancellation_resolver.pipeline.prompt_planner import PromptPlanner
from cancellation_resolver.pipeline.result_writer import ResultWriter
from cancellation_resolver.pipeline.service_source import ServiceSourceHandler
from cancellation_resolver.pipeline.validate_handler import ValidateHandler
from cancellation_resolver.store.notion import NotionStoreClient
from cancellation_resolver.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cancellation_resolver.backend.base import GenerationBackend
    from cancellation_resolver.store.base import RecordStore
    from cancellation_resolver.telemetry import TelemetryReporter

log = logging.getLogger(__name__)


def _stage_name(handler: Any) -> str:
    return type(handler).__name__


def _service_name_of(state: Any) -> str | None:
    """Best-effort service name from an intermediate pipeline state."""
    if isinstance(state, ResolveCommand):
        return state.service_name
    if isinstance(state, ResolvedQuery):
        return state.service_name
    if isinstance(state, PlannedCall):
        return state.query.service_name
    if isinstance(state, FinalizedCall):
        return state.planned.query.service_name
    query = getattr(state, "query", None)
    return getattr(query, "service_name", None)


class CancellationExecutor:
    """Executes commands through the resolution pipeline.

    Attributes:
        config: The frozen configuration used to build the default stages.
    """

    def __init__(
        self,
        config: FrozenConfig,
        *,
        store: RecordStore | None = None,
        backend: GenerationBackend | None = None,
        pipeline_handlers: Iterable[Any] | None = None,
        reporters: tuple[TelemetryReporter, ...] = (),
    ) -> None:
        """Initialize the executor.

        Args:
            config: Frozen configuration for the invocation.
            store: Record store used for page reads and writes.
            backend: Generative backend; required unless `pipeline_handlers`
                is given.
            pipeline_handlers: Optional handlers replacing the default stages.
            reporters: Telemetry reporters (only used when telemetry is on).
        """
        self.config = config
        self._store = store
        self._reporters = reporters
        if pipeline_handlers is not None:
            handlers = list(pipeline_handlers)
        else:
            if backend is None:
                raise ValueError("A backend is required to build the default pipeline")
            handlers = self._build_default_pipeline(store, backend)
        if not handlers:
            raise ValueError("Pipeline may not be empty; provide at least one handler.")
        self._pipeline = handlers

    @staticmethod
    def _build_default_pipeline(
        store: RecordStore | None, backend: GenerationBackend
    ) -> list[Any]:
        return [
            ServiceSourceHandler(store),
            PromptPlanner(),
            APIHandler(backend),
            NormalizeHandler(),
            ValidateHandler(),
            ResultWriter(store),
        ]

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Return the pipeline's stage names in execution order."""
        return tuple(_stage_name(h) for h in self._pipeline)

    async def execute(self, command: ResolveCommand) -> ResultEnvelope:
        """Run `command` through every stage.

        Returns:
            The `ResultEnvelope` produced by the terminal stage, with
            per-stage durations under ``metrics.durations``.

        Raises:
            MisconfigurationError: If a required credential is missing.
            PipelineError: If any stage returns a failure.
            InvariantViolationError: If a stage breaks the handler contract.
        """
        require_credentials(command.config, needs_store=command.targets_page)

        current: Any = command
        stage_durations: dict[str, float] = {}
        ctx = TelemetryContext(*self._reporters)

        for handler in self._pipeline:
            stage = _stage_name(handler)
            with ctx("pipeline.stage", stage=stage):
                start = perf_counter()
                result = await handler.handle(current)
                stage_durations[stage] = perf_counter() - start

            if not isinstance(result, Success | Failure):
                ctx.count("pipeline.invariant_violation", stage=stage)
                raise InvariantViolationError(
                    "Handler returned a non-Result value; expected Success|Failure.",
                    stage_name=stage,
                )
            if isinstance(result, Failure):
                ctx.count("pipeline.error", stage=stage)
                log.warning(
                    "Stage %s failed with %s: %s",
                    stage,
                    getattr(result.error, "kind", type(result.error).__name__),
                    result.error,
                )
                raise PipelineError(
                    str(result.error),
                    stage,
                    result.error,
                    service_name=_service_name_of(current),
                )
            current = result.value

        if not is_result_envelope(current):
            raise InvariantViolationError(
                "Executor ended without a ResultEnvelope; ensure the final stage "
                "produces the envelope (e.g., ResultWriter).",
                stage_name=self.stage_names[-1],
            )
        current.setdefault("metrics", {})["durations"] = stage_durations
        return current


def create_executor(
    config: FrozenConfig | None = None,
    *,
    reporters: tuple[TelemetryReporter, ...] = (),
) -> CancellationExecutor:
    """Create an executor backed by the Notion and chat-completions clients.

    If no configuration is provided it is resolved from the environment;
    this is the only place where ambient configuration is read.

    Raises:
        MisconfigurationError: If the backend token is missing.
    """
    final_config = config if config is not None else resolve_config().to_frozen()
    require_credentials(final_config, needs_store=False)

    backend = ChatCompletionsBackend(
        final_config.hf_token,
        url=final_config.backend_url,
        timeout=final_config.request_timeout_seconds,
    )
    store = None
    if final_config.notion_token:
        store = NotionStoreClient(
            final_config.notion_token,
            base_url=final_config.notion_base_url,
            notion_version=final_config.notion_version,
            timeout=final_config.request_timeout_seconds,
        )
    return CancellationExecutor(
        final_config, store=store, backend=backend, reporters=reporters
    )
