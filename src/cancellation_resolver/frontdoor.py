"""Scenario-first convenience helper for a single resolution.

A minimal entry point over the executor and command pipeline for callers
that only need to name a page or a service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cancellation_resolver.config import resolve_config
from cancellation_resolver.core.types import ResolveCommand
from cancellation_resolver.executor import CancellationExecutor, create_executor

if TYPE_CHECKING:
    from cancellation_resolver.config import FrozenConfig
    from cancellation_resolver.core.types import ResultEnvelope


async def resolve_cancellation(
    page_id: str | None = None,
    service_name: str | None = None,
    *,
    cfg: FrozenConfig | None = None,
    write: bool = True,
) -> ResultEnvelope:
    """Resolve the cancellation link and instructions for one service.

    Args:
        page_id: Page whose ``Service`` property names the service. The
            resolved record is written back to this page.
        service_name: Service to resolve directly. Takes precedence over the
            page's property when both are given.
        cfg: Optional frozen configuration. If omitted, `resolve_config()` is used.
        write: Set to False to resolve without updating the page.

    Returns:
        Result envelope dictionary.

    Raises:
        ValueError: If neither `page_id` nor `service_name` is given.
        MisconfigurationError: If a required credential is missing.
        PipelineError: If any stage fails.

    Example:
        ```python
        result = await resolve_cancellation(service_name="Netflix", write=False)
        print(result["cancellationLink"])
        ```
    """
    final_cfg = cfg or resolve_config().to_frozen()
    executor: CancellationExecutor = create_executor(final_cfg)
    cmd = ResolveCommand(
        config=executor.config,
        page_id=page_id,
        service_name=service_name,
        write=write,
    )
    return await executor.execute(cmd)
