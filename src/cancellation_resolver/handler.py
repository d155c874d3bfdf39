"""Invocation surface: maps one request onto one resolution.

`handle_request` is transport-agnostic. It accepts the HTTP method and the
decoded JSON body and always returns an `InvocationResponse`; every failure
becomes a distinguishable JSON body ``{error, kind, stage?, raw?}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from cancellation_resolver.config import resolve_config
from cancellation_resolver.core.exceptions import (
    BackendCallError,
    CancellationResolverError,
    InvalidRequestError,
    MethodNotAllowedError,
    MisconfigurationError,
    PipelineError,
    ServiceNameError,
    StoreReadError,
    StoreWriteError,
    UnparsableResponseError,
    ValidationError,
)
from cancellation_resolver.core.types import ResolveCommand
from cancellation_resolver.executor import create_executor

if TYPE_CHECKING:
    from cancellation_resolver.config import FrozenConfig
    from cancellation_resolver.executor import CancellationExecutor

log = logging.getLogger(__name__)

_PAGE_KEYS = ("pageId", "page_id")
_SERVICE_KEYS = ("service", "serviceName")

_FALLBACK_ERRORS = (UnparsableResponseError, ValidationError)
_UPSTREAM_ERRORS = (StoreReadError, StoreWriteError, BackendCallError)


@dataclass(frozen=True)
class InvocationResponse:
    """Status code and JSON-serializable body of one invocation."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def status_for(error: BaseException) -> int:
    """Return the HTTP status that reports `error`."""
    if isinstance(error, PipelineError):
        return status_for(error.underlying_error)
    if isinstance(error, MethodNotAllowedError):
        return 405
    if isinstance(error, InvalidRequestError | ServiceNameError):
        return 400
    if isinstance(error, _UPSTREAM_ERRORS):
        return 502
    if isinstance(error, _FALLBACK_ERRORS):
        return 422
    return 500


def error_body(error: CancellationResolverError) -> dict[str, Any]:
    """Build the response body describing `error`."""
    underlying = error.underlying_error if isinstance(error, PipelineError) else error
    body: dict[str, Any] = {
        "success": False,
        "error": str(error),
        "kind": getattr(underlying, "kind", type(underlying).__name__),
    }
    if isinstance(error, PipelineError):
        body["stage"] = error.stage_name
        if error.service_name:
            body["service"] = error.service_name
    if error.raw is not None:
        body["raw"] = error.raw
    if isinstance(underlying, _FALLBACK_ERRORS):
        service = body.get("service") or "this service"
        body["fallback"] = True
        body["message"] = (
            f"Could not resolve a cancellation link and instructions for "
            f"{service}. Nothing was written; check the service's account "
            f"settings page manually."
        )
    return body


def _first_value(body: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = body.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise InvalidRequestError(f"'{key}' must be a string", raw=dict(body))
        if value.strip():
            return value.strip()
    return None


def parse_body(body: Any) -> tuple[str | None, str | None]:
    """Return ``(page_id, service_name)`` from a decoded request body.

    Raises:
        InvalidRequestError: If the body is not an object or names neither a
            page nor a service.
    """
    if body is None:
        body = {}
    if not isinstance(body, Mapping):
        raise InvalidRequestError("Request body must be a JSON object", raw=body)
    page_id = _first_value(body, _PAGE_KEYS)
    service_name = _first_value(body, _SERVICE_KEYS)
    if page_id is None and service_name is None:
        raise InvalidRequestError(
            "Request body must include 'pageId' or 'service'", raw=dict(body)
        )
    return page_id, service_name


async def handle_request(
    method: str,
    body: Any = None,
    *,
    config: FrozenConfig | None = None,
    executor: CancellationExecutor | None = None,
    write: bool = True,
) -> InvocationResponse:
    """Handle one invocation.

    Args:
        method: HTTP method of the request; only ``POST`` is accepted.
        body: Decoded JSON body.
        config: Frozen configuration; resolved from the environment when
            omitted and no executor is given.
        executor: Pre-built executor, mainly for tests.
        write: Set to False to resolve without updating the page.
    """
    try:
        if method.upper() != "POST":
            raise MethodNotAllowedError(f"Method {method.upper()} not allowed")
        page_id, service_name = parse_body(body)

        if executor is None:
            final_config = config or resolve_config().to_frozen()
            executor = create_executor(final_config)
        command = ResolveCommand(
            config=executor.config,
            page_id=page_id,
            service_name=service_name,
            write=write,
        )
        envelope = await executor.execute(command)
    except CancellationResolverError as e:
        status = status_for(e)
        if status >= 500:
            log.error("Invocation failed (%s): %s", status, e)
        else:
            log.info("Invocation rejected (%s): %s", status, e)
        return InvocationResponse(status, error_body(e))
    except ValueError as e:
        # Configuration that fails schema validation.
        log.error("Invocation failed: %s", e)
        return InvocationResponse(
            500,
            {"success": False, "error": str(e), "kind": MisconfigurationError.kind},
        )
    except Exception as e:
        log.exception("Unexpected error while resolving cancellation details")
        return InvocationResponse(
            500, {"success": False, "error": str(e), "kind": type(e).__name__}
        )

    return InvocationResponse(200, dict(envelope))
