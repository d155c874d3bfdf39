"""Resolve subscription cancellation links and instructions into Notion pages."""

import importlib.metadata
import logging

from cancellation_resolver.config import FrozenConfig, resolve_config
from cancellation_resolver.core.exceptions import (
    BackendCallError,
    CancellationResolverError,
    InvalidRequestError,
    MethodNotAllowedError,
    MisconfigurationError,
    MissingInstructionsError,
    MissingLinkError,
    PipelineError,
    ServiceNameError,
    StoreReadError,
    StoreWriteError,
    UnparsableResponseError,
    ValidationError,
)
from cancellation_resolver.core.types import (
    CancellationCandidate,
    CancellationRecord,
    Failure,
    PayloadShape,
    ResolveCommand,
    Result,
    ResultEnvelope,
    Success,
)
from cancellation_resolver.executor import CancellationExecutor, create_executor
from cancellation_resolver.frontdoor import resolve_cancellation
from cancellation_resolver.handler import InvocationResponse, handle_request
from cancellation_resolver.telemetry import TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("cancellation-resolver")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Prevents 'No handler found' warnings when the host application has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Entry points
    "resolve_cancellation",
    "handle_request",
    "InvocationResponse",
    "CancellationExecutor",
    "create_executor",
    # Configuration
    "FrozenConfig",
    "resolve_config",
    # Types
    "CancellationCandidate",
    "CancellationRecord",
    "Failure",
    "PayloadShape",
    "ResolveCommand",
    "Result",
    "ResultEnvelope",
    "Success",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "BackendCallError",
    "CancellationResolverError",
    "InvalidRequestError",
    "MethodNotAllowedError",
    "MisconfigurationError",
    "MissingInstructionsError",
    "MissingLinkError",
    "PipelineError",
    "ServiceNameError",
    "StoreReadError",
    "StoreWriteError",
    "UnparsableResponseError",
    "ValidationError",
]
