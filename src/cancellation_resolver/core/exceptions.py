"""Exception hierarchy for the cancellation resolver.

Every error carries a stable ``kind`` (used in invocation response bodies) and,
where one exists, the ``raw`` upstream body or backend payload so a failure can
be diagnosed without re-running the invocation.
"""

from typing import Any


class CancellationResolverError(Exception):
    """Base exception for cancellation resolver errors"""

    kind = "CancellationResolverError"

    def __init__(self, message: str, *, raw: Any = None) -> None:
        super().__init__(message)
        self.raw = raw


class MisconfigurationError(CancellationResolverError):
    """Raised when required credentials or settings are missing"""

    kind = "MisconfigurationError"


class StoreReadError(CancellationResolverError):
    """Raised when the record store refuses or fails a page read"""

    kind = "StoreReadError"


class StoreWriteError(CancellationResolverError):
    """Raised when the record store refuses or fails a page update"""

    kind = "StoreWriteError"


class BackendCallError(CancellationResolverError):
    """Raised when the generative backend call fails"""

    kind = "BackendCallError"


class ServiceNameError(CancellationResolverError):
    """Raised when no service name can be determined for a request"""

    kind = "ServiceNameError"


class UnparsableResponseError(CancellationResolverError):
    """Raised when no field can be recovered from a backend payload"""

    kind = "UnparsableResponse"


class ValidationError(CancellationResolverError):
    """Raised when a parsed backend answer is incomplete"""

    kind = "ValidationError"


class MissingLinkError(ValidationError):
    """Raised when the backend answer has no cancellation link"""

    kind = "MissingLink"


class MissingInstructionsError(ValidationError):
    """Raised when the backend answer has no cancellation instructions"""

    kind = "MissingInstructions"


class InvalidRequestError(CancellationResolverError):
    """Raised when an invocation body identifies neither a page nor a service"""

    kind = "InvalidRequest"


class MethodNotAllowedError(CancellationResolverError):
    """Raised when the invocation surface receives a method other than POST"""

    kind = "MethodNotAllowed"


class PipelineError(CancellationResolverError):
    """Raised by the executor when a stage returns a failure."""

    kind = "PipelineError"

    def __init__(
        self,
        message: str,
        stage_name: str,
        underlying_error: Exception,
        *,
        service_name: str | None = None,
    ) -> None:
        super().__init__(message, raw=getattr(underlying_error, "raw", None))
        self.stage_name = stage_name
        self.underlying_error = underlying_error
        self.service_name = service_name

    @property
    def error_kind(self) -> str:
        """Kind of the stage error that terminated the pipeline."""
        return getattr(self.underlying_error, "kind", type(self.underlying_error).__name__)


class InvariantViolationError(CancellationResolverError):
    """Raised when a stage breaks the pipeline's handler contract."""

    kind = "InvariantViolation"

    def __init__(self, message: str, *, stage_name: str | None = None) -> None:
        super().__init__(message)
        self.stage_name = stage_name
