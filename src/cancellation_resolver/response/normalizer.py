"""Response normalization: any backend payload to a cancellation candidate.

Backends return strict JSON, JSON inside a string, or free text, wrapped in
several envelope shapes. The normalizer unwraps the envelope by shape, then
parses string content with an ordered list of strategies, and reports a
failure only when no field at all can be recovered.
"""

from collections.abc import Mapping
import logging
from typing import Any

from cancellation_resolver.core.exceptions import UnparsableResponseError
from cancellation_resolver.core.types import (
    CancellationCandidate,
    Failure,
    PayloadShape,
    Result,
    Success,
)

from .parsing import default_strategies, parse_text, read_fields
from .shapes import resolve_shape, unwrap
from .types import ParsingStrategy

log = logging.getLogger(__name__)


class ResponseNormalizer:
    """Reduces backend payloads to `CancellationCandidate` objects.

    Attributes:
        strategies: Text parsing strategies, tried in order.
    """

    def __init__(self, strategies: tuple[ParsingStrategy, ...] | None = None) -> None:
        self.strategies = (
            strategies if strategies is not None else default_strategies()
        )

    def normalize(
        self, payload: Any
    ) -> Result[CancellationCandidate, UnparsableResponseError]:
        """Normalize `payload` into a candidate.

        Returns:
            `Success` with a candidate carrying at least one field, or
            `Failure` with an `UnparsableResponseError` holding the payload.
        """
        shape = resolve_shape(payload)
        content = unwrap(payload, shape)

        if isinstance(content, str):
            parsed = parse_text(content, self.strategies)
            fields = parsed.fields
            method = parsed.method
            errors = parsed.errors
        elif isinstance(content, Mapping):
            fields = read_fields(content)
            method = "object"
            errors = [] if fields else ["Object has no recognized fields"]
        else:
            fields = {}
            method = "none"
            errors = [f"Unsupported payload type: {type(payload).__name__}"]

        candidate = CancellationCandidate(
            service=fields.get("service"),
            cancellation_link=fields.get("cancellation_link"),
            instructions=fields.get("instructions"),
            method=method,
            shape=shape,
        )
        if candidate.is_empty:
            log.debug("Unparsable %s payload: %s", shape.value, errors)
            return Failure(
                UnparsableResponseError(
                    "No cancellation fields could be recovered from the "
                    f"{shape.value} backend response",
                    raw=payload,
                )
            )

        return Success(candidate)


_default_normalizer = ResponseNormalizer()


def normalize_response(
    payload: Any,
) -> Result[CancellationCandidate, UnparsableResponseError]:
    """Normalize `payload` with the built-in strategies."""
    return _default_normalizer.normalize(payload)


__all__ = ["PayloadShape", "ResponseNormalizer", "normalize_response"]
