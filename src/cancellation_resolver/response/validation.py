"""Validation of normalized candidates into cancellation records."""

from typing import Any

from cancellation_resolver.core.exceptions import (
    MissingInstructionsError,
    MissingLinkError,
    ValidationError,
)
from cancellation_resolver.core.types import (
    CancellationCandidate,
    CancellationRecord,
    Failure,
    Result,
    Success,
)


def validate_candidate(
    candidate: CancellationCandidate,
    service_name: str,
    *,
    raw: Any = None,
) -> Result[CancellationRecord, ValidationError]:
    """Turn `candidate` into a record, or report what is missing.

    The link is checked before the instructions. The record's service falls
    back to `service_name` when the backend did not name one.

    Args:
        candidate: Fields recovered by the normalizer.
        service_name: The service the invocation asked about.
        raw: Original backend payload attached to failures for diagnostics.
            Defaults to the candidate's fields.
    """
    link = (candidate.cancellation_link or "").strip()
    instructions = (candidate.instructions or "").strip()
    context = raw if raw is not None else {
        "service": candidate.service,
        "cancellation_link": candidate.cancellation_link,
        "instructions": candidate.instructions,
    }

    if not link:
        return Failure(
            MissingLinkError("Backend response has no cancellation link", raw=context)
        )
    if not instructions:
        return Failure(
            MissingInstructionsError(
                "Backend response has no cancellation instructions", raw=context
            )
        )

    service = (candidate.service or "").strip() or service_name
    return Success(
        CancellationRecord(
            service=service, cancellation_link=link, instructions=instructions
        )
    )
