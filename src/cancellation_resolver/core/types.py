"""Core data types that flow through the pipeline.

This module defines the immutable data structures that represent the state
of an invocation as it moves through the resolver stages. Each stage
transforms the data into a new state, so a stage can never observe a
half-built record.
"""

from __future__ import annotations

import dataclasses
import enum
import typing

from ._validation import _freeze_mapping, _is_blank, _require

if typing.TYPE_CHECKING:
    from cancellation_resolver.config import FrozenConfig

# --- Result Monad ---
# Stages return Success | Failure instead of raising, which keeps the
# executor free of broad try/except blocks and makes failures part of the
# data flow.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


class PayloadShape(enum.Enum):
    """Structural shapes a generative backend payload is known to take."""

    CHAT_COMPLETION = "chat_completion"  # {"choices": [{"message": {"content": ...}}]}
    GENERATED_TEXT_LIST = "generated_text_list"  # [{"generated_text": ...}]
    GENERATED_TEXT = "generated_text"  # {"generated_text": ...}
    TEXT = "text"  # bare string (JSON or free text)
    OBJECT = "object"  # bare, already-parsed object
    UNKNOWN = "unknown"


# --- Answer Models ---


@dataclasses.dataclass(frozen=True, slots=True)
class CancellationCandidate:
    """Fields recovered from a backend payload, before validation.

    Any field may be missing; the validator decides whether the candidate is
    complete enough to become a `CancellationRecord`.
    """

    service: str | None = None
    cancellation_link: str | None = None
    instructions: str | None = None
    method: str = "unknown"
    shape: PayloadShape = PayloadShape.UNKNOWN

    @property
    def recovered_fields(self) -> tuple[str, ...]:
        """Names of the fields that carry a value."""
        return tuple(
            name
            for name in ("service", "cancellation_link", "instructions")
            if getattr(self, name) is not None
        )

    @property
    def is_empty(self) -> bool:
        return not self.recovered_fields


@dataclasses.dataclass(frozen=True, slots=True)
class CancellationRecord:
    """A validated cancellation answer, ready to be written to the store."""

    service: str
    cancellation_link: str
    instructions: str

    def __post_init__(self) -> None:
        """Validate that every field is a non-empty string."""
        for name in ("service", "cancellation_link", "instructions"):
            _require(
                condition=not _is_blank(getattr(self, name)),
                message="must be a non-empty str",
                field_name=name,
            )

    def to_dict(self) -> dict[str, str]:
        """Public (camelCase) representation used in responses."""
        return {
            "service": self.service,
            "cancellationLink": self.cancellation_link,
            "instructions": self.instructions,
        }


# --- Typed Command States ---


@dataclasses.dataclass(frozen=True, slots=True)
class ResolveCommand:
    """The initial state of an invocation.

    Identifies either a page to read the service name from, a service name
    given directly, or both (the direct name wins and the page is only the
    write target).
    """

    config: FrozenConfig
    page_id: str | None = None
    service_name: str | None = None
    write: bool = True

    def __post_init__(self) -> None:
        """Validate that the command identifies something to resolve."""
        _require(
            condition=self.page_id is None or isinstance(self.page_id, str),
            message="must be a str or None",
            field_name="page_id",
            exc=TypeError,
        )
        _require(
            condition=self.service_name is None or isinstance(self.service_name, str),
            message="must be a str or None",
            field_name="service_name",
            exc=TypeError,
        )
        _require(
            condition=not (_is_blank(self.page_id) and _is_blank(self.service_name)),
            message="a page_id or a service_name is required",
            field_name="page_id and service_name",
        )

    @property
    def targets_page(self) -> bool:
        return not _is_blank(self.page_id)


@dataclasses.dataclass(frozen=True, slots=True)
class ResolvedQuery:
    """The command after the service name has been determined."""

    command: ResolveCommand
    service_name: str
    page: typing.Mapping[str, typing.Any] | None = None

    def __post_init__(self) -> None:
        """Validate the service name and freeze the page snapshot."""
        _require(
            condition=not _is_blank(self.service_name)
            and self.service_name == self.service_name.strip(),
            message="must be a non-empty, trimmed str",
            field_name="service_name",
        )
        frozen = _freeze_mapping(self.page)
        if frozen is not None:
            object.__setattr__(self, "page", frozen)


@dataclasses.dataclass(frozen=True, slots=True)
class PlannedCall:
    """The query plus the prompt and model for the backend call."""

    query: ResolvedQuery
    prompt: str
    model: str

    def __post_init__(self) -> None:
        """Validate prompt and model."""
        _require(
            condition=not _is_blank(self.prompt),
            message="must be a non-empty str",
            field_name="prompt",
        )
        _require(
            condition=not _is_blank(self.model),
            message="must be a non-empty str",
            field_name="model",
        )


@dataclasses.dataclass(frozen=True, slots=True)
class FinalizedCall:
    """The planned call plus the raw backend payload."""

    planned: PlannedCall
    raw_payload: typing.Any


@dataclasses.dataclass(frozen=True, slots=True)
class NormalizedCall:
    """The finalized call plus the candidate recovered from its payload."""

    finalized: FinalizedCall
    candidate: CancellationCandidate

    @property
    def query(self) -> ResolvedQuery:
        return self.finalized.planned.query


@dataclasses.dataclass(frozen=True, slots=True)
class ValidatedCall:
    """The normalized call plus the validated record."""

    normalized: NormalizedCall
    record: CancellationRecord

    @property
    def query(self) -> ResolvedQuery:
        return self.normalized.query

    @property
    def command(self) -> ResolveCommand:
        return self.normalized.query.command


# --- Result Envelope ---


class ResultEnvelope(typing.TypedDict, total=False):
    """Stable result shape returned to callers.

    The executor guarantees these core fields on every successful run.
    """

    success: bool
    service: str
    cancellationLink: str
    instructions: str
    page_id: str | None
    written: bool

    # Optional fields
    extraction_method: str
    payload_shape: str
    metrics: dict[str, typing.Any]


_ENVELOPE_FIELDS = ("success", "service", "cancellationLink", "instructions")


def is_result_envelope(value: object) -> bool:
    """Return True when `value` carries every core envelope field."""
    return isinstance(value, dict) and all(key in value for key in _ENVELOPE_FIELDS)
