"""Text parsing strategies for recovering cancellation fields.

Strategies are tried in order and the first one that recovers at least one
field wins. Strict JSON comes first because it is unambiguous when it
succeeds; labeled free text is the fallback.
"""

from collections.abc import Mapping
import json
import re
from typing import Any

from .types import ParsingResult, ParsingStrategy

MAX_INSTRUCTIONS_LENGTH = 600

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "service": ("service",),
    "cancellation_link": ("cancellation_link", "cancellationLink"),
    "instructions": ("instructions",),
}

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)
_URL_RE = re.compile(r"\bURL[\s*]*:[\s*]*<?([^\s<>]+)>?", re.IGNORECASE)
_STEPS_RE = re.compile(
    r"\bSteps[\s*]*:[\s*]*(.*?)(?=\n[\s*]*URL[\s*]*:|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_NEWLINES_RE = re.compile(r"\s*\n\s*")
_ANSWER_FIELDS = frozenset({"cancellation_link", "instructions"})
# Sentence punctuation a model leaves after an inline link.
_TRAILING_PUNCTUATION = ".,;:)"


def _clean(value: Any) -> str | None:
    """Return a trimmed, non-empty string or None.

    A list of strings (models sometimes return steps as an array) is joined
    with single spaces.
    """
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        value = " ".join(v.strip() for v in value if v.strip())
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def read_fields(data: Mapping[str, Any]) -> dict[str, str]:
    """Read the recognized answer fields out of an already-parsed object."""
    fields: dict[str, str] = {}
    for name, aliases in FIELD_ALIASES.items():
        for alias in aliases:
            value = _clean(data.get(alias))
            if value is not None:
                fields[name] = value
                break
    return fields


def _balanced_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span in `text`, if any."""
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def _json_candidates(text: str) -> list[tuple[str, bool]]:
    """Return ``(candidate, strict)`` pairs; only the whole text is strict."""
    candidates = [(text, True)]
    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append((fenced.group(1), False))
    span = _balanced_object(text)
    if span is not None:
        candidates.append((span, False))
    return candidates


def try_json_object(text: str) -> ParsingResult:
    """Parse `text` as a JSON object and read the answer fields from it.

    The whole text is tried first, then a fenced code block, then the first
    balanced object span. An embedded object only counts when it carries the
    link or the instructions, so a lone ``service`` key never shadows labeled
    text around it.
    """
    errors = []
    for candidate, strict in _json_candidates(text.strip()):
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            errors.append(f"Invalid JSON: {e}")
            continue
        if not isinstance(parsed, dict):
            errors.append(f"Expected a JSON object, got {type(parsed).__name__}")
            continue
        fields = read_fields(parsed)
        if fields and (strict or _ANSWER_FIELDS & fields.keys()):
            return ParsingResult(success=True, fields=fields, method="json_object")
        errors.append(
            "JSON object has no recognized fields"
            if strict or not fields
            else "Embedded JSON object has no link or instructions"
        )

    return ParsingResult(
        success=False, fields={}, method="json_object", errors=errors
    )


def try_labeled_text(text: str) -> ParsingResult:
    """Recover ``URL:`` and ``Steps:`` labeled values from free text.

    The steps value runs to the end of the text (or to a later ``URL:``
    line), has its newlines collapsed to single spaces and is capped at
    `MAX_INSTRUCTIONS_LENGTH` characters.
    """
    fields: dict[str, str] = {}

    url_match = _URL_RE.search(text)
    if url_match:
        link = url_match.group(1).strip().strip("<>")
        link = link.rstrip(_TRAILING_PUNCTUATION)
        if link:
            fields["cancellation_link"] = link

    steps_match = _STEPS_RE.search(text)
    if steps_match:
        steps = _NEWLINES_RE.sub(" ", steps_match.group(1)).strip()
        steps = steps[:MAX_INSTRUCTIONS_LENGTH].rstrip()
        if steps:
            fields["instructions"] = steps

    if fields:
        return ParsingResult(success=True, fields=fields, method="labeled_text")
    return ParsingResult(
        success=False,
        fields={},
        method="labeled_text",
        errors=["No URL: or Steps: labels found"],
    )


def default_strategies() -> tuple[ParsingStrategy, ...]:
    """Built-in strategies in precedence order."""
    return (
        ParsingStrategy("json_object", try_json_object),
        ParsingStrategy("labeled_text", try_labeled_text),
    )


def parse_text(
    text: str, strategies: tuple[ParsingStrategy, ...] | None = None
) -> ParsingResult:
    """Run `strategies` in order and return the first successful result.

    When every strategy fails the combined errors are returned on a failed
    `ParsingResult` with method ``"fallback"``.
    """
    errors: list[str] = []
    for strategy in strategies if strategies is not None else default_strategies():
        result = strategy.parse(text)
        if result.success:
            return result
        errors.extend(f"{strategy.name}: {error}" for error in result.errors)

    return ParsingResult(success=False, fields={}, method="fallback", errors=errors)
