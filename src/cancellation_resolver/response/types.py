"""Result containers for the response parsing strategies."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ParsingResult:
    """Result from a single parsing strategy.

    `fields` only holds the recognized answer fields that carried a value.
    """

    success: bool
    fields: dict[str, Any]
    method: str
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParsingStrategy:
    """A named text parser tried in a fixed order by the normalizer."""

    name: str
    parse: Callable[[str], ParsingResult]
