"""Normalization and validation of generative backend responses."""

from .normalizer import ResponseNormalizer, normalize_response
from .parsing import (
    MAX_INSTRUCTIONS_LENGTH,
    default_strategies,
    parse_text,
    try_json_object,
    try_labeled_text,
)
from .shapes import resolve_shape, unwrap
from .types import ParsingResult, ParsingStrategy
from .validation import validate_candidate

__all__ = [
    "MAX_INSTRUCTIONS_LENGTH",
    "ParsingResult",
    "ParsingStrategy",
    "ResponseNormalizer",
    "default_strategies",
    "normalize_response",
    "parse_text",
    "resolve_shape",
    "try_json_object",
    "try_labeled_text",
    "unwrap",
    "validate_candidate",
]
