"""Payload shape detection for generative backend responses.

The shape is resolved once, in a fixed precedence order, and then used to
pick the unwrapping rule, so backend quirks never change which branch runs.
"""

from collections.abc import Mapping
from typing import Any

from cancellation_resolver.core.types import PayloadShape


def _chat_content(payload: Any) -> Any:
    """Return ``choices[0].message.content`` or None when not present."""
    if not isinstance(payload, Mapping):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    message = first.get("message")
    if not isinstance(message, Mapping):
        return None
    return message.get("content")


def _has_generated_text(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("generated_text") is not None


def resolve_shape(payload: Any) -> PayloadShape:
    """Classify `payload` into a `PayloadShape`."""
    if _chat_content(payload) is not None:
        return PayloadShape.CHAT_COMPLETION
    if isinstance(payload, list) and payload and _has_generated_text(payload[0]):
        return PayloadShape.GENERATED_TEXT_LIST
    if _has_generated_text(payload):
        return PayloadShape.GENERATED_TEXT
    if isinstance(payload, str):
        return PayloadShape.TEXT
    if isinstance(payload, Mapping):
        return PayloadShape.OBJECT
    return PayloadShape.UNKNOWN


def _join_content_parts(parts: list[Any]) -> str:
    """Join OpenAI-style multi-part content (``[{"type": "text", ...}]``)."""
    texts = []
    for part in parts:
        if isinstance(part, str):
            texts.append(part)
        elif isinstance(part, Mapping) and isinstance(part.get("text"), str):
            texts.append(part["text"])
    return "\n".join(texts)


def unwrap(payload: Any, shape: PayloadShape) -> Any:
    """Return the working content for `payload` given its resolved shape.

    The result is a string, an already-parsed mapping, or None when the
    payload carries nothing usable.
    """
    match shape:
        case PayloadShape.CHAT_COMPLETION:
            content = _chat_content(payload)
        case PayloadShape.GENERATED_TEXT_LIST:
            content = payload[0]["generated_text"]
        case PayloadShape.GENERATED_TEXT:
            content = payload["generated_text"]
        case PayloadShape.TEXT | PayloadShape.OBJECT:
            content = payload
        case _:
            content = None

    if isinstance(content, list):
        content = _join_content_parts(content)
    if isinstance(content, str | Mapping):
        return content
    return None
