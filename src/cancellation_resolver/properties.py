"""Plain-text extraction from typed record-store properties.

A Notion page property is a dict tagged by ``type``; the payload for that
type lives under the key of the same name. Only the types that can name a
service are recognized.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _fragments_text(fragments: Any) -> str | None:
    if not isinstance(fragments, list):
        return None
    parts = []
    for fragment in fragments:
        if not isinstance(fragment, Mapping):
            continue
        text = fragment.get("plain_text")
        if text is None:
            inner = fragment.get("text")
            text = inner.get("content") if isinstance(inner, Mapping) else None
        parts.append(text if isinstance(text, str) else "")
    joined = " ".join(parts).strip()
    return joined or None


def _select_text(option: Any) -> str | None:
    if not isinstance(option, Mapping):
        return None
    name = option.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def _url_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _number_text(number: Any) -> str | None:
    if isinstance(number, bool) or not isinstance(number, int | float):
        return None
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def _formula_text(result: Any) -> str | None:
    if not isinstance(result, Mapping):
        return None
    string = result.get("string")
    if isinstance(string, str) and string.strip():
        return string.strip()
    return _number_text(result.get("number"))


_EXTRACTORS = {
    "title": _fragments_text,
    "rich_text": _fragments_text,
    "select": _select_text,
    "url": _url_text,
    "formula": _formula_text,
}


def extract_plain_text(prop: Mapping[str, Any] | None) -> str | None:
    """Return the plain text carried by a typed property, or None.

    Empty text is reported as None so that callers never mistake an empty
    string for a resolved value.
    """
    if not isinstance(prop, Mapping):
        return None
    extractor = _EXTRACTORS.get(prop.get("type"))
    if extractor is None:
        return None
    return extractor(prop.get(prop["type"]))


def extract_service_name(
    page: Mapping[str, Any] | None, property_name: str = "Service"
) -> str | None:
    """Read the service name from a retrieved page's properties."""
    if not isinstance(page, Mapping):
        return None
    properties = page.get("properties")
    if not isinstance(properties, Mapping):
        return None
    return extract_plain_text(properties.get(property_name))
