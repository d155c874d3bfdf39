"""Maps validated records onto the record store's page-update schema."""

from typing import Any

from cancellation_resolver.core.types import CancellationRecord

# Notion rejects text objects whose content exceeds this many characters.
MAX_TEXT_CONTENT_LENGTH = 2000


def rich_text_from_string(value: str) -> list[dict[str, Any]]:
    """Build a rich-text array, splitting long values across text objects."""
    chunks = [
        value[i : i + MAX_TEXT_CONTENT_LENGTH]
        for i in range(0, len(value), MAX_TEXT_CONTENT_LENGTH)
    ] or [""]
    return [{"type": "text", "text": {"content": chunk}} for chunk in chunks]


def build_page_update(
    record: CancellationRecord,
    *,
    link_property: str = "Cancellation Link",
    instructions_property: str = "Instructions",
) -> dict[str, Any]:
    """Return the partial-update body that stores `record` on a page.

    Only the two answer properties are set, so applying the same update
    twice leaves the page in the same state.
    """
    return {
        "properties": {
            link_property: {"url": record.cancellation_link},
            instructions_property: {
                "rich_text": rich_text_from_string(record.instructions)
            },
        }
    }
