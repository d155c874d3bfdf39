import pytest

from cancellation_resolver.core.types import CancellationRecord
from cancellation_resolver.store import (
    MAX_TEXT_CONTENT_LENGTH,
    build_page_update,
    rich_text_from_string,
)

pytestmark = pytest.mark.unit


def _record(instructions="Go to Account > Cancel Membership."):
    return CancellationRecord(
        service="Netflix",
        cancellation_link="https://www.netflix.com/cancelplan",
        instructions=instructions,
    )


def test_update_sets_url_and_rich_text_properties():
    body = build_page_update(_record())
    assert body == {
        "properties": {
            "Cancellation Link": {"url": "https://www.netflix.com/cancelplan"},
            "Instructions": {
                "rich_text": [
                    {
                        "type": "text",
                        "text": {"content": "Go to Account > Cancel Membership."},
                    }
                ]
            },
        }
    }


def test_update_touches_only_the_answer_properties():
    body = build_page_update(_record())
    assert set(body) == {"properties"}
    assert set(body["properties"]) == {"Cancellation Link", "Instructions"}


def test_property_names_are_configurable():
    body = build_page_update(
        _record(), link_property="Cancel URL", instructions_property="How To"
    )
    assert set(body["properties"]) == {"Cancel URL", "How To"}


def test_update_is_deterministic():
    assert build_page_update(_record()) == build_page_update(_record())


def test_long_text_is_split_into_bounded_chunks():
    text = "x" * (MAX_TEXT_CONTENT_LENGTH * 2 + 5)
    chunks = rich_text_from_string(text)
    assert len(chunks) == 3
    assert all(len(c["text"]["content"]) <= MAX_TEXT_CONTENT_LENGTH for c in chunks)
    assert "".join(c["text"]["content"] for c in chunks) == text


def test_record_rejects_blank_fields():
    with pytest.raises(ValueError):
        CancellationRecord(service="Netflix", cancellation_link=" ", instructions="x")
