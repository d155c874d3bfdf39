import pytest

from cancellation_resolver.core.types import PayloadShape
from cancellation_resolver.response.shapes import resolve_shape, unwrap

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("payload", "shape"),
    [
        ({"choices": [{"message": {"content": "x"}}]}, PayloadShape.CHAT_COMPLETION),
        ([{"generated_text": "x"}], PayloadShape.GENERATED_TEXT_LIST),
        ({"generated_text": "x"}, PayloadShape.GENERATED_TEXT),
        ("x", PayloadShape.TEXT),
        ({"service": "x"}, PayloadShape.OBJECT),
        ({"choices": [{"message": {"content": None}}]}, PayloadShape.OBJECT),
        (None, PayloadShape.UNKNOWN),
        ([1, 2], PayloadShape.UNKNOWN),
    ],
)
def test_resolve_shape(payload, shape):
    assert resolve_shape(payload) is shape


def test_chat_completion_wins_over_generated_text():
    payload = {"choices": [{"message": {"content": "a"}}], "generated_text": "b"}
    assert resolve_shape(payload) is PayloadShape.CHAT_COMPLETION
    assert unwrap(payload, PayloadShape.CHAT_COMPLETION) == "a"


def test_unwrap_joins_content_parts():
    payload = {"choices": [{"message": {"content": ["one", {"type": "text", "text": "two"}]}}]}
    assert unwrap(payload, resolve_shape(payload)) == "one\ntwo"


def test_unwrap_returns_none_for_non_text_content():
    payload = [{"generated_text": 12}]
    assert unwrap(payload, resolve_shape(payload)) is None
