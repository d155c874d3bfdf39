import pytest

from cancellation_resolver.properties import extract_plain_text, extract_service_name

pytestmark = pytest.mark.unit


def test_title_fragments_are_joined():
    prop = {
        "type": "title",
        "title": [
            {"type": "text", "plain_text": "Disney"},
            {"type": "text", "plain_text": "Plus"},
        ],
    }
    assert extract_plain_text(prop) == "Disney Plus"


def test_rich_text_falls_back_to_text_content():
    prop = {
        "type": "rich_text",
        "rich_text": [{"type": "text", "text": {"content": "Spotify"}}],
    }
    assert extract_plain_text(prop) == "Spotify"


def test_select_returns_option_name():
    assert extract_plain_text({"type": "select", "select": {"name": "Hulu"}}) == "Hulu"


def test_empty_select_is_none():
    assert extract_plain_text({"type": "select", "select": None}) is None


def test_url_property():
    prop = {"type": "url", "url": "https://example.com"}
    assert extract_plain_text(prop) == "https://example.com"


def test_formula_string_result():
    prop = {"type": "formula", "formula": {"type": "string", "string": "Max"}}
    assert extract_plain_text(prop) == "Max"


@pytest.mark.parametrize(
    ("number", "expected"),
    [(42, "42"), (3.0, "3"), (2.5, "2.5")],
)
def test_formula_number_result_is_rendered(number, expected):
    prop = {"type": "formula", "formula": {"type": "number", "number": number}}
    assert extract_plain_text(prop) == expected


def test_formula_boolean_result_is_not_text():
    prop = {"type": "formula", "formula": {"type": "boolean", "boolean": True}}
    assert extract_plain_text(prop) is None


@pytest.mark.parametrize(
    "prop",
    [
        None,
        {},
        {"type": "checkbox", "checkbox": True},
        {"type": "title", "title": []},
        {"type": "rich_text", "rich_text": [{"plain_text": "   "}]},
        {"type": "url", "url": None},
    ],
)
def test_unrecognized_or_empty_properties_yield_none(prop):
    assert extract_plain_text(prop) is None


def test_extract_service_name_reads_named_property(service_page):
    assert extract_service_name(service_page("Netflix")) == "Netflix"


def test_extract_service_name_uses_custom_property_name():
    page = {"properties": {"Name": {"type": "select", "select": {"name": "Peacock"}}}}
    assert extract_service_name(page, "Name") == "Peacock"
    assert extract_service_name(page) is None


def test_extract_service_name_tolerates_missing_properties():
    assert extract_service_name({"object": "page"}) is None
    assert extract_service_name(None) is None


def test_rich_text_with_unrecognized_text_shape_is_none():
    prop = {"type": "rich_text", "rich_text": [{"text": "Spotify"}]}
    assert extract_plain_text(prop) is None
