"""Field transform round-trips and fallbacks."""

import pytest

from core import transform


@pytest.mark.parametrize(
    "items",
    [
        ["beach"],
        ["beach", "old town", "night market"],
        ["Hội An", "Đà Nẵng"],
    ],
)
def test_comma_round_trip(items):
    encoded = transform.comma_to_array(", ".join(items))
    assert transform.array_to_comma(encoded) == ", ".join(items)
    assert transform.parse_json_safe(encoded) == items


def test_newline_round_trip():
    items = ["https://img.test/1.jpg", "https://img.test/2.jpg"]
    encoded = transform.newline_to_array("\n".join(items))
    assert transform.array_to_newline(encoded) == "\n".join(items)


def test_split_trims_and_drops_empty_pieces():
    assert transform.comma_to_array(" a , ,b,, ") == '["a","b"]'
    assert transform.newline_to_array("\n  x \n\n y\n") == '["x","y"]'


@pytest.mark.parametrize("empty", ["", None])
def test_empty_input_encodes_as_empty_array(empty):
    assert transform.comma_to_array(empty) == "[]"
    assert transform.newline_to_array(empty) == "[]"


@pytest.mark.parametrize("bad", ["not json", "{\"a\": 1}", "42", "[1,", None, ""])
def test_join_never_raises(bad):
    assert transform.array_to_comma(bad) == ""
    assert transform.array_to_newline(bad) == ""


def test_deeply_nested_json_falls_back():
    nested = "[" * 100000
    assert transform.array_to_comma(nested) == ""
    assert transform.array_to_newline(nested) == ""
    assert transform.parse_json_safe(nested) == []
    assert transform.parse_json_list(nested) == []


def test_join_renders_items_as_display_text():
    assert transform.array_to_comma('["a", null, true, false, 2.0, 2.5]') == "a, , true, false, 2, 2.5"
    assert transform.array_to_comma('[["x", "y"], "z"]') == "x,y, z"


def test_parse_json_safe_returns_fallback_unchanged():
    sentinel = {"fallback": True}
    assert transform.parse_json_safe("{oops", sentinel) is sentinel
    assert transform.parse_json_safe(None, sentinel) is sentinel
    assert transform.parse_json_safe("[1, 2]", sentinel) == [1, 2]


def test_parse_json_safe_default_is_fresh_list():
    first = transform.parse_json_safe(None)
    first.append("x")
    assert transform.parse_json_safe(None) == []


def test_parse_json_list_rejects_non_arrays():
    assert transform.parse_json_list('{"a": 1}') == []
    assert transform.parse_json_list("[{\"start\": 5}]") == [{"start": 5}]
