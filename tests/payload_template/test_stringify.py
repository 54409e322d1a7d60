"""
Tests for stringify() and variable markers.
"""

import pytest

from platform_shared.payload_template import VariableMarker, get_variable, parse, stringify


class TestVariableMarker:

    def test_markers_compare_by_name(self):
        assert get_variable("userId") == get_variable("userId")
        assert get_variable("userId") != get_variable("eventData")

    def test_marker_token(self):
        marker = get_variable("resource.defaultDatasetId")

        assert isinstance(marker, VariableMarker)
        assert marker.token == "{{resource.defaultDatasetId}}"
        assert repr(marker) == "VariableMarker('resource.defaultDatasetId')"

    @pytest.mark.parametrize("name", ["", "user id", "1st", "a..b", "{{a}}"])
    def test_invalid_name(self, name):
        with pytest.raises(ValueError):
            get_variable(name)


class TestStringify:
    """Serialization of structures containing markers."""

    def test_compact_with_markers(self):
        template = {
            "hello": "world",
            "num": get_variable("num"),
            "data": {
                "status": 304,
                "body": get_variable("body"),
            },
        }

        result = stringify(template, None, 0)

        assert result == '{"hello":"world","num":{{num}},"data":{"status":304,"body":{{body}}}}'

    @pytest.mark.parametrize("indent", [None, 0, ""])
    def test_compact_variants(self, indent):
        assert stringify({"a": [1, None]}, indent=indent) == '{"a":[1,null]}'

    def test_indent_with_spaces(self):
        result = stringify({"a": get_variable("x"), "b": [1]}, indent=2)
        assert result == '{\n  "a": {{x}},\n  "b": [\n    1\n  ]\n}'

    def test_indent_with_string(self):
        assert stringify({"a": 1}, indent="\t") == '{\n\t"a": 1\n}'

    def test_indent_is_capped(self):
        assert stringify([1], indent=20) == "[\n" + " " * 10 + "1\n]"
        assert stringify([1], indent="-" * 12) == "[\n" + "-" * 10 + "1\n]"

    def test_bool_indent_rejected(self):
        with pytest.raises(TypeError):
            stringify([1], indent=True)

    def test_marker_at_root(self):
        assert stringify(get_variable("userId")) == "{{userId}}"

    def test_markers_in_array(self):
        assert stringify([get_variable("a"), get_variable("a")]) == "[{{a}},{{a}}]"

    def test_placeholder_text_in_string_stays_string(self):
        assert stringify({"s": "{{userId}}"}) == '{"s":"{{userId}}"}'

    def test_non_finite_floats_become_null(self):
        assert stringify([float("nan"), float("inf"), -float("inf"), 1.5]) == "[null,null,null,1.5]"

    def test_non_ascii_is_kept(self):
        assert stringify({"name": "Zoë"}) == '{"name":"Zoë"}'

    def test_tuple_is_array(self):
        assert stringify((1, "a")) == '[1,"a"]'

    def test_unsupported_value(self):
        with pytest.raises(TypeError):
            stringify({"a": object()})


class TestReplacer:

    def test_callable_replacer(self):
        seen = []

        def replacer(key, value):
            seen.append(key)
            if isinstance(value, int):
                return value * 2
            return value

        assert stringify({"a": 1, "b": [3]}, replacer) == '{"a":2,"b":[6]}'
        assert seen == ["", "a", "b", "0"]

    def test_callable_replacer_may_return_marker(self):
        def replacer(key, value):
            return get_variable("userId") if key == "user" else value

        assert stringify({"user": None, "x": 1}, replacer) == '{"user":{{userId}},"x":1}'

    def test_key_list_sets_order(self):
        assert stringify({"a": 1, "b": 2, "c": 3}, ["c", "a", "c", "missing"]) == '{"c":3,"a":1}'

    def test_key_list_replacer(self):
        value = {"a": 1, "b": {"a": 2, "c": 3}, "c": 4}
        assert stringify(value, ["a", "b"]) == '{"a":1,"b":{"a":2}}'


class TestRoundTrip:
    """Stringified templates parse back."""

    def test_parse_stringified_template(self):
        template = stringify(
            {"user": get_variable("userId"), "n": [1, 2.5, None, True], "s": "{{kept}}"},
            indent=4,
        )

        result = parse(template, ["userId"], {"userId": "u1"})

        assert result == {"user": "u1", "n": [1, 2.5, None, True], "s": "{{kept}}"}

    def test_parse_without_context(self):
        assert parse(stringify({"data": get_variable("eventData.body")})) == {"data": None}
