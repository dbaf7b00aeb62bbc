"""Tests for {placeholder} template resolution."""

import pytest

from workflow.templating import resolve_template, resolve_value, stringify


@pytest.mark.unit
class TestResolveTemplate:

    def test_replaces_every_occurrence(self):
        assert resolve_template("{x}-{x}", {"x": 1}) == "1-1"

    def test_unknown_placeholder_left_verbatim(self):
        assert resolve_template("Hi {name}, {missing}", {"name": "Ana"}) == "Hi Ana, {missing}"

    def test_falsy_values_are_substituted(self):
        data = {"zero": 0, "empty": "", "no": False, "nothing": None}
        assert resolve_template("{zero}|{empty}|{no}|{nothing}", data) == "0||false|null"

    def test_structured_values_render_as_json(self):
        assert resolve_template("items={items}", {"items": [1, 2]}) == "items=[1, 2]"
        assert resolve_template("{obj}", {"obj": {"a": 1}}) == '{"a": 1}'

    def test_non_identifier_braces_untouched(self):
        template = '{"text": "{body}", "n": {not an id}}'
        assert resolve_template(template, {"body": "hello"}) == '{"text": "hello", "n": {not an id}}'

    def test_plain_text_passthrough(self):
        assert resolve_template("plain text", {"x": 1}) == "plain text"


@pytest.mark.unit
class TestResolveValue:

    def test_nested_structures(self):
        value = {"a": "{x}", "b": ["{y}", 3], "c": None}
        assert resolve_value(value, {"x": "1", "y": "2"}) == {"a": "1", "b": ["2", 3], "c": None}


@pytest.mark.unit
class TestStringify:

    @pytest.mark.parametrize("value,expected", [
        ("text", "text"),
        (True, "true"),
        (None, "null"),
        (1.5, "1.5"),
        ([1, "a"], '[1, "a"]'),
    ])
    def test_stringify(self, value, expected):
        assert stringify(value) == expected
