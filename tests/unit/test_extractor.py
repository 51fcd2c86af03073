"""Tests for the story annotation extractor."""

from __future__ import annotations

from typing import Any

import pytest

from storykit.core.extractor import NO_VALUE, extract_field_spec, iter_pairs, parse_clause
from storykit.core.models import FieldSource


def _extract(*clauses: str | dict[str, Any], type_name: str = "str"):
    return extract_field_spec(FieldSource(name="field", type_name=type_name, clauses=list(clauses)))


class TestParseClause:
    def test_key_value_pairs(self) -> None:
        pairs = parse_clause('control = "color", default = "\'#007bff\'"')
        assert pairs == [("control", "color"), ("default", "'#007bff'")]

    def test_bare_key(self) -> None:
        assert parse_clause("lorem") == [("lorem", NO_VALUE)]

    @pytest.mark.parametrize(
        "text",
        ['story(lorem = "3")', '#[story(lorem = "3")]', '  story( lorem = "3" )  '],
    )
    def test_wrapper_is_stripped(self, text: str) -> None:
        assert parse_clause(text) == [("lorem", "3")]

    def test_comma_inside_string(self) -> None:
        assert parse_clause('default = "\'a, b\'"') == [("default", "'a, b'")]

    def test_unquoted_value_is_none(self) -> None:
        assert parse_clause("control = color") == [("control", None)]

    def test_mapping_clauses(self) -> None:
        pairs = list(iter_pairs([{"from_": "int"}, {"lorem": True}, {"lorem": 5}]))
        assert pairs == [("from", "int"), ("lorem", NO_VALUE), ("lorem", "5")]


class TestExtractFieldSpec:
    def test_no_annotation(self) -> None:
        spec = _extract()
        assert spec.control is None
        assert spec.default is None
        assert spec.from_type is None
        assert spec.lorem is None

    def test_all_keys(self) -> None:
        spec = _extract('control = "select", default = "null", from = "int", lorem = "3"')
        assert spec.control == "select"
        assert spec.default == "null"
        assert spec.from_type == "int"
        assert spec.lorem == 3

    def test_bare_lorem_uses_default_length(self) -> None:
        assert _extract("lorem").lorem == 8
        assert _extract({"lorem": True}).lorem == 8

    def test_unknown_keys_ignored(self) -> None:
        spec = _extract('foo = "bar", control = "color", wat')
        assert spec.control == "color"

    def test_later_value_wins(self) -> None:
        assert _extract('control = "color", control = "select"').control == "select"
        assert _extract('control = "color"', {"control": "text"}).control == "text"

    def test_malformed_values_are_absent(self) -> None:
        assert _extract('lorem = "abc"').lorem is None
        assert _extract("control = color").control is None
        assert _extract('from = "not a type!"').from_type is None
        assert _extract('default = "unterminated').default is None

    def test_blank_default_is_absent(self) -> None:
        assert _extract('default = ""').default is None
        assert _extract('default = "0", default = "  "').default == "0"

    def test_malformed_repeat_keeps_earlier_value(self) -> None:
        spec = _extract('lorem = "4", lorem = "many"')
        assert spec.lorem == 4

    def test_from_type_is_normalized(self) -> None:
        assert _extract('from = "Optional[ int ]"').from_type == "Optional[int]"

    def test_carries_declared_type(self) -> None:
        spec = extract_field_spec(
            FieldSource(name="flag", type_name="Optional[bool]", nullable=True)
        )
        assert spec.name == "flag"
        assert spec.type_name == "Optional[bool]"
        assert spec.nullable is True
