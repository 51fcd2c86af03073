"""Tests for type-name helpers."""

from __future__ import annotations

from typing import Annotated, Optional

from storykit.core.typenames import (
    is_nullable,
    is_valid_type_expression,
    normalize,
    resolve_type,
    strip_optional_name,
    type_name,
    unwrap_optional,
)


class Widget:
    pass


class TestTypeName:
    def test_simple(self) -> None:
        assert type_name(int) == "int"
        assert type_name(Widget) == "Widget"

    def test_optional_forms(self) -> None:
        assert type_name(bool | None) == "Optional[bool]"
        assert type_name(Optional[str]) == "Optional[str]"  # noqa: UP007

    def test_generic(self) -> None:
        assert type_name(list[str]) == "list[str]"
        assert type_name(dict[str, int]) == "dict[str,int]"

    def test_union(self) -> None:
        assert type_name(int | str) == "Union[int,str]"

    def test_annotated_is_stripped(self) -> None:
        assert type_name(Annotated[int, "meta"]) == "int"

    def test_string_annotation_is_normalized(self) -> None:
        assert type_name("Optional[ bool ]") == "Optional[bool]"


class TestNullable:
    def test_optional_types(self) -> None:
        assert is_nullable(Optional[int])  # noqa: UP007
        assert is_nullable(int | None)
        assert not is_nullable(int)
        assert not is_nullable(int | str)

    def test_string_forms(self) -> None:
        assert is_nullable("Optional[int]")
        assert is_nullable("int | None")
        assert not is_nullable("int")

    def test_strip_optional_name(self) -> None:
        assert strip_optional_name("Optional[ButtonSize]") == "ButtonSize"
        assert strip_optional_name("ButtonSize | None") == "ButtonSize"
        assert strip_optional_name("ButtonSize") == "ButtonSize"

    def test_unwrap_optional(self) -> None:
        assert unwrap_optional(bool | None) is bool
        assert unwrap_optional(int) is int


class TestTypeExpressions:
    def test_normalize(self) -> None:
        assert normalize("Option < T >") == "Option<T>"

    def test_valid_expressions(self) -> None:
        assert is_valid_type_expression("int")
        assert is_valid_type_expression("Optional[int]")
        assert is_valid_type_expression("decimal.Decimal")

    def test_invalid_expressions(self) -> None:
        assert not is_valid_type_expression("")
        assert not is_valid_type_expression("1abc")
        assert not is_valid_type_expression("not a type!")

    def test_resolve_builtin(self) -> None:
        assert resolve_type("int") is int

    def test_resolve_from_namespace(self) -> None:
        assert resolve_type("Widget", {"Widget": Widget}) is Widget

    def test_resolve_unknown(self) -> None:
        assert resolve_type("Nope") is None
        assert resolve_type("list[int]") is None
        assert resolve_type("print") is None
