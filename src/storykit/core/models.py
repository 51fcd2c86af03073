"""
Data models for story schemas.

A story is a demoable UI component with a declared set of typed, annotated
arguments. The models here describe those arguments at three stages:

- ``FieldSource``/``ComponentSource``: raw declarations (type tag plus the
  annotation clauses as written)
- ``FieldSpec``: annotation overrides extracted from the clauses
- ``ArgType``/``ComponentSpec``: the inferred schema shared by the artifact
  emitter and the runtime
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ControlKind(StrEnum):
    """Input widget category offered by the preview tool."""

    TEXT = "text"
    BOOLEAN = "boolean"
    NUMBER = "number"
    COLOR = "color"
    SELECT = "select"


class FieldSource(BaseModel):
    """
    One field of a story declaration, before any annotation is interpreted.

    Attributes:
        name: Field name
        type_name: Normalized declared type (e.g. 'int', 'Optional[bool]')
        nullable: Whether the declared type is the optional wrapper form
        clauses: Annotation clauses, either raw text or key/value mappings
    """

    name: str
    type_name: str
    nullable: bool = False
    clauses: list[str | dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ComponentSource(BaseModel):
    """Structured description of one story declaration."""

    name: str
    fields: list[FieldSource] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class FieldSpec(BaseModel):
    """
    A field with whichever annotation overrides parsed successfully.

    Attributes:
        name: Field name
        type_name: Normalized declared type
        nullable: Declared type is ``Optional[...]``
        control: Control override as written (``"color"``, ``"select"``, ...)
        default: Default literal as written (e.g. ``"'#007bff'"``)
        from_type: Source type used for deserialization and conversion
        lorem: Placeholder word count
    """

    name: str
    type_name: str
    nullable: bool = False
    control: str | None = None
    default: str | None = None
    from_type: str | None = None
    lorem: int | None = None

    model_config = ConfigDict(frozen=True)


class ArgType(BaseModel):
    """
    Inferred, render-agnostic description of one story argument.

    ``default_value`` is a literal in the preview tool's expression syntax
    (``'text'``, ``0``, ``false``, ``null``, ``undefined``). ``options`` stays
    None until the enum named by ``options_type`` has registered.
    """

    name: str
    control: ControlKind
    default_value: str | None = None
    required: bool = True
    options: list[str] | None = None
    options_type: str | None = None
    payload_optional: bool = False

    model_config = ConfigDict(frozen=True)


class ComponentSpec(BaseModel):
    """Full schema of one story."""

    name: str
    args: list[ArgType] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_arg(self, name: str) -> ArgType | None:
        """Get arg by name."""
        for arg in self.args:
            if arg.name == name:
                return arg
        return None


class EnumSpec(BaseModel):
    """Ordered variant names of an option-providing enum."""

    type_name: str
    variants: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
