"""
Declaration surface for stories and option-providing enums.

Stories are ordinary classes whose fields carry ``story(...)`` annotations::

    @story_select
    class ButtonSize(Enum):
        SMALL = auto()
        MEDIUM = auto()

    @story_component
    @dataclass
    class Button:
        count: Annotated[Counter, story(from_="int", default="0")]
        color: Annotated[str, story(control="color", default="'#007bff'")]
        size: Annotated[ButtonSize, story(control="select")]
        disabled: bool | None = None

        def to_story(self) -> Node: ...

The decorators only mark the class. Nothing is registered until a
:class:`~storykit.runtime.context.StoryContext` is handed the class.
"""

from __future__ import annotations

import logging
import sys
import typing
from dataclasses import dataclass, field
from enum import Enum
from types import ModuleType
from typing import Any, NamedTuple, TypeVar, get_args, get_origin

from storykit.core.models import ComponentSource, EnumSpec, FieldSource
from storykit.core.typenames import is_nullable, strip_annotated, type_name

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

STORY_MARKER = "__story__"
SELECT_MARKER = "__story_select__"


@dataclass(frozen=True)
class StoryAnnotation:
    """Annotation clause attached to a field through ``Annotated``."""

    clause: str | dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StoryMarker:
    name: str


@dataclass(frozen=True)
class SelectMarker:
    type_name: str
    default: str | None = None


class StoryField(NamedTuple):
    name: str
    annotation: Any
    clauses: list[str | dict[str, Any]]


def story(
    clause: str | None = None,
    *,
    control: str | None = None,
    default: str | None = None,
    from_: str | None = None,
    lorem: int | str | bool | None = None,
) -> StoryAnnotation:
    """Build a field annotation.

    Either pass raw clause text (``story('control = "color"')``) or keyword
    arguments. ``lorem=True`` means "placeholder text, default length".
    """
    if clause is not None:
        return StoryAnnotation(clause)
    values: dict[str, Any] = {}
    if control is not None:
        values["control"] = control
    if default is not None:
        values["default"] = default
    if from_ is not None:
        values["from"] = from_
    if lorem is not None and lorem is not False:
        values["lorem"] = lorem
    return StoryAnnotation(values)


def story_component(cls: T | None = None, *, name: str | None = None) -> Any:
    """Mark a class as a story. Usable with or without arguments."""

    def wrap(target: T) -> T:
        if not callable(getattr(target, "to_story", None)):
            raise TypeError(f"Story class {target.__name__} must define to_story()")
        setattr(target, STORY_MARKER, StoryMarker(name or target.__name__))
        return target

    if cls is not None:
        return wrap(cls)
    return wrap


def story_select(cls: T | None = None, *, default: str | None = None) -> Any:
    """Mark an ``Enum`` as option-providing for select controls.

    Args:
        default: Member name used when a payload omits the field. Defaults to
            the first member.
    """

    def wrap(target: T) -> T:
        if not (isinstance(target, type) and issubclass(target, Enum)):
            raise TypeError(f"story_select can only mark Enum classes, got {target!r}")
        if default is not None and default not in target.__members__:
            raise ValueError(f"Invalid {target.__name__} variant: {default}")
        setattr(target, SELECT_MARKER, SelectMarker(target.__name__, default))
        return target

    if cls is not None:
        return wrap(cls)
    return wrap


def is_story(obj: Any) -> bool:
    return isinstance(obj, type) and isinstance(obj.__dict__.get(STORY_MARKER), StoryMarker)


def is_story_select(obj: Any) -> bool:
    return isinstance(obj, type) and isinstance(obj.__dict__.get(SELECT_MARKER), SelectMarker)


def story_name(cls: type) -> str:
    marker = cls.__dict__.get(STORY_MARKER)
    return marker.name if isinstance(marker, StoryMarker) else cls.__name__


# =============================================================================
# Enum helpers
# =============================================================================


def enum_type_name(enum_cls: type[Enum]) -> str:
    marker = enum_cls.__dict__.get(SELECT_MARKER)
    return marker.type_name if isinstance(marker, SelectMarker) else enum_cls.__name__


def variant_name(member: Enum) -> str:
    return member.name


def enum_options(enum_cls: type[Enum]) -> list[str]:
    """Variant names in declaration order (aliases excluded)."""
    return [variant_name(member) for member in enum_cls]


def enum_spec(enum_cls: type[Enum]) -> EnumSpec:
    return EnumSpec(type_name=enum_type_name(enum_cls), variants=enum_options(enum_cls))


def parse_variant(enum_cls: type[Enum], value: str) -> Enum:
    """Look up a member by variant name."""
    try:
        return enum_cls[value]
    except KeyError:
        raise ValueError(f"Invalid {enum_type_name(enum_cls)} variant: {value}") from None


def default_variant(enum_cls: type[Enum]) -> Enum:
    """Member used when a select arg is missing from a payload."""
    marker = enum_cls.__dict__.get(SELECT_MARKER)
    if isinstance(marker, SelectMarker) and marker.default is not None:
        return enum_cls[marker.default]
    return next(iter(enum_cls))


# =============================================================================
# Introspection
# =============================================================================


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        # Unresolvable forward references: fall back to the raw annotations,
        # which keeps string names usable for inference.
        logger.debug("Falling back to raw annotations for %s: %s", cls.__name__, e)
        hints: dict[str, Any] = {}
        for base in reversed(cls.__mro__):
            hints.update(base.__dict__.get("__annotations__", {}))
        return hints


def story_fields(cls: type) -> list[StoryField]:
    """Declared fields of a story class, in declaration order."""
    fields: list[StoryField] = []
    for name, annotation in _type_hints(cls).items():
        if get_origin(annotation) is typing.ClassVar or name.startswith("_"):
            continue
        clauses: list[str | dict[str, Any]] = []
        if get_origin(annotation) is typing.Annotated:
            clauses = [
                meta.clause for meta in get_args(annotation)[1:] if isinstance(meta, StoryAnnotation)
            ]
        fields.append(StoryField(name, strip_annotated(annotation), clauses))
    return fields


def collect_source(cls: type) -> ComponentSource:
    """Describe a story class as a :class:`ComponentSource`."""
    return ComponentSource(
        name=story_name(cls),
        fields=[
            FieldSource(
                name=f.name,
                type_name=type_name(f.annotation),
                nullable=is_nullable(f.annotation),
                clauses=f.clauses,
            )
            for f in story_fields(cls)
        ],
    )


def module_namespace(cls: type) -> dict[str, Any]:
    """Globals of the module that declared ``cls`` (for ``from`` resolution)."""
    module = sys.modules.get(cls.__module__)
    return dict(vars(module)) if module is not None else {}


def collect_stories(module: ModuleType) -> list[type]:
    """Story classes defined or imported at module level, in attribute order."""
    return [obj for obj in vars(module).values() if is_story(obj)]


def collect_enums(module: ModuleType) -> list[type[Enum]]:
    """Option-providing enums defined or imported at module level."""
    return [obj for obj in vars(module).values() if is_story_select(obj)]
