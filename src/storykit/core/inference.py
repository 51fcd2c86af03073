"""
Schema inference: FieldSpec -> ArgType.

This is the one place that decides control kind, default literal, required
flag and option lookup for a story argument. Both the artifact emitter and the
runtime context consume its output.

Control kind:
    1. Explicit ``control`` override: "color" -> color, "select" -> select,
       anything else -> text.
    2. Otherwise substring match on the type name (the ``from`` type when
       present): boolean tokens first, then numeric tokens in order, else text.

Default literal:
    1. Explicit ``default`` literal, verbatim.
    2. ``lorem`` word count -> quoted placeholder text.
    3. Zero value: select -> null, str -> '', bool -> false, numeric -> 0,
       anything else -> undefined.
"""

from __future__ import annotations

from storykit.core.extractor import extract_field_spec
from storykit.core.lorem import lorem
from storykit.core.models import ArgType, ComponentSource, ComponentSpec, ControlKind, FieldSpec
from storykit.core.typenames import strip_optional_name

BOOLEAN_TOKENS: tuple[str, ...] = ("bool",)
NUMERIC_TOKENS: tuple[str, ...] = ("int", "float", "complex", "Decimal")
TEXT_TOKENS: tuple[str, ...] = ("str",)

CONTROL_OVERRIDES: dict[str, ControlKind] = {
    "color": ControlKind.COLOR,
    "select": ControlKind.SELECT,
}

NULL_LITERAL = "null"
UNDEFINED_LITERAL = "undefined"


def _has_token(type_name: str, tokens: tuple[str, ...]) -> bool:
    return any(token in type_name for token in tokens)


def detect_control(type_name: str) -> ControlKind:
    """Auto-detect a control kind from a type name."""
    if _has_token(type_name, BOOLEAN_TOKENS):
        return ControlKind.BOOLEAN
    if _has_token(type_name, NUMERIC_TOKENS):
        return ControlKind.NUMBER
    return ControlKind.TEXT


def resolve_control(field: FieldSpec) -> ControlKind:
    """Resolve the control kind for a field."""
    if field.control is not None:
        return CONTROL_OVERRIDES.get(field.control, ControlKind.TEXT)
    return detect_control(field.from_type or field.type_name)


def quote_literal(text: str) -> str:
    """Quote ``text`` as a single-quoted string literal."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def zero_literal(control: ControlKind, type_name: str) -> str:
    """Type-appropriate zero value for a field without a default."""
    if control is ControlKind.SELECT:
        return NULL_LITERAL
    if _has_token(type_name, TEXT_TOKENS):
        return "''"
    if _has_token(type_name, BOOLEAN_TOKENS):
        return "false"
    if _has_token(type_name, NUMERIC_TOKENS):
        return "0"
    return UNDEFINED_LITERAL


def resolve_default(field: FieldSpec, control: ControlKind) -> str:
    """Resolve the default literal for a field."""
    if field.default is not None:
        return field.default
    if field.lorem is not None:
        return quote_literal(lorem(field.lorem))
    return zero_literal(control, field.from_type or field.type_name)


def infer_arg_type(field: FieldSpec) -> ArgType:
    """Infer the full argument schema for one field."""
    control = resolve_control(field)
    is_select = control is ControlKind.SELECT
    return ArgType(
        name=field.name,
        control=control,
        default_value=resolve_default(field, control),
        required=not field.nullable,
        options=None,
        options_type=strip_optional_name(field.type_name) if is_select else None,
        payload_optional=is_select or field.nullable,
    )


def infer_component(source: ComponentSource) -> ComponentSpec:
    """Run extraction and inference over every field of a declaration."""
    args = [infer_arg_type(extract_field_spec(field)) for field in source.fields]
    return ComponentSpec(name=source.name, args=args)
