"""
Render dispatch for a single story class.

A :class:`StoryBinding` pairs a story class with its inferred schema and a
pydantic model (``<Name>StoryArgs``) that turns an untyped payload into the
keyword arguments of the story constructor:

- unknown payload keys are ignored
- missing keys take the arg's default (decoded from its literal)
- present values must match the field type; nothing is coerced
- select values are variant names; an omitted select resolves to the enum's
  default variant
- fields with a ``from`` type are validated as that type, then converted to
  the declared type by calling it
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Optional, get_origin

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError, create_model

from storykit.core.declare import (
    collect_source,
    default_variant,
    module_namespace,
    parse_variant,
    story_fields,
    story_name,
)
from storykit.core.errors import StoryArgsError
from storykit.core.extractor import extract_field_spec
from storykit.core.inference import NULL_LITERAL, UNDEFINED_LITERAL, infer_arg_type
from storykit.core.models import ArgType, ComponentSpec, ControlKind
from storykit.core.typenames import resolve_type, unwrap_optional

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


class _Undefined:
    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


def decode_literal(text: str | None) -> Any:
    """Decode a default literal into a Python value.

    ``null`` -> None, ``undefined`` -> :data:`UNDEFINED`, ``true``/``false`` ->
    bool, numbers -> int/float, quoted strings -> str. Anything else is kept
    as the raw text.
    """
    if text is None:
        return UNDEFINED
    raw = text.strip()
    if raw == NULL_LITERAL:
        return None
    if raw == UNDEFINED_LITERAL:
        return UNDEFINED
    if raw in ("true", "false"):
        return raw == "true"
    if _INT_RE.match(raw):
        return int(raw)
    if _FLOAT_RE.match(raw):
        return float(raw)
    if len(raw) >= 2 and raw[0] in ("'", '"', "`") and raw[-1] == raw[0]:
        body = raw[1:-1]
        return re.sub(r"\\(.)", r"\1", body)
    return raw


def _variant_validator(enum_cls: type[Enum]) -> Any:
    """Accept variant names for an enum field."""

    def coerce(value: Any) -> Any:
        if isinstance(value, str):
            return parse_variant(enum_cls, value)
        return value

    return coerce


@dataclass(frozen=True)
class _FieldPlan:
    name: str
    arg: ArgType
    declared: Any
    payload_type: Any
    nullable: bool
    convert: bool
    enum_cls: type[Enum] | None


class StoryBinding:
    """A registered story: schema, argument model and render function."""

    def __init__(self, story_cls: type) -> None:
        self.story_cls = story_cls
        self.name = story_name(story_cls)

        source = collect_source(story_cls)
        namespace = module_namespace(story_cls)
        declared_types = {f.name: f.annotation for f in story_fields(story_cls)}

        plans: list[_FieldPlan] = []
        for field_source in source.fields:
            field_spec = extract_field_spec(field_source)
            arg = infer_arg_type(field_spec)
            declared = declared_types[field_source.name]
            base = unwrap_optional(declared)
            if isinstance(base, str):
                base = Any

            payload_type = base
            if field_spec.from_type is not None:
                resolved = resolve_type(field_spec.from_type, namespace)
                if resolved is None:
                    logger.warning(
                        "%s.%s: cannot resolve from type %r, using declared type",
                        self.name,
                        field_spec.name,
                        field_spec.from_type,
                    )
                else:
                    payload_type = resolved

            enum_cls = (
                payload_type
                if isinstance(payload_type, type) and issubclass(payload_type, Enum)
                else None
            )
            plans.append(
                _FieldPlan(
                    name=field_spec.name,
                    arg=arg,
                    declared=base,
                    payload_type=payload_type,
                    nullable=field_spec.nullable,
                    convert=(
                        payload_type is not base and isinstance(base, type) and base is not Any
                    ),
                    enum_cls=enum_cls,
                )
            )

        self._plans = plans
        self.spec = ComponentSpec(name=self.name, args=[plan.arg for plan in plans])
        self.args_model = self._build_args_model()

    @property
    def select_enums(self) -> list[type[Enum]]:
        """Enums backing this story's select args."""
        return [
            plan.enum_cls
            for plan in self._plans
            if plan.enum_cls is not None and plan.arg.control is ControlKind.SELECT
        ]

    def _build_args_model(self) -> type[BaseModel]:
        definitions: dict[str, Any] = {}
        for plan in self._plans:
            field_type = plan.payload_type
            if plan.enum_cls is not None:
                field_type = Annotated[
                    field_type, BeforeValidator(_variant_validator(plan.enum_cls))
                ]

            default = decode_literal(plan.arg.default_value)
            if default is not UNDEFINED:
                default = self._fit_default(plan, default)
            if plan.arg.payload_optional:
                field_type = Optional[field_type]  # noqa: UP007
                if default is UNDEFINED or default is ...:
                    default = None
            elif default is UNDEFINED:
                default = self._zero_value(plan)

            definitions[plan.name] = (field_type, default)

        return create_model(  # type: ignore[call-overload,no-any-return]
            f"{self.name}StoryArgs",
            __config__=ConfigDict(
                extra="ignore",
                strict=True,
                validate_default=True,
                arbitrary_types_allowed=True,
            ),
            **definitions,
        )

    def _fit_default(self, plan: _FieldPlan, default: Any) -> Any:
        """Make a decoded literal valid for the payload type.

        Numbers are converted (``0`` -> ``Decimal(0)``); any other mismatch,
        such as ``''`` for a ``list[str]`` field, falls back to the zero value.
        """
        target = get_origin(plan.payload_type) or plan.payload_type
        if (
            default is None
            or plan.enum_cls is not None
            or plan.payload_type is Any
            or not isinstance(target, type)
            or isinstance(default, target)
        ):
            return default
        if isinstance(default, (int, float)) and not isinstance(default, bool):
            try:
                return target(default)
            except (TypeError, ValueError, ArithmeticError):
                pass
        logger.debug(
            "%s.%s: default %r does not fit %s, using its zero value",
            self.name,
            plan.name,
            default,
            target.__name__,
        )
        return self._zero_value(plan)

    def _zero_value(self, plan: _FieldPlan) -> Any:
        """Default-construct the payload type, or make the field required."""
        target = get_origin(plan.payload_type) or plan.payload_type
        if isinstance(target, type) and plan.payload_type is not Any:
            try:
                return target()
            except Exception:  # noqa: BLE001 - any constructor failure means "no zero value"
                pass
        logger.debug("%s.%s has no default; payload must provide it", self.name, plan.name)
        return ...

    def build_args(self, payload: Any) -> dict[str, Any]:
        """Deserialize ``payload`` into story constructor keyword arguments.

        Raises:
            StoryArgsError: If the payload does not match the argument model.
        """
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise StoryArgsError(
                self.name,
                [{"loc": (), "msg": f"expected an object, got {type(payload).__name__}"}],
            )

        try:
            validated = self.args_model.model_validate(dict(payload))
        except ValidationError as e:
            raise StoryArgsError(self.name, e.errors(include_url=False)) from e

        kwargs: dict[str, Any] = {}
        for plan in self._plans:
            value = getattr(validated, plan.name)
            if value is None and plan.enum_cls is not None and not plan.nullable:
                value = default_variant(plan.enum_cls)
            if plan.convert and value is not None and not isinstance(value, plan.declared):
                try:
                    value = plan.declared(value)
                except (TypeError, ValueError) as e:
                    raise StoryArgsError(
                        self.name, [{"loc": (plan.name,), "msg": str(e)}]
                    ) from e
            kwargs[plan.name] = value
        return kwargs

    def render(self, payload: Any) -> Any:
        """Build the story from ``payload`` and return its rendered node."""
        story = self.story_cls(**self.build_args(payload))
        node = story.to_story()
        logger.debug("Rendered story %s", self.name)
        return node
