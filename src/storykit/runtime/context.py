"""
Runtime context: component registry and enum option registry.

A :class:`StoryContext` is created once at startup, populated by the
registration entry points, and passed to every query and render call. There
is no module-level registry; tests simply create a fresh context.

Registration policy:

- Registering a name that is already present replaces the earlier entry and
  logs a warning.
- Registering a story also registers the enums behind its select args, so the
  relative order of story and enum registration does not matter.
- ``get_enum_options`` for a type that never registered returns None.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from storykit.core.declare import enum_options, enum_type_name, is_story, is_story_select
from storykit.core.errors import ErrorContext, RegistrationError, StoryNotFoundError
from storykit.core.models import ComponentSpec, ControlKind, EnumSpec
from storykit.runtime.dispatcher import StoryBinding

logger = logging.getLogger(__name__)


class StoryContext:
    """Story and enum registries for one process (or one test)."""

    def __init__(self) -> None:
        self._stories: dict[str, StoryBinding] = {}
        self._enums: dict[str, list[str]] = {}

    # =========================================================================
    # Registration
    # =========================================================================

    def register_story(self, story_cls: type) -> StoryBinding:
        """Register a ``@story_component`` class.

        Raises:
            RegistrationError: If ``story_cls`` is not a marked story class.
        """
        if not is_story(story_cls):
            name = getattr(story_cls, "__name__", repr(story_cls))
            raise RegistrationError(
                "Not a story class (missing @story_component)", ErrorContext(name)
            )

        binding = StoryBinding(story_cls)
        if binding.name in self._stories:
            logger.warning("Story %s registered twice; replacing earlier entry", binding.name)
        self._stories[binding.name] = binding

        for enum_cls in binding.select_enums:
            if enum_type_name(enum_cls) not in self._enums:
                self.register_enum(enum_cls)

        logger.debug("Registered story %s (%d args)", binding.name, len(binding.spec.args))
        return binding

    def register_enum(self, enum_cls: type[Enum]) -> EnumSpec:
        """Register the variants of an option-providing enum.

        Raises:
            RegistrationError: If ``enum_cls`` is not an ``Enum``.
        """
        if not (isinstance(enum_cls, type) and issubclass(enum_cls, Enum)):
            raise RegistrationError(f"Not an Enum: {enum_cls!r}")
        if not is_story_select(enum_cls):
            logger.debug("Enum %s is not marked @story_select", enum_cls.__name__)
        spec = EnumSpec(type_name=enum_type_name(enum_cls), variants=enum_options(enum_cls))
        self.register_enum_options(spec.type_name, spec.variants)
        return spec

    def register_enum_options(self, type_name: str, options: Sequence[str]) -> None:
        """Register variant names for ``type_name`` directly."""
        if type_name in self._enums:
            logger.warning("Enum %s registered twice; replacing earlier options", type_name)
        self._enums[type_name] = list(options)
        logger.debug("Registered enum %s: %s", type_name, self._enums[type_name])

    # =========================================================================
    # Queries
    # =========================================================================

    def get_enum_options(self, type_name: str) -> list[str] | None:
        """Ordered variant names, or None if ``type_name`` has not registered."""
        options = self._enums.get(type_name)
        if options is None:
            logger.debug("No options registered for %s", type_name)
            return None
        return list(options)

    def story_names(self) -> list[str]:
        return list(self._stories)

    def get_story(self, name: str) -> StoryBinding:
        """Look up a registered story.

        Raises:
            StoryNotFoundError: If no story named ``name`` is registered.
        """
        binding = self._stories.get(name)
        if binding is None:
            raise StoryNotFoundError(name)
        return binding

    def story_spec(self, name: str) -> ComponentSpec:
        """Schema of one story with select options resolved now."""
        spec = self.get_story(name).spec
        args = [
            arg.model_copy(update={"options": self.get_enum_options(arg.options_type)})
            if arg.control is ControlKind.SELECT and arg.options_type
            else arg
            for arg in spec.args
        ]
        return spec.model_copy(update={"args": args})

    def list_stories(self) -> list[ComponentSpec]:
        """All registered stories with their schemas, in registration order."""
        return [self.story_spec(name) for name in self._stories]

    def export_stories(self) -> list[dict[str, Any]]:
        """Stories in the preview tool's JSON shape (``name``/``argTypes``/``args``)."""
        exported: list[dict[str, Any]] = []
        for spec in self.list_stories():
            arg_types: dict[str, Any] = {}
            default_args: dict[str, Any] = {}
            for arg in spec.args:
                entry: dict[str, Any] = {
                    "name": arg.name,
                    "control": arg.control.value,
                    "table": {"category": "required" if arg.required else "optional"},
                }
                if arg.options is not None:
                    entry["options"] = list(arg.options)
                arg_types[arg.name] = entry
                if arg.default_value is not None:
                    default_args[arg.name] = arg.default_value
            exported.append({"name": spec.name, "argTypes": arg_types, "args": default_args})
        return exported

    # CSF export is the same payload
    export_stories_csf = export_stories

    # =========================================================================
    # Dispatch
    # =========================================================================

    def build_args(self, name: str, payload: Any) -> dict[str, Any]:
        """Deserialize ``payload`` for story ``name`` without rendering."""
        return self.get_story(name).build_args(payload)

    def render_story(self, name: str, payload: Any = None) -> Any:
        """Render story ``name`` with ``payload``.

        Raises:
            StoryNotFoundError: Unknown story name.
            StoryArgsError: Payload does not match the story's args.
        """
        return self.get_story(name).render(payload)
