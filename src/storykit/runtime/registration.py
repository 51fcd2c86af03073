"""
Registration entry points.

An app lists its stories and enums once and gets back the two startup
callables::

    register_all_stories = stories_registrar(Button, Card, Input, Alert)
    init_enums = enums_registrar(AlertType, ButtonSize)

    ctx = StoryContext()
    init_enums(ctx)
    register_all_stories(ctx)

A failing entry is logged and skipped; it never aborts the pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from types import ModuleType

from storykit.core.declare import collect_enums, collect_stories
from storykit.core.errors import StorykitError
from storykit.runtime.context import StoryContext

logger = logging.getLogger(__name__)

Registrar = Callable[[StoryContext], None]


def stories_registrar(*stories: type) -> Registrar:
    """Build ``register_all_stories(ctx)`` for the given story classes."""

    def register_all_stories(ctx: StoryContext) -> None:
        for story_cls in stories:
            try:
                ctx.register_story(story_cls)
            except (StorykitError, TypeError, ValueError) as e:
                logger.error("Skipping story %s: %s", getattr(story_cls, "__name__", story_cls), e)

    return register_all_stories


def enums_registrar(*enums: type[Enum]) -> Registrar:
    """Build ``init_enums(ctx)`` for the given option-providing enums."""

    def init_enums(ctx: StoryContext) -> None:
        for enum_cls in enums:
            try:
                ctx.register_enum(enum_cls)
            except StorykitError as e:
                logger.error("Skipping enum %s: %s", getattr(enum_cls, "__name__", enum_cls), e)

    return init_enums


def create_context(*registrars: Registrar) -> StoryContext:
    """Create a context and run the registrars in order."""
    ctx = StoryContext()
    for registrar in registrars:
        registrar(ctx)
    return ctx


def context_from_module(module: ModuleType) -> StoryContext:
    """Build a context for a story module.

    Uses the module's ``init_enums`` / ``register_all_stories`` entry points
    when it defines them, otherwise registers every marked enum and story
    found at module level.
    """
    init_enums = getattr(module, "init_enums", None)
    register_all_stories = getattr(module, "register_all_stories", None)
    if not callable(init_enums):
        init_enums = enums_registrar(*collect_enums(module))
    if not callable(register_all_stories):
        register_all_stories = stories_registrar(*collect_stories(module))
    return create_context(init_enums, register_all_stories)
