"""
Runtime registries and render dispatch.
"""

from storykit.runtime.context import StoryContext
from storykit.runtime.dispatcher import StoryBinding, decode_literal
from storykit.runtime.registration import (
    context_from_module,
    create_context,
    enums_registrar,
    stories_registrar,
)

__all__ = [
    "StoryContext",
    "StoryBinding",
    "decode_literal",
    "context_from_module",
    "create_context",
    "enums_registrar",
    "stories_registrar",
]
