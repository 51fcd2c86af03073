"""
storykit - typed arg schemas and preview descriptors for UI demo components.

Stories are annotated Python classes. storykit infers an argument schema for
each one, writes a ``.stories.js`` descriptor for the component-preview tool,
and dispatches render calls with untyped payloads at runtime.
"""

from __future__ import annotations

from ._version import get_version
from .core.declare import story, story_component, story_select
from .core.errors import (
    ManifestError,
    RegistrationError,
    StoryArgsError,
    StorykitError,
    StoryNotFoundError,
)
from .core.lorem import lorem
from .core.models import ArgType, ComponentSpec, ControlKind, EnumSpec, FieldSpec
from .runtime import StoryContext, create_context, enums_registrar, stories_registrar

__version__ = get_version()

__all__ = [
    "__version__",
    "story",
    "story_component",
    "story_select",
    "lorem",
    "ArgType",
    "ComponentSpec",
    "ControlKind",
    "EnumSpec",
    "FieldSpec",
    "StoryContext",
    "create_context",
    "enums_registrar",
    "stories_registrar",
    "StorykitError",
    "StoryNotFoundError",
    "StoryArgsError",
    "RegistrationError",
    "ManifestError",
]
