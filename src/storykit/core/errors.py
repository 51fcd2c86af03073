"""
Error types for storykit annotation parsing, registration and rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class StorykitError(Exception):
    """Base exception for all storykit errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class StoryNotFoundError(StorykitError):
    """
    Raised when a render or lookup names a story that was never registered.

    The offending name is kept on ``name`` so callers can report it.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Story '{name}' not found")


class StoryArgsError(StorykitError):
    """
    Raised when a render payload does not match the story's argument model.

    Examples:
    - A boolean arg receives a string
    - A select arg receives a value that is not a variant name

    Scoped to a single render call; the registry is unaffected.
    """

    def __init__(self, name: str, errors: list[dict[str, Any]] | None = None):
        self.name = name
        self.errors = errors or []
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in self.errors
        )
        message = f"Invalid args for story '{name}'"
        if details:
            message += f": {details}"
        super().__init__(message)


class RegistrationError(StorykitError):
    """
    Raised when a type cannot be registered.

    Examples:
    - Registering a class that was not marked with ``@story_component``
    - Registering an enum that was not marked with ``@story_select``
    """

    pass


class ManifestError(StorykitError):
    """Raised when ``storykit.toml`` cannot be read or has invalid values."""

    pass


@dataclass
class ErrorContext:
    """
    Where an error originated.

    Attributes:
        component: Story (component) name
        field: Optional field name within the story
    """

    component: str
    field: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "Button.size"
        """
        if self.field:
            return f"{self.component}.{self.field}"
        return self.component
