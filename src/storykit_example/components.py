"""
Example stories: Button, Card, Input and Alert.

``register_all_stories`` and ``init_enums`` are the startup entry points the
generated descriptors call into.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Annotated

from storykit import enums_registrar, stories_registrar, story, story_component, story_select
from storykit.core.declare import variant_name
from storykit.dom import Node, html


@dataclass
class Counter:
    """Observable click counter; built from a plain ``int`` payload value."""

    value: int = 0
    _listeners: list[Callable[[int], None]] = field(
        default_factory=list, repr=False, compare=False
    )

    def increment(self) -> int:
        self.value += 1
        for listener in self._listeners:
            listener(self.value)
        return self.value

    def subscribe(self, listener: Callable[[int], None]) -> None:
        self._listeners.append(listener)


@story_select
class ButtonSize(Enum):
    """Button size variants."""

    Small = auto()
    Medium = auto()
    Large = auto()

    def __str__(self) -> str:
        return variant_name(self)

    def to_css(self) -> str:
        return {
            ButtonSize.Small: "8px 16px",
            ButtonSize.Medium: "10px 20px",
            ButtonSize.Large: "12px 24px",
        }[self]


@story_select
class AlertType(Enum):
    """Alert severity levels."""

    Info = auto()
    Success = auto()
    Warning = auto()
    Error = auto()

    def __str__(self) -> str:
        return variant_name(self)

    def to_color(self) -> str:
        return {
            AlertType.Info: "#3498db",
            AlertType.Success: "#2ecc71",
            AlertType.Warning: "#f39c12",
            AlertType.Error: "#e74c3c",
        }[self]


@story_component
@dataclass
class Button:
    """A click-counting button."""

    count: Annotated[Counter, story(from_="int", default="0")]
    color: Annotated[str, story(control="color", default="'#007bff'")]
    size: Annotated[ButtonSize, story(control="select")]
    disabled: bool | None = None

    def to_story(self) -> Node:
        is_disabled = bool(self.disabled)
        return html(
            "button",
            text=f"Clicked {self.count.value} times",
            attrs={"disabled": is_disabled},
            styles={
                "background-color": self.color,
                "color": "white",
                "border": "none",
                "padding": self.size.to_css(),
                "border-radius": "4px",
                "cursor": "not-allowed" if is_disabled else "pointer",
                "font-size": "16px",
                "opacity": "0.5" if is_disabled else "1",
            },
        )


@story_component
@dataclass
class Card:
    """A titled card."""

    title: Annotated[str, story(lorem="3")]
    content: Annotated[str, story(lorem=True)]
    background: Annotated[str, story(control="color", default="'#fcfcfc'")]

    def to_story(self) -> Node:
        return html(
            "div",
            styles={
                "background-color": self.background,
                "border": "1px solid #ddd",
                "border-radius": "8px",
                "padding": "20px",
                "box-shadow": "0 2px 4px rgba(0,0,0,0.1)",
                "max-width": "400px",
            },
            children=[
                html(
                    "h2",
                    text=self.title,
                    styles={"margin-top": "0", "margin-bottom": "10px"},
                ),
                html("p", text=self.content, styles={"margin": "0", "color": "#666"}),
            ],
        )


@story_component
@dataclass
class Input:
    """A text input."""

    placeholder: Annotated[str, story('lorem = "2"')]
    value: Annotated[str, story('lorem = "4"')]

    def to_story(self) -> Node:
        return html(
            "input",
            attrs={"type": "text", "placeholder": self.placeholder, "value": self.value},
            styles={
                "padding": "10px",
                "border": "1px solid #ccc",
                "border-radius": "4px",
                "font-size": "14px",
                "width": "200px",
            },
        )


@story_component
@dataclass
class Alert:
    """An alert coloured by severity."""

    message: Annotated[str, story(lorem="5")]
    alert_type: Annotated[AlertType, story(control="select")]

    def to_story(self) -> Node:
        return html(
            "div",
            text=self.message,
            styles={
                "padding": "15px 20px",
                "border-radius": "4px",
                "background-color": self.alert_type.to_color(),
                "color": "white",
                "font-weight": "500",
                "margin": "10px 0",
            },
        )


register_all_stories = stories_registrar(Button, Card, Input, Alert)
init_enums = enums_registrar(AlertType, ButtonSize)
