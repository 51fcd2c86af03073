"""
Example stories for storykit.
"""

from storykit_example.components import (
    Alert,
    AlertType,
    Button,
    ButtonSize,
    Card,
    Counter,
    Input,
    init_enums,
    register_all_stories,
)

__all__ = [
    "Alert",
    "AlertType",
    "Button",
    "ButtonSize",
    "Card",
    "Counter",
    "Input",
    "init_enums",
    "register_all_stories",
]
