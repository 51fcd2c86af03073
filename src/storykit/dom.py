"""
Render results for stories.

A story's ``to_story()`` returns a :class:`Node`. storykit treats nodes as
opaque; the DOM bridge that mounts them lives outside this package.
``to_html()`` exists for previews from the CLI and for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from markupsafe import escape

_VOID_TAGS = frozenset({"input", "img", "br", "hr", "meta", "link"})


@dataclass
class Node:
    """Element node with attributes, inline styles, text and children."""

    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    children: list[Node] = field(default_factory=list)

    def style(self, name: str, value: str) -> Node:
        self.styles[name] = value
        return self

    def attr(self, name: str, value: Any) -> Node:
        self.attrs[name] = value
        return self

    def to_html(self) -> str:
        """Serialize to an HTML string. Boolean attrs render only when True."""
        parts = [self.tag]
        for name, value in self.attrs.items():
            if value is False or value is None:
                continue
            if value is True:
                parts.append(str(name))
            else:
                parts.append(f'{name}="{escape(value)}"')
        if self.styles:
            css = "; ".join(f"{k}: {v}" for k, v in self.styles.items())
            parts.append(f'style="{escape(css)}"')
        open_tag = "<" + " ".join(parts) + ">"
        if self.tag in _VOID_TAGS:
            return open_tag

        inner = str(escape(self.text)) if self.text is not None else ""
        inner += "".join(child.to_html() for child in self.children)
        return f"{open_tag}{inner}</{self.tag}>"


def html(
    tag: str,
    *,
    text: str | None = None,
    attrs: dict[str, Any] | None = None,
    styles: dict[str, str] | None = None,
    children: list[Node] | None = None,
) -> Node:
    """Shorthand constructor for :class:`Node`."""
    return Node(
        tag=tag,
        attrs=dict(attrs or {}),
        styles=dict(styles or {}),
        text=text,
        children=list(children or []),
    )


def text_component(content: str) -> Node:
    """A plain ``div`` holding ``content``."""
    return html("div", text=content)


def styled_component(content: str, color: str) -> Node:
    """A bordered ``div`` with coloured text."""
    return html(
        "div",
        text=content,
        styles={
            "color": color,
            "padding": "10px",
            "border": "1px solid #ccc",
            "border-radius": "4px",
        },
    )
