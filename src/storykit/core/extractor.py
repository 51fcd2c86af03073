"""
Attribute extractor for ``story(...)`` field annotations.

Reads the recognized annotation vocabulary off a field declaration::

    control = "color"        control override ("color", "select", anything else -> text)
    default = "'#007bff'"    default literal in the preview tool's syntax
    from = "int"             source type used for deserialization
    lorem                    placeholder text, 8 words
    lorem = "3"              placeholder text, 3 words

Clauses arrive either as raw text (``'control = "color", lorem'``, optionally
wrapped in ``story(...)``) or as mappings built by :func:`storykit.story`.

Parsing is best-effort: unknown keys are ignored, a later occurrence of a key
replaces an earlier one, and a recognized key whose value cannot be parsed is
treated as absent. Nothing in here raises for bad input.
"""

from __future__ import annotations

import ast
import logging
import re
from collections.abc import Iterable, Iterator
from typing import Any

from storykit.core.lorem import DEFAULT_LOREM_WORDS
from storykit.core.models import FieldSource, FieldSpec
from storykit.core.typenames import is_valid_type_expression, normalize

logger = logging.getLogger(__name__)

RECOGNIZED_KEYS = frozenset({"control", "default", "from", "lorem"})

# Marks a key written without ``= value`` (e.g. bare ``lorem``)
NO_VALUE = object()

_WRAPPER_RE = re.compile(r"^\s*(?:#\[)?\s*story\s*\((?P<body>.*)\)\s*\]?\s*$", re.DOTALL)
_KEY_RE = re.compile(r"^[A-Za-z_]\w*$")


def _split_items(body: str) -> Iterator[str]:
    """Split clause text on top-level commas, respecting quoted strings."""
    current: list[str] = []
    quote: str | None = None
    escaped = False
    for ch in body:
        if quote:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
            current.append(ch)
        elif ch == ",":
            yield "".join(current)
            current = []
        else:
            current.append(ch)
    yield "".join(current)


def _parse_string_literal(raw: str) -> str | None:
    """Return the value of a quoted string literal, or None if ``raw`` is not one."""
    raw = raw.strip()
    if len(raw) < 2 or raw[0] not in ("'", '"') or raw[-1] != raw[0]:
        return None
    try:
        value = ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return None
    return value if isinstance(value, str) else None


def parse_clause(text: str) -> list[tuple[str, Any]]:
    """Parse one raw clause into ``(key, value)`` pairs in source order.

    Values are the unquoted string, :data:`NO_VALUE` for a bare key, or None
    when a value was present but is not a string literal.
    """
    match = _WRAPPER_RE.match(text)
    body = match.group("body") if match else text

    pairs: list[tuple[str, Any]] = []
    for item in _split_items(body):
        item = item.strip()
        if not item:
            continue
        key, sep, raw_value = item.partition("=")
        key = key.strip()
        if not _KEY_RE.match(key):
            logger.debug("Skipping unparseable story clause item %r", item)
            continue
        if not sep:
            pairs.append((key, NO_VALUE))
        else:
            pairs.append((key, _parse_string_literal(raw_value)))
    return pairs


def _mapping_pairs(clause: dict[str, Any]) -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = []
    for key, value in clause.items():
        if key == "from_":
            key = "from"
        if key == "lorem" and value is True:
            value = NO_VALUE
        elif key == "lorem" and isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        pairs.append((key, value))
    return pairs


def iter_pairs(clauses: Iterable[str | dict[str, Any]]) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, value)`` pairs from every clause, in order."""
    for clause in clauses:
        if isinstance(clause, str):
            yield from parse_clause(clause)
        elif isinstance(clause, dict):
            yield from _mapping_pairs(clause)
        else:
            logger.debug("Ignoring story clause of type %s", type(clause).__name__)


def _parse_lorem(value: Any) -> int | None:
    if value is NO_VALUE:
        return DEFAULT_LOREM_WORDS
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def extract_field_spec(source: FieldSource) -> FieldSpec:
    """Build a :class:`FieldSpec` from a field's annotation clauses.

    Args:
        source: Field declaration with its raw clauses.

    Returns:
        FieldSpec carrying the overrides that parsed successfully.
    """
    overrides: dict[str, Any] = {}

    for key, value in iter_pairs(source.clauses):
        if key not in RECOGNIZED_KEYS:
            continue

        parsed: Any = None
        if key == "lorem":
            parsed = _parse_lorem(value)
        elif isinstance(value, str):
            if key == "from":
                parsed = normalize(value) if is_valid_type_expression(value) else None
            elif value.strip():
                # A blank literal is not an expression; treat it as absent
                parsed = value

        if parsed is None:
            logger.debug(
                "Ignoring malformed story attribute %s=%r on field %s",
                key,
                value if value is not NO_VALUE else "",
                source.name,
            )
            continue

        overrides["from_type" if key == "from" else key] = parsed

    return FieldSpec(
        name=source.name,
        type_name=source.type_name,
        nullable=source.nullable,
        **overrides,
    )
