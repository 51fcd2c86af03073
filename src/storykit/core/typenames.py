"""
Type descriptors for story fields.

Story fields are declared with ordinary Python annotations. Inference works on
a normalized *name* of the declared type (``"int"``, ``"Optional[bool]"``,
``"ButtonSize"``), so this module turns annotations into those names and
resolves ``from`` type names back into types at registration time.
"""

from __future__ import annotations

import builtins
import re
import types
import typing
from typing import Any, Union, get_args, get_origin

# Identifier, dotted path, optional generic arguments. Good enough to reject
# garbage in a ``from`` clause without pretending to be a full type parser.
_TYPE_EXPR_RE = re.compile(r"^[A-Za-z_][\w.]*(\[[\w.\[\], |]*\])?(\s*\|\s*[A-Za-z_][\w.]*)*$")


def normalize(text: str) -> str:
    """Strip all whitespace from a type name (``"Option < T >"`` -> ``"Option<T>"``)."""
    return "".join(text.split())


def is_valid_type_expression(text: str) -> bool:
    """Return True when ``text`` looks like a type expression."""
    return bool(text) and _TYPE_EXPR_RE.match(text.strip()) is not None


def strip_annotated(tp: Any) -> Any:
    """Return the underlying type of ``Annotated[T, ...]`` (or ``tp`` unchanged)."""
    if get_origin(tp) is typing.Annotated:
        return get_args(tp)[0]
    return tp


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def is_nullable(tp: Any) -> bool:
    """Return True for ``Optional[T]`` and ``T | None``."""
    tp = strip_annotated(tp)
    if isinstance(tp, str):
        text = normalize(tp)
        return text.startswith("Optional[") or text.endswith("|None") or text.startswith("None|")
    return _is_union(tp) and type(None) in get_args(tp)


def strip_optional_name(text: str) -> str:
    """``"Optional[ButtonSize]"`` -> ``"ButtonSize"``; other names are only normalized."""
    text = normalize(text)
    if text.startswith("Optional[") and text.endswith("]"):
        return text[len("Optional[") : -1]
    if text.endswith("|None"):
        return text[: -len("|None")]
    if text.startswith("None|"):
        return text[len("None|") :]
    return text


def unwrap_optional(tp: Any) -> Any:
    """Return ``T`` for ``Optional[T]``; other types are returned unchanged."""
    tp = strip_annotated(tp)
    if _is_union(tp):
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return tp


def type_name(tp: Any) -> str:
    """Normalized display name for a declared type.

    Examples:
        >>> type_name(int)
        'int'
        >>> type_name(bool | None)
        'Optional[bool]'
        >>> type_name(list[str])
        'list[str]'
    """
    tp = strip_annotated(tp)
    if isinstance(tp, str):
        return normalize(tp)
    if isinstance(tp, typing.ForwardRef):
        return normalize(tp.__forward_arg__)
    if tp is type(None) or tp is None:
        return "None"

    if _is_union(tp):
        args = get_args(tp)
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(members) != len(args):
            return f"Optional[{type_name(members[0])}]"
        inner = ",".join(type_name(arg) for arg in args)
        return f"Union[{inner}]"

    origin = get_origin(tp)
    if origin is not None:
        base = getattr(origin, "__name__", None) or normalize(repr(origin))
        args = get_args(tp)
        if not args:
            return base
        return f"{base}[{','.join(type_name(arg) for arg in args)}]"

    name = getattr(tp, "__name__", None)
    if name:
        return name
    return normalize(repr(tp))


def resolve_type(text: str, namespace: dict[str, Any] | None = None) -> Any | None:
    """Resolve a simple or dotted type name to a type.

    Builtins are tried first, then ``namespace`` (typically the globals of the
    module that declared the story). Returns None when the name is unknown.
    """
    text = text.strip()
    if not is_valid_type_expression(text) or "[" in text or "|" in text:
        return None

    head, *rest = text.split(".")
    obj: Any
    if namespace is not None and head in namespace:
        obj = namespace[head]
    elif hasattr(builtins, head):
        obj = getattr(builtins, head)
    else:
        return None

    for part in rest:
        obj = getattr(obj, part, None)
        if obj is None:
            return None
    return obj if isinstance(obj, type) else None
