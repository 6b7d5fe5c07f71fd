"""Render arbitrary untyped values for embedding in diagnostics.

Rendering runs on the failure path of every primitive decoder, so it must
never raise: the walk uses an explicit stack instead of recursion, and any
value that cannot be printed is replaced by a short marker.
"""

from __future__ import annotations

from collections.abc import Mapping
import json
import math
from typing import Any

from jsonous.config import current_settings


class _Literal:
    """Pre-rendered output text, kept apart from string values on the stack."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text


_OPEN_OBJECT = _Literal("{")
_CLOSE_OBJECT = _Literal("}")
_OPEN_ARRAY = _Literal("[")
_CLOSE_ARRAY = _Literal("]")
_COMMA = _Literal(",")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _render_int(v: int) -> str:
    try:
        return str(v)
    except ValueError:
        # Past sys.get_int_max_str_digits(); describe it instead
        digits = int(v.bit_length() * math.log10(2)) + 1
        return _quote(f"<int with about {digits} digits>")


def _render_other(v: Any) -> str:
    try:
        return _quote(repr(v))
    except (ValueError, TypeError, RecursionError):
        return _quote(f"<unprintable {type(v).__name__}>")


def _key_text(k: Any) -> str:
    if isinstance(k, str):
        return k
    try:
        return str(k)
    except (ValueError, TypeError, RecursionError):
        return f"<unprintable {type(k).__name__}>"


def _render_scalar(v: Any) -> str:
    if v is None:
        return "null"
    if v is True:
        return "true"
    if v is False:
        return "false"
    if isinstance(v, str):
        return _quote(v)
    if isinstance(v, int):
        return _render_int(v)
    if isinstance(v, float):
        return repr(v) if math.isfinite(v) else "null"
    return _render_other(v)


def stringify(value: Any) -> str:
    """Return compact JSON text for ``value``.

    Any container already visited during this call is replaced by the
    configured placeholder, so self-referencing structures terminate. Values
    JSON cannot express are rendered as their quoted ``repr``.
    """
    settings = current_settings()
    limit = settings.max_value_length
    placeholder = _quote(settings.cycle_placeholder)

    out: list[str] = []
    size = 0
    seen: set[int] = set()
    stack: list[Any] = [value]
    while stack:
        if limit is not None and size > limit:
            break
        item = stack.pop()
        if isinstance(item, _Literal):
            text = item.text
        elif isinstance(item, Mapping | list | tuple):
            if id(item) in seen:
                text = placeholder
            else:
                seen.add(id(item))
                stack.extend(reversed(_expand(item)))
                continue
        else:
            text = _render_scalar(item)
        out.append(text)
        size += len(text)

    rendered = "".join(out)
    if limit is not None and len(rendered) > limit:
        return rendered[:limit] + "..."
    return rendered


def _expand(container: Mapping[Any, Any] | list[Any] | tuple[Any, ...]) -> list[Any]:
    """Lay out one container level as literals and child values, in output order."""
    if isinstance(container, Mapping):
        parts: list[Any] = [_OPEN_OBJECT]
        for idx, (k, v) in enumerate(container.items()):
            if idx:
                parts.append(_COMMA)
            parts.append(_Literal(_quote(_key_text(k)) + ":"))
            parts.append(v)
        parts.append(_CLOSE_OBJECT)
        return parts
    parts = [_OPEN_ARRAY]
    for idx, v in enumerate(container):
        if idx:
            parts.append(_COMMA)
        parts.append(v)
    parts.append(_CLOSE_ARRAY)
    return parts
