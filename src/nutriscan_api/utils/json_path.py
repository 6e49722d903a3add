"""Tolerant lookups into decoded JSON trees."""

from typing import Any

_MISSING = object()


def dig(node: Any, *path: str | int, default: Any = None) -> Any:
    """
    Walk a decoded JSON tree one key or index at a time.

    String steps index into dicts, integer steps into lists. Any missing
    key, out-of-range index or node of the wrong type ends the walk and
    returns `default`; nothing here raises.

    Example:
        dig(payload, "candidates", 0, "content", "parts")
    """
    current = node
    for step in path:
        if isinstance(step, int) and not isinstance(step, bool):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return default
            current = current[step]
        else:
            if not isinstance(current, dict):
                return default
            current = current.get(step, _MISSING)
            if current is _MISSING:
                return default
    return current


def dig_str(node: Any, *path: str | int) -> str | None:
    """Like `dig`, but only a string leaf counts as found."""
    value = dig(node, *path)
    return value if isinstance(value, str) else None


def dig_list(node: Any, *path: str | int) -> list:
    """Like `dig`, collapsing anything that is not a list to an empty one."""
    value = dig(node, *path)
    return value if isinstance(value, list) else []
