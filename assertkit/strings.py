"""Bounded string helpers: appending, truncating and escaping within a fixed capacity."""

from __future__ import annotations

from typing import Any

MAX_MESSAGE_LENGTH = 1024
MAX_TEST_NAME_LENGTH = 1024

_NUM_DOTS = 3


def _format(value: Any) -> str:
    """Render a value the way it appears in reports."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "nullptr"
    if isinstance(value, str):
        return value
    return str(value)


def _require_capacity(capacity: int) -> None:
    if capacity < 0:
        raise ValueError(f"capacity must not be negative, got {capacity}")


def truncate_end(text: str, capacity: int) -> str:
    """Mark the end of ``text`` with up to three dots, never exceeding ``capacity``."""
    _require_capacity(capacity)
    final_length = min(len(text) + _NUM_DOTS, capacity)
    offset = max(final_length - _NUM_DOTS, 0)
    return text[:offset] + "." * (final_length - offset)


def append_or_truncate(text: str, capacity: int, *args: Any) -> str:
    """Append the rendered ``args`` to ``text``; if it overflows, cut and end with dots."""
    _require_capacity(capacity)
    joined = text + "".join(_format(arg) for arg in args)
    if len(joined) <= capacity:
        return joined
    return truncate_end(joined[:capacity], capacity)


def resize_or_truncate(text: str, capacity: int) -> str:
    """Fit ``text`` into ``capacity``, ending with dots if it had to be cut."""
    return append_or_truncate("", capacity, text)


def replace_all(text: str, pattern: str, replacement: str, capacity: int) -> str:
    """Replace every occurrence of ``pattern``; anything past ``capacity`` is dropped."""
    _require_capacity(capacity)
    if not pattern:
        raise ValueError("pattern must not be empty")
    return text.replace(pattern, replacement)[:capacity]


def escape_all_or_truncate(text: str, pattern: str, replacement: str, capacity: int) -> str:
    """Escape occurrences of ``pattern`` while room remains, then truncate with dots.

    The replacement must be longer than the pattern.
    """
    _require_capacity(capacity)
    if not pattern:
        raise ValueError("pattern must not be empty")
    if len(replacement) <= len(pattern):
        raise ValueError("replacement must be longer than the pattern")
    if len(text) > capacity:
        raise ValueError("text is longer than the capacity")

    growth = len(replacement) - len(pattern)
    result = text
    pos = result.find(pattern)
    while pos != -1:
        if capacity - len(result) < growth:
            return truncate_end(result, capacity)
        result = result[:pos] + replacement + result[pos + len(pattern):]
        pos = result.find(pattern, pos + len(replacement))
    return result