"""Identity and display names for types."""

from __future__ import annotations

from typing import Any


def _require_type(cls: Any) -> None:
    if not isinstance(cls, type):
        raise TypeError(f"expected a type, got {cls!r}")


def type_id(cls: type | None) -> int | None:
    """Return a value unique to ``cls``; ``None`` stands for no type."""
    if cls is None:
        return None
    _require_type(cls)
    return id(cls)


def type_name(cls: type | None) -> str:
    """Return the readable name of ``cls``, qualified by module unless built in."""
    if cls is None:
        return "None"
    _require_type(cls)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"