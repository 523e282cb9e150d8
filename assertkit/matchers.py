"""Matchers: objects that test a value and describe the outcome."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from assertkit.strings import MAX_MESSAGE_LENGTH, append_or_truncate


class MatchStatus(Enum):
    """Whether a matcher matched the value it was given."""

    FAILED = "failed"
    MATCHED = "matched"


@dataclass(frozen=True)
class ContainsSubstring:
    """Matches strings that contain a given substring."""

    substring_pattern: str

    def match(self, message: str) -> bool:
        return self.substring_pattern in message

    def describe_match(self, message: str, status: MatchStatus) -> str:
        if status is MatchStatus.FAILED:
            lead = "could not find '"
        else:
            lead = "found '"
        return append_or_truncate(
            "", MAX_MESSAGE_LENGTH, lead, self.substring_pattern, "' in '", message, "'"
        )


class IsAnyOf:
    """Matches values equal to any of a fixed list."""

    def __init__(self, *values: Any) -> None:
        self.values = tuple(values)

    def __repr__(self) -> str:
        return f"IsAnyOf{self.values!r}"

    def match(self, value: Any) -> bool:
        return any(candidate == value for candidate in self.values)

    def describe_match(self, value: Any, status: MatchStatus) -> str:
        parts: list[Any] = [
            "'",
            value,
            "' was ",
            "not " if status is MatchStatus.FAILED else "",
            "found in {",
        ]
        for position, candidate in enumerate(self.values):
            parts.extend((", '" if position else "'", candidate, "'"))
        parts.append("}")
        return append_or_truncate("", MAX_MESSAGE_LENGTH, *parts)


@dataclass(frozen=True)
class WithWhatContains:
    """Matches exceptions whose message contains a given substring."""

    substring_pattern: str

    def _message(self, error: BaseException) -> str:
        if not isinstance(error, BaseException):
            raise TypeError(f"expected an exception, got {type(error).__name__}")
        return str(error)

    def match(self, error: BaseException) -> bool:
        return ContainsSubstring(self.substring_pattern).match(self._message(error))

    def describe_match(self, error: BaseException, status: MatchStatus) -> str:
        return ContainsSubstring(self.substring_pattern).describe_match(
            self._message(error), status
        )


def is_matcher(obj: Any) -> bool:
    """Tell whether ``obj`` offers ``match`` and ``describe_match``."""
    if isinstance(obj, type):
        return False
    return callable(getattr(obj, "match", None)) and callable(
        getattr(obj, "describe_match", None)
    )


def match(value: Any, matcher: Any) -> tuple[bool, str]:
    """Run ``matcher`` on ``value`` and return the outcome with its description."""
    if matcher.match(value):
        return True, matcher.describe_match(value, MatchStatus.MATCHED)
    return False, matcher.describe_match(value, MatchStatus.FAILED)