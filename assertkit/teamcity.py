"""Reporter producing TeamCity service messages."""

from __future__ import annotations

from dataclasses import dataclass

from assertkit.events import (
    AssertionData,
    AssertionFailed,
    AssertionLocation,
    AssertionSucceeded,
    Event,
    ExpressionInfo,
    ListTestRunEnded,
    ListTestRunStarted,
    Registry,
    Section,
    TestCaseEnded,
    TestCaseListed,
    TestCaseSkipped,
    TestCaseStarted,
    TestId,
    TestRunEnded,
    TestRunStarted,
    Verbosity,
    make_full_name,
)
from assertkit.strings import (
    MAX_MESSAGE_LENGTH,
    MAX_TEST_NAME_LENGTH,
    append_or_truncate,
    escape_all_or_truncate,
)

_ESCAPES = (
    ("|", "||"),
    ("'", "|'"),
    ("\n", "|n"),
    ("\r", "|r"),
    ("[", "|["),
    ("]", "|]"),
)
_INDENT = "  "
_LONG_LINE_THRESHOLD = 64


@dataclass(frozen=True)
class _Assertion:
    location: AssertionLocation
    sections: tuple[Section, ...]
    captures: tuple[str, ...]
    data: AssertionData


def _escape(text: str, capacity: int) -> str:
    for pattern, replacement in _ESCAPES:
        fits = len(text.replace(pattern, replacement)) <= capacity
        text = escape_all_or_truncate(text, pattern, replacement, capacity)
        if not fits:
            break
    return text


def _make_escaped(value: object, capacity: int = MAX_MESSAGE_LENGTH) -> str:
    return _escape(append_or_truncate("", capacity, value), capacity)


def escape(text: str) -> str:
    """Escape ``text`` for a service message, truncating if it grows too long."""
    return _make_escaped(text)


def _full_name(test_id: TestId) -> str:
    return _escape(make_full_name(test_id), MAX_TEST_NAME_LENGTH)


def _suite_name(app: str, filters: tuple[str, ...]) -> str:
    parts: list[str] = [app]
    for item in filters:
        parts.extend((' "', item, '"'))
    return _escape(append_or_truncate("", MAX_MESSAGE_LENGTH, *parts), MAX_MESSAGE_LENGTH)


def _format_assertion(msg: _Assertion) -> str:
    out = [f"'{_make_escaped(msg.location.file)}:{msg.location.line}|n"]
    out.extend(f"{_make_escaped(section.name)}|n" for section in msg.sections)
    out.extend(f"{_make_escaped(capture)}|n" for capture in msg.captures)

    data = msg.data
    if isinstance(data, ExpressionInfo):
        out.append(f"{_INDENT}{data.type}({_make_escaped(data.expected)})")
        if data.actual:
            is_long = (
                len(data.expected) + len(data.type) + 3 > _LONG_LINE_THRESHOLD
                or len(data.actual) + 5 > _LONG_LINE_THRESHOLD
            )
            got = _make_escaped(data.actual)
            out.append(f"|n{_INDENT}got: {got}'" if is_long else f", got: {got}'")
        else:
            out.append("'")
    else:
        out.append(f"{_INDENT}{_make_escaped(data)}'")
    return "".join(out)


def _send_message(
    registry: Registry, message: str, args: list[tuple[str, str | _Assertion]]
) -> None:
    out = ["##teamCity[", message]
    for key, value in args:
        out.append(f" {key}=")
        if isinstance(value, _Assertion):
            out.append(_format_assertion(value))
        else:
            out.append(f"'{value}'")
    out.append("]\n")
    registry.print("".join(out))


def initialize(registry: Registry) -> None:
    """Raise verbosity so test case start and end events are reported."""
    registry.verbose = max(registry.verbose, Verbosity.HIGH)


def report(registry: Registry, event: Event) -> None:
    """Print one event as a TeamCity service message."""
    match event:
        case TestRunStarted():
            _send_message(
                registry, "testSuiteStarted", [("name", _suite_name(event.name, event.filters))]
            )
        case TestRunEnded():
            _send_message(
                registry, "testSuiteFinished", [("name", _suite_name(event.name, event.filters))]
            )
        case TestCaseStarted():
            _send_message(registry, "testStarted", [("name", _full_name(event.id))])
        case TestCaseEnded():
            _send_message(
                registry,
                "testFinished",
                [
                    ("name", _full_name(event.id)),
                    ("duration", str(int(event.duration * 1e6))),
                ],
            )
        case TestCaseSkipped():
            _send_message(
                registry,
                "testIgnored",
                [
                    ("name", _full_name(event.id)),
                    (
                        "message",
                        _Assertion(event.location, event.sections, event.captures, event.message),
                    ),
                ],
            )
        case AssertionFailed():
            tolerated = event.expected or event.allowed
            _send_message(
                registry,
                "testStdOut" if tolerated else "testFailed",
                [
                    ("name", _full_name(event.id)),
                    (
                        "out" if tolerated else "message",
                        _Assertion(event.location, event.sections, event.captures, event.data),
                    ),
                ],
            )
        case AssertionSucceeded():
            _send_message(
                registry,
                "testStdOut",
                [
                    ("name", _full_name(event.id)),
                    (
                        "out",
                        _Assertion(event.location, event.sections, event.captures, event.data),
                    ),
                ],
            )
        case ListTestRunStarted() | ListTestRunEnded():
            pass
        case TestCaseListed():
            registry.print(_full_name(event.id), "\n")
        case _:
            raise TypeError(f"unknown event: {event!r}")