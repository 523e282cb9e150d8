"""Human-readable console reporter."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from assertkit.events import (
    AssertionData,
    AssertionFailed,
    AssertionLocation,
    AssertionSucceeded,
    Event,
    ExpressionInfo,
    ListTestRunEnded,
    ListTestRunStarted,
    LocationType,
    Registry,
    Section,
    TestCaseEnded,
    TestCaseListed,
    TestCaseSkipped,
    TestCaseStarted,
    TestId,
    TestRunEnded,
    TestRunStarted,
    make_full_name,
)
from assertkit.strings import MAX_MESSAGE_LENGTH, append_or_truncate

FULL_VERSION = "1.0.0"

_INDENT = "          "
_LONG_LINE_THRESHOLD = 64
_RULE = "==========================================\n"


class Color(Enum):
    """Roles that text can be highlighted with."""

    ERROR = auto()
    WARNING = auto()
    STATUS = auto()
    FAIL = auto()
    SKIPPED = auto()
    PASS = auto()
    HIGHLIGHT1 = auto()
    HIGHLIGHT2 = auto()
    RESET = auto()

    @property
    def code(self) -> str:
        """ANSI escape sequence for this role."""
        return _CODES[self]


_CODES: dict[Color, str] = {
    Color.ERROR: "\x1b[1;31m",
    Color.WARNING: "\x1b[1;33m",
    Color.STATUS: "\x1b[1;36m",
    Color.FAIL: "\x1b[1;31m",
    Color.SKIPPED: "\x1b[1;33m",
    Color.PASS: "\x1b[1;32m",
    Color.HIGHLIGHT1: "\x1b[1;35m",
    Color.HIGHLIGHT2: "\x1b[1;36m",
    Color.RESET: "\x1b[0m",
}

_LOCATION_LABELS: dict[LocationType, str] = {
    LocationType.EXACT: "at",
    LocationType.SECTION_SCOPE: "somewhere inside section at",
    LocationType.TEST_CASE_SCOPE: "somewhere inside test case at",
    LocationType.IN_CHECK: "somewhere inside check at",
}


def make_colored(text: Any, with_color: bool, color: Color) -> str:
    """Wrap ``text`` in the escape codes of ``color`` when colour is enabled."""
    text = str(text)
    if not with_color:
        return text
    return f"{color.code}{text}{Color.RESET.code}"


def _format_duration(seconds: float) -> str:
    return f"{seconds:.6e}"


def _print_location(
    registry: Registry,
    test_id: TestId,
    sections: tuple[Section, ...],
    captures: tuple[str, ...],
    location: AssertionLocation,
) -> None:
    color = registry.with_color
    registry.print(
        'running test case "', make_colored(test_id.name, color, Color.HIGHLIGHT1), '"\n'
    )
    for section in sections:
        registry.print(
            _INDENT, 'in section "', make_colored(section.name, color, Color.HIGHLIGHT1), '"\n'
        )
    registry.print(
        _INDENT,
        _LOCATION_LABELS.get(location.type, "at"),
        " ",
        location.file,
        ":",
        location.line,
        "\n",
    )
    if test_id.type:
        registry.print(
            _INDENT, "for type ", make_colored(test_id.type, color, Color.HIGHLIGHT1), "\n"
        )
    for capture in captures:
        registry.print(_INDENT, "with ", make_colored(capture, color, Color.HIGHLIGHT1), "\n")


def _print_message(registry: Registry, data: AssertionData) -> None:
    color = registry.with_color
    if isinstance(data, ExpressionInfo):
        message = append_or_truncate(
            "", MAX_MESSAGE_LENGTH, data.type, "(", data.expected, ")"
        )
        registry.print(_INDENT, make_colored(message, color, Color.HIGHLIGHT2))
        if not data.actual:
            registry.print("\n")
            return
        got = make_colored(data.actual, color, Color.HIGHLIGHT2)
        is_long = (
            len(data.expected) + len(data.type) + 3 > _LONG_LINE_THRESHOLD
            or len(data.actual) + 5 > _LONG_LINE_THRESHOLD
        )
        if is_long:
            registry.print("\n", _INDENT, "got: ", got, "\n")
        else:
            registry.print(", got: ", got, "\n")
    else:
        registry.print(_INDENT, make_colored(data, color, Color.HIGHLIGHT2), "\n")


class ConsoleReporter:
    """Prints run progress and assertion outcomes as readable text."""

    def __init__(self, registry: Registry | None = None) -> None:
        self.counter = 0

    def configure(self, registry: Registry, option: str, value: str) -> bool:
        """Apply a reporter option; return whether the option is known."""
        if option == "color":
            if value == "always":
                registry.with_color = True
            elif value == "never":
                registry.with_color = False
            else:
                raise ValueError(f"unknown color directive: {value!r}")
            return True
        if option == "colour-mode":
            if value == "ansi":
                registry.with_color = True
            elif value == "none":
                registry.with_color = False
            elif value != "default":
                raise ValueError(f"unknown colour mode: {value!r}")
            return True
        return False

    def report(self, registry: Registry, event: Event) -> None:
        """Print one event."""
        color = registry.with_color
        match event:
            case TestRunStarted():
                registry.print(
                    make_colored("starting ", color, Color.HIGHLIGHT2),
                    make_colored(event.name, color, Color.HIGHLIGHT1),
                    make_colored(" with ", color, Color.HIGHLIGHT2),
                    make_colored(f"assertkit v{FULL_VERSION}\n", color, Color.HIGHLIGHT1),
                )
                registry.print(_RULE)
            case TestRunEnded():
                registry.print(_RULE)
                if event.success:
                    registry.print(
                        make_colored("success:", color, Color.PASS),
                        " all tests passed (",
                        event.run_count,
                        " test cases, ",
                        event.assertion_count,
                        " assertions",
                    )
                else:
                    registry.print(
                        make_colored("error:", color, Color.FAIL),
                        " ",
                        "all" if event.fail_count == event.run_count else "some",
                        " tests failed (",
                        event.fail_count,
                        " out of ",
                        event.run_count,
                        " test cases, ",
                        event.assertion_count,
                        " assertions",
                    )
                if event.skip_count > 0:
                    registry.print(", ", event.skip_count, " test cases skipped")
                registry.print(", ", _format_duration(event.duration), " seconds")
                registry.print(")\n")
            case TestCaseStarted():
                registry.print(
                    make_colored("starting:", color, Color.STATUS),
                    " ",
                    make_colored(make_full_name(event.id), color, Color.HIGHLIGHT1),
                    " at ",
                    event.location.file,
                    ":",
                    event.location.line,
                    "\n",
                )
            case TestCaseEnded():
                registry.print(
                    make_colored("finished:", color, Color.STATUS),
                    " ",
                    make_colored(make_full_name(event.id), color, Color.HIGHLIGHT1),
                    " (",
                    _format_duration(event.duration),
                    "s)\n",
                )
            case TestCaseSkipped():
                registry.print(make_colored("skipped: ", color, Color.SKIPPED))
                _print_location(
                    registry, event.id, event.sections, event.captures, event.location
                )
                registry.print(
                    _INDENT, make_colored(event.message, color, Color.HIGHLIGHT2), "\n"
                )
            case AssertionFailed():
                if event.expected:
                    registry.print(make_colored("expected failure: ", color, Color.PASS))
                elif event.allowed:
                    registry.print(make_colored("allowed failure: ", color, Color.PASS))
                else:
                    registry.print(make_colored("failed: ", color, Color.FAIL))
                _print_location(
                    registry, event.id, event.sections, event.captures, event.location
                )
                _print_message(registry, event.data)
            case AssertionSucceeded():
                registry.print(make_colored("passed: ", color, Color.PASS))
                _print_location(
                    registry, event.id, event.sections, event.captures, event.location
                )
                _print_message(registry, event.data)
            case ListTestRunStarted():
                registry.print("Matching test cases:\n")
                self.counter = 0
            case ListTestRunEnded():
                registry.print(self.counter, " matching test cases\n")
            case TestCaseListed():
                self.counter += 1
                registry.print("  ", make_full_name(event.id), "\n")
                if event.id.tags:
                    registry.print("      ", event.id.tags, "\n")
            case _:
                raise TypeError(f"unknown event: {event!r}")