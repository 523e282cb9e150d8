"""Reporter producing Catch2-compatible XML."""

from __future__ import annotations

from typing import Any, Iterable

from assertkit.console import FULL_VERSION
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
    TestCaseState,
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
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)
_XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
_MAX_INDENT = 16
_SPACES_PER_INDENT = 2
# This reporter accepts no configuration options.
_OPTIONS: frozenset[str] = frozenset()


def _escape(text: str, capacity: int) -> str:
    for pattern, replacement in _ESCAPES:
        fits = len(text.replace(pattern, replacement)) <= capacity
        text = escape_all_or_truncate(text, pattern, replacement, capacity)
        if not fits:
            break
    return text


def _make_escaped(value: Any) -> str:
    return _escape(append_or_truncate("", MAX_MESSAGE_LENGTH, value), MAX_MESSAGE_LENGTH)


def escape(text: str) -> str:
    """Escape ``text`` for XML, truncating if it grows too long."""
    return _make_escaped(text)


def _full_name(test_id: TestId) -> str:
    return _escape(make_full_name(test_id), MAX_TEST_NAME_LENGTH)


def _filters(filters: Iterable[str]) -> str:
    parts: list[str] = []
    for position, item in enumerate(filters):
        parts.extend((' "' if position else '"', item, '"'))
    return _escape(append_or_truncate("", MAX_MESSAGE_LENGTH, *parts), MAX_MESSAGE_LENGTH)


def _format_duration(seconds: float) -> str:
    return f"{seconds:.6e}"


def _attributes(args: Iterable[tuple[str, Any]]) -> str:
    return "".join(f' {key}="{value}"' for key, value in args)


class XmlReporter:
    """Prints run progress and assertion outcomes as Catch2-style XML."""

    def __init__(self, registry: Registry | None = None) -> None:
        self.indent_level = 0
        if registry is not None:
            # Test case start and end events are needed, which need at least 'high'.
            registry.verbose = max(registry.verbose, Verbosity.HIGH)

    def configure(self, registry: Registry, option: str, value: str) -> bool:
        """Return whether ``option`` is known; this reporter knows none."""
        return option in _OPTIONS

    @property
    def _indent(self) -> str:
        return " " * min(_MAX_INDENT, _SPACES_PER_INDENT * self.indent_level)

    def _open(self, registry: Registry, name: str, args: Iterable[tuple[str, Any]] = ()) -> None:
        registry.print(self._indent, "<", name, _attributes(args), ">\n")
        self.indent_level += 1

    def _close(self, registry: Registry, name: str) -> None:
        self.indent_level -= 1
        registry.print(self._indent, "</", name, ">\n")

    def _line(self, registry: Registry, data: str) -> None:
        registry.print(self._indent, data, "\n")

    def _node(self, registry: Registry, name: str, args: Iterable[tuple[str, Any]] = ()) -> None:
        registry.print(self._indent, "<", name, _attributes(args), "/>\n")

    def _open_close(self, registry: Registry, name: str, content: str) -> None:
        if not content:
            self._node(registry, name)
        else:
            registry.print(self._indent, "<", name, ">", content, "</", name, ">\n")

    def _report_assertion(
        self,
        registry: Registry,
        sections: tuple[Section, ...],
        captures: tuple[str, ...],
        location: AssertionLocation,
        data: AssertionData,
        success: bool,
    ) -> None:
        for section in sections:
            self._open(
                registry,
                "Section",
                [
                    ("name", _make_escaped(section.name)),
                    ("filename", _make_escaped(section.location.file)),
                    ("line", section.location.line),
                ],
            )

        for capture in captures:
            self._open(registry, "Info")
            self._line(registry, _make_escaped(capture))
            self._close(registry, "Info")

        place = [("filename", _make_escaped(location.file)), ("line", location.line)]
        if isinstance(data, ExpressionInfo):
            self._open(
                registry,
                "Expression",
                [("success", "true" if success else "false"), ("type", data.type), *place],
            )
            self._open(registry, "Original")
            self._line(registry, _make_escaped(data.expected))
            self._close(registry, "Original")
            self._open(registry, "Expanded")
            self._line(registry, _make_escaped(data.actual or data.expected))
            self._close(registry, "Expanded")
            self._close(registry, "Expression")
        else:
            tag = "Success" if success else "Failure"
            self._open(registry, tag, place)
            self._line(registry, _make_escaped(data))
            self._close(registry, tag)

        for _ in sections:
            self._close(registry, "Section")

    def report(self, registry: Registry, event: Event) -> None:
        """Print one event."""
        match event:
            case TestRunStarted():
                self._line(registry, _XML_HEADER + "\n")
                self._open(
                    registry,
                    "Catch2TestRun",
                    [
                        ("name", _make_escaped(event.name)),
                        ("rng-seed", "0"),
                        ("xml-format-version", "2"),
                        ("catch2-version", f"{FULL_VERSION}.assertkit"),
                        ("filters", _filters(event.filters)),
                    ],
                )
            case TestRunEnded():
                self._node(
                    registry,
                    "OverallResults",
                    [
                        (
                            "successes",
                            event.assertion_count
                            - event.assertion_failure_count
                            - event.allowed_assertion_failure_count,
                        ),
                        ("failures", event.assertion_failure_count),
                        ("expectedFailures", event.allowed_assertion_failure_count),
                    ],
                )
                self._node(
                    registry,
                    "OverallResultsCases",
                    [
                        (
                            "successes",
                            event.run_count - event.fail_count - event.allowed_fail_count,
                        ),
                        ("failures", event.fail_count),
                        ("expectedFailures", event.allowed_fail_count),
                    ],
                )
                self._close(registry, "Catch2TestRun")
            case TestCaseStarted():
                self._open(
                    registry,
                    "TestCase",
                    [
                        ("name", _full_name(event.id)),
                        ("tags", _make_escaped(event.id.tags)),
                        ("filename", _make_escaped(event.location.file)),
                        ("line", event.location.line),
                    ],
                )
            case TestCaseEnded():
                failed = event.state is TestCaseState.FAILED
                self._node(
                    registry,
                    "OverallResult",
                    [
                        ("success", "false" if failed else "true"),
                        ("durationInSeconds", _format_duration(event.duration)),
                    ],
                )
                self._close(registry, "TestCase")
            case TestCaseSkipped():
                # Reported as a success through the test case's overall result.
                pass
            case AssertionFailed():
                self._report_assertion(
                    registry, event.sections, event.captures, event.location, event.data, False
                )
            case AssertionSucceeded():
                self._report_assertion(
                    registry, event.sections, event.captures, event.location, event.data, True
                )
            case ListTestRunStarted():
                self._line(registry, _XML_HEADER)
                self._open(registry, "MatchingTests")
            case ListTestRunEnded():
                self._close(registry, "MatchingTests")
            case TestCaseListed():
                self._open(registry, "TestCase")
                self._open_close(registry, "Name", _full_name(event.id))
                self._open_close(registry, "ClassName", _make_escaped(event.id.fixture))
                self._open_close(registry, "Tags", _make_escaped(event.id.tags))
                self._open(registry, "SourceInfo")
                self._open_close(registry, "File", _make_escaped(event.location.file))
                self._open_close(registry, "Line", str(event.location.line))
                self._close(registry, "SourceInfo")
                self._close(registry, "TestCase")
            case _:
                raise TypeError(f"unknown event: {event!r}")