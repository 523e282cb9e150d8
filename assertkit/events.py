"""Test identities, report events and the registry that prints them."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Union

from assertkit.strings import MAX_TEST_NAME_LENGTH, append_or_truncate


class Verbosity(IntEnum):
    """How much a run reports; higher values report more."""

    QUIET = 0
    NORMAL = 1
    HIGH = 2
    FULL = 3


class LocationType(Enum):
    """How precisely a reported location points at the code."""

    EXACT = "exact"
    SECTION_SCOPE = "section_scope"
    TEST_CASE_SCOPE = "test_case_scope"
    IN_CHECK = "in_check"


class TestCaseState(Enum):
    """Outcome of a test case."""

    __test__ = False

    NOT_RUN = "not_run"
    SUCCESS = "success"
    FAILED = "failed"
    ALLOWED_FAIL = "allowed_fail"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SourceLocation:
    """A file and line in the code under test."""

    file: str = ""
    line: int = 0


@dataclass(frozen=True)
class AssertionLocation:
    """Where an assertion was reported, and how exact that place is."""

    file: str = ""
    line: int = 0
    type: LocationType = LocationType.EXACT


@dataclass(frozen=True)
class TestId:
    """Identity of a test case."""

    __test__ = False

    name: str = ""
    tags: str = ""
    type: str = ""
    fixture: str = ""


@dataclass(frozen=True)
class Section:
    """A named section inside a test case."""

    name: str = ""
    description: str = ""
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class ExpressionInfo:
    """A checked expression: its kind, source text and decomposed values."""

    type: str = ""
    expected: str = ""
    actual: str = ""


AssertionData = Union[str, ExpressionInfo]


@dataclass(frozen=True)
class TestRunStarted:
    __test__ = False

    name: str = ""
    filters: tuple[str, ...] = ()


@dataclass(frozen=True)
class TestRunEnded:
    __test__ = False

    name: str = ""
    filters: tuple[str, ...] = ()
    run_count: int = 0
    fail_count: int = 0
    allowed_fail_count: int = 0
    skip_count: int = 0
    assertion_count: int = 0
    assertion_failure_count: int = 0
    allowed_assertion_failure_count: int = 0
    duration: float = 0.0
    success: bool = True


@dataclass(frozen=True)
class TestCaseStarted:
    __test__ = False

    id: TestId = field(default_factory=TestId)
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class TestCaseEnded:
    __test__ = False

    id: TestId = field(default_factory=TestId)
    location: SourceLocation = field(default_factory=SourceLocation)
    assertion_count: int = 0
    assertion_failure_count: int = 0
    allowed_assertion_failure_count: int = 0
    state: TestCaseState = TestCaseState.SUCCESS
    duration: float = 0.0
    failure_expected: bool = False
    failure_allowed: bool = False


@dataclass(frozen=True)
class TestCaseSkipped:
    __test__ = False

    id: TestId = field(default_factory=TestId)
    sections: tuple[Section, ...] = ()
    captures: tuple[str, ...] = ()
    location: AssertionLocation = field(default_factory=AssertionLocation)
    message: str = ""


@dataclass(frozen=True)
class AssertionFailed:
    id: TestId = field(default_factory=TestId)
    sections: tuple[Section, ...] = ()
    captures: tuple[str, ...] = ()
    location: AssertionLocation = field(default_factory=AssertionLocation)
    data: AssertionData = ""
    expected: bool = False
    allowed: bool = False


@dataclass(frozen=True)
class AssertionSucceeded:
    id: TestId = field(default_factory=TestId)
    sections: tuple[Section, ...] = ()
    captures: tuple[str, ...] = ()
    location: AssertionLocation = field(default_factory=AssertionLocation)
    data: AssertionData = ""


@dataclass(frozen=True)
class ListTestRunStarted:
    name: str = ""
    filters: tuple[str, ...] = ()


@dataclass(frozen=True)
class ListTestRunEnded:
    name: str = ""
    filters: tuple[str, ...] = ()


@dataclass(frozen=True)
class TestCaseListed:
    __test__ = False

    id: TestId = field(default_factory=TestId)
    location: SourceLocation = field(default_factory=SourceLocation)


Event = Union[
    TestRunStarted,
    TestRunEnded,
    TestCaseStarted,
    TestCaseEnded,
    TestCaseSkipped,
    AssertionFailed,
    AssertionSucceeded,
    ListTestRunStarted,
    ListTestRunEnded,
    TestCaseListed,
]


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "nullptr"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _stdout_print(message: str) -> None:
    sys.stdout.write(message)


@dataclass
class Registry:
    """Run-wide settings and the sink that reporters print to."""

    verbose: Verbosity = Verbosity.NORMAL
    with_color: bool = True
    print_callback: Callable[[str], None] = _stdout_print

    def print(self, *args: Any) -> None:
        """Render and concatenate ``args``, then hand the text to the print callback."""
        self.print_callback("".join(_render(arg) for arg in args))


def make_full_name(test_id: TestId) -> str:
    """Name of a test case, followed by its type in angle brackets when it has one."""
    if test_id.type:
        return append_or_truncate(
            "", MAX_TEST_NAME_LENGTH, test_id.name, " <", test_id.type, ">"
        )
    return append_or_truncate("", MAX_TEST_NAME_LENGTH, test_id.name)