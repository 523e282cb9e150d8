import pytest

from assertkit import teamcity
from assertkit.events import (
    AssertionFailed,
    AssertionLocation,
    AssertionSucceeded,
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
)
from assertkit.strings import MAX_MESSAGE_LENGTH


def emit(*events):
    chunks = []
    registry = Registry(with_color=False, print_callback=chunks.append)
    for event in events:
        teamcity.report(registry, event)
    return "".join(chunks)


def test_escape_special_characters():
    assert teamcity.escape("|'\n\r[]") == "|||'|n|r|[|]"


def test_escape_message_from_source():
    assert teamcity.escape("escape | message || | '\n\r[]") == (
        "escape || message |||| || |'|n|r|[|]"
    )


def test_escape_very_long_truncates():
    result = teamcity.escape("|" * (2 * MAX_MESSAGE_LENGTH))
    assert len(result) == MAX_MESSAGE_LENGTH
    assert result == "|" * (MAX_MESSAGE_LENGTH - 3) + "..."


def test_initialize_raises_verbosity():
    registry = Registry(verbose=Verbosity.NORMAL)
    teamcity.initialize(registry)
    assert registry.verbose == Verbosity.HIGH


def test_initialize_keeps_full_verbosity():
    registry = Registry(verbose=Verbosity.FULL)
    teamcity.initialize(registry)
    assert registry.verbose == Verbosity.FULL


def test_suite_started_and_finished_with_filters():
    out = emit(
        TestRunStarted(name="app", filters=("* pass*",)),
        TestRunEnded(name="app", filters=("* pass*",)),
    )
    assert out == (
        "##teamCity[testSuiteStarted name='app \"* pass*\"']\n"
        "##teamCity[testSuiteFinished name='app \"* pass*\"']\n"
    )


def test_test_started_and_finished():
    tid = TestId(name="t", type="int")
    out = emit(TestCaseStarted(id=tid), TestCaseEnded(id=tid, duration=0.5))
    assert out == (
        "##teamCity[testStarted name='t <int>']\n"
        "##teamCity[testFinished name='t <int>' duration='500000']\n"
    )


def test_name_is_escaped():
    out = emit(TestCaseStarted(id=TestId(name="test escape |'[]")))
    assert out == "##teamCity[testStarted name='test escape |||'|[|]']\n"


def test_failed_expression():
    event = AssertionFailed(
        id=TestId(name="t"),
        sections=(Section(name="sec"),),
        captures=("cap",),
        location=AssertionLocation("f.cpp", 10),
        data=ExpressionInfo("CHECK", "a == b", "1 != 2"),
    )
    assert emit(event) == (
        "##teamCity[testFailed name='t' "
        "message='f.cpp:10|nsec|ncap|n  CHECK(a == b), got: 1 != 2']\n"
    )


def test_failed_long_expression():
    expected = "x" * 70
    event = AssertionFailed(
        id=TestId(name="t"),
        location=AssertionLocation("f.cpp", 1),
        data=ExpressionInfo("CHECK", expected, "0"),
    )
    assert emit(event).endswith(f"  CHECK({expected})|n  got: 0']\n")


def test_failed_message_is_escaped():
    event = AssertionFailed(
        id=TestId(name="t"),
        location=AssertionLocation("f.cpp", 2),
        data="it's [bad]",
    )
    assert emit(event) == (
        "##teamCity[testFailed name='t' message='f.cpp:2|n  it|'s |[bad|]']\n"
    )


@pytest.mark.parametrize("expected, allowed", [(True, False), (False, True)])
def test_tolerated_failure_goes_to_stdout(expected, allowed):
    event = AssertionFailed(
        id=TestId(name="t"),
        location=AssertionLocation("f.cpp", 3),
        data="m",
        expected=expected,
        allowed=allowed,
    )
    assert emit(event) == "##teamCity[testStdOut name='t' out='f.cpp:3|n  m']\n"


def test_success_goes_to_stdout():
    event = AssertionSucceeded(
        id=TestId(name="t"), location=AssertionLocation("f.cpp", 4), data="ok"
    )
    assert emit(event) == "##teamCity[testStdOut name='t' out='f.cpp:4|n  ok']\n"


def test_skipped():
    event = TestCaseSkipped(
        id=TestId(name="t"), location=AssertionLocation("f.cpp", 5), message="later"
    )
    assert emit(event) == "##teamCity[testIgnored name='t' message='f.cpp:5|n  later']\n"


def test_list_tests():
    out = emit(
        ListTestRunStarted(),
        TestCaseListed(id=TestId(name="a [x]")),
        TestCaseListed(id=TestId(name="b", type="int")),
        ListTestRunEnded(),
    )
    assert out == "a |[x|]\nb <int>\n"


def test_unknown_event():
    with pytest.raises(TypeError):
        teamcity.report(Registry(), object())