import pytest

from assertkit.events import (
    AssertionFailed,
    AssertionLocation,
    AssertionSucceeded,
    ExpressionInfo,
    ListTestRunEnded,
    ListTestRunStarted,
    Registry,
    Section,
    SourceLocation,
    TestCaseEnded,
    TestCaseListed,
    TestCaseSkipped,
    TestCaseStarted,
    TestCaseState,
    TestId,
    TestRunEnded,
    TestRunStarted,
    Verbosity,
)
from assertkit.xml_reporter import XmlReporter, escape


def make_setup(verbose=Verbosity.NORMAL):
    out = []
    registry = Registry(verbose=verbose, with_color=False, print_callback=out.append)
    return registry, XmlReporter(registry), out


def test_escape_special_characters():
    assert escape("escape <>&\"' in messages") == (
        "escape &lt;&gt;&amp;&quot;&apos; in messages"
    )


def test_escape_very_long_is_truncated():
    result = escape("&" * 2048)
    assert result == "&" * 1021 + "..."
    assert len(result) == 1024


@pytest.mark.parametrize(
    "start, expected",
    [
        (Verbosity.QUIET, Verbosity.HIGH),
        (Verbosity.NORMAL, Verbosity.HIGH),
        (Verbosity.HIGH, Verbosity.HIGH),
        (Verbosity.FULL, Verbosity.FULL),
    ],
)
def test_init_raises_verbosity(start, expected):
    registry, _, _ = make_setup(start)
    assert registry.verbose == expected


def test_configure_rejects_everything():
    registry, reporter, _ = make_setup()
    assert reporter.configure(registry, "color", "always") is False


def test_run_started_and_ended():
    registry, reporter, out = make_setup()
    reporter.report(registry, TestRunStarted(name="test", filters=("* pass*",)))
    reporter.report(
        registry,
        TestRunEnded(
            name="test",
            run_count=3,
            fail_count=1,
            assertion_count=10,
            assertion_failure_count=2,
            allowed_assertion_failure_count=1,
        ),
    )
    assert "".join(out) == (
        '<?xml version="1.0" encoding="UTF-8"?>\n\n'
        '<Catch2TestRun name="test" rng-seed="0" xml-format-version="2" '
        'catch2-version="1.0.0.assertkit" filters="&quot;* pass*&quot;">\n'
        '  <OverallResults successes="7" failures="2" expectedFailures="1"/>\n'
        '  <OverallResultsCases successes="2" failures="1" expectedFailures="0"/>\n'
        "</Catch2TestRun>\n"
    )
    assert reporter.indent_level == 0


def test_multiple_filters_are_space_separated():
    registry, reporter, out = make_setup()
    reporter.report(registry, TestRunStarted(name="app", filters=("a", "b")))
    assert 'filters="&quot;a&quot; &quot;b&quot;"' in "".join(out)


def test_test_case_started_and_ended():
    registry, reporter, out = make_setup()
    reporter.indent_level = 1
    test_id = TestId(name="t <1>", tags="[tag]", type="int")
    reporter.report(registry, TestCaseStarted(id=test_id, location=SourceLocation("a.py", 3)))
    reporter.report(
        registry,
        TestCaseEnded(id=test_id, state=TestCaseState.FAILED, duration=0.5),
    )
    assert "".join(out) == (
        '  <TestCase name="t &lt;1&gt; &lt;int&gt;" tags="[tag]" filename="a.py" line="3">\n'
        '    <OverallResult success="false" durationInSeconds="5.000000e-01"/>\n'
        "  </TestCase>\n"
    )
    assert reporter.indent_level == 1


def test_test_case_ended_success():
    registry, reporter, out = make_setup()
    reporter.indent_level = 1
    reporter.report(registry, TestCaseEnded(state=TestCaseState.SUCCESS))
    assert out[0] == '  <OverallResult success="true" durationInSeconds="0.000000e+00"/>\n'


def test_failure_message_in_section_with_capture():
    registry, reporter, out = make_setup()
    event = AssertionFailed(
        sections=(Section(name="s1", location=SourceLocation("f", 5)),),
        captures=("x := 1",),
        location=AssertionLocation("f", 7),
        data="escape <>&\"' in messages",
    )
    reporter.report(registry, event)
    assert "".join(out) == (
        '<Section name="s1" filename="f" line="5">\n'
        "  <Info>\n"
        "    x := 1\n"
        "  </Info>\n"
        '  <Failure filename="f" line="7">\n'
        "    escape &lt;&gt;&amp;&quot;&apos; in messages\n"
        "  </Failure>\n"
        "</Section>\n"
    )
    assert reporter.indent_level == 0


def test_success_expression_without_actual_repeats_expected():
    registry, reporter, out = make_setup()
    event = AssertionSucceeded(
        location=AssertionLocation("f", 7),
        data=ExpressionInfo(type="CHECK", expected="a == b", actual=""),
    )
    reporter.report(registry, event)
    assert "".join(out) == (
        '<Expression success="true" type="CHECK" filename="f" line="7">\n'
        "  <Original>\n"
        "    a == b\n"
        "  </Original>\n"
        "  <Expanded>\n"
        "    a == b\n"
        "  </Expanded>\n"
        "</Expression>\n"
    )


def test_failed_expression_shows_actual():
    registry, reporter, out = make_setup()
    event = AssertionFailed(
        location=AssertionLocation("f", 9),
        data=ExpressionInfo(type="CHECK", expected="value1 < value2", actual="1 >= 0"),
    )
    reporter.report(registry, event)
    text = "".join(out)
    assert '<Expression success="false" type="CHECK" filename="f" line="9">\n' in text
    assert "    value1 &lt; value2\n" in text
    assert "  <Expanded>\n    1 &gt;= 0\n  </Expanded>\n" in text


def test_indent_is_capped():
    registry, reporter, out = make_setup()
    sections = tuple(Section(name=f"s{i}", location=SourceLocation("f", i)) for i in range(10))
    reporter.report(
        registry,
        AssertionFailed(sections=sections, location=AssertionLocation("f", 7), data="x"),
    )
    assert " " * 16 + '<Failure filename="f" line="7">\n' in out
    assert all(len(line) - len(line.lstrip(" ")) <= 16 for line in out)
    assert reporter.indent_level == 0


def test_skipped_prints_nothing():
    registry, reporter, out = make_setup()
    reporter.report(registry, TestCaseSkipped(message="skipped"))
    assert out == []


def test_list_tests():
    registry, reporter, out = make_setup()
    reporter.report(registry, ListTestRunStarted())
    reporter.report(
        registry,
        TestCaseListed(id=TestId(name="n", tags="[t]", fixture="fix"), location=SourceLocation("f", 2)),
    )
    reporter.report(
        registry,
        TestCaseListed(id=TestId(name="m"), location=SourceLocation("g", 4)),
    )
    reporter.report(registry, ListTestRunEnded())
    assert "".join(out) == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<MatchingTests>\n"
        "  <TestCase>\n"
        "    <Name>n</Name>\n"
        "    <ClassName>fix</ClassName>\n"
        "    <Tags>[t]</Tags>\n"
        "    <SourceInfo>\n"
        "      <File>f</File>\n"
        "      <Line>2</Line>\n"
        "    </SourceInfo>\n"
        "  </TestCase>\n"
        "  <TestCase>\n"
        "    <Name>m</Name>\n"
        "    <ClassName/>\n"
        "    <Tags/>\n"
        "    <SourceInfo>\n"
        "      <File>g</File>\n"
        "      <Line>4</Line>\n"
        "    </SourceInfo>\n"
        "  </TestCase>\n"
        "</MatchingTests>\n"
    )


def test_unknown_event_raises():
    registry, reporter, _ = make_setup()
    with pytest.raises(TypeError):
        reporter.report(registry, "not an event")