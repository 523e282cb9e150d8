# assertkit

Building blocks for a small unit-testing framework. The package provides
bounded strings, matchers, decomposed assertion expressions, bookkeeping
for nested sections, and three reporters that turn test-run events into
text.

It has no runtime dependencies.

## Install

    pip install assertkit

To run the package's own tests:

    pip install "assertkit[test]"
    pytest

## Modules

### `assertkit.strings`

These helpers work on text with a fixed capacity. `MAX_MESSAGE_LENGTH` and
`MAX_TEST_NAME_LENGTH` are both 1024.

- `append_or_truncate(text, capacity, *args)` renders each argument and
  appends it to `text`. Booleans render as `true`/`false` and `None`
  renders as `nullptr`. If the result would be longer than `capacity`, it
  is cut to fit and ends with `...`.
- `truncate_end(text, capacity)` ends `text` with up to three dots and
  never goes past `capacity`.
- `resize_or_truncate(text, capacity)` fits `text` into `capacity`.
- `replace_all(text, pattern, replacement, capacity)` replaces every
  occurrence of `pattern` and drops anything past `capacity`.
- `escape_all_or_truncate(text, pattern, replacement, capacity)` replaces
  occurrences while there is still room, then ends with dots. The
  replacement must be longer than the pattern.

A negative capacity or an empty pattern raises `ValueError`.

### `assertkit.matchers`

- `ContainsSubstring(pattern)` matches strings that contain `pattern`.
- `IsAnyOf(*values)` matches any value equal to one of `values`.
- `WithWhatContains(pattern)` matches exceptions whose `str()` contains
  `pattern`.

Each matcher has `match(value)` and `describe_match(value, status)`, where
`status` is a `MatchStatus` (`MATCHED` or `FAILED`). `match(value, matcher)`
returns `(matched, description)`. `is_matcher(obj)` tells whether an object
offers both methods.

### `assertkit.expression`

These functions turn a check into an immutable `Expression`. The
expression holds `type` (the kind of check), `expected` (the source text),
`actual` (the expanded values) and `success`.

- `evaluate_binary(check_type, expected, lhs, operator, rhs, expected_result)`
  compares two operands with an `Operator` (`==`, `!=`, `<`, `>`, `<=`,
  `>=`). It fills in `actual`, for example `0 != 1`. If either operand is
  a matcher, the matcher's description is used instead. Matchers only
  support `==` and `!=`.
- `evaluate_unary(check_type, expected, value, expected_result)` checks the
  truth of a single value.
- `evaluate_plain(check_type, expected, result, expected_result)` handles
  expressions that cannot be decomposed. `actual` stays empty.
- `evaluate_match(check_type, expected, value, matcher)` runs a matcher.

A value without its own `__str__` is shown as `?`. If the expansion does
not fit in `MAX_EXPR_LENGTH`, `actual` is empty.

### `assertkit.typeinfo`

- `type_id(cls)` returns a value unique to the class, or `None` for `None`.
- `type_name(cls)` returns the class name. Classes outside `builtins` are
  qualified by their module.

### `assertkit.events`

This module holds the event dataclasses of a test run:

- `TestRunStarted`, `TestRunEnded`
- `TestCaseStarted`, `TestCaseEnded`, `TestCaseSkipped`
- `AssertionFailed`, `AssertionSucceeded`
- `ListTestRunStarted`, `ListTestRunEnded`, `TestCaseListed`

It also holds their parts (`TestId`, `Section`, `SourceLocation`,
`AssertionLocation`, `ExpressionInfo`) and the enums `Verbosity`,
`LocationType` and `TestCaseState`.

`Registry` holds `verbose`, `with_color` and a `print_callback`. The
callback writes to standard output by default. `Registry.print(*args)`
renders and joins its arguments, then passes the text to the callback.

`make_full_name(test_id)` gives the test name, followed by ` <type>` when
the id has a type.

### `assertkit.section`

`SectionEntryChecker(section, state)` decides whether a section body runs
on the current pass through a test case. Running the test function
repeatedly with the same `TestState` visits each leaf section once. It can
be used as a context manager:

    from assertkit.events import Section
    from assertkit.section import SectionEntryChecker, TestState

    state = TestState()
    with SectionEntryChecker(Section(name="first"), state) as entered:
        if entered:
            ...

`enter()` and `leave(unwinding)` are the explicit form of the same thing.
Nesting deeper than `MAX_NESTED_SECTIONS` (8) prints an error through the
registry and raises `RuntimeError`.

### `assertkit.console`

`ConsoleReporter` prints readable progress and assertion results.
`configure(registry, option, value)` accepts two options:

- `color`: `always` or `never`
- `colour-mode`: `ansi`, `none` or `default`

Any other value for these options raises `ValueError`. `configure` returns
`False` for an unknown option. `make_colored(text, with_color, color)`
wraps text in the ANSI codes of a `Color`.

### `assertkit.teamcity`

- `initialize(registry)` raises verbosity to at least `HIGH`.
- `report(registry, event)` prints TeamCity service messages, such as
  `##teamCity[testStarted name='...']`.
- `escape(text)` applies TeamCity's `|` escaping.

### `assertkit.xml_reporter`

`XmlReporter(registry)` writes Catch2-style XML: `Catch2TestRun`,
`TestCase`, `Expression`, `OverallResults` and related elements. It raises
the registry's verbosity to at least `HIGH`. It takes no options, so
`configure` always returns `False`. `escape(text)` applies XML entity
escaping.

## Example

    from assertkit.expression import Operator, evaluate_binary

    expr = evaluate_binary("CHECK", "value1 == value2", 0, Operator.EQUAL, 1, True)
    assert not expr.success
    assert expr.actual == "0 != 1"

    from assertkit.matchers import ContainsSubstring, match

    ok, description = match("hello", ContainsSubstring("lo"))
    assert ok and description == "found 'lo' in 'hello'"

A reporter receives a `Registry` and one event at a time:

    from assertkit.events import Registry, TestRunStarted
    from assertkit.teamcity import initialize, report

    registry = Registry()
    initialize(registry)
    report(registry, TestRunStarted(name="test"))
    # prints: ##teamCity[testSuiteStarted name='test']

## What it does not do

assertkit provides the parts, not a complete framework:

- It has no test registry, so it cannot discover or register tests.
- It has no runner that calls test functions, counts results or emits
  events on its own. You build the events and pass them to a reporter.
- It has no command-line program or filter handling.