"""Evaluation of checked expressions into decomposed, reportable results."""

from __future__ import annotations

import operator as _op
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from assertkit.matchers import MatchStatus, is_matcher, match
from assertkit.strings import append_or_truncate, resize_or_truncate

MAX_EXPR_LENGTH = 1024
DECOMPOSE_SUCCESSFUL_ASSERTIONS = True


class Operator(Enum):
    """Comparison operators that can be decomposed."""

    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "!="

    @property
    def display(self) -> str:
        """Text shown between operands when the comparison held."""
        return _DISPLAY[self][0]

    @property
    def inverse(self) -> str:
        """Text shown between operands when the comparison did not hold."""
        return _DISPLAY[self][1]

    def apply(self, lhs: Any, rhs: Any) -> Any:
        return _FUNCTIONS[self](lhs, rhs)


_DISPLAY: dict[Operator, tuple[str, str]] = {
    Operator.LESS: (" < ", " >= "),
    Operator.GREATER: (" > ", " <= "),
    Operator.LESS_EQUAL: (" <= ", " > "),
    Operator.GREATER_EQUAL: (" >= ", " < "),
    Operator.EQUAL: (" == ", " != "),
    Operator.NOT_EQUAL: (" != ", " == "),
}

_FUNCTIONS: dict[Operator, Callable[[Any, Any], Any]] = {
    Operator.LESS: _op.lt,
    Operator.GREATER: _op.gt,
    Operator.LESS_EQUAL: _op.le,
    Operator.GREATER_EQUAL: _op.ge,
    Operator.EQUAL: _op.eq,
    Operator.NOT_EQUAL: _op.ne,
}


@dataclass(frozen=True)
class Expression:
    """Outcome of a check: its kind, source text, decomposed values and success."""

    type: str = ""
    expected: str = ""
    actual: str = ""
    success: bool = True


def _is_appendable(value: Any) -> bool:
    if value is None or isinstance(value, (str, bool, int, float)):
        return True
    return type(value).__str__ is not object.__str__


def _decompose(*values: Any) -> str:
    """Render values side by side, or give an empty string if they do not fit."""
    rendered = (value if _is_appendable(value) else "?" for value in values)
    text = append_or_truncate("", MAX_EXPR_LENGTH + 1, *rendered)
    return text if len(text) <= MAX_EXPR_LENGTH else ""


def evaluate_binary(
    check_type: str,
    expected: str,
    lhs: Any,
    operator: Operator | str,
    rhs: Any,
    expected_result: bool,
) -> Expression:
    """Evaluate ``lhs <operator> rhs`` and decompose its operands."""
    op = Operator(operator)
    matcher = value = None
    if is_matcher(lhs):
        matcher, value = lhs, rhs
    elif is_matcher(rhs):
        matcher, value = rhs, lhs

    if matcher is not None:
        if op not in (Operator.EQUAL, Operator.NOT_EQUAL):
            raise TypeError(f"matchers only support == and !=, not {op.value}")
        matched = bool(matcher.match(value))
        outcome = matched if op is Operator.EQUAL else not matched
    else:
        outcome = bool(op.apply(lhs, rhs))

    success = outcome == expected_result
    actual = ""
    if not success or DECOMPOSE_SUCCESSFUL_ASSERTIONS:
        if matcher is not None:
            status = (
                MatchStatus.MATCHED
                if (op is Operator.EQUAL) == outcome
                else MatchStatus.FAILED
            )
            actual = _decompose(matcher.describe_match(value, status))
        else:
            actual = _decompose(lhs, op.display if outcome else op.inverse, rhs)

    return Expression(check_type, expected, actual, success)


def evaluate_unary(
    check_type: str, expected: str, value: Any, expected_result: bool
) -> Expression:
    """Evaluate the truth of ``value`` and decompose it."""
    success = bool(value) == expected_result
    actual = ""
    if not success or DECOMPOSE_SUCCESSFUL_ASSERTIONS:
        actual = _decompose(value)
    return Expression(check_type, expected, actual, success)


def evaluate_plain(
    check_type: str, expected: str, result: Any, expected_result: bool
) -> Expression:
    """Evaluate an expression that cannot be decomposed."""
    return Expression(check_type, expected, "", bool(result) == expected_result)


def evaluate_match(check_type: str, expected: str, value: Any, matcher: Any) -> Expression:
    """Run a matcher on ``value`` and record its description."""
    success, description = match(value, matcher)
    return Expression(
        check_type, expected, resize_or_truncate(description, MAX_EXPR_LENGTH), success
    )