"""Tests for the two-tier precedence evaluator and result formatting."""

import pytest

from backend.engine import Evaluator, format_number
from backend.errors import (
    DivisionByZero,
    IncompleteExpression,
    MalformedExpression,
    NonFinite,
    ParseFailure,
)
from backend.tokens import Numeral, Operator, parse_tokens


def evaluate(evaluator, expression):
    return evaluator.evaluate(parse_tokens(expression))


# --- Arithmetic and precedence ---

def test_single_numeral(evaluator):
    assert evaluate(evaluator, "7") == pytest.approx(7.0)


def test_multiplication_before_addition(evaluator):
    assert evaluate(evaluator, "2 + 3 × 4") == pytest.approx(14.0)


def test_subtraction_is_left_associative(evaluator):
    assert evaluate(evaluator, "10 - 4 - 3") == pytest.approx(3.0)


def test_division_chain_reduced_left_to_right(evaluator):
    assert evaluate(evaluator, "8 ÷ 4 × 2") == pytest.approx(4.0)
    assert evaluate(evaluator, "2 × 3 ÷ 4") == pytest.approx(1.5)
    assert evaluate(evaluator, "100 ÷ 10 ÷ 5") == pytest.approx(2.0)


def test_mixed_expression(evaluator):
    assert evaluate(evaluator, "1 + 2 × 3 - 4 ÷ 2") == pytest.approx(5.0)


def test_negative_numerals(evaluator):
    assert evaluate(evaluator, "-2 × -3 + -1") == pytest.approx(5.0)


def test_input_sequence_is_not_modified(evaluator):
    tokens = parse_tokens("2 + 3 × 4")
    before = list(tokens)
    evaluator.evaluate(tokens)
    assert tokens == before


# --- Failures ---

@pytest.mark.parametrize("expression", ["5 ÷ 0", "5 ÷ -0", "5 ÷ 0.000", "1 + 2 ÷ 0 × 3"])
def test_division_by_zero(evaluator, expression):
    with pytest.raises(DivisionByZero):
        evaluate(evaluator, expression)


def test_zero_tolerance_is_configurable():
    assert Evaluator().evaluate(parse_tokens("1 ÷ 0.0001")) == pytest.approx(10000.0)
    with pytest.raises(DivisionByZero):
        Evaluator(zero_tolerance=1e-3).evaluate(parse_tokens("1 ÷ 0.0001"))


def test_unparseable_numeral(evaluator):
    with pytest.raises(ParseFailure):
        evaluator.evaluate([Numeral("."), Operator.ADD, Numeral("1")])


def test_overflow_is_non_finite(evaluator):
    huge = "1" + "0" * 308
    with pytest.raises(NonFinite):
        evaluate(evaluator, f"{huge} × 10")


def test_additive_overflow_is_non_finite(evaluator):
    huge = "9" * 308
    with pytest.raises(NonFinite):
        evaluate(evaluator, f"{huge} + {huge}")


@pytest.mark.parametrize("tokens", [[], [Numeral("1"), Operator.ADD]])
def test_incomplete_expression(evaluator, tokens):
    with pytest.raises(IncompleteExpression):
        evaluator.evaluate(tokens)


@pytest.mark.parametrize("tokens", [
    [Operator.SUB, Numeral("1")],
    [Numeral("1"), Numeral("2")],
    [Numeral("1"), Operator.ADD, Operator.MUL, Numeral("2")],
])
def test_malformed_expression(evaluator, tokens):
    with pytest.raises(MalformedExpression):
        evaluator.evaluate(tokens)


def test_try_evaluate_reports_instead_of_raising(evaluator):
    result = evaluator.try_evaluate(parse_tokens("5 ÷ 0"))
    assert not result.ok
    assert isinstance(result.error, DivisionByZero)
    assert result.value is None

    result = evaluator.try_evaluate(parse_tokens("5 ÷ 2"))
    assert result.ok
    assert result.value == pytest.approx(2.5)


# --- Formatting ---

def test_one_third_has_fifteen_significant_digits(evaluator):
    value = evaluate(evaluator, "1 ÷ 3")
    assert format_number(value) == "0.333333333333333"
    assert format_number(evaluate(evaluator, "1 ÷ 3")) == format_number(value)


def test_formatting_hides_float_noise():
    assert format_number(0.1 + 0.2) == "0.3"
    assert format_number(2 / 3) == "0.666666666666667"


def test_formatting_trims_artifacts():
    assert format_number(5.0) == "5"
    assert format_number(-0.0) == "0"
    assert format_number(2.5) == "2.5"


def test_formatting_precision():
    assert format_number(1 / 3, precision=4) == "0.3333"
