"""Tests for the host expression tree: evaluation, degree, reduction, text."""

import math

import numpy as np
import pytest

from derivnode.expressions import (
    UNKNOWN_DEGREE,
    AngleUnit,
    Context,
    Number,
    PrintFloatMode,
    Symbol,
    Undefined,
    parse,
)
from derivnode.expressions.helpers import format_number
from derivnode.expressions.layout import HorizontalLayout, StringLayout


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2^10", 1024.0),
        ("1+2*3", 7.0),
        ("-(1+2)", -3.0),
        ("2^-1", 0.5),
        ("abs(-4)", 4.0),
        ("sqrt(9)", 3.0),
        ("log(1000)", 3.0),
        ("pi", math.pi),
        ("exp(1)-e", 0.0),
    ],
)
def test_approximate_constant_expressions(text, expected):
    """Tests the real approximation of closed expressions."""
    assert float(parse(text).approximate()) == pytest.approx(expected, abs=1e-12)


@pytest.mark.parametrize("text", ["1/0", "ln(0)", "sqrt(-1)", "0^0", "x", "i", "undef", "[[1,2][3,4]]"])
def test_approximate_undefined_is_nan(text):
    """Tests that undefined values approximate to NaN without warnings."""
    with np.errstate(all="raise"):
        assert np.isnan(parse(text).approximate())


@pytest.mark.parametrize(
    "unit, argument",
    [
        (AngleUnit.RADIAN, math.pi / 2),
        (AngleUnit.DEGREE, 90.0),
        (AngleUnit.GRADIAN, 100.0),
    ],
)
def test_trigonometry_follows_angle_unit(unit, argument):
    """Tests that sin of a right angle is 1 in every angle unit."""
    value = parse("sin(a)").approximate(Context({"a": argument}), unit)
    assert float(value) == pytest.approx(1.0, abs=1e-12)


def test_approximate_with_value_for_symbol():
    """Tests binding one symbol for a single evaluation."""
    expr = parse("x^2+y")
    ctx = Context({"y": 1.0})
    assert expr.approximate_with_value_for_symbol("x", 3.0, ctx) == 10.0
    assert ctx.value_for("x") is None


def test_approximate_reduced_precision_returns_float32():
    """Tests that the working precision reaches the leaves."""
    value = parse("sin(x)*2").approximate(Context({"x": 0.5}), precision="reduced")
    assert isinstance(value, np.float32)


@pytest.mark.parametrize(
    "text, symbol, degree",
    [
        ("x^2+3*x", "x", 2),
        ("x*y", "x", 1),
        ("(x+1)^3", "x", 3),
        ("x/2", "x", 1),
        ("-x", "x", 1),
        ("7", "x", 0),
        ("sin(y)", "x", 0),
        ("1/x", "x", UNKNOWN_DEGREE),
        ("sin(x)", "x", UNKNOWN_DEGREE),
        ("x^y", "x", UNKNOWN_DEGREE),
        ("undef", "x", UNKNOWN_DEGREE),
    ],
)
def test_polynomial_degree(text, symbol, degree):
    """Tests degree inference on host nodes."""
    assert parse(text).polynomial_degree(symbol) == degree


def test_reduce_folds_numbers():
    """Tests constant folding of arithmetic on numbers."""
    assert parse("1+2*3").reduce() == Number(7)
    assert parse("-(2)").reduce() == Number(-2)
    assert parse("2^3/4").reduce() == Number(2)


def test_reduce_leaves_functions_unevaluated():
    """Tests that functions of numbers are not approximated by reduction."""
    assert parse("sin(1+1)").reduce().serialize() == "sin(2)"


@pytest.mark.parametrize("text", ["1/0", "undef+1", "sin(undef)", "0^0"])
def test_reduce_propagates_undefined(text):
    """Tests that an undefined operand makes its parent undefined."""
    assert parse(text).reduce().is_undefined()


def test_reduce_replaces_bound_symbols_when_asked():
    """Tests that replace_symbols controls substitution of context values."""
    ctx = Context({"x": 2.0})
    assert parse("x+1").reduce(ctx) == Number(3)
    assert parse("x+1").reduce(ctx, replace_symbols=False).serialize() == "x+1"


def test_replace_unknown_everywhere():
    """Tests that the unknown placeholder is replaced throughout a tree."""
    expr = parse("?x^2+sin(?x)")
    assert expr.replace_unknown(Symbol("t")).serialize() == "t^2+sin(t)"


@pytest.mark.parametrize(
    "text",
    [
        "x^2+3*x",
        "-(x+1)",
        "2^(-1)",
        "(x^2)^3",
        "x^y^z",
        "a-(b-c)",
        "a/(b*c)",
        "2*-x",
        "diff(sin(x),x,pi/2)",
        "[[1,2][3,4]]",
        "1.5E-7",
        "0.25",
    ],
)
def test_serialize_round_trips(text):
    """Tests that serialization reproduces canonical input text."""
    expr = parse(text)
    assert expr.serialize() == text
    assert parse(expr.serialize()) == expr


def test_layout_reads_like_serialization():
    """Tests that layouts and serializations agree."""
    for text in ["x^2+3*x", "-(x+1)", "diff(x^2,x,3)", "[[1,x][3,4]]"]:
        expr = parse(text)
        assert expr.create_layout().text() == expr.serialize()


def test_prefix_layout_structure():
    """Tests that function calls are laid out as name then parenthesized arguments."""
    layout = parse("sin(x)").create_layout()
    assert isinstance(layout, HorizontalLayout)
    assert layout.children[0] == StringLayout("sin")
    assert layout.children[1].text() == "(x)"


@pytest.mark.parametrize(
    "value, mode, digits, expected",
    [
        (12.0, PrintFloatMode.DECIMAL, 10, "12"),
        (-0.5, PrintFloatMode.DECIMAL, 10, "-0.5"),
        (1.0 / 3.0, PrintFloatMode.DECIMAL, 4, "0.3333"),
        (123456.0, PrintFloatMode.DECIMAL, 3, "1.23E5"),
        (0.00012, PrintFloatMode.SCIENTIFIC, 10, "1.2E-4"),
        (12.0, PrintFloatMode.SCIENTIFIC, 10, "1.2E1"),
        (float("nan"), PrintFloatMode.DECIMAL, 10, "undef"),
    ],
)
def test_format_number(value, mode, digits, expected):
    """Tests number display preferences."""
    assert format_number(value, mode, digits) == expected


def test_serialize_passes_preferences_to_numbers():
    """Tests that display preferences reach the leaves of a tree."""
    expr = parse("diff(x^2,x,0.123456)")
    assert expr.serialize(PrintFloatMode.DECIMAL, 3) == "diff(x^2,x,0.123)"
    assert expr.create_layout(PrintFloatMode.SCIENTIFIC, 2).text() == "diff(x^2E0,x,1.2E-1)"


def test_undefined_serializes_as_token():
    """Tests the display token of the undefined value."""
    assert Undefined().serialize() == "undef"
    assert str(parse("undef")) == "undef"
