"""Tests for the Derivative expression node."""

import logging
import math

import numpy as np
import pytest

from derivnode.exceptions import InvalidOperandError
from derivnode.expressions import (
    UNKNOWN_DEGREE,
    AngleUnit,
    Context,
    Derivative,
    Expression,
    Number,
    Symbol,
    Undefined,
    parse,
)
from derivnode.expressions.layout import HorizontalLayout, StringLayout
from derivnode.ridders import DifferentiationResult, RiddersConfig, UndefinedReason


def test_number_of_operands_is_three():
    """Tests the fixed operand count."""
    node = parse("diff(x^2,x,3)")
    assert isinstance(node, Derivative)
    assert node.number_of_operands() == 3
    assert node.function == parse("x^2")
    assert node.bound_symbol == Symbol("x")
    assert node.point == Number(3)


def test_bound_operand_must_be_a_symbol():
    """Tests that a non-symbol bound operand is rejected at construction."""
    with pytest.raises(InvalidOperandError, match="operand 1 must be a Symbol"):
        Derivative(parse("x^2"), Number(1), Number(3))
    with pytest.raises(InvalidOperandError):
        parse("diff(x^2,2,3)")
    with pytest.raises(TypeError):
        parse("diff(x^2,x+1,3)")


@pytest.mark.parametrize("operands", [(), (Symbol("x"),), (Symbol("x"),) * 4])
def test_operand_count_is_enforced(operands):
    """Tests that anything but three operands is a contract violation."""
    with pytest.raises(InvalidOperandError, match="exactly 3 operands"):
        Derivative(*operands)


@pytest.mark.parametrize(
    "text, symbol, degree",
    [
        ("diff(x^2,x,3)", "y", 0),
        ("diff(sin(x)*a,x,b)", "y", 0),
        ("diff(x^2,x,3)", "x", UNKNOWN_DEGREE),
        ("diff(x*y,x,1)", "y", UNKNOWN_DEGREE),
        ("diff(x^2,x,y)", "y", UNKNOWN_DEGREE),
        ("diff(x^2,y,1)", "y", UNKNOWN_DEGREE),
    ],
)
def test_polynomial_degree(text, symbol, degree):
    """Tests that the degree is 0 only when no operand depends on the symbol."""
    assert parse(text).polynomial_degree(symbol) == degree


@pytest.mark.parametrize(
    "text, expected",
    [
        ("diff(s^3,s,2)", 12.0),
        ("diff(exp(s),s,0)", 1.0),
        ("diff(sin(s),s,0)", 1.0),
        ("diff(s^2,s,3)", 6.0),
        ("diff(ln(s),s,2)", 0.5),
        ("diff(3*s^2-2*s+1,s,-1)", -8.0),
    ],
)
def test_approximate_end_to_end(text, expected):
    """Tests numeric derivatives of parsed expressions."""
    assert float(parse(text).approximate()) == pytest.approx(expected, abs=1e-8)


@pytest.mark.parametrize(
    "text",
    [
        "diff(1/s,s,0)",
        "diff(ln(s),s,0)",
        "diff(s^2,s,undef)",
        "diff(s^2,s,1/0)",
        "diff(s^2,s,t)",
    ],
)
def test_approximate_undefined(text):
    """Tests that NaN inputs give an undefined derivative."""
    assert np.isnan(parse(text).approximate())


def test_non_numeric_input_reason():
    """Tests the failure kind for a singular point."""
    result = parse("diff(1/s,s,0)").differentiate()
    assert not result.is_defined
    assert result.reason is UndefinedReason.NON_NUMERIC_INPUT


def test_convergence_failure_reason():
    """Tests the failure kind for a function undefined on one side."""
    result = parse("diff(sqrt(s),s,0)").differentiate()
    assert result.reason is UndefinedReason.CONVERGENCE_FAILURE


@pytest.mark.parametrize("text", ["diff([[1,2][3,4]]*s,s,1)", "diff(i*s,s,1)", "diff(s,s,[[1]])"])
def test_matrix_and_complex_operands_are_unsupported(text, caplog):
    """Tests that matrix or complex operands are rejected before numeric work."""
    with caplog.at_level(logging.WARNING, logger="derivnode"):
        result = parse(text).differentiate()

    assert result.reason is UndefinedReason.UNSUPPORTED_OPERAND_KIND
    assert any("matrix or complex" in rec.getMessage() for rec in caplog.records)


def test_point_is_evaluated_in_context():
    """Tests that the point may depend on other bound symbols."""
    node = parse("diff(s^2,s,a+1)")
    assert float(node.approximate(Context({"a": 2.0}))) == pytest.approx(6.0, abs=1e-8)


def test_bound_symbol_shadows_context_value():
    """Tests that an outer value of the bound symbol does not leak into the function."""
    node = parse("diff(s^2,s,3)")
    assert float(node.approximate(Context({"s": 100.0}))) == pytest.approx(6.0, abs=1e-8)


def test_function_is_evaluated_with_the_bound_value(monkeypatch):
    """Tests that each function evaluation binds the bound symbol and keeps other values."""
    seen = []
    original = Expression.approximate_with_value_for_symbol

    def spy(self, name, value, *args, **kwargs):
        seen.append(name)
        return original(self, name, value, *args, **kwargs)

    monkeypatch.setattr(Expression, "approximate_with_value_for_symbol", spy)
    value = parse("diff(a*s^2,s,3)").approximate(Context({"a": 2.0}))

    assert float(value) == pytest.approx(12.0, abs=1e-8)
    assert seen and set(seen) == {"s"}


def test_angle_unit_reaches_the_function():
    """Tests that d/ds sin(s) at 0 in degrees is pi/180."""
    value = parse("diff(sin(s),s,0)").approximate(angle_unit=AngleUnit.DEGREE)
    assert float(value) == pytest.approx(math.pi / 180.0, rel=1e-8)


def test_nested_derivative():
    """Tests a derivative whose function is itself a derivative."""
    value = parse("diff(diff(s^2,s,t),t,1)").approximate()
    assert float(value) == pytest.approx(2.0, abs=1e-6)


@pytest.mark.parametrize("precision, tol", [("full", 1e-8), ("reduced", 1e-3)])
def test_working_precision(precision, tol):
    """Tests d/ds s^2 at 3 in both precisions."""
    result = parse("diff(s^2,s,3)").differentiate(precision=precision)
    assert isinstance(result, DifferentiationResult)
    assert abs(float(result.value) - 6.0) <= max(float(result.error), tol)


def test_approximation_is_repeatable():
    """Tests that two evaluations give bit-identical results."""
    node = parse("diff(sin(s)*exp(s),s,0.3)")
    assert node.approximate().tobytes() == node.approximate().tobytes()


def test_differentiate_accepts_config():
    """Tests that a custom configuration is used."""
    node = parse("diff(sin(s),s,0.7)")
    result = node.differentiate(config=RiddersConfig(min_initial_step=1e-3))
    assert result.step == pytest.approx(1e-3)


def test_reduce_keeps_node_and_reduces_operands():
    """Tests that reduction simplifies operands but applies no symbolic rule."""
    reduced = parse("diff(x^(1+1),x,1+2)").reduce()
    assert isinstance(reduced, Derivative)
    assert reduced.serialize() == "diff(x^2,x,3)"


def test_reduce_does_not_substitute_the_bound_symbol():
    """Tests that context values replace free symbols but not the bound one."""
    reduced = parse("diff(x^2*a,x,a)").reduce(Context({"x": 5.0, "a": 2.0}))
    assert reduced.serialize() == "diff(x^2*2,x,2)"


@pytest.mark.parametrize("text", ["diff(undef,x,1)", "diff(x^2,x,1/0)", "diff(x^2,x,[[1,2]])", "diff([[x]],x,1)"])
def test_reduce_to_undefined(text):
    """Tests that undefined or matrix operands reduce the node to undefined."""
    assert isinstance(parse(text).reduce(), Undefined)


def test_replace_unknown_in_function_and_point():
    """Tests substitution of the unknown around a bound symbol."""
    node = Derivative(parse("?x^2+t"), Symbol("t"), parse("?x+1"))
    replaced = node.replace_unknown(Symbol("y"))

    assert isinstance(replaced, Derivative)
    assert replaced.number_of_operands() == 3
    assert replaced.serialize() == "diff(y^2+t,t,y+1)"


def test_replace_unknown_respects_bound_unknown():
    """Tests that an unknown bound by the node is not replaced inside its function."""
    node = Derivative(parse("?x^2"), Symbol.unknown(), parse("?x+1"))
    replaced = node.replace_unknown(Symbol("y"))

    assert replaced.serialize() == "diff(?x^2,?x,y+1)"


def test_layout_is_a_prefix_call():
    """Tests that the node is laid out as diff(...)."""
    layout = parse("diff(x^2,x,3)").create_layout()
    assert isinstance(layout, HorizontalLayout)
    assert layout.children[0] == StringLayout(Derivative.NAME)
    assert layout.text() == "diff(x^2,x,3)"


def test_serialization_round_trip():
    """Tests that the operator token reads back through the parser."""
    node = Derivative(parse("exp(s)"), Symbol("s"), Number(0))
    assert node.serialize() == "diff(exp(s),s,0)"
    assert parse(node.serialize()) == node
