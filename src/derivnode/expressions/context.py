"""Evaluation context and display preferences for expressions."""

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Mapping

__all__ = [
    "AngleUnit",
    "PrintFloatMode",
    "DEFAULT_SIGNIFICANT_DIGITS",
    "Context",
]

DEFAULT_SIGNIFICANT_DIGITS = 10


class AngleUnit(Enum):
    """Angle convention used by trigonometric functions."""

    RADIAN = "radian"
    DEGREE = "degree"
    GRADIAN = "gradian"

    @property
    def radians_per_unit(self) -> float:
        """Size of one unit of this convention, in radians."""
        if self is AngleUnit.DEGREE:
            return math.pi / 180.0
        if self is AngleUnit.GRADIAN:
            return math.pi / 200.0
        return 1.0


class PrintFloatMode(Enum):
    """How numbers are written when serializing or laying out expressions."""

    DECIMAL = "decimal"
    SCIENTIFIC = "scientific"


class Context:
    """Immutable mapping from symbol names to numeric values.

    Binding a symbol never mutates a context: :meth:`with_binding` and
    :meth:`without` return new contexts, so one context can be shared by
    concurrent evaluations.

    Examples:
        >>> ctx = Context({"a": 2.0})
        >>> ctx.with_binding("x", 3.0).value_for("x")
        3.0
        >>> ctx.value_for("x") is None
        True
    """

    def __init__(self, bindings: Mapping[str, float] | None = None) -> None:
        self._bindings = MappingProxyType(dict(bindings or {}))

    @property
    def bindings(self) -> Mapping[str, float]:
        """Read-only view of the bound values."""
        return self._bindings

    def value_for(self, name: str) -> float | None:
        """Returns the value bound to ``name``, or None if it is unbound."""
        return self._bindings.get(name)

    def with_binding(self, name: str, value: float) -> Context:
        """Returns a copy of this context where ``name`` is bound to ``value``."""
        bindings = dict(self._bindings)
        bindings[name] = value
        return Context(bindings)

    def without(self, name: str) -> Context:
        """Returns a copy of this context where ``name`` is unbound."""
        if name not in self._bindings:
            return self
        bindings = dict(self._bindings)
        del bindings[name]
        return Context(bindings)

    def __repr__(self) -> str:
        return f"Context({dict(self._bindings)!r})"
