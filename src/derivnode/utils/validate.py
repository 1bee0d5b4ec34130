"""Validation utilities for expression nodes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from derivnode.exceptions import InvalidOperandError

__all__ = [
    "validate_operand_count",
    "validate_operand_kind",
]


def validate_operand_count(operands: Sequence[Any], expected: int, name: str) -> None:
    """Checks that an operator received exactly ``expected`` operands.

    Args:
        operands: The operands given to the operator.
        expected: Required number of operands.
        name: Operator name used in the error message.

    Raises:
        InvalidOperandError: If the count differs.
    """
    if len(operands) != expected:
        raise InvalidOperandError(
            f"{name}() takes exactly {expected} operands; got {len(operands)}."
        )


def validate_operand_kind(operand: Any, kind: type, name: str, index: int) -> None:
    """Checks that operand ``index`` of an operator is an instance of ``kind``.

    Args:
        operand: The operand to check.
        kind: Required node class.
        name: Operator name used in the error message.
        index: Position of the operand, used in the error message.

    Raises:
        InvalidOperandError: If ``operand`` is not a ``kind``.
    """
    if not isinstance(operand, kind):
        raise InvalidOperandError(
            f"{name}() operand {index} must be a {kind.__name__}; "
            f"got {type(operand).__name__}."
        )
