"""Matrix node.

Matrices exist in the tree so that operators can recognise and reject
them; they have no scalar approximation.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from derivnode.expressions.context import DEFAULT_SIGNIFICANT_DIGITS, PrintFloatMode
from derivnode.expressions.core import Expression
from derivnode.expressions.layout import GridLayout

__all__ = ["Matrix"]


class Matrix(Expression):
    """A rectangular matrix of expressions, stored row by row."""

    def __init__(self, rows: Sequence[Sequence[Expression]]) -> None:
        rows = [list(row) for row in rows]
        if not rows or not rows[0]:
            raise ValueError("Matrix requires at least one row and one column.")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Matrix rows must all have the same length.")
        super().__init__(*(entry for row in rows for entry in row))
        self.number_of_rows = len(rows)
        self.number_of_columns = width

    def rows(self) -> list[tuple[Expression, ...]]:
        n = self.number_of_columns
        return [self.operands[i:i + n] for i in range(0, len(self.operands), n)]

    def with_operands(self, operands: Iterable[Expression]) -> Expression:
        operands = list(operands)
        n = self.number_of_columns
        return Matrix([operands[i:i + n] for i in range(0, len(operands), n)])

    def _approximate(self, context, angle_unit, config):
        return config.nan

    def serialize(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS) -> str:
        body = "".join(
            "[" + ",".join(entry.serialize(float_mode, significant_digits) for entry in row) + "]"
            for row in self.rows()
        )
        return f"[{body}]"

    def create_layout(self, float_mode=PrintFloatMode.DECIMAL, significant_digits=DEFAULT_SIGNIFICANT_DIGITS):
        return GridLayout(
            [[entry.create_layout(float_mode, significant_digits) for entry in row] for row in self.rows()]
        )

    def _key(self) -> tuple:
        return (self.number_of_columns, self.operands)
