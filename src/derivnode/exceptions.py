"""Exceptions raised by derivnode.

Numeric edge cases (NaN inputs, non-convergence, matrix operands) are never
raised: they surface as an undefined result. Only broken structural
contracts and malformed input text are exceptions.
"""


class DerivNodeError(Exception):
    """Base exception for derivnode."""

    pass


class InvalidOperandError(DerivNodeError, TypeError):
    """An operator node was built with the wrong number or kind of operands."""

    pass


class ParseError(DerivNodeError, ValueError):
    """The expression text could not be parsed."""

    pass
