"""Two-dimensional layouts of expressions.

A layout is the display form of an expression: a small tree of boxes that
a renderer draws. Layouts here only describe structure; ``text()`` gives
their linear reading, which matches the expression's serialization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from derivnode.expressions.context import PrintFloatMode

__all__ = [
    "Layout",
    "StringLayout",
    "HorizontalLayout",
    "ParenthesisLayout",
    "GridLayout",
    "prefix_layout",
    "infix_layout",
]


class Layout:
    """Base class of layout boxes."""

    children: tuple[Layout, ...] = ()

    def text(self) -> str:
        """Returns the linear reading of the layout."""
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def _key(self) -> tuple:
        return self.children

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text()!r})"


class StringLayout(Layout):
    """A run of characters."""

    def __init__(self, string: str) -> None:
        self.string = string

    def text(self) -> str:
        return self.string

    def _key(self) -> tuple:
        return (self.string,)


class HorizontalLayout(Layout):
    """Children laid out side by side."""

    def __init__(self, children: Sequence[Layout]) -> None:
        self.children = tuple(children)

    def text(self) -> str:
        return "".join(child.text() for child in self.children)


class ParenthesisLayout(Layout):
    """A child wrapped in parentheses that grow with it."""

    def __init__(self, child: Layout) -> None:
        self.children = (child,)

    def text(self) -> str:
        return f"({self.children[0].text()})"


class GridLayout(Layout):
    """Rows of cells, used for matrices."""

    def __init__(self, rows: Sequence[Sequence[Layout]]) -> None:
        self.rows = tuple(tuple(row) for row in rows)
        self.children = tuple(cell for row in self.rows for cell in row)

    def text(self) -> str:
        body = "".join("[" + ",".join(cell.text() for cell in row) + "]" for row in self.rows)
        return f"[{body}]"

    def _key(self) -> tuple:
        return self.rows


def prefix_layout(
    expression,
    name: str,
    float_mode: PrintFloatMode,
    significant_digits: int,
) -> Layout:
    """Lays out ``expression`` as a call ``name(child, child, ...)``.

    Args:
        expression: Node whose operands are laid out as the arguments.
        name: Function or operator name.
        float_mode: Number display mode, passed through to the operands.
        significant_digits: Number of significant digits, passed through.

    Returns:
        The call layout.
    """
    arguments: list[Layout] = []
    for index, operand in enumerate(expression.operands):
        if index > 0:
            arguments.append(StringLayout(","))
        arguments.append(operand.create_layout(float_mode, significant_digits))
    return HorizontalLayout([StringLayout(name), ParenthesisLayout(HorizontalLayout(arguments))])


def infix_layout(
    expression,
    token: str,
    float_mode: PrintFloatMode,
    significant_digits: int,
) -> Layout:
    """Lays out the operands of ``expression`` separated by ``token``.

    Operands binding more loosely than the operator are parenthesized.
    """
    parts: list[Layout] = []
    for index, operand in enumerate(expression.operands):
        if index > 0:
            parts.append(StringLayout(token))
        child = operand.create_layout(float_mode, significant_digits)
        if expression.needs_parentheses(operand, index):
            child = ParenthesisLayout(child)
        parts.append(child)
    return HorizontalLayout(parts)
