"""Parser for calculator-style expression text.

Grammar::

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := "-" unary | power
    power      := primary ("^" unary)?
    primary    := number | name "(" arguments ")" | name
                | "(" expression ")" | matrix
    matrix     := "[" ("[" arguments "]")+ "]"
    arguments  := expression ("," expression)*

Names ``pi`` and ``e`` are constants, ``i`` is the imaginary unit and
``undef`` the undefined value; any other name is a symbol. A name
followed by ``(`` must be a known function or ``diff``.

Examples:
    >>> parse("diff(x^2,x,3)").serialize()
    'diff(x^2,x,3)'
    >>> parse("2*-x")
    Multiplication('2*-x')
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple

from derivnode.exceptions import ParseError
from derivnode.expressions.core import Constant, Expression, ImaginaryUnit, Number, Symbol, Undefined
from derivnode.expressions.derivative import Derivative
from derivnode.expressions.functions import FUNCTIONS
from derivnode.expressions.helpers import UNDEFINED_TOKEN, UNKNOWN_SYMBOL_NAME
from derivnode.expressions.matrix import Matrix
from derivnode.expressions.operators import (
    Addition,
    Division,
    Multiplication,
    Opposite,
    Power,
    Subtraction,
)

__all__ = ["parse", "CALLABLES"]

CALLABLES: dict[str, Callable[..., Expression]] = {**FUNCTIONS, Derivative.NAME: Derivative}

_TOKEN_RE = re.compile(
    r"""
    (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<name>[A-Za-z_][A-Za-z_0-9]*|""" + re.escape(UNKNOWN_SYMBOL_NAME) + r""")
    |(?P<op>[-+*/^(),\[\]])
    |(?P<space>\s+)
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Splits ``text`` into tokens, dropping whitespace.

    Raises:
        ParseError: On a character that starts no token.
    """
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise ParseError(f"Unexpected character {text[position]!r} at position {position}.")
        if match.lastgroup != "space":
            tokens.append(Token(match.lastgroup, match.group(), position))
        position = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


class _Parser:
    def __init__(self, text: str) -> None:
        self.tokens = tokenize(text)
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.current
        self.index += 1
        return token

    def accept(self, text: str) -> bool:
        if self.current.kind == "op" and self.current.text == text:
            self.index += 1
            return True
        return False

    def expect(self, text: str) -> None:
        if not self.accept(text):
            token = self.current
            found = token.text or "end of input"
            raise ParseError(f"Expected {text!r} at position {token.position}, found {found!r}.")

    def parse(self) -> Expression:
        expression = self.expression()
        if self.current.kind != "end":
            token = self.current
            raise ParseError(f"Unexpected {token.text!r} at position {token.position}.")
        return expression

    def expression(self) -> Expression:
        left = self.term()
        while True:
            if self.accept("+"):
                left = Addition(left, self.term())
            elif self.accept("-"):
                left = Subtraction(left, self.term())
            else:
                return left

    def term(self) -> Expression:
        left = self.unary()
        while True:
            if self.accept("*"):
                left = Multiplication(left, self.unary())
            elif self.accept("/"):
                left = Division(left, self.unary())
            else:
                return left

    def unary(self) -> Expression:
        if self.accept("-"):
            return Opposite(self.unary())
        return self.power()

    def power(self) -> Expression:
        base = self.primary()
        if self.accept("^"):
            return Power(base, self.unary())
        return base

    def arguments(self, closing: str) -> list[Expression]:
        arguments = [self.expression()]
        while self.accept(","):
            arguments.append(self.expression())
        self.expect(closing)
        return arguments

    def primary(self) -> Expression:
        token = self.current
        if token.kind == "number":
            self.advance()
            return Number(float(token.text))
        if token.kind == "name":
            self.advance()
            if self.accept("("):
                if token.text not in CALLABLES:
                    raise ParseError(f"Unknown function {token.text!r} at position {token.position}.")
                return CALLABLES[token.text](*self.arguments(")"))
            return self._name(token.text)
        if self.accept("("):
            inner = self.expression()
            self.expect(")")
            return inner
        if self.accept("["):
            rows = []
            while self.accept("["):
                rows.append(self.arguments("]"))
            self.expect("]")
            try:
                return Matrix(rows)
            except ValueError as error:
                raise ParseError(str(error)) from error
        found = token.text or "end of input"
        raise ParseError(f"Unexpected {found!r} at position {token.position}.")

    @staticmethod
    def _name(name: str) -> Expression:
        if name in Constant.VALUES:
            return Constant(name)
        if name == "i":
            return ImaginaryUnit()
        if name == UNDEFINED_TOKEN:
            return Undefined()
        return Symbol(name)


def parse(text: str) -> Expression:
    """Parses expression text into a tree.

    Args:
        text: The expression, e.g. ``"diff(sin(x),x,0)"``.

    Returns:
        The root node.

    Raises:
        ParseError: If the text is malformed or calls an unknown function.
        InvalidOperandError: If a call has the wrong operands, e.g. a
            ``diff`` whose second argument is not a symbol.
    """
    return _Parser(text).parse()
