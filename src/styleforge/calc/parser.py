"""Lark-based parser turning CSS calc() text into a calc expression tree."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, VisitError

from styleforge.calc.expression import (
    Negation,
    Operation,
    add,
    divide,
    multiply,
    negate,
    subtract,
)
from styleforge.errors import InvalidCalcOperands

__all__ = ["parse_calc"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


def _chain(operator: str, build, left: object, right: object) -> Operation:
    # a - b - c parses left-nested; flatten it into a single operation.
    if isinstance(left, Operation) and left.operator == operator:
        return build(*left.operands, right)
    return build(left, right)


class CalcTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into calc AST nodes."""

    def number(self, items: list[Token]) -> int | float:
        raw = str(items[0])
        return float(raw) if "." in raw else int(raw)

    def dimension(self, items: list[Token]) -> str:
        return str(items[0])

    def variable(self, items: list[Token]) -> str:
        return str(items[0])

    def add(self, items: list[object]) -> Operation:
        return _chain("+", add, items[0], items[1])

    def subtract(self, items: list[object]) -> Operation:
        return _chain("-", subtract, items[0], items[1])

    def multiply(self, items: list[object]) -> Operation:
        return _chain("*", multiply, items[0], items[1])

    def divide(self, items: list[object]) -> Operation:
        return _chain("/", divide, items[0], items[1])

    def negate(self, items: list[object]) -> Negation:
        return negate(items[0])  # type: ignore[arg-type]


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def parse_calc(source: str) -> object:
    """Parse calc text (with or without the ``calc(...)`` wrapper).

    Returns an :class:`Operation`/:class:`Negation`, or the bare operand
    when the text holds a single value.  Operand rules are enforced exactly
    as for the builder functions.
    """
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise InvalidCalcOperands(
            f"Cannot parse calc expression {source!r}: {e}",
            line=line,
            column=column,
            cause=e,
        ) from e
    try:
        return CalcTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, InvalidCalcOperands):
            raise e.orig_exc from None
        raise
