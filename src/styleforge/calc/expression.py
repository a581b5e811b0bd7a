"""Calc expression AST, standalone operators and the chainable builder."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from styleforge.errors import InvalidCalcOperands
from styleforge.model.variables import VariableRef

__all__ = [
    "CalcChain",
    "CalcExpression",
    "Negation",
    "Operation",
    "add",
    "calc",
    "divide",
    "format_number",
    "iter_variables",
    "multiply",
    "negate",
    "subtract",
]

_BARE_NUMBER_RE = re.compile(r"^\s*-?(\d+\.?\d*|\.\d+)\s*$")


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0`` or exponent notation."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        text = f"{value:.10f}".rstrip("0").rstrip(".")
        return text if text not in ("", "-0") else "0"
    return str(value)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_dimensionless(value: object) -> bool:
    if _is_number(value):
        return True
    return isinstance(value, str) and bool(_BARE_NUMBER_RE.match(value))


def _numeric(value: object) -> float:
    return float(value)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Operation:
    """A binary operation applied left to right across its operands."""

    operator: str  # "+", "-", "*", "/"
    operands: tuple[object, ...]

    def render(self) -> str:
        return f" {self.operator} ".join(_render_operand(o) for o in self.operands)

    def __str__(self) -> str:
        return f"calc({self.render()})"


@dataclass(frozen=True)
class Negation:
    """Unary minus, rendered as multiplication by ``-1``."""

    operand: object

    def render(self) -> str:
        return f"{_render_operand(self.operand)} * -1"

    def __str__(self) -> str:
        return f"calc({self.render()})"


CalcExpression = Union[Operation, Negation]
CalcOperand = Union[int, float, str, VariableRef, Operation, Negation, "CalcChain"]


def _render_operand(operand: object) -> str:
    if isinstance(operand, (Operation, Negation)):
        return f"({operand.render()})"
    if _is_number(operand):
        return format_number(operand)  # type: ignore[arg-type]
    return str(operand)


def _unwrap(operand: object) -> object:
    if isinstance(operand, CalcChain):
        return operand.expression
    if isinstance(operand, bool) or not isinstance(
        operand, (int, float, str, VariableRef, Operation, Negation)
    ):
        raise InvalidCalcOperands(f"Unsupported calc operand: {operand!r}")
    return operand


def iter_variables(node: object) -> Iterator[VariableRef]:
    """Yield every :class:`VariableRef` reachable from *node*."""
    node = node.expression if isinstance(node, CalcChain) else node
    if isinstance(node, VariableRef):
        yield node
    elif isinstance(node, Operation):
        for operand in node.operands:
            yield from iter_variables(operand)
    elif isinstance(node, Negation):
        yield from iter_variables(node.operand)


# ---------------------------------------------------------------------------
# Standalone operators
# ---------------------------------------------------------------------------


def _sum(operator: str, name: str, operands: tuple[CalcOperand, ...]) -> Operation:
    if len(operands) < 2:
        raise InvalidCalcOperands(
            f"{name}() needs at least 2 operands, got {len(operands)}"
        )
    return Operation(operator, tuple(_unwrap(o) for o in operands))


def add(*operands: CalcOperand) -> Operation:
    return _sum("+", "add", operands)


def subtract(*operands: CalcOperand) -> Operation:
    return _sum("-", "subtract", operands)


def multiply(*operands: CalcOperand) -> Operation:
    """Multiply operands; at most one of them may carry a dimension."""
    if len(operands) < 2:
        raise InvalidCalcOperands(
            f"multiply() needs at least 2 operands, got {len(operands)}"
        )
    values = tuple(_unwrap(o) for o in operands)
    dimensioned = [v for v in values if not _is_dimensionless(v)]
    if len(dimensioned) > 1:
        raise InvalidCalcOperands(
            "multiply() needs all but one operand to be a bare number, got "
            + ", ".join(_render_operand(v) for v in dimensioned)
        )
    return Operation("*", values)


def divide(dividend: CalcOperand, *divisors: CalcOperand) -> Operation:
    """Divide *dividend* by each divisor in turn; divisors must be bare numbers."""
    if not divisors:
        raise InvalidCalcOperands("divide() needs at least one divisor")
    values = tuple(_unwrap(o) for o in (dividend, *divisors))
    for divisor in values[1:]:
        if not _is_dimensionless(divisor):
            raise InvalidCalcOperands(
                f"divide() divisor must be a bare number, got {_render_operand(divisor)}"
            )
        if _numeric(divisor) == 0:
            raise InvalidCalcOperands("divide() divisor must not be zero")
    return Operation("/", values)


def negate(operand: CalcOperand) -> Negation:
    return Negation(_unwrap(operand))


# ---------------------------------------------------------------------------
# Chainable builder
# ---------------------------------------------------------------------------


class CalcChain:
    """Immutable builder: each call returns a new chain wrapping the last.

    >>> str(calc("var(--x)").divide(2).multiply(4))
    'calc((var(--x) / 2) * 4)'
    """

    __slots__ = ("_expression",)

    def __init__(self, seed: CalcOperand) -> None:
        self._expression = _unwrap(seed)

    @property
    def expression(self) -> object:
        return self._expression

    def add(self, *operands: CalcOperand) -> CalcChain:
        return CalcChain(add(self._expression, *operands))

    def subtract(self, *operands: CalcOperand) -> CalcChain:
        return CalcChain(subtract(self._expression, *operands))

    def multiply(self, *operands: CalcOperand) -> CalcChain:
        return CalcChain(multiply(self._expression, *operands))

    def divide(self, *divisors: CalcOperand) -> CalcChain:
        return CalcChain(divide(self._expression, *divisors))

    def negate(self) -> CalcChain:
        return CalcChain(negate(self._expression))

    def __str__(self) -> str:
        if isinstance(self._expression, (Operation, Negation)):
            return str(self._expression)
        return f"calc({_render_operand(self._expression)})"

    def __repr__(self) -> str:
        return f"CalcChain({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CalcChain):
            return self._expression == other._expression
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._expression)


def calc(seed: CalcOperand) -> CalcChain:
    return CalcChain(seed)
