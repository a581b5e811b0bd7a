from styleforge.calc.expression import (
    CalcChain,
    CalcExpression,
    Negation,
    Operation,
    add,
    calc,
    divide,
    format_number,
    iter_variables,
    multiply,
    negate,
    subtract,
)
from styleforge.calc.parser import parse_calc

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
    "parse_calc",
    "subtract",
]
