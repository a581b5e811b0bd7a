"""styleforge model layer -- public type re-exports."""

from styleforge.model.contract import ThemeContract
from styleforge.model.rule import Condition, Rule, render_block
from styleforge.model.variables import VariableRef

__all__ = [
    # rule
    "Rule",
    "Condition",
    "render_block",
    # variables
    "VariableRef",
    # contract
    "ThemeContract",
]
