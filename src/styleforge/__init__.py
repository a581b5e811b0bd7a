"""styleforge -- author CSS as Python data, compile it to static scoped CSS."""

__version__ = "0.3.0"

from styleforge.api import (  # noqa: E402
    assign_vars,
    create_global_theme,
    create_theme,
    create_theme_vars,
    create_var,
    fallback_var,
    font_face,
    global_font_face,
    global_keyframes,
    global_style,
    inline_theme,
    keyframes,
    map_to_styles,
    style,
)
from styleforge.build import BuildResult, build  # noqa: E402
from styleforge.calc import (  # noqa: E402
    add,
    calc,
    divide,
    multiply,
    negate,
    parse_calc,
    subtract,
)
from styleforge.config import BuildConfig  # noqa: E402
from styleforge.errors import (  # noqa: E402
    ContractViolation,
    IdentifierConflict,
    InvalidCalcOperands,
    InvalidSelector,
    ScopeError,
    StyleError,
    UnresolvedVariableReference,
)
from styleforge.model import Condition, Rule, ThemeContract, VariableRef  # noqa: E402
from styleforge.registry import Registry  # noqa: E402
from styleforge.scope import StyleScope, current_scope, file_scope  # noqa: E402

__all__ = [
    "__version__",
    # api
    "style",
    "global_style",
    "create_var",
    "fallback_var",
    "create_theme_vars",
    "create_theme",
    "create_global_theme",
    "assign_vars",
    "inline_theme",
    "map_to_styles",
    "keyframes",
    "global_keyframes",
    "font_face",
    "global_font_face",
    # calc
    "calc",
    "add",
    "subtract",
    "multiply",
    "divide",
    "negate",
    "parse_calc",
    # build
    "build",
    "BuildResult",
    "BuildConfig",
    "Registry",
    "StyleScope",
    "file_scope",
    "current_scope",
    # model
    "Rule",
    "Condition",
    "VariableRef",
    "ThemeContract",
    # errors
    "StyleError",
    "ContractViolation",
    "IdentifierConflict",
    "UnresolvedVariableReference",
    "InvalidCalcOperands",
    "InvalidSelector",
    "ScopeError",
]
