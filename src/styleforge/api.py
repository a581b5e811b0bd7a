"""Public authoring API used inside definition files.

Registering calls act on the active :func:`~styleforge.scope.file_scope`::

    from styleforge import create_theme, style

    theme_class, vars = create_theme({"color": {"brand": "blue"}})
    button = style({"color": vars.color.brand, ":hover": {"opacity": 0.8}})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from styleforge.model.contract import ThemeContract
from styleforge.model.variables import VariableRef
from styleforge.scope import current_scope
from styleforge.theme import assign_vars, fallback_var, inline_theme

__all__ = [
    "assign_vars",
    "create_global_theme",
    "create_theme",
    "create_theme_vars",
    "create_var",
    "fallback_var",
    "font_face",
    "global_font_face",
    "global_keyframes",
    "global_style",
    "inline_theme",
    "keyframes",
    "map_to_styles",
    "style",
]


def style(rule: Any, debug_id: str | None = None) -> str:
    return current_scope().style(rule, debug_id)


def global_style(selector: str, rule: Mapping[str, Any]) -> None:
    current_scope().global_style(selector, rule)


def map_to_styles(
    values: Mapping[Any, Any],
    map_fn: Callable[[Any, Any], Any] | None = None,
    debug_id: str | None = None,
) -> dict[Any, str]:
    """Create one style per entry of *values*, keyed like the input."""
    return current_scope().map_to_styles(values, map_fn, debug_id)


def create_var(debug_id: str | None = None) -> VariableRef:
    return current_scope().create_var(debug_id)


def create_theme_vars(shape: Mapping[str, Any]) -> ThemeContract:
    return current_scope().create_theme_vars(shape)


def create_theme(
    contract_or_values: ThemeContract | Mapping[str, Any],
    values: Mapping[str, Any] | None = None,
    debug_id: str | None = None,
) -> Any:
    return current_scope().create_theme(contract_or_values, values, debug_id)


def create_global_theme(
    selector: str,
    contract_or_values: ThemeContract | Mapping[str, Any],
    values: Mapping[str, Any] | None = None,
) -> ThemeContract | None:
    return current_scope().create_global_theme(selector, contract_or_values, values)


def keyframes(frames: Mapping[str, Mapping[str, Any]], debug_id: str | None = None) -> str:
    return current_scope().keyframes(frames, debug_id)


def global_keyframes(name: str, frames: Mapping[str, Mapping[str, Any]]) -> None:
    current_scope().global_keyframes(name, frames)


def font_face(rule: Any, debug_id: str | None = None) -> str:
    return current_scope().font_face(rule, debug_id)


def global_font_face(family: str, rule: Any) -> None:
    current_scope().global_font_face(family, rule)
