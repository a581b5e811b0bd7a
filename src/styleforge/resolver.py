"""Style descriptor resolver: nested descriptors to an ordered list of rules.

A descriptor is a plain mapping::

    {
        "color": "black",
        "padding": 12,                      # -> 12px
        "vars": {brand: "blue"},            # custom property assignments
        ":hover": {"color": "red"},         # shorthand for "&:hover"
        "selectors": {"nav > &": {...}},    # "&" is the owning selector
        "@media": {"(min-width: 600px)": {...}},
        "@supports": {"(display: grid)": {...}},
        "@keyframes": {"from": {...}, "to": {...}},
        "animation": "@keyframes 1s infinite",
    }

Rules come out in a fixed priority: base declarations, pseudo selectors,
``selectors``, condition blocks, then inline keyframes.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from styleforge.calc.expression import (
    CalcChain,
    Negation,
    Operation,
    format_number,
    iter_variables,
)
from styleforge.config import BuildConfig
from styleforge.errors import InvalidSelector, StyleError, UnresolvedVariableReference
from styleforge.model.rule import Condition, Rule
from styleforge.model.variables import VariableRef

__all__ = ["StyleResolver", "css_property", "render_value"]

Descriptor = Mapping[str, Any]

KEYFRAMES_TOKEN = "@keyframes"

_CONDITION_KEYS = {"@media": "media", "@supports": "supports", "@container": "container"}
_NESTED_KEYS = {"vars", "selectors", KEYFRAMES_TOKEN, *_CONDITION_KEYS}
_UPPER_RE = re.compile(r"[A-Z]")


def css_property(name: str) -> str:
    """Convert a camelCase property name to its CSS spelling.

    ``backgroundColor`` -> ``background-color``; a leading capital or ``ms``
    marks a vendor prefix (``WebkitAppearance`` -> ``-webkit-appearance``).
    Custom properties and names already containing ``-`` are kept.
    """
    if name.startswith("--") or "-" in name:
        return name
    if name.startswith("ms") and len(name) > 2 and name[2].isupper():
        name = "-" + name
    return _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), name)


def render_value(
    prop: str,
    value: object,
    config: BuildConfig,
    is_known: Callable[[str], bool] | None = None,
) -> str:
    """Render one declaration value.

    Bare numbers receive ``config.default_unit`` unless the property is a
    custom property or listed in ``config.unitless_properties``.  When
    *is_known* is given, every variable reference is checked against it.
    """
    if isinstance(value, (VariableRef, Operation, Negation, CalcChain)):
        if is_known is not None:
            for ref in iter_variables(value):
                if not is_known(ref.name):
                    raise UnresolvedVariableReference(
                        f"Variable {ref.property} used in {prop!r} was not "
                        "created in this build",
                        variable=ref.name,
                    )
        return str(value)
    if isinstance(value, bool):
        raise StyleError(f"Unsupported value for {prop!r}: {value!r}")
    if isinstance(value, (int, float)):
        if value == 0 or prop.startswith("--") or prop in config.unitless_properties:
            return format_number(value)
        return f"{format_number(value)}{config.default_unit}"
    if isinstance(value, str):
        return value
    raise StyleError(f"Unsupported value for {prop!r}: {value!r}")


class StyleResolver:
    """Resolve descriptors for one owner selector into ordered rules.

    ``allocate`` produces identifiers for inline keyframes; ``is_known``
    reports whether a variable name belongs to the current build.
    """

    def __init__(
        self,
        config: BuildConfig,
        is_known: Callable[[str], bool] | None = None,
        allocate: Callable[[str | None], str] | None = None,
    ) -> None:
        self.config = config
        self._is_known = is_known
        self._allocate = allocate

    def resolve(self, descriptor: Descriptor, selector: str) -> list[Rule]:
        rules: list[Rule] = []
        self._resolve_block(descriptor, selector, (), None, rules)
        return rules

    def render(self, prop: str, value: object) -> str:
        return render_value(prop, value, self.config, self._is_known)

    # --- traversal ----------------------------------------------------------

    def _resolve_block(
        self,
        descriptor: Descriptor,
        selector: str,
        conditions: tuple[Condition, ...],
        animation: str | None,
        out: list[Rule],
    ) -> None:
        if not isinstance(descriptor, Mapping):
            raise StyleError(
                f"Style block for {selector!r} must be a mapping, got {type(descriptor).__name__}"
            )
        frames = descriptor.get(KEYFRAMES_TOKEN)
        if frames:
            animation = self._allocate_name("keyframes")

        declarations = self.declarations(descriptor, animation)
        if declarations:
            out.append(Rule(selector, declarations, conditions))

        # Pseudo keys first, then explicit selectors.
        for key, nested in descriptor.items():
            if key.startswith(":"):
                self._resolve_block(nested, f"{selector}{key}", conditions, animation, out)
        for raw, nested in (descriptor.get("selectors") or {}).items():
            if "&" not in raw:
                raise InvalidSelector(
                    f"Selector {raw!r} must target the current element with '&'"
                )
            self._resolve_block(nested, raw.replace("&", selector), conditions, animation, out)

        for key, blocks in descriptor.items():
            kind = _CONDITION_KEYS.get(key)
            if kind is None:
                if key.startswith("@") and key not in _NESTED_KEYS:
                    raise StyleError(f"Unsupported at-rule key {key!r}")
                continue
            for query, nested in blocks.items():
                self._resolve_block(
                    nested, selector, (*conditions, Condition(kind, query)), animation, out
                )

        if frames:
            out.extend(self.keyframes(animation, frames, conditions))

    def declarations(
        self, descriptor: Descriptor, animation: str | None = None
    ) -> tuple[tuple[str, str], ...]:
        """Flatten a descriptor's own properties, keeping authored order."""
        result: list[tuple[str, str]] = []
        for key, value in descriptor.items():
            if key == "vars":
                for var, assigned in value.items():
                    prop = self._var_property(var)
                    result.append((prop, self.render(prop, assigned)))
                continue
            if key in _NESTED_KEYS or key.startswith((":", "@")):
                continue
            prop = css_property(key)
            values = value if isinstance(value, (list, tuple)) else [value]
            for item in values:
                if item is None:
                    continue
                rendered = self.render(prop, item)
                if animation and KEYFRAMES_TOKEN in rendered:
                    rendered = rendered.replace(KEYFRAMES_TOKEN, animation)
                result.append((prop, rendered))
        return tuple(result)

    def keyframes(
        self,
        name: str,
        frames: Mapping[str, Descriptor],
        conditions: tuple[Condition, ...] = (),
    ) -> list[Rule]:
        return [
            Rule(offset, self.declarations(block), conditions, keyframes=name)
            for offset, block in frames.items()
        ]

    # --- helpers ------------------------------------------------------------

    def _var_property(self, var: object) -> str:
        if isinstance(var, VariableRef):
            if self._is_known is not None and not self._is_known(var.name):
                raise UnresolvedVariableReference(
                    f"Variable {var.property} is assigned but was not created in this build",
                    variable=var.name,
                )
            return var.property
        if isinstance(var, str) and var.startswith("--"):
            return var
        raise StyleError(f"vars keys must be variables or '--' names, got {var!r}")

    def _allocate_name(self, debug_id: str) -> str:
        if self._allocate is None:
            raise StyleError("Inline @keyframes need an identifier allocator")
        return self._allocate(debug_id)
