"""Theme variable system: contract construction and completeness checks."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from styleforge.config import BuildConfig
from styleforge.errors import ContractViolation, StyleError
from styleforge.model.contract import ThemeContract
from styleforge.model.variables import VariableRef
from styleforge.resolver import render_value

__all__ = ["assign_vars", "build_contract", "fallback_var", "inline_theme", "match_values"]


def build_contract(
    shape: Mapping[str, Any],
    allocate: Callable[[tuple[str, ...]], VariableRef],
    _prefix: tuple[str, ...] = (),
) -> ThemeContract:
    """Walk *shape* and allocate one variable per leaf.

    Mappings recurse; anything else (usually ``None``) marks a leaf whose
    value, if any, is ignored.
    """
    if not isinstance(shape, Mapping):
        raise StyleError(f"Theme shape must be a mapping, got {type(shape).__name__}")
    tree: dict[str, ThemeContract | VariableRef] = {}
    for key, value in shape.items():
        path = (*_prefix, str(key))
        if isinstance(value, Mapping):
            tree[str(key)] = build_contract(value, allocate, path)
        else:
            tree[str(key)] = allocate(path)
    return ThemeContract(tree, _prefix)


def _flatten(values: Any, prefix: tuple[str, ...] = ()) -> dict[tuple[str, ...], Any]:
    if not isinstance(values, Mapping):
        return {prefix: values}
    flat: dict[tuple[str, ...], Any] = {}
    for key, value in values.items():
        flat.update(_flatten(value, (*prefix, str(key))))
    return flat


def match_values(
    contract: ThemeContract | VariableRef, values: Any
) -> dict[VariableRef, Any]:
    """Pair every contract leaf with its value.

    The leaf paths of *values* must equal the contract's exactly; otherwise
    :class:`ContractViolation` names the missing and unexpected paths.
    """
    if isinstance(contract, VariableRef):
        if isinstance(values, Mapping):
            raise ContractViolation(
                f"Variable {contract.property} takes a single value, got a mapping",
                unexpected=tuple(".".join(p) for p in _flatten(values)),
            )
        return {contract: values}
    if not isinstance(values, Mapping):
        raise ContractViolation(
            f"Theme values must be a mapping, got {type(values).__name__}",
            missing=tuple(contract.leaf_paths()),
        )

    expected = contract.leaves()
    given = _flatten(values)
    missing = tuple(".".join(path) for path, _ in expected if path not in given)
    known = {path for path, _ in expected}
    unexpected = tuple(".".join(path) for path in given if path not in known)
    if missing or unexpected:
        details = []
        if missing:
            details.append("missing " + ", ".join(missing))
        if unexpected:
            details.append("unexpected " + ", ".join(unexpected))
        raise ContractViolation(
            "Theme values do not match contract: " + "; ".join(details),
            missing=missing,
            unexpected=unexpected,
        )
    return {ref: given[path] for path, ref in expected}


def assign_vars(
    contract: ThemeContract | VariableRef, values: Any
) -> dict[VariableRef, Any]:
    """Return a ``vars`` fragment assigning *values* to a contract subtree."""
    return match_values(contract, values)


def inline_theme(
    contract: ThemeContract,
    values: Mapping[str, Any],
    config: BuildConfig | None = None,
) -> str:
    """Render ``--a: v; --b: w;`` for use in an element's ``style`` attribute.

    Validates completeness like :func:`match_values` but touches no registry.
    """
    config = config or BuildConfig()
    return " ".join(
        f"{ref.property}: {render_value(ref.property, value, config)};"
        for ref, value in match_values(contract, values).items()
    )


def fallback_var(*values: VariableRef | str | int | float) -> str:
    """Chain variables into ``var(--a, var(--b, literal))``.

    Every argument but the last must be a variable.
    """
    if not values:
        raise StyleError("fallback_var() needs at least one value")
    *refs, last = values
    result = str(last)
    for ref in reversed(refs):
        if not isinstance(ref, VariableRef):
            raise StyleError(f"fallback_var() expects variables before the last value, got {ref!r}")
        result = str(ref.with_fallback(result))
    return result
