"""File scopes: per-file identifier allocation bound to a registry.

Every registering operation (``style``, ``create_theme``, ...) runs against
a :class:`StyleScope`.  The module-level API in :mod:`styleforge.api` finds
the active scope through a context variable set by :func:`file_scope`.
"""

from __future__ import annotations

import contextlib
import contextvars
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from styleforge.config import BuildConfig
from styleforge.errors import ScopeError, StyleError
from styleforge.identifiers import FileScope
from styleforge.model.contract import ThemeContract
from styleforge.model.rule import FONT_FACE, Rule
from styleforge.model.variables import VariableRef
from styleforge.registry import Registry
from styleforge.resolver import StyleResolver
from styleforge.theme import build_contract, match_values

__all__ = ["StyleScope", "current_scope", "file_scope"]

_current: contextvars.ContextVar[StyleScope | None] = contextvars.ContextVar(
    "styleforge_scope", default=None
)


def _merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(target.get(key), Mapping):
            merged = dict(target[key])
            _merge(merged, value)
            target[key] = merged
        else:
            target[key] = value


class StyleScope:
    """Operations for one definition file, registering into *registry*."""

    def __init__(
        self,
        file_path: str,
        registry: Registry,
        package_name: str | None = None,
    ) -> None:
        self.registry = registry
        self.config: BuildConfig = registry.config
        self.file = FileScope(file_path, package_name, self.config)
        self.file_index = registry.file_index(self.file.file_path)
        self._sequence = 0
        self.resolver = StyleResolver(self.config, registry.is_known, self.file.allocate)

    @property
    def file_path(self) -> str:
        return self.file.file_path

    def owns(self, value: object) -> bool:
        """True if *value* is (or starts with) an identifier allocated here."""
        if not isinstance(value, str) or not value:
            return False
        return value.split()[0] in self.file.allocated

    # --- registration plumbing ---------------------------------------------

    def _next_order(self) -> tuple[int, int]:
        order = (self.file_index, self._sequence)
        self._sequence += 1
        return order

    def _register(self, key: str, rules: list[Rule], label: str | None = None) -> None:
        self.registry.register(key, rules, order=self._next_order(), label=label)

    def _global_key(self) -> str:
        return f"global:{self.file_path}:{self._sequence}"

    # --- styles -------------------------------------------------------------

    def style(self, rule: Any, debug_id: str | None = None) -> str:
        """Register a scoped style and return its class name.

        *rule* may be a descriptor or a list mixing descriptors and existing
        class names; the latter are composed into the returned string.
        """
        composed: list[str] = []
        if isinstance(rule, (list, tuple)):
            descriptor: dict[str, Any] = {}
            for item in rule:
                if isinstance(item, str):
                    composed.extend(item.split())
                elif isinstance(item, Mapping):
                    _merge(descriptor, item)
                else:
                    raise StyleError(f"Cannot compose style from {item!r}")
        else:
            descriptor = rule
        identifier = self.file.allocate(debug_id)
        self._register(identifier, self.resolver.resolve(descriptor, f".{identifier}"), debug_id)
        return " ".join([identifier, *composed])

    def global_style(self, selector: str, descriptor: Mapping[str, Any]) -> None:
        key = self._global_key()
        self._register(key, self.resolver.resolve(descriptor, selector))

    def map_to_styles(
        self,
        values: Mapping[Any, Any],
        map_fn: Callable[[Any, Any], Any] | None = None,
        debug_id: str | None = None,
    ) -> dict[Any, str]:
        result: dict[Any, str] = {}
        for key, value in values.items():
            descriptor = map_fn(value, key) if map_fn is not None else value
            result[key] = self.style(descriptor, f"{debug_id}_{key}" if debug_id else str(key))
        return result

    def keyframes(self, frames: Mapping[str, Mapping[str, Any]], debug_id: str | None = None) -> str:
        name = self.file.allocate(debug_id)
        self._register(name, self.resolver.keyframes(name, frames), debug_id)
        return name

    def global_keyframes(self, name: str, frames: Mapping[str, Mapping[str, Any]]) -> None:
        self._register(self._global_key(), self.resolver.keyframes(name, frames))

    def font_face(self, rule: Any, debug_id: str | None = None) -> str:
        name = self.file.allocate(debug_id)
        self._register(name, self._font_rules(f'"{name}"', rule), debug_id)
        return name

    def global_font_face(self, family: str, rule: Any) -> None:
        self._register(self._global_key(), self._font_rules(family, rule))

    def _font_rules(self, family: str, rule: Any) -> list[Rule]:
        faces = rule if isinstance(rule, (list, tuple)) else [rule]
        return [
            Rule(FONT_FACE, (("font-family", family), *self.resolver.declarations(face)))
            for face in faces
        ]

    # --- variables & themes -------------------------------------------------

    def create_var(self, debug_id: str | None = None) -> VariableRef:
        ref = VariableRef(self.file.allocate(debug_id))
        self.registry.declare_variable(ref)
        return ref

    def _contract_from_shape(self, shape: Mapping[str, Any]) -> ThemeContract:
        def allocate(path: tuple[str, ...]) -> VariableRef:
            ref = VariableRef(self.file.allocate("-".join(path)), path)
            self.registry.declare_variable(ref)
            return ref

        return build_contract(shape, allocate)

    def create_theme_vars(self, shape: Mapping[str, Any]) -> ThemeContract:
        return self._contract_from_shape(shape)

    def create_theme(
        self,
        contract_or_values: ThemeContract | Mapping[str, Any],
        values: Mapping[str, Any] | None = None,
        debug_id: str | None = None,
    ) -> Any:
        """Create a theme class.

        ``create_theme(values)`` returns ``(class_name, contract)``;
        ``create_theme(contract, values)`` returns ``class_name``.
        """
        if isinstance(contract_or_values, ThemeContract):
            if values is None:
                raise StyleError("create_theme(contract, values) needs theme values")
            return self._bind_theme(contract_or_values, values, debug_id)
        if values is not None:
            raise StyleError("create_theme() takes a contract when given two arguments")
        contract = self._contract_from_shape(contract_or_values)
        return self._bind_theme(contract, contract_or_values, debug_id), contract

    def _bind_theme(
        self, contract: ThemeContract, values: Mapping[str, Any], debug_id: str | None
    ) -> str:
        assigned = match_values(contract, values)
        identifier = self.file.allocate(debug_id)
        rules = self.resolver.resolve({"vars": assigned}, f".{identifier}")
        self._register(identifier, rules, debug_id)
        contract.bind(identifier)
        return identifier

    def create_global_theme(
        self,
        selector: str,
        contract_or_values: ThemeContract | Mapping[str, Any],
        values: Mapping[str, Any] | None = None,
    ) -> ThemeContract | None:
        """Assign theme variables under a caller-supplied global selector.

        ``create_global_theme(selector, values)`` returns the new contract;
        ``create_global_theme(selector, contract, values)`` returns ``None``.
        """
        if isinstance(contract_or_values, ThemeContract):
            if values is None:
                raise StyleError("create_global_theme(selector, contract, values) needs values")
            contract, returned = contract_or_values, None
        else:
            if values is not None:
                raise StyleError("create_global_theme() takes a contract when given three arguments")
            contract = self._contract_from_shape(contract_or_values)
            values, returned = contract_or_values, contract
        assigned = match_values(contract, values)
        key = self._global_key()
        self._register(key, self.resolver.resolve({"vars": assigned}, selector))
        contract.bind(selector)
        return returned


def current_scope() -> StyleScope:
    scope = _current.get()
    if scope is None:
        raise ScopeError(
            "No active file scope; wrap definition code in styleforge.file_scope()"
        )
    return scope


@contextlib.contextmanager
def file_scope(
    file_path: str, registry: Registry, package_name: str | None = None
) -> Iterator[StyleScope]:
    """Activate a :class:`StyleScope` for *file_path* in the current context."""
    scope = StyleScope(file_path, registry, package_name)
    token = _current.set(scope)
    try:
        yield scope
    finally:
        _current.reset(token)
