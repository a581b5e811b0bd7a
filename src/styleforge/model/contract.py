"""Theme contract: an immutable tree of variable references."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Union

from styleforge.model.variables import VariableRef

ContractNode = Union["ThemeContract", VariableRef]


class ThemeContract(Mapping[str, Any]):
    """A read-only tree whose leaves are :class:`VariableRef` objects.

    Nodes are reachable both by item access (``contract["color"]["brand"]``)
    and by attribute access (``contract.color.brand``).  A contract starts
    out ``declared`` and becomes ``bound`` once a theme assigns it.
    """

    def __init__(self, tree: Mapping[str, ContractNode], path: tuple[str, ...] = ()) -> None:
        self._tree: dict[str, ContractNode] = dict(tree)
        self._path = path
        self._themes: list[str] = []

    # --- mapping protocol ---------------------------------------------------

    def __getitem__(self, key: str) -> ContractNode:
        return self._tree[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def __getattr__(self, name: str) -> ContractNode:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._tree[name]
        except KeyError:
            raise AttributeError(
                f"Theme contract has no entry {name!r}"
            ) from None

    def __repr__(self) -> str:
        return f"ThemeContract({self.leaf_paths()!r})"

    # --- leaves -------------------------------------------------------------

    @property
    def path(self) -> tuple[str, ...]:
        return self._path

    def leaves(self) -> list[tuple[tuple[str, ...], VariableRef]]:
        """Return (relative path, variable) pairs in declaration order."""
        found: list[tuple[tuple[str, ...], VariableRef]] = []
        for key, node in self._tree.items():
            if isinstance(node, ThemeContract):
                found.extend(((key, *sub), ref) for sub, ref in node.leaves())
            else:
                found.append(((key,), node))
        return found

    def leaf_paths(self) -> list[str]:
        return [".".join(path) for path, _ in self.leaves()]

    def to_dict(self) -> dict[str, Any]:
        """Nested plain dict of rendered ``var(...)`` strings."""
        return {
            key: node.to_dict() if isinstance(node, ThemeContract) else str(node)
            for key, node in self._tree.items()
        }

    # --- binding state ------------------------------------------------------

    @property
    def themes(self) -> tuple[str, ...]:
        return tuple(self._themes)

    @property
    def state(self) -> str:
        return "bound" if self._themes else "declared"

    def bind(self, theme: str) -> None:
        """Record a theme (class name or global selector) bound to this contract."""
        if theme not in self._themes:
            self._themes.append(theme)
