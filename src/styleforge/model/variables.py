"""Variable references: custom properties addressable from style values."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VariableRef:
    """A generated custom property, optionally located inside a contract.

    Renders as ``var(--name)`` wherever it is used as a value.
    """

    name: str
    path: tuple[str, ...] = ()
    fallback: str | None = None

    @property
    def property(self) -> str:
        """The custom property name, e.g. ``--brand__x1y2z30``."""
        return f"--{self.name}"

    def with_fallback(self, fallback: object) -> VariableRef:
        return VariableRef(self.name, self.path, str(fallback))

    def __str__(self) -> str:
        if self.fallback is None:
            return f"var({self.property})"
        return f"var({self.property}, {self.fallback})"
