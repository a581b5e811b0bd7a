"""Error hierarchy for style compilation."""
from __future__ import annotations

from typing import Any


class StyleError(Exception):
    """Base error for all styleforge errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ContractViolation(StyleError):
    """Theme values do not cover their contract exactly."""

    def __init__(
        self,
        message: str,
        *,
        missing: tuple[str, ...] = (),
        unexpected: tuple[str, ...] = (),
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.missing = missing
        self.unexpected = unexpected


class IdentifierConflict(StyleError):
    """The same identifier was registered twice with different rules."""

    def __init__(self, message: str, *, identifier: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.identifier = identifier


class UnresolvedVariableReference(StyleError):
    """A variable was used that no contract in the current build declares."""

    def __init__(self, message: str, *, variable: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.variable = variable


class InvalidCalcOperands(StyleError):
    """A calc expression was built from operands CSS cannot evaluate."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.line = line
        self.column = column


class InvalidSelector(StyleError):
    """A nested selector does not target the owning element with ``&``."""


class ScopeError(StyleError):
    """A registering call was made outside of any file scope."""
