"""Global style registry: build-pass accumulator of rules and identifiers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import PurePath

from styleforge.config import BuildConfig
from styleforge.errors import IdentifierConflict
from styleforge.model.rule import Condition, Rule, render_block
from styleforge.model.variables import VariableRef

__all__ = ["Registry"]

logger = logging.getLogger(__name__)

Order = tuple[int, int]


@dataclass
class _Entry:
    identifier: str
    rules: tuple[Rule, ...]
    order: Order
    label: str | None = None


@dataclass
class _ConditionNode:
    """Rules directly under one condition, then its nested conditions."""

    rules: list[Rule] = field(default_factory=list)
    children: dict[Condition, _ConditionNode] = field(default_factory=dict)

    def add(self, conditions: tuple[Condition, ...], rule: Rule) -> None:
        node = self
        for condition in conditions:
            node = node.children.setdefault(condition, _ConditionNode())
        node.rules.append(rule)

    def render(self, depth: int, indent: str) -> list[str]:
        blocks: list[str] = []
        for condition, child in self.children.items():
            pad = indent * depth
            inner = [
                render_block(r.selector, r.declarations, depth + 1, indent) for r in child.rules
            ]
            inner.extend(child.render(depth + 1, indent))
            blocks.append("\n".join([f"{pad}{condition} {{", *inner, f"{pad}}}"]))
        return blocks


@dataclass
class _Groups:
    font_faces: list[Rule] = field(default_factory=list)
    keyframes: dict[tuple[tuple[Condition, ...], str], list[Rule]] = field(
        default_factory=dict
    )
    plain: list[Rule] = field(default_factory=list)
    conditioned: _ConditionNode = field(default_factory=_ConditionNode)


class Registry:
    """Accumulates the rules of every definition file in one build pass.

    Registration is thread-safe.  Output order depends only on each entry's
    recorded ``(file index, sequence)`` order, never on arrival time, so
    parallel builds of unchanged sources are byte-identical.
    """

    def __init__(self, config: BuildConfig | None = None) -> None:
        self.config = config or BuildConfig()
        self._lock = threading.Lock()
        self._entries: dict[str, _Entry] = {}
        self._files: dict[str, int] = {}
        self._variables: set[str] = set()

    # --- files & variables --------------------------------------------------

    def file_index(self, file_path: str) -> int:
        """Return the stable order index of *file_path*, assigning one if new."""
        key = PurePath(file_path).as_posix()
        with self._lock:
            if key not in self._files:
                self._files[key] = len(self._files)
            return self._files[key]

    def declare_variable(self, ref: VariableRef) -> None:
        with self._lock:
            self._variables.add(ref.name)

    def is_known(self, name: str) -> bool:
        with self._lock:
            return name in self._variables

    # --- registration -------------------------------------------------------

    def register(
        self,
        identifier: str,
        rules: list[Rule] | tuple[Rule, ...],
        *,
        order: Order | None = None,
        label: str | None = None,
    ) -> None:
        """Record *rules* under *identifier*.

        Re-registering identical rules is a no-op.  Registering different
        rules for an existing identifier raises :class:`IdentifierConflict`.
        """
        content = tuple(rules)
        with self._lock:
            existing = self._entries.get(identifier)
            if existing is not None:
                if existing.rules != content:
                    raise IdentifierConflict(
                        f"Identifier {identifier!r} was registered twice with "
                        "different rules",
                        identifier=identifier,
                    )
                logger.warning("Identifier %s re-registered with identical rules", identifier)
                return
            if order is None:
                order = (len(self._files), len(self._entries))
            self._entries[identifier] = _Entry(identifier, content, order, label)
        logger.debug("Registered %s (%d rules)", identifier, len(content))

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def rules(self) -> list[Rule]:
        """All registered rules in output order, before grouping."""
        with self._lock:
            entries = sorted(self._entries.values(), key=lambda e: e.order)
        return [rule for entry in entries for rule in entry.rules]

    def rule_count(self) -> int:
        return len(self.rules())

    def class_map(self) -> dict[str, str]:
        """Map each identifier registered with a debug label to that label."""
        with self._lock:
            entries = sorted(self._entries.values(), key=lambda e: e.order)
        return {e.identifier: e.label for e in entries if e.label is not None}

    # --- lifecycle ----------------------------------------------------------

    def reset(self) -> None:
        """Discard all state, e.g. when a build pass is aborted."""
        with self._lock:
            self._entries.clear()
            self._files.clear()
            self._variables.clear()

    def css(self) -> str:
        """Serialize every registered rule without clearing the registry."""
        groups = self._group(self.rules())
        indent = self.config.indent
        blocks: list[str] = []

        for rule in groups.font_faces:
            blocks.append(render_block(rule.selector, rule.declarations, 0, indent))
        for (conditions, name), frames in groups.keyframes.items():
            inner = _render_keyframes(name, frames, len(conditions), indent)
            blocks.append(_wrap(conditions, inner, indent))
        for rule in groups.plain:
            blocks.append(render_block(rule.selector, rule.declarations, 0, indent))
        blocks.extend(groups.conditioned.render(0, indent))
        return "\n".join(blocks) + "\n" if blocks else ""

    def finalize(self) -> str:
        """Serialize the stylesheet and clear the registry for the next pass."""
        text = self.css()
        with self._lock:
            count = len(self._entries)
        logger.info("Finalized stylesheet: %d entries, %d bytes", count, len(text))
        self.reset()
        return text

    # --- grouping -----------------------------------------------------------

    @staticmethod
    def _group(rules: list[Rule]) -> _Groups:
        groups = _Groups()
        for rule in rules:
            if rule.keyframes is not None:
                groups.keyframes.setdefault((rule.conditions, rule.keyframes), []).append(rule)
            elif rule.is_font_face and not rule.conditions:
                groups.font_faces.append(rule)
            elif rule.is_conditional:
                groups.conditioned.add(rule.conditions, rule)
            else:
                groups.plain.append(rule)
        return groups


def _render_keyframes(name: str, frames: list[Rule], depth: int, indent: str) -> str:
    pad = indent * depth
    body = "\n".join(
        render_block(frame.selector, frame.declarations, depth + 1, indent) for frame in frames
    )
    return f"{pad}@keyframes {name} {{\n{body}\n{pad}}}"


def _wrap(conditions: tuple[Condition, ...], inner: str, indent: str) -> str:
    """Nest already-indented *inner* text inside each condition, outermost first."""
    opening = [f"{indent * depth}{condition} {{" for depth, condition in enumerate(conditions)]
    closing = [f"{indent * depth}}}" for depth in reversed(range(len(conditions)))]
    return "\n".join([*opening, inner, *closing])
