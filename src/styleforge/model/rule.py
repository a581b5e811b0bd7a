"""Rule model: the normalized output unit of style resolution."""

from __future__ import annotations

from dataclasses import dataclass

FONT_FACE = "@font-face"


@dataclass(frozen=True)
class Condition:
    """An at-rule wrapper such as ``@media (min-width: 600px)``.

    The query text is kept opaque and never validated.
    """

    kind: str  # "media", "supports", "container"
    query: str

    def __str__(self) -> str:
        return f"@{self.kind} {self.query}"


@dataclass(frozen=True)
class Rule:
    """A selector with its declarations and enclosing conditions.

    For keyframes blocks ``keyframes`` holds the animation name and
    ``selector`` holds the offset (``from``, ``50%``, ...).
    """

    selector: str
    declarations: tuple[tuple[str, str], ...]
    conditions: tuple[Condition, ...] = ()
    keyframes: str | None = None

    @property
    def is_font_face(self) -> bool:
        return self.selector == FONT_FACE

    @property
    def is_conditional(self) -> bool:
        return bool(self.conditions)


def render_block(
    selector: str, declarations: tuple[tuple[str, str], ...], depth: int, indent: str
) -> str:
    """Render ``selector { prop: value; ... }`` at the given nesting depth."""
    pad = indent * depth
    lines = [f"{pad}{selector} {{"]
    for prop, value in declarations:
        lines.append(f"{pad}{indent}{prop}: {value};")
    lines.append(f"{pad}}}")
    return "\n".join(lines)
