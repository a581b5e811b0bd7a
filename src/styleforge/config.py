from __future__ import annotations

from dataclasses import dataclass, field, replace

# Properties whose bare numeric values are emitted without a unit.
UNITLESS_PROPERTIES: frozenset[str] = frozenset(
    {
        "animation-iteration-count",
        "aspect-ratio",
        "border-image-outset",
        "border-image-slice",
        "border-image-width",
        "column-count",
        "columns",
        "fill-opacity",
        "flex",
        "flex-grow",
        "flex-shrink",
        "flood-opacity",
        "font-weight",
        "grid-area",
        "grid-column",
        "grid-column-end",
        "grid-column-start",
        "grid-row",
        "grid-row-end",
        "grid-row-start",
        "line-clamp",
        "line-height",
        "opacity",
        "order",
        "orphans",
        "scale",
        "stop-opacity",
        "stroke-dashoffset",
        "stroke-miterlimit",
        "stroke-opacity",
        "stroke-width",
        "tab-size",
        "widows",
        "z-index",
        "zoom",
    }
)


@dataclass(frozen=True)
class BuildConfig:
    debug_ids: bool = True
    identifier_hash_length: int = 6
    default_unit: str = "px"
    unitless_properties: frozenset[str] = field(default=UNITLESS_PROPERTIES)
    indent: str = "  "

    def with_unitless(self, *properties: str) -> BuildConfig:
        """Return a copy that also treats *properties* as unitless."""
        return replace(
            self, unitless_properties=self.unitless_properties | frozenset(properties)
        )
