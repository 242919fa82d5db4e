"""Map palette and per-category marker styles."""

from __future__ import annotations

from dataclasses import dataclass

from carelocator.domain.models import FacilityCategory


@dataclass(frozen=True)
class CategoryStyle:
    color: str   # marker fill, legend swatch, connector base color
    glyph: str   # one letter drawn inside the marker
    label: str   # legend text


# Keyed by every FacilityCategory; checked below.
CATEGORY_STYLES: dict[FacilityCategory, CategoryStyle] = {
    FacilityCategory.HOSPITAL:   CategoryStyle("#ef4444", "H", "Hospital"),    # red
    FacilityCategory.AMBULANCE:  CategoryStyle("#f59e0b", "A", "Ambulance"),   # amber
    FacilityCategory.BLOOD_BANK: CategoryStyle("#dc2626", "B", "Blood Bank"),  # dark red
}

_missing = set(FacilityCategory) - set(CATEGORY_STYLES)
if _missing:
    raise RuntimeError(f"No map style for categories: {sorted(c.value for c in _missing)}")

BACKGROUND = "#f8fafc"
GRID = "#e2e8f0"
TEXT = "#1e293b"
PLACEHOLDER_TEXT = "#64748b"
USER_MARKER = "#3b82f6"
GLYPH = "#ffffff"

# Connectors are drawn in the category color at this alpha (0..255).
CONNECTOR_ALPHA = 0x40


def get_style(category: FacilityCategory | str) -> CategoryStyle:
    return CATEGORY_STYLES[FacilityCategory(category)]


def hex_to_rgba(color: str, alpha: int = 255) -> tuple[int, int, int, int]:
    """`#rrggbb` -> (r, g, b, a)."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16), alpha)
