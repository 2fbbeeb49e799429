"""Color palette used when drawing chart slices and bars."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_COLORS: Final[tuple[str, ...]] = (
    "#0088FE",
    "#00C49F",
    "#FFBB28",
    "#FF8042",
    "#AF19FF",
    "#FF19A3",
    "#19FFDD",
    "#FFA319",
)


@dataclass(frozen=True, slots=True)
class ColorPalette:
    """Named chart colors.

    Args:
        colors: Slice/series colors, cycled by index.
        primary: Single-series fill/stroke color (bars and lines).
        grid: Grid line color.
        label: Text color for labels drawn inside pie slices.
    """

    colors: tuple[str, ...] = DEFAULT_COLORS
    primary: str = "#8884d8"
    grid: str = "#eee"
    label: str = "#fff"

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("ColorPalette.colors must contain at least one color.")

    def color_at(self, index: int) -> str:
        """Return the color for a slice index, wrapping around the palette."""

        return self.colors[index % len(self.colors)]

    def colors_for(self, count: int) -> list[str]:
        """Return `count` colors, cycling through the palette."""

        return [self.color_at(idx) for idx in range(count)]


DEFAULT_PALETTE: Final[ColorPalette] = ColorPalette()
