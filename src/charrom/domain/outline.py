"""Flattened glyph outlines read from vector fonts.

Font glyphs are converted into closed polygons in font units before they
are rasterised into character grids.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Point:
    """A point in font units.

    Attributes:
        x: X coordinate
        y: Y coordinate (font convention, y grows upward)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class GlyphOutline:
    """A glyph's outline as closed polygons, curves already flattened.

    Attributes:
        code_point: Unicode code point the glyph was looked up by
        name: Glyph name in the font
        advance_width: Horizontal advance in font units
        polygons: Closed polygons; fill is even-odd across all of them
    """

    code_point: int
    name: str
    advance_width: int
    polygons: list[list[Point]] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if the glyph draws nothing (spaces, missing glyphs)."""
        return not any(len(polygon) >= 3 for polygon in self.polygons)
