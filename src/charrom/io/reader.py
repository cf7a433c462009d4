"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading vector font files
and extracting flattened glyph outlines for rasterisation.
"""

import math
from pathlib import Path
from typing import Any

from fontTools.misc.bezierTools import segmentPointAtT
from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont

from charrom.domain import GlyphOutline, Point

Coordinate = tuple[float, float]

# Upper bound on line segments per curve
MAX_CURVE_STEPS = 64


def curve_steps(segment: list[Coordinate], tolerance: float) -> int:
    """Number of equal-``t`` line segments that keep a curve within tolerance.

    The flattening error shrinks with the square of the step count, and the
    control points' distance from the chord bounds how far the curve strays.

    Raises:
        ValueError: If tolerance is not positive
    """
    if tolerance <= 0:
        raise ValueError(f"Flattening tolerance must be positive, got {tolerance}")

    (x0, y0), (x1, y1) = segment[0], segment[-1]
    dx, dy = x1 - x0, y1 - y0
    chord = math.hypot(dx, dy)
    if chord == 0:
        deviation = max(math.hypot(x - x0, y - y0) for x, y in segment[1:-1])
    else:
        deviation = max(abs((x - x0) * dy - (y - y0) * dx) / chord for x, y in segment[1:-1])

    return min(MAX_CURVE_STEPS, max(1, math.ceil(math.sqrt(deviation / tolerance))))


def flatten_curve(segment: list[Coordinate], tolerance: float = 1.0) -> list[Coordinate]:
    """Approximate a quadratic or cubic Bezier segment with line segments.

    Args:
        segment: Start point, control point(s) and end point
        tolerance: Maximum distance from the true curve in font units

    Returns:
        Points after the start point, ending exactly on the end point
    """
    if len(segment) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 points for a Bezier curve, got {len(segment)}")

    steps = curve_steps(segment, tolerance)
    points = [segmentPointAtT(segment, i / steps) for i in range(1, steps)]
    points.append(segment[-1])
    return points


class PolygonPen(BasePen):
    """Pen that records a glyph as closed polygons.

    Curves are flattened as they are drawn. BasePen takes care of implied
    on-curve points in TrueType quadratic runs and of decomposing
    composite glyphs through the glyph set.
    """

    def __init__(self, glyph_set: Any, tolerance: float = 1.0) -> None:
        super().__init__(glyph_set)
        self.polygons: list[list[Point]] = []
        self._current: list[Coordinate] = []
        self._tolerance = tolerance

    def _flush(self) -> None:
        if len(self._current) >= 3:
            self.polygons.append([Point(x, y) for x, y in self._current])
        self._current = []

    def _moveTo(self, pt: Coordinate) -> None:
        self._flush()
        self._current = [pt]

    def _lineTo(self, pt: Coordinate) -> None:
        self._current.append(pt)

    def _qCurveToOne(self, pt1: Coordinate, pt2: Coordinate) -> None:
        start = self._current[-1]
        self._current.extend(flatten_curve([start, pt1, pt2], self._tolerance))

    def _curveToOne(self, pt1: Coordinate, pt2: Coordinate, pt3: Coordinate) -> None:
        start = self._current[-1]
        self._current.extend(flatten_curve([start, pt1, pt2, pt3], self._tolerance))

    def _closePath(self) -> None:
        self._flush()

    def _endPath(self) -> None:
        self._flush()


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            outline = reader.get_outline(ord("A"))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))
        self._cmap = self._font.getBestCmap() or {}

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def family_name(self) -> str:
        """Font family name, falling back to the full name."""
        font = self._require_font()
        if "name" not in font:
            return "Unknown Font"
        name_table = font["name"]
        return name_table.getDebugName(1) or name_table.getDebugName(4) or "Unknown Font"

    @property
    def units_per_em(self) -> int:
        """Font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def ascender(self) -> int:
        """Ascender in font units (from hhea)."""
        return self._require_font()["hhea"].ascent  # type: ignore[attr-defined]

    @property
    def descender(self) -> int:
        """Descender in font units, negative below the baseline (from hhea)."""
        return self._require_font()["hhea"].descent  # type: ignore[attr-defined]

    def has_code_point(self, code_point: int) -> bool:
        """Check if the font maps ``code_point`` to a glyph."""
        self._require_font()
        return code_point in self._cmap

    def get_outline(self, code_point: int, tolerance: float = 1.0) -> GlyphOutline | None:
        """Get the flattened outline for a code point.

        Args:
            code_point: Unicode code point
            tolerance: Curve flattening tolerance in font units

        Returns:
            GlyphOutline, or None if the font has no glyph for the code point

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()

        glyph_name = self._cmap.get(code_point)
        if glyph_name is None:
            return None

        glyph_set = font.getGlyphSet()
        glyph = glyph_set[glyph_name]

        pen = PolygonPen(glyph_set, tolerance)
        glyph.draw(pen)

        return GlyphOutline(
            code_point=code_point,
            name=glyph_name,
            advance_width=glyph.width,
            polygons=pen.polygons,
        )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
