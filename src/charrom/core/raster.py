"""Rasterise flattened glyph outlines into character grids.

Glyph polygons are in font units with y pointing up; character grids have
row 0 at the top. A pixel is lit when the share of its supersampled points
that fall inside the outline reaches the coverage threshold. Inside/outside
uses the even-odd rule across all polygons, which fills TrueType and CFF
outlines (holes included) without needing winding analysis.
"""

import math

from charrom.domain import Character, GlyphOutline, Point


def point_in_polygon(x: float, y: float, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray from the point to the right and counts
    intersections with polygon edges. Odd count means inside.

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(1.0, 1.0, square)
        True
        >>> point_in_polygon(3.0, 3.0, square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def is_inside(x: float, y: float, polygons: list[list[Point]]) -> bool:
    """Even-odd fill test across several polygons."""
    inside = False
    for polygon in polygons:
        if point_in_polygon(x, y, polygon):
            inside = not inside
    return inside


def _bounds(polygons: list[list[Point]]) -> tuple[float, float, float, float]:
    xs = [p.x for polygon in polygons for p in polygon]
    ys = [p.y for polygon in polygons for p in polygon]
    return min(xs), min(ys), max(xs), max(ys)


def rasterize_outline(
    outline: GlyphOutline,
    width: int,
    height: int,
    scale: float,
    origin_x: float,
    baseline_y: float,
    coverage_threshold: float = 0.5,
    supersample: int = 4,
) -> Character:
    """Render an outline into a ``height x width`` grid.

    Args:
        outline: Glyph polygons in font units
        width: Grid width in pixels
        height: Grid height in pixels
        scale: Pixels per font unit
        origin_x: Pixel x of the glyph origin
        baseline_y: Pixel row coordinate of the baseline (from the top)
        coverage_threshold: Share of samples that must be inside (0-1)
        supersample: Samples per pixel along each axis

    Returns:
        Rendered character; blank when the outline is empty
    """
    if outline.is_empty() or scale <= 0:
        return Character.empty(width, height)

    polygons = [p for p in outline.polygons if len(p) >= 3]
    min_x, min_y, max_x, max_y = _bounds(polygons)
    samples = supersample * supersample
    needed = math.ceil(coverage_threshold * samples)
    offsets = [(k + 0.5) / supersample for k in range(supersample)]

    rows = []
    for py in range(height):
        row = []
        for px in range(width):
            hits = 0
            for dy in offsets:
                fy = (baseline_y - (py + dy)) / scale
                if not (min_y <= fy <= max_y):
                    continue
                for dx in offsets:
                    fx = (px + dx - origin_x) / scale
                    if min_x <= fx <= max_x and is_inside(fx, fy, polygons):
                        hits += 1
            row.append(hits >= needed and hits > 0)
        rows.append(tuple(row))

    return Character(tuple(rows))
