"""Shared fixtures for integration tests."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

UNITS_PER_EM = 1000
ASCENT = 800
DESCENT = -200


def _rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


def _build_glyphs() -> dict:
    glyphs = {}

    pen = TTGlyphPen(None)
    _rect(pen, 100, 0, 900, 700)
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    # Full-cell block
    pen = TTGlyphPen(None)
    _rect(pen, 0, DESCENT, 1000, ASCENT)
    glyphs["block"] = pen.glyph()

    # Square ring with a hole in the middle
    pen = TTGlyphPen(None)
    _rect(pen, 0, DESCENT, 1000, ASCENT)
    pen.moveTo((250, 50))
    pen.lineTo((750, 50))
    pen.lineTo((750, 550))
    pen.lineTo((250, 550))
    pen.closePath()
    glyphs["ring"] = pen.glyph()

    # Rounded shape drawn with quadratic curves
    pen = TTGlyphPen(None)
    pen.moveTo((500, DESCENT))
    pen.qCurveTo((0, DESCENT), (0, 300))
    pen.qCurveTo((0, ASCENT), (500, ASCENT))
    pen.qCurveTo((1000, ASCENT), (1000, 300))
    pen.qCurveTo((1000, DESCENT), (500, DESCENT))
    pen.closePath()
    glyphs["round"] = pen.glyph()

    return glyphs


@pytest.fixture(scope="session")
def test_font(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Build a small TrueType font.

    Maps ``A`` to a full-cell block, ``O`` to a ring with a hole, ``D`` to
    a rounded quadratic outline and space to an empty glyph.
    """
    path = tmp_path_factory.mktemp("fonts") / "TestBlocks.ttf"

    glyphs = _build_glyphs()
    glyph_order = [".notdef", "space", "block", "ring", "round"]

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({32: "space", ord("A"): "block", ord("O"): "ring", ord("D"): "round"})
    fb.setupGlyf(glyphs)

    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (UNITS_PER_EM, getattr(glyf[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({"familyName": "Test Blocks", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, usWinAscent=ASCENT, usWinDescent=-DESCENT)
    fb.setupPost()
    fb.save(str(path))

    return path
