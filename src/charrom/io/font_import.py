"""Import characters from vector fonts.

Each code point in the configured range is rendered into a cell of
``char_width x char_height`` pixels. The em box is scaled to
``font_size`` pixels; with ``center_glyphs`` the advance width is centred
horizontally and the ascender-to-descender span vertically, otherwise the
glyph origin sits at the left edge with the descender touching the bottom.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from charrom.config import FontImportConfig
from charrom.core.raster import rasterize_outline
from charrom.domain import Character, CharacterSetConfig
from charrom.exceptions import FontLoadError
from charrom.io.reader import FontReader
from charrom.utils.logging import ImportLogger, ImportStats

# Code points below this render blank by nature (controls and space)
FIRST_PRINTABLE = 33


@dataclass
class FontImportResult:
    """Characters rendered from a font.

    Attributes:
        characters: One character per code point in the range
        config: Character box of the rendered set
        font_family: Family name read from the font
        stats: Imported/missing counts and per-glyph errors
    """

    characters: list[Character]
    config: CharacterSetConfig
    font_family: str
    stats: ImportStats = field(default_factory=ImportStats)

    @property
    def imported_count(self) -> int:
        return self.stats.imported_count

    @property
    def missing_count(self) -> int:
        return self.stats.missing_count


def import_font(path: Path, config: FontImportConfig | None = None) -> FontImportResult:
    """Render a code point range of a TTF/OTF font into characters.

    Code points the font lacks become blank characters; printable ones are
    counted as missing.

    Args:
        path: Font file path
        config: Rendering options (defaults to printable ASCII at 8x8)

    Returns:
        FontImportResult with one character per code point

    Raises:
        FontLoadError: If the font cannot be opened
    """
    config = config or FontImportConfig()
    import_logger = ImportLogger(structlog.get_logger(__name__))
    import_logger.stats.start_time = time.time()

    reader = FontReader(path)
    try:
        reader.load()
        font_family = reader.family_name
        units_per_em = reader.units_per_em
        ascender, descender = reader.ascender, reader.descender
    except Exception as e:
        reader.close()
        raise FontLoadError(str(path), str(e)) from e

    width, height = config.char_width, config.char_height
    scale = config.font_size / units_per_em
    glyph_height = (ascender - descender) * scale
    baseline_y = height + descender * scale - config.baseline_offset
    if config.center_glyphs:
        baseline_y -= (height - glyph_height) / 2

    characters: list[Character] = []
    try:
        for code_point in range(config.start_code, config.end_code + 1):
            character = Character.empty(width, height)
            try:
                outline = reader.get_outline(code_point)
            except Exception as e:
                import_logger.log_glyph_error(code_point, e)
                outline = None

            if outline is not None:
                origin_x = 0.0
                if config.center_glyphs:
                    origin_x = (width - outline.advance_width * scale) / 2
                character = rasterize_outline(
                    outline,
                    width,
                    height,
                    scale=scale,
                    origin_x=origin_x,
                    baseline_y=baseline_y,
                    coverage_threshold=config.coverage_threshold,
                    supersample=config.supersample,
                )

            if not character.is_blank():
                import_logger.log_glyph_imported(code_point, character.lit_count())
            elif code_point >= FIRST_PRINTABLE:
                import_logger.log_glyph_missing(code_point)
            else:
                import_logger.log_glyph_blank(code_point)

            characters.append(character)
    finally:
        reader.close()

    stats = import_logger.stats
    stats.end_time = time.time()

    return FontImportResult(
        characters=characters,
        config=CharacterSetConfig(width=width, height=height),
        font_family=font_family,
        stats=stats,
    )
