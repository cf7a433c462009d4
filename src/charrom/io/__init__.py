"""I/O layer for charrom.

This module handles everything that moves character sets in or out of
the process: raw ROM files, share tokens, pasted source listings, character
sheet images (through Pillow) and vector fonts (through fonttools).

Key responsibilities:
- Load and save raw ROM dumps
- Encode and decode share tokens
- Parse byte literals out of C/JS/assembly text
- Slice character sheet images into characters
- Rasterise TTF/OTF glyphs into characters

Key classes:
- FontReader: Load fonts and extract glyph outlines
- ImageImportResult: Characters sliced from a sheet image
"""

from charrom.io.font_import import FontImportResult, import_font
from charrom.io.image_import import (
    GridSuggestion,
    ImageImportResult,
    detect_character_dimensions,
    import_image,
    parse_image,
)
from charrom.io.reader import FontReader
from charrom.io.rom import read_rom, write_rom
from charrom.io.sharing import (
    SharedCharacterSet,
    UrlLengthStatus,
    can_share,
    decode_character_set,
    encode_character_set,
    estimate_url_length,
    extract_token,
)
from charrom.io.text import TextImportResult, import_text, parse_text_bytes

__all__ = [
    "FontImportResult",
    "FontReader",
    "GridSuggestion",
    "ImageImportResult",
    "SharedCharacterSet",
    "TextImportResult",
    "UrlLengthStatus",
    "can_share",
    "decode_character_set",
    "detect_character_dimensions",
    "encode_character_set",
    "estimate_url_length",
    "extract_token",
    "import_font",
    "import_image",
    "import_text",
    "parse_image",
    "parse_text_bytes",
    "read_rom",
    "write_rom",
]
