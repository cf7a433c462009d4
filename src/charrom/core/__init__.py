"""Core algorithms for charrom.

This module contains the core algorithms for:

- Bitmap packing (characters to and from ROM bytes)
- Character transforms (flip, rotate, shift, trim, resize, scale)
- Similarity ranking against a library of character sets
- Undo/redo history with batching
- Outline rasterisation for font import

All transforms are pure: they take characters and return new ones.

Key functions:
- encode / decode: Pack and unpack whole character sets
- bytes_for_one_character: Pack a single character
- calculate_similarities: Rank library sets by pixel difference
- validate_config: Report problems with a set's configuration
- rasterize_outline: Render a glyph outline into a character

Key classes:
- HistoryManager: Bounded undo/redo timeline with batch grouping
"""

from charrom.core import transforms
from charrom.core.codec import (
    bytes_for_one_character,
    bytes_per_character,
    character_count,
    character_from_bytes,
    decode,
    encode,
)
from charrom.core.history import HistoryManager
from charrom.core.raster import point_in_polygon, rasterize_outline
from charrom.core.similarity import (
    CharacterComparison,
    LibraryEntry,
    SimilarityResult,
    are_characters_equal,
    calculate_similarities,
    compare_trimmed,
    find_changed_indices,
    find_differing_pixels,
)
from charrom.core.validation import is_valid_config, validate_config

__all__ = [
    # Similarity types
    "CharacterComparison",
    # History
    "HistoryManager",
    "LibraryEntry",
    "SimilarityResult",
    "are_characters_equal",
    # Codec functions
    "bytes_for_one_character",
    "bytes_per_character",
    "calculate_similarities",
    "character_count",
    "character_from_bytes",
    "compare_trimmed",
    "decode",
    "encode",
    "find_changed_indices",
    "find_differing_pixels",
    # Validation
    "is_valid_config",
    # Raster functions
    "point_in_polygon",
    "rasterize_outline",
    "transforms",
    "validate_config",
]
