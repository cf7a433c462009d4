"""Domain models for charrom.

This module contains the value types shared by the codec, the transform
engine, the history manager and the importers. All models are:

- Immutable (frozen dataclasses, tuple-backed pixel grids)
- Independent of fontTools and of any UI or storage layer

Key classes:
- Character: One glyph's boolean pixel grid
- CharacterSetConfig: Glyph box size and bit layout for a set
- AnchorPoint: Nine-way alignment used by resize and scale
- HistoryEntry: One snapshot in an undo/redo timeline
- GlyphOutline: Flattened vector glyph ready for rasterisation
"""

from charrom.domain.character import (
    AnchorPoint,
    BoundingBox,
    Character,
    PixelState,
    RotateDirection,
    ScaleAlgorithm,
    ShiftDirection,
)
from charrom.domain.config import (
    MAX_DIMENSION,
    MIN_DIMENSION,
    BitOrder,
    ByteOrder,
    CharacterSetConfig,
    PaddingDirection,
    bytes_per_row,
    clamp_dimension,
)
from charrom.domain.history import HistoryEntry
from charrom.domain.outline import GlyphOutline, Point

__all__: list[str] = [
    # Enums
    "AnchorPoint",
    "BitOrder",
    "ByteOrder",
    "PaddingDirection",
    "PixelState",
    "RotateDirection",
    "ScaleAlgorithm",
    "ShiftDirection",
    # Core types
    "BoundingBox",
    "Character",
    "CharacterSetConfig",
    "GlyphOutline",
    "HistoryEntry",
    "Point",
    # Helpers
    "MAX_DIMENSION",
    "MIN_DIMENSION",
    "bytes_per_row",
    "clamp_dimension",
]
