"""Character grid representation.

This module defines the pixel grid for a single glyph plus the small
value types the transform engine passes around: bounding boxes, anchor
points and the direction enums.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

Row = tuple[bool, ...]


class AnchorPoint(str, Enum):
    """One of nine alignment references on a 3x3 grid.

    The first letter is the vertical part (top/middle/bottom), the second
    the horizontal part (left/center/right).
    """

    TOP_LEFT = "tl"
    TOP_CENTER = "tc"
    TOP_RIGHT = "tr"
    MIDDLE_LEFT = "ml"
    MIDDLE_CENTER = "mc"
    MIDDLE_RIGHT = "mr"
    BOTTOM_LEFT = "bl"
    BOTTOM_CENTER = "bc"
    BOTTOM_RIGHT = "br"

    @property
    def vertical(self) -> str:
        """Vertical alignment: 't', 'm' or 'b'."""
        return self.value[0]

    @property
    def horizontal(self) -> str:
        """Horizontal alignment: 'l', 'c' or 'r'."""
        return self.value[1]


class RotateDirection(str, Enum):
    """Quarter-turn direction."""

    LEFT = "left"
    RIGHT = "right"


class ShiftDirection(str, Enum):
    """One-pixel shift direction."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ScaleAlgorithm(str, Enum):
    """Resampling used by the scale transform."""

    NEAREST = "nearest"
    THRESHOLD = "threshold"


class PixelState(str, Enum):
    """Agreement of one pixel position across several characters."""

    SAME_ON = "same-on"
    SAME_OFF = "same-off"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Inclusive rectangle around the lit pixels of a character."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1


@dataclass(frozen=True)
class Character:
    """A rectangular grid of on/off pixels, stored row-major.

    Immutable and hashable. Any nested iterable of truthy values is accepted
    on construction and normalised to a tuple of bool tuples, so callers can
    never alias a character's rows.

    Attributes:
        pixels: Rows of pixel values, ``True`` for foreground
    """

    pixels: tuple[Row, ...]

    def __post_init__(self) -> None:
        rows = tuple(tuple(bool(p) for p in row) for row in self.pixels)
        if rows and any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("All rows of a character must have the same length")
        object.__setattr__(self, "pixels", rows)

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.pixels)

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self.pixels[0]) if self.pixels else 0

    def __getitem__(self, position: tuple[int, int]) -> bool:
        row, col = position
        return self.pixels[row][col]

    def is_blank(self) -> bool:
        """Check if no pixel is lit."""
        return not any(any(row) for row in self.pixels)

    def lit_count(self) -> int:
        """Number of lit pixels."""
        return sum(sum(row) for row in self.pixels)

    @classmethod
    def empty(cls, width: int, height: int) -> "Character":
        """Create an all-off character of the given size."""
        return cls(tuple((False,) * width for _ in range(height)))

    @classmethod
    def filled(cls, width: int, height: int) -> "Character":
        """Create an all-on character of the given size."""
        return cls(tuple((True,) * width for _ in range(height)))

    @classmethod
    def from_strings(cls, rows: Iterable[str], on: str = "#") -> "Character":
        """Build a character from text rows.

        Every character in a row equal to ``on`` is a lit pixel, anything
        else is off.

        Example:
            Character.from_strings([".##.", "#..#"])
        """
        return cls(tuple(tuple(ch == on for ch in row) for row in rows))

    def to_strings(self, on: str = "#", off: str = ".") -> list[str]:
        """Render the grid as text rows."""
        return ["".join(on if p else off for p in row) for row in self.pixels]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with a ``pixels`` list of bool lists
        """
        return {"pixels": [list(row) for row in self.pixels]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Character":
        """Deserialize from dictionary."""
        return cls(data["pixels"])
