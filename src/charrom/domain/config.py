"""Binary format configuration for a character set.

A character set is a run of equally sized glyphs packed row by row into
bytes. The config describes the glyph box and how each row's pixels map
onto bits.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

MIN_DIMENSION = 1
MAX_DIMENSION = 16


class PaddingDirection(str, Enum):
    """Side of a row that holds the unused filler bits.

    When the width is not a multiple of 8 the row still occupies whole
    bytes. RIGHT keeps the pixels at the start of the row and pads the
    trailing end of the last byte; LEFT pads the leading end of the first
    byte and pushes the pixels toward the end of the row.
    """

    LEFT = "left"
    RIGHT = "right"


class BitOrder(str, Enum):
    """Which bit of a packed byte holds the leftmost pixel.

    The ``ltr``/``rtl`` spellings used by older configuration surfaces are
    accepted as aliases of ``msb``/``lsb``.
    """

    MSB_FIRST = "msb"
    LSB_FIRST = "lsb"

    @classmethod
    def _missing_(cls, value: object) -> "BitOrder | None":
        aliases = {"ltr": cls.MSB_FIRST, "rtl": cls.LSB_FIRST}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


class ByteOrder(str, Enum):
    """Order of the bytes within a multi-byte row.

    BIG stores pixels 0-7 in the row's first byte. LITTLE swaps the bytes
    of each row, so the first byte holds the rightmost pixels. Rows of a
    single byte are unaffected.
    """

    BIG = "big"
    LITTLE = "little"


def clamp_dimension(value: int) -> int:
    """Clamp a width or height into the supported 1..16 range."""
    return max(MIN_DIMENSION, min(MAX_DIMENSION, int(value)))


def bytes_per_row(width: int) -> int:
    """Number of bytes needed to hold one row of ``width`` pixels."""
    return (width + 7) // 8


@dataclass(frozen=True)
class CharacterSetConfig:
    """Shape and bit layout shared by every character in a set.

    Attributes:
        width: Pixels per row (1-16)
        height: Rows per character (1-16)
        padding: Side of the row holding filler bits
        bit_order: Bit of each byte that maps to the leftmost pixel
        byte_order: Byte order of rows wider than 8 pixels
    """

    width: int = 8
    height: int = 8
    padding: PaddingDirection = PaddingDirection.RIGHT
    bit_order: BitOrder = BitOrder.MSB_FIRST
    byte_order: ByteOrder = ByteOrder.BIG

    def __post_init__(self) -> None:
        # Accept plain strings for the enum fields
        object.__setattr__(self, "padding", PaddingDirection(self.padding))
        object.__setattr__(self, "bit_order", BitOrder(self.bit_order))
        object.__setattr__(self, "byte_order", ByteOrder(self.byte_order))

    @property
    def bytes_per_row(self) -> int:
        """Bytes occupied by one packed row."""
        return bytes_per_row(self.width)

    @property
    def bytes_per_character(self) -> int:
        """Bytes occupied by one packed character."""
        return self.bytes_per_row * self.height

    @classmethod
    def default(cls) -> "CharacterSetConfig":
        """8x8, right padding, MSB first, big-endian rows."""
        return cls()

    @classmethod
    def clamped(
        cls,
        width: int,
        height: int,
        padding: PaddingDirection | str = PaddingDirection.RIGHT,
        bit_order: BitOrder | str = BitOrder.MSB_FIRST,
        byte_order: ByteOrder | str = ByteOrder.BIG,
    ) -> "CharacterSetConfig":
        """Build a config with width and height clamped into 1..16."""
        return cls(
            width=clamp_dimension(width),
            height=clamp_dimension(height),
            padding=PaddingDirection(padding),
            bit_order=BitOrder(bit_order),
            byte_order=ByteOrder(byte_order),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "padding": self.padding.value,
            "bit_order": self.bit_order.value,
            "byte_order": self.byte_order.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CharacterSetConfig":
        """Deserialize from a plain dictionary.

        Args:
            data: Dictionary with width, height, padding, bit order and
                optional byte order. The older ``bitDirection`` and
                ``byteOrder`` keys are read when the snake_case ones are absent.

        Returns:
            CharacterSetConfig instance
        """
        bit_order = data.get("bit_order", data.get("bitDirection", BitOrder.MSB_FIRST))
        return cls(
            width=data["width"],
            height=data["height"],
            padding=data.get("padding", PaddingDirection.RIGHT),
            bit_order=bit_order,
            byte_order=data.get("byte_order", data.get("byteOrder", ByteOrder.BIG)),
        )
