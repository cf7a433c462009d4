"""Bit-packing codec between byte buffers and character grids.

Each character occupies ``bytes_per_row * height`` bytes, rows stored top
to bottom. Three independent settings decide where pixel ``col`` of a row
lives:

- Padding: when the width is not a multiple of 8 the row has filler bits.
  RIGHT keeps them at the trailing end of the row, LEFT at the leading end.
- Bit order: MSB_FIRST stores the pixels left to right across the row's
  data bits, starting from bit 7 of the first byte. LSB_FIRST mirrors the
  whole data run, so the rightmost pixel takes the first data bit.
- Byte order: LITTLE swaps the bytes of each multi-byte row after the bits
  are placed. For 16-pixel rows, LSB_FIRST with LITTLE stores pixels 0-7
  in the first byte with the leftmost pixel in bit 0.

Example for 7-bit data ``pixels[0..6] = 0001110`` in one byte:

- MSB first, right padding: ``00011100``
- MSB first, left padding:  ``00001110``
- LSB first, right padding: ``01110000``
- LSB first, left padding:  ``00111000``

Both directions go through the same per-config bit layout, so
``decode(encode(chars))`` is lossless for every supported config.
"""

from collections.abc import Iterable, Sequence
from functools import lru_cache

from charrom.domain import BitOrder, ByteOrder, Character, CharacterSetConfig, PaddingDirection
from charrom.domain.config import bytes_per_row

__all__ = [
    "bytes_for_one_character",
    "bytes_per_character",
    "bytes_per_row",
    "character_count",
    "character_from_bytes",
    "decode",
    "encode",
    "row_layout",
]


def bytes_per_character(config: CharacterSetConfig) -> int:
    """Bytes needed for one packed character."""
    return bytes_per_row(config.width) * config.height


def character_count(byte_length: int, config: CharacterSetConfig) -> int:
    """Number of whole characters in a buffer of ``byte_length`` bytes."""
    return byte_length // bytes_per_character(config)


@lru_cache(maxsize=256)
def row_layout(
    width: int,
    padding: PaddingDirection,
    bit_order: BitOrder,
    byte_order: ByteOrder = ByteOrder.BIG,
) -> tuple[tuple[int, int], ...]:
    """Compute where each pixel column of a row is stored.

    Args:
        width: Pixels per row
        padding: Side holding the filler bits
        bit_order: Direction of the pixels across the row's data bits
        byte_order: Order of the row's bytes

    Returns:
        One ``(byte_offset, bit_mask)`` pair per column, left to right.
        ``byte_offset`` is relative to the start of the row.
    """
    row_bytes = bytes_per_row(width)
    # Bit positions counted from bit 7 of the row's first byte
    start = row_bytes * 8 - width if padding == PaddingDirection.LEFT else 0

    layout: list[tuple[int, int]] = []
    for col in range(width):
        if bit_order == BitOrder.LSB_FIRST:
            position = start + (width - 1 - col)
        else:
            position = start + col
        byte_offset = position // 8
        if byte_order == ByteOrder.LITTLE:
            byte_offset = row_bytes - 1 - byte_offset
        layout.append((byte_offset, 1 << (7 - position % 8)))

    return tuple(layout)


def bytes_for_one_character(character: Character, config: CharacterSetConfig) -> bytes:
    """Pack a single character into bytes.

    This is the only packing routine; ``encode`` and any text exporter that
    prints hex values go through it, so both produce identical bytes.

    Pixels missing from an undersized grid pack as 0; pixels beyond the
    config's box are ignored. Unused filler bits are always 0.

    Args:
        character: Character to pack
        config: Target binary layout

    Returns:
        ``bytes_per_character(config)`` bytes
    """
    bpr = bytes_per_row(config.width)
    layout = row_layout(config.width, config.padding, config.bit_order, config.byte_order)
    out = bytearray(bpr * config.height)

    for row in range(min(config.height, character.height)):
        pixels = character.pixels[row]
        base = row * bpr
        for col, (byte_offset, mask) in enumerate(layout):
            if col < len(pixels) and pixels[col]:
                out[base + byte_offset] |= mask

    return bytes(out)


def character_from_bytes(data: bytes | Sequence[int], config: CharacterSetConfig) -> Character:
    """Unpack a single character from its bytes.

    Bytes missing from a short buffer read as 0.

    Args:
        data: At least ``bytes_per_character(config)`` bytes
        config: Source binary layout

    Returns:
        Character of ``config.height`` rows by ``config.width`` columns
    """
    bpr = bytes_per_row(config.width)
    layout = row_layout(config.width, config.padding, config.bit_order, config.byte_order)
    size = len(data)

    rows = []
    for row in range(config.height):
        base = row * bpr
        rows.append(
            tuple(
                base + byte_offset < size and bool(data[base + byte_offset] & mask)
                for byte_offset, mask in layout
            )
        )

    return Character(tuple(rows))


def decode(data: bytes | bytearray | memoryview, config: CharacterSetConfig) -> list[Character]:
    """Slice a ROM buffer into characters.

    A trailing partial character (fewer than ``bytes_per_character`` bytes
    left over) is dropped silently; ROM dumps often carry trailing garbage.

    Args:
        data: Raw ROM bytes
        config: Binary layout of the ROM

    Returns:
        ``len(data) // bytes_per_character(config)`` characters
    """
    buffer = bytes(data)
    size = bytes_per_character(config)
    return [
        character_from_bytes(buffer[i * size:(i + 1) * size], config)
        for i in range(len(buffer) // size)
    ]


def encode(characters: Iterable[Character], config: CharacterSetConfig) -> bytes:
    """Pack characters into a ROM buffer.

    Args:
        characters: Characters in ROM order
        config: Target binary layout

    Returns:
        Concatenated ``bytes_for_one_character`` output for every character
    """
    return b"".join(bytes_for_one_character(c, config) for c in characters)
