"""Unit tests for the bitmap codec."""

import itertools
import random

import pytest

from charrom.core import codec
from charrom.domain import BitOrder, ByteOrder, Character, CharacterSetConfig, PaddingDirection

ALL_LAYOUTS = list(itertools.product(PaddingDirection, BitOrder, ByteOrder))

RING = bytes([0x3C, 0x42, 0x81, 0x81, 0x81, 0x81, 0x42, 0x3C])


def random_character(width: int, height: int, rng: random.Random) -> Character:
    return Character([[rng.random() < 0.5 for _ in range(width)] for _ in range(height)])


def pack_row_by_bit_string(
    pixels: list[bool],
    padding: PaddingDirection,
    bit_order: BitOrder,
    byte_order: ByteOrder,
) -> bytes:
    """Pack one row by laying the pixels out as a flat bit string.

    The data run is placed after the filler for LEFT padding and mirrored
    as a whole for LSB_FIRST; the row's bytes are then swapped for LITTLE.
    """
    width = len(pixels)
    row_bytes = (width + 7) // 8
    offset = row_bytes * 8 - width if padding == PaddingDirection.LEFT else 0
    bits = [False] * (row_bytes * 8)
    for i, on in enumerate(pixels):
        index = i if bit_order == BitOrder.MSB_FIRST else width - 1 - i
        bits[offset + index] = on

    out = [
        sum(1 << (7 - bit) for bit in range(8) if bits[byte * 8 + bit])
        for byte in range(row_bytes)
    ]
    if byte_order == ByteOrder.LITTLE:
        out.reverse()
    return bytes(out)


class TestSizes:
    """Tests for size helpers."""

    def test_bytes_per_character(self) -> None:
        """Test byte sizes for single and multi-byte rows."""
        assert codec.bytes_per_character(CharacterSetConfig(width=8, height=8)) == 8
        assert codec.bytes_per_character(CharacterSetConfig(width=5, height=7)) == 7
        assert codec.bytes_per_character(CharacterSetConfig(width=16, height=16)) == 32

    def test_character_count(self) -> None:
        """Test whole characters are counted and remainders ignored."""
        config = CharacterSetConfig(width=8, height=8)
        assert codec.character_count(2048, config) == 256
        assert codec.character_count(2055, config) == 256
        assert codec.character_count(7, config) == 0


class TestDecode:
    """Tests for decode."""

    def test_ring_character(self) -> None:
        """Test the first row of 0x3C reads as 00111100."""
        chars = codec.decode(RING, CharacterSetConfig())
        assert len(chars) == 1
        assert chars[0].pixels[0] == (False, False, True, True, True, True, False, False)
        assert chars[0].pixels[2] == (True, False, False, False, False, False, False, True)

    def test_ring_reencodes_exactly(self) -> None:
        """Test decoding then encoding the ring gives back its bytes."""
        config = CharacterSetConfig()
        assert codec.encode(codec.decode(RING, config), config) == RING

    def test_trailing_partial_character_dropped(self) -> None:
        """Test leftover bytes after the last whole character are ignored."""
        chars = codec.decode(RING * 2 + b"\xff\xff\xff", CharacterSetConfig())
        assert len(chars) == 2

    def test_buffer_smaller_than_one_character(self) -> None:
        """Test a buffer shorter than one character decodes to nothing."""
        assert codec.decode(b"\x01\x02", CharacterSetConfig()) == []

    def test_empty_buffer(self) -> None:
        """Test an empty buffer decodes to nothing."""
        assert codec.decode(b"", CharacterSetConfig()) == []

    def test_decoded_dimensions(self) -> None:
        """Test decoded characters take the config's box size."""
        config = CharacterSetConfig(width=12, height=3)
        chars = codec.decode(bytes(6 * 4), config)
        assert len(chars) == 4
        assert all(c.width == 12 and c.height == 3 for c in chars)


class TestBitLayout:
    """Tests for padding, bit order and byte order placement."""

    # Seven pixels 0001110 in a single byte
    ROW = Character.from_strings(["...###."])

    @pytest.mark.parametrize(
        ("padding", "bit_order", "expected"),
        [
            (PaddingDirection.RIGHT, BitOrder.MSB_FIRST, 0b00011100),
            (PaddingDirection.LEFT, BitOrder.MSB_FIRST, 0b00001110),
            (PaddingDirection.RIGHT, BitOrder.LSB_FIRST, 0b01110000),
            (PaddingDirection.LEFT, BitOrder.LSB_FIRST, 0b00111000),
        ],
    )
    def test_seven_bit_row(
        self, padding: PaddingDirection, bit_order: BitOrder, expected: int
    ) -> None:
        """Test the four single-byte placements of 0001110."""
        config = CharacterSetConfig(width=7, height=1, padding=padding, bit_order=bit_order)
        assert codec.bytes_for_one_character(self.ROW, config) == bytes([expected])

    def test_lsb_first_leftmost_pixel_is_bit_zero(self) -> None:
        """Test LSB first stores the leftmost pixel of a byte-wide row in bit 0."""
        config = CharacterSetConfig(width=8, height=1, bit_order=BitOrder.LSB_FIRST)
        char = Character.from_strings(["#......."])
        assert codec.bytes_for_one_character(char, config) == b"\x01"

    def test_twelve_pixel_row_right_padding(self) -> None:
        """Test a two-byte row keeps filler in the low bits of the last byte."""
        config = CharacterSetConfig(width=12, height=1)
        char = Character.from_strings(["#..........#"])
        assert codec.bytes_for_one_character(char, config) == bytes([0x80, 0x10])

    def test_twelve_pixel_row_left_padding(self) -> None:
        """Test a two-byte row keeps filler in the high bits of the first byte."""
        config = CharacterSetConfig(width=12, height=1, padding=PaddingDirection.LEFT)
        char = Character.from_strings(["#..........#"])
        assert codec.bytes_for_one_character(char, config) == bytes([0x08, 0x01])

    def test_twelve_pixel_lsb_row_mirrors_whole_row(self) -> None:
        """Test LSB first puts the leftmost of 12 pixels in the last data bit."""
        config = CharacterSetConfig(width=12, height=1, bit_order=BitOrder.LSB_FIRST)
        char = Character.from_strings(["#..........."])
        assert codec.bytes_for_one_character(char, config) == b"\x00\x10"

    def test_twelve_pixel_lsb_row_left_padding(self) -> None:
        """Test LSB first with left padding ends the data run at bit 0."""
        config = CharacterSetConfig(
            width=12, height=1, padding=PaddingDirection.LEFT, bit_order=BitOrder.LSB_FIRST
        )
        char = Character.from_strings(["#..........."])
        assert codec.bytes_for_one_character(char, config) == b"\x00\x01"

    def test_little_endian_swaps_row_bytes(self) -> None:
        """Test little-endian rows store the big-endian bytes reversed."""
        config = CharacterSetConfig(width=12, height=1, byte_order=ByteOrder.LITTLE)
        char = Character.from_strings(["#..........#"])
        assert codec.bytes_for_one_character(char, config) == bytes([0x10, 0x80])

    def test_sixteen_pixel_lsb_little_endian_is_per_byte(self) -> None:
        """Test LSB first with little-endian rows keeps pixels 0-7 in byte 0."""
        config = CharacterSetConfig(
            width=16, height=1, bit_order=BitOrder.LSB_FIRST, byte_order=ByteOrder.LITTLE
        )
        left = Character.from_strings(["#..............."])
        ninth = Character.from_strings(["........#......."])
        assert codec.bytes_for_one_character(left, config) == b"\x01\x00"
        assert codec.bytes_for_one_character(ninth, config) == b"\x00\x01"

    def test_byte_order_ignored_for_single_byte_rows(self) -> None:
        """Test byte order has no effect on rows of 8 pixels or fewer."""
        big = CharacterSetConfig(width=8, height=8)
        little = CharacterSetConfig(width=8, height=8, byte_order=ByteOrder.LITTLE)
        assert codec.decode(RING, big) == codec.decode(RING, little)

    @pytest.mark.parametrize(("padding", "bit_order", "byte_order"), ALL_LAYOUTS)
    def test_matches_bit_string_packing(
        self, padding: PaddingDirection, bit_order: BitOrder, byte_order: ByteOrder
    ) -> None:
        """Test every width packs like the flat bit string layout."""
        rng = random.Random(f"{padding.value}-{bit_order.value}-{byte_order.value}")
        for width in range(1, 17):
            config = CharacterSetConfig(width, 1, padding, bit_order, byte_order)
            row = [rng.random() < 0.5 for _ in range(width)]
            expected = pack_row_by_bit_string(row, padding, bit_order, byte_order)
            assert codec.bytes_for_one_character(Character([row]), config) == expected

    def test_filler_bits_ignored_on_decode(self) -> None:
        """Test set filler bits do not light any pixel."""
        config = CharacterSetConfig(width=5, height=1)
        assert codec.decode(b"\x07", config)[0].is_blank()

    def test_row_layout_is_one_entry_per_column(self) -> None:
        """Test every column maps to its own bit."""
        for width in range(1, 17):
            for padding, bit_order, byte_order in ALL_LAYOUTS:
                layout = codec.row_layout(width, padding, bit_order, byte_order)
                assert len(layout) == width
                assert len(set(layout)) == width


class TestEncode:
    """Tests for encode."""

    def test_output_length(self) -> None:
        """Test output is one packed character per input."""
        config = CharacterSetConfig(width=10, height=5)
        chars = [Character.empty(10, 5)] * 3
        assert len(codec.encode(chars, config)) == 3 * 10

    def test_empty_set(self) -> None:
        """Test an empty set encodes to no bytes."""
        assert codec.encode([], CharacterSetConfig()) == b""

    def test_encode_matches_single_character_packing(self) -> None:
        """Test encode is the concatenation of per-character packing."""
        rng = random.Random(7)
        config = CharacterSetConfig(
            width=11, height=9, padding="left", bit_order="lsb", byte_order="little"
        )
        chars = [random_character(11, 9, rng) for _ in range(5)]
        expected = b"".join(codec.bytes_for_one_character(c, config) for c in chars)
        assert codec.encode(chars, config) == expected

    def test_undersized_character_packs_zeros(self) -> None:
        """Test pixels missing from a small grid pack as zero."""
        config = CharacterSetConfig(width=8, height=2)
        assert codec.bytes_for_one_character(Character.filled(4, 1), config) == b"\xf0\x00"


class TestRoundTrip:
    """Lossless round-trips across every supported layout."""

    @pytest.mark.parametrize("height", range(1, 17))
    @pytest.mark.parametrize(("padding", "bit_order", "byte_order"), ALL_LAYOUTS)
    def test_all_sizes(
        self,
        padding: PaddingDirection,
        bit_order: BitOrder,
        byte_order: ByteOrder,
        height: int,
    ) -> None:
        """Test decode(encode(chars)) for every width at this height."""
        rng = random.Random(f"{padding.value}-{bit_order.value}-{byte_order.value}-{height}")
        for width in range(1, 17):
            config = CharacterSetConfig(width, height, padding, bit_order, byte_order)
            chars = [random_character(width, height, rng) for _ in range(3)]
            assert codec.decode(codec.encode(chars, config), config) == chars

    @pytest.mark.parametrize("count", [0, 1, 256])
    def test_set_sizes(self, count: int) -> None:
        """Test empty, single and full 256-character sets round-trip."""
        rng = random.Random(count)
        config = CharacterSetConfig(
            width=13, height=16, padding="left", bit_order="lsb", byte_order="little"
        )
        chars = [random_character(13, 16, rng) for _ in range(count)]
        data = codec.encode(chars, config)
        assert len(data) == count * 32
        assert codec.decode(data, config) == chars

    @pytest.mark.parametrize(("padding", "bit_order", "byte_order"), ALL_LAYOUTS)
    def test_bytes_round_trip_with_clear_filler(
        self, padding: PaddingDirection, bit_order: BitOrder, byte_order: ByteOrder
    ) -> None:
        """Test bytes survive decode then encode when filler bits are zero."""
        config = CharacterSetConfig(
            width=16, height=4, padding=padding, bit_order=bit_order, byte_order=byte_order
        )
        data = bytes(range(8))
        assert codec.encode(codec.decode(data, config), config) == data
