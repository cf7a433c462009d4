"""Unit tests for character transforms."""

import pytest

from charrom.core import transforms
from charrom.domain import (
    AnchorPoint,
    BoundingBox,
    Character,
    PixelState,
    RotateDirection,
    ScaleAlgorithm,
    ShiftDirection,
)

L_SHAPE = Character.from_strings(
    [
        "#...",
        "#...",
        "##..",
    ]
)


class TestFlipsAndInvert:
    """Tests for involutive transforms."""

    @pytest.mark.parametrize(
        "transform",
        [transforms.invert, transforms.flip_horizontal, transforms.flip_vertical],
    )
    def test_involution(self, transform) -> None:
        """Test applying the transform twice restores the character."""
        assert transform(transform(L_SHAPE)) == L_SHAPE

    def test_invert(self) -> None:
        """Test every pixel is toggled."""
        assert transforms.invert(Character.from_strings(["#."])) == Character.from_strings([".#"])

    def test_flip_horizontal(self) -> None:
        """Test columns are mirrored."""
        assert transforms.flip_horizontal(L_SHAPE).to_strings() == ["...#", "...#", "..##"]

    def test_flip_vertical(self) -> None:
        """Test rows are mirrored."""
        assert transforms.flip_vertical(L_SHAPE).to_strings() == ["##..", "#...", "#..."]

    def test_input_not_modified(self) -> None:
        """Test transforms leave their input untouched."""
        before = L_SHAPE.pixels
        transforms.invert(L_SHAPE)
        assert L_SHAPE.pixels == before


class TestRotate:
    """Tests for rotate."""

    def test_rotate_right_swaps_dimensions(self) -> None:
        """Test a clockwise turn swaps width and height."""
        rotated = transforms.rotate(L_SHAPE, RotateDirection.RIGHT)
        assert rotated.width == 3
        assert rotated.height == 4
        assert rotated.to_strings() == ["###", "#..", "...", "..."]

    def test_rotate_left(self) -> None:
        """Test a counter-clockwise turn."""
        rotated = transforms.rotate(L_SHAPE, "left")
        assert rotated.to_strings() == ["...", "...", "..#", "###"]

    def test_four_turns_identity(self) -> None:
        """Test four right turns restore the character."""
        result = L_SHAPE
        for _ in range(4):
            result = transforms.rotate(result, RotateDirection.RIGHT)
        assert result == L_SHAPE

    def test_right_then_left_identity(self) -> None:
        """Test opposite turns cancel out."""
        turned = transforms.rotate(L_SHAPE, RotateDirection.RIGHT)
        assert transforms.rotate(turned, RotateDirection.LEFT) == L_SHAPE


class TestShift:
    """Tests for shift."""

    def test_shift_left_wraps(self) -> None:
        """Test pixels leaving the left edge enter on the right."""
        char = Character.from_strings(["#..", ".#."])
        assert transforms.shift(char, ShiftDirection.LEFT).to_strings() == ["..#", "#.."]

    def test_shift_right_without_wrap(self) -> None:
        """Test pixels leaving the edge are dropped without wrap."""
        char = Character.from_strings(["..#"])
        assert transforms.shift(char, "right", wrap=False).to_strings() == ["..."]

    def test_shift_up_wraps(self) -> None:
        """Test the top row wraps to the bottom."""
        char = Character.from_strings(["#.", "..", ".#"])
        assert transforms.shift(char, ShiftDirection.UP).to_strings() == ["..", ".#", "#."]

    def test_shift_down_without_wrap(self) -> None:
        """Test shifting down clears the top row without wrap."""
        char = Character.from_strings(["#.", ".#"])
        assert transforms.shift(char, ShiftDirection.DOWN, wrap=False).to_strings() == ["..", "#."]

    @pytest.mark.parametrize(
        ("forward", "back"),
        [
            (ShiftDirection.LEFT, ShiftDirection.RIGHT),
            (ShiftDirection.UP, ShiftDirection.DOWN),
        ],
    )
    def test_wrapped_shift_is_reversible(self, forward, back) -> None:
        """Test opposite wrapped shifts cancel out."""
        assert transforms.shift(transforms.shift(L_SHAPE, forward), back) == L_SHAPE


class TestBoundingBoxAndTrim:
    """Tests for get_bounding_box, trim and center."""

    def test_bounding_box(self) -> None:
        """Test the box spans the lit pixels inclusively."""
        char = Character.from_strings(["....", ".#..", "..#.", "...."])
        assert transforms.get_bounding_box(char) == BoundingBox(1, 2, 1, 2)

    def test_bounding_box_blank(self) -> None:
        """Test a blank character has no bounding box."""
        assert transforms.get_bounding_box(Character.empty(4, 4)) is None

    def test_trim(self) -> None:
        """Test trim crops to the lit pixels."""
        char = Character.from_strings(["....", ".#..", "..#.", "...."])
        assert transforms.trim(char).to_strings() == ["#.", ".#"]

    def test_trim_blank_gives_one_pixel(self) -> None:
        """Test trimming a blank character gives one unlit pixel."""
        assert transforms.trim(Character.empty(8, 8)) == Character.empty(1, 1)

    def test_center_floors_odd_leftover(self) -> None:
        """Test an odd leftover cell goes to the right and bottom."""
        char = Character.from_strings(["##...", "##...", ".....", "....."])
        assert transforms.center(char).to_strings() == [".....", ".##..", ".##..", "....."]

    def test_center_blank_unchanged(self) -> None:
        """Test centring a blank character returns it as is."""
        blank = Character.empty(3, 3)
        assert transforms.center(blank) is blank

    def test_center_offset(self) -> None:
        """Test the offset that centres one size inside another."""
        assert transforms.center_offset(5, 2) == 1
        assert transforms.center_offset(6, 2) == 2
        assert transforms.center_offset(2, 5) == -2


class TestResize:
    """Tests for resize."""

    def test_same_size_is_identity(self) -> None:
        """Test resizing to the current size changes nothing."""
        for anchor in AnchorPoint:
            assert transforms.resize(L_SHAPE, 4, 3, anchor) == L_SHAPE

    def test_grow_top_left(self) -> None:
        """Test growing keeps the content at the top left."""
        char = Character.filled(2, 2)
        assert transforms.resize(char, 3, 3).to_strings() == ["##.", "##.", "..."]

    def test_grow_bottom_right(self) -> None:
        """Test growing anchored bottom right pads above and left."""
        char = Character.filled(2, 2)
        result = transforms.resize(char, 3, 3, AnchorPoint.BOTTOM_RIGHT)
        assert result.to_strings() == ["...", ".##", ".##"]

    def test_grow_center_floors(self) -> None:
        """Test centred growth puts the odd cell right and below."""
        char = Character.filled(1, 1)
        result = transforms.resize(char, 4, 4, "mc")
        assert result.to_strings() == ["....", ".#..", "....", "...."]

    def test_shrink_crops(self) -> None:
        """Test shrinking crops away from the anchor."""
        result = transforms.resize(L_SHAPE, 2, 2, AnchorPoint.BOTTOM_LEFT)
        assert result.to_strings() == ["#.", "##"]


class TestScale:
    """Tests for scale."""

    def test_factor_one_is_identity(self) -> None:
        """Test a factor of one returns the character."""
        assert transforms.scale(L_SHAPE, 1) is L_SHAPE

    def test_non_positive_factor_rejected(self) -> None:
        """Test zero and negative factors are rejected."""
        with pytest.raises(ValueError, match="positive"):
            transforms.scale(L_SHAPE, 0)

    def test_scale_up_nearest_keeps_box(self) -> None:
        """Test nearest-neighbour upscaling keeps the character size."""
        char = Character.from_strings(["#...", "....", "....", "...."])
        result = transforms.scale(char, 2, AnchorPoint.TOP_LEFT)
        assert result.width == 4
        assert result.height == 4
        assert result.to_strings() == ["##..", "##..", "....", "...."]

    def test_scale_down_threshold(self) -> None:
        """Test threshold downscaling needs half the source block lit."""
        char = Character.from_strings(["##..", "##..", "...#", "...."])
        result = transforms.scale(char, 0.5, AnchorPoint.TOP_LEFT, ScaleAlgorithm.THRESHOLD)
        assert result.to_strings() == ["#...", "....", "....", "...."]

    def test_scale_down_centered(self) -> None:
        """Test downscaled content is centred by default."""
        char = Character.filled(4, 4)
        result = transforms.scale(char, 0.5)
        assert result.to_strings() == ["....", ".##.", ".##.", "...."]


class TestPixelEdits:
    """Tests for single-pixel and batch helpers."""

    def test_set_pixel(self) -> None:
        """Test a single pixel is set at (row, col)."""
        result = transforms.set_pixel(Character.empty(2, 2), 1, 0, True)
        assert result.to_strings() == ["..", "#."]

    def test_set_pixel_out_of_range(self) -> None:
        """Test out-of-range coordinates are rejected."""
        with pytest.raises(ValueError, match="outside"):
            transforms.set_pixel(Character.empty(2, 2), 2, 0, True)

    def test_toggle_pixel(self) -> None:
        """Test toggling twice restores the pixel."""
        char = transforms.toggle_pixel(Character.empty(2, 1), 0, 1)
        assert char.to_strings() == [".#"]
        assert transforms.toggle_pixel(char, 0, 1).is_blank()

    def test_clear_and_fill(self) -> None:
        """Test blank and filled characters of a given size."""
        assert transforms.clear(3, 2) == Character.empty(3, 2)
        assert transforms.fill(3, 2) == Character.filled(3, 2)

    def test_batch_transform(self) -> None:
        """Test only selected characters are transformed."""
        chars = [Character.empty(2, 2)] * 3
        result = transforms.batch_transform(chars, {0, 2}, transforms.invert)
        assert result[0] == Character.filled(2, 2)
        assert result[1] == Character.empty(2, 2)
        assert result[2] == Character.filled(2, 2)

    def test_pixel_state(self) -> None:
        """Test a pixel's state across a selection."""
        on = Character.filled(2, 2)
        off = Character.empty(2, 2)
        assert transforms.get_pixel_state([on, on], {0, 1}, 0, 0) == PixelState.SAME_ON
        assert transforms.get_pixel_state([off, off], {0, 1}, 0, 0) == PixelState.SAME_OFF
        assert transforms.get_pixel_state([on, off], {0, 1}, 0, 0) == PixelState.MIXED
        assert transforms.get_pixel_state([on], set(), 0, 0) == PixelState.SAME_OFF

    def test_batch_toggle_mixed_turns_on(self) -> None:
        """Test a mixed pixel is turned on everywhere."""
        chars = [Character.filled(1, 1), Character.empty(1, 1)]
        result = transforms.batch_toggle_pixel(chars, {0, 1}, 0, 0)
        assert all(c[0, 0] for c in result)

    def test_batch_toggle_all_on_turns_off(self) -> None:
        """Test a pixel lit everywhere is turned off."""
        chars = [Character.filled(1, 1), Character.filled(1, 1)]
        result = transforms.batch_toggle_pixel(chars, {0, 1}, 0, 0)
        assert not any(c[0, 0] for c in result)
