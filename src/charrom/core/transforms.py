"""Geometric transforms on character grids.

This module provides the pixel operations behind the editor toolbar and
the import wizard:
- Invert, horizontal and vertical flip
- Quarter-turn rotation
- One-pixel shifts with optional wrap-around
- Bounding box, trim and centring
- Resize and scale with a nine-way anchor
- Single-pixel edits and multi-character batch helpers

All functions are pure: the input character is never modified and a new
Character is always returned.
"""

from collections.abc import Callable, Collection, Sequence

from charrom.domain import (
    AnchorPoint,
    BoundingBox,
    Character,
    PixelState,
    RotateDirection,
    ScaleAlgorithm,
    ShiftDirection,
)

# Minimum share of a scaled pixel's source area that must be lit
SCALE_COVERAGE_THRESHOLD = 0.5


def center_offset(outer: int, inner: int) -> int:
    """Offset that centres a span of ``inner`` cells inside ``outer`` cells.

    Centring rounds toward the start: the offset is the floor of half the
    size difference, so an odd leftover cell goes to the end (right or
    bottom). Resize, scale, centre and the trimmed comparison all use this
    rule; picking ceiling instead would shift content by one pixel and
    break compatibility with characters already shared.
    """
    return (outer - inner) // 2


def anchor_offsets(
    anchor: AnchorPoint | str,
    outer_width: int,
    outer_height: int,
    inner_width: int,
    inner_height: int,
) -> tuple[int, int]:
    """Place an inner box inside an outer box according to an anchor.

    Args:
        anchor: Alignment reference
        outer_width: Width of the destination box
        outer_height: Height of the destination box
        inner_width: Width of the content
        inner_height: Height of the content

    Returns:
        ``(col_offset, row_offset)`` of the content's top-left cell in the
        destination. Offsets are negative when the content is larger and
        gets cropped.
    """
    anchor = AnchorPoint(anchor)

    if anchor.horizontal == "l":
        col_offset = 0
    elif anchor.horizontal == "c":
        col_offset = center_offset(outer_width, inner_width)
    else:
        col_offset = outer_width - inner_width

    if anchor.vertical == "t":
        row_offset = 0
    elif anchor.vertical == "m":
        row_offset = center_offset(outer_height, inner_height)
    else:
        row_offset = outer_height - inner_height

    return col_offset, row_offset


def _place(
    pixels: Sequence[Sequence[bool]],
    width: int,
    height: int,
    col_offset: int,
    row_offset: int,
) -> Character:
    """Copy a grid into a new ``height x width`` canvas at an offset."""
    src_height = len(pixels)
    src_width = len(pixels[0]) if pixels else 0
    rows = []
    for row in range(height):
        src_row = row - row_offset
        if 0 <= src_row < src_height:
            source = pixels[src_row]
            rows.append(
                tuple(
                    0 <= col - col_offset < src_width and source[col - col_offset]
                    for col in range(width)
                )
            )
        else:
            rows.append((False,) * width)
    return Character(tuple(rows))


def invert(character: Character) -> Character:
    """Negate every pixel."""
    return Character(tuple(tuple(not p for p in row) for row in character.pixels))


def flip_horizontal(character: Character) -> Character:
    """Mirror left to right."""
    return Character(tuple(row[::-1] for row in character.pixels))


def flip_vertical(character: Character) -> Character:
    """Mirror top to bottom."""
    return Character(character.pixels[::-1])


def rotate(character: Character, direction: RotateDirection | str) -> Character:
    """Rotate by 90 degrees.

    Implemented as a transpose followed by a reversal. The result is
    ``width`` rows by ``height`` columns; callers that need a fixed box
    resize it back afterwards.

    Args:
        character: Character to rotate
        direction: RIGHT for clockwise, LEFT for counter-clockwise

    Returns:
        Rotated character with swapped dimensions
    """
    direction = RotateDirection(direction)
    transposed = tuple(zip(*character.pixels))

    if direction == RotateDirection.RIGHT:
        # Clockwise: transpose, then reverse each row
        return Character(tuple(row[::-1] for row in transposed))
    # Counter-clockwise: transpose, then reverse row order
    return Character(transposed[::-1])


def shift(
    character: Character,
    direction: ShiftDirection | str,
    wrap: bool = True,
) -> Character:
    """Move every pixel one cell.

    Args:
        character: Character to shift
        direction: Direction of movement
        wrap: Refill the vacated edge with the pixels pushed off the
            opposite edge; when False the vacated edge is cleared

    Returns:
        Shifted character of the same size
    """
    direction = ShiftDirection(direction)
    pixels = character.pixels
    if not pixels or not pixels[0]:
        return Character(pixels)

    blank_row = (False,) * character.width

    if direction == ShiftDirection.UP:
        tail = pixels[:1] if wrap else (blank_row,)
        return Character(pixels[1:] + tail)
    if direction == ShiftDirection.DOWN:
        head = pixels[-1:] if wrap else (blank_row,)
        return Character(head + pixels[:-1])
    if direction == ShiftDirection.LEFT:
        return Character(tuple(row[1:] + (row[:1] if wrap else (False,)) for row in pixels))
    return Character(tuple((row[-1:] if wrap else (False,)) + row[:-1] for row in pixels))


def get_bounding_box(character: Character) -> BoundingBox | None:
    """Find the smallest rectangle containing every lit pixel.

    Returns:
        BoundingBox, or None when no pixel is lit
    """
    lit_rows = [r for r, row in enumerate(character.pixels) if any(row)]
    if not lit_rows:
        return None

    lit_cols = [
        c for c in range(character.width)
        if any(row[c] for row in character.pixels)
    ]

    return BoundingBox(
        min_row=lit_rows[0],
        max_row=lit_rows[-1],
        min_col=lit_cols[0],
        max_col=lit_cols[-1],
    )


def trim(character: Character) -> Character:
    """Crop to the bounding box of the lit pixels.

    Returns:
        Cropped character, or a 1x1 blank character when nothing is lit
        (never an empty grid)
    """
    bbox = get_bounding_box(character)
    if bbox is None:
        return Character.empty(1, 1)

    return Character(
        tuple(
            row[bbox.min_col:bbox.max_col + 1]
            for row in character.pixels[bbox.min_row:bbox.max_row + 1]
        )
    )


def resize(
    character: Character,
    new_width: int,
    new_height: int,
    anchor: AnchorPoint | str = AnchorPoint.TOP_LEFT,
) -> Character:
    """Place the grid inside a new canvas.

    The anchored edge or corner of the old content lines up with the same
    edge or corner of the new canvas. Content falling outside is cropped;
    newly exposed cells are off. Centre anchors use ``center_offset``.

    Args:
        character: Character to resize
        new_width: Canvas width
        new_height: Canvas height
        anchor: Alignment reference

    Returns:
        Character of ``new_height`` rows by ``new_width`` columns
    """
    col_offset, row_offset = anchor_offsets(
        anchor, new_width, new_height, character.width, character.height
    )
    return _place(character.pixels, new_width, new_height, col_offset, row_offset)


def center(character: Character) -> Character:
    """Move the lit content to the centre of the character's own box.

    A blank character is returned unchanged.
    """
    bbox = get_bounding_box(character)
    if bbox is None:
        return character

    target_col = center_offset(character.width, bbox.width)
    target_row = center_offset(character.height, bbox.height)
    shift_x = target_col - bbox.min_col
    shift_y = target_row - bbox.min_row

    if shift_x == 0 and shift_y == 0:
        return character

    return _place(character.pixels, character.width, character.height, shift_x, shift_y)


def _coverage(
    pixels: Sequence[Sequence[bool]],
    row_start: float,
    row_end: float,
    col_start: float,
    col_end: float,
) -> float:
    """Share of a fractional source rectangle that is lit."""
    height = len(pixels)
    width = len(pixels[0]) if pixels else 0

    total = 0.0
    lit = 0.0
    for row in range(max(0, int(row_start)), min(height - 1, int(row_end)) + 1):
        for col in range(max(0, int(col_start)), min(width - 1, int(col_end)) + 1):
            overlap = (
                (min(row + 1, row_end) - max(row, row_start))
                * (min(col + 1, col_end) - max(col, col_start))
            )
            if overlap <= 0:
                continue
            total += overlap
            if pixels[row][col]:
                lit += overlap

    return lit / total if total else 0.0


def scale(
    character: Character,
    factor: float,
    anchor: AnchorPoint | str = AnchorPoint.MIDDLE_CENTER,
    algorithm: ScaleAlgorithm | str = ScaleAlgorithm.NEAREST,
) -> Character:
    """Scale the content and clip it back into the original box.

    Args:
        character: Character to scale
        factor: Scale factor, e.g. 2.0 doubles, 0.5 halves
        anchor: Where the scaled content sits inside the original box
        algorithm: NEAREST picks the nearest source pixel; THRESHOLD lights
            a pixel when at least half of its source area is lit

    Returns:
        Character with the original dimensions
    """
    if factor == 1:
        return character
    if factor <= 0:
        raise ValueError(f"Scale factor must be positive, got {factor}")

    algorithm = ScaleAlgorithm(algorithm)
    old_width, old_height = character.width, character.height
    scaled_width = round(old_width * factor)
    scaled_height = round(old_height * factor)
    pixels = character.pixels

    scaled: list[tuple[bool, ...]] = []
    for out_row in range(scaled_height):
        if algorithm == ScaleAlgorithm.NEAREST:
            src_row = min(int(out_row / factor), old_height - 1)
            scaled.append(
                tuple(
                    pixels[src_row][min(int(out_col / factor), old_width - 1)]
                    for out_col in range(scaled_width)
                )
            )
        else:
            scaled.append(
                tuple(
                    _coverage(
                        pixels,
                        out_row / factor,
                        (out_row + 1) / factor,
                        out_col / factor,
                        (out_col + 1) / factor,
                    ) >= SCALE_COVERAGE_THRESHOLD
                    for out_col in range(scaled_width)
                )
            )

    col_offset, row_offset = anchor_offsets(
        anchor, old_width, old_height, scaled_width, scaled_height
    )
    return _place(scaled, old_width, old_height, col_offset, row_offset)


def clear(width: int, height: int) -> Character:
    """All-off character."""
    return Character.empty(width, height)


def fill(width: int, height: int) -> Character:
    """All-on character."""
    return Character.filled(width, height)


def set_pixel(character: Character, row: int, col: int, value: bool) -> Character:
    """Return a copy with one pixel set to ``value``.

    Raises:
        ValueError: If the position lies outside the grid
    """
    if not (0 <= row < character.height and 0 <= col < character.width):
        raise ValueError(
            f"Pixel ({row}, {col}) outside {character.width}x{character.height} character"
        )
    pixels = list(character.pixels)
    line = list(pixels[row])
    line[col] = bool(value)
    pixels[row] = tuple(line)
    return Character(tuple(pixels))


def toggle_pixel(character: Character, row: int, col: int) -> Character:
    """Return a copy with one pixel flipped."""
    return set_pixel(character, row, col, not character[row, col])


def batch_transform(
    characters: Sequence[Character],
    indices: Collection[int],
    transform: Callable[[Character], Character],
) -> list[Character]:
    """Apply ``transform`` to the characters at ``indices``.

    Characters outside the selection are passed through unchanged.
    """
    return [transform(c) if i in indices else c for i, c in enumerate(characters)]


def get_pixel_state(
    characters: Sequence[Character],
    indices: Collection[int],
    row: int,
    col: int,
) -> PixelState:
    """Report whether a pixel agrees across the selected characters.

    An empty selection reads as SAME_OFF. Positions outside a character
    read as off.
    """
    values = {
        0 <= row < characters[i].height
        and 0 <= col < characters[i].width
        and characters[i][row, col]
        for i in sorted(indices)
        if 0 <= i < len(characters)
    }
    if not values:
        return PixelState.SAME_OFF
    if len(values) > 1:
        return PixelState.MIXED
    return PixelState.SAME_ON if values.pop() else PixelState.SAME_OFF


def batch_toggle_pixel(
    characters: Sequence[Character],
    indices: Collection[int],
    row: int,
    col: int,
) -> list[Character]:
    """Toggle one pixel across a selection.

    A mixed or all-off pixel turns on everywhere; an all-on pixel turns off.
    """
    value = get_pixel_state(characters, indices, row, col) != PixelState.SAME_ON
    return batch_transform(characters, indices, lambda c: set_pixel(c, row, col, value))
