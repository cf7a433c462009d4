"""Import characters from character sheet images.

A sheet is a grid of equally sized cells, optionally offset from the image
corner and separated by gaps. Each cell becomes one character: a character
pixel covers ``pixel_width x pixel_height`` image pixels whose average
brightness is compared with the threshold, and dark pixels light up unless
``invert`` is set. Images are flattened onto white first, so transparent
areas read as background, and anything outside the image reads as white.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
from PIL import Image, UnidentifiedImageError

from charrom.config import ImageImportConfig, ReadingOrder
from charrom.domain import Character
from charrom.exceptions import ImageLoadError

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")

# Cell sizes tried by detect_character_dimensions, in preference order
COMMON_CELL_SIZES = ((8, 8), (8, 16), (6, 8), (8, 10), (8, 12), (16, 16))
COMMON_CHARACTER_COUNTS = frozenset({16, 64, 96, 128, 256})

WHITE = 255

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GridSuggestion:
    """A cell size that tiles an image into a plausible character grid."""

    width: int
    height: int
    columns: int
    rows: int

    @property
    def character_count(self) -> int:
        return self.columns * self.rows


@dataclass
class ImageImportResult:
    """Characters sliced from a sheet image.

    Attributes:
        characters: Characters in reading order
        columns: Grid columns used
        rows: Grid rows used
        image_width: Width of the sampled (possibly rotated) image
        image_height: Height of the sampled (possibly rotated) image
    """

    characters: list[Character] = field(default_factory=list)
    columns: int = 0
    rows: int = 0
    image_width: int = 0
    image_height: int = 0


def is_image_filename(path: Path | str) -> bool:
    """Check whether a path has a supported image extension."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def flatten_image(image: Image.Image) -> Image.Image:
    """Composite an image onto white and convert it to 8-bit grayscale."""
    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, (WHITE, WHITE, WHITE, 255))
    return Image.alpha_composite(background, rgba).convert("L")


def load_image(path: Path) -> Image.Image:
    """Open an image file as grayscale flattened onto white.

    Args:
        path: PNG, JPEG, GIF or WebP file

    Returns:
        Image in mode ``L``

    Raises:
        ImageLoadError: If the file is missing or not a readable image
    """
    try:
        with Image.open(path) as source:
            return flatten_image(source)
    except FileNotFoundError as e:
        raise ImageLoadError(str(path), "file not found") from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(str(path), str(e)) from e


def rotate_image(image: Image.Image, degrees: float) -> Image.Image:
    """Rotate an image, growing the canvas so no corner is cut off.

    Positive angles turn the image counter-clockwise. Uncovered areas of
    the larger canvas are white.
    """
    if degrees == 0:
        return image
    return image.rotate(
        degrees,
        resample=Image.Resampling.BILINEAR,
        expand=True,
        fillcolor=WHITE,
    )


def cell_size(config: ImageImportConfig) -> tuple[int, int]:
    """Distance between neighbouring cells in image pixels, gaps included."""
    return (
        config.char_width * config.pixel_width + config.gap_x,
        config.char_height * config.pixel_height + config.gap_y,
    )


def grid_size(image_width: int, image_height: int, config: ImageImportConfig) -> tuple[int, int]:
    """Number of grid columns and rows to read.

    Forced counts win. Otherwise every cell that fits inside the image
    after the offset is counted; the last cell needs no trailing gap.
    """
    step_x, step_y = cell_size(config)
    columns = config.force_columns or max(0, (image_width - config.offset_x + config.gap_x) // step_x)
    rows = config.force_rows or max(0, (image_height - config.offset_y + config.gap_y) // step_y)
    return columns, rows


def cell_positions(columns: int, rows: int, order: ReadingOrder) -> Iterator[tuple[int, int]]:
    """Yield ``(row, column)`` grid positions in reading order."""
    row_indices = range(rows) if order.top_to_bottom else range(rows - 1, -1, -1)
    col_indices = range(columns) if order.left_to_right else range(columns - 1, -1, -1)

    if order.row_major:
        for row in row_indices:
            for col in col_indices:
                yield row, col
    else:
        for col in col_indices:
            for row in row_indices:
                yield row, col


def _area_brightness(
    pixels: Any,
    size: tuple[int, int],
    left: int,
    top: int,
    width: int,
    height: int,
) -> int:
    image_width, image_height = size
    total = 0
    for y in range(top, top + height):
        for x in range(left, left + width):
            if 0 <= x < image_width and 0 <= y < image_height:
                total += pixels[x, y]
            else:
                total += WHITE
    # Round half up
    return int(total / (width * height) + 0.5)


def extract_character(
    image: Image.Image,
    left: int,
    top: int,
    config: ImageImportConfig,
) -> Character:
    """Sample one grid cell of a grayscale image into a character.

    Args:
        image: Image in mode ``L``
        left: X of the cell's top-left image pixel
        top: Y of the cell's top-left image pixel
        config: Cell size, pixel size, threshold and inversion

    Returns:
        Character of ``char_height`` rows by ``char_width`` columns
    """
    pixels = image.load()
    rows = []
    for row in range(config.char_height):
        cells = []
        for col in range(config.char_width):
            brightness = _area_brightness(
                pixels,
                image.size,
                left + col * config.pixel_width,
                top + row * config.pixel_height,
                config.pixel_width,
                config.pixel_height,
            )
            cells.append((brightness < config.threshold) != config.invert)
        rows.append(cells)
    return Character(rows)


def parse_image(image: Image.Image, config: ImageImportConfig | None = None) -> ImageImportResult:
    """Slice an image into characters.

    Args:
        image: Any Pillow image; non-grayscale images are flattened onto white
        config: Grid and sampling options (defaults to an 8x8 grid)

    Returns:
        At most ``max_characters`` characters in reading order
    """
    config = config or ImageImportConfig()
    if image.mode != "L":
        image = flatten_image(image)
    image = rotate_image(image, config.rotation)

    columns, rows = grid_size(image.width, image.height, config)
    step_x, step_y = cell_size(config)

    characters: list[Character] = []
    for row, col in cell_positions(columns, rows, config.reading_order):
        if len(characters) >= config.max_characters:
            break
        left = config.offset_x + col * step_x
        top = config.offset_y + row * step_y
        characters.append(extract_character(image, left, top, config))

    logger.debug(
        "Image parsed",
        image_size=f"{image.width}x{image.height}",
        columns=columns,
        rows=rows,
        characters=len(characters),
    )
    return ImageImportResult(
        characters=characters,
        columns=columns,
        rows=rows,
        image_width=image.width,
        image_height=image.height,
    )


def import_image(path: Path, config: ImageImportConfig | None = None) -> ImageImportResult:
    """Load a character sheet image and slice it into characters.

    Raises:
        ImageLoadError: If the image cannot be opened
    """
    return parse_image(load_image(path), config)


def detect_character_dimensions(image_width: int, image_height: int) -> list[GridSuggestion]:
    """Suggest cell sizes that tile an image into a plausible grid.

    Sizes giving a typical ROM character count (16, 64, 96, 128 or 256)
    come first, the last such size found leading. Sizes giving any other
    count between 16 and 512 follow in table order. When nothing fits, an
    8x8 grid is suggested.
    """
    preferred: list[GridSuggestion] = []
    others: list[GridSuggestion] = []

    for width, height in COMMON_CELL_SIZES:
        columns, rows = image_width // width, image_height // height
        if columns <= 0 or rows <= 0:
            continue
        suggestion = GridSuggestion(width, height, columns, rows)
        if suggestion.character_count in COMMON_CHARACTER_COUNTS:
            preferred.insert(0, suggestion)
        elif 16 <= suggestion.character_count <= 512:
            others.append(suggestion)

    suggestions = preferred + others
    if not suggestions:
        suggestions.append(GridSuggestion(8, 8, image_width // 8, image_height // 8))
    return suggestions
