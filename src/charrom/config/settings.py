"""Configuration settings for charrom."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from charrom.domain import MAX_DIMENSION, MIN_DIMENSION


class HistoryConfig(BaseModel):
    """Configuration for the undo/redo history."""

    max_history: int | None = Field(
        default=None,
        ge=0,
        description="Maximum undo steps kept (None = unlimited)",
    )


class ShareConfig(BaseModel):
    """Configuration for share tokens and their URL length checks."""

    compression_level: int = Field(
        default=9,
        ge=0,
        le=9,
        description="DEFLATE compression level",
    )
    max_recommended_url_length: int = Field(
        default=2000,
        ge=1,
        description="URLs longer than this may not work on all platforms",
    )
    max_url_length: int = Field(
        default=8000,
        ge=1,
        description="URLs longer than this are refused",
    )

    @model_validator(mode="after")
    def _check_limits(self) -> "ShareConfig":
        if self.max_url_length < self.max_recommended_url_length:
            raise ValueError("max_url_length must be >= max_recommended_url_length")
        return self


class FontImportConfig(BaseModel):
    """Configuration for rasterising a vector font into characters."""

    char_width: int = Field(
        default=8,
        ge=MIN_DIMENSION,
        le=MAX_DIMENSION,
        description="Character width in pixels",
    )
    char_height: int = Field(
        default=8,
        ge=MIN_DIMENSION,
        le=MAX_DIMENSION,
        description="Character height in pixels",
    )
    start_code: int = Field(
        default=32,
        ge=0,
        le=0x10FFFF,
        description="First code point to import (32 = ASCII space)",
    )
    end_code: int = Field(
        default=126,
        ge=0,
        le=0x10FFFF,
        description="Last code point to import (126 = ASCII tilde)",
    )
    font_size: float = Field(
        default=8.0,
        gt=0.0,
        description="Rendered em size in pixels",
    )
    coverage_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Share of a pixel that must be covered to light it",
    )
    center_glyphs: bool = Field(
        default=True,
        description="Center each glyph in its cell",
    )
    baseline_offset: int = Field(
        default=0,
        description="Baseline adjustment in pixels (positive moves glyphs up)",
    )
    supersample: int = Field(
        default=4,
        ge=1,
        le=8,
        description="Coverage samples per pixel along each axis",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "FontImportConfig":
        if self.end_code < self.start_code:
            raise ValueError("end_code must be >= start_code")
        return self


class ReadingOrder(str, Enum):
    """Order in which grid cells of a sheet image become characters.

    The first half names the inner direction, the second the outer one:
    ``ltr-ttb`` reads each row left to right, rows top to bottom.
    """

    LTR_TTB = "ltr-ttb"
    RTL_TTB = "rtl-ttb"
    LTR_BTT = "ltr-btt"
    RTL_BTT = "rtl-btt"
    TTB_LTR = "ttb-ltr"
    TTB_RTL = "ttb-rtl"
    BTT_LTR = "btt-ltr"
    BTT_RTL = "btt-rtl"

    @property
    def row_major(self) -> bool:
        """True when cells are read along rows first."""
        return self.value[:3] in ("ltr", "rtl")

    @property
    def left_to_right(self) -> bool:
        return "ltr" in self.value

    @property
    def top_to_bottom(self) -> bool:
        return "ttb" in self.value


class ImageImportConfig(BaseModel):
    """Configuration for slicing a character sheet image into characters."""

    char_width: int = Field(
        default=8,
        ge=MIN_DIMENSION,
        le=MAX_DIMENSION,
        description="Character width in pixels",
    )
    char_height: int = Field(
        default=8,
        ge=MIN_DIMENSION,
        le=MAX_DIMENSION,
        description="Character height in pixels",
    )
    offset_x: int = Field(default=0, ge=0, description="Left edge of the grid in image pixels")
    offset_y: int = Field(default=0, ge=0, description="Top edge of the grid in image pixels")
    gap_x: int = Field(default=0, ge=0, description="Horizontal gap between cells")
    gap_y: int = Field(default=0, ge=0, description="Vertical gap between cells")
    force_columns: int = Field(
        default=0,
        ge=0,
        description="Number of grid columns (0 = fit the image)",
    )
    force_rows: int = Field(
        default=0,
        ge=0,
        description="Number of grid rows (0 = fit the image)",
    )
    threshold: int = Field(
        default=128,
        ge=0,
        le=255,
        description="Brightness below which a pixel is lit",
    )
    invert: bool = Field(
        default=False,
        description="Light bright pixels instead of dark ones",
    )
    max_characters: int = Field(
        default=256,
        ge=1,
        description="Maximum number of characters to read",
    )
    pixel_width: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Image pixels averaged into one character pixel horizontally",
    )
    pixel_height: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Image pixels averaged into one character pixel vertically",
    )
    rotation: float = Field(
        default=0.0,
        ge=-5.0,
        le=5.0,
        description="Degrees to rotate the image before slicing (positive = counter-clockwise)",
    )
    reading_order: ReadingOrder = Field(
        default=ReadingOrder.LTR_TTB,
        description="Order in which grid cells are read",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class CharRomSettings(BaseModel):
    """Main application settings."""

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    share: ShareConfig = Field(default_factory=ShareConfig)
    font_import: FontImportConfig = Field(default_factory=FontImportConfig)
    image_import: ImageImportConfig = Field(default_factory=ImageImportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CharRomSettings:
    """Get default application settings."""
    return CharRomSettings()
