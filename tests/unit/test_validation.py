"""Unit tests for configuration validation and settings models."""

import pytest
from pydantic import ValidationError

from charrom.config import (
    CharRomSettings,
    FontImportConfig,
    HistoryConfig,
    ImageImportConfig,
    ShareConfig,
    get_default_settings,
)
from charrom.core.validation import is_valid_config, validate_config
from charrom.domain import CharacterSetConfig


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_config(self) -> None:
        """Test well-formed configs produce no messages."""
        assert validate_config(CharacterSetConfig()) == []
        assert is_valid_config(CharacterSetConfig(width=16, height=1, byte_order="little"))

    def test_valid_mapping(self) -> None:
        """Test raw form values are accepted without a byte order."""
        values = {"width": 5, "height": 7, "padding": "left", "bit_order": "lsb"}
        assert validate_config(values) == []

    def test_legacy_bit_direction_key(self) -> None:
        """Test the older bitDirection key and its rtl spelling."""
        values = {"width": 8, "height": 8, "padding": "right", "bitDirection": "rtl"}
        assert validate_config(values) == []

    @pytest.mark.parametrize("width", [0, 17, -1, 8.5, True, None])
    def test_bad_width(self, width: object) -> None:
        """Test widths outside 1..16 or of the wrong type are reported."""
        values = {"width": width, "height": 8, "padding": "right", "bit_order": "msb"}
        assert validate_config(values) == ["Width must be between 1 and 16 pixels"]

    def test_bad_height(self) -> None:
        """Test heights outside 1..16 are reported."""
        values = {"width": 8, "height": 20, "padding": "right", "bit_order": "msb"}
        assert validate_config(values) == ["Height must be between 1 and 16 pixels"]

    def test_bad_padding_and_bit_order(self) -> None:
        """Test unknown padding and bit order values are both reported."""
        values = {"width": 8, "height": 8, "padding": "up", "bit_order": "middle"}
        assert validate_config(values) == [
            "Padding must be 'left' or 'right'",
            "Bit order must be 'msb' or 'lsb'",
        ]

    def test_bad_byte_order(self) -> None:
        """Test unknown byte orders are reported."""
        values = {
            "width": 12,
            "height": 8,
            "padding": "right",
            "bit_order": "msb",
            "byte_order": "middle",
        }
        assert validate_config(values) == ["Byte order must be 'big' or 'little'"]

    def test_legacy_byte_order_key(self) -> None:
        """Test the older byteOrder key is checked too."""
        values = {"width": 12, "height": 8, "padding": "right", "bit_order": "msb"}
        assert validate_config({**values, "byteOrder": "little"}) == []
        assert validate_config({**values, "byteOrder": "huge"}) == [
            "Byte order must be 'big' or 'little'"
        ]

    def test_all_errors_collected(self) -> None:
        """Test every missing required value gets its own message."""
        assert len(validate_config({})) == 4
        assert not is_valid_config({})


class TestSettings:
    """Tests for the pydantic settings models."""

    def test_defaults(self) -> None:
        """Test the default settings values."""
        settings = get_default_settings()
        assert isinstance(settings, CharRomSettings)
        assert settings.history.max_history is None
        assert settings.share.compression_level == 9
        assert settings.share.max_recommended_url_length == 2000
        assert settings.font_import.start_code == 32
        assert settings.font_import.end_code == 126
        assert settings.image_import.threshold == 128

    def test_negative_history_rejected(self) -> None:
        """Test a negative history bound is rejected."""
        with pytest.raises(ValidationError):
            HistoryConfig(max_history=-1)

    def test_share_limits_ordered(self) -> None:
        """Test the recommended URL length may not exceed the maximum."""
        with pytest.raises(ValidationError):
            ShareConfig(max_recommended_url_length=5000, max_url_length=1000)

    def test_font_import_range_ordered(self) -> None:
        """Test the font import range may not run backwards."""
        with pytest.raises(ValidationError):
            FontImportConfig(start_code=100, end_code=50)

    def test_font_import_dimensions_bounded(self) -> None:
        """Test font import cell sizes stay within 1..16."""
        with pytest.raises(ValidationError):
            FontImportConfig(char_width=17)

    def test_image_import_bounds(self) -> None:
        """Test image import threshold and grid values are range checked."""
        with pytest.raises(ValidationError):
            ImageImportConfig(threshold=300)
        with pytest.raises(ValidationError):
            ImageImportConfig(offset_x=-1)
        with pytest.raises(ValidationError):
            ImageImportConfig(char_height=0)
