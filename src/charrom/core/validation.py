"""Character set config validation.

Validation reports every problem as a readable message instead of raising,
so a form can show them all at once. The codec and transforms assume a
config that has already passed here.
"""

from collections.abc import Mapping
from typing import Any

from charrom.domain import (
    MAX_DIMENSION,
    MIN_DIMENSION,
    BitOrder,
    ByteOrder,
    CharacterSetConfig,
    PaddingDirection,
)


def _as_mapping(config: CharacterSetConfig | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(config, CharacterSetConfig):
        return config.to_dict()
    return config


def _is_dimension(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_DIMENSION <= value <= MAX_DIMENSION
    )


def validate_config(config: CharacterSetConfig | Mapping[str, Any]) -> list[str]:
    """Check a config for out-of-range or unknown values.

    Args:
        config: A CharacterSetConfig or raw form values with ``width``,
            ``height``, ``padding`` and ``bit_order`` keys. ``byte_order``
            is optional and defaults to big-endian

    Returns:
        List of error messages, empty when the config is valid
    """
    values = _as_mapping(config)
    errors: list[str] = []

    if not _is_dimension(values.get("width")):
        errors.append(f"Width must be between {MIN_DIMENSION} and {MAX_DIMENSION} pixels")

    if not _is_dimension(values.get("height")):
        errors.append(f"Height must be between {MIN_DIMENSION} and {MAX_DIMENSION} pixels")

    try:
        PaddingDirection(values.get("padding"))
    except ValueError:
        errors.append("Padding must be 'left' or 'right'")

    try:
        BitOrder(values.get("bit_order", values.get("bitDirection")))
    except ValueError:
        errors.append("Bit order must be 'msb' or 'lsb'")

    try:
        ByteOrder(values.get("byte_order", values.get("byteOrder", ByteOrder.BIG)))
    except ValueError:
        errors.append("Byte order must be 'big' or 'little'")

    return errors


def is_valid_config(config: CharacterSetConfig | Mapping[str, Any]) -> bool:
    """Check a config without collecting messages."""
    return not validate_config(config)
