"""Byte import from pasted source code.

Parses byte values out of C/C++, JavaScript or assembly listings so a
font copied from a header file or a disassembly can be loaded. Supported
literals:

- Hex: ``0x1F``, ``0X1f``, ``$1F``
- Binary: ``0b00011111``
- Decimal: ``31``

``//`` and ``/* */`` comments and ``;`` assembly comments are removed
before scanning, so numbers in comments are not picked up.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from charrom.core import codec
from charrom.domain import Character, CharacterSetConfig
from charrom.exceptions import TextImportError

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT = re.compile(r"(//|;).*?$", re.MULTILINE)
_TOKEN = re.compile(r"0[xX][0-9a-fA-F]{1,2}|\$[0-9a-fA-F]{1,2}|0[bB][01]{1,8}|\b\d{1,3}\b")


class NumberFormat(str, Enum):
    """Literal style found in the text."""

    HEX = "hex"
    DECIMAL = "decimal"
    BINARY = "binary"
    MIXED = "mixed"


@dataclass
class ParsedBytes:
    """Byte values scanned from text.

    Attributes:
        data: Values in the 0-255 range, in order
        detected_format: Literal style of the accepted values
        invalid_count: Tokens that were out of the byte range
    """

    data: bytes
    detected_format: NumberFormat
    invalid_count: int = 0


@dataclass
class TextImportResult:
    """Characters imported from text."""

    characters: list[Character]
    config: CharacterSetConfig
    detected_format: NumberFormat
    invalid_count: int = 0
    byte_count: int = 0
    trailing_bytes: int = 0
    warnings: list[str] = field(default_factory=list)


def _token_format(token: str) -> NumberFormat:
    if token[:2] in ("0x", "0X") or token.startswith("$"):
        return NumberFormat.HEX
    if token[:2] in ("0b", "0B"):
        return NumberFormat.BINARY
    return NumberFormat.DECIMAL


def _token_value(token: str, fmt: NumberFormat) -> int:
    if fmt == NumberFormat.HEX:
        return int(token[2:] if token[:2] in ("0x", "0X") else token[1:], 16)
    if fmt == NumberFormat.BINARY:
        return int(token[2:], 2)
    return int(token, 10)


def strip_comments(text: str) -> str:
    """Remove C block/line comments and assembly ``;`` comments."""
    return _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub(" ", text))


def parse_text_bytes(text: str) -> ParsedBytes:
    """Scan text for byte literals.

    Args:
        text: Source listing

    Returns:
        Accepted byte values with the detected literal style

    Raises:
        TextImportError: If the text is empty or holds no value in 0-255
    """
    if not text.strip():
        raise TextImportError("No input provided")

    tokens = _TOKEN.findall(strip_comments(text))
    if not tokens:
        raise TextImportError("No valid byte values found in input")

    values: list[int] = []
    formats: set[NumberFormat] = set()
    invalid = 0
    for token in tokens:
        fmt = _token_format(token)
        value = _token_value(token, fmt)
        if 0 <= value <= 255:
            values.append(value)
            formats.add(fmt)
        else:
            invalid += 1

    if not values:
        raise TextImportError("No valid byte values found (all values were out of range 0-255)")

    detected = formats.pop() if len(formats) == 1 else NumberFormat.MIXED
    return ParsedBytes(data=bytes(values), detected_format=detected, invalid_count=invalid)


def import_text(text: str, config: CharacterSetConfig) -> TextImportResult:
    """Parse a listing into characters.

    Args:
        text: Source listing
        config: Binary layout the bytes are in

    Returns:
        Imported characters with parse diagnostics

    Raises:
        TextImportError: If no byte values are found or they do not make up
            a single whole character
    """
    parsed = parse_text_bytes(text)
    characters = codec.decode(parsed.data, config)
    size = codec.bytes_per_character(config)

    if not characters:
        raise TextImportError(
            f"Found {len(parsed.data)} bytes, need at least {size} "
            f"for one {config.width}x{config.height} character"
        )

    trailing = len(parsed.data) - len(characters) * size
    warnings = []
    if parsed.invalid_count:
        warnings.append(f"{parsed.invalid_count} values were out of range 0-255 and skipped")
    if trailing:
        warnings.append(f"{trailing} trailing bytes do not form a whole character and were ignored")

    return TextImportResult(
        characters=characters,
        config=config,
        detected_format=parsed.detected_format,
        invalid_count=parsed.invalid_count,
        byte_count=len(parsed.data),
        trailing_bytes=trailing,
        warnings=warnings,
    )
