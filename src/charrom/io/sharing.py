"""Share tokens for character sets.

A share token packs a whole character set plus its name and description
into a URL-safe string:

    "2:" + base64url(deflate(payload))

    payload = [width:1][height:1][flags:1]
              name (UTF-8) 0x00
              description (UTF-8) 0x00
              packed character data (BitmapCodec output)

    flags: bit 0 set for LEFT padding, bit 1 set for LSB_FIRST bit order

The header carries no byte order, so character data is always packed with
big-endian rows and the decoded config reports BIG.

The token is self-describing; decoding needs no outside config. Building
the share URL (``<base>#<token>``) is left to the caller.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

import structlog

from charrom.config import ShareConfig
from charrom.core import codec
from charrom.domain import BitOrder, ByteOrder, Character, CharacterSetConfig, PaddingDirection
from charrom.exceptions import ShareDecodeError
from charrom.io.compression import (
    MAX_COMPRESSION_LEVEL,
    base64url_decode,
    base64url_encode,
    compress,
    decompress,
)

SHARE_VERSION_PREFIX = "2:"

HEADER_SIZE = 3
FLAG_PADDING_LEFT = 0x01
FLAG_BIT_ORDER_LSB = 0x02

# Estimator constants: header plus an allowance for name and description,
# a conservative 50% compression ratio, base64 growth, and URL base path.
_ESTIMATED_METADATA_BYTES = 50
_ESTIMATED_COMPRESSION_RATIO = 0.5
_BASE64_GROWTH = 1.34
_ESTIMATED_URL_BASE_LENGTH = 50

logger = structlog.get_logger(__name__)


class UrlLengthStatus(str, Enum):
    """How a share URL's length compares with practical limits."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class SharedCharacterSet:
    """A decoded share token.

    Attributes:
        name: Character set name
        description: Character set description
        characters: Decoded characters
        config: Binary layout recovered from the header
    """

    name: str
    description: str
    characters: list[Character] = field(default_factory=list)
    config: CharacterSetConfig = field(default_factory=CharacterSetConfig)


@dataclass(frozen=True)
class ShareCheck:
    """Result of checking whether a set is small enough to share."""

    can_share: bool
    estimated_length: int
    status: UrlLengthStatus
    message: str


def _flags(config: CharacterSetConfig) -> int:
    flags = 0
    if config.padding == PaddingDirection.LEFT:
        flags |= FLAG_PADDING_LEFT
    if config.bit_order == BitOrder.LSB_FIRST:
        flags |= FLAG_BIT_ORDER_LSB
    return flags


def encode_character_set(
    name: str,
    description: str,
    characters: Sequence[Character],
    config: CharacterSetConfig,
    level: int = MAX_COMPRESSION_LEVEL,
) -> str:
    """Build a share token.

    Args:
        name: Character set name; must not contain NUL
        description: Character set description; must not contain NUL
        characters: Characters to share, may be empty
        config: Binary layout; width and height must fit in one byte each.
            Its byte order is not recorded
        level: DEFLATE compression level

    Returns:
        Token string starting with the version prefix

    Raises:
        ValueError: If name or description contains a NUL character
    """
    if "\x00" in name or "\x00" in description:
        raise ValueError("Name and description must not contain NUL characters")

    payload = bytearray((config.width, config.height, _flags(config)))
    payload += name.encode("utf-8") + b"\x00"
    payload += description.encode("utf-8") + b"\x00"
    payload += codec.encode(characters, replace(config, byte_order=ByteOrder.BIG))

    token = SHARE_VERSION_PREFIX + base64url_encode(compress(bytes(payload), level))
    logger.debug(
        "Share token encoded",
        characters=len(characters),
        payload_bytes=len(payload),
        token_length=len(token),
    )
    return token


def decode_character_set(token: str) -> SharedCharacterSet:
    """Parse a share token.

    Args:
        token: Token produced by ``encode_character_set``

    Returns:
        Decoded name, description, characters and config

    Raises:
        ShareDecodeError: If the prefix is missing, the data is corrupt,
            or the name or description is unterminated
    """
    if not token.startswith(SHARE_VERSION_PREFIX):
        raise ShareDecodeError("missing version prefix")

    try:
        data = decompress(base64url_decode(token[len(SHARE_VERSION_PREFIX):]))
    except ValueError as e:
        raise ShareDecodeError(str(e)) from e

    if len(data) < HEADER_SIZE:
        raise ShareDecodeError("header truncated")

    width, height, flags = data[0], data[1], data[2]

    name_end = data.find(b"\x00", HEADER_SIZE)
    if name_end == -1:
        raise ShareDecodeError("name not terminated")

    desc_end = data.find(b"\x00", name_end + 1)
    if desc_end == -1:
        raise ShareDecodeError("description not terminated")

    try:
        name = data[HEADER_SIZE:name_end].decode("utf-8")
        description = data[name_end + 1:desc_end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ShareDecodeError(f"invalid UTF-8 text: {e}") from e

    if width == 0 or height == 0:
        raise ShareDecodeError(f"invalid character size {width}x{height}")

    config = CharacterSetConfig(
        width=width,
        height=height,
        padding=PaddingDirection.LEFT if flags & FLAG_PADDING_LEFT else PaddingDirection.RIGHT,
        bit_order=BitOrder.LSB_FIRST if flags & FLAG_BIT_ORDER_LSB else BitOrder.MSB_FIRST,
    )
    characters = codec.decode(data[desc_end + 1:], config)

    logger.debug("Share token decoded", characters=len(characters), width=width, height=height)
    return SharedCharacterSet(
        name=name,
        description=description,
        characters=characters,
        config=config,
    )


def extract_token(url: str) -> str | None:
    """Return the fragment of a share URL, or None if it has none."""
    _, sep, fragment = url.partition("#")
    return fragment if sep else None


def estimate_url_length(character_count: int, width: int, height: int) -> int:
    """Predict the share URL length without running the compressor.

    Assumes each character packs into ``ceil(width * height / 8)`` bytes,
    about 50 bytes of name and description, a 50% compression ratio,
    base64 growth of 1.34, the two-character version prefix and 50
    characters of URL base path.

    Args:
        character_count: Characters in the set
        width: Character width
        height: Character height

    Returns:
        Estimated URL length in characters
    """
    bytes_per_char = math.ceil(width * height / 8)
    total_bytes = character_count * bytes_per_char
    header = HEADER_SIZE + _ESTIMATED_METADATA_BYTES

    compressed = math.ceil((total_bytes + header) * _ESTIMATED_COMPRESSION_RATIO)
    encoded = math.ceil(compressed * _BASE64_GROWTH) + len(SHARE_VERSION_PREFIX)

    return encoded + _ESTIMATED_URL_BASE_LENGTH


def url_length_status(length: int, config: ShareConfig | None = None) -> UrlLengthStatus:
    """Classify a URL length against the recommended and absolute limits."""
    config = config or ShareConfig()
    if length <= config.max_recommended_url_length:
        return UrlLengthStatus.OK
    if length <= config.max_url_length:
        return UrlLengthStatus.WARNING
    return UrlLengthStatus.ERROR


def can_share(
    character_count: int,
    width: int,
    height: int,
    config: ShareConfig | None = None,
) -> ShareCheck:
    """Check whether a character set is likely to fit in a share URL."""
    estimated = estimate_url_length(character_count, width, height)
    status = url_length_status(estimated, config)

    if status == UrlLengthStatus.OK:
        message = "Character set can be shared"
    elif status == UrlLengthStatus.WARNING:
        message = "URL may be too long for some platforms. Consider reducing characters."
    else:
        message = (
            f"Character set is too large to share ({character_count} characters). "
            "Maximum shareable size depends on character dimensions."
        )

    return ShareCheck(
        can_share=status != UrlLengthStatus.ERROR,
        estimated_length=estimated,
        status=status,
        message=message,
    )
