"""Raw ROM file reading and writing.

This module wraps the codec around plain file I/O for ``.bin``-style
character ROM dumps.
"""

import re
from collections.abc import Sequence
from pathlib import Path

import structlog

from charrom.core import codec
from charrom.domain import Character, CharacterSetConfig
from charrom.exceptions import RomLoadError, RomSaveError

ROM_EXTENSIONS = (".bin", ".rom", ".chr", ".fnt", ".dat")

logger = structlog.get_logger(__name__)


def read_rom(path: Path, config: CharacterSetConfig) -> list[Character]:
    """Load a ROM file into characters.

    Trailing bytes that do not make up a whole character are ignored.

    Args:
        path: ROM file path
        config: Binary layout of the ROM

    Returns:
        Decoded characters

    Raises:
        RomLoadError: If the file cannot be read or holds no whole character
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise RomLoadError(str(path), e.strerror or str(e)) from e

    characters = codec.decode(data, config)
    if not characters:
        raise RomLoadError(
            str(path),
            f"{len(data)} bytes is smaller than one "
            f"{config.width}x{config.height} character "
            f"({codec.bytes_per_character(config)} bytes)",
        )

    trailing = len(data) - len(characters) * codec.bytes_per_character(config)
    logger.debug(
        "ROM loaded",
        path=str(path),
        characters=len(characters),
        trailing_bytes=trailing,
    )
    return characters


def write_rom(path: Path, characters: Sequence[Character], config: CharacterSetConfig) -> int:
    """Write characters to a ROM file.

    Args:
        path: Destination path
        characters: Characters in ROM order
        config: Binary layout to write

    Returns:
        Number of bytes written

    Raises:
        RomSaveError: If the file cannot be written
    """
    data = codec.encode(characters, config)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise RomSaveError(str(path), e.strerror or str(e)) from e

    logger.debug("ROM saved", path=str(path), characters=len(characters), size=len(data))
    return len(data)


def suggested_filename(name: str) -> str:
    """Derive a ``.bin`` filename from a character set name.

    Example:
        suggested_filename("C64 Upper Case!") == "c64-upper-case.bin"
    """
    cleaned = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return f"{cleaned or 'charset'}.bin"


def is_rom_filename(path: Path | str) -> bool:
    """Check if a filename looks like a binary ROM.

    Common ROM extensions are accepted, and so are names without an
    extension since dumps often have none.
    """
    suffix = Path(path).suffix.lower()
    return suffix in ROM_EXTENSIONS or suffix == ""
