"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with block-art character previews and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from charrom.domain import Character, CharacterSetConfig
from charrom.io.sharing import UrlLengthStatus
from charrom.utils import ImportStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

PIXEL_ON = "█"
PIXEL_OFF = "·"

_STATUS_STYLES = {
    UrlLengthStatus.OK: "green",
    UrlLengthStatus.WARNING: "yellow",
    UrlLengthStatus.ERROR: "red",
}


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]charrom[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}", markup=False)


def print_config(config: CharacterSetConfig, character_count: int) -> None:
    """Print a character set's layout.

    Args:
        config: Binary layout of the set
        character_count: Number of characters in the set
    """
    console.print(
        f"  {character_count} characters {SYM_DOT} {config.width}x{config.height} "
        f"{SYM_DOT} {config.bytes_per_character} bytes each"
    )
    console.print(
        f"  padding {config.padding.value} {SYM_DOT} bit order {config.bit_order.value} "
        f"{SYM_DOT} byte order {config.byte_order.value}"
    )


def print_characters(
    characters: Sequence[Character],
    first_index: int = 0,
    columns: int | None = None,
) -> None:
    """Print characters side by side as block art.

    Args:
        characters: Characters to draw
        first_index: Index of the first character, used for the labels
        columns: Characters per line (default: as many as fit the console)
    """
    if not characters:
        return

    cell_width = max(characters[0].width, 4)
    if columns is None:
        columns = max(1, console.width // (cell_width + 2))

    for group_start in range(0, len(characters), columns):
        group = characters[group_start:group_start + columns]
        labels = [
            f"{first_index + group_start + i:<{cell_width}}" for i in range(len(group))
        ]
        console.print()
        console.print(Text("  ".join(labels), style="dim"), soft_wrap=True)

        art = [character.to_strings(PIXEL_ON, PIXEL_OFF) for character in group]
        height = max(character.height for character in group)
        for row in range(height):
            line = "  ".join(
                f"{rows[row] if row < len(rows) else '':<{cell_width}}" for rows in art
            )
            console.print(Text(line), soft_wrap=True)


def print_share_status(length: int, status: UrlLengthStatus, message: str) -> None:
    """Print a share URL's length check.

    Args:
        length: URL or token length in characters
        status: Length classification
        message: Human-readable explanation
    """
    style = _STATUS_STYLES[status]
    console.print(f"  [{style}]{length:,} characters ({status.value})[/{style}]")
    console.print(Text(f"  {message}"))


def print_import_summary(stats: ImportStats, font_family: str | None = None) -> None:
    """Print font import results.

    Args:
        stats: Counts gathered during the import
        font_family: Family name of the imported font
    """
    if font_family:
        console.print(Text(f"  {font_family}"))
    error_style = "red" if stats.errors else "green"
    console.print(
        f"  {stats.imported_count} imported {SYM_DOT} {stats.missing_count} missing "
        f"{SYM_DOT} {stats.blank_count} blank {SYM_DOT} "
        f"[{error_style}]{len(stats.errors)} errors[/{error_style}]"
    )


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    console.print(Text(f"  {SYM_DOT} {message}", style="yellow"))


def print_success(message: str, path: str | None = None) -> None:
    """Print success message.

    Args:
        message: Summary of what was done
        path: Output file, if one was written
    """
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {message}")
    if path:
        line = Text("  ")
        line.append(path, style="bold")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    # Use Text so brackets in paths and token text are not read as markup
    line = Text()
    line.append(f"\n{SYM_ERR} Error:", style="bold red")
    line.append(f" {message}")
    console.print(line)
    if details:
        console.print(Text(f"  {details}"))
