"""CLI application entry point for charrom.

This module provides the main CLI interface using Typer.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from charrom import __version__
from charrom.cli.output import (
    SYM_DOT,
    console,
    print_characters,
    print_config,
    print_error,
    print_header,
    print_import_summary,
    print_share_status,
    print_step,
    print_success,
    print_warning,
)
from charrom.config import CharRomSettings, FontImportConfig, ImageImportConfig, LoggingConfig
from charrom.core import validate_config
from charrom.domain import BitOrder, ByteOrder, Character, CharacterSetConfig, PaddingDirection
from charrom.exceptions import (
    CharRomError,
    FontLoadError,
    ImageLoadError,
    RomLoadError,
    RomSaveError,
    ShareDecodeError,
    TextImportError,
)
from charrom.io import (
    can_share,
    decode_character_set,
    detect_character_dimensions,
    encode_character_set,
    extract_token,
    import_font,
    import_image,
    import_text,
    read_rom,
    write_rom,
)
from charrom.io.sharing import UrlLengthStatus, url_length_status
from charrom.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="charrom",
    help="Edit, convert and share bitmap character ROMs.",
    add_completion=False,
    no_args_is_help=True,
)

settings = CharRomSettings()
state = {"quiet": False}

WidthOption = Annotated[
    int,
    typer.Option("--width", "-W", help="Character width in pixels (1-16)"),
]
HeightOption = Annotated[
    int,
    typer.Option("--height", "-H", help="Character height in pixels (1-16)"),
]
PaddingOption = Annotated[
    str,
    typer.Option("--padding", help="Side holding filler bits (left|right)"),
]
BitOrderOption = Annotated[
    str,
    typer.Option("--bit-order", help="Bit holding the leftmost pixel (msb|lsb)"),
]
ByteOrderOption = Annotated[
    str,
    typer.Option("--byte-order", help="Byte order of rows wider than 8 pixels (big|little)"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]charrom[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Edit, convert and share bitmap character ROMs."""
    state["quiet"] = quiet
    settings.logging = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )


def _layout(
    width: int,
    height: int,
    padding: str,
    bit_order: str,
    byte_order: str = "big",
) -> CharacterSetConfig:
    """Build a validated layout from CLI options, exiting on bad values."""
    try:
        bit_order_value = BitOrder(bit_order.lower()).value
    except ValueError:
        bit_order_value = bit_order

    errors = validate_config(
        {
            "width": width,
            "height": height,
            "padding": padding.lower(),
            "bit_order": bit_order_value,
            "byte_order": byte_order.lower(),
        }
    )
    if errors:
        print_error("Invalid character layout", details="; ".join(errors))
        raise typer.Exit(code=1)

    return CharacterSetConfig(
        width=width,
        height=height,
        padding=PaddingDirection(padding.lower()),
        bit_order=BitOrder(bit_order_value),
        byte_order=ByteOrder(byte_order.lower()),
    )


def _save(output: Path, characters: Sequence[Character], config: CharacterSetConfig) -> None:
    size = write_rom(output, characters, config)
    if not state["quiet"]:
        print_success(f"Wrote {len(characters)} characters ({size:,} bytes)", str(output))


@app.command("show")
def show(
    rom: Annotated[
        Path,
        typer.Argument(help="Path to a raw ROM file", show_default=False),
    ],
    width: WidthOption = 8,
    height: HeightOption = 8,
    padding: PaddingOption = "right",
    bit_order: BitOrderOption = "msb",
    byte_order: ByteOrderOption = "big",
    start: Annotated[
        int,
        typer.Option("--start", "-s", help="First character to show", min=0),
    ] = 0,
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", help="Number of characters to show (default: all)", min=1),
    ] = None,
    columns: Annotated[
        int | None,
        typer.Option("--columns", "-c", help="Characters per line (default: fit console)", min=1),
    ] = None,
) -> None:
    """Preview the characters of a ROM file as block art.

    Example:
        charrom show c64.bin --start 1 --count 26
    """
    config = _layout(width, height, padding, bit_order, byte_order)

    try:
        characters = read_rom(rom, config)
    except RomLoadError as e:
        print_error(f"Could not load ROM: {e.reason}")
        raise typer.Exit(code=1)

    end = len(characters) if count is None else start + count
    selected = characters[start:end]

    print_config(config, len(characters))
    if not selected:
        print_warning(f"No characters in range {start}..{end - 1}")
        return
    print_characters(selected, first_index=start, columns=columns)


@app.command("share")
def share(
    rom: Annotated[
        Path,
        typer.Argument(help="Path to a raw ROM file", show_default=False),
    ],
    name: Annotated[
        str,
        typer.Option("--name", help="Character set name"),
    ] = "Untitled",
    description: Annotated[
        str,
        typer.Option("--description", help="Character set description"),
    ] = "",
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Print a full URL with the token as its fragment"),
    ] = None,
    width: WidthOption = 8,
    height: HeightOption = 8,
    padding: PaddingOption = "right",
    bit_order: BitOrderOption = "msb",
    byte_order: ByteOrderOption = "big",
) -> None:
    """Encode a ROM file as a share token.

    The token (or URL) is printed on its own line so it can be piped.
    """
    config = _layout(width, height, padding, bit_order, byte_order)

    try:
        characters = read_rom(rom, config)
        token = encode_character_set(
            name,
            description,
            characters,
            config,
            level=settings.share.compression_level,
        )
    except RomLoadError as e:
        print_error(f"Could not load ROM: {e.reason}")
        raise typer.Exit(code=1)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    link = f"{base_url}#{token}" if base_url else token
    status = url_length_status(len(link), settings.share)

    if status == UrlLengthStatus.ERROR:
        print_error(
            f"Character set is too large to share ({len(characters)} characters)",
            details=f"{len(link):,} characters exceeds {settings.share.max_url_length:,}",
        )
        raise typer.Exit(code=1)

    typer.echo(link)

    if not state["quiet"]:
        message = (
            "Character set can be shared"
            if status == UrlLengthStatus.OK
            else "URL may be too long for some platforms. Consider reducing characters."
        )
        print_share_status(len(link), status, message)


@app.command("unshare")
def unshare(
    token_or_url: Annotated[
        str,
        typer.Argument(help="Share token, or a URL with the token as its fragment", show_default=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="ROM file to write"),
    ],
    byte_order: ByteOrderOption = "big",
) -> None:
    """Decode a share token and write its characters to a ROM file.

    Share tokens carry no byte order; ``--byte-order`` picks the one the
    written file uses.
    """
    token = extract_token(token_or_url) or token_or_url

    try:
        shared = decode_character_set(token)
        config = _layout(
            shared.config.width,
            shared.config.height,
            shared.config.padding.value,
            shared.config.bit_order.value,
            byte_order,
        )
        if not state["quiet"]:
            print_header(__version__)
            print_step(shared.name or "Untitled")
            if shared.description:
                console.print(f"  {shared.description}", markup=False)
            print_config(config, len(shared.characters))
        _save(output, shared.characters, config)
    except ShareDecodeError as e:
        print_error("Invalid share token", details=e.reason)
        raise typer.Exit(code=1)
    except RomSaveError as e:
        print_error(f"Could not save ROM: {e.reason}")
        raise typer.Exit(code=1)


@app.command("import-font")
def import_font_command(
    font: Annotated[
        Path,
        typer.Argument(help="Path to input TTF/OTF font file", show_default=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="ROM file to write"),
    ],
    width: WidthOption = 8,
    height: HeightOption = 8,
    padding: PaddingOption = "right",
    bit_order: BitOrderOption = "msb",
    byte_order: ByteOrderOption = "big",
    start_code: Annotated[
        int,
        typer.Option("--start-code", help="First code point to import"),
    ] = 32,
    end_code: Annotated[
        int,
        typer.Option("--end-code", help="Last code point to import"),
    ] = 126,
    font_size: Annotated[
        float | None,
        typer.Option("--font-size", help="Rendered em size in pixels (default: character height)"),
    ] = None,
    threshold: Annotated[
        float,
        typer.Option("--threshold", help="Pixel coverage needed to light a pixel (0-1)"),
    ] = 0.5,
    center: Annotated[
        bool,
        typer.Option("--center/--no-center", help="Center glyphs in their cells"),
    ] = True,
    baseline_offset: Annotated[
        int,
        typer.Option("--baseline-offset", help="Move the baseline up by this many pixels"),
    ] = 0,
) -> None:
    """Rasterise a TTF/OTF font into a ROM file.

    Example:
        charrom import-font Topaz.ttf -o topaz.bin --width 8 --height 8
    """
    config = _layout(width, height, padding, bit_order, byte_order)

    if not font.exists():
        print_error(
            f"Input file not found: {font}",
            details=f"The file '{font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        settings.font_import = FontImportConfig(
            char_width=config.width,
            char_height=config.height,
            start_code=start_code,
            end_code=end_code,
            font_size=font_size if font_size is not None else float(config.height),
            coverage_threshold=threshold,
            center_glyphs=center,
            baseline_offset=baseline_offset,
        )
    except ValidationError as e:
        print_error("Invalid import options", details=str(e))
        raise typer.Exit(code=1)

    if not state["quiet"]:
        print_header(__version__)
        print_step("Rasterising glyphs")

    try:
        result = import_font(font, settings.font_import)
        if not state["quiet"]:
            print_import_summary(result.stats, result.font_family)
        _save(output, result.characters, config)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except RomSaveError as e:
        print_error(f"Could not save ROM: {e.reason}")
        raise typer.Exit(code=1)


@app.command("import-text")
def import_text_command(
    text_file: Annotated[
        Path,
        typer.Argument(help="C, JavaScript or assembly listing holding byte values", show_default=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="ROM file to write"),
    ],
    width: WidthOption = 8,
    height: HeightOption = 8,
    padding: PaddingOption = "right",
    bit_order: BitOrderOption = "msb",
    byte_order: ByteOrderOption = "big",
) -> None:
    """Import byte values from a source listing into a ROM file."""
    config = _layout(width, height, padding, bit_order, byte_order)

    try:
        text = text_file.read_text(encoding="utf-8")
    except OSError as e:
        print_error(f"Could not read {text_file}", details=e.strerror or str(e))
        raise typer.Exit(code=1)

    try:
        result = import_text(text, config)
        if not state["quiet"]:
            console.print(
                f"  {result.byte_count} bytes ({result.detected_format.value}) "
                f"{SYM_DOT} {len(result.characters)} characters"
            )
            for warning in result.warnings:
                print_warning(warning)
        _save(output, result.characters, config)
    except TextImportError as e:
        print_error("Could not import text", details=e.reason)
        raise typer.Exit(code=1)
    except RomSaveError as e:
        print_error(f"Could not save ROM: {e.reason}")
        raise typer.Exit(code=1)
    except CharRomError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("import-image")
def import_image_command(
    image: Annotated[
        Path,
        typer.Argument(help="Character sheet image (PNG, JPEG, GIF or WebP)", show_default=False),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="ROM file to write"),
    ],
    width: WidthOption = 8,
    height: HeightOption = 8,
    padding: PaddingOption = "right",
    bit_order: BitOrderOption = "msb",
    byte_order: ByteOrderOption = "big",
    offset_x: Annotated[
        int,
        typer.Option("--offset-x", help="Left edge of the grid in image pixels"),
    ] = 0,
    offset_y: Annotated[
        int,
        typer.Option("--offset-y", help="Top edge of the grid in image pixels"),
    ] = 0,
    gap_x: Annotated[
        int,
        typer.Option("--gap-x", help="Horizontal gap between cells"),
    ] = 0,
    gap_y: Annotated[
        int,
        typer.Option("--gap-y", help="Vertical gap between cells"),
    ] = 0,
    columns: Annotated[
        int,
        typer.Option("--columns", help="Grid columns (default: fit the image)"),
    ] = 0,
    rows: Annotated[
        int,
        typer.Option("--rows", help="Grid rows (default: fit the image)"),
    ] = 0,
    pixel_width: Annotated[
        int,
        typer.Option("--pixel-width", help="Image pixels per character pixel horizontally"),
    ] = 1,
    pixel_height: Annotated[
        int,
        typer.Option("--pixel-height", help="Image pixels per character pixel vertically"),
    ] = 1,
    threshold: Annotated[
        int,
        typer.Option("--threshold", help="Brightness below which a pixel is lit (0-255)"),
    ] = 128,
    invert: Annotated[
        bool,
        typer.Option("--invert", help="Light bright pixels instead of dark ones"),
    ] = False,
    rotation: Annotated[
        float,
        typer.Option("--rotation", help="Degrees to rotate before slicing (-5 to 5)"),
    ] = 0.0,
    reading_order: Annotated[
        str,
        typer.Option("--reading-order", help="Cell order, e.g. ltr-ttb or ttb-ltr"),
    ] = "ltr-ttb",
    max_characters: Annotated[
        int,
        typer.Option("--max-characters", help="Maximum number of characters to read"),
    ] = 256,
) -> None:
    """Slice a character sheet image into a ROM file.

    Example:
        charrom import-image sheet.png -o sheet.bin --gap-x 1 --gap-y 1
    """
    config = _layout(width, height, padding, bit_order, byte_order)

    try:
        settings.image_import = ImageImportConfig(
            char_width=config.width,
            char_height=config.height,
            offset_x=offset_x,
            offset_y=offset_y,
            gap_x=gap_x,
            gap_y=gap_y,
            force_columns=columns,
            force_rows=rows,
            pixel_width=pixel_width,
            pixel_height=pixel_height,
            threshold=threshold,
            invert=invert,
            rotation=rotation,
            reading_order=reading_order.lower(),
            max_characters=max_characters,
        )
    except ValidationError as e:
        print_error("Invalid import options", details=str(e))
        raise typer.Exit(code=1)

    try:
        result = import_image(image, settings.image_import)
    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)

    if not result.characters:
        suggestion = detect_character_dimensions(result.image_width, result.image_height)[0]
        print_warning(
            f"No characters fit a {result.image_width}x{result.image_height} image; "
            f"try --width {suggestion.width} --height {suggestion.height}"
        )
        raise typer.Exit(code=1)

    if not state["quiet"]:
        print_header(__version__)
        print_step(f"Sliced {result.columns}x{result.rows} grid")
        print_config(config, len(result.characters))

    try:
        _save(output, result.characters, config)
    except RomSaveError as e:
        print_error(f"Could not save ROM: {e.reason}")
        raise typer.Exit(code=1)


@app.command("estimate")
def estimate(
    count: Annotated[
        int,
        typer.Argument(help="Number of characters", min=0, show_default=False),
    ],
    width: WidthOption = 8,
    height: HeightOption = 8,
) -> None:
    """Estimate the share URL length for a character set size."""
    _layout(width, height, "right", "msb")

    check = can_share(count, width, height, settings.share)
    console.print(f"  {count} characters {SYM_DOT} {width}x{height}")
    print_share_status(check.estimated_length, check.status, check.message)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
