"""Logging utilities for charrom."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ImportStats:
    """Statistics from an import run."""

    imported_count: int = 0
    missing_count: int = 0
    blank_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def total_count(self) -> int:
        return self.imported_count + self.missing_count + self.blank_count

    @property
    def duration_seconds(self) -> float:
        """Calculate import duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        _installed_handlers.append(console_handler)

    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("charrom")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class ImportLogger:
    """Logger for tracking per-glyph import progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ImportStats()

    def log_glyph_imported(self, code_point: int, lit_pixels: int) -> None:
        """Log a glyph that rendered at least one pixel."""
        self._logger.debug("Glyph imported", code_point=code_point, lit=lit_pixels)
        self._stats.imported_count += 1

    def log_glyph_missing(self, code_point: int) -> None:
        """Log a printable code point the font has no visible glyph for."""
        self._logger.debug("Glyph missing", code_point=code_point)
        self._stats.missing_count += 1

    def log_glyph_blank(self, code_point: int) -> None:
        """Log a space or control code that renders blank by nature."""
        self._logger.debug("Glyph blank", code_point=code_point)
        self._stats.blank_count += 1

    def log_glyph_error(self, code_point: int, error: Exception) -> None:
        """Log a glyph that failed to convert."""
        self._logger.error(
            "Glyph import failed",
            code_point=code_point,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.errors.append((code_point, str(error)))

    @property
    def stats(self) -> ImportStats:
        """Get current import statistics."""
        return self._stats
