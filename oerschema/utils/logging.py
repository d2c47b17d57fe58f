"""
Console and file logging for the generator and the content server.

Console lines are colored per level and tagged with the component that
emitted them (schema loading, codec, planner, server...). The optional log
file receives the same records without ANSI sequences.
"""

import logging
import re
import sys
from pathlib import Path

ANSI_PATTERN = re.compile(r"\033\[[0-9;]*m")

RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[37m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}

# (logger prefix, tag, color); the longest matching prefix wins
COMPONENTS = [
    ("oerschema.schema", "schema", "\033[1;36m"),
    ("oerschema.triples", "triples", "\033[1;32m"),
    ("oerschema.triples.builder", "builder", "\033[1;35m"),
    ("oerschema.publishing.planner", "planner", "\033[1;33m"),
    ("oerschema.publishing.emitter", "emitter", "\033[1;34m"),
    ("oerschema.negotiation", "negotiate", "\033[1;38;5;202m"),
    ("oerschema.server", "server", "\033[1;38;5;220m"),
    ("oerschema.pipeline", "pipeline", "\033[1;34m"),
    ("oerschema.main", "cli", "\033[1;32m"),
    ("uvicorn", "http", "\033[1;90m"),
]

QUIET_LIBRARIES = ("rdflib", "httpx")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI color sequences such as ``\\033[1;33m``."""
    return ANSI_PATTERN.sub("", text)


def component_for(logger_name: str) -> tuple[str, str]:
    """Tag and color for a logger; unknown loggers use their last name part."""
    best = None
    for prefix, tag, color in COMPONENTS:
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            if best is None or len(prefix) > len(best[0]):
                best = (prefix, tag, color)
    if best is None:
        return logger_name.rsplit(".", 1)[-1], "\033[1m"
    return best[1], best[2]


class ColoredFormatter(logging.Formatter):
    """`HH:MM:SS | LEVEL | component | message`, with ANSI colors."""

    def format(self, record: logging.LogRecord) -> str:
        tag, tag_color = component_for(record.name)
        level_color = LEVEL_COLORS.get(record.levelno, RESET)

        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            message = f"{level_color}{message}{RESET}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return (
            f"{self.formatTime(record, self.datefmt)} | "
            f"{level_color}{record.levelname:8}{RESET} | "
            f"{tag_color}{tag:10}{RESET} | {message}"
        )


class PlainFormatter(logging.Formatter):
    """Same layout as ColoredFormatter, for log files."""

    def format(self, record: logging.LogRecord) -> str:
        tag, _ = component_for(record.name)
        message = strip_ansi_codes(record.getMessage())
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{self.formatTime(record, self.datefmt)} | {record.levelname:8} | {tag:10} | {message}"


_file_handler: logging.FileHandler | None = None


def setup_colored_logging(level=logging.INFO, log_file: str | Path | None = None) -> None:
    """
    Replace the root logger's handlers with a colored stderr handler.

    Args:
        level: Root logging level
        log_file: Also log to this file, without colors
    """
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ColoredFormatter(datefmt="%H:%M:%S"))

    remove_file_handler()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(console)
    root.setLevel(level)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    if log_file:
        add_file_handler(log_file, level)


def add_file_handler(log_file: str | Path, level=logging.DEBUG) -> logging.FileHandler:
    """
    Attach a plain-text file handler to the root logger.

    Any file handler added earlier is closed first. The file is truncated.

    Returns:
        The new handler
    """
    global _file_handler
    remove_file_handler()

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    _file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(PlainFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    logging.getLogger().addHandler(_file_handler)

    logging.getLogger(__name__).info("Logging to %s", path)
    return _file_handler


def remove_file_handler() -> None:
    """Detach and close the file handler, if any."""
    global _file_handler
    if _file_handler is None:
        return
    logging.getLogger().removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None
