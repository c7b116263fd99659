"""Logging utilities for cssdts commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "cssdts"

_LEVEL_TAGS = {
    logging.DEBUG: "[Debug]",
    logging.WARNING: "[Warn]",
    logging.ERROR: "[Error]",
    logging.CRITICAL: "[Error]",
}


class ConsoleFormatter(logging.Formatter):
    """Prefix warnings and errors with a short tag; plain info lines stay bare."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        tag = _LEVEL_TAGS.get(record.levelno)
        return f"{tag} {message}" if tag else message


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cssdts hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the cssdts logger with console output and an optional file sink.

    ``verbose`` enables debug output (including per-token warnings emitted at
    debug level by callers); ``quiet`` limits the console to errors.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(min(level, logging.INFO) if log_file is not None else level)
    logger.propagate = False

    # Watch mode and the service may configure more than once per process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(ConsoleFormatter("%(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "get_logger"]
