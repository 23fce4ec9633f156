"""Logging utilities for ngfilesort."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "ngfilesort"
_CONSOLE_FORMAT = "[ngfilesort] %(levelname)s %(message)s"
_VERBOSE_FORMAT = "[ngfilesort:%(component)s] %(levelname)s %(message)s"


class _ComponentFilter(logging.Filter):
    """Tags records with the component part of the logger name (``resolver``, ``graph``...)."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(f"{_LOGGER_NAME}."):
            record.component = name[len(_LOGGER_NAME) + 1 :]
        else:
            record.component = "main"
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the ngfilesort hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the ngfilesort logger with console output and optional file sink.

    Verbose console lines carry the emitting component so graph decisions
    (dropped edges, broken cycles) can be traced back to the stage that made them.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(_ComponentFilter())
    stream_handler.setFormatter(
        logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT)
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(_ComponentFilter())
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(component)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
