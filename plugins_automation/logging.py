"""Logging setup shared by every plugins-automation job."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "plugins_automation"
_CONSOLE_FORMAT = "[plugins-automation] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# HTTP client libraries log every connection at DEBUG/INFO.
NOISY_LOGGERS = ("urllib3",)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``plugins_automation.<name>``, e.g. ``get_logger("jobs.readmes")``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler (and optional file sink) on the package logger.

    Repeated calls replace the handlers. Unless ``verbose`` is set, the HTTP
    stack only logs warnings.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger


__all__ = ["NOISY_LOGGERS", "configure_logging", "get_logger"]
