"""Logging for the analyzer: one ``solar_trends`` logger writing to console and a log file.

The log file lives next to the exported CSV, in ``<output_dir>/solar_trends.log``.
Before config is loaded the directory comes from ``SOLAR_TRENDS_OUTPUT_DIR``
(default ``output``); :func:`use_output_dir` moves it once config is known.
``SOLAR_TRENDS_LOG_LEVEL`` sets the level (default ``INFO``).
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "solar_trends"
LOG_FILENAME = "solar_trends.log"

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(module)s.%(funcName)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def log_path(output_dir: Optional[Union[str, Path]] = None) -> Path:
    """Log file location for ``output_dir`` (env var, then ``output``, when unset)."""
    directory = output_dir or os.getenv("SOLAR_TRENDS_OUTPUT_DIR") or "output"
    return Path(directory) / LOG_FILENAME


def _file_handler(path: Path) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(_FORMATTER)
    return handler


def setup_logger(
    name: str = LOGGER_NAME,
    output_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure and return a logger that writes to a log file and the console.

    Args:
        name (str): The name of the logger.
        output_dir (str | Path, optional): Directory holding the log file.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    # CLI and API both import this module; configure once
    if logger.handlers:
        return logger

    logger.setLevel(os.getenv("SOLAR_TRENDS_LOG_LEVEL", "INFO").upper())
    logger.addHandler(_file_handler(log_path(output_dir)))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_FORMATTER)
    logger.addHandler(console_handler)

    return logger


def use_output_dir(output_dir: Union[str, Path], name: str = LOGGER_NAME) -> Path:
    """Point the logger's file handler at ``<output_dir>/solar_trends.log``.

    Returns:
        Path: The log file now in use.
    """
    logger = logging.getLogger(name)
    path = log_path(output_dir)
    target = os.path.abspath(path)

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.FileHandler):
            continue
        if handler.baseFilename == target:
            return path
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_file_handler(path))
    return path


logger = setup_logger()
