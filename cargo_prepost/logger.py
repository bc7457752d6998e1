"""Structured logger for the cargo wrapper."""

import logging
import sys
from pathlib import Path

from cargo_prepost.config import DEFAULT_CONFIG, deep_merge

LOGGER_NAME = "cargo-prepost"


def setup_logger(config: dict = None) -> logging.Logger:
    config = deep_merge(DEFAULT_CONFIG["logging"], config or {})
    level = getattr(logging, str(config["level"]).upper(), logging.WARNING)
    fmt = config["format"]

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    # Always log to stderr (stdout belongs to the wrapped tool)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    # Optional file handler
    log_file = config.get("file")
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(file_handler)

    return logger
