"""Centralized logger configuration.

Usage:
    from catalog_engine.log import get_logger
    logger = get_logger(__name__)

Entry points (CLI, GUI) call `setup_logging` once; library modules only ask
for named loggers.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "BOOKLIST_LOG_LEVEL"
DEFAULT_LEVEL = os.getenv(LOG_LEVEL_ENV, "INFO").upper()


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
