#!/usr/bin/env python3
# global_mercator/logging_conf.py
"""
Central logging setup for the Global Mercator CLI and shell.
Supports console and optional rotating file logs.
Library modules only log; they never install handlers.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from global_mercator.config import Config

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(cfg: Config, level_override: Optional[str] = None) -> None:
    level_name = (level_override or cfg["logging"].get("level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=_FORMAT)
    logging.getLogger("global_mercator").setLevel(level)

    log_file = cfg["logging"].get("file")
    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg["logging"].get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(cfg["logging"].get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(_FORMAT))
        logging.getLogger().addHandler(handler)
