"""Named loggers shared by all layers."""

import logging
from datetime import datetime
from pathlib import Path

from src.core.config import Config

_LOGGERS: dict[str, logging.Logger] = {}

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Create or retrieve a named logger (e.g. services.round_ledger).

    Every logger writes to the console, and to one file per run when Config.LOG_DIR is set.
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(f"scoreboard.{name}")
    logger.setLevel(Config.LOG_LEVEL)
    formatter = logging.Formatter(FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if Config.LOG_DIR:
        log_dir = Path(Config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        file_handler = logging.FileHandler(
            log_dir / f"scoreboard-{timestamp}.log", encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    _LOGGERS[name] = logger
    return logger
