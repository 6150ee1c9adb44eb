"""Runtime configuration, read from the environment."""

import os


class Config:
    DATABASE_URL = os.environ.get("DATABASE_URL") or "sqlite:///./scoreboard.db"
    SQL_ECHO = os.environ.get("SQL_ECHO", "0") == "1"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    # Optional directory for log files. Console logging only when unset.
    LOG_DIR = os.environ.get("LOG_DIR") or None
