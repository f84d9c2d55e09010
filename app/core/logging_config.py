# app/core/logging_config.py
"""
Logging setup for the hours service.

Production writes JSON lines to rotating files (plus warnings to stdout);
development gets a coloured console and a plain-text file.
Structured context is passed as extra={"extra_fields": {...}}.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path

from app.core.config import IS_PRODUCTION, LOG_DIR

APP_LOG_FILE = LOG_DIR / "app.log"
ERROR_LOG_FILE = LOG_DIR / "error.log"

CONSOLE_FORMAT = "%(levelname)-8s %(asctime)s [%(name)s] %(message)s"
FILE_FORMAT = "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with extra_fields merged in at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(getattr(record, "extra_fields", {}))
        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # Copy so file handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter, max_bytes: int, backups: int):
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> None:
    """
    Configure the root logger.

    Production: INFO and up as JSON to app.log, ERROR to error.log,
    WARNING to stdout. Development: DEBUG to a coloured console and app.log.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if IS_PRODUCTION else logging.DEBUG)
    root_logger.handlers.clear()

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    console = logging.StreamHandler(sys.stdout)

    if IS_PRODUCTION:
        json_formatter = JSONFormatter()
        root_logger.addHandler(_rotating_handler(APP_LOG_FILE, logging.INFO, json_formatter, 10_000_000, 5))
        root_logger.addHandler(_rotating_handler(ERROR_LOG_FILE, logging.ERROR, json_formatter, 10_000_000, 10))
        console.setLevel(logging.WARNING)
        console.setFormatter(json_formatter)
    else:
        root_logger.addHandler(
            _rotating_handler(APP_LOG_FILE, logging.DEBUG, logging.Formatter(FILE_FORMAT), 5_000_000, 2)
        )
        console.setLevel(logging.DEBUG)
        console.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(console)

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(logging.INFO)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"extra_fields": {"log_dir": str(LOG_DIR.absolute()), "production": IS_PRODUCTION}},
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
