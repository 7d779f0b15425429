"""
Logging setup for the Exploro MCP server.

stdout carries the MCP stdio transport, so console output always goes to
stderr. When a log directory is configured, rotating files are added:
- exploro.log: main log with 5MB rotation, keeps 3 backups
- exploro.errors.log: errors only, 2MB rotation, keeps 2 backups
- exploro.json: structured JSON, 5MB rotation, keeps 2 backups
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = "exploro_mcp"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def _add_file_handlers(
    logger: logging.Logger, log_dir: Path, text_formatter: logging.Formatter
) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)

    main_handler = RotatingFileHandler(
        log_dir / "exploro.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    main_handler.setLevel(logging.DEBUG)
    main_handler.setFormatter(text_formatter)
    logger.addHandler(main_handler)

    error_handler = RotatingFileHandler(
        log_dir / "exploro.errors.log", maxBytes=2 * 1024 * 1024, backupCount=2, encoding="utf-8"
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(text_formatter)
    logger.addHandler(error_handler)

    json_handler = RotatingFileHandler(
        log_dir / "exploro.json", maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
    )
    json_handler.setLevel(logging.INFO)
    json_handler.setFormatter(JsonFormatter())
    logger.addHandler(json_handler)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the package logger. Safe to call more than once; existing
    handlers are replaced.

    Args:
        level: Logging level name or number for the package logger
        log_dir: Optional directory for rotating log files

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    text_formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(text_formatter)
    logger.addHandler(console_handler)

    if log_dir:
        try:
            _add_file_handlers(logger, Path(log_dir), text_formatter)
        except OSError as e:
            logger.warning(f"File logging unavailable in {log_dir}: {e}")

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    return logger

