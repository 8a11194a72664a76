"""Logging configuration for the gallery sync.

Console output goes to stdout for progress and to stderr for warnings
and errors. An optional JSONL file handler records structured sync events.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = [
    "setup_logging",
    "get_logger",
    "log_sync_event",
    "LOG_DIR",
    "LOGGER_NAME",
]

LOGGER_NAME = "gallery_sync"

LOG_DIR = Path.cwd() / "logs"


class JSONLFileHandler(logging.Handler):
    """Writes one JSON object per log record, one file per day."""

    def __init__(self, log_dir: Path, prefix: str = "sync"):
        super().__init__()
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.prefix = prefix

    def _get_log_file(self) -> Path:
        today = datetime.now().strftime("%Y%m%d")
        return self.log_dir / f"{self.prefix}_{today}.jsonl"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: Dict[str, Any] = {
                "timestamp": datetime.now().isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if hasattr(record, "event_type"):
                entry["event_type"] = record.event_type
            if hasattr(record, "extra_data"):
                entry.update(record.extra_data)

            with open(self._get_log_file(), "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


class ColoredConsoleHandler(logging.StreamHandler):
    """Console handler with colored level names when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if hasattr(self.stream, "isatty") and self.stream.isatty():
            color = self.COLORS.get(record.levelname, "")
            message = message.replace(
                f"[{record.levelname}]", f"[{color}{record.levelname}{self.RESET}]", 1
            )
        return message


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Set up logging for the gallery sync.

    Args:
        level: Logging level (default: INFO)
        log_to_file: Whether to also write JSONL logs
        log_to_console: Whether to log to the console
        log_dir: Directory for JSONL logs (default: ./logs)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_to_file else level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_console:
        console_format = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )

        stdout_handler = ColoredConsoleHandler(sys.stdout)
        stdout_handler.setLevel(level)
        stdout_handler.addFilter(_MaxLevelFilter(logging.INFO))
        stdout_handler.setFormatter(console_format)
        logger.addHandler(stdout_handler)

        stderr_handler = ColoredConsoleHandler(sys.stderr)
        stderr_handler.setLevel(max(level, logging.WARNING))
        stderr_handler.setFormatter(console_format)
        logger.addHandler(stderr_handler)

    if log_to_file:
        file_handler = JSONLFileHandler(log_dir or LOG_DIR)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger under the package namespace."""
    if name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_sync_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.DEBUG,
    logger_name: str = LOGGER_NAME,
) -> None:
    """Log a structured sync event.

    Args:
        event_type: Type of event (e.g. 'records_collected', 'delivery_complete')
        data: Event-specific fields, flattened into the JSONL entry
        level: Log level
        logger_name: Logger to use
    """
    logger = get_logger(logger_name)
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        logger.name,
        level,
        "(sync)",
        0,
        data.get("message", event_type),
        (),
        None,
    )
    record.event_type = event_type
    record.extra_data = {k: v for k, v in data.items() if k != "message"}

    logger.handle(record)
