"""Logging configuration and setup."""

import json
import logging
import os
import sys
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

# Get log level and destination from environment
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TZ = ZoneInfo(os.getenv("LOG_TIMEZONE", "UTC"))

log_dir = Path(os.getenv("LOG_DIR", "logs"))
log_dir.mkdir(parents=True, exist_ok=True)

# Session ID distinguishes multiple app starts on the same day
SESSION_ID = str(uuid.uuid4())[:8]

LOG_DATE = datetime.now(LOG_TZ).strftime("%Y-%m-%d")
LOG_FILENAME = f"orderflow_{LOG_DATE}_{SESSION_ID}.log"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(LOG_TZ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str)


# Configure root logger once
root_logger = logging.getLogger()
root_logger.setLevel(logging.DEBUG)

if not root_logger.handlers:
    file_handler = logging.FileHandler(log_dir / LOG_FILENAME)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    console_handler.setFormatter(JSONFormatter())

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


def setup_logger(name: str) -> logging.Logger:
    """Get logger for a module."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
