"""
Logging setup driven by ``Settings``.

The root logger gets one console handler and, when ``LOG_FILE`` is
set, a file handler.  Uvicorn's own loggers lose their handlers and
propagate to the root, so server and application lines share the same
format and destinations.  ``LOG_FORMAT=json`` switches both handlers
to one JSON object per line.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from .config import Settings

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

OWNED_MARKER = "_employee_manager_handler"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_formatter(config: Settings) -> logging.Formatter:
    if config.log_format.lower() == "json":
        return JSONFormatter()
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)


def build_handlers(config: Settings) -> List[logging.Handler]:
    """Console handler plus a file handler when ``log_file`` is set.

    The log file's parent directory is created if missing.
    """
    formatter = build_formatter(config)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        log_path = Path(config.log_file).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(config: Settings) -> None:
    """Install the handlers on the root logger and route uvicorn through them.

    Safe to call more than once: handlers installed by an earlier call
    are closed and replaced, handlers added by anything else are left
    alone.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, OWNED_MARKER, False):
            root.removeHandler(handler)
            handler.close()
    for handler in build_handlers(config):
        setattr(handler, OWNED_MARKER, True)
        root.addHandler(handler)
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s, format=%s, file=%s",
        config.log_level,
        config.log_format,
        config.log_file or "-",
    )
