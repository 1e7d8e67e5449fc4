# arena/utils/logger.py
"""Logging setup and the operator-facing output sink."""

import logging
import os
import sys
from collections import deque
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

from arena.utils.units import format_number

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 10
OUTPUT_HISTORY = 1000

logger = logging.getLogger("arena")


def resolve_log_file(target: Optional[str] = None) -> str:
    """Turn a CLI ``--log-file`` value into a concrete file path.

    None means a timestamped file under ``logs/``; an existing directory
    gets a timestamped file inside it; anything else is used as is.
    """
    if target and not os.path.isdir(target):
        return target
    log_dir = target or DEFAULT_LOG_DIR
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(log_dir, f"server_{stamp}.log")


def _has_stderr_handler(root: logging.Logger) -> bool:
    # FileHandler subclasses StreamHandler, so compare the exact type
    return any(type(h) is logging.StreamHandler for h in root.handlers)


def _has_file_handler(root: logging.Logger, path: str) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(h, RotatingFileHandler) and os.path.abspath(h.baseFilename) == target
        for h in root.handlers
    )


def setup_logging(log_file: Optional[str] = None, level: int = DEFAULT_LOG_LEVEL) -> str:
    """Attach stderr and rotating-file handlers to the root logger.

    Operator output goes to stdout through ConsoleOutput, so log records
    stay on stderr. Calling this again with the same file adds nothing.

    Returns:
        str: Path of the log file in use
    """
    log_file = resolve_log_file(log_file)
    os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)

    root = logging.getLogger()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    new_handlers = []
    if not _has_stderr_handler(root):
        new_handlers.append(logging.StreamHandler(sys.stderr))
    if not _has_file_handler(root, log_file):
        new_handlers.append(RotatingFileHandler(
            log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8",
        ))
    for handler in new_handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    logger.info(f"Logging to {log_file}")
    return log_file


class ConsoleOutput:
    """Line sink the console writes operator feedback to.

    Every printed line is also kept in ``history`` so callers (and tests)
    can inspect what the operator saw.
    """

    def __init__(self, stream: Optional[TextIO] = None, history: int = OUTPUT_HISTORY):
        self.stream = stream if stream is not None else sys.stdout
        self.history = deque(maxlen=history)

    def print(self, value="") -> None:
        line = format_number(value)
        self.history.append(line)
        self.stream.write(line + "\n")
        self.stream.flush()

    @property
    def last(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()
