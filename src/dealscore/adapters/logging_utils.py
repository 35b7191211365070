import json
import logging
import sys
import time
from typing import IO

from .config import config

# every module logger is a child of this one and shares its single handler
ROOT_LOGGER = "dealscore"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line; `extra={"context": {...}}` is merged in."""

    def format(self, record):
        payload = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update(ctx)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        root.addHandler(handler)
        root.setLevel(config.LOG_LEVEL)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    root = _root()
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return root.getChild(name)


def route_logs_to(stream: IO[str]) -> None:
    """
    Point the JSON log handler at `stream`. The CLI sends logs to stderr so
    stdout carries nothing but the analysis document.
    """
    for handler in _root().handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(stream)
