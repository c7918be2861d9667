"""Log output for build runs.

Two formats, picked with ``LOG_FORMAT``:

``json`` (default), one object per line for CI log collectors::

    {"ts": "2025-03-01T12:00:00+00:00", "level": "WARNING", "logger": "stylegate.services.checkstyle_service",
     "msg": "Checkstyle error found in App.java: ...", "build_context": "compile"}

``text``, the way build tools print to a terminal::

    [warn] [compile] Checkstyle error found in App.java: ...
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

# attributes passed through ``extra={...}`` that end up in the output
CONTEXT_FIELDS = ("build_context",)

_TEXT_LEVELS = {"DEBUG": "debug", "INFO": "info", "WARNING": "warn", "ERROR": "error", "CRITICAL": "error"}


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class BuildTextFormatter(logging.Formatter):
    """``[warn] [test] message`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"[{_TEXT_LEVELS.get(record.levelname, record.levelname.lower())}]"]
        context = getattr(record, "build_context", None)
        if context:
            parts.append(f"[{context}]")
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging() -> None:
    """Configure the root logger on stdout.

    ``LOG_LEVEL`` (default ``INFO``) sets the level and ``LOG_FORMAT``
    (``json`` or ``text``, default ``json``) the line format.
    """
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    fmt = os.getenv("LOG_FORMAT", "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(BuildTextFormatter() if fmt == "text" else JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    # replaces uvicorn's or pytest's defaults
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in ("uvicorn.access", "httpcore", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
