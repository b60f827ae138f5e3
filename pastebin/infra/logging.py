"""
Process logging.

- one stdout handler, installed once
- ``text`` or ``json`` lines, chosen by config
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

LOGGER_NAME = "pastebin"
HANDLER_MARK = "_pastebin_handler"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extra_payload = getattr(record, "payload", None)
        if isinstance(extra_payload, dict):
            payload["payload"] = extra_payload
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _build_formatter(fmt: str) -> logging.Formatter:
    if (fmt or "").lower() == "json":
        return JsonFormatter()
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    root = logging.getLogger()
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root.setLevel(lvl)

    logging.getLogger("uvicorn.error").setLevel(lvl)
    logging.getLogger("uvicorn.access").setLevel(lvl)

    # Repeated calls (tests, reload) must not stack handlers; they retune ours.
    for existing in root.handlers:
        if getattr(existing, HANDLER_MARK, False):
            existing.setLevel(lvl)
            existing.setFormatter(_build_formatter(fmt))
            return
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    setattr(handler, HANDLER_MARK, True)
    handler.setLevel(lvl)
    handler.setFormatter(_build_formatter(fmt))
    root.addHandler(handler)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
