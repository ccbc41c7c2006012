"""starchain.core.logs

Logs are for operators. Event names are short; context goes in ``extra``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from starchain.core.config import LoggingConfig

_ROOT = "starchain"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED}


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        out.update(_extras(record))
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, sort_keys=True, default=str)


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = _extras(record)
        if not extras:
            return base
        tail = " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return f"{base} {tail}"


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Install a single stream handler on the ``starchain`` logger.

    Idempotent: handlers installed by a previous call are replaced.
    """

    logger = logging.getLogger(_ROOT)
    logger.setLevel(config.level.upper())

    handler = logging.StreamHandler()
    if config.json_output:
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(
            KeyValueFormatter("[%(asctime)s] %(levelname)s %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )

    for old in list(logger.handlers):
        if getattr(old, "_starchain", False):
            logger.removeHandler(old)
    handler._starchain = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
