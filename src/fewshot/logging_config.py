"""Diagnostic logging setup. Stdout is reserved for the injected block."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from fewshot.config import Settings


class JsonFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in ("session_id", "task_type", "status"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Attach a single stderr handler to the ``fewshot`` logger."""
    settings = settings or Settings.from_env()

    logger = logging.getLogger("fewshot")

    # Avoid duplicate setup
    if getattr(logger, "_fewshot_configured", False):
        return
    logger._fewshot_configured = True  # type: ignore[attr-defined]

    level = getattr(logging, settings.log_level, logging.WARNING)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
