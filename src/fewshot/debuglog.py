"""Debug sinks: one structured record per invocation."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from fewshot.types import SelectionResult

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_CHARS = 100


def debug_entry(session_id: str, prompt: str, selection: SelectionResult) -> Dict[str, Any]:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sessionId": session_id,
        "taskType": selection.task_type,
        "confidence": selection.confidence,
        "examplesCount": len(selection.matches),
        "status": selection.status,
        "reasoning": selection.reasoning,
        "promptPreview": prompt[:PROMPT_PREVIEW_CHARS],
    }


class DebugSink(ABC):
    """Side channel for per-invocation diagnostics. Must never raise."""

    @abstractmethod
    def record(self, entry: Dict[str, Any]) -> None:
        """Record one debug entry."""


class NullSink(DebugSink):
    def record(self, entry: Dict[str, Any]) -> None:
        pass


class ListSink(DebugSink):
    """Keeps entries in memory. Useful for testing."""

    def __init__(self) -> None:
        self.entries: List[Dict[str, Any]] = []

    def record(self, entry: Dict[str, Any]) -> None:
        self.entries.append(entry)


class JsonlDebugSink(DebugSink):
    """Appends entries as JSON lines to a local file."""

    def __init__(self, path: str) -> None:
        self.path = Path(path).expanduser()

    def record(self, entry: Dict[str, Any]) -> None:
        try:
            line = json.dumps(entry, default=str)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except (OSError, TypeError, ValueError) as e:
            logger.debug("debug log write failed: %s", e)
