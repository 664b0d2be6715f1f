"""Engine configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_DEFAULT_HOME = os.path.join("~", ".fewshot")

_FALSE = ("false", "0", "no", "off")
_TRUE = ("true", "1", "yes", "on")


def _int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Settings resolved once per invocation and passed to every stage."""

    enabled: bool = True
    max_examples: int = 3
    min_rating: int = 7
    debug: bool = False
    corpus_path: str = os.path.join(_DEFAULT_HOME, "examples.json")
    debug_log_path: str = os.path.join(_DEFAULT_HOME, "fewshot-debug.log")

    # Diagnostics on stderr
    log_format: str = "pretty"  # "json" or "pretty"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            enabled=env.get("FEWSHOT_ENABLED", "true").strip().lower() not in _FALSE,
            max_examples=_int(env.get("FEWSHOT_MAX_EXAMPLES"), defaults.max_examples),
            min_rating=_int(env.get("FEWSHOT_MIN_RATING"), defaults.min_rating),
            debug=env.get("FEWSHOT_DEBUG", "false").strip().lower() in _TRUE,
            corpus_path=env.get("FEWSHOT_CORPUS_PATH") or defaults.corpus_path,
            debug_log_path=env.get("FEWSHOT_DEBUG_LOG") or defaults.debug_log_path,
            log_format=env.get("FEWSHOT_LOG_FORMAT", "pretty").strip().lower(),
            log_level=env.get("FEWSHOT_LOG_LEVEL", "WARNING").strip().upper(),
        )
