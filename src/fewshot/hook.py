"""Prompt-submit hook: JSON payload on stdin, example block on stdout.

Always exits 0. Example injection is optional, so a missing corpus, bad
payload or internal fault produces no output rather than an error.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Optional

from fewshot.config import Settings
from fewshot.engine import FewShot
from fewshot.logging_config import setup_logging
from fewshot.store.base import Store
from fewshot.types import HookPayload

logger = logging.getLogger(__name__)


def run_hook(
    stdin: IO[str],
    stdout: IO[str],
    settings: Optional[Settings] = None,
    store: Optional[Store] = None,
) -> None:
    """Read one payload, write the block if there is one. Never raises."""
    try:
        settings = settings or Settings.from_env()
        if not settings.enabled:
            return
        payload = HookPayload.from_dict(json.loads(stdin.read() or "null"))
        text = FewShot(settings, store=store).run(payload)
        if text:
            stdout.write(text)
            if not text.endswith("\n"):
                stdout.write("\n")
            stdout.flush()
    except Exception:
        logger.debug("hook failed", exc_info=True)


def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings)
    run_hook(sys.stdin, sys.stdout, settings)
    sys.exit(0)


if __name__ == "__main__":
    main()
