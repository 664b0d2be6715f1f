"""Best-effort access-count bookkeeping."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Set

from fewshot.exceptions import CorpusWriteError
from fewshot.store.base import Store
from fewshot.types import CORPUS_OK, Corpus, Example

logger = logging.getLogger(__name__)


def touch(corpus: Corpus, ids: Set[str], now: str) -> Corpus:
    """Return a copy of *corpus* with each example in *ids* accessed once more."""
    updated = tuple(
        dataclasses.replace(ex, access_count=ex.access_count + 1, last_accessed_at=now)
        if ex.id in ids else ex
        for ex in corpus.examples
    )
    return dataclasses.replace(corpus, examples=updated)


def record_access(
    store: Store,
    examples: Iterable[Example],
    now: Optional[str] = None,
) -> Optional[Corpus]:
    """Increment access counters for *examples* and persist them.

    Works on a fresh snapshot from *store* to keep the lost-update window
    short. Returns the updated corpus, or None when nothing was written.
    Persistence failures are logged and discarded.
    """
    ids = {ex.id for ex in examples}
    if not ids:
        return None
    try:
        corpus = store.load()
        if corpus.status != CORPUS_OK:
            return None
        if not any(ex.id in ids for ex in corpus.examples):
            return None
        updated = touch(corpus, ids, now or _utc_now_iso())
        store.persist(updated)
        return updated
    except CorpusWriteError as e:
        logger.debug("access counts not saved: %s", e)
    except Exception:
        logger.debug("access count update failed", exc_info=True)
    return None


def _utc_now_iso() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()
