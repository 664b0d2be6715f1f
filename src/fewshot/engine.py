"""FewShot class — entry point for the retrieval engine."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fewshot.classify import classify
from fewshot.config import Settings
from fewshot.debuglog import DebugSink, JsonlDebugSink, NullSink, debug_entry
from fewshot.prompt import as_prompt as _as_prompt
from fewshot.prompt import rendered_examples as _rendered_examples
from fewshot.rank import Ranker
from fewshot.select import select as _select
from fewshot.similarity import FnSimilarity, Similarity, SimilarityFn
from fewshot.store.base import Store
from fewshot.store.jsonfile import FORMAT_VERSION, JsonFileStore
from fewshot.types import (
    STATUS_DEGRADED,
    Corpus,
    Example,
    HookPayload,
    SelectionResult,
    example_to_dict,
)
from fewshot.usage import record_access as _record_access

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusStats:
    total: int
    by_task_type: Dict[str, int]
    average_rating: float
    rankable: int
    skipped: int
    status: str


class FewShot:
    """Few-shot example retrieval over an episodic memory corpus.

    Usage::

        fewshot = FewShot(Settings.from_env())
        block = fewshot.run(HookPayload(prompt="fix the failing login test"))
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[Store] = None,
        similarity: Optional[Similarity] = None,
        similarity_fn: Optional[SimilarityFn] = None,
        sink: Optional[DebugSink] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._store = store if store is not None else JsonFileStore(self.settings.corpus_path)

        # Resolve similarity: explicit similarity > similarity_fn > keyword overlap
        if similarity is None and similarity_fn is not None:
            similarity = FnSimilarity(similarity_fn)
        self._ranker = Ranker(similarity)

        if sink is not None:
            self._sink = sink
        elif self.settings.debug:
            self._sink = JsonlDebugSink(self.settings.debug_log_path)
        else:
            self._sink = NullSink()

    @property
    def store(self) -> Store:
        return self._store

    def load(self) -> Corpus:
        return self._store.load()

    def classify(self, prompt: str) -> str:
        return classify(prompt)

    def score(self, prompt: str, example: Example, task_type: Optional[str] = None) -> float:
        """Relevance of *example* to *prompt* in [0, 1]."""
        if task_type is None:
            task_type = classify(prompt)
        return self._ranker.score(prompt, task_type, example)

    def select(
        self,
        prompt: str,
        max_examples: Optional[int] = None,
        min_rating: Optional[int] = None,
        corpus: Optional[Corpus] = None,
    ) -> SelectionResult:
        """Select examples for *prompt* from a fresh corpus snapshot."""
        if corpus is None:
            corpus = self._store.load()
        return _select(
            corpus,
            prompt,
            max_examples=self.settings.max_examples if max_examples is None else max_examples,
            min_rating=self.settings.min_rating if min_rating is None else min_rating,
            ranker=self._ranker,
        )

    def as_prompt(self, selection: SelectionResult, max_chars: Optional[int] = None) -> str:
        """Format a selection for prompt injection."""
        return _as_prompt(selection, max_chars=max_chars)

    def format(
        self,
        prompt: str,
        max_examples: Optional[int] = None,
        min_rating: Optional[int] = None,
    ) -> str:
        """Select and render in one step. Does not record access."""
        return self.as_prompt(self.select(prompt, max_examples, min_rating))

    def record_access(self, examples: List[Example]) -> Optional[Corpus]:
        return _record_access(self._store, examples)

    def run(self, payload: HookPayload) -> str:
        """One full pipeline pass. Never raises; returns ``""`` for no output."""
        if not self.settings.enabled:
            return ""

        try:
            selection = self.select(payload.prompt)
            text = self.as_prompt(selection)
        except Exception:
            logger.debug("pipeline failed, emitting nothing", exc_info=True)
            selection = SelectionResult.empty(
                status=STATUS_DEGRADED, reasoning="pipeline failed"
            )
            text = ""

        if text:
            self.record_access(_rendered_examples(selection))

        if self.settings.debug:
            self._emit_debug(payload, selection)

        logger.info(
            "selected %d example(s)",
            len(selection.matches),
            extra={
                "session_id": payload.session_id,
                "task_type": selection.task_type,
                "status": selection.status,
            },
        )
        return text

    def _emit_debug(self, payload: HookPayload, selection: SelectionResult) -> None:
        try:
            self._sink.record(debug_entry(payload.session_id, payload.prompt, selection))
        except Exception:
            logger.debug("debug sink failed", exc_info=True)

    def list(self, limit: Optional[int] = None) -> List[Example]:
        """List examples, newest first."""
        examples = sorted(self._store.load().examples, key=lambda ex: ex.created_at, reverse=True)
        if limit is not None:
            examples = examples[:limit]
        return examples

    def stats(self) -> CorpusStats:
        corpus = self._store.load()
        by_task = Counter(ex.task_type for ex in corpus.examples)
        total = len(corpus.examples)
        return CorpusStats(
            total=total,
            by_task_type=dict(sorted(by_task.items())),
            average_rating=(sum(ex.rating for ex in corpus.examples) / total) if total else 0.0,
            rankable=sum(1 for ex in corpus.examples if ex.rankable),
            skipped=len(corpus.skipped),
            status=corpus.status,
        )

    def export_examples(self, path: Optional[str] = None) -> List[Dict[str, Any]]:
        """Export all decodable examples as JSON-serializable dicts.

        If *path* is given, writes ``{"version": 1, "examples": [...]}``
        to that file and returns the example list.
        """
        serialized = [example_to_dict(ex) for ex in self._store.load().examples]

        if path is not None:
            payload: Dict[str, Any] = {
                "version": FORMAT_VERSION,
                "examples": serialized,
            }
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)

        return serialized
