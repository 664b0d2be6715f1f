"""In-memory store implementation for testing."""

from __future__ import annotations

from typing import Iterable, Optional

from fewshot.exceptions import CorpusWriteError
from fewshot.store.base import Store
from fewshot.types import Corpus, Example


class MemoryStore(Store):
    """In-memory store holding a single corpus snapshot. Useful for testing."""

    def __init__(
        self,
        examples: Optional[Iterable[Example]] = None,
        fail_persist: bool = False,
    ) -> None:
        self._corpus = Corpus(examples=tuple(examples or ()))
        self.fail_persist = fail_persist
        self.persist_count = 0

    def load(self) -> Corpus:
        return self._corpus

    def persist(self, corpus: Corpus) -> None:
        if self.fail_persist:
            raise CorpusWriteError("memory store is read-only")
        self._corpus = corpus
        self.persist_count += 1
