"""Abstract store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fewshot.types import Corpus


class Store(ABC):
    """Abstract base class for example corpus backends."""

    @abstractmethod
    def load(self) -> Corpus:
        """Return a snapshot of the corpus. Never raises; returns an empty corpus instead."""

    @abstractmethod
    def persist(self, corpus: Corpus) -> None:
        """Write *corpus* back. Raises CorpusWriteError on failure."""
