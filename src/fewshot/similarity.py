"""Lexical similarity measures used by the ranker."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, FrozenSet

from fewshot.text import overlap

SimilarityFn = Callable[[FrozenSet[str], FrozenSet[str]], float]


class Similarity(ABC):
    """Abstract base class for prompt/example similarity measures."""

    @abstractmethod
    def similarity(self, prompt_terms: FrozenSet[str], keywords: FrozenSet[str]) -> float:
        """Return a similarity in [0, 1] between two normalized term sets."""


class KeywordOverlap(Similarity):
    """Overlap coefficient: |P & K| / min(|P|, |K|).

    An example whose keywords are all present in the prompt scores 1.0
    regardless of how long the prompt is.
    """

    def similarity(self, prompt_terms: FrozenSet[str], keywords: FrozenSet[str]) -> float:
        return overlap(prompt_terms, keywords)


class FnSimilarity(Similarity):
    """Wraps a user-provided similarity function as a Similarity."""

    def __init__(self, fn: SimilarityFn) -> None:
        self._fn = fn

    def similarity(self, prompt_terms: FrozenSet[str], keywords: FrozenSet[str]) -> float:
        return min(max(float(self._fn(prompt_terms, keywords)), 0.0), 1.0)
