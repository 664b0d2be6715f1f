"""Composite relevance scoring."""

from __future__ import annotations

from typing import FrozenSet, Optional, Sequence

import numpy as np

from fewshot.similarity import KeywordOverlap, Similarity
from fewshot.text import terms
from fewshot.types import MAX_RATING, MIN_RATING, Example

TASK_WEIGHT = 0.35
LEXICAL_WEIGHT = 0.45
QUALITY_WEIGHT = 0.20

# Task-match component for an example of a different task type.
CROSS_TASK_FACTOR = 0.4

# Strength of the access-count penalty. At 0.02 an example used 100 times
# keeps ~92% of its score.
USAGE_DAMPING = 0.02

_WEIGHTS = np.array([TASK_WEIGHT, LEXICAL_WEIGHT, QUALITY_WEIGHT], dtype=np.float64)


class Ranker:
    """Scores examples against a prompt and its task type.

    Usage::

        ranker = Ranker()
        scores = ranker.score_all(prompt, "coding", corpus.examples)
    """

    def __init__(self, similarity: Optional[Similarity] = None) -> None:
        self.similarity = similarity or KeywordOverlap()

    def lexical(self, prompt_terms: FrozenSet[str], example: Example) -> float:
        if not example.terms:
            return 0.0
        value = float(self.similarity.similarity(prompt_terms, example.terms))
        if not np.isfinite(value):
            return 0.0
        return min(max(value, 0.0), 1.0)

    def score(self, prompt: str, task_type: str, example: Example) -> float:
        """Score a single example in [0, 1]."""
        return float(self.score_all(prompt, task_type, [example])[0])

    def score_all(
        self,
        prompt: str,
        task_type: str,
        examples: Sequence[Example],
        prompt_terms: Optional[FrozenSet[str]] = None,
    ) -> np.ndarray:
        """Score *examples* in one vectorized pass. Returns a float64 array."""
        if not examples:
            return np.zeros(0, dtype=np.float64)
        if prompt_terms is None:
            prompt_terms = terms(prompt)

        lexical = np.array([self.lexical(prompt_terms, ex) for ex in examples], dtype=np.float64)
        return self.combine(task_type, examples, lexical)

    @staticmethod
    def combine(task_type: str, examples: Sequence[Example], lexical: np.ndarray) -> np.ndarray:
        task = np.array(
            [1.0 if ex.task_type == task_type else CROSS_TASK_FACTOR for ex in examples],
            dtype=np.float64,
        )
        ratings = np.array([ex.rating for ex in examples], dtype=np.float64)
        quality = np.clip((ratings - MIN_RATING) / (MAX_RATING - MIN_RATING), 0.0, 1.0)
        access = np.array([max(ex.access_count, 0) for ex in examples], dtype=np.float64)
        damping = 1.0 / (1.0 + USAGE_DAMPING * np.log1p(access))

        components = np.stack([task, lexical, quality], axis=1)
        scores = (components @ _WEIGHTS) * damping

        # Keyword-less examples are never eligible.
        rankable = np.array([ex.rankable for ex in examples], dtype=bool)
        scores = np.where(rankable, scores, 0.0)
        return np.clip(scores, 0.0, 1.0)

