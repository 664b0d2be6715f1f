"""Example selection: filter, score, dedupe, rank, truncate."""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from fewshot.classify import classify
from fewshot.rank import Ranker
from fewshot.text import overlap, terms
from fewshot.types import (
    STATUS_DEGRADED,
    STATUS_OK,
    Corpus,
    Match,
    SelectionResult,
)

logger = logging.getLogger(__name__)

# Scores below this are too weak to inject.
MIN_RELEVANCE = 0.3

# Same task type plus this much keyword overlap (shared / smaller set)
# counts as a duplicate.
DUPLICATE_OVERLAP = 0.9


def _rank_key(match: Match):
    ex = match.example
    return (-match.score, -ex.rating, ex.access_count, ex.id)


def _is_duplicate(match: Match, kept: List[Match]) -> bool:
    for other in kept:
        if (
            other.example.task_type == match.example.task_type
            and overlap(other.example.terms, match.example.terms) >= DUPLICATE_OVERLAP
        ):
            return True
    return False


def select(
    corpus: Corpus,
    prompt: str,
    max_examples: int = 3,
    min_rating: int = 7,
    ranker: Optional[Ranker] = None,
) -> SelectionResult:
    """Select up to *max_examples* examples relevant to *prompt*.

    Never raises. An unexpected fault yields an empty result with status
    ``degraded``; a clean run with nothing relevant yields status ``empty``.
    """
    task_type = classify(prompt)
    try:
        return _select(corpus, prompt, task_type, max_examples, min_rating, ranker or Ranker())
    except Exception as e:
        logger.debug("selection failed, degrading to empty", exc_info=True)
        return SelectionResult.empty(
            task_type,
            status=STATUS_DEGRADED,
            reasoning=f"selection failed: {type(e).__name__}",
        )


def _select(
    corpus: Corpus,
    prompt: str,
    task_type: str,
    max_examples: int,
    min_rating: int,
    ranker: Ranker,
) -> SelectionResult:
    if max_examples <= 0:
        return SelectionResult.empty(task_type, reasoning="max_examples is 0")
    if not corpus.examples:
        return SelectionResult.empty(task_type, reasoning=f"corpus is empty ({corpus.status})")

    candidates = [
        ex for ex in corpus.examples
        if ex.rating >= min_rating and ex.rankable
    ]
    if not candidates:
        return SelectionResult.empty(
            task_type,
            reasoning=f"no example with keywords is rated {min_rating} or higher",
        )

    prompt_terms = terms(prompt)
    lexical = np.array([ranker.lexical(prompt_terms, ex) for ex in candidates], dtype=np.float64)
    scores = ranker.combine(task_type, candidates, lexical)

    matches = [
        Match(example=ex, score=float(scores[i]))
        for i, ex in enumerate(candidates)
        if lexical[i] > 0.0 and scores[i] >= MIN_RELEVANCE
    ]
    matches.sort(key=_rank_key)

    kept: List[Match] = []
    for match in matches:
        if _is_duplicate(match, kept):
            continue
        kept.append(match)
        if len(kept) == max_examples:
            break

    if not kept:
        return SelectionResult.empty(
            task_type,
            reasoning=f"none of {len(candidates)} candidate(s) is relevant to the prompt",
        )

    return SelectionResult(
        task_type=task_type,
        confidence=kept[0].score,
        matches=tuple(kept),
        status=STATUS_OK,
        reasoning=(
            f"selected {len(kept)} of {len(candidates)} candidate(s) for \"{task_type}\""
        ),
    )
