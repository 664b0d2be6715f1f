"""Tests for relevance scoring."""

from __future__ import annotations

from typing import FrozenSet

import numpy as np
import pytest

from fewshot.rank import CROSS_TASK_FACTOR, Ranker
from fewshot.similarity import FnSimilarity, KeywordOverlap
from fewshot.text import overlap, terms
from fewshot.types import Example


def _make_example(id: str = "01", **kwargs) -> Example:  # noqa: N802
    defaults = dict(
        id=id,
        prompt="parse json config",
        summary="used json.load",
        task_type="coding",
        rating=8,
        keywords=("json", "config", "parse"),
    )
    defaults.update(kwargs)
    return Example(**defaults)


PROMPT = "parse the json config file in python"


class TestKeywordOverlap:
    def test_subset_scores_one(self) -> None:
        sim = KeywordOverlap()
        assert sim.similarity(frozenset({"a1", "b1", "c1"}), frozenset({"a1", "b1"})) == 1.0

    def test_disjoint_scores_zero(self) -> None:
        assert KeywordOverlap().similarity(frozenset({"a1"}), frozenset({"b1"})) == 0.0

    def test_empty_scores_zero(self) -> None:
        assert KeywordOverlap().similarity(frozenset(), frozenset({"b1"})) == 0.0

    def test_partial(self) -> None:
        sim = KeywordOverlap()
        assert sim.similarity(frozenset({"a1", "b1"}), frozenset({"a1", "c1", "d1"})) == pytest.approx(0.5)



class TestOverlap:
    def test_divides_by_smaller_set(self) -> None:
        a = frozenset({"a1", "a2", "a3"})
        b = frozenset({"a1", "a2", "a3", "b1", "b2", "b3"})
        assert overlap(a, b) == 1.0
        assert overlap(b, a) == 1.0

    def test_nine_of_ten(self) -> None:
        shared = {f"s{i}" for i in range(9)}
        assert overlap(frozenset(shared | {"x"}), frozenset(shared | {"y"})) == pytest.approx(0.9)

    def test_empty(self) -> None:
        assert overlap(frozenset(), frozenset()) == 0.0

    def test_prompt_terms_keep_two_letter_words(self) -> None:
        assert terms("build the UI for the db in Go") == frozenset({"build", "ui", "db", "go"})


class TestRanker:
    def test_score_in_unit_interval(self) -> None:
        ranker = Ranker()
        for rating in (1, 5, 10):
            for count in (0, 10, 10_000):
                s = ranker.score(PROMPT, "coding", _make_example(rating=rating, access_count=count))
                assert 0.0 <= s <= 1.0

    def test_full_match_max_rating_near_one(self) -> None:
        s = Ranker().score(PROMPT, "coding", _make_example(rating=10))
        assert s == pytest.approx(1.0)

    def test_task_match_beats_mismatch(self) -> None:
        ranker = Ranker()
        same = ranker.score(PROMPT, "coding", _make_example())
        other = ranker.score(PROMPT, "coding", _make_example(task_type="writing"))
        assert same > other > 0.0
        assert same - other == pytest.approx(0.35 * (1 - CROSS_TASK_FACTOR))

    def test_higher_rating_scores_higher(self) -> None:
        ranker = Ranker()
        assert ranker.score(PROMPT, "coding", _make_example(rating=9)) > ranker.score(
            PROMPT, "coding", _make_example(rating=7)
        )

    def test_more_overlap_scores_higher(self) -> None:
        ranker = Ranker()
        strong = _make_example(keywords=("json", "config"))
        weak = _make_example(keywords=("json", "yaml", "toml", "ini"))
        assert ranker.score(PROMPT, "coding", strong) > ranker.score(PROMPT, "coding", weak)

    def test_heavy_use_slightly_dampened(self) -> None:
        ranker = Ranker()
        fresh = ranker.score(PROMPT, "coding", _make_example(access_count=0))
        worn = ranker.score(PROMPT, "coding", _make_example(access_count=100))
        assert worn < fresh
        assert worn > 0.9 * fresh

    def test_no_keywords_scores_zero(self) -> None:
        assert Ranker().score(PROMPT, "coding", _make_example(keywords=())) == 0.0

    def test_score_all_matches_score(self) -> None:
        ranker = Ranker()
        examples = [_make_example(str(i), rating=r) for i, r in enumerate((7, 8, 9))]
        batch = ranker.score_all(PROMPT, "coding", examples)
        assert isinstance(batch, np.ndarray)
        for ex, s in zip(examples, batch):
            assert s == pytest.approx(ranker.score(PROMPT, "coding", ex))

    def test_score_all_empty(self) -> None:
        assert Ranker().score_all(PROMPT, "coding", []).shape == (0,)

    def test_pluggable_similarity(self) -> None:
        def always(prompt_terms: FrozenSet[str], keywords: FrozenSet[str]) -> float:
            return 1.0

        ranker = Ranker(FnSimilarity(always))
        ex = _make_example(keywords=("unrelated",))
        assert ranker.score("nothing in common", "coding", ex) > Ranker().score(
            "nothing in common", "coding", ex
        )

    def test_bad_similarity_is_clamped(self) -> None:
        ranker = Ranker(FnSimilarity(lambda p, k: float("nan")))
        assert ranker.score(PROMPT, "coding", _make_example()) <= 1.0
        assert Ranker(FnSimilarity(lambda p, k: 7.0)).lexical(frozenset({"json"}), _make_example()) == 1.0
