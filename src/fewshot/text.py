"""Term normalization shared by the ranker and the corpus codec."""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable

_TOKEN = re.compile(r"[a-z0-9]+")
_MIN_TERM_LEN = 2

STOP_WORDS: FrozenSet[str] = frozenset(
    """
    an as at be by do if in is it me my no of on or so to up us we
    the and for are but not you your with this that from have has had was were
    will would should could can cannot into onto over under about after before
    then than them they their there here what when where which while who whom
    why how all any each some such only own same too very just also its
    our ours out off been being does did doing make made use using used
    get got let lets please want need like one two way thing things
    """.split()
)


def terms(text: str) -> FrozenSet[str]:
    """Return the normalized term set of prompt *text*.

    Lowercases, splits on anything that is not a letter or digit, and drops
    single characters and stop words.
    """
    if not text:
        return frozenset()
    return frozenset(
        tok for tok in _TOKEN.findall(text.lower())
        if len(tok) >= _MIN_TERM_LEN and tok not in STOP_WORDS
    )


def keyword_terms(keywords: Iterable[str]) -> FrozenSet[str]:
    """Normalize stored keywords.

    Keywords are already curated terms, so they are only lowercased and
    split on punctuation; nothing is filtered out.
    """
    out: set = set()
    for kw in keywords:
        out.update(_TOKEN.findall(kw.lower()))
    return frozenset(out)


def overlap(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """Overlap coefficient |a & b| / min(|a|, |b|); 0.0 if either is empty."""
    if not a or not b:
        return 0.0
    return len(a & b) / min(len(a), len(b))
