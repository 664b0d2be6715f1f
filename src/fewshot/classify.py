"""Rule-based task-type classifier."""

from __future__ import annotations

import re
from typing import List, Pattern, Tuple

from fewshot.types import LEGACY_TASK_TYPES, TASK_TYPES, normalize_task_type

__all__ = ["classify", "TASK_TYPES", "LEGACY_TASK_TYPES", "normalize_task_type", "RULES"]

GENERAL = "general"


def _rx(*patterns: str) -> List[Pattern[str]]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


# Evaluated top to bottom; the first tag with a matching pattern wins.
RULES: Tuple[Tuple[str, List[Pattern[str]]], ...] = (
    ("debugging", _rx(
        r"\b(bug|bugs|fix|fixes|fixing|error|errors|exception|traceback|stack ?trace)\b",
        r"\b(broken|crash(es|ed|ing)?|fail(s|ed|ing|ure)?|regression)\b",
        r"not working|doesn'?t work|does not work|incorrect|wrong",
        r"\b(debug|troubleshoot|diagnose|investigate)\b",
    )),
    ("testing", _rx(
        r"\b(tests?|testing|unit ?tests?|integration tests?|e2e|pytest|jest)\b",
        r"\b(coverage|mock(s|ing)?|fixtures?|tdd|test[- ]driven)\b",
    )),
    ("refactoring", _rx(
        r"\b(refactor\w*|restructure|reorganize|clean ?up|simplify|consolidate)\b",
        r"code quality|maintainability|extract (a |the )?(method|function|class)",
    )),
    ("coding", _rx(
        r"\b(implement\w*|add (a )?feature|create (a )?new|build|code|function|class|module)\b",
        r"\b(api|endpoint|http|webhook|cli|script|command line|integration)\b",
        r"\b(python|typescript|javascript|rust|golang|java|sql|bash)\b",
    )),
    ("writing", _rx(
        r"\b(write|draft|rewrite|edit|proofread)\b.*\b(doc|docs|readme|email|post|article|essay|blog)\b",
        r"\b(document\w*|readme|docstrings?|changelog|release notes)\b",
        r"\b(email|blog post|article|essay|copy ?writing|summari[sz]e)\b",
    )),
    ("analysis", _rx(
        r"\b(analy[sz]e|analysis|evaluate|compare|assess|benchmark|profile)\b",
        r"\b(review|audit|inspect|metrics|statistics|dataset|csv|report)\b",
        r"\b(parse|transform|aggregate)\b",
    )),
    ("planning", _rx(
        r"\b(plan|planning|roadmap|strategy|milestones?|prioriti[sz]e|schedule)\b",
        r"\b(design|architect(ure)?|proposal|outline|break ?down)\b",
    )),
)


def classify(prompt: str) -> str:
    """Map free text onto one tag of the closed task-type set.

    Never raises: anything unrecognized, including non-string input,
    resolves to ``general``.
    """
    if not isinstance(prompt, str) or not prompt.strip():
        return GENERAL
    for task_type, patterns in RULES:
        for pattern in patterns:
            if pattern.search(prompt):
                return task_type
    return GENERAL
