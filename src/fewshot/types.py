"""Core data types for the few-shot retrieval engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from fewshot.exceptions import InvalidExampleError
from fewshot.text import keyword_terms

# Closed task-type set, in classifier priority order.
TASK_TYPES: Tuple[str, ...] = (
    "debugging",
    "testing",
    "refactoring",
    "coding",
    "writing",
    "analysis",
    "planning",
    "general",
)

# Tags written by older capture tooling.
LEGACY_TASK_TYPES: Dict[str, str] = {
    "bug_fix": "debugging",
    "feature_implementation": "coding",
    "code_refactor": "refactoring",
    "code_review": "analysis",
    "documentation": "writing",
    "cli_tool": "coding",
    "api_integration": "coding",
    "data_processing": "analysis",
}

MIN_RATING = 1
MAX_RATING = 10

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_DEGRADED = "degraded"

CORPUS_OK = "ok"
CORPUS_MISSING = "missing"
CORPUS_UNREADABLE = "unreadable"


def normalize_task_type(value: Any) -> Optional[str]:
    """Map a stored tag onto the closed set, or None if it is unknown."""
    if not isinstance(value, str):
        return None
    tag = value.strip().lower()
    if tag in TASK_TYPES:
        return tag
    return LEGACY_TASK_TYPES.get(tag)


@dataclass(frozen=True)
class Example:
    """A past successful interaction usable as an in-context demonstration."""

    id: str
    prompt: str
    task_type: str
    rating: int
    summary: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    created_at: str = ""
    access_count: int = 0
    last_accessed_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @cached_property
    def terms(self) -> FrozenSet[str]:
        """Normalized keyword terms used for ranking."""
        return keyword_terms(self.keywords)

    @property
    def rankable(self) -> bool:
        return bool(self.terms)


@dataclass(frozen=True)
class Corpus:
    """Immutable snapshot of the persisted example collection.

    ``skipped`` holds raw records that could not be decoded. They are written
    back untouched on persist so that newer or damaged records survive.
    """

    examples: Tuple[Example, ...] = ()
    skipped: Tuple[Any, ...] = ()
    status: str = CORPUS_OK

    def __len__(self) -> int:
        return len(self.examples)

    def get(self, example_id: str) -> Optional[Example]:
        for ex in self.examples:
            if ex.id == example_id:
                return ex
        return None


@dataclass(frozen=True)
class Match:
    """An example together with its relevance score."""

    example: Example
    score: float


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one selection pass."""

    task_type: str
    confidence: float = 0.0
    matches: Tuple[Match, ...] = ()
    status: str = STATUS_EMPTY
    # Human-readable account of how the result came about.
    reasoning: str = ""

    @property
    def examples(self) -> List[Example]:
        return [m.example for m in self.matches]

    @classmethod
    def empty(
        cls,
        task_type: str = "general",
        status: str = STATUS_EMPTY,
        reasoning: str = "",
    ) -> "SelectionResult":
        return cls(
            task_type=task_type,
            confidence=0.0,
            matches=(),
            status=status,
            reasoning=reasoning,
        )


# ---------------------------------------------------------------------------
# JSON codec
# ---------------------------------------------------------------------------

# Persisted key -> accepted spellings, first match wins.
_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "prompt": ("prompt", "task"),
    "summary": ("summary", "approach"),
    "taskType": ("taskType", "task_type"),
    "rating": ("rating",),
    "keywords": ("keywords", "tags"),
    "createdAt": ("createdAt", "created_at", "timestamp"),
    "accessCount": ("accessCount", "access_count"),
    "lastAccessedAt": ("lastAccessedAt", "last_accessed_at", "lastAccessed"),
}

_KNOWN_KEYS = frozenset(k for names in _ALIASES.values() for k in names)


def _pick(record: Dict[str, Any], key: str) -> Any:
    for name in _ALIASES[key]:
        if name in record:
            return record[name]
    return None


def example_from_dict(record: Any) -> Example:
    """Decode one persisted record. Raises InvalidExampleError."""
    if not isinstance(record, dict):
        raise InvalidExampleError("record is not an object")

    ex_id = _pick(record, "id")
    if not isinstance(ex_id, str) or not ex_id:
        raise InvalidExampleError("missing id")

    prompt = _pick(record, "prompt")
    if not isinstance(prompt, str):
        raise InvalidExampleError("missing prompt", ex_id)

    task_type = normalize_task_type(_pick(record, "taskType"))
    if task_type is None:
        raise InvalidExampleError("unknown task type", ex_id)

    rating = _pick(record, "rating")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise InvalidExampleError("missing rating", ex_id)
    if isinstance(rating, float) and not rating.is_integer():
        raise InvalidExampleError(f"rating is not an integer: {rating}", ex_id)
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise InvalidExampleError(f"rating out of range: {rating}", ex_id)

    access_count = _pick(record, "accessCount")
    if access_count is None:
        access_count = 0
    if isinstance(access_count, bool) or not isinstance(access_count, int) or access_count < 0:
        raise InvalidExampleError("invalid access count", ex_id)

    summary = _pick(record, "summary")
    if summary is not None and not isinstance(summary, str):
        summary = None

    raw_keywords = _pick(record, "keywords") or []
    if isinstance(raw_keywords, str):
        raw_keywords = [raw_keywords]
    if not isinstance(raw_keywords, list):
        raw_keywords = []
    keywords = tuple(k for k in raw_keywords if isinstance(k, str))

    created_at = _pick(record, "createdAt")
    last_accessed = _pick(record, "lastAccessedAt")

    return Example(
        id=ex_id,
        prompt=prompt,
        task_type=task_type,
        rating=int(rating),
        summary=summary,
        keywords=keywords,
        created_at=created_at if isinstance(created_at, str) else "",
        access_count=access_count,
        last_accessed_at=last_accessed if isinstance(last_accessed, str) else None,
        extra={k: v for k, v in record.items() if k not in _KNOWN_KEYS},
    )


def example_to_dict(example: Example) -> Dict[str, Any]:
    """Encode an Example in the persisted camelCase layout."""
    d: Dict[str, Any] = dict(example.extra)
    d.update(
        id=example.id,
        prompt=example.prompt,
        summary=example.summary,
        taskType=example.task_type,
        rating=example.rating,
        keywords=list(example.keywords),
        createdAt=example.created_at,
        accessCount=example.access_count,
    )
    if example.last_accessed_at is not None:
        d["lastAccessedAt"] = example.last_accessed_at
    return d


@dataclass(frozen=True)
class HookPayload:
    """Invocation payload. Keys other than prompt and session_id are opaque."""

    prompt: str
    session_id: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: Any) -> "HookPayload":
        if not isinstance(data, dict):
            return cls(prompt="")
        prompt = data.get("prompt")
        session_id = data.get("session_id")
        return cls(
            prompt=prompt if isinstance(prompt, str) else "",
            session_id=session_id if isinstance(session_id, str) else "",
            extra={k: v for k, v in data.items() if k not in ("prompt", "session_id")},
        )
