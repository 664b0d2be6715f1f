"""Tests for the Example dataclass and its JSON codec."""

import pytest

from fewshot.exceptions import InvalidExampleError
from fewshot.types import Example, HookPayload, example_from_dict, example_to_dict


def _record(**kwargs):
    rec = {
        "id": "ex-1",
        "prompt": "parse a csv file",
        "summary": "used csv.DictReader",
        "taskType": "coding",
        "rating": 8,
        "keywords": ["csv", "parse"],
        "createdAt": "2026-01-01T00:00:00+00:00",
        "accessCount": 2,
    }
    rec.update(kwargs)
    return rec


def test_example_creation_minimal():
    ex = Example(id="a", prompt="p", task_type="coding", rating=7)
    assert ex.summary is None
    assert ex.keywords == ()
    assert ex.access_count == 0
    assert ex.last_accessed_at is None
    assert not ex.rankable


def test_terms_are_normalized():
    ex = Example(id="a", prompt="p", task_type="coding", rating=7, keywords=("JSON-Parser", "the"))
    assert ex.terms == frozenset({"json", "parser", "the"})
    assert ex.rankable


def test_short_keywords_are_rankable():
    ex = Example(id="a", prompt="p", task_type="coding", rating=7, keywords=("UI", "db", "Go"))
    assert ex.terms == frozenset({"ui", "db", "go"})
    assert ex.rankable


class TestFromDict:
    def test_full_record(self):
        ex = example_from_dict(_record(lastAccessedAt="2026-02-01T00:00:00+00:00"))
        assert ex.id == "ex-1"
        assert ex.task_type == "coding"
        assert ex.rating == 8
        assert ex.keywords == ("csv", "parse")
        assert ex.access_count == 2
        assert ex.last_accessed_at == "2026-02-01T00:00:00+00:00"

    def test_snake_case_keys(self):
        rec = _record()
        del rec["taskType"], rec["accessCount"]
        rec["task_type"] = "testing"
        rec["access_count"] = 4
        ex = example_from_dict(rec)
        assert ex.task_type == "testing"
        assert ex.access_count == 4

    def test_legacy_record(self):
        ex = example_from_dict({
            "id": "old",
            "taskType": "bug_fix",
            "task": "fix null pointer",
            "approach": "added a guard",
            "rating": 9,
            "timestamp": "2025-12-01T00:00:00Z",
            "tags": ["bug_fix", "rating-9"],
        })
        assert ex.task_type == "debugging"
        assert ex.prompt == "fix null pointer"
        assert ex.summary == "added a guard"
        assert ex.created_at == "2025-12-01T00:00:00Z"
        assert "bug" in ex.terms

    def test_missing_access_count_defaults_to_zero(self):
        rec = _record()
        del rec["accessCount"]
        assert example_from_dict(rec).access_count == 0

    @pytest.mark.parametrize(
        "override",
        [
            {"id": ""},
            {"id": None},
            {"prompt": None},
            {"taskType": "juggling"},
            {"rating": 0},
            {"rating": 11},
            {"rating": 7.5},
            {"rating": "8"},
            {"rating": True},
            {"accessCount": -1},
            {"accessCount": "3"},
        ],
    )
    def test_invalid_records_raise(self, override):
        with pytest.raises(InvalidExampleError):
            example_from_dict(_record(**override))

    def test_non_dict_raises(self):
        with pytest.raises(InvalidExampleError):
            example_from_dict(["not", "a", "record"])

    def test_integral_float_rating_accepted(self):
        assert example_from_dict(_record(rating=9.0)).rating == 9

    def test_unknown_keys_kept(self):
        ex = example_from_dict(_record(sessionId="s-1", metadata={"tools": ["bash"]}))
        assert ex.extra == {"sessionId": "s-1", "metadata": {"tools": ["bash"]}}
        out = example_to_dict(ex)
        assert out["sessionId"] == "s-1"
        assert out["metadata"] == {"tools": ["bash"]}


def test_to_dict_layout():
    ex = Example(id="a", prompt="p", task_type="coding", rating=7, keywords=("x1",))
    d = example_to_dict(ex)
    assert d["taskType"] == "coding"
    assert d["accessCount"] == 0
    assert d["keywords"] == ["x1"]
    assert "lastAccessedAt" not in d


class TestHookPayload:
    def test_from_dict(self):
        p = HookPayload.from_dict({
            "prompt": "hi",
            "session_id": "s1",
            "transcript_path": "/tmp/t",
            "hook_event_name": "UserPromptSubmit",
        })
        assert p.prompt == "hi"
        assert p.session_id == "s1"
        assert p.extra == {"transcript_path": "/tmp/t", "hook_event_name": "UserPromptSubmit"}

    def test_garbage_payload(self):
        assert HookPayload.from_dict(None).prompt == ""
        assert HookPayload.from_dict({"prompt": 5}).prompt == ""
