"""Render a selection as an injectable prompt block."""

from __future__ import annotations

from typing import List, Optional, Tuple

from fewshot.types import Example, SelectionResult

HEADER = "## Relevant Examples"


def _section(number: int, example: Example) -> str:
    return "\n".join([
        f"### Example {number}",
        "",
        f"**Task type:** {example.task_type}",
        f"**Rating:** {example.rating}/10",
        "",
        example.summary.strip(),  # type: ignore[union-attr]
        "",
    ])


def _renderable(example: Example) -> bool:
    return isinstance(example.summary, str) and bool(example.summary.strip())


def _head(selection: SelectionResult) -> str:
    return "\n".join([
        HEADER,
        "",
        f"Task type: {selection.task_type}",
        f"Confidence: {selection.confidence * 100:.0f}%",
        "",
        "",
    ])


def _layout(selection: SelectionResult, max_chars: Optional[int]) -> Tuple[List[Example], List[str]]:
    examples = [ex for ex in selection.examples if _renderable(ex)]
    if not examples:
        return [], []

    shown: List[Example] = []
    sections: List[str] = []
    used = len(_head(selection))
    for example in examples:
        section = _section(len(sections) + 1, example)
        if max_chars is not None and used + len(section) + 1 > max_chars:
            break
        shown.append(example)
        sections.append(section)
        used += len(section) + 1
    return shown, sections


def rendered_examples(selection: SelectionResult, max_chars: Optional[int] = None) -> List[Example]:
    """Examples that ``as_prompt`` actually emits for the same arguments."""
    return _layout(selection, max_chars)[0]


def as_prompt(selection: SelectionResult, max_chars: Optional[int] = None) -> str:
    """Format a selection for prompt injection.

    Returns ``""`` when there is nothing to inject. Output depends only on
    *selection* and *max_chars*. With *max_chars*, only whole example
    sections that fit are kept.
    """
    _, sections = _layout(selection, max_chars)
    if not sections:
        return ""
    return _head(selection) + "\n".join(sections)
