"""fewshot — few-shot example retrieval from episodic memory."""

from fewshot.classify import classify
from fewshot.config import Settings
from fewshot.engine import FewShot
from fewshot.exceptions import CorpusWriteError, FewShotError, InvalidExampleError
from fewshot.prompt import as_prompt
from fewshot.types import Corpus, Example, HookPayload, Match, SelectionResult

__all__ = [
    "FewShot",
    "Settings",
    "Example",
    "Corpus",
    "Match",
    "SelectionResult",
    "HookPayload",
    "FewShotError",
    "InvalidExampleError",
    "CorpusWriteError",
    "as_prompt",
    "classify",
]
