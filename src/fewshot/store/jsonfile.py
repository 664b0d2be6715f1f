"""JSON file store implementation."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Set

from fewshot.exceptions import CorpusWriteError, InvalidExampleError
from fewshot.store.base import Store
from fewshot.types import (
    CORPUS_MISSING,
    CORPUS_OK,
    CORPUS_UNREADABLE,
    Corpus,
    Example,
    example_from_dict,
    example_to_dict,
)

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class JsonFileStore(Store):
    """Corpus stored as a single JSON document.

    Accepts ``{"version": 1, "examples": [...]}`` or a bare list of records
    on read, and always writes the wrapped form.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Corpus:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return Corpus(status=CORPUS_MISSING)
        except (OSError, ValueError) as e:
            logger.debug("corpus %s unreadable: %s", self.path, e)
            return Corpus(status=CORPUS_UNREADABLE)

        if isinstance(data, dict):
            records = data.get("examples")
        else:
            records = data
        if not isinstance(records, list):
            logger.debug("corpus %s has no example list", self.path)
            return Corpus(status=CORPUS_UNREADABLE)

        examples: List[Example] = []
        skipped: List[Any] = []
        seen: Set[str] = set()
        for record in records:
            try:
                example = example_from_dict(record)
            except InvalidExampleError as e:
                logger.debug("skipping record: %s", e)
                skipped.append(record)
                continue
            if example.id in seen:
                logger.debug("skipping duplicate id %s", example.id)
                skipped.append(record)
                continue
            seen.add(example.id)
            examples.append(example)

        return Corpus(examples=tuple(examples), skipped=tuple(skipped), status=CORPUS_OK)

    def persist(self, corpus: Corpus) -> None:
        payload: Dict[str, Any] = {
            "version": FORMAT_VERSION,
            "examples": [example_to_dict(ex) for ex in corpus.examples]
            + list(corpus.skipped),
        }
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise CorpusWriteError(f"cannot write {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
