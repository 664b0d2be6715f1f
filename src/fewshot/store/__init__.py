"""Storage backends for the example corpus."""

from fewshot.store.base import Store
from fewshot.store.jsonfile import JsonFileStore
from fewshot.store.memory import MemoryStore

__all__ = ["Store", "JsonFileStore", "MemoryStore"]
