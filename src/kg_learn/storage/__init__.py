"""storage — technology graph storage backends."""

from kg_learn.storage.base import BaseTechGraphStore
from kg_learn.storage.memory_graph import InMemoryGraphStore

__all__ = ["BaseTechGraphStore", "InMemoryGraphStore"]
