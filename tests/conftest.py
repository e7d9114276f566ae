"""Shared fixtures: fresh stores and services with deterministic ids."""

from __future__ import annotations

import pytest

from kg_learn.api.service import KnowledgeService
from kg_learn.graph.query import GraphQueryEngine
from kg_learn.storage.memory_graph import InMemoryGraphStore
from kg_learn.utils import counter_id_generator


@pytest.fixture
def store() -> InMemoryGraphStore:
    return InMemoryGraphStore(id_generator=counter_id_generator())


@pytest.fixture
def engine(store: InMemoryGraphStore) -> GraphQueryEngine:
    return GraphQueryEngine(store)


@pytest.fixture
def service() -> KnowledgeService:
    """Empty service: no technologies, no paths."""
    return KnowledgeService(id_generator=counter_id_generator())


@pytest.fixture
def seeded() -> KnowledgeService:
    """Service loaded with the default catalog and authored paths."""
    return KnowledgeService.with_default_catalog(id_generator=counter_id_generator())


@pytest.fixture
def label_ids(seeded: KnowledgeService) -> dict[str, str]:
    return {node.label: node.id for node in seeded.store.nodes()}
