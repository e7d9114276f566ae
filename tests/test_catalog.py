"""Tests for kg_learn.catalog."""

import pytest

from kg_learn.catalog import (
    DEFAULT_RELATIONSHIPS,
    DEFAULT_TECHNOLOGIES,
    default_learning_paths,
    seed_default_catalog,
)
from kg_learn.events import EDGE_ADDED
from kg_learn.storage.memory_graph import InMemoryGraphStore


class TestSeedDefaultCatalog:
    def test_counts(self, store):
        ids = seed_default_catalog(store)
        assert len(ids) == len(DEFAULT_TECHNOLOGIES) == store.node_count
        assert store.edge_count == len(DEFAULT_RELATIONSHIPS)

    def test_returns_label_ids(self, store):
        ids = seed_default_catalog(store)
        assert store.get_node(ids["React"]).label == "React"

    def test_emits_edge_events(self, store):
        seen = []
        store.subscribe(EDGE_ADDED, seen.append)
        seed_default_catalog(store)
        assert len(seen) == len(DEFAULT_RELATIONSHIPS)

    def test_seeding_twice_does_not_share_models(self):
        first = InMemoryGraphStore()
        second = InMemoryGraphStore()
        a = seed_default_catalog(first)
        b = seed_default_catalog(second)
        first.update_node(a["Git"], popularity=1)
        assert second.get_node(b["Git"]).popularity == 95

    def test_relationship_labels_exist(self):
        labels = {tech.label for tech in DEFAULT_TECHNOLOGIES}
        for source, target, _ in DEFAULT_RELATIONSHIPS:
            assert source in labels
            assert target in labels


class TestDefaultLearningPaths:
    def test_ids(self):
        assert [path.id for path in default_learning_paths()] == [
            "react-fullstack-path",
            "vue-modern-dev",
            "python-ai-path",
            "devops-path",
        ]

    def test_fresh_objects(self):
        first = default_learning_paths()
        first[0].nodes.clear()
        assert default_learning_paths()[0].nodes

    @pytest.mark.parametrize("path", default_learning_paths(), ids=lambda p: p.id)
    def test_node_prerequisites_precede(self, path):
        position = {node.id: node.order for node in path.nodes}
        for node in path.nodes:
            for prereq in node.prerequisites:
                if prereq in position:
                    assert position[prereq] < node.order
