"""Tests for kg_learn.learning.repository."""

import logging

import pytest

from kg_learn.catalog import default_learning_paths
from kg_learn.learning.repository import LearningPathRepository, clamp_percent
from kg_learn.models import Difficulty, LearningPath, PathFilters


@pytest.fixture
def repo() -> LearningPathRepository:
    repository = LearningPathRepository()
    for path in default_learning_paths():
        repository.add_path(path)
    return repository


def _ids(paths):
    return [path.id for path in paths]


class TestCatalogue:
    def test_add_and_get(self, repo):
        assert repo.get_path("vue-modern-dev").title == "Modern Vue.js Development"
        assert repo.get_path("missing") is None
        assert len(repo.all_paths()) == 4

    def test_indexes(self, repo):
        assert _ids(repo.paths_with_tag("docker")) == ["devops-path"]
        assert _ids(repo.paths_with_difficulty(Difficulty.ADVANCED)) == [
            "python-ai-path",
            "devops-path",
        ]

    def test_replace_reindexes(self, repo):
        repo.add_path(LearningPath(id="devops-path", title="Ops", tags=["ops"]))
        assert repo.paths_with_tag("docker") == []
        assert _ids(repo.paths_with_tag("ops")) == ["devops-path"]
        assert "devops-path" not in _ids(repo.paths_with_difficulty(Difficulty.ADVANCED))
        assert len(repo.all_paths()) == 4


class TestSearchPaths:
    def test_text_query(self, repo):
        assert _ids(repo.search_paths("vue")) == ["vue-modern-dev"]

    def test_empty_query_returns_all(self, repo):
        assert len(repo.search_paths("")) == 4

    def test_difficulty_filter(self, repo):
        results = repo.search_paths("", PathFilters(difficulty=[Difficulty.ADVANCED]))
        assert _ids(results) == ["python-ai-path", "devops-path"]

    def test_tags_match_any(self, repo):
        results = repo.search_paths("", {"tags": ["docker", "react"]})
        assert _ids(results) == ["react-fullstack-path", "devops-path"]

    def test_audience_case_insensitive(self, repo):
        results = repo.search_paths("", {"target_audience": "SENIOR"})
        assert _ids(results) == ["python-ai-path", "devops-path"]

    def test_query_and_filters_combine(self, repo):
        results = repo.search_paths("development", {"difficulty": ["intermediate"]})
        assert _ids(results) == ["react-fullstack-path", "vue-modern-dev"]

    def test_malformed_filters_ignored(self, repo, caplog):
        with caplog.at_level(logging.WARNING, logger="kg_learn.learning.repository"):
            results = repo.search_paths("", {"difficulty": "weird"})
        assert len(results) == 4
        assert "malformed path filters" in caplog.text


class TestProgress:
    def test_clamps(self, repo):
        assert repo.update_user_progress("u1", "vue-modern-dev", 150) == 100.0
        assert repo.get_user_progress("u1", "vue-modern-dev") == 100.0
        repo.update_user_progress("u1", "vue-modern-dev", -10)
        assert repo.get_user_progress("u1", "vue-modern-dev") == 0.0

    def test_clamp_percent(self):
        assert clamp_percent(42.5) == 42.5
        assert clamp_percent(1e9) == 100.0

    def test_default_zero(self, repo):
        assert repo.get_user_progress("nobody", "vue-modern-dev") == 0.0
        assert repo.get_all_user_progress("nobody") == {}

    def test_mark_node_completed(self, repo):
        repo.mark_node_completed("u1", "vue-modern-dev", "vue3-basics")
        assert repo.get_user_progress("u1", "vue-modern-dev") == 20.0
        assert repo.completed_nodes("u1", "vue-modern-dev") == {"vue3-basics"}

    def test_mark_is_idempotent(self, repo):
        repo.mark_node_completed("u1", "vue-modern-dev", "vue3-basics")
        repo.mark_node_completed("u1", "vue-modern-dev", "vue3-basics")
        assert repo.get_user_progress("u1", "vue-modern-dev") == 20.0

    def test_all_nodes_reach_hundred(self, repo):
        path = repo.get_path("vue-modern-dev")
        seen = []
        for node in path.nodes:
            repo.mark_node_completed("u1", path.id, node.id)
            seen.append(repo.get_user_progress("u1", path.id))
        assert seen == sorted(seen)
        assert seen[-1] == 100.0

    def test_unknown_path_or_node_is_noop(self, repo):
        repo.mark_node_completed("u1", "missing", "vue3-basics")
        repo.mark_node_completed("u1", "vue-modern-dev", "not-a-node")
        assert repo.get_all_user_progress("u1") == {}
        assert repo.completed_nodes("u1", "vue-modern-dev") == set()

    def test_progress_is_per_user(self, repo):
        repo.update_user_progress("u1", "devops-path", 50)
        assert repo.get_user_progress("u2", "devops-path") == 0.0
        assert repo.get_all_user_progress("u1") == {"devops-path": 50.0}


class TestRecommendations:
    def test_easiest_first(self, repo):
        assert _ids(repo.get_recommended_paths("u1")) == [
            "react-fullstack-path",
            "vue-modern-dev",
            "python-ai-path",
            "devops-path",
        ]

    def test_limit(self, repo):
        assert _ids(repo.get_recommended_paths("u1", 2)) == [
            "react-fullstack-path",
            "vue-modern-dev",
        ]

    def test_excludes_completed(self, repo):
        repo.update_user_progress("u1", "react-fullstack-path", 100)
        repo.update_user_progress("u1", "vue-modern-dev", 99)
        results = _ids(repo.get_recommended_paths("u1"))
        assert "react-fullstack-path" not in results
        assert results[0] == "vue-modern-dev"

    def test_completion_through_nodes(self, repo):
        path = repo.get_path("devops-path")
        for node in path.nodes:
            repo.mark_node_completed("u1", path.id, node.id)
        assert "devops-path" not in _ids(repo.get_recommended_paths("u1"))


class TestAggregates:
    def test_stats(self, repo):
        stats = repo.get_path_stats()
        assert stats.total_paths == 4
        assert stats.paths_by_difficulty == {"intermediate": 2, "advanced": 2}
        assert stats.paths_by_category["docker"] == 1
        # (120 + 80 + 150 + 100) / 4 = 112.5
        assert stats.average_duration == 113

    def test_empty_stats(self):
        stats = LearningPathRepository().get_path_stats()
        assert stats.total_paths == 0
        assert stats.average_duration == 0
        assert stats.paths_by_difficulty == {}

    def test_popular_tags(self, repo):
        repo.add_path(LearningPath(id="extra", title="Extra", tags=["docker", "react"]))
        tags = repo.get_popular_tags(3)
        assert [(t.tag, t.count) for t in tags] == [("react", 2), ("docker", 2), ("fullstack", 1)]

    def test_popular_tags_default_limit(self, repo):
        assert len(repo.get_popular_tags()) == 10
