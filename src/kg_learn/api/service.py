"""Service layer wiring the store, query engine, synthesizer and repository."""

from __future__ import annotations

import logging
from typing import Any, Callable

from kg_learn.catalog import default_learning_paths, seed_default_catalog
from kg_learn.graph.query import GraphQueryEngine
from kg_learn.learning.gaps import SkillGapAnalyzer
from kg_learn.learning.repository import LearningPathRepository
from kg_learn.learning.synthesizer import LearningPathSynthesizer
from kg_learn.models import (
    GraphExport,
    LearningPath,
    NodeFilters,
    PathFilters,
    PathStats,
    RelationType,
    SkillGap,
    TagCount,
    TechNode,
    TechNodeData,
    UserProfile,
)
from kg_learn.storage.base import BaseTechGraphStore
from kg_learn.storage.memory_graph import InMemoryGraphStore
from kg_learn.utils import IdGenerator

logger = logging.getLogger(__name__)


class KnowledgeService:
    """The one object a host constructs and hands to every caller.

    Synchronous and unlocked: concurrent hosts must serialize calls.
    """

    def __init__(
        self,
        *,
        store: BaseTechGraphStore | None = None,
        repository: LearningPathRepository | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.store = store or InMemoryGraphStore(id_generator=id_generator)
        self.engine = GraphQueryEngine(self.store)
        self.analyzer = SkillGapAnalyzer(self.engine)
        self.synthesizer = LearningPathSynthesizer(
            self.engine, self.analyzer, id_generator=id_generator
        )
        self.repository = repository or LearningPathRepository()

    @classmethod
    def with_default_catalog(cls, *, id_generator: IdGenerator | None = None) -> KnowledgeService:
        service = cls(id_generator=id_generator)
        seed_default_catalog(service.store)
        for path in default_learning_paths():
            service.repository.add_path(path)
        return service

    # -- graph ---------------------------------------------------------------

    def add_node(self, data: TechNodeData | dict[str, Any]) -> str:
        return self.store.add_node(data)

    def update_node(
        self,
        node_id: str,
        *,
        popularity: float | None = None,
        description: str | None = None,
    ) -> TechNode:
        return self.store.update_node(node_id, popularity=popularity, description=description)

    def get_node(self, node_id: str) -> TechNode | None:
        return self.store.get_node(node_id)

    def add_edge(self, from_id: str, to_id: str, rel_type: RelationType | str) -> str:
        return self.store.add_edge(from_id, to_id, rel_type)

    def subscribe(
        self, kind: str, handler: Callable[[dict[str, Any]], None]
    ) -> Callable[[], None]:
        return self.store.subscribe(kind, handler)

    def shortest_path(self, start_label: str, end_label: str) -> list[str]:
        return self.engine.shortest_path(start_label, end_label)

    def related_technologies(self, node_id: str, depth: int | None = None) -> list[TechNode]:
        return self.engine.related_technologies(node_id, depth)

    def search_nodes(
        self, query: str = "", filters: NodeFilters | dict[str, Any] | None = None
    ) -> list[TechNode]:
        return self.engine.search_nodes(query, filters)

    def export_graph(self) -> GraphExport:
        return self.engine.export_graph()

    # -- learning paths ------------------------------------------------------

    def compute_skill_gaps(self, profile: UserProfile, target_skills: list[str]) -> list[SkillGap]:
        return self.analyzer.compute_gaps(profile.skill_names(), target_skills)

    def synthesize_learning_path(
        self, profile: UserProfile, target_skills: list[str]
    ) -> LearningPath:
        return self.synthesizer.synthesize(profile, target_skills)

    def synthesize_and_store(self, profile: UserProfile, target_skills: list[str]) -> LearningPath:
        path = self.synthesizer.synthesize(profile, target_skills)
        self.repository.add_path(path)
        return path

    def add_path(self, path: LearningPath) -> None:
        self.repository.add_path(path)

    def get_path(self, path_id: str) -> LearningPath | None:
        return self.repository.get_path(path_id)

    def search_paths(
        self, query: str = "", filters: PathFilters | dict[str, Any] | None = None
    ) -> list[LearningPath]:
        return self.repository.search_paths(query, filters)

    def get_recommended_paths(self, user_id: str, limit: int | None = None) -> list[LearningPath]:
        return self.repository.get_recommended_paths(user_id, limit)

    def update_user_progress(self, user_id: str, path_id: str, percent: float) -> float:
        return self.repository.update_user_progress(user_id, path_id, percent)

    def mark_node_completed(self, user_id: str, path_id: str, node_id: str) -> None:
        self.repository.mark_node_completed(user_id, path_id, node_id)

    def get_user_progress(self, user_id: str, path_id: str) -> float:
        return self.repository.get_user_progress(user_id, path_id)

    def get_path_stats(self) -> PathStats:
        return self.repository.get_path_stats()

    def get_popular_tags(self, limit: int | None = None) -> list[TagCount]:
        return self.repository.get_popular_tags(limit)
