"""Skill gap analysis — match a learner's known skills against target skills."""

from __future__ import annotations

import logging

from kg_learn.config import settings
from kg_learn.graph.query import GraphQueryEngine
from kg_learn.models import DIFFICULTY_HOURS, Difficulty, SkillGap

logger = logging.getLogger(__name__)

# Gap origin used when no known skill is close to the target.
BEGINNER_BASELINE = "beginner"

# Applied to targets the catalog has not modelled yet.
UNKNOWN_TARGET_DIFFICULTY = Difficulty.INTERMEDIATE


class SkillGapAnalyzer:
    def __init__(
        self,
        engine: GraphQueryEngine,
        *,
        max_path_nodes: int | None = None,
    ) -> None:
        self._engine = engine
        self._max_path_nodes = (
            settings.closest_skill_max_nodes if max_path_nodes is None else max_path_nodes
        )

    def compute_gaps(self, current_skills: list[str], target_skills: list[str]) -> list[SkillGap]:
        """One gap per target, in target order.  Never raises for unknown names."""
        gaps: list[SkillGap] = []
        for target in target_skills:
            closest = self.find_closest_skill(current_skills, target)
            difficulty = self.difficulty_for(target)
            gaps.append(
                SkillGap(
                    from_skill=closest or BEGINNER_BASELINE,
                    to_skill=target,
                    difficulty=difficulty,
                    estimated_hours=DIFFICULTY_HOURS[difficulty],
                )
            )
        return gaps

    def find_closest_skill(self, current_skills: list[str], target: str) -> str | None:
        """First known skill whose shortest path to *target* is short enough.

        The path length is counted in nodes, so the default of 3 allows at
        most two hops.  A disconnected pair yields the one-node fallback path
        and therefore also counts as close.
        """
        if self._engine.find_node_by_label(target) is None:
            return None

        for skill in current_skills:
            if self._engine.find_node_by_label(skill) is None:
                continue
            path = self._engine.shortest_path(skill, target)
            if len(path) <= self._max_path_nodes:
                return skill
        return None

    def difficulty_for(self, skill_name: str) -> Difficulty:
        node = self._engine.find_node_by_label(skill_name)
        if node is None:
            logger.debug("Unknown target skill %r, assuming %s", skill_name, UNKNOWN_TARGET_DIFFICULTY.value)
            return UNKNOWN_TARGET_DIFFICULTY
        return node.learning_curve

    def estimated_hours_for(self, skill_name: str) -> int:
        return DIFFICULTY_HOURS[self.difficulty_for(skill_name)]
