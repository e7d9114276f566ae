"""Learning-path synthesis — turn skill gaps into an ordered curriculum."""

from __future__ import annotations

import logging

from kg_learn.config import settings
from kg_learn.graph.query import GraphQueryEngine
from kg_learn.learning.gaps import BEGINNER_BASELINE, SkillGapAnalyzer
from kg_learn.models import (
    DIFFICULTY_HOURS,
    SKILL_LEVEL_RANK,
    AudienceTier,
    Difficulty,
    LearningNode,
    LearningNodeType,
    LearningPath,
    SkillGap,
    TechCategory,
    TechNode,
    UserProfile,
    difficulty_rank,
)
from kg_learn.utils import IdGenerator, utc_now_iso, uuid_id_generator

logger = logging.getLogger(__name__)


def learning_node_type(category: TechCategory) -> LearningNodeType:
    if category == TechCategory.PROGRAMMING_LANGUAGE:
        return LearningNodeType.CONCEPT
    if category in (TechCategory.FRAMEWORK, TechCategory.LIBRARY):
        return LearningNodeType.TUTORIAL
    return LearningNodeType.PRACTICE


def target_audience(profile: UserProfile) -> AudienceTier:
    """Bucket the learner by the average ordinal of their skill levels."""
    if not profile.skills:
        return AudienceTier.NOVICE
    avg = sum(SKILL_LEVEL_RANK[skill.level] for skill in profile.skills) / len(profile.skills)
    if avg < 1:
        return AudienceTier.NOVICE
    if avg < 2:
        return AudienceTier.JUNIOR
    if avg < 3:
        return AudienceTier.INTERMEDIATE
    return AudienceTier.SENIOR


def path_difficulty(nodes: list[LearningNode]) -> Difficulty:
    if not nodes:
        return Difficulty.BEGINNER
    return max((node.difficulty for node in nodes), key=difficulty_rank)


def order_learning_nodes(nodes: list[LearningNode]) -> list[LearningNode]:
    """Order *nodes* so every in-path prerequisite comes first.

    Easier nodes come first wherever prerequisites leave a choice; among equal
    difficulty the incoming order is kept.  ``order`` is renumbered 1..N.

    A cycle of prerequisite claims cannot be satisfied: it is logged and the
    blocked nodes are appended in difficulty order.
    """
    remaining = sorted(nodes, key=lambda node: difficulty_rank(node.difficulty))
    in_path = {node.skill_id for node in nodes}
    emitted: set[str] = set()
    ordered: list[LearningNode] = []

    while remaining:
        for i, node in enumerate(remaining):
            pending = [
                prereq
                for prereq in node.prerequisites
                if prereq in in_path and prereq != node.skill_id and prereq not in emitted
            ]
            if not pending:
                ordered.append(remaining.pop(i))
                emitted.add(node.skill_id)
                break
        else:
            logger.warning(
                "Prerequisite cycle among %s; keeping difficulty order for them",
                [node.title for node in remaining],
            )
            ordered.extend(remaining)
            remaining = []

    for index, node in enumerate(ordered, start=1):
        node.order = index
    return ordered


class LearningPathSynthesizer:
    """Builds a :class:`LearningPath` from a learner profile and target skills."""

    def __init__(
        self,
        engine: GraphQueryEngine,
        analyzer: SkillGapAnalyzer | None = None,
        *,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._engine = engine
        self._analyzer = analyzer or SkillGapAnalyzer(engine)
        self._next_id = id_generator or uuid_id_generator(settings.id_prefix)

    def synthesize(self, profile: UserProfile, target_skills: list[str]) -> LearningPath:
        gaps = self._analyzer.compute_gaps(profile.skill_names(), target_skills)

        nodes: list[LearningNode] = []
        included: set[str] = set()
        for gap in gaps:
            for skill_id in self._gap_sequence(gap):
                if skill_id in included:
                    continue
                tech = self._engine.store.get_node(skill_id)
                if tech is None:
                    continue
                nodes.append(self._build_node(tech))
                included.add(skill_id)

        nodes = order_learning_nodes(nodes)
        now = utc_now_iso()
        joined = ", ".join(target_skills)

        path = LearningPath(
            id=self._next_id(),
            title=f"Learning path: {joined}",
            description=f"A curriculum tailored to mastering {joined}",
            target_audience=target_audience(profile).value,
            estimated_duration=sum(node.estimated_hours for node in nodes),
            difficulty=path_difficulty(nodes),
            nodes=nodes,
            prerequisites=self._external_prerequisites(nodes),
            outcomes=list(target_skills),
            created_by="system",
            created_at=now,
            updated_at=now,
            tags=self._target_tags(target_skills),
        )
        logger.info(
            "Synthesized path %s for %s: %d nodes, %.0fh, %s",
            path.id,
            profile.user_id,
            len(nodes),
            path.estimated_duration,
            path.difficulty.value,
        )
        return path

    # -- helpers -------------------------------------------------------------

    def _gap_sequence(self, gap: SkillGap) -> list[str]:
        path = self._engine.shortest_path(gap.from_skill, gap.to_skill)
        if path or gap.from_skill != BEGINNER_BASELINE:
            return path
        target = self._engine.find_node_by_label(gap.to_skill)
        if target is None:
            return []
        return self._prerequisite_closure(target.id)

    def _prerequisite_closure(self, skill_id: str) -> list[str]:
        """*skill_id* preceded by every transitive prerequisite, each once."""
        seen = {skill_id}
        closure: list[str] = []
        stack = [skill_id]
        while stack:
            current = stack.pop()
            closure.append(current)
            for prereq in self._engine.prerequisites_of(current):
                if prereq not in seen:
                    seen.add(prereq)
                    stack.append(prereq)
        closure.reverse()
        return closure

    def _build_node(self, tech: TechNode) -> LearningNode:
        return LearningNode(
            id=self._next_id(),
            skill_id=tech.id,
            title=f"Learn {tech.label}",
            description=tech.description,
            type=learning_node_type(tech.category),
            estimated_hours=DIFFICULTY_HOURS[tech.learning_curve],
            difficulty=tech.learning_curve,
            prerequisites=self._engine.prerequisites_of(tech.id),
        )

    def _external_prerequisites(self, nodes: list[LearningNode]) -> list[str]:
        in_path = {node.skill_id for node in nodes}
        names: list[str] = []
        for node in nodes:
            for prereq in node.prerequisites:
                if prereq in in_path:
                    continue
                tech = self._engine.store.get_node(prereq)
                if tech is not None and tech.label not in names:
                    names.append(tech.label)
        return names

    def _target_tags(self, target_skills: list[str]) -> list[str]:
        tags: list[str] = []
        for skill in target_skills:
            node = self._engine.find_node_by_label(skill)
            if node is None:
                continue
            for tag in node.tags:
                if tag not in tags:
                    tags.append(tag)
        return tags
