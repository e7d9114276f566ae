"""Learning-path storage, search, recommendation and per-user progress."""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Any

from pydantic import ValidationError

from kg_learn.config import settings
from kg_learn.models import (
    Difficulty,
    LearningPath,
    PathFilters,
    PathStats,
    TagCount,
    difficulty_rank,
)
from kg_learn.utils import contains_ci, matches_text

logger = logging.getLogger(__name__)

COMPLETE = 100.0


def coerce_path_filters(filters: PathFilters | dict[str, Any] | None) -> PathFilters:
    """Validate *filters*; anything malformed degrades to "no filter"."""
    if filters is None:
        return PathFilters()
    if isinstance(filters, PathFilters):
        return filters
    try:
        return PathFilters.model_validate(filters)
    except ValidationError as exc:
        logger.warning("Ignoring malformed path filters %r: %s", filters, exc)
        return PathFilters()


def clamp_percent(value: float) -> float:
    return max(0.0, min(COMPLETE, float(value)))


class LearningPathRepository:
    """In-memory catalogue of learning paths plus progress records.

    Progress is keyed by ``(user_id, path_id)``.  ``update_user_progress``
    only clamps; it does not stop a caller from lowering a value.
    ``mark_node_completed`` only ever grows the completed set, so progress
    driven through it never decreases.
    """

    def __init__(self) -> None:
        self._paths: dict[str, LearningPath] = {}
        self._by_tag: dict[str, list[str]] = {}
        self._by_difficulty: dict[Difficulty, list[str]] = {}
        self._progress: dict[str, dict[str, float]] = {}
        self._completed: dict[str, dict[str, set[str]]] = {}

    # -- catalogue -----------------------------------------------------------

    def add_path(self, path: LearningPath) -> None:
        previous = self._paths.get(path.id)
        if previous is not None:
            self._unindex(previous)
        self._paths[path.id] = path
        for tag in path.tags:
            self._by_tag.setdefault(tag, []).append(path.id)
        self._by_difficulty.setdefault(path.difficulty, []).append(path.id)
        logger.debug("Learning path stored: %s (%d nodes)", path.id, len(path.nodes))

    def _unindex(self, path: LearningPath) -> None:
        for tag in path.tags:
            ids = self._by_tag.get(tag, [])
            if path.id in ids:
                ids.remove(path.id)
        ids = self._by_difficulty.get(path.difficulty, [])
        if path.id in ids:
            ids.remove(path.id)

    def get_path(self, path_id: str) -> LearningPath | None:
        return self._paths.get(path_id)

    def all_paths(self) -> list[LearningPath]:
        return list(self._paths.values())

    def paths_with_tag(self, tag: str) -> list[LearningPath]:
        return [self._paths[pid] for pid in self._by_tag.get(tag, ())]

    def paths_with_difficulty(self, difficulty: Difficulty) -> list[LearningPath]:
        return [self._paths[pid] for pid in self._by_difficulty.get(difficulty, ())]

    # -- queries -------------------------------------------------------------

    def search_paths(
        self,
        query: str = "",
        filters: PathFilters | dict[str, Any] | None = None,
    ) -> list[LearningPath]:
        opts = coerce_path_filters(filters)
        query = query.strip()

        results = [
            path
            for path in self._paths.values()
            if matches_text(query, path.title, path.description, tags=path.tags)
        ]
        if opts.difficulty:
            results = [path for path in results if path.difficulty in opts.difficulty]
        if opts.tags:
            wanted = set(opts.tags)
            results = [path for path in results if wanted.intersection(path.tags)]
        if opts.target_audience:
            results = [
                path for path in results
                if contains_ci(path.target_audience, opts.target_audience)
            ]
        return results

    def get_recommended_paths(self, user_id: str, limit: int | None = None) -> list[LearningPath]:
        """Unfinished paths for *user_id*, easiest first."""
        if limit is None:
            limit = settings.recommend_limit
        progress = self._progress.get(user_id, {})
        candidates = [
            path for path in self._paths.values()
            if progress.get(path.id, 0.0) < COMPLETE
        ]
        candidates.sort(key=lambda path: difficulty_rank(path.difficulty))
        return candidates[: max(limit, 0)]

    # -- progress ------------------------------------------------------------

    def update_user_progress(self, user_id: str, path_id: str, percent: float) -> float:
        value = clamp_percent(percent)
        self._progress.setdefault(user_id, {})[path_id] = value
        return value

    def get_user_progress(self, user_id: str, path_id: str) -> float:
        return self._progress.get(user_id, {}).get(path_id, 0.0)

    def get_all_user_progress(self, user_id: str) -> dict[str, float]:
        return dict(self._progress.get(user_id, {}))

    def completed_nodes(self, user_id: str, path_id: str) -> set[str]:
        return set(self._completed.get(user_id, {}).get(path_id, ()))

    def mark_node_completed(self, user_id: str, path_id: str, node_id: str) -> None:
        path = self._paths.get(path_id)
        if path is None or path.find_node(node_id) is None:
            logger.debug("Ignoring completion of %s in %s for %s", node_id, path_id, user_id)
            return

        completed = self._completed.setdefault(user_id, {}).setdefault(path_id, set())
        completed.add(node_id)
        self.update_user_progress(user_id, path_id, COMPLETE * len(completed) / len(path.nodes))

    # -- aggregates ----------------------------------------------------------

    def get_path_stats(self) -> PathStats:
        paths = list(self._paths.values())
        by_difficulty: dict[str, int] = {}
        by_category: dict[str, int] = {}
        for path in paths:
            key = path.difficulty.value
            by_difficulty[key] = by_difficulty.get(key, 0) + 1
            for tag in path.tags:
                by_category[tag] = by_category.get(tag, 0) + 1

        average = 0
        if paths:
            total = sum(path.estimated_duration for path in paths)
            # Half-up, so 112.5 reports as 113.
            average = math.floor(total / len(paths) + 0.5)

        return PathStats(
            total_paths=len(paths),
            paths_by_difficulty=by_difficulty,
            paths_by_category=by_category,
            average_duration=average,
        )

    def get_popular_tags(self, limit: int | None = None) -> list[TagCount]:
        if limit is None:
            limit = settings.popular_tags_limit
        counts = Counter(tag for path in self._paths.values() for tag in path.tags)
        # Counter.most_common keeps first-seen order among equal counts.
        return [TagCount(tag=tag, count=count) for tag, count in counts.most_common(max(limit, 0))]
