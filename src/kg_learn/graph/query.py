"""Graph queries over the technology store — shortest paths, neighbourhoods, search."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

from pydantic import ValidationError

from kg_learn.config import settings
from kg_learn.models import (
    GraphExport,
    GraphMetadata,
    NodeFilters,
    RelationType,
    TechCategory,
    TechNode,
)
from kg_learn.storage.base import BaseTechGraphStore
from kg_learn.utils import matches_text

logger = logging.getLogger(__name__)

GRAPH_EXPORT_VERSION = "1.0.0"


def coerce_node_filters(filters: NodeFilters | dict[str, Any] | None) -> NodeFilters:
    """Validate *filters*; anything malformed degrades to "no filter"."""
    if filters is None:
        return NodeFilters()
    if isinstance(filters, NodeFilters):
        return filters
    try:
        return NodeFilters.model_validate(filters)
    except ValidationError as exc:
        logger.warning("Ignoring malformed node filters %r: %s", filters, exc)
        return NodeFilters()


class GraphQueryEngine:
    """Read-only traversal and lookup over a :class:`BaseTechGraphStore`."""

    def __init__(self, store: BaseTechGraphStore) -> None:
        self._store = store

    @property
    def store(self) -> BaseTechGraphStore:
        return self._store

    # -- paths ---------------------------------------------------------------

    def shortest_path(self, start_label: str, end_label: str) -> list[str]:
        """Unweighted shortest path between two technologies, as node ids.

        Returns ``[]`` when either label is unknown and ``[start_id]`` when
        both labels name the same node.

        When the graph holds no connection between the two, the result is the
        single-element fallback ``[end_id]``.  That is indistinguishable from
        a zero-length path by length alone; callers that need to know whether
        the endpoints are connected must compare the first id with the start.
        """
        start = self._store.find_node_by_label(start_label)
        end = self._store.find_node_by_label(end_label)
        if start is None or end is None:
            return []
        if start.id == end.id:
            return [start.id]

        queue: deque[tuple[str, list[str]]] = deque([(start.id, [start.id])])
        visited = {start.id}

        while queue:
            node_id, path = queue.popleft()
            for neighbor_id in self._store.neighbors(node_id):
                if neighbor_id == end.id:
                    return [*path, neighbor_id]
                if neighbor_id not in visited:
                    visited.add(neighbor_id)
                    queue.append((neighbor_id, [*path, neighbor_id]))

        logger.debug(
            "No path between %r and %r; falling back to [target]", start_label, end_label
        )
        return [end.id]

    def related_technologies(self, node_id: str, depth: int | None = None) -> list[TechNode]:
        """Technologies within *depth* hops of *node_id*, most popular first.

        Depth-first over the undirected adjacency with an explicit stack; the
        seed itself is excluded and each node is reported once.
        """
        if depth is None:
            depth = settings.related_depth
        if self._store.get_node(node_id) is None:
            return []

        visited: set[str] = set()
        related: list[TechNode] = []
        stack: list[tuple[str, int]] = [(node_id, 0)]

        while stack:
            current, current_depth = stack.pop()
            if current_depth > depth or current in visited:
                continue
            visited.add(current)

            if current != node_id:
                node = self._store.get_node(current)
                if node is not None:
                    related.append(node)

            # Reversed so the first neighbour is explored first.
            for neighbor_id in reversed(self._store.neighbors(current)):
                if neighbor_id not in visited:
                    stack.append((neighbor_id, current_depth + 1))

        related.sort(key=lambda node: node.popularity, reverse=True)
        return related

    def prerequisites_of(self, node_id: str) -> list[str]:
        """Skill ids that must be learned before *node_id*.

        ``A depends-on B`` makes B a prerequisite of A; ``A prerequisite B``
        makes A a prerequisite of B.
        """
        prerequisites: list[str] = []
        for edge in self._store.outgoing_edges(node_id):
            if edge.type == RelationType.DEPENDS_ON and edge.target not in prerequisites:
                prerequisites.append(edge.target)
        for edge in self._store.incoming_edges(node_id):
            if edge.type == RelationType.PREREQUISITE and edge.source not in prerequisites:
                prerequisites.append(edge.source)
        return prerequisites

    # -- lookup --------------------------------------------------------------

    def find_node_by_label(self, label: str) -> TechNode | None:
        return self._store.find_node_by_label(label)

    def search_nodes(
        self,
        query: str = "",
        filters: NodeFilters | dict[str, Any] | None = None,
    ) -> list[TechNode]:
        opts = coerce_node_filters(filters)
        query = query.strip()

        results = [
            node
            for node in self._store.nodes()
            if matches_text(query, node.label, node.description, tags=node.tags)
        ]
        if opts.category is not None:
            results = [node for node in results if node.category == opts.category]
        if opts.difficulty is not None:
            results = [node for node in results if node.learning_curve == opts.difficulty]
        if opts.min_popularity is not None:
            results = [node for node in results if node.popularity >= opts.min_popularity]

        results.sort(key=lambda node: node.popularity, reverse=True)
        return results

    def export_graph(self) -> GraphExport:
        nodes = self._store.nodes()
        edges = self._store.edges()

        categories: list[TechCategory] = []
        for node in nodes:
            if node.category not in categories:
                categories.append(node.category)

        return GraphExport(
            nodes=nodes,
            edges=edges,
            metadata=GraphMetadata(
                version=GRAPH_EXPORT_VERSION,
                node_count=len(nodes),
                edge_count=len(edges),
                categories=categories,
            ),
        )
