"""In-memory node/edge store with an undirected adjacency index."""

from __future__ import annotations

import logging
from typing import Any, Callable

from kg_learn.config import settings
from kg_learn.errors import NotFoundError
from kg_learn.events import EDGE_ADDED, NODE_ADDED, NODE_UPDATED, EventBus
from kg_learn.models import Edge, RelationType, TechNode, TechNodeData, edge_weight
from kg_learn.storage.base import BaseTechGraphStore
from kg_learn.utils import IdGenerator, utc_now_iso, uuid_id_generator

logger = logging.getLogger(__name__)


class InMemoryGraphStore(BaseTechGraphStore):
    """Authoritative in-process store for technologies and their relations.

    Notes
    -----
    - Not thread-safe; hosts with concurrent callers must serialize access.
    - Adjacency sets are dicts used as insertion-ordered sets so traversal
      order (and therefore tie-breaking between equal-length paths) is
      reproducible.
    - Edges keep their semantic direction, but the adjacency index links
      both endpoints to each other.
    """

    def __init__(
        self,
        *,
        id_generator: IdGenerator | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._next_id = id_generator or uuid_id_generator(settings.id_prefix)
        self._events = events or EventBus()
        self._nodes: dict[str, TechNode] = {}
        self._edges: dict[str, Edge] = {}
        self._adjacency: dict[str, dict[str, None]] = {}
        self._outgoing: dict[str, list[str]] = {}
        self._incoming: dict[str, list[str]] = {}

    # -- node operations -----------------------------------------------------

    def add_node(self, data: TechNodeData | dict[str, Any]) -> str:
        if not isinstance(data, TechNodeData):
            data = TechNodeData.model_validate(data)
        node_id = self._next_id()
        now = utc_now_iso()
        node = TechNode(
            **data.model_dump(),
            id=node_id,
            created_at=now,
            updated_at=now,
        )
        self._nodes[node_id] = node
        self._adjacency[node_id] = {}
        self._outgoing[node_id] = []
        self._incoming[node_id] = []

        logger.debug("Tech node added: %s (%s)", node.label, node_id)
        self._events.emit(NODE_ADDED, {"id": node_id, "node": node})
        return node_id

    def get_node(self, node_id: str) -> TechNode | None:
        return self._nodes.get(node_id)

    def update_node(
        self,
        node_id: str,
        *,
        popularity: float | None = None,
        description: str | None = None,
    ) -> TechNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise NotFoundError("node", node_id)

        changes: dict[str, Any] = {}
        if popularity is not None:
            changes["popularity"] = popularity
        if description is not None:
            changes["description"] = description
        if not changes:
            return node

        # Re-validate so popularity bounds still hold.
        updated = TechNode.model_validate(
            {**node.model_dump(), **changes, "updated_at": utc_now_iso()}
        )
        self._nodes[node_id] = updated

        logger.debug("Tech node updated: %s %s", node_id, sorted(changes))
        self._events.emit(NODE_UPDATED, {"id": node_id, "node": updated})
        return updated

    def find_node_by_label(self, label: str) -> TechNode | None:
        for node in self._nodes.values():
            if node.label == label:
                return node
        return None

    def nodes(self) -> list[TechNode]:
        return list(self._nodes.values())

    # -- edge operations -----------------------------------------------------

    def add_edge(self, from_id: str, to_id: str, rel_type: RelationType | str) -> str:
        rel = RelationType(rel_type)
        if from_id not in self._nodes:
            raise NotFoundError("node", from_id)
        if to_id not in self._nodes:
            raise NotFoundError("node", to_id)

        edge_id = self._next_id()
        edge = Edge(
            id=edge_id,
            source=from_id,
            target=to_id,
            type=rel,
            weight=edge_weight(rel),
        )
        self._edges[edge_id] = edge
        self._outgoing[from_id].append(edge_id)
        self._incoming[to_id].append(edge_id)
        self._adjacency[from_id][to_id] = None
        self._adjacency[to_id][from_id] = None

        logger.debug("Relation added: %s -[%s]-> %s", from_id, rel.value, to_id)
        self._events.emit(EDGE_ADDED, {"id": edge_id, "edge": edge})
        return edge_id

    def get_edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def outgoing_edges(self, node_id: str) -> list[Edge]:
        return [self._edges[eid] for eid in self._outgoing.get(node_id, ())]

    def incoming_edges(self, node_id: str) -> list[Edge]:
        return [self._edges[eid] for eid in self._incoming.get(node_id, ())]

    # -- adjacency -----------------------------------------------------------

    def neighbors(self, node_id: str) -> list[str]:
        return list(self._adjacency.get(node_id, ()))

    # -- events --------------------------------------------------------------

    def subscribe(
        self, kind: str, handler: Callable[[dict[str, Any]], None]
    ) -> Callable[[], None]:
        return self._events.subscribe(kind, handler)

    # -- stats ---------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)
