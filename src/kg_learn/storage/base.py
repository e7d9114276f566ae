"""Abstract base class for technology graph storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from kg_learn.models import Edge, RelationType, TechNode, TechNodeData


class BaseTechGraphStore(ABC):
    """Interface for the node/edge store behind the query engine.

    Implementations own their maps exclusively; all mutation goes through
    ``add_node`` / ``add_edge`` / ``update_node``.
    """

    # -- node operations -----------------------------------------------------

    @abstractmethod
    def add_node(self, data: TechNodeData | dict[str, Any]) -> str:
        """Register a technology and return its freshly assigned id."""

    @abstractmethod
    def get_node(self, node_id: str) -> TechNode | None: ...

    @abstractmethod
    def update_node(
        self,
        node_id: str,
        *,
        popularity: float | None = None,
        description: str | None = None,
    ) -> TechNode: ...

    @abstractmethod
    def find_node_by_label(self, label: str) -> TechNode | None:
        """First node whose label equals *label*, in insertion order."""

    @abstractmethod
    def nodes(self) -> list[TechNode]: ...

    # -- edge operations -----------------------------------------------------

    @abstractmethod
    def add_edge(self, from_id: str, to_id: str, rel_type: RelationType | str) -> str:
        """Insert a typed edge; raises ``NotFoundError`` for a missing endpoint."""

    @abstractmethod
    def get_edge(self, edge_id: str) -> Edge | None: ...

    @abstractmethod
    def edges(self) -> list[Edge]: ...

    @abstractmethod
    def outgoing_edges(self, node_id: str) -> list[Edge]: ...

    @abstractmethod
    def incoming_edges(self, node_id: str) -> list[Edge]: ...

    # -- adjacency -----------------------------------------------------------

    @abstractmethod
    def neighbors(self, node_id: str) -> list[str]:
        """Undirected neighbours of *node_id* in insertion order."""

    # -- events --------------------------------------------------------------

    @abstractmethod
    def subscribe(
        self, kind: str, handler: Callable[[dict[str, Any]], None]
    ) -> Callable[[], None]: ...

    # -- stats ---------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self.nodes())

    @property
    def edge_count(self) -> int:
        return len(self.edges())
