"""Custom exceptions for knowledge graph operations."""

from __future__ import annotations


class KnowledgeGraphError(Exception):
    """Base exception for knowledge graph operations."""


class NotFoundError(KnowledgeGraphError, KeyError):
    """Raised when a structural operation references an unknown id."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' not found")

    def __str__(self) -> str:
        return self.args[0]
