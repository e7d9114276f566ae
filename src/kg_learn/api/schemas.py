"""Pydantic request/response schemas for API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from kg_learn.models import RelationType, TechNode, UserProfile


# --- Graph schemas ---

class IdResponse(BaseModel):
    id: str


class NodeUpdateRequest(BaseModel):
    popularity: float | None = Field(default=None, ge=0.0, le=100.0)
    description: str | None = None


class EdgeCreateRequest(BaseModel):
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    type: RelationType


class ShortestPathResponse(BaseModel):
    start: str
    end: str
    path: list[str]
    nodes: list[TechNode] = Field(default_factory=list)


# --- Learning path schemas ---

class SynthesizeRequest(BaseModel):
    profile: UserProfile = Field(default_factory=UserProfile)
    target_skills: list[str] = Field(min_length=1)
    store: bool = False


class ProgressUpdateRequest(BaseModel):
    percent: float


class ProgressResponse(BaseModel):
    user_id: str
    path_id: str
    progress: float
    completed_nodes: list[str] = Field(default_factory=list)
