"""FastAPI application exposing the knowledge graph and learning-path APIs."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware

from kg_learn.api.schemas import (
    EdgeCreateRequest,
    IdResponse,
    NodeUpdateRequest,
    ProgressResponse,
    ProgressUpdateRequest,
    ShortestPathResponse,
    SynthesizeRequest,
)
from kg_learn.api.service import KnowledgeService
from kg_learn.config import settings
from kg_learn.errors import NotFoundError
from kg_learn.models import (
    Difficulty,
    GraphExport,
    LearningPath,
    NodeFilters,
    PathFilters,
    PathStats,
    TagCount,
    TechCategory,
    TechNode,
    TechNodeData,
)

logger = logging.getLogger(__name__)


@dataclass
class AppRuntime:
    service: KnowledgeService


def _runtime_from_request(request: Request) -> AppRuntime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="service is still starting",
        )
    return runtime


def _build_service() -> KnowledgeService:
    if settings.seed_catalog:
        return KnowledgeService.with_default_catalog()
    return KnowledgeService()


def create_app(service: KnowledgeService | None = None) -> FastAPI:
    """Build the app.  A ready *service* is installed immediately; otherwise
    one is constructed on startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "runtime", None) is None:
            app.state.runtime = AppRuntime(service=_build_service())
        svc = app.state.runtime.service
        logger.info(
            "FastAPI runtime ready (nodes=%d, edges=%d, paths=%d)",
            svc.store.node_count,
            svc.store.edge_count,
            len(svc.repository.all_paths()),
        )
        try:
            yield
        finally:
            app.state.runtime = None

    app = FastAPI(
        title="kg-learn API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.runtime = AppRuntime(service=service) if service is not None else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # --- Graph endpoints ---

    @app.post(
        "/api/v1/graph/nodes",
        response_model=IdResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_node(payload: TechNodeData, request: Request) -> IdResponse:
        runtime = _runtime_from_request(request)
        return IdResponse(id=runtime.service.add_node(payload))

    @app.get("/api/v1/graph/nodes/{node_id}", response_model=TechNode)
    async def get_node(node_id: str, request: Request) -> TechNode:
        runtime = _runtime_from_request(request)
        node = runtime.service.get_node(node_id)
        if node is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="node not found")
        return node

    @app.patch("/api/v1/graph/nodes/{node_id}", response_model=TechNode)
    async def update_node(node_id: str, payload: NodeUpdateRequest, request: Request) -> TechNode:
        runtime = _runtime_from_request(request)
        try:
            return runtime.service.update_node(
                node_id,
                popularity=payload.popularity,
                description=payload.description,
            )
        except NotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @app.post(
        "/api/v1/graph/edges",
        response_model=IdResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_edge(payload: EdgeCreateRequest, request: Request) -> IdResponse:
        runtime = _runtime_from_request(request)
        try:
            edge_id = runtime.service.add_edge(payload.source, payload.target, payload.type)
        except NotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return IdResponse(id=edge_id)

    @app.get("/api/v1/graph/search", response_model=list[TechNode])
    async def search_nodes(
        request: Request,
        q: str = Query(default=""),
        category: TechCategory | None = Query(default=None),
        difficulty: Difficulty | None = Query(default=None),
        min_popularity: float | None = Query(default=None, ge=0.0, le=100.0),
    ) -> list[TechNode]:
        runtime = _runtime_from_request(request)
        filters = NodeFilters(
            category=category,
            difficulty=difficulty,
            min_popularity=min_popularity,
        )
        return runtime.service.search_nodes(q, filters)

    @app.get("/api/v1/graph/shortest-path", response_model=ShortestPathResponse)
    async def shortest_path(
        request: Request,
        start: str = Query(min_length=1),
        end: str = Query(min_length=1),
    ) -> ShortestPathResponse:
        runtime = _runtime_from_request(request)
        path = runtime.service.shortest_path(start, end)
        nodes = [node for node in map(runtime.service.get_node, path) if node is not None]
        return ShortestPathResponse(start=start, end=end, path=path, nodes=nodes)

    @app.get("/api/v1/graph/nodes/{node_id}/related", response_model=list[TechNode])
    async def related_technologies(
        node_id: str,
        request: Request,
        depth: int = Query(default=settings.related_depth, ge=1, le=6),
    ) -> list[TechNode]:
        runtime = _runtime_from_request(request)
        return runtime.service.related_technologies(node_id, depth)

    @app.get("/api/v1/graph/export", response_model=GraphExport)
    async def export_graph(request: Request) -> GraphExport:
        runtime = _runtime_from_request(request)
        return runtime.service.export_graph()

    # --- Learning path endpoints ---

    @app.post(
        "/api/v1/paths/synthesize",
        response_model=LearningPath,
        status_code=status.HTTP_201_CREATED,
    )
    async def synthesize_path(payload: SynthesizeRequest, request: Request) -> LearningPath:
        runtime = _runtime_from_request(request)
        if payload.store:
            return runtime.service.synthesize_and_store(payload.profile, payload.target_skills)
        return runtime.service.synthesize_learning_path(payload.profile, payload.target_skills)

    @app.post(
        "/api/v1/paths",
        response_model=IdResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_path(payload: LearningPath, request: Request) -> IdResponse:
        runtime = _runtime_from_request(request)
        runtime.service.add_path(payload)
        return IdResponse(id=payload.id)

    @app.get("/api/v1/paths", response_model=list[LearningPath])
    async def search_paths(
        request: Request,
        q: str = Query(default=""),
        difficulty: list[Difficulty] = Query(default=[]),
        tags: list[str] = Query(default=[]),
        target_audience: str | None = Query(default=None),
    ) -> list[LearningPath]:
        runtime = _runtime_from_request(request)
        filters = PathFilters(
            difficulty=difficulty,
            tags=tags,
            target_audience=target_audience,
        )
        return runtime.service.search_paths(q, filters)

    @app.get("/api/v1/paths/stats", response_model=PathStats)
    async def path_stats(request: Request) -> PathStats:
        runtime = _runtime_from_request(request)
        return runtime.service.get_path_stats()

    @app.get("/api/v1/paths/tags", response_model=list[TagCount])
    async def popular_tags(
        request: Request,
        limit: int = Query(default=settings.popular_tags_limit, ge=1, le=100),
    ) -> list[TagCount]:
        runtime = _runtime_from_request(request)
        return runtime.service.get_popular_tags(limit)

    @app.get("/api/v1/paths/{path_id}", response_model=LearningPath)
    async def get_path(path_id: str, request: Request) -> LearningPath:
        runtime = _runtime_from_request(request)
        path = runtime.service.get_path(path_id)
        if path is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="path not found")
        return path

    # --- Learner endpoints ---

    def _progress_response(service: KnowledgeService, user_id: str, path_id: str) -> ProgressResponse:
        return ProgressResponse(
            user_id=user_id,
            path_id=path_id,
            progress=service.get_user_progress(user_id, path_id),
            completed_nodes=sorted(service.repository.completed_nodes(user_id, path_id)),
        )

    @app.get("/api/v1/users/{user_id}/recommendations", response_model=list[LearningPath])
    async def recommended_paths(
        user_id: str,
        request: Request,
        limit: int = Query(default=settings.recommend_limit, ge=1, le=100),
    ) -> list[LearningPath]:
        runtime = _runtime_from_request(request)
        return runtime.service.get_recommended_paths(user_id, limit)

    @app.get(
        "/api/v1/users/{user_id}/paths/{path_id}/progress",
        response_model=ProgressResponse,
    )
    async def get_progress(user_id: str, path_id: str, request: Request) -> ProgressResponse:
        runtime = _runtime_from_request(request)
        return _progress_response(runtime.service, user_id, path_id)

    @app.put(
        "/api/v1/users/{user_id}/paths/{path_id}/progress",
        response_model=ProgressResponse,
    )
    async def put_progress(
        user_id: str,
        path_id: str,
        payload: ProgressUpdateRequest,
        request: Request,
    ) -> ProgressResponse:
        runtime = _runtime_from_request(request)
        runtime.service.update_user_progress(user_id, path_id, payload.percent)
        return _progress_response(runtime.service, user_id, path_id)

    @app.post(
        "/api/v1/users/{user_id}/paths/{path_id}/nodes/{node_id}/complete",
        response_model=ProgressResponse,
    )
    async def complete_node(
        user_id: str,
        path_id: str,
        node_id: str,
        request: Request,
    ) -> ProgressResponse:
        runtime = _runtime_from_request(request)
        runtime.service.mark_node_completed(user_id, path_id, node_id)
        return _progress_response(runtime.service, user_id, path_id)

    return app
