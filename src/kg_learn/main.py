"""CLI entry point — query the default catalog or run the API server.

Usage::

    kg-learn shortest React JavaScript
    kg-learn related JavaScript --depth 1
    kg-learn synthesize React NestJS --skill JavaScript=intermediate
    kg-learn serve --port 8000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from kg_learn.config import settings
from kg_learn.models import SkillLevel, UserProfile, UserSkill

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _print_json(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def _parse_skill(raw: str) -> UserSkill:
    """``NAME=LEVEL`` (level defaults to beginner when omitted)."""
    name, _, level = raw.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"invalid skill {raw!r}")
    try:
        return UserSkill(name=name, level=SkillLevel(level.strip().lower() or "beginner"))
    except ValueError as exc:
        choices = ", ".join(level.value for level in SkillLevel)
        raise argparse.ArgumentTypeError(
            f"invalid level in {raw!r} (choose from: {choices})"
        ) from exc


def _load_service():
    from kg_learn.api.service import KnowledgeService

    if not settings.seed_catalog:
        logger.warning("KG_SEED_CATALOG is off; queries run against an empty catalog")
        return KnowledgeService()
    return KnowledgeService.with_default_catalog()


def _shortest(start: str, end: str) -> None:
    service = _load_service()
    path = service.shortest_path(start, end)
    labels = [service.get_node(node_id).label for node_id in path]
    _print_json({"start": start, "end": end, "path": path, "labels": labels})


def _related(label: str, depth: int) -> None:
    service = _load_service()
    node = service.engine.find_node_by_label(label)
    if node is None:
        print(f"Unknown technology: {label}", file=sys.stderr)
        sys.exit(1)
    related = service.related_technologies(node.id, depth)
    _print_json([
        {"label": tech.label, "category": tech.category.value, "popularity": tech.popularity}
        for tech in related
    ])


def _synthesize(targets: list[str], skills: list[UserSkill], user_id: str) -> None:
    service = _load_service()
    profile = UserProfile(user_id=user_id, skills=skills)
    path = service.synthesize_learning_path(profile, targets)
    _print_json(path.model_dump(mode="json"))


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="kg-learn",
        description="Technology knowledge graph and learning-path synthesis",
    )
    sub = parser.add_subparsers(dest="command")

    # shortest
    short_p = sub.add_parser("shortest", help="Shortest relation path between two technologies")
    short_p.add_argument("start", help="Start technology label")
    short_p.add_argument("end", help="End technology label")

    # related
    rel_p = sub.add_parser("related", help="Technologies near a given one")
    rel_p.add_argument("label", help="Technology label")
    rel_p.add_argument(
        "--depth",
        type=int,
        default=settings.related_depth,
        help=f"Maximum hops (default: {settings.related_depth})",
    )

    # synthesize
    syn_p = sub.add_parser("synthesize", help="Synthesize a learning path")
    syn_p.add_argument("targets", nargs="+", help="Target skill labels")
    syn_p.add_argument(
        "--skill",
        action="append",
        default=[],
        type=_parse_skill,
        help="Known skill as NAME=LEVEL (repeatable)",
    )
    syn_p.add_argument("--user", default="cli", help="Learner id")

    # serve
    serve_p = sub.add_parser("serve", help="Run FastAPI backend server")
    serve_p.add_argument(
        "--host",
        default=settings.api_host,
        help=f"Host to bind (default: {settings.api_host})",
    )
    serve_p.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"Port to bind (default: {settings.api_port})",
    )

    args = parser.parse_args()

    if args.command == "shortest":
        _shortest(args.start, args.end)
    elif args.command == "related":
        _related(args.label, args.depth)
    elif args.command == "synthesize":
        _synthesize(args.targets, args.skill, args.user)
    elif args.command == "serve":
        import uvicorn
        uvicorn.run(
            "kg_learn.asgi:app",
            host=args.host,
            port=args.port,
            reload=False,
        )
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
