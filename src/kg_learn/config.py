"""Configuration management — loads .env and exposes a Settings singleton."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (two levels up from this file)
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(_PROJECT_ROOT / ".env")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env(key: str, default: str = "") -> str:
    return os.getenv(key, default)


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Invalid integer for %s=%r, using default %d", key, raw, default,
        )
        return default


def _bool_env(key: str, default: bool) -> bool:
    raw = os.getenv(key, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    logging.getLogger(__name__).warning(
        "Invalid boolean for %s=%r, using default %s", key, raw, default,
    )
    return default


@dataclass(frozen=True)
class Settings:
    # Graph queries
    related_depth: int = field(
        default_factory=lambda: _int_env("KG_RELATED_DEPTH", 2)
    )
    # A known skill counts as "close" when the shortest path to the target
    # has at most this many nodes.
    closest_skill_max_nodes: int = field(
        default_factory=lambda: _int_env("KG_CLOSEST_SKILL_MAX_NODES", 3)
    )

    # Learning-path repository
    recommend_limit: int = field(
        default_factory=lambda: _int_env("KG_RECOMMEND_LIMIT", 5)
    )
    popular_tags_limit: int = field(
        default_factory=lambda: _int_env("KG_POPULAR_TAGS_LIMIT", 10)
    )

    # Identifiers
    id_prefix: str = field(default_factory=lambda: _env("KG_ID_PREFIX", "kg"))

    # Catalog seeding for the app / CLI
    seed_catalog: bool = field(
        default_factory=lambda: _bool_env("KG_SEED_CATALOG", True)
    )

    # Logging
    log_level: str = field(
        default_factory=lambda: _env("KG_LOG_LEVEL", "INFO").upper()
    )

    # API
    api_host: str = field(default_factory=lambda: _env("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: _int_env("API_PORT", 8000))


# Module-level singleton, shared by the app, CLI and service defaults
settings = Settings()

_logger = logging.getLogger(__name__)
if settings.closest_skill_max_nodes < 1:
    _logger.warning(
        "KG_CLOSEST_SKILL_MAX_NODES=%d disables closest-skill matching; "
        "every gap will start from the beginner baseline.",
        settings.closest_skill_max_nodes,
    )
