"""ASGI entrypoint: ``uvicorn kg_learn.asgi:app`` or the ``kg-learn-api`` script.

The service (and the default catalog, when ``KG_SEED_CATALOG`` is on) is
built by the app's lifespan, so importing this module is cheap.
"""

from __future__ import annotations

import logging

import uvicorn

from kg_learn.api.app import create_app
from kg_learn.config import settings

logger = logging.getLogger(__name__)

app = create_app()


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    logger.info(
        "Serving kg-learn API on %s:%d (seed_catalog=%s)",
        settings.api_host,
        settings.api_port,
        settings.seed_catalog,
    )
    uvicorn.run(
        "kg_learn.asgi:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
