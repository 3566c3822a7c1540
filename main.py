"""
Connector host — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router as connectors_router
from config.settings import config
from connectors.registry import ConnectorRegistry

logging.basicConfig(
    level=config.effective_log_level(),
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "urllib3"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(registry: ConnectorRegistry | None = None) -> FastAPI:
    app = FastAPI(
        title=config.app_title,
        version="1.0.0",
        description="Host for data-source connectors.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    registry = registry or ConnectorRegistry()
    app.state.connector_registry = registry
    if config.connector_modules:
        logger.info("Loading connectors…")
        registry.load_modules(config.connector_modules)

    # connectors register their own endpoints before the generic routes
    registry.initialize(app)
    app.include_router(connectors_router, prefix=config.api_prefix)

    logger.info(
        "Connector host ready — %d connectors: %s",
        len(registry.list_ids()),
        ", ".join(str(cid) for cid in registry.list_ids()) or "none",
    )
    return app


if __name__ == "__main__":
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
    )
