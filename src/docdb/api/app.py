"""
FastAPI integration for host applications

The host process owns the connection: the lifespan built here connects on
startup, publishes the facade as ``app.state.db`` and disconnects on
shutdown, after the server has stopped taking requests.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .routes import health_router
from ..config.dataclasses import MongoConfig
from ..database.mongo import MongoDB

logger = logging.getLogger(__name__)


def create_lifespan(config: Optional[MongoConfig] = None):
    """Build a lifespan handler that owns a MongoDB facade"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Connecting document store")

        try:
            db = MongoDB.from_config(config)
        except Exception as e:
            logger.error(f"Failed to initialize document store: {e}")
            raise

        app.state.db = db
        logger.info("Document store ready")

        try:
            yield
        finally:
            logger.info("Shutting down document store")
            db.disconnect()

    return lifespan


def create_app(config: Optional[MongoConfig] = None) -> FastAPI:
    """Create a FastAPI application with the document store lifespan and /health"""
    app = FastAPI(
        title="Document Store",
        lifespan=create_lifespan(config),
    )
    app.include_router(health_router)
    return app
