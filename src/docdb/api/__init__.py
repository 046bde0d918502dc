"""
API Package for the Document Store Facade

This package provides optional FastAPI wiring for host applications.
"""

from .app import create_app, create_lifespan
from .routes import health_router
from .routes.health import HealthCheckResponse

__all__ = [
    "create_app",
    "create_lifespan",
    "health_router",
    "HealthCheckResponse",
]
