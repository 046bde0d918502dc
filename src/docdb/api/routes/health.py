"""
API Router for document store health checks

This module exposes a liveness endpoint backed by MongoDB.ping.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...database.mongo import MongoDB

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])

# Deadline for the ping behind /health, in seconds
HEALTH_PING_TIMEOUT = 5.0


class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str
    database: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    error: Optional[str] = None


def get_db(request: Request) -> MongoDB:
    """Return the facade the host stored on app.state.db"""
    return request.app.state.db


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: MongoDB = Depends(get_db)):
    """Ping the primary and report whether the store is reachable"""
    try:
        db.ping(timeout=HEALTH_PING_TIMEOUT)
    except Exception as e:
        logger.warning(f"Health check failed for database {db.database_name}: {e}")
        body = HealthCheckResponse(status="unhealthy", database=db.database_name, error=str(e))
        return JSONResponse(status_code=503, content=body.model_dump())

    return HealthCheckResponse(status="healthy", database=db.database_name)
