"""
Document Store Facade Package

A thin data-access layer over MongoDB. It provides:
- save / fetch / count / update / delete pass-through methods
- per-call deadlines and session pass-through
- error categories for duplicate keys, invalid ids and missing items
- optional FastAPI lifespan and health check wiring

The package is organized into logical modules:
- docdb.database: the DocumentStore interface and the MongoDB facade
- docdb.config: configuration management
- docdb.utils: error handling helpers
- docdb.api: FastAPI integration
"""

from .database import DocumentStore, MongoDB
from .utils import (
    DocumentStoreError,
    DuplicateEntryError,
    InvalidObjectIdError,
    NotFoundError,
    to_object_id,
)

__version__ = "1.0.0"

__all__ = [
    "DocumentStore",
    "MongoDB",
    "DocumentStoreError",
    "DuplicateEntryError",
    "InvalidObjectIdError",
    "NotFoundError",
    "to_object_id",
]
