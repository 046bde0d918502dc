"""
Utilities Package for the Document Store Facade

This package provides the error categories and error translation helpers.
"""

from .error_handler import (
    DocumentStoreError,
    DuplicateEntryError,
    InvalidObjectIdError,
    NotFoundError,
    DatabaseOperation,
    is_duplicate_key_error,
    to_object_id,
)

__all__ = [
    "DocumentStoreError",
    "DuplicateEntryError",
    "InvalidObjectIdError",
    "NotFoundError",
    "DatabaseOperation",
    "is_duplicate_key_error",
    "to_object_id",
]
