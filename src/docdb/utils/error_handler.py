"""
Error Handler Module for the Document Store Facade

This module defines the facade's error categories and the context manager
that every driver call runs inside. Driver errors without a category of
their own are forwarded unchanged.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import BulkWriteError, DuplicateKeyError

logger = logging.getLogger(__name__)

# Server error codes reported for unique index violations
DUPLICATE_KEY_CODES = frozenset({11000, 11001, 12582})


class DocumentStoreError(Exception):
    """Base exception for errors raised by the facade itself"""

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        operation: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.collection = collection
        self.operation = operation
        self.error_code = error_code
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)


class DuplicateEntryError(DocumentStoreError):
    """A write was rejected by a unique index"""

    def __init__(self, message: str = "duplicate entry", **kwargs):
        super().__init__(message, error_code="DUPLICATE_ENTRY", **kwargs)


class InvalidObjectIdError(DocumentStoreError):
    """A value could not be turned into an ObjectId"""

    def __init__(self, message: str = "invalid object ID", value: Any = None, **kwargs):
        super().__init__(message, error_code="INVALID_OBJECT_ID", **kwargs)
        self.value = value


class NotFoundError(DocumentStoreError):
    """A single-document fetch matched nothing"""

    def __init__(self, message: str = "item not found", filter: Optional[dict] = None, **kwargs):
        super().__init__(message, error_code="NOT_FOUND", **kwargs)
        self.filter = filter


def is_duplicate_key_error(exc: BaseException) -> bool:
    """Return True if a driver error reports a unique index violation"""
    if isinstance(exc, DuplicateKeyError):
        return True
    if isinstance(exc, BulkWriteError):
        write_errors = exc.details.get("writeErrors", []) if exc.details else []
        return any(err.get("code") in DUPLICATE_KEY_CODES for err in write_errors)
    return False


def to_object_id(value: Any) -> ObjectId:
    """
    Convert a hex string identifier into an ObjectId.

    Args:
        value: 24 character hex string, or an ObjectId

    Returns:
        The matching ObjectId

    Raises:
        InvalidObjectIdError: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) generates a fresh id
    if value is None:
        raise InvalidObjectIdError("invalid object ID: None", value=value)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidObjectIdError(f"invalid object ID: {value!r}", value=value) from e


class DatabaseOperation:
    """
    Context manager wrapped around a single driver call.

    Duplicate key failures are re-raised as DuplicateEntryError, chained to
    the driver error. Everything else propagates untouched.
    """

    def __init__(self, operation_name: str, collection: Optional[str] = None):
        self.operation_name = operation_name
        self.collection = collection

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False

        target = f"{self.operation_name} on '{self.collection}'" if self.collection else self.operation_name

        logger.error(f"Database operation {target} failed: {exc_val}")
        logger.debug(traceback.format_exc())

        if is_duplicate_key_error(exc_val):
            raise DuplicateEntryError(
                f"duplicate entry in '{self.collection}': {exc_val}",
                collection=self.collection,
                operation=self.operation_name,
            ) from exc_val

        return False


__all__ = [
    "DUPLICATE_KEY_CODES",
    "DocumentStoreError",
    "DuplicateEntryError",
    "InvalidObjectIdError",
    "NotFoundError",
    "is_duplicate_key_error",
    "to_object_id",
    "DatabaseOperation",
]
