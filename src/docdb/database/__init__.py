"""
Database Package for the Document Store Facade

This package provides the abstract document store interface and its
MongoDB implementation.
"""

from .abstract import Document, DocumentStore
from .mongo import MongoDB

__all__ = [
    "Document",
    "DocumentStore",
    "MongoDB",
]
