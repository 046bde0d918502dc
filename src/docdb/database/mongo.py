"""
MongoDB Document Store Facade

This module provides a thin facade over pymongo. Every method resolves the
named collection, runs exactly one driver call and converts the result into
plain Python values (string ids, integer counts, decoded documents).

All data methods take two keyword-only arguments:
    timeout: deadline in seconds for the whole call, applied with
        ``pymongo.timeout``. When it passes the driver aborts the call and
        its timeout error is raised unchanged.
    session: a ``ClientSession`` so the call can take part in a transaction.
"""

import logging
from contextlib import nullcontext
from typing import Any, List, Mapping, Optional, Sequence, Type

import pymongo
from pydantic import BaseModel
from pymongo import MongoClient, ReadPreference
from pymongo.client_session import ClientSession
from pymongo.collection import Collection

from .abstract import Document, DocumentStore
from ..config.dataclasses import MongoConfig
from ..utils.error_handler import DatabaseOperation, NotFoundError

logger = logging.getLogger(__name__)


class MongoDB(DocumentStore):
    """MongoDB connection holder and collection-level facade"""

    def __init__(self, client: MongoClient, database_name: str, operation_timeout: Optional[float] = None):
        """
        Wrap an existing client

        Args:
            client: Connected pymongo client, owned by this instance from now on
            database_name: Logical database every collection is resolved in
            operation_timeout: Deadline in seconds for calls that do not pass one
        """
        self.client = client
        self.database_name = database_name
        self.operation_timeout = operation_timeout

    @classmethod
    def connect(
        cls,
        uri: str,
        database_name: str,
        operation_timeout: Optional[float] = None,
        **client_options: Any
    ) -> "MongoDB":
        """
        Create a client for uri and check the primary answers a ping

        Raises:
            pymongo.errors.InvalidURI: If the URI is malformed
            pymongo.errors.ConfigurationError: If client options are invalid
            pymongo.errors.PyMongoError: If the store cannot be reached
        """
        client = MongoClient(uri, **client_options)
        db = cls(client, database_name, operation_timeout=operation_timeout)

        try:
            db.ping()
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB database '{database_name}': {e}")
            client.close()
            raise

        logger.info(f"Connected to MongoDB, database: {database_name}")
        return db

    @classmethod
    def from_config(cls, config: Optional[MongoConfig] = None) -> "MongoDB":
        """Connect using a MongoConfig (environment defaults when omitted)"""
        config = config or MongoConfig()
        return cls.connect(
            config.uri,
            config.database_name,
            operation_timeout=config.operation_timeout,
            **config.to_client_kwargs()
        )

    def disconnect(self) -> None:
        """Close the client; any later call on this instance fails"""
        self.client.close()
        logger.info(f"Disconnected from MongoDB, database: {self.database_name}")

    def ping(self, timeout: Optional[float] = None) -> bool:
        """Send a ping to the primary; returns True or raises the connectivity error"""
        with self._deadline(timeout):
            self.client.admin.command("ping", read_preference=ReadPreference.PRIMARY)
        return True

    def get_client(self) -> MongoClient:
        return self.client

    def get_collection(self, collection: str) -> Collection:
        return self.client[self.database_name][collection]

    def save(
        self,
        collection: str,
        document: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> str:
        """
        Insert one document

        The driver adds an ``_id`` to mutable mappings that lack one.

        Returns:
            The inserted ``_id`` as a string (hex for ObjectIds)
        """
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("save", collection):
            result = coll.insert_one(document, session=session)

        logger.debug(f"Saved document {result.inserted_id} to {collection}")
        return str(result.inserted_id)

    def save_multiple(
        self,
        collection: str,
        documents: Sequence[Mapping[str, Any]],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> List[str]:
        """
        Insert documents in order

        An ordered insert stops at the first failing document. Documents
        written before the failure stay written.

        Returns:
            The inserted ids as strings, in input order
        """
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("save_multiple", collection):
            result = coll.insert_many(documents, session=session)

        logger.debug(f"Saved {len(result.inserted_ids)} documents to {collection}")
        return [str(inserted_id) for inserted_id in result.inserted_ids]

    def get_item(
        self,
        collection: str,
        filter: Mapping[str, Any],
        excluded_fields: Optional[Mapping[str, Any]] = None,
        model: Optional[Type[BaseModel]] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> Any:
        """
        Fetch the first document matching filter

        Args:
            collection: Collection name
            filter: Query document, forwarded as-is
            excluded_fields: Projection, e.g. ``{"password": 0}``
            model: Optional pydantic model to decode the document into

        Returns:
            The document as a dict, or a model instance when model is given

        Raises:
            NotFoundError: If no document matches
        """
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("get_item", collection):
            doc = coll.find_one(filter, projection=excluded_fields or None, session=session)

        if doc is None:
            raise NotFoundError(
                f"item not found in '{collection}'",
                filter=dict(filter),
                collection=collection,
                operation="get_item",
            )

        return self._decode(doc, model)

    def get_items(
        self,
        collection: str,
        filter: Mapping[str, Any],
        limit: int = 0,
        excluded_fields: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, int]] = None,
        model: Optional[Type[BaseModel]] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> List[Any]:
        """
        Fetch documents matching filter

        Args:
            collection: Collection name
            filter: Query document, forwarded as-is
            limit: Maximum number of documents, 0 for no limit
            excluded_fields: Projection, e.g. ``{"password": 0}``
            sort: Mapping of field to direction (1 / -1); key order is sort priority
            model: Optional pydantic model to decode each document into

        Returns:
            The matching documents in sort order
        """
        coll = self.get_collection(collection)
        sort_spec = list(sort.items()) if sort else None

        with self._deadline(timeout), DatabaseOperation("get_items", collection):
            docs = list(coll.find(
                filter,
                projection=excluded_fields or None,
                sort=sort_spec,
                limit=limit,
                session=session,
            ))

        logger.debug(f"Found {len(docs)} documents in {collection}")
        return [self._decode(doc, model) for doc in docs]

    def count_items(
        self,
        collection: str,
        filter: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> int:
        """Count documents matching filter"""
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("count_items", collection):
            count = coll.count_documents(filter, session=session)

        logger.debug(f"Counted {count} documents in {collection}")
        return count

    def update_item(
        self,
        collection: str,
        match: Mapping[str, Any],
        update: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> int:
        """Apply update to the first document matching match; returns the modified count"""
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("update_item", collection):
            result = coll.update_one(match, update, session=session)

        logger.debug(f"Updated {result.modified_count} document in {collection}")
        return result.modified_count

    def update_items(
        self,
        collection: str,
        match: Mapping[str, Any],
        update: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> int:
        """Apply update to every document matching match; returns the modified count"""
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("update_items", collection):
            result = coll.update_many(match, update, session=session)

        logger.debug(f"Updated {result.modified_count} documents in {collection}")
        return result.modified_count

    def delete_item(
        self,
        collection: str,
        filter: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> int:
        """Delete the first document matching filter; returns the deleted count"""
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("delete_item", collection):
            result = coll.delete_one(filter, session=session)

        logger.debug(f"Deleted {result.deleted_count} document from {collection}")
        return result.deleted_count

    def delete_items(
        self,
        collection: str,
        filter: Mapping[str, Any],
        *,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None
    ) -> int:
        """Delete every document matching filter; returns the deleted count"""
        coll = self.get_collection(collection)

        with self._deadline(timeout), DatabaseOperation("delete_items", collection):
            result = coll.delete_many(filter, session=session)

        logger.debug(f"Deleted {result.deleted_count} documents from {collection}")
        return result.deleted_count

    def _deadline(self, timeout: Optional[float]):
        """pymongo.timeout block for this call; no-op when no deadline applies"""
        if timeout is None:
            timeout = self.operation_timeout
        if timeout is None:
            return nullcontext()
        return pymongo.timeout(timeout)

    @staticmethod
    def _decode(doc: Document, model: Optional[Type[BaseModel]]) -> Any:
        if model is None:
            return doc
        return model.model_validate(doc)
