import pytest
import mongomock
from unittest.mock import MagicMock

from docdb.database.mongo import MongoDB


@pytest.fixture
def mongo_client() -> mongomock.MongoClient:
    """In-process MongoDB stand-in, fresh for each test."""
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client: mongomock.MongoClient) -> MongoDB:
    """Facade over the in-process client."""
    return MongoDB(mongo_client, "testdb")


@pytest.fixture
def mock_client() -> MagicMock:
    """Driver client double for asserting on the exact calls made."""
    return MagicMock()


@pytest.fixture
def mock_collection(mock_client: MagicMock) -> MagicMock:
    """The collection every client[db][name] lookup resolves to."""
    return mock_client.__getitem__.return_value.__getitem__.return_value
