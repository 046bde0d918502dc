"""
Tests for the MongoDB facade against an in-process store.

These exercise the observable behaviour of each operation using mongomock,
so no MongoDB server is needed.
"""

import logging

import pytest
from bson import ObjectId
from pydantic import BaseModel

from docdb.database.mongo import MongoDB
from docdb.utils.error_handler import NotFoundError, to_object_id


class User(BaseModel):
    name: str
    age: int


def _without_id(doc: dict) -> dict:
    return {k: v for k, v in doc.items() if k != "_id"}


class TestSaveAndFetch:
    """Test inserting documents and reading them back."""

    def test_save_returns_hex_id(self, db: MongoDB) -> None:
        """Test save returns the generated ObjectId as a hex string."""
        doc_id = db.save("users", {"name": "a"})

        assert isinstance(doc_id, str)
        assert ObjectId.is_valid(doc_id)

    def test_save_then_fetch_by_id_round_trips(self, db: MongoDB) -> None:
        """Test a saved record is returned unchanged when fetched by its id."""
        record = {"name": "alice", "age": 30, "tags": ["x", "y"], "address": {"city": "Hanoi"}}

        doc_id = db.save("users", dict(record))
        fetched = db.get_item("users", {"_id": to_object_id(doc_id)})

        assert str(fetched["_id"]) == doc_id
        assert _without_id(fetched) == record

    def test_insert_then_fetch_by_name(self, db: MongoDB) -> None:
        """Test the basic insert-then-query scenario."""
        db.save("users", {"name": "a"})

        results = db.get_items("users", {"name": "a"})

        assert len(results) == 1
        assert results[0]["name"] == "a"

    def test_save_keeps_caller_supplied_id(self, db: MongoDB) -> None:
        """Test a non-ObjectId _id is returned as its string form."""
        doc_id = db.save("users", {"_id": "user-1", "name": "a"})

        assert doc_id == "user-1"
        assert db.get_item("users", {"_id": "user-1"})["name"] == "a"

    def test_save_multiple_returns_ids_in_input_order(self, db: MongoDB) -> None:
        """Test save_multiple returns one id per record, order-corresponding."""
        records = [{"n": i} for i in range(5)]

        ids = db.save_multiple("numbers", records)

        assert len(ids) == 5
        for i, doc_id in enumerate(ids):
            fetched = db.get_item("numbers", {"_id": to_object_id(doc_id)})
            assert fetched["n"] == i

    def test_get_item_not_found(self, db: MongoDB) -> None:
        """Test get_item raises NotFoundError when nothing matches."""
        with pytest.raises(NotFoundError) as exc_info:
            db.get_item("users", {"name": "nobody"})

        assert exc_info.value.collection == "users"
        assert exc_info.value.filter == {"name": "nobody"}
        assert exc_info.value.error_code == "NOT_FOUND"

    def test_get_item_excluded_fields(self, db: MongoDB) -> None:
        """Test the projection removes excluded fields."""
        db.save("users", {"name": "a", "password": "secret"})

        fetched = db.get_item("users", {"name": "a"}, excluded_fields={"password": 0})

        assert "password" not in fetched
        assert fetched["name"] == "a"

    def test_get_item_decodes_into_model(self, db: MongoDB) -> None:
        """Test a pydantic model can be used as the result type."""
        db.save("users", {"name": "a", "age": 7})

        user = db.get_item("users", {"name": "a"}, excluded_fields={"_id": 0}, model=User)

        assert isinstance(user, User)
        assert user == User(name="a", age=7)


class TestGetItems:
    """Test multi-document fetches."""

    @pytest.fixture
    def people(self, db: MongoDB) -> MongoDB:
        db.save_multiple("people", [
            {"name": "carol", "age": 41},
            {"name": "alice", "age": 30},
            {"name": "dave", "age": 25},
            {"name": "bob", "age": 30},
        ])
        return db

    def test_limit_caps_result_size(self, people: MongoDB) -> None:
        """Test no more than limit documents are returned."""
        assert len(people.get_items("people", {}, limit=2)) == 2
        assert len(people.get_items("people", {}, limit=10)) == 4

    def test_zero_limit_means_no_limit(self, people: MongoDB) -> None:
        """Test limit=0 returns every match."""
        assert len(people.get_items("people", {})) == 4

    def test_sort_descending(self, people: MongoDB) -> None:
        """Test results follow the requested sort order."""
        results = people.get_items("people", {}, sort={"age": -1})

        assert [r["age"] for r in results] == [41, 30, 30, 25]

    def test_sort_keys_in_priority_order(self, people: MongoDB) -> None:
        """Test later sort keys break ties of earlier ones."""
        results = people.get_items("people", {}, sort={"age": 1, "name": 1})

        assert [r["name"] for r in results] == ["dave", "alice", "bob", "carol"]

    def test_sort_with_limit(self, people: MongoDB) -> None:
        """Test limit is applied after sorting."""
        results = people.get_items("people", {}, limit=1, sort={"age": -1})

        assert [r["name"] for r in results] == ["carol"]

    def test_filter_and_projection(self, people: MongoDB) -> None:
        """Test filter and excluded fields are both applied."""
        results = people.get_items("people", {"age": 30}, excluded_fields={"_id": 0, "age": 0}, sort={"name": 1})

        assert results == [{"name": "alice"}, {"name": "bob"}]

    def test_no_match_returns_empty_list(self, people: MongoDB) -> None:
        """Test an unmatched filter is not an error."""
        assert people.get_items("people", {"age": 99}) == []

    def test_decodes_into_model(self, people: MongoDB) -> None:
        """Test every document is decoded with the model."""
        results = people.get_items("people", {"age": 30}, sort={"name": 1}, model=User)

        assert results == [User(name="alice", age=30), User(name="bob", age=30)]


class TestCountUpdateDelete:
    """Test counting, updating and deleting."""

    def test_count_after_inserts_and_deletes(self, db: MongoDB) -> None:
        """Test count reflects N inserts minus M deletes."""
        db.save_multiple("items", [{"tag": "x", "n": i} for i in range(5)])
        db.save_multiple("items", [{"tag": "y", "n": i} for i in range(2)])

        assert db.count_items("items", {"tag": "x"}) == 5

        assert db.delete_item("items", {"tag": "x"}) == 1
        assert db.count_items("items", {"tag": "x"}) == 4

        assert db.delete_items("items", {"tag": "x", "n": {"$gte": 3}}) == 2
        assert db.count_items("items", {"tag": "x"}) == 2
        assert db.count_items("items", {}) == 4

    def test_count_empty_collection(self, db: MongoDB) -> None:
        assert db.count_items("empty", {}) == 0

    def test_update_item_modifies_at_most_one(self, db: MongoDB) -> None:
        """Test update_item touches one record even when several match."""
        db.save_multiple("items", [{"tag": "x", "done": False} for _ in range(3)])

        modified = db.update_item("items", {"tag": "x"}, {"$set": {"done": True}})

        assert modified == 1
        assert db.count_items("items", {"done": True}) == 1

    def test_update_items_modifies_all_matches(self, db: MongoDB) -> None:
        """Test update_items touches every matching record."""
        db.save_multiple("items", [{"tag": "x", "done": False} for _ in range(3)])
        db.save("items", {"tag": "y", "done": False})

        modified = db.update_items("items", {"tag": "x"}, {"$set": {"done": True}})

        assert modified == 3
        assert db.count_items("items", {"done": True}) == 3
        assert db.count_items("items", {"tag": "y", "done": False}) == 1

    def test_update_without_match_returns_zero(self, db: MongoDB) -> None:
        assert db.update_item("items", {"tag": "none"}, {"$set": {"done": True}}) == 0
        assert db.update_items("items", {"tag": "none"}, {"$set": {"done": True}}) == 0

    def test_delete_without_match_returns_zero(self, db: MongoDB) -> None:
        """Test deleting nothing is a zero count, not an error."""
        db.save("items", {"tag": "x"})

        assert db.delete_item("items", {"tag": "none"}) == 0
        assert db.delete_items("items", {"tag": "none"}) == 0
        assert db.count_items("items", {}) == 1

    def test_count_and_delete_are_logged(self, db: MongoDB, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="docdb.database.mongo")
        db.save("items", {"tag": "x"})

        db.count_items("items", {})
        db.delete_item("items", {"tag": "x"})

        assert "Counted 1 documents in items" in caplog.text
        assert "Deleted 1 document from items" in caplog.text


class TestHandles:
    """Test client and collection accessors."""

    def test_get_collection_resolves_in_database(self, db: MongoDB, mongo_client) -> None:
        collection = db.get_collection("users")

        assert collection.name == "users"
        assert collection.database.name == "testdb"

    def test_get_client(self, db: MongoDB, mongo_client) -> None:
        assert db.get_client() is mongo_client

    def test_ping(self, db: MongoDB) -> None:
        assert db.ping() is True
