r"""
Tests for MongoDB filter translation (no server needed).
"""

import pytest

from storage_bench.adapters.mongodb import MongoDBAdapter, _from_doc, to_mongo_filter, to_mongo_group
from storage_bench.errors import BackendOperationError
from storage_bench.predicates import And, Between, Comparison, Or, Pattern, Reducer
from storage_bench.types import EntityKind


class TestToMongoFilter:
    def test_none(self):
        assert to_mongo_filter(None) == {}

    def test_comparison(self):
        assert to_mongo_filter(Comparison("age", "gte", 30)) == {"age": {"$gte": 30}}
        assert to_mongo_filter(Comparison("age", "lt", 25)) == {"age": {"$lt": 25}}

    def test_eq(self):
        assert to_mongo_filter(Comparison("name", "eq", "Alice")) == {"name": "Alice"}

    def test_id_maps_to_underscore_id(self):
        assert to_mongo_filter(Comparison("id", "eq", 7)) == {"_id": 7}

    def test_between(self):
        assert to_mongo_filter(Between("age", 25, 50)) == {"age": {"$gte": 25, "$lte": 50}}

    def test_pattern_is_literal(self):
        assert to_mongo_filter(Pattern("email", "@gmail.com")) == {"email": {"$regex": r"@gmail\.com$"}}
        assert to_mongo_filter(Pattern("name", "a.b", "contains")) == {"name": {"$regex": r"a\.b"}}

    def test_nested(self):
        predicate = And(
            Between("age", 25, 50),
            Or(Pattern("email", "@gmail.com"), Pattern("email", "@yahoo.com")),
        )
        assert to_mongo_filter(predicate) == {
            "$and": [
                {"age": {"$gte": 25, "$lte": 50}},
                {"$or": [{"email": {"$regex": r"@gmail\.com$"}}, {"email": {"$regex": r"@yahoo\.com$"}}]},
            ]
        }

    def test_unsupported(self):
        with pytest.raises(TypeError):
            to_mongo_filter("age > 3")  # type: ignore[arg-type]


class TestToMongoGroup:
    def test_reducers(self):
        stage = to_mongo_group({
            "avgAge": Reducer("avg", "age"),
            "maxAge": Reducer("max", "age"),
            "totalUsers": Reducer("count"),
        })
        assert stage == {
            "$group": {
                "_id": None,
                "avgAge": {"$avg": "$age"},
                "maxAge": {"$max": "$age"},
                "totalUsers": {"$sum": 1},
            }
        }


class TestFromDoc:
    def test_renames_id(self):
        assert _from_doc({"_id": 1, "name": "Alice"}) == {"id": 1, "name": "Alice"}

    def test_nested(self):
        doc = {"_id": 1, "author": {"_id": 2, "name": "Bob"}, "posts": [{"_id": 3}]}
        assert _from_doc(doc) == {"id": 1, "author": {"id": 2, "name": "Bob"}, "posts": [{"id": 3}]}


class TestMongoDBAdapter:
    def test_name(self):
        assert MongoDBAdapter().name == "MongoDB"

    def test_not_connected(self):
        adapter = MongoDBAdapter()
        assert adapter.connected is False
        assert adapter.version == "unknown"
        with pytest.raises(BackendOperationError, match="not connected"):
            adapter.find_all(EntityKind.USERS)
