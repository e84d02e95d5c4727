r"""
MongoDB document store adapter.

Requires: pip install pymongo

Environment variables:
    STORAGE_BENCH_MONGO_URI: Connection URI (default: mongodb://localhost:27017)
    STORAGE_BENCH_MONGO_DATABASE: Database name (default: testdb)

    from storage_bench.adapters.mongodb import MongoDBAdapter

    adapter = MongoDBAdapter()
    adapter.connect(uri="mongodb://localhost:27017", database="testdb")
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from storage_bench.adapters.base import AdapterRegistry, BaseAdapter
from storage_bench.config import get_env
from storage_bench.predicates import And, Between, Comparison, Or, Pattern, Predicate, Reducer
from storage_bench.types import EntityKind

__all__ = ["MongoDBAdapter", "to_mongo_filter", "to_mongo_group"]

_MONGO_OPS = {
    "lt": "$lt",
    "lte": "$lte",
    "gt": "$gt",
    "gte": "$gte",
}


def _mongo_field(field: str) -> str:
    return "_id" if field == "id" else field


def to_mongo_filter(predicate: Predicate | None) -> dict[str, Any]:
    """Translate a predicate into a MongoDB filter document."""
    if predicate is None:
        return {}

    if isinstance(predicate, Comparison):
        field = _mongo_field(predicate.field)
        if predicate.op == "eq":
            return {field: predicate.value}
        return {field: {_MONGO_OPS[predicate.op]: predicate.value}}

    if isinstance(predicate, Between):
        return {_mongo_field(predicate.field): {"$gte": predicate.lower, "$lte": predicate.upper}}

    if isinstance(predicate, Pattern):
        regex = re.escape(predicate.text)
        if predicate.mode == "endswith":
            regex += "$"
        return {_mongo_field(predicate.field): {"$regex": regex}}

    if isinstance(predicate, Or):
        return {"$or": [to_mongo_filter(clause) for clause in predicate.clauses]}

    if isinstance(predicate, And):
        return {"$and": [to_mongo_filter(clause) for clause in predicate.clauses]}

    msg = f"Unsupported predicate: {predicate!r}"
    raise TypeError(msg)


def to_mongo_group(reducers: Mapping[str, Reducer]) -> dict[str, Any]:
    """Build a groupless ``$group`` stage for the given reducers."""
    group: dict[str, Any] = {"_id": None}
    for key, reducer in reducers.items():
        if reducer.func == "count":
            group[key] = {"$sum": 1}
        else:
            group[key] = {f"${reducer.func}": f"${_mongo_field(reducer.field)}"}  # type: ignore[arg-type]
    return {"$group": group}


def _from_doc(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Expose ``_id`` as ``id`` so rows look the same across backends."""
    row = {"id": doc.get("_id")}
    for key, value in doc.items():
        if key == "_id":
            continue
        if isinstance(value, Mapping):
            value = _from_doc(value)
        elif isinstance(value, list):
            value = [_from_doc(v) if isinstance(v, Mapping) else v for v in value]
        row[key] = value
    return row


@AdapterRegistry.register("mongodb")
class MongoDBAdapter(BaseAdapter):
    """MongoDB document store adapter."""

    def __init__(self) -> None:
        self._client: Any = None
        self._db: Any = None
        self._connected = False

    @property
    def name(self) -> str:
        return "MongoDB"

    @property
    def version(self) -> str:
        if not self._connected or self._client is None:
            return "unknown"
        return str(self._client.server_info().get("version", "unknown"))

    def connect(self, *, uri: str | None = None, **kwargs: Any) -> None:
        try:
            from pymongo import ASCENDING, MongoClient
        except ImportError as e:
            msg = "pymongo package not installed. Install with: pip install pymongo"
            raise ImportError(msg) from e

        uri = uri or get_env("MONGO_URI", default="mongodb://localhost:27017")
        database = kwargs.pop("database", None) or get_env("MONGO_DATABASE", default="testdb")

        if uri is None:
            msg = "MongoDB URI required"
            raise ValueError(msg)

        self._client = MongoClient(uri, **kwargs)
        self._client.admin.command("ping")
        self._db = self._client[database]
        self._db[EntityKind.POSTS.value].create_index([("user_id", ASCENDING)])
        self._connected = True

    def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None
        self._connected = False

    def _collection(self, kind: EntityKind) -> Any:
        self._require_connection()
        return self._db[kind.value]

    def clear(self, kind: EntityKind) -> None:
        self._collection(kind).delete_many({})

    def bulk_insert(
        self,
        kind: EntityKind,
        records: Sequence[dict[str, Any]],
        *,
        batch_size: int = 1000,
    ) -> list[Any]:
        collection = self._collection(kind)
        ids: list[Any] = []

        for i in range(0, len(records), batch_size):
            # insert_many sets _id on the documents it receives
            batch = [dict(record) for record in records[i : i + batch_size]]
            result = collection.insert_many(batch, ordered=True)
            ids.extend(result.inserted_ids)

        return ids

    def find_all(self, kind: EntityKind) -> list[dict[str, Any]]:
        return [_from_doc(doc) for doc in self._collection(kind).find({})]

    def find(self, kind: EntityKind, predicate: Predicate) -> list[dict[str, Any]]:
        return [_from_doc(doc) for doc in self._collection(kind).find(to_mongo_filter(predicate))]

    def find_sorted(
        self,
        kind: EntityKind,
        sort_keys: Sequence[str],
        *,
        limit: int,
    ) -> list[dict[str, Any]]:
        sort = [(_mongo_field(key), 1) for key in sort_keys]
        cursor = self._collection(kind).find({}).sort(sort).limit(limit)
        return [_from_doc(doc) for doc in cursor]

    def find_page(self, kind: EntityKind, *, offset: int, limit: int) -> list[dict[str, Any]]:
        cursor = self._collection(kind).find({}).skip(offset).limit(limit)
        return [_from_doc(doc) for doc in cursor]

    def count(self, kind: EntityKind, predicate: Predicate | None = None) -> int:
        return self._collection(kind).count_documents(to_mongo_filter(predicate))

    def aggregate(self, kind: EntityKind, reducers: Mapping[str, Reducer]) -> dict[str, Any]:
        rows = list(self._collection(kind).aggregate([to_mongo_group(reducers)]))
        row = rows[0] if rows else {}
        result: dict[str, Any] = {}
        for key, reducer in reducers.items():
            value = row.get(key)
            if reducer.func == "count":
                value = int(value or 0)
            result[key] = value
        return result

    def find_related(self, child_kind: EntityKind, foreign_key: str, parent_id: Any) -> list[dict[str, Any]]:
        cursor = self._collection(child_kind).find({_mongo_field(foreign_key): parent_id})
        return [_from_doc(doc) for doc in cursor]

    def join_lookup(
        self,
        kind: EntityKind,
        predicate: Predicate,
        *,
        limit: int,
        related_kind: EntityKind,
        local_key: str,
        foreign_key: str,
        as_field: str,
    ) -> list[dict[str, Any]]:
        pipeline = [
            {"$match": to_mongo_filter(predicate)},
            {"$limit": limit},
            {
                "$lookup": {
                    "from": related_kind.value,
                    "localField": _mongo_field(local_key),
                    "foreignField": _mongo_field(foreign_key),
                    "as": as_field,
                }
            },
        ]
        return [_from_doc(doc) for doc in self._collection(kind).aggregate(pipeline)]

    def join_lookup_inverse(
        self,
        kind: EntityKind,
        predicate: Predicate,
        *,
        limit: int,
        related_kind: EntityKind,
        local_key: str,
        foreign_key: str,
        as_field: str,
    ) -> list[dict[str, Any]]:
        pipeline = [
            {"$match": to_mongo_filter(predicate)},
            {"$limit": limit},
            {
                "$lookup": {
                    "from": related_kind.value,
                    "localField": _mongo_field(local_key),
                    "foreignField": _mongo_field(foreign_key),
                    "as": as_field,
                }
            },
            # Drops rows with no parent match
            {"$unwind": f"${as_field}"},
        ]
        return [_from_doc(doc) for doc in self._collection(kind).aggregate(pipeline)]

    def bulk_update(self, kind: EntityKind, predicate: Predicate, values: Mapping[str, Any]) -> int:
        result = self._collection(kind).update_many(to_mongo_filter(predicate), {"$set": dict(values)})
        return result.matched_count

    def bulk_delete(self, kind: EntityKind, predicate: Predicate) -> int:
        result = self._collection(kind).delete_many(to_mongo_filter(predicate))
        return result.deleted_count
