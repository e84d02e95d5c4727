r"""
Relationship queries between users and posts.

    userPosts     posts of one random user
    joinQuery     adult users with their posts
    popularPosts  well-liked posts with their author (inner join)
"""

from typing import Any

from storage_bench.predicates import Comparison
from storage_bench.protocols import StorageAdapter
from storage_bench.queries.base import BaseQuery, QueryOutcome, QueryRegistry
from storage_bench.queries.users import ADULTS
from storage_bench.types import EntityKind

__all__ = [
    "JoinQuery",
    "PopularPostsQuery",
    "UserPostsQuery",
]

POPULAR_LIKES = 500
JOIN_LIMIT = 20


@QueryRegistry.register("userPosts")
class UserPostsQuery(BaseQuery):
    """All posts of a user picked uniformly at random."""

    def __init__(self) -> None:
        self._user_id: Any = None

    def prepare(self, adapter: StorageAdapter) -> None:
        self._user_id = adapter.random_id(EntityKind.USERS)

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        if self._user_id is None:
            msg = "prepare() must run before execute()"
            raise RuntimeError(msg)
        rows = adapter.find_related(EntityKind.POSTS, "user_id", self._user_id)
        return QueryOutcome(count=len(rows))


@QueryRegistry.register("joinQuery")
class JoinQuery(BaseQuery):
    """Up to 20 users aged 30+, each with their posts."""

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        rows = adapter.join_lookup(
            EntityKind.USERS,
            ADULTS,
            limit=JOIN_LIMIT,
            related_kind=EntityKind.POSTS,
            local_key="id",
            foreign_key="user_id",
            as_field="posts",
        )
        return QueryOutcome(count=len(rows))


@QueryRegistry.register("popularPosts")
class PopularPostsQuery(BaseQuery):
    """Up to 20 posts with 500+ likes, each with its author."""

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        rows = adapter.join_lookup_inverse(
            EntityKind.POSTS,
            Comparison("likes", "gte", POPULAR_LIKES),
            limit=JOIN_LIMIT,
            related_kind=EntityKind.USERS,
            local_key="user_id",
            foreign_key="id",
            as_field="author",
        )
        return QueryOutcome(count=len(rows))
