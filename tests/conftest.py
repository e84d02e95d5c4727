r"""
Shared pytest fixtures for storage-bench tests.
"""

import pytest

from storage_bench.adapters.duckdb import DuckDBAdapter
from storage_bench.datasets import SyntheticDataGenerator
from storage_bench.types import EntityKind


@pytest.fixture
def generator() -> SyntheticDataGenerator:
    """Seeded generator for reproducible content."""
    return SyntheticDataGenerator(seed=42)


@pytest.fixture
def sample_users() -> list[dict]:
    """Hand-written users with known ages and email domains."""
    return [
        {"name": "Alice", "email": "alice@gmail.com", "age": 22},
        {"name": "Bob", "email": "bob@yahoo.com", "age": 30},
        {"name": "Carol", "email": "carol@hotmail.com", "age": 45},
        {"name": "Dave", "email": "dave@gmail.com", "age": 50},
        {"name": "Eve", "email": "eve@example.org", "age": 67},
        {"name": "Frank", "email": "frank@gmail.com.au", "age": 25},
    ]


@pytest.fixture
def duckdb_adapter():
    """Connected in-memory DuckDB adapter."""
    adapter = DuckDBAdapter()
    adapter.connect(uri=":memory:")
    yield adapter
    adapter.disconnect()


@pytest.fixture
def populated_adapter(duckdb_adapter, sample_users):
    """DuckDB adapter holding ``sample_users`` and two posts per user.

    Each user's first post has 100 likes and the second 600, so exactly
    one post per user is "popular".
    """
    ids = duckdb_adapter.bulk_insert(EntityKind.USERS, sample_users)
    posts = []
    for user_id in ids:
        for likes in (100, 600):
            posts.append({
                "user_id": user_id,
                "title": f"Post by {user_id}",
                "content": "Lorem ipsum",
                "created_at": None,
                "likes": likes,
            })
    duckdb_adapter.bulk_insert(EntityKind.POSTS, posts)
    return duckdb_adapter
