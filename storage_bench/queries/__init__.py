r"""
Query suite for storage-bench.

The suite is a fixed, ordered list of queries executed once per full
pass, each timed independently:

- users: ageRange, emailDomain, complexQuery, sortQuery, aggregation,
  pagination, count
- relations: userPosts, joinQuery, popularPosts

    from storage_bench.queries import default_suite

    for query in default_suite():
        query.prepare(adapter)
        outcome = query.execute(adapter)
"""

from storage_bench.queries.base import BaseQuery, QueryOutcome, QueryRegistry
from storage_bench.queries.relations import JoinQuery, PopularPostsQuery, UserPostsQuery
from storage_bench.queries.users import (
    AgeRangeQuery,
    AggregationQuery,
    ComplexQuery,
    CountQuery,
    EmailDomainQuery,
    PaginationQuery,
    SortQuery,
)

__all__ = [
    # Base
    "BaseQuery",
    "QueryOutcome",
    "QueryRegistry",
    "SUITE_ORDER",
    "default_suite",
    # Users
    "AgeRangeQuery",
    "AggregationQuery",
    "ComplexQuery",
    "CountQuery",
    "EmailDomainQuery",
    "PaginationQuery",
    "SortQuery",
    # Relations
    "JoinQuery",
    "PopularPostsQuery",
    "UserPostsQuery",
]

SUITE_ORDER: tuple[str, ...] = (
    "ageRange",
    "emailDomain",
    "complexQuery",
    "sortQuery",
    "aggregation",
    "pagination",
    "count",
    "userPosts",
    "joinQuery",
    "popularPosts",
)


def default_suite() -> list[BaseQuery]:
    """Fresh query instances in suite order."""
    return [QueryRegistry.create(name) for name in SUITE_ORDER]
