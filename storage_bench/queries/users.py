r"""
Single-collection user queries.

Range, pattern, compound, sort, aggregation, pagination and count
queries over the users collection.
"""

from storage_bench.predicates import And, Between, Comparison, Or, Pattern, Reducer
from storage_bench.protocols import StorageAdapter
from storage_bench.queries.base import BaseQuery, QueryOutcome, QueryRegistry
from storage_bench.types import EntityKind

__all__ = [
    "AgeRangeQuery",
    "AggregationQuery",
    "ComplexQuery",
    "CountQuery",
    "EmailDomainQuery",
    "PaginationQuery",
    "SortQuery",
]

ADULT_AGE = 30
GMAIL = "@gmail.com"
YAHOO = "@yahoo.com"

ADULTS = Comparison("age", "gte", ADULT_AGE)


@QueryRegistry.register("ageRange")
class AgeRangeQuery(BaseQuery):
    """Users aged 30 and over."""

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        return QueryOutcome(count=len(adapter.find(EntityKind.USERS, ADULTS)))


@QueryRegistry.register("emailDomain")
class EmailDomainQuery(BaseQuery):
    """Users with a gmail.com address."""

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        rows = adapter.find(EntityKind.USERS, Pattern("email", GMAIL))
        return QueryOutcome(count=len(rows))


@QueryRegistry.register("complexQuery")
class ComplexQuery(BaseQuery):
    """Users aged 25-50 with a gmail.com or yahoo.com address."""

    predicate = And(
        Between("age", 25, 50),
        Or(Pattern("email", GMAIL), Pattern("email", YAHOO)),
    )

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        return QueryOutcome(count=len(adapter.find(EntityKind.USERS, self.predicate)))


@QueryRegistry.register("sortQuery")
class SortQuery(BaseQuery):
    """First 100 users ordered by age, then name."""

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        rows = adapter.find_sorted(EntityKind.USERS, ["age", "name"], limit=100)
        return QueryOutcome(count=len(rows))


@QueryRegistry.register("aggregation")
class AggregationQuery(BaseQuery):
    """Average, minimum and maximum age plus total user count."""

    reports_throughput = False
    reducers = {
        "avgAge": Reducer("avg", "age"),
        "minAge": Reducer("min", "age"),
        "maxAge": Reducer("max", "age"),
        "totalUsers": Reducer("count"),
    }

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        return QueryOutcome(result=adapter.aggregate(EntityKind.USERS, self.reducers))


@QueryRegistry.register("pagination")
class PaginationQuery(BaseQuery):
    """Second page of 50 users."""

    offset = 50
    limit = 50

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        rows = adapter.find_page(EntityKind.USERS, offset=self.offset, limit=self.limit)
        return QueryOutcome(count=len(rows))


@QueryRegistry.register("count")
class CountQuery(BaseQuery):
    """Number of users aged 30 and over, without fetching rows."""

    reports_throughput = False

    def execute(self, adapter: StorageAdapter) -> QueryOutcome:
        return QueryOutcome(count=adapter.count(EntityKind.USERS, ADULTS))
