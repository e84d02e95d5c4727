r"""
Backend-agnostic filter predicates and aggregation reducers.

Predicates form a small closed set of variants. Each adapter translates
them into its native filter syntax.

    from storage_bench.predicates import And, Between, Or, Pattern

    predicate = And(
        Between("age", 25, 50),
        Or(Pattern("email", "@gmail.com"), Pattern("email", "@yahoo.com")),
    )
"""

from dataclasses import dataclass
from typing import Any, Literal

__all__ = [
    "And",
    "Between",
    "Comparison",
    "Or",
    "Pattern",
    "Predicate",
    "Reducer",
]

ComparisonOp = Literal["eq", "lt", "lte", "gt", "gte"]
PatternMode = Literal["endswith", "contains"]
ReducerFunc = Literal["avg", "min", "max", "sum", "count"]

COMPARISON_OPS: frozenset[str] = frozenset({"eq", "lt", "lte", "gt", "gte"})
PATTERN_MODES: frozenset[str] = frozenset({"endswith", "contains"})
REDUCER_FUNCS: frozenset[str] = frozenset({"avg", "min", "max", "sum", "count"})


@dataclass(frozen=True, slots=True)
class Comparison:
    """Compare a field against a single bound, e.g. ``age >= 30``."""

    field: str
    op: ComparisonOp
    value: Any

    def __post_init__(self) -> None:
        if self.op not in COMPARISON_OPS:
            msg = f"Unknown comparison operator '{self.op}'"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Between:
    """Inclusive range filter: ``lower <= field <= upper``."""

    field: str
    lower: Any
    upper: Any


@dataclass(frozen=True, slots=True)
class Pattern:
    """Literal string match on a field (suffix or substring, not regex)."""

    field: str
    text: str
    mode: PatternMode = "endswith"

    def __post_init__(self) -> None:
        if self.mode not in PATTERN_MODES:
            msg = f"Unknown pattern mode '{self.mode}'"
            raise ValueError(msg)


class And:
    """Logical conjunction of predicates."""

    __slots__ = ("clauses",)

    def __init__(self, *clauses: "Predicate") -> None:
        if not clauses:
            raise ValueError("And requires at least one clause")
        self.clauses: tuple[Predicate, ...] = clauses

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.clauses == self.clauses  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.clauses))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(c) for c in self.clauses)})"


class Or(And):
    """Logical disjunction of predicates."""

    __slots__ = ()


Predicate = Comparison | Between | Pattern | And | Or


@dataclass(frozen=True, slots=True)
class Reducer:
    """Aggregation reducer over a numeric field.

    ``count`` ignores ``field`` and counts rows.
    """

    func: ReducerFunc
    field: str | None = None

    def __post_init__(self) -> None:
        if self.func not in REDUCER_FUNCS:
            msg = f"Unknown reducer '{self.func}'"
            raise ValueError(msg)
        if self.func != "count" and self.field is None:
            msg = f"Reducer '{self.func}' requires a field"
            raise ValueError(msg)
