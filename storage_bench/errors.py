r"""
Exception hierarchy for storage-bench.

    from storage_bench.errors import EmptyCollectionError

    try:
        user_id = adapter.random_id(EntityKind.USERS)
    except EmptyCollectionError:
        ...
"""

__all__ = [
    "BenchmarkError",
    "InputValidationError",
    "BackendOperationError",
    "EmptyCollectionError",
]


class BenchmarkError(Exception):
    """Base class for all storage-bench errors."""


class InputValidationError(BenchmarkError, ValueError):
    """Invalid size or count passed to a harness component."""


class BackendOperationError(BenchmarkError):
    """Storage adapter could not perform the requested operation."""


class EmptyCollectionError(BenchmarkError):
    """An operation required at least one existing record."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Collection '{kind}' is empty")
        self.kind = kind
