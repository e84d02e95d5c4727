r"""
Storage adapters for storage-bench.

Each adapter implements the StorageAdapter protocol
to provide a consistent interface across backends.

    from storage_bench.adapters import MongoDBAdapter, PostgresAdapter

    adapter = MongoDBAdapter()
    adapter.connect(uri="mongodb://localhost:27017")
"""

from storage_bench.adapters.base import AdapterRegistry, BaseAdapter
from storage_bench.adapters.duckdb import DuckDBAdapter
from storage_bench.adapters.mongodb import MongoDBAdapter
from storage_bench.adapters.postgres import PostgresAdapter
from storage_bench.adapters.sql import SQLAdapter

__all__ = [
    "AdapterRegistry",
    "BaseAdapter",
    "DuckDBAdapter",
    "MongoDBAdapter",
    "PostgresAdapter",
    "SQLAdapter",
]
