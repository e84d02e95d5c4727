r"""
HTTP service for storage-bench.

    GET /benchmark?count=1000&postsPerUser=3
    GET /benchmark/stress?iterations=10&batch=100
    GET /health
"""

from storage_bench.api.app import create_app

__all__ = ["create_app"]
