r"""
Dataset generators for storage-bench.

    from storage_bench.datasets import SyntheticDataGenerator

    generator = SyntheticDataGenerator(seed=7)
    users = generator.generate_users(100)
"""

from storage_bench.datasets.synthetic import AGE_RANGE, LIKES_RANGE, SyntheticDataGenerator

__all__ = [
    "AGE_RANGE",
    "LIKES_RANGE",
    "SyntheticDataGenerator",
]
