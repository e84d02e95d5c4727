r"""
Benchmark configuration, workload presets and input coercion.

Workload presets:
    - small: 100 users, 2 posts each (quick validation)
    - medium: 1K users, 3 posts each (default)
    - large: 10K users, 5 posts each

    from storage_bench.config import WORKLOADS, get_workload

    workload = get_workload("medium")
    print(f"Users: {workload.count}, posts/user: {workload.posts_per_user}")
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from storage_bench.types import WorkloadConfig

# Look for .env in current dir, then next to the package
_env_file = Path(".env")
if not _env_file.exists():
    _env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_COUNT",
    "DEFAULT_ITERATIONS",
    "DEFAULT_POSTS_PER_USER",
    "DEFAULT_WORKLOAD",
    "ENV_PREFIX",
    "WORKLOADS",
    "coerce_int",
    "get_env",
    "get_workload",
]

ENV_PREFIX = "STORAGE_BENCH_"

DEFAULT_COUNT = 1000
DEFAULT_POSTS_PER_USER = 3
DEFAULT_ITERATIONS = 10
DEFAULT_BATCH_SIZE = 100

WORKLOADS: dict[str, WorkloadConfig] = {
    "small": WorkloadConfig(
        name="small",
        count=100,
        posts_per_user=2,
        iterations=5,
        batch_size=50,
    ),
    "medium": WorkloadConfig(
        name="medium",
        count=DEFAULT_COUNT,
        posts_per_user=DEFAULT_POSTS_PER_USER,
        iterations=DEFAULT_ITERATIONS,
        batch_size=DEFAULT_BATCH_SIZE,
    ),
    "large": WorkloadConfig(
        name="large",
        count=10_000,
        posts_per_user=5,
        iterations=20,
        batch_size=1_000,
    ),
}

DEFAULT_WORKLOAD = "medium"


def get_workload(name: str) -> WorkloadConfig:
    """Get workload preset by name.

    Args:
        name: Preset name (small, medium, large).

    Returns:
        WorkloadConfig for the requested preset.

    Raises:
        ValueError: If the preset name is not recognized.
    """
    if name not in WORKLOADS:
        valid = ", ".join(WORKLOADS.keys())
        msg = f"Unknown workload '{name}'. Valid workloads: {valid}"
        raise ValueError(msg)
    return WORKLOADS[name]


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with STORAGE_BENCH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "MONGO_URI").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def coerce_int(value: Any, *, default: int, minimum: int = 0) -> int:
    """Leniently convert a request or CLI value to an integer.

    Non-numeric values, booleans and values below ``minimum`` fall back to
    ``default`` instead of raising. Numeric strings with a trailing
    non-digit suffix keep their leading integer part ("25abc" -> 25).

    Args:
        value: Raw input (int, float, str or None).
        default: Value used when the input is unusable.
        minimum: Smallest accepted value.

    Returns:
        The coerced integer.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        parsed = int(value)
    else:
        text = str(value).strip()
        digits = ""
        for i, char in enumerate(text):
            if char.isdigit() or (i == 0 and char in "+-"):
                digits += char
            else:
                break
        try:
            parsed = int(digits)
        except ValueError:
            return default

    if parsed < minimum:
        return default
    return parsed
