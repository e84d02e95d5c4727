r"""
Synthetic user/post dataset generator.

Generates users with realistic names and free-mail addresses, and posts
keyed to a given user. Content is pseudorandom; cardinalities and field
domains are exact.

    from storage_bench.datasets.synthetic import SyntheticDataGenerator

    generator = SyntheticDataGenerator(seed=42)
    users = generator.generate_users(1000)
    posts = generator.generate_posts_for_user(user_id, 3)
"""

from typing import Any

from faker import Faker

from storage_bench.errors import InputValidationError

__all__ = [
    "AGE_RANGE",
    "LIKES_RANGE",
    "SyntheticDataGenerator",
]

AGE_RANGE = (18, 70)
LIKES_RANGE = (0, 1000)
PARAGRAPHS_PER_POST = 3


class SyntheticDataGenerator:
    """Synthetic user and post generator backed by Faker."""

    def __init__(self, *, seed: int | None = None, locale: str = "en_US") -> None:
        """Initialize generator.

        Args:
            seed: Random seed for reproducible content.
            locale: Faker locale for names and addresses.
        """
        self._seed = seed
        self._faker = Faker(locale)
        if seed is not None:
            self._faker.seed_instance(seed)

    @property
    def name(self) -> str:
        return "synthetic_users_posts"

    def generate_users(self, count: int) -> list[dict[str, Any]]:
        """Generate user records.

        Args:
            count: Number of users to generate.

        Returns:
            Exactly ``count`` dicts with name, email and age.

        Raises:
            InputValidationError: If ``count`` is negative.
        """
        _check_size("count", count)
        fake = self._faker
        low, high = AGE_RANGE

        return [
            {
                "name": fake.name(),
                "email": fake.free_email(),
                "age": fake.random_int(min=low, max=high),
            }
            for _ in range(count)
        ]

    def generate_posts_for_user(self, user_id: Any, count: int) -> list[dict[str, Any]]:
        """Generate posts that all reference ``user_id``.

        Args:
            user_id: Backend-assigned identifier of an existing user.
            count: Number of posts to generate.

        Returns:
            Exactly ``count`` dicts with user_id, title, content, created_at and likes.

        Raises:
            InputValidationError: If ``count`` is negative.
        """
        _check_size("count", count)
        fake = self._faker
        low, high = LIKES_RANGE

        return [
            {
                "user_id": user_id,
                "title": fake.sentence(),
                "content": "\n".join(fake.paragraphs(nb=PARAGRAPHS_PER_POST)),
                "created_at": fake.date_time_between(start_date="-1y", end_date="now"),
                "likes": fake.random_int(min=low, max=high),
            }
            for _ in range(count)
        ]


def _check_size(label: str, value: int) -> None:
    if value < 0:
        msg = f"{label} must be non-negative, got {value}"
        raise InputValidationError(msg)
