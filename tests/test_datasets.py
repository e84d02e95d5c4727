r"""
Tests for storage_bench.datasets module.
"""

from datetime import datetime, timedelta

import pytest

from storage_bench.datasets import AGE_RANGE, LIKES_RANGE, SyntheticDataGenerator
from storage_bench.errors import InputValidationError


class TestGenerateUsers:
    def test_exact_count(self, generator):
        assert len(generator.generate_users(50)) == 50

    def test_zero(self, generator):
        assert generator.generate_users(0) == []

    def test_negative(self, generator):
        with pytest.raises(InputValidationError):
            generator.generate_users(-1)

    def test_fields(self, generator):
        for user in generator.generate_users(100):
            assert set(user) == {"name", "email", "age"}
            assert user["name"]
            assert "@" in user["email"]
            assert AGE_RANGE[0] <= user["age"] <= AGE_RANGE[1]

    def test_seed_reproducible(self):
        a = SyntheticDataGenerator(seed=7).generate_users(10)
        b = SyntheticDataGenerator(seed=7).generate_users(10)
        assert a == b

    def test_free_mail_domains(self):
        users = SyntheticDataGenerator(seed=1).generate_users(500)
        domains = {user["email"].split("@")[1] for user in users}
        assert "gmail.com" in domains


class TestGeneratePosts:
    def test_exact_count_and_reference(self, generator):
        posts = generator.generate_posts_for_user(42, 3)

        assert len(posts) == 3
        assert all(post["user_id"] == 42 for post in posts)

    def test_fields(self, generator):
        now = datetime.now()
        for post in generator.generate_posts_for_user("abc", 20):
            assert set(post) == {"user_id", "title", "content", "created_at", "likes"}
            assert post["title"]
            assert "\n" in post["content"]
            assert LIKES_RANGE[0] <= post["likes"] <= LIKES_RANGE[1]
            assert now - timedelta(days=367) <= post["created_at"] <= now + timedelta(seconds=5)

    def test_negative(self, generator):
        with pytest.raises(InputValidationError):
            generator.generate_posts_for_user(1, -3)

    def test_name(self, generator):
        assert generator.name == "synthetic_users_posts"
