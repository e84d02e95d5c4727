r"""
Tests for SQL predicate compilation (no database needed).
"""

import pytest

from storage_bench.adapters.sql import POSTS, TABLES, USERS, compile_predicate, escape_like
from storage_bench.predicates import And, Between, Comparison, Or, Pattern
from storage_bench.types import EntityKind


class TestSchemas:
    def test_tables(self):
        assert TABLES[EntityKind.USERS] is USERS
        assert TABLES[EntityKind.POSTS] is POSTS

    def test_data_columns_skip_id(self):
        assert USERS.data_columns == ("name", "email", "age")
        assert POSTS.data_columns[0] == "user_id"


class TestEscapeLike:
    def test_wildcards(self):
        assert escape_like("50%_off") == "50!%!_off"

    def test_escape_char(self):
        assert escape_like("a!b") == "a!!b"

    def test_plain(self):
        assert escape_like("@gmail.com") == "@gmail.com"


class TestCompilePredicate:
    def test_comparison(self):
        clause, params = compile_predicate(Comparison("age", "gte", 30), columns=USERS.columns)
        assert clause == "age >= ?"
        assert params == [30]

    def test_eq(self):
        clause, _ = compile_predicate(Comparison("id", "eq", 1), columns=USERS.columns)
        assert clause == "id = ?"

    def test_between(self):
        clause, params = compile_predicate(Between("age", 25, 50), columns=USERS.columns)
        assert clause == "age BETWEEN ? AND ?"
        assert params == [25, 50]

    def test_pattern_endswith(self):
        clause, params = compile_predicate(Pattern("email", "@gmail.com"), columns=USERS.columns)
        assert clause == "email LIKE ? ESCAPE '!'"
        assert params == ["%@gmail.com"]

    def test_pattern_contains(self):
        _, params = compile_predicate(Pattern("name", "an_n", "contains"), columns=USERS.columns)
        assert params == ["%an!_n%"]

    def test_nested(self):
        predicate = And(
            Between("age", 25, 50),
            Or(Pattern("email", "@gmail.com"), Pattern("email", "@yahoo.com")),
        )
        clause, params = compile_predicate(predicate, columns=USERS.columns)

        assert clause == (
            "(age BETWEEN ? AND ? AND "
            "(email LIKE ? ESCAPE '!' OR email LIKE ? ESCAPE '!'))"
        )
        assert params == [25, 50, "%@gmail.com", "%@yahoo.com"]

    def test_placeholder(self):
        clause, _ = compile_predicate(Between("likes", 1, 2), columns=POSTS.columns, placeholder="%s")
        assert clause == "likes BETWEEN %s AND %s"

    def test_unknown_column(self):
        with pytest.raises(ValueError, match="Unknown column"):
            compile_predicate(Comparison("age; DROP TABLE users", "eq", 1), columns=USERS.columns)

    def test_unsupported(self):
        with pytest.raises(TypeError):
            compile_predicate("age > 3", columns=USERS.columns)  # type: ignore[arg-type]
