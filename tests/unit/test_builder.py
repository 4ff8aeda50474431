"""Unit tests for statement builders."""

import pytest

from sqlitelib.exceptions import InvalidArgumentError, MissingConditionError
from sqlitelib.query import (
    Operator,
    WhereClause,
    build_delete,
    build_insert,
    build_select,
    build_update,
    normalize_assignments,
)


class TestBuildSelect:
    """Tests for build_select."""

    @pytest.mark.parametrize("columns", [None, [], ["*"]])
    def test_all_columns_without_where(self, columns):
        stmt = build_select("users", columns, [])
        assert stmt.sql == "SELECT * FROM users"
        assert stmt.bindings == ()

    def test_columns_and_conditions(self):
        stmt = build_select(
            "users",
            ["id", "name"],
            [
                WhereClause("age", Operator.GREATER_THAN_OR_EQUAL, 18),
                WhereClause("name", Operator.IS_NOT_NULL),
            ],
        )
        assert stmt.sql == (
            "SELECT id, name FROM users WHERE age >= :w0_0_age AND name IS NOT NULL"
        )
        assert stmt.params() == {"w0_0_age": 18}

    def test_single_clause_accepted(self):
        stmt = build_select("users", ["name"], WhereClause("age", Operator.EQUALS, 25))
        assert stmt.sql == "SELECT name FROM users WHERE age = :w0_0_age"

    def test_schema_qualified_table(self):
        assert build_select("main.users").sql == "SELECT * FROM main.users"

    def test_placeholders_unique_across_clauses_on_same_column(self):
        stmt = build_select("users", ["*"], [
            WhereClause("age", Operator.BETWEEN, [18, 30]),
            WhereClause("age", Operator.IN, [18, 21, 30]),
        ])
        assert stmt.sql == (
            "SELECT * FROM users WHERE age BETWEEN :w0_0_age AND :w0_1_age "
            "AND age IN (:w1_0_age, :w1_1_age, :w1_2_age)"
        )
        assert len(stmt.params()) == 5

    @pytest.mark.parametrize("table", ["", "users; DROP TABLE x", "a.b.c", "1users"])
    def test_invalid_table_rejected(self, table):
        with pytest.raises(InvalidArgumentError):
            build_select(table)

    def test_invalid_column_rejected(self):
        with pytest.raises(InvalidArgumentError):
            build_select("users", ["name, (SELECT 1)"])

    def test_string_columns_rejected(self):
        with pytest.raises(InvalidArgumentError):
            build_select("users", "name")


class TestBuildInsert:
    """Tests for build_insert."""

    def test_column_order_preserved(self):
        stmt = build_insert("users", [{"id": 2}, {"name": "Bob"}, {"age": 25}])

        assert stmt.sql == (
            "INSERT INTO users (id, name, age) VALUES (:s0_0_id, :s1_0_name, :s2_0_age)"
        )
        assert [b.value for b in stmt.bindings] == [2, "Bob", 25]

    def test_mapping_and_pairs_equivalent(self):
        from_mapping = build_insert("users", {"id": 2, "name": "Bob"})
        from_pairs = build_insert("users", [("id", 2), ("name", "Bob")])
        assert from_mapping == from_pairs

    def test_empty_assignments_rejected(self):
        with pytest.raises(InvalidArgumentError):
            build_insert("users", {})

    def test_null_value(self):
        stmt = build_insert("users", {"name": None})
        assert stmt.params() == {"s0_0_name": None}


class TestBuildUpdate:
    """Tests for build_update."""

    def test_set_and_where_placeholders_do_not_collide(self):
        stmt = build_update(
            "users",
            {"age": 31},
            [WhereClause("age", Operator.EQUALS, 30)],
        )
        assert stmt.sql == "UPDATE users SET age = :s0_0_age WHERE age = :w0_0_age"
        assert stmt.params() == {"s0_0_age": 31, "w0_0_age": 30}

    def test_missing_condition(self):
        with pytest.raises(MissingConditionError):
            build_update("users", {"age": 31}, [])

    def test_missing_condition_when_none(self):
        with pytest.raises(MissingConditionError):
            build_update("users", {"age": 31}, None)

    def test_missing_condition_checked_before_assignments(self):
        with pytest.raises(MissingConditionError):
            build_update("users", {}, [])

    def test_empty_assignments_rejected(self):
        with pytest.raises(InvalidArgumentError):
            build_update("users", {}, [WhereClause("id", Operator.EQUALS, 1)])


class TestBuildDelete:
    """Tests for build_delete."""

    def test_delete_with_conditions(self):
        stmt = build_delete("users", [
            WhereClause("id", Operator.NOT_IN, [1, 2]),
            WhereClause("name", Operator.LIKE, "B%"),
        ])
        assert stmt.sql == (
            "DELETE FROM users WHERE id NOT IN (:w0_0_id, :w0_1_id) AND name LIKE :w1_0_name"
        )
        assert stmt.params() == {"w0_0_id": 1, "w0_1_id": 2, "w1_0_name": "B%"}

    def test_missing_condition(self):
        with pytest.raises(MissingConditionError):
            build_delete("users", [])


class TestNormalizeAssignments:
    """Tests for normalize_assignments."""

    def test_sequence_of_mappings(self):
        pairs = normalize_assignments([{"id": 1, "name": "A"}, {"age": 3}])
        assert pairs == [("id", 1), ("name", "A"), ("age", 3)]

    def test_duplicate_column_rejected(self):
        with pytest.raises(InvalidArgumentError, match="more than once"):
            normalize_assignments([{"id": 1}, ("id", 2)])

    @pytest.mark.parametrize("assignments", ["id=1", None, [("id",)], [42]])
    def test_unrecognised_shapes_rejected(self, assignments):
        with pytest.raises(InvalidArgumentError):
            normalize_assignments(assignments)


def test_statement_as_tuple():
    sql, params = build_delete("users", WhereClause("id", Operator.EQUALS, 9)).as_tuple()
    assert sql == "DELETE FROM users WHERE id = :w0_0_id"
    assert params == {"w0_0_id": 9}
