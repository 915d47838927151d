"""Tests for the positional secure query builder."""

from __future__ import annotations

import re

import pytest

from utils.query_builder import (
    FilterOperator,
    ParameterizedQuery,
    SecureQueryBuilder,
    build_insert_query,
    normalize_limit,
    validate_column_name,
)


def placeholders(sql: str) -> list[int]:
    return [int(n) for n in re.findall(r"\$(\d+)", sql)]


def test_add_parameter_returns_contiguous_positional_placeholders():
    builder = SecureQueryBuilder()
    assert builder.add_parameter("a") == "$1"
    assert builder.add_parameter(2) == "$2"
    assert builder.add_parameter(None) == "$3"
    assert builder.get_parameters() == ["a", 2, None]


def test_first_predicate_uses_where_and_later_ones_use_and():
    query = (
        SecureQueryBuilder("SELECT * FROM t")
        .where("a", FilterOperator.EQUALS, 1)
        .where("b", FilterOperator.GREATER_EQUAL, 2)
        .where("c", FilterOperator.LIKE, "%x%")
        .build()
    )
    assert query.sql == "SELECT * FROM t\nWHERE a = $1 AND b >= $2 AND c LIKE $3"
    assert query.params == (1, 2, "%x%")


def test_where_keyword_is_not_derived_from_value_content():
    """A value containing WHERE must not turn the first predicate into AND."""
    query = (
        SecureQueryBuilder("SELECT * FROM t")
        .where("title", FilterOperator.LIKE, "%WHERE%")
        .where("city", FilterOperator.LIKE, "%AND%")
        .build()
    )
    assert query.sql.count("WHERE") == 1
    assert "WHERE title LIKE $1 AND city LIKE $2" in query.sql
    assert "%WHERE%" not in query.sql


def test_predicate_count_tracks_appended_predicates():
    builder = SecureQueryBuilder("SELECT 1")
    assert builder.predicate_count == 0
    builder.where("a", FilterOperator.EQUALS, 1)
    builder.where("b", FilterOperator.EQUALS, 2)
    assert builder.predicate_count == 2


def test_suffix_clauses_follow_predicates_and_limit_is_last_parameter():
    query = (
        SecureQueryBuilder("SELECT * FROM t")
        .where("a", FilterOperator.LESS_EQUAL, 5)
        .group_by("t.id", "t.a")
        .order_by("a")
        .order_by("t.id", "desc")
        .limit(7)
        .build()
    )
    assert query.sql.splitlines()[1:] == [
        "WHERE a <= $1",
        "GROUP BY t.id, t.a",
        "ORDER BY a ASC, t.id DESC",
        "LIMIT $2",
    ]
    assert query.params[-1] == 7


def test_where_after_limit_is_rejected():
    builder = SecureQueryBuilder("SELECT * FROM t").limit(5)
    with pytest.raises(ValueError, match="before GROUP BY"):
        builder.where("a", FilterOperator.EQUALS, 1)


def test_limit_can_only_be_set_once():
    builder = SecureQueryBuilder("SELECT * FROM t").limit(5)
    with pytest.raises(ValueError, match="already been set"):
        builder.limit(6)


def test_build_filter_condition_requires_value():
    with pytest.raises(ValueError, match="Value required"):
        SecureQueryBuilder().build_filter_condition("a", FilterOperator.EQUALS, None)


def test_invalid_sort_direction_is_rejected():
    with pytest.raises(ValueError, match="Invalid sort direction"):
        SecureQueryBuilder("SELECT 1").order_by("a", "sideways")


def test_build_returns_snapshot_and_is_repeatable():
    builder = SecureQueryBuilder("SELECT * FROM t").where("a", FilterOperator.EQUALS, 1).limit(3)
    first = builder.build()
    second = builder.build()
    assert first == second
    assert isinstance(first, ParameterizedQuery)
    assert first.placeholder_count == 2


def test_placeholder_count_reads_the_sql_text():
    assert ParameterizedQuery("SELECT 1").placeholder_count == 0
    assert ParameterizedQuery("SELECT $1, $2, $1", ("a", "b")).placeholder_count == 2
    assert ParameterizedQuery("SELECT $1", ("a", "unused")).placeholder_count == 1


def test_reset_clears_state():
    builder = SecureQueryBuilder("SELECT * FROM t").where("a", FilterOperator.EQUALS, 1).limit(3)
    builder.reset()
    assert builder.build() == ParameterizedQuery(sql="SELECT * FROM t", params=())
    assert builder.predicate_count == 0


@pytest.mark.parametrize(
    "name",
    ["city", "properties.id", "ratings.average_rating", "_private"],
)
def test_validate_column_name_accepts_identifiers(name):
    assert validate_column_name(name) == name


@pytest.mark.parametrize(
    "name",
    ["city; DROP TABLE users", "a b", "1abc", "", "a.b.c", "avg(rating)", None],
)
def test_validate_column_name_rejects_unsafe_input(name):
    with pytest.raises(ValueError, match="Invalid column name"):
        validate_column_name(name)


def test_where_rejects_unsafe_column():
    with pytest.raises(ValueError):
        SecureQueryBuilder("SELECT 1").where("a OR 1=1 --", FilterOperator.EQUALS, 1)


def test_build_insert_query_binds_every_value():
    query = build_insert_query("users", {"name": "Ann", "email": "ann@example.com", "password": "x'); --"})
    assert query.sql == (
        "INSERT INTO users (name, email, password)\n"
        "VALUES ($1, $2, $3)\n"
        "RETURNING *"
    )
    assert query.params == ("Ann", "ann@example.com", "x'); --")
    assert placeholders(query.sql) == [1, 2, 3]


def test_build_insert_query_requires_values():
    with pytest.raises(ValueError, match="At least one column"):
        build_insert_query("users", {})


@pytest.mark.parametrize(
    "limit, expected",
    [
        (5, 5),
        (1, 1),
        (10, 10),
        (0, 10),
        (-3, 10),
        (None, 10),
        (2.5, 10),
        ("5", 10),
        (True, 10),
    ],
)
def test_normalize_limit_coerces_to_default(limit, expected):
    assert normalize_limit(limit) == expected


def test_normalize_limit_uses_given_default():
    assert normalize_limit(None, default=25) == 25
