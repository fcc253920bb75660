"""Tests for row resolution: uniqueness, references and compound values."""

import pytest

from conftest import resolve_rows
from seedsql.exceptions import DomainExhaustedError, SchemaReferenceError
from seedsql.resolver import COMPOUND_SEPARATOR, ValueResolver


def test_primary_and_alternate_keys_distinct(resolver):
    """Test PK and AK values never repeat within a table."""
    resolver.registry.add_table("60 account (PK id INTEGER, AK code VARCHAR(6), note TEXT)")

    rows = resolve_rows(resolver, "account")

    assert len({row["id"] for row in rows}) == 60
    assert len({row["code"] for row in rows}) == 60
    assert resolver.state.history("account", "id") == [row["id"] for row in rows]


def test_rows_keep_declaration_order(resolver):
    """Test row keys follow the declared attribute order."""
    row = resolver.resolve_row(resolver.registry.get_table("profile"))

    assert list(row) == ["userID", "name", "email"]
    assert row["email"].startswith(row["name"].replace(" ", "").replace(",", "") + "@")


def test_foreign_key_drawn_from_history(resolver):
    """Test FK values come from the referenced key's history."""
    profiles = resolve_rows(resolver, "profile")
    resolver.registry.add_table("20 post (PK id INTEGER, FK author INTEGER profile(userID))")

    posts = resolve_rows(resolver, "post")

    user_ids = {row["userID"] for row in profiles}
    assert all(row["author"] in user_ids for row in posts)


def test_foreign_key_reference_is_case_insensitive(resolver):
    """Test references match key names regardless of case."""
    resolve_rows(resolver, "profile")
    resolver.registry.add_table("3 post (PK id INTEGER, FK author INTEGER profile(USERID))")

    posts = resolve_rows(resolver, "post")

    assert all(resolver.state.contains("profile", "userID", row["author"]) for row in posts)


def test_two_columns_same_reference_differ(resolver):
    """Test two attributes bound to the same key get different values."""
    resolve_rows(resolver, "profile")
    resolver.registry.add_table(
        "10 follow (FK follower INTEGER profile(userID), FK followee INTEGER profile(userID))"
    )

    for row in resolve_rows(resolver, "follow"):
        assert row["follower"] != row["followee"]


def test_unique_foreign_key_consumes_history(resolver):
    """Test an AK/FK column never reuses a referenced value."""
    profiles = resolve_rows(resolver, "profile")
    resolver.registry.add_table("5 settings (PK id INTEGER, AK/FK owner INTEGER profile(userID))")

    rows = resolve_rows(resolver, "settings")

    assert sorted(row["owner"] for row in rows) == sorted(row["userID"] for row in profiles)

    with pytest.raises(DomainExhaustedError):
        resolver.resolve_row(resolver.registry.get_table("settings"))


def test_reference_to_non_key_raises(resolver):
    """Test referencing an attribute that is not PK/AK is fatal."""
    resolve_rows(resolver, "profile")
    resolver.registry.add_table("3 post (PK id INTEGER, FK author NAME profile(name))")

    with pytest.raises(SchemaReferenceError) as exc_info:
        resolver.resolve_row(resolver.registry.get_table("post"))

    assert exc_info.value.referenced_attribute == "name"


def test_reference_to_undeclared_table_raises(resolver):
    """Test referencing a table that was never declared is fatal."""
    resolver.registry.add_table("3 post (PK id INTEGER, FK author INTEGER users(id))")

    with pytest.raises(SchemaReferenceError) as exc_info:
        resolver.resolve_row(resolver.registry.get_table("post"))

    assert "not declared" in str(exc_info.value)


def test_reference_without_history_raises(resolver):
    """Test referencing a key with no generated values is fatal."""
    resolver.registry.add_table("3 post (PK id INTEGER, FK author INTEGER profile(userID))")

    with pytest.raises(SchemaReferenceError):
        resolver.resolve_row(resolver.registry.get_table("post"))


def test_attribute_bound_twice_raises(resolver):
    """Test the same attribute bound twice to one reference is fatal."""
    resolve_rows(resolver, "profile")
    resolver.registry.add_table(
        "1 dup (FK owner INTEGER profile(userID), FK owner INTEGER profile(userID))"
    )

    with pytest.raises(SchemaReferenceError):
        resolver.resolve_row(resolver.registry.get_table("dup"))


def test_domain_exhausted_for_small_type(profile_registry, state):
    """Test a PK over a two-value type runs out on the third row."""
    profile_registry.add_table("3 flag (PK bit BIT)")
    resolver = ValueResolver(profile_registry, state, max_attempts=100)
    table = profile_registry.get_table("flag")

    first = resolver.resolve_row(table)
    second = resolver.resolve_row(table)
    assert {first["bit"], second["bit"]} == {"0", "1"}

    with pytest.raises(DomainExhaustedError) as exc_info:
        resolver.resolve_row(table)

    assert exc_info.value.attempts == 100
    assert exc_info.value.attribute == "bit"


def test_default_literal_and_compound_values(resolver):
    """Test default literals pass through and compound leaves are joined."""
    resolver.registry.add_table(
        "5 place (PK id INTEGER, NULL, spot COMPOUND (city CITY_US; addr STREET_ADDRESS; n INTEGER))"
    )

    for row in resolve_rows(resolver, "place"):
        assert row["NULL"] == "NULL"
        leaves = row["spot"].split(COMPOUND_SEPARATOR)
        assert len(leaves) == 3
        assert leaves[2].isdigit()


def test_same_attribute_name_in_different_tables(resolver):
    """Test uniqueness is tracked per table, not per attribute name."""
    resolve_rows(resolver, "profile")
    resolver.registry.add_table("5 member (PK/FK userID INTEGER profile(userID))")

    rows = resolve_rows(resolver, "member")

    assert len({row["userID"] for row in rows}) == 5
