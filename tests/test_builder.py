"""Tests for SeedSQLBuilder and the generation driver."""

import pytest

from conftest import PROFILE
from seedsql import (
    CircularDependencyError,
    FileBackend,
    MemoryBackend,
    OutputWriteError,
    SchemaReferenceError,
    SeedSQLBuilder,
    generate_all,
)
from seedsql.config import GenerationConfig

POST = "10 post (PK id INTEGER, FK author INTEGER profile(userID), body TEXT)"


def test_builder_execute_memory(builder, memory_backend):
    """Test builder generates every requested row into memory."""
    report = builder.add(PROFILE).add(POST).execute(memory_backend)

    assert report.rows_per_table == {"profile": 5, "post": 10}
    assert report.total_rows == 15
    assert report.output == "memory"
    assert len(memory_backend.statements) == 15
    assert all(
        s.startswith("INSERT INTO profile VALUES (") and s.endswith(");")
        for s in memory_backend.get_statements("profile")
    )


def test_builder_orders_referenced_tables_first(builder, memory_backend):
    """Test tables are generated after the tables they reference."""
    builder.add(POST).add(PROFILE).execute(memory_backend)

    tables = [s.split()[2] for s in memory_backend.statements]
    assert tables == ["profile"] * 5 + ["post"] * 10


def test_builder_without_ordering_fails_on_forward_reference(memory_backend):
    """Test declaration order is used as-is when ordering is disabled."""
    builder = SeedSQLBuilder(GenerationConfig(order_by_dependencies=False))
    builder.add(POST).add(PROFILE)

    with pytest.raises(SchemaReferenceError):
        builder.execute(memory_backend)

    assert memory_backend.statements == []


def test_builder_circular_references(builder, memory_backend):
    """Test reference cycles fail before any row is written."""
    builder.add("2 a (PK id INTEGER, FK bid INTEGER b(id))")
    builder.add("2 b (PK id INTEGER, FK aid INTEGER a(id))")

    with pytest.raises(CircularDependencyError):
        builder.execute(memory_backend)

    assert memory_backend.statements == []


def test_builder_remove(builder, memory_backend):
    """Test removed tables are not generated."""
    builder.add(PROFILE).add("3 tag (PK id INTEGER)").remove("tag")

    report = builder.execute(memory_backend)

    assert report.rows_per_table == {"profile": 5}
    with pytest.raises(KeyError):
        builder.remove("tag")


def test_on_row_progress(builder, memory_backend):
    """Test progress callback sees every row."""
    calls = []
    builder.add(PROFILE).add(POST)

    builder.execute(
        memory_backend,
        on_row=lambda table, done, total: calls.append((table.name, done, total)),
    )

    assert len(calls) == 15
    assert calls[0] == ("profile", 1, 15)
    assert calls[-1] == ("post", 15, 15)


def test_separate_runs_do_not_share_state(builder):
    """Test each execute starts with empty uniqueness history."""
    builder.add("2 flag (PK bit BIT)")

    first, second = MemoryBackend(), MemoryBackend()
    builder.execute(first)
    builder.execute(second)

    assert len(first.statements) == len(second.statements) == 2


def test_generate_all_appends_to_file(profile_registry, tmp_path):
    """Test generate_all appends one statement per line."""
    output = tmp_path / "out" / "sample.sql"
    output.parent.mkdir()
    output.write_text("-- existing\n", encoding="utf-8")

    report = generate_all(profile_registry, output)
    generate_all(profile_registry, output)

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "-- existing"
    assert len(lines) == 11
    assert all(line.startswith("INSERT INTO profile VALUES (") for line in lines[1:])
    assert report.output == str(output)


def test_file_backend_truncate(tmp_path):
    """Test truncation creates parent directories and empties the file."""
    output = tmp_path / "nested" / "sample.sql"

    FileBackend(output, truncate=True)
    assert output.read_text(encoding="utf-8") == ""

    output.write_text("old\n", encoding="utf-8")
    FileBackend(output, truncate=True)
    assert output.read_text(encoding="utf-8") == ""


def test_generate_all_unwritable_output(profile_registry, tmp_path):
    """Test writing into a directory raises OutputWriteError."""
    with pytest.raises(OutputWriteError) as exc_info:
        generate_all(profile_registry, tmp_path)

    assert str(tmp_path) in str(exc_info.value)


def test_memory_backend_to_sql(builder, memory_backend):
    """Test memory backend renders file content and clears."""
    builder.add("2 tag (PK id INTEGER)").execute(memory_backend)

    sql = memory_backend.to_sql()
    assert sql.count("\n") == 2
    assert sql.startswith("INSERT INTO tag VALUES (")

    memory_backend.clear()
    assert memory_backend.statements == []
    assert memory_backend.get_statements("tag") == []
