"""Tests for the seedsql command line."""

import pytest
from click.testing import CliRunner

from seedsql.cli.main import cli, read_declarations

SCHEMA = """\
# sample schema
add 5 profile (PK userID INTEGER, name NAME, AK email EMAIL)

add 3 friend (PK/FK userID1 INTEGER profile(userID), PK/FK userID2 INTEGER profile(userID))
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.txt"
    path.write_text(SCHEMA, encoding="utf-8")
    return path


def test_read_declarations(schema_file):
    """Test comments, blank lines and the add prefix are handled."""
    declarations = read_declarations(schema_file)

    assert [number for number, _ in declarations] == [2, 4]
    assert declarations[0][1].startswith("5 profile (")


def test_types_command(runner):
    """Test the type catalog listing."""
    result = runner.invoke(cli, ["types"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "INTEGER" in lines
    assert "VARCHAR(n)" in lines


def test_check_command(runner, schema_file):
    """Test check reports accepted tables."""
    result = runner.invoke(cli, ["check", str(schema_file)])

    assert result.exit_code == 0
    assert "✓ profile (5 rows, 3 attributes)" in result.output
    assert "✓ friend" in result.output


def test_check_command_rejected(runner, tmp_path):
    """Test check fails when a declaration is rejected."""
    path = tmp_path / "bad.txt"
    path.write_text("5 profile (PK userID INTEGER)\n5 broken (PK id NOPE)\n")

    result = runner.invoke(cli, ["check", str(path)])

    assert result.exit_code == 1
    assert "✓ profile" in result.output
    assert "Line 2" in result.output


def test_show_keys_and_references(runner, schema_file):
    """Test show lists keys and references."""
    keys = runner.invoke(cli, ["show", "keys", str(schema_file)])
    refs = runner.invoke(cli, ["show", "references", str(schema_file), "friend"])

    assert keys.exit_code == 0
    assert "profile: userID (PK), email (AK)" in keys.output
    assert refs.exit_code == 0
    assert refs.output.strip() == "friend: profile(userID), profile(userID)"


def test_show_unknown_table(runner, schema_file):
    """Test show fails for undeclared tables."""
    result = runner.invoke(cli, ["show", "tables", str(schema_file), "ghost"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_generate_command(runner, schema_file, tmp_path):
    """Test generate writes one statement per row."""
    output = tmp_path / "sample.sql"

    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["generate", str(schema_file), "-o", str(output)])

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 8
    assert "Wrote 8 insert statements" in result.output


def test_generate_truncates_unless_append(runner, schema_file, tmp_path):
    """Test output is truncated by default and kept with --append."""
    output = tmp_path / "sample.sql"
    output.write_text("-- keep\n", encoding="utf-8")

    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(cli, ["generate", str(schema_file), "-o", str(output), "--append"])
        assert output.read_text(encoding="utf-8").startswith("-- keep\n")

        runner.invoke(cli, ["generate", str(schema_file), "-o", str(output)])
        assert len(output.read_text(encoding="utf-8").splitlines()) == 8


def test_generate_exhausted_domain(runner, tmp_path):
    """Test a fatal generation error exits with status 1."""
    schema = tmp_path / "schema.txt"
    schema.write_text(
        "3 profile (PK userID INTEGER)\n"
        "4 friend (PK/FK a INTEGER profile(userID), PK/FK b INTEGER profile(userID))\n"
    )
    output = tmp_path / "sample.sql"

    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            cli, ["generate", str(schema), "-o", str(output), "--max-attempts", "200"]
        )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert len(output.read_text(encoding="utf-8").splitlines()) == 6


def test_generate_skips_rejected_tables(runner, tmp_path):
    """Test rejected declarations are reported and skipped."""
    schema = tmp_path / "schema.txt"
    schema.write_text("2 tag (PK id INTEGER)\n2 broken (PK id NOPE)\n")
    output = tmp_path / "sample.sql"

    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["generate", str(schema), "-o", str(output)])

    assert result.exit_code == 0
    assert "Line 2" in result.output
    assert len(output.read_text(encoding="utf-8").splitlines()) == 2


def test_generate_with_config_file(runner, schema_file, tmp_path):
    """Test the output path can come from a config file."""
    output = tmp_path / "configured.sql"
    config = tmp_path / "seedsql.toml"
    config.write_text(f'[output]\npath = "{output.as_posix()}"\n')

    result = runner.invoke(cli, ["generate", str(schema_file), "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert len(output.read_text(encoding="utf-8").splitlines()) == 8


def test_generate_invalid_log_level(runner, schema_file, tmp_path):
    """Test a bad log level in the config file is reported, not raised."""
    config = tmp_path / "seedsql.toml"
    config.write_text('[output]\nlog_level = "LOUD"\n')

    result = runner.invoke(
        cli,
        ["generate", str(schema_file), "--config", str(config), "-o", str(tmp_path / "o.sql")],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert isinstance(result.exception, SystemExit)
