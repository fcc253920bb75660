"""CLI commands for seedsql."""

import logging
import sys
from pathlib import Path

import click

from seedsql.backends import FileBackend
from seedsql.builder import generate_rows
from seedsql.config import Config
from seedsql.exceptions import SchemaParseError, SeedSQLError
from seedsql.generators import VALID_TYPES
from seedsql.generators.types import SIZED_TYPES
from seedsql.schema import SchemaRegistry


def read_declarations(path: Path) -> list[tuple[int, str]]:
    """
    Read table declarations from a schema file.

    One declaration per line, optionally prefixed with ``add``. Blank lines
    and ``#`` comments are skipped.

    Returns:
        List of (line number, declaration)
    """
    declarations = []
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        head, _, rest = text.partition(" ")
        if head.lower() == "add" and rest:
            text = rest.strip()
        declarations.append((number, text))
    return declarations


def load_registry(path: Path) -> tuple[SchemaRegistry, list[tuple[int, SchemaParseError]]]:
    """Register every declaration in a schema file, collecting rejections."""
    registry = SchemaRegistry()
    rejected = []
    for number, declaration in read_declarations(path):
        try:
            registry.add_table(declaration)
        except SchemaParseError as e:
            rejected.append((number, e))
    return registry, rejected


def load_config(config_file: str | None) -> Config:
    if config_file:
        return Config.from_toml(config_file)
    try:
        return Config.find_and_load()
    except FileNotFoundError:
        return Config()


def echo_rejected(rejected: list[tuple[int, SchemaParseError]]) -> None:
    for number, error in rejected:
        click.echo(f"Line {number}: {error}", err=True)


schema_argument = click.argument(
    "schema", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


@click.group()
@click.version_option(package_name="seedsql")
def cli() -> None:
    """seedsql - Generate constraint-valid SQL INSERT fixtures."""
    pass


@cli.command()
@schema_argument
@click.option("--output", "-o", help="Output SQL file (default: from config)")
@click.option("--append", is_flag=True, help="Append instead of truncating the output file")
@click.option("--max-attempts", type=click.IntRange(min=1), help="Resampling cap per value")
@click.option("--no-ordering", is_flag=True, help="Generate tables in declaration order")
@click.option("--config", "config_file", type=click.Path(exists=True), help="seedsql.toml to use")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def generate(
    schema: Path,
    output: str | None,
    append: bool,
    max_attempts: int | None,
    no_ordering: bool,
    config_file: str | None,
    verbose: bool,
) -> None:
    """Generate INSERT statements for every table in SCHEMA."""
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.output.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = config.generation
    if max_attempts is not None:
        settings = settings.model_copy(update={"max_attempts": max_attempts})
    if no_ordering:
        settings = settings.model_copy(update={"order_by_dependencies": False})

    registry, rejected = load_registry(schema)
    echo_rejected(rejected)
    if not len(registry):
        click.echo("Error: no valid table declarations found", err=True)
        sys.exit(1)

    output_path = Path(output).expanduser() if output else config.get_output_path()
    truncate = config.output.truncate and not append

    try:
        backend = FileBackend(output_path, truncate=truncate)
        with click.progressbar(length=registry.total_rows, label="Generating") as bar:
            report = generate_rows(
                registry,
                backend,
                settings=settings,
                on_row=lambda table, written, total: bar.update(1),
            )
    except SeedSQLError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for table, rows in report.rows_per_table.items():
        click.echo(f"  {table}: {rows} rows")
    click.echo(f"✓ Wrote {report.total_rows} insert statements to {report.output}")


@cli.command()
@schema_argument
def check(schema: Path) -> None:
    """Parse SCHEMA and report accepted and rejected tables."""
    registry, rejected = load_registry(schema)

    for spec in registry.tables:
        click.echo(f"✓ {spec.name} ({spec.count} rows, {len(spec.attributes)} attributes)")
    echo_rejected(rejected)

    if rejected:
        click.echo(f"✗ {len(rejected)} declaration(s) rejected", err=True)
        sys.exit(1)


@cli.command()
@click.argument("view", type=click.Choice(["tables", "keys", "references"]))
@schema_argument
@click.argument("table", required=False)
def show(view: str, schema: Path, table: str | None) -> None:
    """Show the declared tables, keys or references in SCHEMA."""
    registry, rejected = load_registry(schema)
    echo_rejected(rejected)

    if table is not None and table not in registry:
        click.echo(f"Error: Table '{table}' not found", err=True)
        sys.exit(1)

    names = [table] if table else [spec.name for spec in registry.tables]

    for name in names:
        if view == "tables":
            spec = registry.get_table(name)
            click.echo(f"{spec.name} ({spec.count} rows)")
            for attribute in spec.attributes:
                role = f"{attribute.role.value} " if attribute.role.value else ""
                ref = f" -> {attribute.reference}" if attribute.reference else ""
                type_text = attribute.type_text or attribute.shape.value
                click.echo(f"  {role}{attribute.name} {type_text}{ref}")
        elif view == "keys":
            keys = registry.keys[name]
            listed = ", ".join(f"{key.name} ({key.role.value})" for key in keys)
            click.echo(f"{name}: {listed or '-'}")
        else:
            refs = registry.references[name]
            listed = ", ".join(str(ref) for ref in refs)
            click.echo(f"{name}: {listed or '-'}")


@cli.command()
def types() -> None:
    """List the supported attribute types."""
    for tag in VALID_TYPES:
        suffix = "(n)" if tag in SIZED_TYPES else ""
        click.echo(f"{tag}{suffix}")


if __name__ == "__main__":
    cli()
