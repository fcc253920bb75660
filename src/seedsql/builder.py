"""SeedSQLBuilder API for declaring tables and generating INSERT statements."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from seedsql.assembler import render_insert
from seedsql.backends import FileBackend
from seedsql.composite import CompositeKeyDeduplicator
from seedsql.config import GenerationConfig
from seedsql.dependency import DependencyGraph
from seedsql.generators import FakerGenerator
from seedsql.models import GenerationReport, TableSpec
from seedsql.resolver import ValueResolver
from seedsql.schema import SchemaRegistry
from seedsql.state import GenerationState

logger = logging.getLogger(__name__)

# Called after every written row with (table, rows written so far, total rows)
RowCallback = Callable[[TableSpec, int, int], None]


class Backend(Protocol):
    def write_statement(self, table: TableSpec, statement: str) -> None: ...

    def describe(self) -> str: ...


def add_table(registry: SchemaRegistry, declaration: str) -> TableSpec:
    """
    Register a table declaration.

    Args:
        registry: Registry receiving the table
        declaration: ``count name (attr, ...)``

    Returns:
        The accepted TableSpec

    Raises:
        SchemaParseError: If the declaration is rejected (registry unchanged)
    """
    return registry.add_table(declaration)


def generation_order(
    registry: SchemaRegistry, order_by_dependencies: bool = True
) -> list[TableSpec]:
    """
    Tables in the order they will be generated.

    Raises:
        CircularDependencyError: If ordering is enabled and references form a cycle
    """
    tables = registry.tables
    if not order_by_dependencies:
        return tables
    order = DependencyGraph.from_tables(tables).topological_sort()
    by_name = {spec.name: spec for spec in tables}
    return [by_name[name] for name in order]


def generate_rows(
    registry: SchemaRegistry,
    backend: Backend,
    settings: GenerationConfig | None = None,
    total_rows: int | None = None,
    on_row: RowCallback | None = None,
    generator: FakerGenerator | None = None,
) -> GenerationReport:
    """
    Generate every requested row of every declared table into a backend.

    A fresh GenerationState is created for the run, so separate calls never
    share uniqueness or reference history.

    Args:
        registry: Declared tables
        backend: Destination for rendered statements
        settings: Generation settings (defaults if omitted)
        total_rows: Total used for progress reporting (defaults to the registry total)
        on_row: Progress callback invoked after each written row
        generator: Value catalog (a new FakerGenerator if omitted)

    Returns:
        GenerationReport for the run

    Raises:
        SchemaReferenceError: If a foreign key cannot be resolved
        CircularDependencyError: If table references form a cycle
        DomainExhaustedError: If a value domain runs out within the attempt cap
        OutputWriteError: If the backend cannot write
    """
    settings = settings or GenerationConfig()
    total = total_rows if total_rows is not None else registry.total_rows
    state = GenerationState()
    resolver = ValueResolver(registry, state, generator, settings.max_attempts)
    deduplicator = CompositeKeyDeduplicator(registry, state, settings.max_attempts)
    report = GenerationReport(output=backend.describe())

    written = 0
    for table in generation_order(registry, settings.order_by_dependencies):
        logger.info(f"Generating {table.count} rows for '{table.name}'")
        report.rows_per_table[table.name] = 0

        for _ in range(table.count):
            row = resolver.resolve_row(table)

            if table.is_composite:
                _, changed = deduplicator.deduplicate(table, row)
                if changed:
                    report.regenerated_keys[table.name] = (
                        report.regenerated_keys.get(table.name, 0) + 1
                    )

            backend.write_statement(table, render_insert(table, row))
            written += 1
            report.rows_per_table[table.name] += 1
            if on_row is not None:
                on_row(table, written, total)

        if report.regenerated_keys.get(table.name):
            logger.warning(
                f"Regenerated {report.regenerated_keys[table.name]} duplicate "
                f"composite keys for '{table.name}'"
            )

    logger.info(f"Generated {written}/{total} insert statements into {report.output}")
    return report


def generate_all(
    registry: SchemaRegistry,
    output_path: str | Path,
    total_rows: int | None = None,
    settings: GenerationConfig | None = None,
    on_row: RowCallback | None = None,
) -> GenerationReport:
    """
    Generate every declared table and append the statements to a file.

    The file is appended to, never truncated; rows written before a fatal
    error stay in place.

    Raises:
        Same as ``generate_rows``.
    """
    return generate_rows(
        registry,
        FileBackend(output_path),
        settings=settings,
        total_rows=total_rows,
        on_row=on_row,
    )


class SeedSQLBuilder:
    """Declarative API for building and executing a generation plan."""

    def __init__(self, settings: GenerationConfig | None = None):
        """
        Initialize SeedSQLBuilder.

        Args:
            settings: Generation settings (defaults if omitted)
        """
        self.settings = settings or GenerationConfig()
        self.registry = SchemaRegistry()

    def add(self, declaration: str) -> "SeedSQLBuilder":
        """
        Add a table declaration to the plan.

        Args:
            declaration: ``count name (attr, ...)``

        Returns:
            Self for chaining

        Raises:
            SchemaParseError: If the declaration is invalid
        """
        add_table(self.registry, declaration)
        return self

    def remove(self, table: str) -> "SeedSQLBuilder":
        """
        Remove a table from the plan.

        Raises:
            KeyError: If the table is not declared
        """
        self.registry.remove_table(table)
        return self

    def execute(self, backend: Backend, on_row: RowCallback | None = None) -> GenerationReport:
        """
        Generate all declared tables into a backend.

        Returns:
            GenerationReport for the run
        """
        return generate_rows(self.registry, backend, settings=self.settings, on_row=on_row)
