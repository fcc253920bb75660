"""
seedsql - Constraint-Valid SQL Fixture Generation

Declares tables in a compact grammar and emits INSERT statements that respect
primary, alternate, foreign and composite keys.
"""

from seedsql.assembler import parse_literal, render_insert, render_literal
from seedsql.backends import FileBackend, MemoryBackend
from seedsql.builder import SeedSQLBuilder, add_table, generate_all, generate_rows
from seedsql.exceptions import (
    CircularDependencyError,
    DomainExhaustedError,
    GenerationInvariantError,
    OutputWriteError,
    SchemaParseError,
    SchemaReferenceError,
    SeedSQLError,
)
from seedsql.models import AttributeDefinition, AttributeShape, KeyRole, TableSpec
from seedsql.parser import parse_attribute, parse_table
from seedsql.schema import SchemaRegistry

__version__ = "0.1.0"

__all__ = [
    "SeedSQLBuilder",
    "SchemaRegistry",
    "add_table",
    "generate_all",
    "generate_rows",
    "parse_table",
    "parse_attribute",
    "render_insert",
    "render_literal",
    "parse_literal",
    "FileBackend",
    "MemoryBackend",
    "AttributeDefinition",
    "AttributeShape",
    "KeyRole",
    "TableSpec",
    "SeedSQLError",
    "SchemaParseError",
    "SchemaReferenceError",
    "CircularDependencyError",
    "GenerationInvariantError",
    "DomainExhaustedError",
    "OutputWriteError",
]
