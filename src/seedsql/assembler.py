"""Render resolved rows as SQL INSERT statements."""

import re
from collections.abc import Mapping

from seedsql.exceptions import GenerationInvariantError
from seedsql.models import AttributeDefinition, AttributeShape, TableSpec
from seedsql.resolver import COMPOUND_SEPARATOR

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

BARE_KEYWORDS = ("NULL", "TRUE", "FALSE")


def is_numeric(value: str) -> bool:
    """Check if a value reads as a finite decimal number."""
    return bool(_NUMBER_PATTERN.match(value))


def render_literal(value: str) -> str:
    """
    Render one value as a SQL literal.

    Rules, in priority order:
        - numbers are emitted unquoted
        - ``NULL`` / ``TRUE`` / ``FALSE`` (any case) become bare keywords
        - ``0`` is emitted as ``0``
        - anything else is single-quoted with embedded quotes doubled

    Examples:
        >>> render_literal("42.5")
        '42.5'
        >>> render_literal("null")
        'NULL'
        >>> render_literal("Bob Johnson")
        "'Bob Johnson'"
    """
    if is_numeric(value):
        return value
    upper = value.upper()
    if upper == "NULL":
        return "NULL"
    if value == "0":
        return "0"
    if upper in ("TRUE", "FALSE"):
        return upper
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def parse_literal(literal: str) -> str:
    """
    Recover the value a scalar literal was rendered from.

    Inverse of ``render_literal`` for values the catalog produces
    (keywords come back upper-cased).
    """
    if len(literal) >= 2 and literal.startswith("'") and literal.endswith("'"):
        return literal[1:-1].replace("''", "'")
    return literal


def render_compound(value: str) -> str:
    """Render a compound value as a nested tuple, e.g. ``('Ann','Lee')``."""
    leaves = value.split(COMPOUND_SEPARATOR)
    return "(" + ",".join(render_literal(leaf) for leaf in leaves) + ")"


def render_column(attribute: AttributeDefinition, row: Mapping[str, str]) -> str:
    """Render one column of a resolved row."""
    if attribute.name not in row:
        raise GenerationInvariantError(
            f"no value generated for attribute '{attribute.name}'"
        )
    value = row[attribute.name].strip()
    if attribute.shape in (AttributeShape.COMPOUND, AttributeShape.FOREIGN_COMPOUND):
        return render_compound(value)
    if attribute.shape in (
        AttributeShape.DEFAULT_LITERAL,
        AttributeShape.SCALAR,
        AttributeShape.KEYED,
        AttributeShape.FOREIGN,
    ):
        return render_literal(value)
    raise GenerationInvariantError(f"unknown attribute shape '{attribute.shape}'")


def render_insert(table: TableSpec, row: Mapping[str, str]) -> str:
    """
    Render a resolved row as ``INSERT INTO <table> VALUES (...);``.

    Args:
        table: Table the row belongs to (defines column order and shapes)
        row: Attribute name → generated value

    Returns:
        The INSERT statement, without a trailing newline

    Raises:
        GenerationInvariantError: If a column has no value or an unknown shape
    """
    values = ", ".join(render_column(attribute, row) for attribute in table.attributes)
    return f"INSERT INTO {table.name} VALUES ({values});"
