"""Schema registry accumulating declared tables, keys and references."""

import logging

from seedsql.exceptions import SchemaParseError
from seedsql.models import AttributeDefinition, ForeignRef, TableSpec
from seedsql.parser import parse_table

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    All tables declared for one run.

    Keeps three views, each filled once per accepted table:
        - table name → TableSpec (declaration order preserved)
        - table name → key attributes (PK/AK, including PK/FK and AK/FK)
        - table name → declared foreign references
    """

    def __init__(self):
        self._tables: dict[str, TableSpec] = {}
        self._keys: dict[str, list[AttributeDefinition]] = {}
        self._references: dict[str, list[ForeignRef]] = {}

    def add_table(self, declaration: str) -> TableSpec:
        """
        Parse and register a table declaration.

        Args:
            declaration: ``count name (attr, ...)``

        Returns:
            The registered TableSpec

        Raises:
            SchemaParseError: If the declaration is invalid or the table name
                is already declared. The registry is left unchanged.
        """
        spec = parse_table(declaration)
        if spec.name in self._tables:
            raise SchemaParseError(spec.name, "table is already declared", spec.name)

        self._tables[spec.name] = spec
        self._keys[spec.name] = spec.key_attributes
        self._references[spec.name] = spec.references
        logger.info(f"{spec.count} insert statements added for '{spec.name}'")
        return spec

    def remove_table(self, name: str) -> TableSpec:
        """
        Remove a declared table.

        Raises:
            KeyError: If the table is not declared
        """
        if name not in self._tables:
            raise KeyError(f"Table '{name}' not found")
        spec = self._tables.pop(name)
        del self._keys[name]
        del self._references[name]
        logger.info(f"Removed table '{name}'")
        return spec

    def get_table(self, name: str) -> TableSpec | None:
        return self._tables.get(name)

    def find_key(self, table: str, attribute: str) -> AttributeDefinition | None:
        """
        Find a key attribute of a table by name (case-insensitive).

        Args:
            table: Table name
            attribute: Attribute name

        Returns:
            The key AttributeDefinition or None if the table has no such key
        """
        folded = attribute.casefold()
        for key in self._keys.get(table, []):
            if key.name.casefold() == folded:
                return key
        return None

    @property
    def tables(self) -> list[TableSpec]:
        """Declared tables in declaration order."""
        return list(self._tables.values())

    @property
    def keys(self) -> dict[str, list[AttributeDefinition]]:
        return {name: list(keys) for name, keys in self._keys.items()}

    @property
    def references(self) -> dict[str, list[ForeignRef]]:
        return {name: list(refs) for name, refs in self._references.items()}

    @property
    def total_rows(self) -> int:
        """Total number of insert statements requested."""
        return sum(spec.count for spec in self._tables.values())

    def __contains__(self, name: str) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)
