"""Uniqueness and reference resolution: fills one row's values."""

import logging
import random

from seedsql.exceptions import (
    DomainExhaustedError,
    GenerationInvariantError,
    SchemaReferenceError,
)
from seedsql.generators import FakerGenerator
from seedsql.models import AttributeDefinition, AttributeShape, TableSpec
from seedsql.schema import SchemaRegistry
from seedsql.state import DEFAULT_MAX_ATTEMPTS, GenerationState, bounded_attempts

logger = logging.getLogger(__name__)

# Separator joining compound leaves into one atomic value
COMPOUND_SEPARATOR = ", "


class ValueResolver:
    """
    Resolve every attribute of a row to a concrete literal.

    Honors key roles using the run's GenerationState:
        - unkeyed: one catalog draw
        - PK/AK: resample until unused for that attribute
        - FK (optionally PK/AK): sample from the referenced key's history
        - compound: leaves generated in order and treated as one value
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        state: GenerationState,
        generator: FakerGenerator | None = None,
        max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
    ):
        self.registry = registry
        self.state = state
        self.generator = generator or FakerGenerator()
        self.max_attempts = max_attempts

    def resolve_row(self, table: TableSpec) -> dict[str, str]:
        """
        Generate one row.

        Args:
            table: Table being generated

        Returns:
            Attribute name → literal value, in declaration order

        Raises:
            SchemaReferenceError: If a foreign key cannot be resolved
            DomainExhaustedError: If no acceptable value is found within the cap
        """
        row: dict[str, str] = {}
        # (referenced table, referenced key) → {local attribute: value}
        bindings: dict[tuple[str, str], dict[str, str]] = {}
        # In-progress values of this row's composite key columns
        key_values: list[str] = []

        for attribute in table.attributes:
            in_composite_key = table.is_composite and attribute.role.is_primary
            row_keys = key_values if in_composite_key else None

            if attribute.shape is AttributeShape.DEFAULT_LITERAL:
                value = attribute.name
            elif attribute.is_foreign:
                value = self._resolve_foreign(table, attribute, row, bindings, row_keys)
            elif attribute.role.is_unique:
                value = self._resolve_unique(table, attribute, row, row_keys)
            else:
                value = self.generate_value(attribute, row)

            row[attribute.name] = value
            if in_composite_key:
                key_values.append(value)

        return row

    def generate_value(self, attribute: AttributeDefinition, row: dict[str, str]) -> str:
        """
        Draw one value for an attribute from the catalog.

        Compound values are the leaves joined with ``", "``; commas inside a
        leaf are dropped so the joined value splits back unambiguously.
        """
        if attribute.is_compound:
            leaves = [
                self.generator.generate(leaf.type_tag, leaf.size, row).replace(",", "")
                for leaf in attribute.leaves
            ]
            return COMPOUND_SEPARATOR.join(leaves)
        if not attribute.type_tag:
            raise GenerationInvariantError(f"attribute '{attribute.name}' has no type tag")
        return self.generator.generate(attribute.type_tag, attribute.size, row)

    def _resolve_unique(
        self,
        table: TableSpec,
        attribute: AttributeDefinition,
        row: dict[str, str],
        key_values: list[str] | None,
    ) -> str:
        for attempt in bounded_attempts(self.max_attempts):
            value = self.generate_value(attribute, row)
            if self.state.contains(table.name, attribute.name, value):
                logger.debug(f"Duplicate '{table.name}.{attribute.name}' value, attempt {attempt}")
                continue
            if key_values is not None and value in key_values:
                continue
            self.state.record(table.name, attribute.name, value)
            return value
        raise DomainExhaustedError(table.name, attribute.name, self.max_attempts)

    def _resolve_foreign(
        self,
        table: TableSpec,
        attribute: AttributeDefinition,
        row: dict[str, str],
        bindings: dict[tuple[str, str], dict[str, str]],
        key_values: list[str] | None,
    ) -> str:
        ref = attribute.reference
        key = self.registry.find_key(ref.table, ref.attribute)
        if key is None:
            reason = (
                f"table '{ref.table}' is not declared"
                if ref.table not in self.registry
                else f"'{ref.attribute}' is not a key of '{ref.table}'"
            )
            raise SchemaReferenceError(table.name, attribute.name, ref.table, ref.attribute, reason)

        history = self.state.history(ref.table, key.name)
        if not history:
            raise SchemaReferenceError(
                table.name,
                attribute.name,
                ref.table,
                ref.attribute,
                "no values have been generated for the referenced key",
            )

        bound = bindings.setdefault((ref.table, key.name), {})
        if attribute.name in bound:
            raise SchemaReferenceError(
                table.name,
                attribute.name,
                ref.table,
                ref.attribute,
                "attribute is bound to the same reference twice in one row",
            )

        # Composite key columns are checked as a tuple by the deduplicator
        check_own = attribute.role.is_unique and key_values is None

        for attempt in bounded_attempts(self.max_attempts):
            value = random.choice(history)
            if value in bound.values():
                continue
            if key_values is not None and value in key_values:
                continue
            if check_own and self.state.contains(table.name, attribute.name, value):
                logger.debug(
                    f"Reference '{value}' already used by "
                    f"'{table.name}.{attribute.name}', attempt {attempt}"
                )
                continue

            bound[attribute.name] = value
            if check_own:
                self.state.record(table.name, attribute.name, value)
            return value
        raise DomainExhaustedError(table.name, attribute.name, self.max_attempts)
