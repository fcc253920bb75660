"""Composite primary-key deduplication."""

import logging
import random

from seedsql.exceptions import DomainExhaustedError, SchemaReferenceError
from seedsql.models import AttributeDefinition, TableSpec
from seedsql.schema import SchemaRegistry
from seedsql.state import DEFAULT_MAX_ATTEMPTS, GenerationState, bounded_attempts

logger = logging.getLogger(__name__)


class CompositeKeyDeduplicator:
    """
    Keep multi-column primary keys unique across a table's rows.

    A two-column key also collides with its reversal, so ``(1, 2)`` and
    ``(2, 1)`` are the same pair. Longer keys compare in exact order only.

    On collision only foreign key columns are redrawn, from their referenced
    key's history; other key columns keep their value. Composite keys are
    therefore fully repairable only when every key column is a foreign key.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        state: GenerationState,
        max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
    ):
        self.registry = registry
        self.state = state
        self.max_attempts = max_attempts

    def deduplicate(self, table: TableSpec, row: dict[str, str]) -> tuple[list[str], bool]:
        """
        Validate and, if needed, repair the row's primary-key tuple.

        Args:
            table: Composite-keyed table
            row: Resolved row; key column entries are overwritten on repair

        Returns:
            Tuple of (accepted key values, whether they were regenerated)

        Raises:
            DomainExhaustedError: If no unused tuple is found within the cap
        """
        keys = table.primary_keys
        pair = [row[key.name] for key in keys]
        changed = False

        if self.state.has_pair(table.name, pair):
            pair = self._regenerate(table, keys, pair, row)
            changed = True
            for key, value in zip(keys, pair):
                row[key.name] = value
            logger.debug(f"Regenerated composite key for '{table.name}': {pair}")

        self.state.record_pair(table.name, pair)

        # Foreign key columns defer their index entry until the tuple is final
        for key, value in zip(keys, pair):
            if key.is_foreign:
                self.state.record(table.name, key.name, value)

        return pair, changed

    def _regenerate(
        self,
        table: TableSpec,
        keys: list[AttributeDefinition],
        pair: list[str],
        row: dict[str, str],
    ) -> list[str]:
        description = "(" + ", ".join(key.name for key in keys) + ")"
        taken = {
            key.name: self._bound_outside_key(table, key, row)
            for key in keys
            if key.is_foreign
        }

        for _ in bounded_attempts(self.max_attempts):
            candidate: list[str] = []
            for key, current in zip(keys, pair):
                if key.is_foreign:
                    candidate.append(
                        self._draw(table, key, candidate + taken[key.name], description)
                    )
                else:
                    candidate.append(current)
            if not self.state.has_pair(table.name, candidate):
                return candidate
            pair = candidate

        raise DomainExhaustedError(table.name, description, self.max_attempts)

    def _bound_outside_key(
        self, table: TableSpec, key: AttributeDefinition, row: dict[str, str]
    ) -> list[str]:
        """Values this row already took from the key's reference in non-key columns."""
        ref = key.reference
        return [
            row[attribute.name]
            for attribute in table.attributes
            if attribute.is_foreign
            and not attribute.role.is_primary
            and attribute.reference.table == ref.table
            and attribute.reference.attribute.casefold() == ref.attribute.casefold()
        ]

    def _draw(
        self,
        table: TableSpec,
        key: AttributeDefinition,
        chosen: list[str],
        description: str,
    ) -> str:
        """Sample a referenced value not already chosen in this attempt."""
        ref = key.reference
        referenced = self.registry.find_key(ref.table, ref.attribute)
        history = self.state.history(ref.table, referenced.name) if referenced else []
        if not history:
            raise SchemaReferenceError(
                table.name, key.name, ref.table, ref.attribute, "referenced key has no values"
            )

        for _ in bounded_attempts(self.max_attempts):
            value = random.choice(history)
            if value not in chosen:
                return value
        raise DomainExhaustedError(table.name, description, self.max_attempts)
