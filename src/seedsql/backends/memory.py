"""Memory backend - keeps statements in memory for testing without files."""

from seedsql.models import TableSpec


class MemoryBackend:
    """
    In-memory backend collecting generated statements.

    Use case: fast unit tests and library callers that post-process the SQL.
    """

    def __init__(self):
        """Initialize memory backend with empty state."""
        self._statements: dict[str, list[str]] = {}
        self._order: list[str] = []

    def write_statement(self, table: TableSpec, statement: str) -> None:
        """Store one statement for a table."""
        self._statements.setdefault(table.name, []).append(statement)
        self._order.append(statement)

    def get_statements(self, table_name: str) -> list[str]:
        """
        Get statements generated for a table.

        Args:
            table_name: Table name

        Returns:
            Statements in generation order (empty if none)
        """
        return list(self._statements.get(table_name, []))

    @property
    def statements(self) -> list[str]:
        """All statements in the order they were written."""
        return list(self._order)

    def to_sql(self) -> str:
        """All statements as file content, one per line."""
        return "".join(statement + "\n" for statement in self._order)

    def describe(self) -> str:
        return "memory"

    def clear(self):
        """Clear all stored statements."""
        self._statements.clear()
        self._order.clear()
