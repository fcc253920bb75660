"""Dependency graph ordering tables so referenced tables generate first."""

from collections import deque

from seedsql.exceptions import CircularDependencyError
from seedsql.models import TableSpec


class DependencyGraph:
    """Directed graph for table dependencies, ordered by declaration."""

    def __init__(self):
        # dict keys keep declaration order for a stable sort
        self._graph: dict[str, dict[str, None]] = {}

    @classmethod
    def from_tables(cls, tables: list[TableSpec]) -> "DependencyGraph":
        """
        Build the graph from declared tables.

        Self references and references to undeclared tables add no edge;
        the resolver reports those when it reaches them.
        """
        graph = cls()
        for spec in tables:
            graph.add_table(spec.name)
        declared = {spec.name for spec in tables}
        for spec in tables:
            for ref in spec.references:
                if ref.table != spec.name and ref.table in declared:
                    graph.add_dependency(spec.name, ref.table)
        return graph

    def add_table(self, table: str) -> None:
        """Add a table to the graph."""
        self._graph.setdefault(table, {})

    def add_dependency(self, table: str, depends_on: str) -> None:
        """Add a dependency: table depends on depends_on."""
        self.add_table(depends_on)
        self.add_table(table)
        self._graph[table][depends_on] = None

    def get_dependencies(self, table: str) -> list[str]:
        """Get all tables that this table depends on."""
        return list(self._graph.get(table, {}))

    def topological_sort(self) -> list[str]:
        """
        Sort tables in dependency order using Kahn's algorithm.

        Among tables whose dependencies are satisfied, declaration order wins.

        Returns:
            Tables in order such that dependencies come before dependents.

        Raises:
            CircularDependencyError: If circular dependency detected
        """
        in_degree = {table: len(deps) for table, deps in self._graph.items()}

        queue = deque(table for table, degree in in_degree.items() if degree == 0)
        result = []

        while queue:
            table = queue.popleft()
            result.append(table)

            for other_table, deps in self._graph.items():
                if table in deps:
                    in_degree[other_table] -= 1
                    if in_degree[other_table] == 0:
                        queue.append(other_table)

        if len(result) != len(self._graph):
            missing = set(self._graph) - set(result)
            raise CircularDependencyError(missing)

        return result
