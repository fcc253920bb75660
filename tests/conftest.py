"""Pytest configuration and shared fixtures."""

import pytest

from seedsql import MemoryBackend, SchemaRegistry, SeedSQLBuilder
from seedsql.resolver import ValueResolver
from seedsql.state import GenerationState

PROFILE = "5 profile (PK userID INTEGER, name NAME, AK email EMAIL)"
FRIEND = (
    "3 friend (PK/FK userID1 INTEGER profile(userID), "
    "PK/FK userID2 INTEGER profile(userID))"
)


@pytest.fixture
def registry() -> SchemaRegistry:
    """Provide an empty schema registry."""
    return SchemaRegistry()


@pytest.fixture
def profile_registry(registry: SchemaRegistry) -> SchemaRegistry:
    """Registry with the profile table declared."""
    registry.add_table(PROFILE)
    return registry


@pytest.fixture
def state() -> GenerationState:
    return GenerationState()


@pytest.fixture
def resolver(profile_registry: SchemaRegistry, state: GenerationState) -> ValueResolver:
    """Resolver over the profile registry with a small attempt cap."""
    return ValueResolver(profile_registry, state, max_attempts=500)


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def builder() -> SeedSQLBuilder:
    """Provide a builder with default settings."""
    return SeedSQLBuilder()


def resolve_rows(resolver: ValueResolver, table_name: str, count: int | None = None):
    """Resolve ``count`` rows (default: the declared count) for a table."""
    table = resolver.registry.get_table(table_name)
    return [resolver.resolve_row(table) for _ in range(count or table.count)]
