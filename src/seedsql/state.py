"""Per-run generation state shared by the resolver and the deduplicator."""

from collections.abc import Iterator, Sequence

# Default cap on resampling before a domain is reported exhausted
DEFAULT_MAX_ATTEMPTS = 10_000


def bounded_attempts(max_attempts: int | None) -> Iterator[int]:
    """
    Yield attempt numbers (1-based) until the cap is reached.

    Callers return from inside the loop on success and raise
    ``DomainExhaustedError`` once the loop runs out.

    Args:
        max_attempts: Attempt cap, or None to retry forever
    """
    attempt = 0
    while max_attempts is None or attempt < max_attempts:
        attempt += 1
        yield attempt


class GenerationState:
    """
    Append-only value history for one generation run.

    Holds:
        - the uniqueness index: ``(table, attribute)`` → every keyed value
          generated so far, in generation order
        - the composite key history: table → accepted primary-key tuples

    Both grow monotonically and are never pruned. Create one per run.
    """

    def __init__(self):
        self._index: dict[tuple[str, str], list[str]] = {}
        self._index_seen: dict[tuple[str, str], set[str]] = {}
        self._pairs: dict[str, list[tuple[str, ...]]] = {}
        self._pairs_seen: dict[str, set[tuple[str, ...]]] = {}

    def history(self, table: str, attribute: str) -> Sequence[str]:
        """Values recorded for an attribute (empty if none)."""
        return self._index.get((table, attribute), [])

    def contains(self, table: str, attribute: str, value: str) -> bool:
        return value in self._index_seen.get((table, attribute), ())

    def record(self, table: str, attribute: str, value: str) -> None:
        key = (table, attribute)
        self._index.setdefault(key, []).append(value)
        self._index_seen.setdefault(key, set()).add(value)

    def pairs(self, table: str) -> Sequence[tuple[str, ...]]:
        """Accepted primary-key tuples for a composite table."""
        return self._pairs.get(table, [])

    def has_pair(self, table: str, pair: Sequence[str]) -> bool:
        """
        Check a key tuple against the table's history.

        Two-column tuples also match their reversal; tuples of other arities
        match on exact order only.
        """
        seen = self._pairs_seen.get(table)
        if not seen:
            return False
        candidate = tuple(pair)
        if candidate in seen:
            return True
        return len(candidate) == 2 and candidate[::-1] in seen

    def record_pair(self, table: str, pair: Sequence[str]) -> None:
        candidate = tuple(pair)
        self._pairs.setdefault(table, []).append(candidate)
        self._pairs_seen.setdefault(table, set()).add(candidate)
