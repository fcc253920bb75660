"""Output backends for rendered INSERT statements."""

from seedsql.backends.file import FileBackend
from seedsql.backends.memory import MemoryBackend

__all__ = ["FileBackend", "MemoryBackend"]
