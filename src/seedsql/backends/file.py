"""File backend - appends each statement to a SQL file."""

import logging
from pathlib import Path

from seedsql.exceptions import OutputWriteError
from seedsql.models import TableSpec

logger = logging.getLogger(__name__)


class FileBackend:
    """
    Append INSERT statements to a UTF-8 file, one per line.

    The file is opened once per statement, so every completed row is on disk
    before the next one is generated. Nothing is rolled back on failure.
    """

    def __init__(self, path: str | Path, truncate: bool = False):
        """
        Initialize backend.

        Args:
            path: Output file (created if missing)
            truncate: Empty the file before the first statement

        Raises:
            OutputWriteError: If the file cannot be truncated
        """
        self.path = Path(path).expanduser()
        if truncate:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("", encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(self.path), e) from e
            logger.info(f"Truncated output file '{self.path}'")

    def write_statement(self, table: TableSpec, statement: str) -> None:
        """
        Append one statement.

        Raises:
            OutputWriteError: If the file cannot be opened or written
        """
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(statement + "\n")
        except OSError as e:
            raise OutputWriteError(str(self.path), e) from e

    def describe(self) -> str:
        return str(self.path)
