"""Custom exceptions with helpful error messages."""


class SeedSQLError(Exception):
    """Base exception for seedsql errors."""

    pass


class SchemaParseError(SeedSQLError):
    """A table declaration or attribute could not be parsed.

    Only the offending ``add`` is rejected; tables accepted earlier stay valid.
    """

    def __init__(self, attribute: str, reason: str, table: str | None = None):
        self.attribute = attribute
        self.reason = reason
        self.table = table
        where = f" in table '{table}'" if table else ""
        super().__init__(
            f"Invalid attribute '{attribute}'{where}: {reason}\n\n"
            f"Suggestions:\n"
            f"1. Use one of the forms: 'name TYPE', 'PK name TYPE', "
            f"'FK name TYPE table(attribute)'\n"
            f"2. Compound columns: 'name COMPOUND (a TYPE; b TYPE)'\n"
            f"3. Run 'seedsql types' to list valid types"
        )


class SchemaReferenceError(SeedSQLError):
    """A foreign key cannot be resolved against the declared keys."""

    def __init__(
        self,
        table: str,
        attribute: str,
        referenced_table: str,
        referenced_attribute: str,
        reason: str,
    ):
        self.table = table
        self.attribute = attribute
        self.referenced_table = referenced_table
        self.referenced_attribute = referenced_attribute
        super().__init__(
            f"Could not resolve foreign key '{table}.{attribute}' referencing "
            f"'{referenced_table}({referenced_attribute})': {reason}\n\n"
            f"Suggestions:\n"
            f"1. Declare '{referenced_attribute}' as PK or AK in '{referenced_table}'\n"
            f"2. Ensure '{referenced_table}' is added and generates at least one row\n"
            f"3. Check that each column references a foreign attribute only once"
        )


class CircularDependencyError(SeedSQLError):
    """Circular dependency detected in table relationships."""

    def __init__(self, tables: set[str]):
        tables_str = ", ".join(sorted(tables))
        super().__init__(
            f"Circular dependency detected involving tables: {tables_str}\n\n"
            f"Suggestions:\n"
            f"1. Check foreign key references for cycles\n"
            f"2. Disable ordering (--no-ordering) and declare tables in a valid order"
        )


class GenerationInvariantError(SeedSQLError):
    """A type tag or attribute shape escaped the parser's closed set.

    This signals a contract violation between components, not a user error.
    """

    def __init__(self, detail: str):
        super().__init__(f"Internal generation error: {detail}")


class DomainExhaustedError(SeedSQLError):
    """Could not find an unused value within the attempt cap."""

    def __init__(self, table: str, attribute: str, attempts: int):
        self.table = table
        self.attribute = attribute
        self.attempts = attempts
        super().__init__(
            f"Could not generate a unique value for '{table}.{attribute}' "
            f"after {attempts} attempts.\n\n"
            f"Suggestions:\n"
            f"1. Request fewer rows for '{table}'\n"
            f"2. Generate more rows for the referenced table\n"
            f"3. Use a type with a larger value domain"
        )


class OutputWriteError(SeedSQLError):
    """The output destination cannot be opened or appended to."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        super().__init__(f"Unable to write to '{path}': {cause}")
