"""Type catalog: valid type tags, prefix resolution and size parameters."""

import re

# Semantic tags produce domain-realistic values; the rest are SQL scalars.
SEMANTIC_TYPES = (
    "CITY_SHORT",
    "CITY_US",
    "COMPANYNAME",
    "COUNTRY",
    "EMAIL",
    "GROUP",
    "INDUSTRY",
    "NAME",
    "PASSWORD",
    "PHONE",
    "PROFESSION",
    "SSN",
    "STATE",
    "STATE_US",
    "STREET_ADDRESS",
    "STREET_NAME_US",
    "USERNAME",
    "ZIP_US",
)

SQL_TYPES = (
    "BIGINT",
    "BIT",
    "BOOLEAN",
    "BYTEA",
    "CHAR",
    "CIDR",
    "DATE",
    "DECIMAL",
    "FLOAT4",
    "FLOAT8",
    "INET",
    "INTEGER",
    "INTERVAL",
    "JSON",
    "JSONB",
    "MACADDR",
    "MONEY",
    "NUMERIC",
    "REAL",
    "SERIAL",
    "SMALLINT",
    "TEXT",
    "TIME",
    "TIMESTAMP",
    "UUID",
    "VARCHAR",
    "XML",
)

COMPOUND = "COMPOUND"

VALID_TYPES = tuple(sorted(SEMANTIC_TYPES + SQL_TYPES))

# Longest first so STATE_US wins over STATE and TIMESTAMP over TIME.
_BY_LENGTH = tuple(sorted(VALID_TYPES, key=len, reverse=True))

# Tags that accept a parenthesized size suffix
SIZED_TYPES = ("CHAR", "VARCHAR", "PASSWORD", "USERNAME", "MONEY", "DECIMAL", "NUMERIC")

_SIZE_PATTERN = re.compile(r"\((?P<params>[^()]*)\)\s*$")


def resolve_type_tag(type_text: str) -> str | None:
    """
    Resolve declared type text to its canonical catalog tag.

    Validation is a case-insensitive prefix match, so ``varchar(30)`` resolves
    to ``VARCHAR``. When several tags prefix the text the longest one wins.

    Args:
        type_text: Type as declared

    Returns:
        Canonical tag, or None if no catalog tag prefixes the text
    """
    upper = type_text.strip().upper()
    for tag in _BY_LENGTH:
        if upper.startswith(tag):
            return tag
    return None


def is_valid_type(type_text: str) -> bool:
    """Check if declared type text passes the catalog prefix check."""
    return resolve_type_tag(type_text) is not None


def is_compound_keyword(token: str) -> bool:
    return token.upper() == COMPOUND


def parse_size(type_text: str, type_tag: str) -> tuple[int, ...] | None:
    """
    Extract size parameters from a parameterized type.

    Examples:
        >>> parse_size("VARCHAR(30)", "VARCHAR")
        (30, 0)
        >>> parse_size("DECIMAL(10, 2)", "DECIMAL")
        (10, 2)
        >>> parse_size("INTEGER", "INTEGER") is None
        True

    Args:
        type_text: Type as declared
        type_tag: Canonical tag resolved from ``type_text``

    Returns:
        Tuple of size parameters (always two entries) or None if unsized

    Raises:
        ValueError: If the suffix is not one or two non-negative integers
    """
    if type_tag not in SIZED_TYPES:
        return None

    match = _SIZE_PATTERN.search(type_text)
    if not match:
        return None

    parts = [p.strip() for p in match.group("params").split(",")]
    if not 1 <= len(parts) <= 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"invalid size parameters '({match.group('params')})'")

    values = [int(p) for p in parts]
    if len(values) == 1:
        values.append(0)
    return tuple(values)
