"""Parser for table declarations and attribute definitions.

Declarations follow a compact grammar::

    100 profile (PK userID INTEGER, name NAME, AK email EMAIL)
    300 friend (PK/FK userID1 INTEGER profile(userID), PK/FK userID2 INTEGER profile(userID))
    10 region (PK id INTEGER, MBR COMPOUND (x_min INTEGER; x_max INTEGER))

Each attribute is parsed once into an ``AttributeDefinition`` tagged with its
``AttributeShape``; later stages dispatch on the shape only.
"""

import re

from seedsql.exceptions import SchemaParseError
from seedsql.generators.types import is_compound_keyword, parse_size, resolve_type_tag
from seedsql.models import AttributeDefinition, AttributeShape, ForeignRef, KeyRole, TableSpec

DEFAULT_LITERALS = ("0", "NULL", "TRUE", "FALSE")

_TABLE_PATTERN = re.compile(
    r"^\s*(?P<count>\S+)\s+(?P<name>[^\s()]+)\s*\((?P<body>.*)\)\s*$",
    re.DOTALL,
)
_REFERENCE_PATTERN = re.compile(r"^(?P<table>[^\s(),;]+)\((?P<attribute>[^\s(),;]+)\)$")
_NAME_PATTERN = re.compile(r"^[^\s(),;]+$")


def split_top_level(text: str, separator: str) -> list[str]:
    """
    Split text on a separator character, ignoring separators inside parentheses.

    Args:
        text: Text to split
        separator: Single separator character

    Returns:
        List of raw (untrimmed) parts

    Raises:
        ValueError: If parentheses are unbalanced
    """
    parts = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ValueError("unbalanced parentheses")
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    if depth != 0:
        raise ValueError("unbalanced parentheses")
    parts.append("".join(current))
    return parts


def tokenize(text: str) -> list[str]:
    """
    Split an attribute on whitespace outside parentheses.

    ``DECIMAL(10, 2)`` and ``(a INTEGER; b NAME)`` each stay a single token.

    Raises:
        ValueError: If parentheses are unbalanced
    """
    tokens = []
    depth = 0
    current: list[str] = []
    for char in text.strip():
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ValueError("unbalanced parentheses")
        if char.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)
    if depth != 0:
        raise ValueError("unbalanced parentheses")
    if current:
        tokens.append("".join(current))
    return tokens


def parse_reference(token: str, attribute: str, table: str | None = None) -> ForeignRef:
    """Parse ``table(attribute)`` into a ForeignRef."""
    match = _REFERENCE_PATTERN.match(token)
    if not match:
        raise SchemaParseError(
            attribute, f"malformed foreign reference '{token}', expected table(attribute)", table
        )
    return ForeignRef(table=match.group("table"), attribute=match.group("attribute"))


def _check_name(name: str, attribute: str, table: str | None) -> None:
    if not _NAME_PATTERN.match(name):
        raise SchemaParseError(attribute, f"invalid attribute name '{name}'", table)


def _parse_type(type_text: str, attribute: str, table: str | None):
    """Validate a type and return ``(tag, size)``."""
    if is_compound_keyword(type_text):
        raise SchemaParseError(attribute, "COMPOUND is only valid as a column type", table)
    tag = resolve_type_tag(type_text)
    if tag is None:
        raise SchemaParseError(attribute, f"invalid data type '{type_text}'", table)
    try:
        size = parse_size(type_text, tag)
    except ValueError as e:
        raise SchemaParseError(attribute, f"{e} for type '{type_text}'", table) from e
    return tag, size


def _parse_role(token: str, attribute: str, table: str | None) -> KeyRole:
    role = KeyRole.from_token(token)
    if role is None:
        raise SchemaParseError(
            attribute, f"invalid key definition '{token}', expected PK, AK, FK, PK/FK or AK/FK", table
        )
    return role


def _parse_leaf(text: str, attribute: str, table: str | None) -> AttributeDefinition:
    tokens = tokenize(text)
    if len(tokens) != 2:
        raise SchemaParseError(
            attribute, f"invalid compound attribute '{text.strip()}', expected 'name TYPE'", table
        )
    name, type_text = tokens
    _check_name(name, attribute, table)
    tag, size = _parse_type(type_text, attribute, table)
    return AttributeDefinition(
        name=name,
        shape=AttributeShape.SCALAR,
        type_text=type_text,
        type_tag=tag,
        size=size,
    )


def _parse_compound(
    tokens: list[str], compound_index: int, attribute: str, table: str | None
) -> AttributeDefinition:
    if compound_index == 1:
        role = KeyRole.NONE
        name = tokens[0]
    elif compound_index == 2:
        role = _parse_role(tokens[0], attribute, table)
        name = tokens[1]
    else:
        raise SchemaParseError(attribute, "COMPOUND must follow '[key] name'", table)
    _check_name(name, attribute, table)

    rest = tokens[compound_index + 1 :]
    if not 1 <= len(rest) <= 2:
        raise SchemaParseError(attribute, "expected '(sub; sub; ...)' after COMPOUND", table)

    block = rest[0]
    if not (block.startswith("(") and block.endswith(")")):
        raise SchemaParseError(attribute, f"compound block '{block}' must be parenthesized", table)

    leaves = tuple(
        _parse_leaf(part, attribute, table) for part in split_top_level(block[1:-1], ";")
    )

    reference = None
    shape = AttributeShape.COMPOUND
    if len(rest) == 2:
        if role is KeyRole.NONE:
            raise SchemaParseError(attribute, "foreign compound attribute requires a key definition", table)
        reference = parse_reference(rest[1], attribute, table)
        shape = AttributeShape.FOREIGN_COMPOUND

    _check_role_reference(role, reference, attribute, table)
    return AttributeDefinition(
        name=name,
        shape=shape,
        type_text="COMPOUND",
        role=role,
        reference=reference,
        leaves=leaves,
    )


def _check_role_reference(
    role: KeyRole, reference: ForeignRef | None, attribute: str, table: str | None
) -> None:
    if role.is_foreign and reference is None:
        raise SchemaParseError(
            attribute, f"key definition '{role.value}' requires a reference table(attribute)", table
        )
    if reference is not None and not role.is_foreign:
        raise SchemaParseError(
            attribute, f"reference '{reference}' requires FK, PK/FK or AK/FK", table
        )


def parse_attribute(text: str, table: str | None = None) -> AttributeDefinition:
    """
    Parse one attribute declaration.

    Recognized shapes:
        - ``0`` | ``NULL`` | ``TRUE`` | ``FALSE``
        - ``name TYPE``
        - ``KEY name TYPE``
        - ``KEY name TYPE table(attribute)``
        - ``[KEY] name COMPOUND (sub TYPE; ...)``
        - ``KEY name COMPOUND (sub TYPE; ...) table(attribute)``

    Args:
        text: Attribute declaration
        table: Owning table (used in error messages)

    Returns:
        Parsed AttributeDefinition

    Raises:
        SchemaParseError: If the declaration matches no known shape
    """
    attribute = text.strip()
    try:
        tokens = tokenize(attribute)
    except ValueError as e:
        raise SchemaParseError(attribute, str(e), table) from e

    if not tokens:
        raise SchemaParseError(attribute, "empty attribute", table)

    compound_index = next(
        (i for i, token in enumerate(tokens) if is_compound_keyword(token)), None
    )
    if compound_index is not None:
        try:
            return _parse_compound(tokens, compound_index, attribute, table)
        except ValueError as e:
            raise SchemaParseError(attribute, str(e), table) from e

    if len(tokens) == 1:
        if tokens[0].upper() not in DEFAULT_LITERALS:
            raise SchemaParseError(
                attribute, "invalid default value, expected 0, NULL, TRUE or FALSE", table
            )
        return AttributeDefinition(name=tokens[0], shape=AttributeShape.DEFAULT_LITERAL)

    if len(tokens) == 2:
        name, type_text = tokens
        role = KeyRole.NONE
        reference = None
        shape = AttributeShape.SCALAR
    elif len(tokens) == 3:
        role = _parse_role(tokens[0], attribute, table)
        name, type_text = tokens[1], tokens[2]
        reference = None
        shape = AttributeShape.KEYED
    elif len(tokens) == 4:
        role = _parse_role(tokens[0], attribute, table)
        name, type_text = tokens[1], tokens[2]
        reference = parse_reference(tokens[3], attribute, table)
        shape = AttributeShape.FOREIGN
    else:
        raise SchemaParseError(attribute, "attribute is not formatted properly", table)

    _check_name(name, attribute, table)
    _check_role_reference(role, reference, attribute, table)
    tag, size = _parse_type(type_text, attribute, table)
    return AttributeDefinition(
        name=name,
        shape=shape,
        type_text=type_text,
        type_tag=tag,
        size=size,
        role=role,
        reference=reference,
    )


def parse_table(declaration: str) -> TableSpec:
    """
    Parse a table declaration ``count name (attr, attr, ...)``.

    Args:
        declaration: Table declaration text

    Returns:
        Immutable TableSpec

    Raises:
        SchemaParseError: If the declaration or any attribute is invalid
    """
    match = _TABLE_PATTERN.match(declaration)
    if not match:
        raise SchemaParseError(
            declaration.strip(), "expected 'count table (attribute, ...)'"
        )

    name = match.group("name")
    count_text = match.group("count")
    if not count_text.isdigit() or int(count_text) <= 0:
        raise SchemaParseError(count_text, "invalid number of rows", name)

    try:
        parts = split_top_level(match.group("body"), ",")
    except ValueError as e:
        raise SchemaParseError(match.group("body").strip(), str(e), name) from e

    attributes = []
    for part in parts:
        if not part.strip():
            raise SchemaParseError(part, "empty attribute", name)
        attributes.append(parse_attribute(part, table=name))

    return TableSpec(
        name=name,
        count=int(count_text),
        attributes=tuple(attributes),
        declaration=declaration.strip(),
    )
