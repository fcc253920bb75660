"""Data models and type definitions."""

from dataclasses import dataclass, field
from enum import Enum


class KeyRole(Enum):
    """Key classification of a declared attribute."""

    NONE = ""
    PK = "PK"
    AK = "AK"
    FK = "FK"
    PK_FK = "PK/FK"
    AK_FK = "AK/FK"

    @classmethod
    def from_token(cls, token: str) -> "KeyRole | None":
        """Return the role spelled by ``token`` (case-insensitive) or None."""
        upper = token.upper()
        for role in cls:
            if role is not cls.NONE and role.value == upper:
                return role
        return None

    @property
    def is_primary(self) -> bool:
        return self in (KeyRole.PK, KeyRole.PK_FK)

    @property
    def is_alternate(self) -> bool:
        return self in (KeyRole.AK, KeyRole.AK_FK)

    @property
    def is_unique(self) -> bool:
        """True for roles that require per-attribute uniqueness (PK or AK)."""
        return self.is_primary or self.is_alternate

    @property
    def is_foreign(self) -> bool:
        return self in (KeyRole.FK, KeyRole.PK_FK, KeyRole.AK_FK)


class AttributeShape(Enum):
    """Structural form of a declared attribute, decided once by the parser."""

    DEFAULT_LITERAL = "default_literal"  # 0 | NULL | TRUE | FALSE
    SCALAR = "scalar"  # name type
    KEYED = "keyed"  # key name type
    FOREIGN = "foreign"  # key name type table(attr)
    COMPOUND = "compound"  # [key] name COMPOUND (sub; ...)
    FOREIGN_COMPOUND = "foreign_compound"  # key name COMPOUND (sub; ...) table(attr)

    @property
    def is_compound(self) -> bool:
        return self in (AttributeShape.COMPOUND, AttributeShape.FOREIGN_COMPOUND)


@dataclass(frozen=True)
class ForeignRef:
    """
    Foreign reference target.

    Attributes:
        table: Referenced table name
        attribute: Referenced attribute name in that table
    """

    table: str
    attribute: str

    def __str__(self) -> str:
        return f"{self.table}({self.attribute})"


@dataclass(frozen=True)
class AttributeDefinition:
    """
    One declared column.

    Attributes:
        name: Column name (for default literals, the literal itself)
        shape: Structural form the attribute was declared in
        type_text: Type exactly as declared (e.g. ``VARCHAR(30)``)
        type_tag: Canonical catalog tag (e.g. ``VARCHAR``); empty for
            default literals and compound columns
        size: Optional size parameters, e.g. ``(10, 2)`` for ``DECIMAL(10,2)``
        role: Key role
        reference: Foreign reference when the role has a FK component
        leaves: Ordered leaf attributes of a compound column
    """

    name: str
    shape: AttributeShape
    type_text: str = ""
    type_tag: str = ""
    size: tuple[int, ...] | None = None
    role: KeyRole = KeyRole.NONE
    reference: ForeignRef | None = None
    leaves: tuple["AttributeDefinition", ...] = ()

    @property
    def is_compound(self) -> bool:
        return self.shape.is_compound

    @property
    def is_foreign(self) -> bool:
        return self.reference is not None

    @property
    def is_key(self) -> bool:
        """True if other tables may reference this attribute."""
        return self.role.is_unique


@dataclass(frozen=True)
class TableSpec:
    """
    Table declaration with its generation request.

    Attributes:
        name: Table name
        count: Number of rows to generate
        attributes: Ordered attributes (order defines output column order)
        declaration: Original declaration text
    """

    name: str
    count: int
    attributes: tuple[AttributeDefinition, ...]
    declaration: str = ""

    @property
    def primary_keys(self) -> list[AttributeDefinition]:
        """Top-level PK-role attributes in declaration order."""
        return [a for a in self.attributes if a.role.is_primary]

    @property
    def is_composite(self) -> bool:
        """
        Check if the table has a composite (multi-column) primary key.

        Returns:
            True if more than one top-level attribute carries a PK role
        """
        return len(self.primary_keys) > 1

    @property
    def key_attributes(self) -> list[AttributeDefinition]:
        """Attributes other tables may reference (PK/AK, including combined roles)."""
        return [a for a in self.attributes if a.is_key]

    @property
    def references(self) -> list[ForeignRef]:
        """Declared foreign references in declaration order."""
        return [a.reference for a in self.attributes if a.reference is not None]

    def get_attribute(self, name: str) -> AttributeDefinition | None:
        """
        Find an attribute by name (case-insensitive).

        Args:
            name: Attribute name

        Returns:
            AttributeDefinition or None if not declared
        """
        folded = name.casefold()
        for attribute in self.attributes:
            if attribute.name.casefold() == folded:
                return attribute
        return None


@dataclass
class GenerationReport:
    """
    Summary of a generation run.

    Attributes:
        rows_per_table: Rows written per table, in generation order
        regenerated_keys: Composite key tuples regenerated per table
        output: Description of the output destination
    """

    rows_per_table: dict[str, int] = field(default_factory=dict)
    regenerated_keys: dict[str, int] = field(default_factory=dict)
    output: str = ""

    @property
    def total_rows(self) -> int:
        return sum(self.rows_per_table.values())
