"""Value generators for catalog type tags."""

from seedsql.generators.faker_generator import FakerGenerator
from seedsql.generators.types import VALID_TYPES, is_valid_type, parse_size, resolve_type_tag

__all__ = ["FakerGenerator", "VALID_TYPES", "is_valid_type", "parse_size", "resolve_type_tag"]
