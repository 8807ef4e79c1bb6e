"""Type and property definition validation."""

from .type_validator import (
    QUERY_NAME_FORBIDDEN_CHARACTERS,
    ValidationError,
    check_query_name,
    validate_property_definition,
    validate_type_definition,
)

__all__ = [
    "QUERY_NAME_FORBIDDEN_CHARACTERS",
    "ValidationError",
    "check_query_name",
    "validate_property_definition",
    "validate_type_definition",
]
