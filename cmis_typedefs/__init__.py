"""Serialization and structural validation of CMIS type definitions."""

__version__ = "0.1.0"

# CMIS specification version whose type definition format is implemented.
CMIS_VERSION = "1.1"

from .exceptions import (  # noqa: E402
    CodecError,
    FormatError,
    InvalidArgumentError,
    SchemaError,
    TypeDefinitionError,
)
from .models import (  # noqa: E402
    BaseTypeId,
    Cardinality,
    ContentStreamAllowed,
    DocumentTypeDefinition,
    FolderTypeDefinition,
    ItemTypeDefinition,
    PolicyTypeDefinition,
    PropertyDefinition,
    PropertyType,
    RelationshipTypeDefinition,
    SecondaryTypeDefinition,
    TypeDefinition,
    TypeMutability,
    Updatability,
)
from .validation import ValidationError, validate_property_definition, validate_type_definition  # noqa: E402
from .codec import (  # noqa: E402
    read_from_json,
    read_from_xml,
    read_from_yaml,
    write_to_json,
    write_to_xml,
    write_to_yaml,
)

__all__ = [
    "CMIS_VERSION",
    "CodecError",
    "FormatError",
    "InvalidArgumentError",
    "SchemaError",
    "TypeDefinitionError",
    "BaseTypeId",
    "Cardinality",
    "ContentStreamAllowed",
    "PropertyType",
    "Updatability",
    "TypeDefinition",
    "DocumentTypeDefinition",
    "FolderTypeDefinition",
    "RelationshipTypeDefinition",
    "PolicyTypeDefinition",
    "ItemTypeDefinition",
    "SecondaryTypeDefinition",
    "PropertyDefinition",
    "TypeMutability",
    "ValidationError",
    "validate_type_definition",
    "validate_property_definition",
    "read_from_json",
    "write_to_json",
    "read_from_xml",
    "write_to_xml",
    "read_from_yaml",
    "write_to_yaml",
]
