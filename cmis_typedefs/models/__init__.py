"""Type definition data model.

This package intentionally avoids depending on the codec and validation modules
so that the records remain plain values.
"""

from .enums import BaseTypeId, Cardinality, ContentStreamAllowed, PropertyType, Updatability
from .type_definition import (
    VARIANT_CLASSES,
    DocumentTypeDefinition,
    FolderTypeDefinition,
    ItemTypeDefinition,
    PolicyTypeDefinition,
    PropertyDefinition,
    PropertyDefinitionMap,
    RelationshipTypeDefinition,
    SecondaryTypeDefinition,
    TypeDefinition,
    TypeMutability,
    variant_class_for,
)

__all__ = [
    "BaseTypeId",
    "Cardinality",
    "ContentStreamAllowed",
    "PropertyType",
    "Updatability",
    "VARIANT_CLASSES",
    "TypeDefinition",
    "DocumentTypeDefinition",
    "FolderTypeDefinition",
    "RelationshipTypeDefinition",
    "PolicyTypeDefinition",
    "ItemTypeDefinition",
    "SecondaryTypeDefinition",
    "PropertyDefinition",
    "PropertyDefinitionMap",
    "TypeMutability",
    "variant_class_for",
]
