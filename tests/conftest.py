"""Shared fixtures for the cmis_typedefs test suite."""

import logging

import pytest

from cmis_typedefs.models import (
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
    TypeMutability,
    Updatability,
)
from cmis_typedefs.models.json_schema_loader import clear_cache
from cmis_typedefs.utils import PACKAGE_LOGGER_NAME


@pytest.fixture
def common_fields():
    """Attributes that make any variant valid, apart from the base kind."""
    return dict(
        local_name="invoice",
        local_namespace="http://example.com/cmis",
        display_name="Invoice",
        description="Accounting documents",
        creatable=True,
        fileable=True,
        queryable=True,
        fulltext_indexed=False,
        included_in_supertype_query=True,
        controllable_policy=False,
        controllable_acl=True,
    )


@pytest.fixture
def amount_property():
    return PropertyDefinition(
        id="acme:amount",
        local_name="amount",
        display_name="Amount",
        query_name="acme:amount",
        property_type=PropertyType.DECIMAL,
        cardinality=Cardinality.SINGLE,
        updatability=Updatability.READWRITE,
        inherited=False,
        required=True,
        queryable=True,
        orderable=True,
        open_choice=False,
    )


@pytest.fixture
def valid_document(common_fields, amount_property):
    return DocumentTypeDefinition(
        id="acme:invoice",
        query_name="acme:invoice",
        base_type_id=BaseTypeId.DOCUMENT,
        parent_type_id="cmis:document",
        type_mutability=TypeMutability(create=True, update=False, delete=True),
        property_definitions={amount_property.id: amount_property},
        versionable=True,
        content_stream_allowed=ContentStreamAllowed.ALLOWED,
        **common_fields,
    )


@pytest.fixture
def valid_folder(common_fields):
    return FolderTypeDefinition(
        id="acme:binder",
        query_name="acme:binder",
        base_type_id=BaseTypeId.FOLDER,
        parent_type_id="cmis:folder",
        **common_fields,
    )


@pytest.fixture
def valid_relationship(common_fields):
    return RelationshipTypeDefinition(
        id="acme:attachment",
        query_name="acme:attachment",
        base_type_id=BaseTypeId.RELATIONSHIP,
        parent_type_id="cmis:relationship",
        allowed_source_types=("acme:invoice",),
        allowed_target_types=("cmis:document", "acme:binder"),
        **common_fields,
    )


@pytest.fixture
def all_variants(valid_document, valid_folder, valid_relationship, common_fields):
    """One valid record per base kind."""
    return [
        valid_document,
        valid_folder,
        valid_relationship,
        PolicyTypeDefinition(
            id="acme:retention", query_name="acme:retention", base_type_id=BaseTypeId.POLICY,
            parent_type_id="cmis:policy", **common_fields,
        ),
        ItemTypeDefinition(
            id="acme:contact", query_name="acme:contact", base_type_id=BaseTypeId.ITEM,
            parent_type_id="cmis:item", **common_fields,
        ),
        SecondaryTypeDefinition(
            id="acme:audited", query_name="acme:audited", base_type_id=BaseTypeId.SECONDARY,
            parent_type_id="cmis:secondary", **common_fields,
        ),
    ]


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Undo handlers installed by CLI runs so they never outlive captured streams."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def fresh_schema_cache():
    clear_cache()
    yield
    clear_cache()
