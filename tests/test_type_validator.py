"""
Tests for type and property definition validation.
"""

import copy
from dataclasses import dataclass, replace

import pytest

from cmis_typedefs import InvalidArgumentError
from cmis_typedefs.models import (
    BaseTypeId,
    DocumentTypeDefinition,
    PropertyDefinition,
    TypeDefinition,
)
from cmis_typedefs.validation import (
    ValidationError,
    check_query_name,
    validate_property_definition,
    validate_type_definition,
)


def attributes(errors):
    return [error.attribute for error in errors]


class TestValidTypeDefinitions:
    """Records satisfying every rule produce no errors."""

    def test_every_variant_is_valid(self, all_variants):
        for type_def in all_variants:
            assert validate_type_definition(type_def) == [], type_def.id

    def test_record_is_not_modified(self, valid_document):
        before = copy.deepcopy(valid_document)
        validate_type_definition(valid_document)
        assert valid_document == before

    def test_none_raises_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            validate_type_definition(None)

    def test_invalid_argument_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_type_definition(None)


class TestIdentityRules:
    """id, localName and queryName checks."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_id_gives_exactly_one_error(self, valid_document, value):
        errors = validate_type_definition(replace(valid_document, id=value))
        assert errors == [ValidationError("id", "Type id must be set.")]

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_local_name(self, valid_document, value):
        errors = validate_type_definition(replace(valid_document, local_name=value))
        assert errors == [ValidationError("localName", "Local name must be set.")]

    def test_empty_query_name(self, valid_document):
        errors = validate_type_definition(replace(valid_document, query_name=""))
        assert errors[0] == ValidationError("queryName", "Query name must not be empty.")
        # Queryable is TRUE, so the missing query name is reported a second time.
        assert errors[1].attribute == "queryable"
        assert len(errors) == 2

    def test_query_name_with_comma_reports_invalid_characters(self, valid_document):
        errors = validate_type_definition(replace(valid_document, query_name="a,b"))
        assert errors == [ValidationError("queryName", "Query name contains invalid characters.")]

    @pytest.mark.parametrize("char", [" ", ",", '"', "'", "\\", ".", "(", ")"])
    def test_each_forbidden_character(self, valid_document, char):
        errors = validate_type_definition(replace(valid_document, query_name=f"acme{char}invoice"))
        assert attributes(errors) == ["queryName"]
        assert errors[0].message == "Query name contains invalid characters."

    def test_non_string_identity_values_are_reported(self, valid_document):
        errors = validate_type_definition(replace(valid_document, id=123, local_name=b"invoice", query_name=7))
        assert attributes(errors) == ["id", "localName", "queryName", "queryable"]

    def test_unset_query_name_is_allowed_when_not_queryable(self, valid_document):
        errors = validate_type_definition(replace(valid_document, query_name=None, queryable=False))
        assert errors == []

    @pytest.mark.parametrize(
        "query_name,expected",
        [
            ("acme:invoice", True),
            ("acme_invoice", True),
            (None, False),
            ("", False),
            ("acme.invoice", False),
            ("acme(invoice)", False),
        ],
    )
    def test_check_query_name(self, query_name, expected):
        assert check_query_name(query_name) is expected


class TestFlagRules:
    """Tri-state flags must be explicitly set."""

    @pytest.mark.parametrize(
        "field_name,attribute,message",
        [
            ("creatable", "creatable", "Creatable flag must be set."),
            ("fileable", "fileable", "Fileable flag must be set."),
            ("controllable_policy", "controllablePolicy", "ControllablePolicy flag must be set."),
            ("controllable_acl", "controllableACL", "ControllableACL flag must be set."),
            ("fulltext_indexed", "fulltextIndexed", "FulltextIndexed flag must be set."),
            ("included_in_supertype_query", "includedInSupertypeQuery", "IncludedInSupertypeQuery flag must be set."),
        ],
    )
    def test_unset_flag(self, valid_document, field_name, attribute, message):
        errors = validate_type_definition(replace(valid_document, **{field_name: None}))
        assert errors == [ValidationError(attribute, message)]

    def test_false_flags_are_set(self, valid_document):
        record = replace(
            valid_document,
            creatable=False,
            fileable=False,
            queryable=False,
            controllable_policy=False,
            controllable_acl=False,
            fulltext_indexed=False,
            included_in_supertype_query=False,
        )
        assert validate_type_definition(record) == []

    def test_unset_queryable(self, valid_document):
        errors = validate_type_definition(replace(valid_document, queryable=None))
        assert errors == [ValidationError("queryable", "Queryable flag must be set.")]

    def test_queryable_without_query_name(self, valid_document):
        errors = validate_type_definition(replace(valid_document, query_name=None))
        assert errors == [
            ValidationError("queryable", "Queryable flag is set to TRUE, but the query name is not set.")
        ]

    def test_queryable_error_reported_even_when_other_fields_are_invalid(self, valid_document):
        record = replace(valid_document, query_name=None, id=None, creatable=None)
        assert "queryable" in attributes(validate_type_definition(record))

    def test_flag_errors_precede_the_queryable_query_name_error(self, valid_document):
        record = replace(valid_document, query_name=None, included_in_supertype_query=None)
        assert attributes(validate_type_definition(record)) == ["includedInSupertypeQuery", "queryable"]


class TestBaseAndParentRules:

    def test_unset_base_type_id(self, valid_folder):
        errors = validate_type_definition(replace(valid_folder, base_type_id=None))
        assert errors == [
            ValidationError("baseId", "Base type id must be set."),
            ValidationError("baseId", "Base type id does not match the type."),
        ]

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_parent(self, valid_folder, value):
        errors = validate_type_definition(replace(valid_folder, parent_type_id=value))
        assert errors == [ValidationError("parentTypeId", "Parent type id must be set.")]

    def test_parent_equal_to_base_kind_is_root(self, valid_folder):
        record = replace(valid_folder, id="cmis:folder", parent_type_id="cmis:folder")
        assert validate_type_definition(record) == []

    def test_plain_string_base_type_id(self, valid_folder):
        assert validate_type_definition(replace(valid_folder, base_type_id="cmis:folder")) == []

    @pytest.mark.parametrize("value", ["cmis:widget", 42])
    def test_unknown_base_type_id_is_reported_not_raised(self, valid_folder, value):
        errors = validate_type_definition(replace(valid_folder, base_type_id=value))
        assert errors == [ValidationError("baseId", "Base type id does not match the type.")]

    def test_root_type_without_parent_still_needs_parent(self, valid_folder):
        # Root detection compares the base kind with the parent id, not with the id.
        record = replace(valid_folder, id="cmis:folder", parent_type_id=None)
        assert attributes(validate_type_definition(record)) == ["parentTypeId"]


class TestVariantRules:

    def test_document_variant_with_folder_base(self, valid_document):
        record = replace(
            valid_document,
            base_type_id=BaseTypeId.FOLDER,
            versionable=None,
            content_stream_allowed=None,
        )
        errors = validate_type_definition(record)
        assert errors == [
            ValidationError("baseId", "Base type id does not match the type."),
            ValidationError("versionable", "Versionable flag must be set."),
            ValidationError("contentStreamAllowed", "ContentStreamAllowed flag must be set."),
        ]

    def test_folder_variant_with_document_base(self, valid_folder):
        errors = validate_type_definition(replace(valid_folder, base_type_id=BaseTypeId.DOCUMENT))
        assert errors == [ValidationError("baseId", "Base type id does not match the type.")]

    def test_each_variant_rejects_every_other_base(self, all_variants):
        for type_def in all_variants:
            for base_type_id in BaseTypeId:
                if base_type_id == type_def.VARIANT:
                    continue
                errors = validate_type_definition(replace(type_def, base_type_id=base_type_id))
                assert ValidationError("baseId", "Base type id does not match the type.") in errors

    def test_base_type_definition_is_unknown_interface(self, common_fields):
        record = TypeDefinition(
            id="acme:raw",
            query_name="acme:raw",
            base_type_id=BaseTypeId.DOCUMENT,
            parent_type_id="cmis:document",
            **common_fields,
        )
        assert validate_type_definition(record) == [ValidationError("baseId", "Unknown base interface.")]

    def test_extension_variant_tagged_as_document_without_document_fields(self, common_fields):
        @dataclass(frozen=True)
        class LegacyDocument(TypeDefinition):
            VARIANT = BaseTypeId.DOCUMENT

        record = LegacyDocument(
            id="acme:legacy",
            query_name="acme:legacy",
            base_type_id=BaseTypeId.DOCUMENT,
            parent_type_id="cmis:document",
            **common_fields,
        )
        assert attributes(validate_type_definition(record)) == ["versionable", "contentStreamAllowed"]

    def test_empty_document_reports_every_rule_in_order(self):
        errors = validate_type_definition(DocumentTypeDefinition())
        assert attributes(errors) == [
            "id",
            "localName",
            "creatable",
            "fileable",
            "queryable",
            "controllablePolicy",
            "controllableACL",
            "fulltextIndexed",
            "includedInSupertypeQuery",
            "baseId",
            "baseId",
            "versionable",
            "contentStreamAllowed",
        ]

    def test_error_string_form(self):
        assert str(ValidationError("id", "Type id must be set.")) == "id: Type id must be set."


class TestPropertyDefinitionValidation:

    def test_valid_property(self, amount_property):
        assert validate_property_definition(amount_property) == []

    def test_none_raises_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            validate_property_definition(None)

    def test_empty_property_reports_every_rule(self):
        errors = validate_property_definition(PropertyDefinition())
        assert attributes(errors) == [
            "id",
            "localName",
            "propertyType",
            "cardinality",
            "updatability",
            "inherited",
            "required",
            "queryable",
            "orderable",
        ]

    def test_open_choice_is_optional(self, amount_property):
        assert validate_property_definition(replace(amount_property, open_choice=None)) == []

    def test_queryable_property_needs_query_name(self, amount_property):
        errors = validate_property_definition(replace(amount_property, query_name=None))
        assert attributes(errors) == ["queryable"]

    def test_property_query_name_characters(self, amount_property):
        errors = validate_property_definition(replace(amount_property, query_name="acme amount"))
        assert errors == [ValidationError("queryName", "Query name contains invalid characters.")]

    def test_type_validation_ignores_property_definitions(self, valid_document):
        broken = PropertyDefinition(id="acme:broken")
        record = replace(valid_document, property_definitions={"acme:broken": broken})
        assert validate_type_definition(record) == []
