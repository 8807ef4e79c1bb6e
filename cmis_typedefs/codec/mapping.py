# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Mapping between type definition records and their wire objects.

The JSON and YAML codecs share the CMIS Browser Binding object shape built
here. The XML codec reuses the field tables, since the CMIS XML element names
match the Browser Binding keys.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Dict, Optional, Tuple, Type

import jsonschema
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from ..config import codec_config
from ..exceptions import FormatError, SchemaError
from ..models.enums import BaseTypeId, Cardinality, ContentStreamAllowed, PropertyType, Updatability
from ..models.json_schema_loader import load_schema
from ..models.type_definition import (
    DocumentTypeDefinition,
    PropertyDefinition,
    RelationshipTypeDefinition,
    TypeDefinition,
    TypeMutability,
    variant_class_for,
)

logger = logging.getLogger(__name__)


# (record attribute, wire name) pairs, in CMIS schema order.
TYPE_STRING_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("local_name", "localName"),
    ("local_namespace", "localNamespace"),
    ("display_name", "displayName"),
    ("query_name", "queryName"),
    ("description", "description"),
)

TYPE_FLAG_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("creatable", "creatable"),
    ("fileable", "fileable"),
    ("queryable", "queryable"),
    ("fulltext_indexed", "fulltextIndexed"),
    ("included_in_supertype_query", "includedInSupertypeQuery"),
    ("controllable_policy", "controllablePolicy"),
    ("controllable_acl", "controllableACL"),
)

MUTABILITY_FIELDS: Tuple[str, ...] = ("create", "update", "delete")

PROPERTY_STRING_FIELDS = TYPE_STRING_FIELDS

PROPERTY_ENUM_FIELDS: Tuple[Tuple[str, str, type], ...] = (
    ("property_type", "propertyType", PropertyType),
    ("cardinality", "cardinality", Cardinality),
    ("updatability", "updatability", Updatability),
)

PROPERTY_FLAG_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("inherited", "inherited"),
    ("required", "required"),
    ("queryable", "queryable"),
    ("orderable", "orderable"),
    ("open_choice", "openChoice"),
)

RELATIONSHIP_LIST_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("allowed_source_types", "allowedSourceTypes"),
    ("allowed_target_types", "allowedTargetTypes"),
)


def require_variant(type_def: TypeDefinition) -> BaseTypeId:
    """Return the variant tag of ``type_def`` or fail if it carries none."""
    if type_def.VARIANT is None:
        raise SchemaError(
            f"Cannot serialize {type(type_def).__name__}: unknown base interface"
        )
    return type_def.VARIANT


def check_property_keys(type_def: TypeDefinition) -> None:
    """Fail unless every property definition is stored under its own id."""
    for prop_id, prop_def in type_def.property_definitions.items():
        if prop_def.id is None or prop_def.id != prop_id:
            raise SchemaError(f"Property definition key '{prop_id}' does not match its id {prop_def.id!r}")


def read_text(stream: BinaryIO, format_name: str) -> str:
    """Read the whole stream as UTF-8 text without closing it."""
    raw = stream.read()
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"{format_name} stream is not UTF-8 encoded: {e}")
        raise FormatError(f"{format_name} stream is not UTF-8 encoded: {e}") from e


def write_text(stream: BinaryIO, text: str) -> None:
    """Write UTF-8 text and flush, leaving the stream open."""
    stream.write(text.encode("utf-8"))
    stream.flush()


# ---- record -> wire object ---------------------------------------------------


def property_definition_to_dict(prop_def: PropertyDefinition) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for attr, key in PROPERTY_STRING_FIELDS:
        value = getattr(prop_def, attr)
        if value is not None:
            data[key] = value
    for attr, key, _ in PROPERTY_ENUM_FIELDS:
        value = getattr(prop_def, attr)
        if value is not None:
            data[key] = value.value
    for attr, key in PROPERTY_FLAG_FIELDS:
        value = getattr(prop_def, attr)
        if value is not None:
            data[key] = value
    return data


def type_definition_to_dict(type_def: TypeDefinition) -> Dict[str, Any]:
    """Convert a type definition to a Browser Binding object. Unset attributes are omitted."""
    require_variant(type_def)
    check_property_keys(type_def)

    data: Dict[str, Any] = {}
    for attr, key in TYPE_STRING_FIELDS:
        value = getattr(type_def, attr)
        if value is not None:
            data[key] = value

    if type_def.base_type_id is not None:
        data["baseId"] = type_def.base_type_id.value
    if type_def.parent_type_id is not None:
        data["parentId"] = type_def.parent_type_id

    for attr, key in TYPE_FLAG_FIELDS:
        value = getattr(type_def, attr)
        if value is not None:
            data[key] = value

    if type_def.type_mutability is not None:
        data["typeMutability"] = {
            name: getattr(type_def.type_mutability, name)
            for name in MUTABILITY_FIELDS
            if getattr(type_def.type_mutability, name) is not None
        }

    if type_def.property_definitions:
        data["propertyDefinitions"] = {
            prop_id: property_definition_to_dict(prop_def)
            for prop_id, prop_def in type_def.property_definitions.items()
        }

    if isinstance(type_def, DocumentTypeDefinition):
        if type_def.versionable is not None:
            data["versionable"] = type_def.versionable
        if type_def.content_stream_allowed is not None:
            data["contentStreamAllowed"] = type_def.content_stream_allowed.value

    if isinstance(type_def, RelationshipTypeDefinition):
        for attr, key in RELATIONSHIP_LIST_FIELDS:
            values = getattr(type_def, attr)
            if values:
                data[key] = list(values)

    return data


# ---- wire object -> record ---------------------------------------------------


def check_shape(data: Any, schema_check: Optional[bool] = None) -> None:
    """Reject wire objects that are not shaped like a type definition.

    Raises:
        SchemaError: If ``data`` is not a mapping or fails the bundled JSON Schema.
    """
    if not isinstance(data, dict):
        raise SchemaError("Invalid stream! Not a type definition!")

    if schema_check is None:
        schema_check = codec_config.schema_check
    if not schema_check:
        return

    try:
        jsonschema.validate(instance=data, schema=load_schema("type_definition"))
    except JsonSchemaValidationError as e:
        path = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else ""
        logger.error(f"Type definition schema check failed at '{path}': {e.message}")
        raise SchemaError(f"Not a type definition: {e.message} (path={path or '/'})") from e


def parse_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        raise SchemaError(
            f"Invalid value for '{key}': {value!r}. Valid values: {enum_cls.get_all_values()}"
        ) from e


def _expect_mapping(value: Any, key: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"Invalid value for '{key}': expected an object, got {type(value).__name__}")
    return value


def _get_typed(data: Dict[str, Any], key: str, expected: type, label: str) -> Any:
    # Repeats the JSON Schema type checks, which may be disabled.
    value = data.get(key)
    if value is not None and not isinstance(value, expected):
        raise SchemaError(f"Invalid value for '{key}': expected {label}, got {type(value).__name__}")
    return value


def _get_string(data: Dict[str, Any], key: str) -> Optional[str]:
    return _get_typed(data, key, str, "a string")


def _get_flag(data: Dict[str, Any], key: str) -> Optional[bool]:
    return _get_typed(data, key, bool, "a boolean")


def _get_string_list(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    values = _get_typed(data, key, list, "a list") or []
    for value in values:
        if not isinstance(value, str):
            raise SchemaError(f"Invalid value in '{key}': expected a string, got {type(value).__name__}")
    return tuple(values)


def property_definition_from_dict(data: Dict[str, Any]) -> PropertyDefinition:
    kwargs: Dict[str, Any] = {}
    for attr, key in PROPERTY_STRING_FIELDS:
        kwargs[attr] = _get_string(data, key)
    for attr, key, enum_cls in PROPERTY_ENUM_FIELDS:
        if data.get(key) is not None:
            kwargs[attr] = parse_enum(enum_cls, data[key], key)
    for attr, key in PROPERTY_FLAG_FIELDS:
        kwargs[attr] = _get_flag(data, key)
    return PropertyDefinition(**kwargs)


def type_definition_from_dict(data: Any, schema_check: Optional[bool] = None) -> TypeDefinition:
    """Convert a Browser Binding object to a type definition; the variant follows ``baseId``."""
    check_shape(data, schema_check)

    if data.get("baseId") is None:
        raise SchemaError("Invalid base type! Not a type definition!")
    base_type_id = parse_enum(BaseTypeId, data["baseId"], "baseId")
    variant_cls: Type[TypeDefinition] = variant_class_for(base_type_id)

    kwargs: Dict[str, Any] = {"base_type_id": base_type_id, "parent_type_id": _get_string(data, "parentId")}
    for attr, key in TYPE_STRING_FIELDS:
        kwargs[attr] = _get_string(data, key)
    for attr, key in TYPE_FLAG_FIELDS:
        kwargs[attr] = _get_flag(data, key)

    mutability = data.get("typeMutability")
    if mutability is not None:
        mutability = _expect_mapping(mutability, "typeMutability")
        kwargs["type_mutability"] = TypeMutability(**{name: _get_flag(mutability, name) for name in MUTABILITY_FIELDS})

    property_definitions: Dict[str, PropertyDefinition] = {}
    for prop_id, prop_data in _expect_mapping(data.get("propertyDefinitions") or {}, "propertyDefinitions").items():
        prop_def = property_definition_from_dict(_expect_mapping(prop_data, f"propertyDefinitions/{prop_id}"))
        if prop_def.id != prop_id:
            raise SchemaError(f"Property definition key '{prop_id}' does not match its id {prop_def.id!r}")
        property_definitions[prop_id] = prop_def
    kwargs["property_definitions"] = property_definitions

    if variant_cls is DocumentTypeDefinition:
        kwargs["versionable"] = _get_flag(data, "versionable")
        if data.get("contentStreamAllowed") is not None:
            kwargs["content_stream_allowed"] = parse_enum(
                ContentStreamAllowed, data["contentStreamAllowed"], "contentStreamAllowed"
            )
    elif variant_cls is RelationshipTypeDefinition:
        for attr, key in RELATIONSHIP_LIST_FIELDS:
            kwargs[attr] = _get_string_list(data, key)

    return variant_cls(**kwargs)
