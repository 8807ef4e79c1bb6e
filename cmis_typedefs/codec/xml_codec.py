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

"""XML serialization of type definitions.

Documents use the CMIS core namespace. The root element carries ``xsi:type``
naming the variant, so a record whose ``baseId`` disagrees with its variant
still survives a round trip:

    <cmis:typeDefinition xmlns:cmis="..." xsi:type="cmis:cmisTypeDocumentDefinitionType">
      <cmis:id>my:doc</cmis:id>
      <cmis:baseId>cmis:document</cmis:baseId>
      ...
      <cmis:propertyStringDefinition>...</cmis:propertyStringDefinition>
      <cmis:versionable>true</cmis:versionable>
    </cmis:typeDefinition>
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, BinaryIO, Dict, List, Optional, Type

from ..config import codec_config
from ..exceptions import FormatError, InvalidArgumentError, SchemaError
from ..models.enums import BaseTypeId, ContentStreamAllowed, PropertyType
from ..models.type_definition import (
    DocumentTypeDefinition,
    PropertyDefinition,
    RelationshipTypeDefinition,
    TypeDefinition,
    TypeMutability,
    variant_class_for,
)
from .mapping import (
    MUTABILITY_FIELDS,
    PROPERTY_ENUM_FIELDS,
    PROPERTY_FLAG_FIELDS,
    PROPERTY_STRING_FIELDS,
    RELATIONSHIP_LIST_FIELDS,
    TYPE_FLAG_FIELDS,
    TYPE_STRING_FIELDS,
    check_property_keys,
    parse_enum,
    require_variant,
)

logger = logging.getLogger(__name__)

CMIS_NAMESPACE = "http://docs.oasis-open.org/ns/cmis/core/200908/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

ET.register_namespace("cmis", CMIS_NAMESPACE)
ET.register_namespace("xsi", XSI_NAMESPACE)

ROOT_TAG = f"{{{CMIS_NAMESPACE}}}typeDefinition"
XSI_TYPE = f"{{{XSI_NAMESPACE}}}type"

VARIANT_XSI_TYPES: Dict[BaseTypeId, str] = {
    BaseTypeId.DOCUMENT: "cmisTypeDocumentDefinitionType",
    BaseTypeId.FOLDER: "cmisTypeFolderDefinitionType",
    BaseTypeId.RELATIONSHIP: "cmisTypeRelationshipDefinitionType",
    BaseTypeId.POLICY: "cmisTypePolicyDefinitionType",
    BaseTypeId.ITEM: "cmisTypeItemDefinitionType",
    BaseTypeId.SECONDARY: "cmisTypeSecondaryDefinitionType",
}
_XSI_TYPE_VARIANTS = {name: base_type_id for base_type_id, name in VARIANT_XSI_TYPES.items()}

PROPERTY_ELEMENTS: Dict[PropertyType, str] = {
    PropertyType.BOOLEAN: "propertyBooleanDefinition",
    PropertyType.ID: "propertyIdDefinition",
    PropertyType.INTEGER: "propertyIntegerDefinition",
    PropertyType.DATETIME: "propertyDateTimeDefinition",
    PropertyType.DECIMAL: "propertyDecimalDefinition",
    PropertyType.HTML: "propertyHtmlDefinition",
    PropertyType.STRING: "propertyStringDefinition",
    PropertyType.URI: "propertyUriDefinition",
}
# Used when a property definition has no property type yet.
UNTYPED_PROPERTY_ELEMENT = "propertyDefinition"
_PROPERTY_ELEMENT_NAMES = frozenset(PROPERTY_ELEMENTS.values()) | {UNTYPED_PROPERTY_ELEMENT}

_XML_BOOLEANS = {"true": True, "1": True, "false": False, "0": False}

# Anything outside the XML 1.0 Char production.
_INVALID_XML_CHARACTERS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _qname(local_name: str) -> str:
    return f"{{{CMIS_NAMESPACE}}}{local_name}"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


# ---- record -> XML -----------------------------------------------------------


def _add_text(parent: ET.Element, name: str, value: Optional[str]) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise SchemaError(f"Invalid value for '{name}': expected a string, got {type(value).__name__}")
    invalid = _INVALID_XML_CHARACTERS.search(value)
    if invalid is not None:
        raise SchemaError(f"Invalid character {invalid.group()!r} in '{name}': not allowed in XML 1.0")
    ET.SubElement(parent, _qname(name)).text = value


def _add_flag(parent: ET.Element, name: str, value: Optional[bool]) -> None:
    if value is not None:
        ET.SubElement(parent, _qname(name)).text = "true" if value else "false"


def _property_to_element(parent: ET.Element, prop_def: PropertyDefinition) -> None:
    element_name = PROPERTY_ELEMENTS.get(prop_def.property_type, UNTYPED_PROPERTY_ELEMENT)
    element = ET.SubElement(parent, _qname(element_name))
    for attr, name in PROPERTY_STRING_FIELDS:
        _add_text(element, name, getattr(prop_def, attr))
    for attr, name, _ in PROPERTY_ENUM_FIELDS:
        value = getattr(prop_def, attr)
        _add_text(element, name, value.value if value is not None else None)
    for attr, name in PROPERTY_FLAG_FIELDS:
        _add_flag(element, name, getattr(prop_def, attr))


def type_definition_to_element(type_def: TypeDefinition) -> ET.Element:
    """Build the ``cmis:typeDefinition`` element for a type definition."""
    variant = require_variant(type_def)
    # XML has no map keys; property definitions are keyed by their id on the way back.
    check_property_keys(type_def)

    root = ET.Element(ROOT_TAG, {XSI_TYPE: f"cmis:{VARIANT_XSI_TYPES[variant]}"})
    for attr, name in TYPE_STRING_FIELDS:
        _add_text(root, name, getattr(type_def, attr))
    _add_text(root, "baseId", type_def.base_type_id.value if type_def.base_type_id is not None else None)
    _add_text(root, "parentId", type_def.parent_type_id)
    for attr, name in TYPE_FLAG_FIELDS:
        _add_flag(root, name, getattr(type_def, attr))

    if type_def.type_mutability is not None:
        mutability = ET.SubElement(root, _qname("typeMutability"))
        for name in MUTABILITY_FIELDS:
            _add_flag(mutability, name, getattr(type_def.type_mutability, name))

    for prop_def in type_def.property_definitions.values():
        _property_to_element(root, prop_def)

    if isinstance(type_def, DocumentTypeDefinition):
        _add_flag(root, "versionable", type_def.versionable)
        if type_def.content_stream_allowed is not None:
            _add_text(root, "contentStreamAllowed", type_def.content_stream_allowed.value)

    if isinstance(type_def, RelationshipTypeDefinition):
        for attr, name in RELATIONSHIP_LIST_FIELDS:
            for type_id in getattr(type_def, attr):
                _add_text(root, name, type_id)

    return root


def write_to_xml(type_def: TypeDefinition, stream: BinaryIO, *, pretty_print: Optional[bool] = None) -> None:
    """Serialize the type definition to XML.

    The XML is UTF-8 encoded and the stream is flushed but not closed.

    Args:
        type_def: Type definition to serialize
        stream: Binary output stream
        pretty_print: Indent the document; None uses the global configuration
    """
    if type_def is None:
        raise InvalidArgumentError("Type must be set!")
    if stream is None:
        raise InvalidArgumentError("Output stream must be set!")

    if pretty_print is None:
        pretty_print = codec_config.xml_pretty_print

    root = type_definition_to_element(type_def)
    if pretty_print:
        ET.indent(root)
    data = ET.tostring(root, encoding="utf-8", xml_declaration=True)
    # ElementTree leaves carriage returns in text unescaped and parsers fold them into
    # newlines. Indentation never adds one, so every remaining CR comes from a value.
    stream.write(data.replace(b"\r", b"&#13;"))
    stream.flush()
    logger.debug(f"Wrote type definition '{type_def.id}' as XML")


# ---- XML -> record -----------------------------------------------------------


def _parse_flag(element: ET.Element) -> bool:
    text = (element.text or "").strip()
    if text not in _XML_BOOLEANS:
        raise SchemaError(f"Invalid boolean value for '{_local_name(element.tag)}': {text!r}")
    return _XML_BOOLEANS[text]


def _children_by_name(element: ET.Element) -> Dict[str, List[ET.Element]]:
    children: Dict[str, List[ET.Element]] = {}
    for child in element:
        if not isinstance(child.tag, str) or not child.tag.startswith(f"{{{CMIS_NAMESPACE}}}"):
            # Comments and extension elements from other namespaces.
            continue
        children.setdefault(_local_name(child.tag), []).append(child)
    return children


def _first_text(children: Dict[str, List[ET.Element]], name: str) -> Optional[str]:
    if name not in children:
        return None
    return children[name][0].text or ""


def _first_flag(children: Dict[str, List[ET.Element]], name: str) -> Optional[bool]:
    if name not in children:
        return None
    return _parse_flag(children[name][0])


def _property_from_element(element: ET.Element) -> PropertyDefinition:
    children = _children_by_name(element)
    kwargs: Dict[str, Any] = {}
    for attr, name in PROPERTY_STRING_FIELDS:
        kwargs[attr] = _first_text(children, name)
    for attr, name, enum_cls in PROPERTY_ENUM_FIELDS:
        text = _first_text(children, name)
        if text is not None:
            kwargs[attr] = parse_enum(enum_cls, text.strip(), name)
    for attr, name in PROPERTY_FLAG_FIELDS:
        kwargs[attr] = _first_flag(children, name)
    return PropertyDefinition(**kwargs)


def _resolve_variant(root: ET.Element, base_type_id: Optional[BaseTypeId]) -> Type[TypeDefinition]:
    xsi_type = root.get(XSI_TYPE)
    if xsi_type is not None:
        # QName value; the prefix is whatever the document bound to the CMIS namespace.
        local_type = xsi_type.rsplit(":", 1)[-1]
        if local_type not in _XSI_TYPE_VARIANTS:
            raise SchemaError(f"Unknown type definition xsi:type '{xsi_type}'")
        return variant_class_for(_XSI_TYPE_VARIANTS[local_type])

    if base_type_id is None:
        raise SchemaError("Invalid base type! Not a type definition!")
    return variant_class_for(base_type_id)


def type_definition_from_element(root: ET.Element) -> TypeDefinition:
    """Convert a ``cmis:typeDefinition`` element to a type definition."""
    if root.tag != ROOT_TAG:
        raise SchemaError(f"Invalid root element '{root.tag}'. Expected '{ROOT_TAG}'")

    children = _children_by_name(root)

    base_type_id = None
    base_id_text = _first_text(children, "baseId")
    if base_id_text is not None:
        base_type_id = parse_enum(BaseTypeId, base_id_text.strip(), "baseId")

    variant_cls = _resolve_variant(root, base_type_id)

    kwargs: Dict[str, Any] = {
        "base_type_id": base_type_id,
        "parent_type_id": _first_text(children, "parentId"),
    }
    for attr, name in TYPE_STRING_FIELDS:
        kwargs[attr] = _first_text(children, name)
    for attr, name in TYPE_FLAG_FIELDS:
        kwargs[attr] = _first_flag(children, name)

    if "typeMutability" in children:
        mutability_children = _children_by_name(children["typeMutability"][0])
        kwargs["type_mutability"] = TypeMutability(
            **{name: _first_flag(mutability_children, name) for name in MUTABILITY_FIELDS}
        )

    property_definitions: Dict[str, PropertyDefinition] = {}
    for child in root:
        if isinstance(child.tag, str) and child.tag.startswith(f"{{{CMIS_NAMESPACE}}}") \
                and _local_name(child.tag) in _PROPERTY_ELEMENT_NAMES:
            prop_def = _property_from_element(child)
            if prop_def.id is None:
                raise SchemaError(f"Property definition '{_local_name(child.tag)}' has no id")
            if prop_def.id in property_definitions:
                raise SchemaError(f"Duplicate property definition '{prop_def.id}'")
            property_definitions[prop_def.id] = prop_def
    kwargs["property_definitions"] = property_definitions

    if variant_cls is DocumentTypeDefinition:
        kwargs["versionable"] = _first_flag(children, "versionable")
        content_stream_allowed = _first_text(children, "contentStreamAllowed")
        if content_stream_allowed is not None:
            kwargs["content_stream_allowed"] = parse_enum(
                ContentStreamAllowed, content_stream_allowed.strip(), "contentStreamAllowed"
            )
    elif variant_cls is RelationshipTypeDefinition:
        for attr, name in RELATIONSHIP_LIST_FIELDS:
            kwargs[attr] = tuple(element.text or "" for element in children.get(name, []))

    return variant_cls(**kwargs)


def read_from_xml(stream: BinaryIO) -> TypeDefinition:
    """Read a type definition from a XML stream.

    The stream must be UTF-8 encoded. It is not closed.

    Raises:
        FormatError: If the stream is not well-formed XML.
        SchemaError: If the document is not a type definition.
    """
    if stream is None:
        raise InvalidArgumentError("Input stream must be set!")

    try:
        tree = ET.parse(stream)
    except ET.ParseError as e:
        logger.error(f"Failed to parse type definition XML: {e}")
        raise FormatError(f"Invalid XML: {e}") from e

    type_def = type_definition_from_element(tree.getroot())
    logger.debug(f"Read type definition '{type_def.id}' from XML")
    return type_def
