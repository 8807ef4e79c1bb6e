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

"""Structural validation of type and property definitions.

Violations are returned as data, in check order, so callers can present every
problem of a record at once. Only a missing record argument raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..exceptions import InvalidArgumentError
from ..models.enums import BaseTypeId
from ..models.type_definition import PropertyDefinition, TypeDefinition


QUERY_NAME_FORBIDDEN_CHARACTERS = frozenset(" ,\"'\\.()")


@dataclass(frozen=True)
class ValidationError:
    attribute: str
    message: str

    def __str__(self) -> str:
        return f"{self.attribute}: {self.message}"


def _is_blank(value: Optional[str]) -> bool:
    # Non-string values are never a usable id or name.
    return not isinstance(value, str) or len(value) == 0


def _base_kind(base_type_id: Any) -> Any:
    """Return the wire value of a base type id; values that are not a BaseTypeId pass through."""
    return base_type_id.value if isinstance(base_type_id, BaseTypeId) else base_type_id


def check_query_name(query_name: Optional[str]) -> bool:
    """Return True if ``query_name`` is set, non-empty and free of reserved characters."""
    if _is_blank(query_name):
        return False
    return not any(ch in QUERY_NAME_FORBIDDEN_CHARACTERS for ch in query_name)


def _validate_query_name(query_name: Optional[str], errors: List[ValidationError]) -> None:
    if query_name is None:
        return
    if query_name == "":
        errors.append(ValidationError("queryName", "Query name must not be empty."))
    elif not check_query_name(query_name):
        errors.append(ValidationError("queryName", "Query name contains invalid characters."))


def _validate_flags(flags: Tuple[Tuple[str, str, Optional[bool]], ...], errors: List[ValidationError]) -> None:
    for attribute, label, value in flags:
        if value is None:
            errors.append(ValidationError(attribute, f"{label} flag must be set."))


# ---- variant checks ----------------------------------------------------------


def _check_document(type_def: TypeDefinition, errors: List[ValidationError]) -> None:
    # Extension classes may tag themselves as documents without the document fields.
    if getattr(type_def, "versionable", None) is None:
        errors.append(ValidationError("versionable", "Versionable flag must be set."))
    if getattr(type_def, "content_stream_allowed", None) is None:
        errors.append(ValidationError("contentStreamAllowed", "ContentStreamAllowed flag must be set."))


# Extra checks per variant; variants without extra required fields are absent.
_VARIANT_CHECKS: Dict[BaseTypeId, Callable[[TypeDefinition, List[ValidationError]], None]] = {
    BaseTypeId.DOCUMENT: _check_document,
}


def _validate_variant(type_def: TypeDefinition, errors: List[ValidationError]) -> None:
    variant = type_def.VARIANT
    if variant is None:
        errors.append(ValidationError("baseId", "Unknown base interface."))
        return

    if type_def.base_type_id != variant:
        errors.append(ValidationError("baseId", "Base type id does not match the type."))

    extra_check = _VARIANT_CHECKS.get(variant)
    if extra_check is not None:
        extra_check(type_def, errors)


# ---- public API ----------------------------------------------------------------


def validate_type_definition(type_def: TypeDefinition) -> List[ValidationError]:
    """Validate a type definition.

    Every rule is evaluated; the result lists one entry per violated rule in a
    fixed order. An empty list means the type definition is valid.

    Args:
        type_def: Type definition to check. It is never modified.

    Returns:
        List of :class:`ValidationError` entries.

    Raises:
        InvalidArgumentError: If ``type_def`` is None.
    """
    if type_def is None:
        raise InvalidArgumentError("Type is null!")

    errors: List[ValidationError] = []

    if _is_blank(type_def.id):
        errors.append(ValidationError("id", "Type id must be set."))

    if _is_blank(type_def.local_name):
        errors.append(ValidationError("localName", "Local name must be set."))

    _validate_query_name(type_def.query_name, errors)

    _validate_flags(
        (
            ("creatable", "Creatable", type_def.creatable),
            ("fileable", "Fileable", type_def.fileable),
            ("queryable", "Queryable", type_def.queryable),
            ("controllablePolicy", "ControllablePolicy", type_def.controllable_policy),
            ("controllableACL", "ControllableACL", type_def.controllable_acl),
            ("fulltextIndexed", "FulltextIndexed", type_def.fulltext_indexed),
            ("includedInSupertypeQuery", "IncludedInSupertypeQuery", type_def.included_in_supertype_query),
        ),
        errors,
    )

    if type_def.queryable is True and _is_blank(type_def.query_name):
        errors.append(ValidationError("queryable", "Queryable flag is set to TRUE, but the query name is not set."))

    if type_def.base_type_id is None:
        errors.append(ValidationError("baseId", "Base type id must be set."))
    elif _base_kind(type_def.base_type_id) != type_def.parent_type_id:
        # Root types are recognized by a parent id equal to the base type id.
        if _is_blank(type_def.parent_type_id):
            errors.append(ValidationError("parentTypeId", "Parent type id must be set."))

    _validate_variant(type_def, errors)

    return errors


def validate_property_definition(prop_def: PropertyDefinition) -> List[ValidationError]:
    """Validate a property definition with the same conventions as type definitions."""
    if prop_def is None:
        raise InvalidArgumentError("Property definition is null!")

    errors: List[ValidationError] = []

    if _is_blank(prop_def.id):
        errors.append(ValidationError("id", "Property id must be set."))

    if _is_blank(prop_def.local_name):
        errors.append(ValidationError("localName", "Local name must be set."))

    _validate_query_name(prop_def.query_name, errors)

    if prop_def.property_type is None:
        errors.append(ValidationError("propertyType", "Property type must be set."))
    if prop_def.cardinality is None:
        errors.append(ValidationError("cardinality", "Cardinality must be set."))
    if prop_def.updatability is None:
        errors.append(ValidationError("updatability", "Updatability must be set."))

    _validate_flags(
        (
            ("inherited", "Inherited", prop_def.inherited),
            ("required", "Required", prop_def.required),
            ("queryable", "Queryable", prop_def.queryable),
            ("orderable", "Orderable", prop_def.orderable),
        ),
        errors,
    )

    if prop_def.queryable is True and _is_blank(prop_def.query_name):
        errors.append(ValidationError("queryable", "Queryable flag is set to TRUE, but the query name is not set."))

    return errors
