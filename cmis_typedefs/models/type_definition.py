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

"""Immutable CMIS type definition records.

A type definition is a closed tagged union over the six base kinds. Each
variant class carries a ``VARIANT`` tag naming its canonical base kind; the
plain :class:`TypeDefinition` base has no tag and is only reachable as an
extension point.

Tri-state flags are ``Optional[bool]``: ``None`` means "not set".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterator, Mapping, Optional, Tuple, Type

from .enums import BaseTypeId, Cardinality, ContentStreamAllowed, PropertyType, Updatability


@dataclass(frozen=True)
class TypeMutability:
    create: Optional[bool] = None
    update: Optional[bool] = None
    delete: Optional[bool] = None


@dataclass(frozen=True)
class PropertyDefinition:
    id: Optional[str] = None
    local_name: Optional[str] = None
    local_namespace: Optional[str] = None
    display_name: Optional[str] = None
    query_name: Optional[str] = None
    description: Optional[str] = None
    property_type: Optional[PropertyType] = None
    cardinality: Optional[Cardinality] = None
    updatability: Optional[Updatability] = None
    inherited: Optional[bool] = None
    required: Optional[bool] = None
    queryable: Optional[bool] = None
    orderable: Optional[bool] = None
    open_choice: Optional[bool] = None


class PropertyDefinitionMap(Mapping[str, PropertyDefinition]):
    """Read-only mapping of property id to property definition."""

    def __init__(self, items: Optional[Mapping[str, PropertyDefinition]] = None):
        self._items: Dict[str, PropertyDefinition] = dict(items or {})

    def __getitem__(self, key: str) -> PropertyDefinition:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


@dataclass(frozen=True)
class TypeDefinition:
    """Attributes shared by every type definition variant."""

    VARIANT: ClassVar[Optional[BaseTypeId]] = None

    id: Optional[str] = None
    local_name: Optional[str] = None
    local_namespace: Optional[str] = None
    display_name: Optional[str] = None
    query_name: Optional[str] = None
    description: Optional[str] = None
    base_type_id: Optional[BaseTypeId] = None
    parent_type_id: Optional[str] = None

    creatable: Optional[bool] = None
    fileable: Optional[bool] = None
    queryable: Optional[bool] = None
    fulltext_indexed: Optional[bool] = None
    included_in_supertype_query: Optional[bool] = None
    controllable_policy: Optional[bool] = None
    controllable_acl: Optional[bool] = None

    type_mutability: Optional[TypeMutability] = None
    property_definitions: Mapping[str, PropertyDefinition] = field(default_factory=PropertyDefinitionMap)

    def __post_init__(self) -> None:
        # The record owns a read-only copy; later changes to the caller's dict do not leak in.
        if not isinstance(self.property_definitions, PropertyDefinitionMap):
            object.__setattr__(self, "property_definitions", PropertyDefinitionMap(self.property_definitions))


@dataclass(frozen=True)
class DocumentTypeDefinition(TypeDefinition):
    VARIANT: ClassVar[Optional[BaseTypeId]] = BaseTypeId.DOCUMENT

    versionable: Optional[bool] = None
    content_stream_allowed: Optional[ContentStreamAllowed] = None


@dataclass(frozen=True)
class FolderTypeDefinition(TypeDefinition):
    VARIANT: ClassVar[Optional[BaseTypeId]] = BaseTypeId.FOLDER


@dataclass(frozen=True)
class RelationshipTypeDefinition(TypeDefinition):
    VARIANT: ClassVar[Optional[BaseTypeId]] = BaseTypeId.RELATIONSHIP

    allowed_source_types: Tuple[str, ...] = ()
    allowed_target_types: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "allowed_source_types", tuple(self.allowed_source_types))
        object.__setattr__(self, "allowed_target_types", tuple(self.allowed_target_types))


@dataclass(frozen=True)
class PolicyTypeDefinition(TypeDefinition):
    VARIANT: ClassVar[Optional[BaseTypeId]] = BaseTypeId.POLICY


@dataclass(frozen=True)
class ItemTypeDefinition(TypeDefinition):
    VARIANT: ClassVar[Optional[BaseTypeId]] = BaseTypeId.ITEM


@dataclass(frozen=True)
class SecondaryTypeDefinition(TypeDefinition):
    VARIANT: ClassVar[Optional[BaseTypeId]] = BaseTypeId.SECONDARY


VARIANT_CLASSES: Dict[BaseTypeId, Type[TypeDefinition]] = {
    BaseTypeId.DOCUMENT: DocumentTypeDefinition,
    BaseTypeId.FOLDER: FolderTypeDefinition,
    BaseTypeId.RELATIONSHIP: RelationshipTypeDefinition,
    BaseTypeId.POLICY: PolicyTypeDefinition,
    BaseTypeId.ITEM: ItemTypeDefinition,
    BaseTypeId.SECONDARY: SecondaryTypeDefinition,
}


def variant_class_for(base_type_id: BaseTypeId) -> Type[TypeDefinition]:
    """Return the variant class whose canonical base kind is ``base_type_id``."""
    return VARIANT_CLASSES[base_type_id]
