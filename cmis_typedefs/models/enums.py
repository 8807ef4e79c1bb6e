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

"""Enumerations used by CMIS type and property definitions."""

from enum import Enum
from typing import List


class _ValueEnum(str, Enum):
    """String enum whose members compare and serialize by their wire value."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def get_all_values(cls) -> List[str]:
        return [member.value for member in cls]


class BaseTypeId(_ValueEnum):
    DOCUMENT = "cmis:document"
    FOLDER = "cmis:folder"
    RELATIONSHIP = "cmis:relationship"
    POLICY = "cmis:policy"
    ITEM = "cmis:item"
    SECONDARY = "cmis:secondary"


class ContentStreamAllowed(_ValueEnum):
    NOT_ALLOWED = "notallowed"
    ALLOWED = "allowed"
    REQUIRED = "required"


class PropertyType(_ValueEnum):
    BOOLEAN = "boolean"
    ID = "id"
    INTEGER = "integer"
    DATETIME = "datetime"
    DECIMAL = "decimal"
    HTML = "html"
    STRING = "string"
    URI = "uri"


class Cardinality(_ValueEnum):
    SINGLE = "single"
    MULTI = "multi"


class Updatability(_ValueEnum):
    READONLY = "readonly"
    READWRITE = "readwrite"
    WHENCHECKEDOUT = "whencheckedout"
    ONCREATE = "oncreate"
