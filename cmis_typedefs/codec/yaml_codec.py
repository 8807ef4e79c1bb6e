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

"""YAML serialization of type definitions.

YAML documents use the same object shape as the JSON codec, which makes
hand-written type definitions easier to keep under version control.
"""

import logging
from typing import BinaryIO, Optional

import yaml

from ..exceptions import FormatError, InvalidArgumentError
from ..models.type_definition import TypeDefinition
from .mapping import read_text, type_definition_from_dict, type_definition_to_dict, write_text

logger = logging.getLogger(__name__)


def write_to_yaml(type_def: TypeDefinition, stream: BinaryIO) -> None:
    """Serialize the type definition to YAML.

    The YAML is UTF-8 encoded and the stream is flushed but not closed.
    """
    if type_def is None:
        raise InvalidArgumentError("Type must be set!")
    if stream is None:
        raise InvalidArgumentError("Output stream must be set!")

    payload = type_definition_to_dict(type_def)
    text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True, default_flow_style=False)
    write_text(stream, text)
    logger.debug(f"Wrote type definition '{type_def.id}' as YAML")


def read_from_yaml(stream: BinaryIO, *, schema_check: Optional[bool] = None) -> TypeDefinition:
    """Read a type definition from a YAML stream.

    The stream must be UTF-8 encoded. It is not closed.
    """
    if stream is None:
        raise InvalidArgumentError("Input stream must be set!")

    text = read_text(stream, "YAML")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse type definition YAML: {e}")
        raise FormatError(f"Invalid YAML: {e}") from e

    type_def = type_definition_from_dict(data, schema_check=schema_check)
    logger.debug(f"Read type definition '{type_def.id}' from YAML")
    return type_def
