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

"""JSON serialization of type definitions (CMIS Browser Binding shape)."""

import json
import logging
from typing import BinaryIO, Optional

from ..config import codec_config
from ..exceptions import FormatError, InvalidArgumentError
from ..models.type_definition import TypeDefinition
from .mapping import read_text, type_definition_from_dict, type_definition_to_dict, write_text

logger = logging.getLogger(__name__)


def write_to_json(type_def: TypeDefinition, stream: BinaryIO, *, indent: Optional[int] = None) -> None:
    """Serialize the type definition to JSON.

    The JSON is UTF-8 encoded and the stream is flushed but not closed.

    Args:
        type_def: Type definition to serialize
        stream: Binary output stream
        indent: Indentation width; None uses the global configuration
    """
    if type_def is None:
        raise InvalidArgumentError("Type must be set!")
    if stream is None:
        raise InvalidArgumentError("Output stream must be set!")

    if indent is None:
        indent = codec_config.json_indent

    payload = type_definition_to_dict(type_def)
    write_text(stream, json.dumps(payload, indent=indent, ensure_ascii=False))
    logger.debug(f"Wrote type definition '{type_def.id}' as JSON")


def read_from_json(stream: BinaryIO, *, schema_check: Optional[bool] = None) -> TypeDefinition:
    """Read a type definition from a JSON stream.

    The stream must be UTF-8 encoded. It is not closed.

    Raises:
        FormatError: If the stream is not well-formed JSON.
        SchemaError: If the JSON value is not a type definition object.
    """
    if stream is None:
        raise InvalidArgumentError("Input stream must be set!")

    text = read_text(stream, "JSON")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse type definition JSON: {e}")
        raise FormatError(f"Invalid JSON: {e}") from e

    type_def = type_definition_from_dict(data, schema_check=schema_check)
    logger.debug(f"Read type definition '{type_def.id}' from JSON")
    return type_def
