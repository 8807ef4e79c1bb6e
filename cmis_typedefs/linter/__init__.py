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

"""Linter package for CMIS type definition files."""

import logging
from pathlib import Path
from typing import BinaryIO, Callable, Dict, List

from ..exceptions import CodecError
from ..codec import read_from_json, read_from_xml, read_from_yaml
from ..models.type_definition import TypeDefinition
from ..validation import validate_property_definition, validate_type_definition
from .report import LintResult

__all__ = ['lint_files', 'lint_file', 'LintResult', 'READERS']

logger = logging.getLogger(__name__)

# File suffix -> codec reader
READERS: Dict[str, Callable[[BinaryIO], TypeDefinition]] = {
    '.xml': read_from_xml,
    '.json': read_from_json,
    '.yaml': read_from_yaml,
    '.yml': read_from_yaml,
}


def lint_file(file_path: Path, strict: bool = False) -> LintResult:
    """Decode and validate one type definition file.

    Args:
        file_path: File to lint; its suffix selects the codec
        strict: Report property definition issues as errors instead of warnings

    Returns:
        LintResult for the file
    """
    result = LintResult(file_path)

    reader = READERS.get(file_path.suffix.lower())
    if reader is None:
        result.add_error(f"Unsupported file type '{file_path.suffix}'. Expected one of: {', '.join(READERS)}")
        return result

    try:
        with open(file_path, 'rb') as stream:
            type_def = reader(stream)
    except CodecError as e:
        result.add_error(f"Cannot read type definition: {e}")
        return result

    result.type_id = type_def.id
    logger.debug(f"Linting type definition '{type_def.id}' from {file_path}")

    for error in validate_type_definition(type_def):
        result.add_error(error.message, attribute=error.attribute)

    add_property_issue = result.add_error if strict else result.add_warning
    for prop_id, prop_def in type_def.property_definitions.items():
        for error in validate_property_definition(prop_def):
            add_property_issue(error.message, attribute=f"propertyDefinitions/{prop_id}/{error.attribute}")

    return result


def lint_files(file_paths: List[Path], strict: bool = False) -> List[LintResult]:
    """Lint a list of type definition files.

    Args:
        file_paths: List of file paths to lint
        strict: Report property definition issues as errors

    Returns:
        List of LintResult objects, one per file
    """
    results = []

    for file_path in file_paths:
        try:
            results.append(lint_file(file_path, strict=strict))
        except OSError as e:
            result = LintResult(file_path)
            result.add_error(f"Cannot open file: {e}")
            results.append(result)

    return results
