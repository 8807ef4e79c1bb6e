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

"""Custom exceptions for the CMIS type definition tools."""


class TypeDefinitionError(Exception):
    """Base exception for type-definition related errors."""
    pass


class InvalidArgumentError(TypeDefinitionError, ValueError):
    """Exception raised when a required record or stream argument is missing."""
    pass


class CodecError(TypeDefinitionError):
    """Exception raised for serialization errors."""
    pass


class FormatError(CodecError):
    """Exception raised when input bytes are not well-formed XML, JSON or YAML."""
    pass


class SchemaError(CodecError):
    """Exception raised when well-formed input is not shaped like a type definition."""
    pass
