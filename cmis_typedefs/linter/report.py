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

"""Error reporting for the linter."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class LintResult:
    """Container for linting results for a single file."""

    def __init__(self, file_path: Path):
        """Initialize lint result.

        Args:
            file_path: Path to the file being linted
        """
        self.file_path = file_path
        self.type_id: Optional[str] = None
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @staticmethod
    def _entry(message: str, attribute: Optional[str]) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if attribute is not None:
            entry['attribute'] = attribute
        return entry

    def add_error(self, message: str, attribute: Optional[str] = None):
        """Add an error message.

        Args:
            message: Error message
            attribute: Optional wire name of the offending attribute
        """
        self.errors.append(self._entry(message, attribute))

    def add_warning(self, message: str, attribute: Optional[str] = None):
        """Add a warning message.

        Args:
            message: Warning message
            attribute: Optional wire name of the offending attribute
        """
        self.warnings.append(self._entry(message, attribute))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'type_id': self.type_id,
            'errors': self.errors,
            'warnings': self.warnings,
        }
