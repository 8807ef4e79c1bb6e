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

"""Configuration management for the type definition codecs and linter."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .utils.logging_utils import PACKAGE_LOGGER_NAME, configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return int(raw)


@dataclass
class CodecConfig:
    """Configuration class for type definition serialization."""
    json_indent: Optional[int] = None
    xml_pretty_print: bool = False
    schema_check: bool = True
    log_level: str = "INFO"
    print_level: str = "ERROR"

    @classmethod
    def from_env(cls) -> 'CodecConfig':
        """Create configuration from environment variables."""
        return cls(
            json_indent=_env_optional_int('CMIS_TYPEDEFS_JSON_INDENT'),
            xml_pretty_print=_env_flag('CMIS_TYPEDEFS_XML_PRETTY_PRINT', 'false'),
            schema_check=_env_flag('CMIS_TYPEDEFS_SCHEMA_CHECK', 'true'),
            log_level=os.getenv('CMIS_TYPEDEFS_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('CMIS_TYPEDEFS_PRINT_LEVEL', 'ERROR'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name=PACKAGE_LOGGER_NAME,
        )


# Global configuration instance
codec_config = CodecConfig.from_env()
