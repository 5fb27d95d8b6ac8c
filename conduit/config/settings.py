# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
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

"""Container settings.

Settings come from ``CONDUIT_*`` environment variables, an optional ``.env``
file, or a YAML file via ``ContainerSettings.from_yaml()``:

    # conduit.yaml
    autowire: true
    resolve_dotted_names: false
    max_resolution_depth: 64
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conduit.core.errors import ConduitError, ErrorCategory

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ContainerSettings(BaseSettings):
    """Behaviour switches for a Container."""

    model_config = SettingsConfigDict(
        env_prefix="CONDUIT_",
        env_file=".env" if not os.getenv("CONDUIT_SKIP_ENV_FILE") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Auto-wire classes that have no definition when they are requested
    autowire: bool = True
    # Allow "package.module.Class" strings to be imported on demand
    resolve_dotted_names: bool = True
    # Ceiling on nested resolutions, one level per service built; None means unbounded
    max_resolution_depth: Optional[int] = None

    log_level: str = "WARNING"

    @field_validator("max_resolution_depth")
    @classmethod
    def validate_max_resolution_depth(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("max_resolution_depth must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ContainerSettings":
        """Load settings from a YAML mapping.

        Keys present in the file take precedence over environment variables.

        Raises:
            FileNotFoundError: If the file does not exist
            ConduitError: If the file does not hold a mapping
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConduitError(
                f"Expected a mapping in {path}, got {type(data).__name__}",
                category=ErrorCategory.CONFIG_INVALID,
                details={"path": str(path)},
            )

        logger.debug(f"Loaded container settings from {path}")
        values: Dict[str, Any] = data
        return cls(**values)
