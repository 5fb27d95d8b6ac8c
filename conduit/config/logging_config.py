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

"""Logging level setup for the conduit logger hierarchy.

The container only emits records through module loggers; attaching handlers
is left to the host application.
"""

import logging
from typing import Optional

from conduit.config.settings import ContainerSettings

# Finer than DEBUG; the autowirer logs per-parameter decisions at this level
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER = "conduit"


def configure_logging_levels(
    log_level: Optional[str] = None, settings: Optional[ContainerSettings] = None
) -> int:
    """Set the level of the ``conduit`` logger.

    Args:
        log_level: Level name (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to ``settings.log_level``.
        settings: Settings to read the level from when log_level is None

    Returns:
        The numeric level applied
    """
    if log_level is None:
        log_level = (settings or ContainerSettings()).log_level

    level_upper = log_level.upper()
    if level_upper == "TRACE":
        level = TRACE
    else:
        level = getattr(logging, level_upper, logging.INFO)

    logging.getLogger(ROOT_LOGGER).setLevel(level)
    return level
