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

"""
Conduit - an auto-wiring dependency injection container.

Maps service identifiers (strings or classes) to factories or classes,
builds constructor dependencies from type annotations, caches singletons,
and supports aliases and tags.

Usage:
    from conduit import Container

    container = Container()
    container.singleton(Database, lambda c: Database(url="sqlite://"))
    container.bind("users", UserRepository)  # UserRepository(db: Database)

    users = container.get("users")
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from conduit.core.container import Container
from conduit.config.settings import ContainerSettings
from conduit.config.logging_config import configure_logging_levels
from conduit.core.autowire import (
    Autowirer,
    ParameterDescriptor,
    TypeKind,
    describe_constructor,
    is_value_type,
)
from conduit.core.definition import Definition
from conduit.core.errors import (
    CircularDependencyError,
    ConduitError,
    ContainerError,
    ErrorCategory,
    NotFoundError,
)
from conduit.core.types import TypeRegistry, locate_class, service_key

__all__ = [
    "Container",
    "ContainerSettings",
    "configure_logging_levels",
    "Autowirer",
    "ParameterDescriptor",
    "TypeKind",
    "describe_constructor",
    "is_value_type",
    "Definition",
    "CircularDependencyError",
    "ConduitError",
    "ContainerError",
    "ErrorCategory",
    "NotFoundError",
    "TypeRegistry",
    "locate_class",
    "service_key",
]
