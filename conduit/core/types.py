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

"""Service keys and the registry of constructible classes.

Identifiers are strings or classes. A class is keyed by its dotted path
("package.module.QualName") so that ``container.get(Mailer)`` and
``container.get("app.mail.Mailer")`` reach the same definition.

Turning a key back into a class goes through TypeRegistry: classes the
container has seen are recorded explicitly, and other dotted names can
optionally be imported on demand.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, Optional, Type, Union

logger = logging.getLogger(__name__)

ServiceId = Union[str, Type[Any]]


def service_key(service_id: ServiceId) -> str:
    """Normalize an identifier to its string key.

    Raises:
        TypeError: If the identifier is neither a string nor a class
    """
    if isinstance(service_id, str):
        return service_id
    if isinstance(service_id, type):
        return f"{service_id.__module__}.{service_id.__qualname__}"
    raise TypeError(
        f"Service identifier must be a str or a class, got {type(service_id).__name__}"
    )


def locate_class(name: str) -> Optional[Type[Any]]:
    """Import the class named by a dotted path, or return None.

    Nested classes are supported ("pkg.mod.Outer.Inner"). Names without a
    dot never import anything.
    """
    parts = name.split(".")
    if len(parts) < 2 or not all(parts):
        return None

    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attr in parts[split:]:
                obj = getattr(obj, attr)
        except AttributeError:
            return None
        return obj if isinstance(obj, type) else None

    return None


class TypeRegistry:
    """Explicit registry of classes the container may construct.

    Example:
        types = TypeRegistry()
        types.register(Mailer)
        types.lookup("app.mail.Mailer")  # -> Mailer
    """

    def __init__(self, resolve_dotted_names: bool = True) -> None:
        self._types: Dict[str, Type[Any]] = {}
        self._resolve_dotted_names = resolve_dotted_names

    def register(self, cls: Type[Any]) -> str:
        """Record a class and return its key."""
        key = service_key(cls)
        if key not in self._types:
            self._types[key] = cls
            logger.debug(f"Registered constructible type {key}")
        return key

    def lookup(self, key: str) -> Optional[Type[Any]]:
        """Return the class for a key, importing it if allowed."""
        cls = self._types.get(key)
        if cls is not None:
            return cls
        if not self._resolve_dotted_names:
            return None

        cls = locate_class(key)
        if cls is not None:
            self._types[key] = cls
        return cls

    def require(self, key: str) -> Type[Any]:
        """Like lookup(), but raise LookupError when no class is found."""
        cls = self.lookup(key)
        if cls is None:
            if self._resolve_dotted_names:
                raise LookupError(f"{key!r} is neither a registered nor an importable class")
            raise LookupError(f"{key!r} is not a registered class")
        return cls

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __len__(self) -> int:
        return len(self._types)
