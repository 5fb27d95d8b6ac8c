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

"""Dependency Injection Container for Conduit.

This module provides the container that:
- Registers transient and shared (singleton) definitions
- Auto-wires constructor dependencies from type annotations
- Redirects identifiers through single-hop aliases
- Groups definitions under tags for bulk resolution
- Detects circular dependencies while resolving

Identifiers are strings or classes. Classes are keyed by their dotted path,
so a class and its dotted name address the same definition.

Example Usage:
    from conduit import Container

    container = Container()
    container.singleton(Settings, lambda c: Settings.load())
    container.bind("mailer", SmtpMailer)
    container.alias(Mailer, "mailer")

    # SmtpMailer.__init__(self, settings: Settings) is auto-wired
    mailer = container.get(Mailer)

    # Classes that were never bound are auto-wired on demand (always transient)
    report = container.get(ReportBuilder)
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type

from conduit.config.settings import ContainerSettings
from conduit.core.autowire import Autowirer
from conduit.core.definition import Definition, Producer
from conduit.core.errors import (
    CircularDependencyError,
    ContainerError,
    ErrorCategory,
    NotFoundError,
)
from conduit.core.types import ServiceId, TypeRegistry, service_key

logger = logging.getLogger(__name__)


class Container:
    """Central dependency injection container.

    Resolution of ``get(id)``:
        1. Substitute the id once through the alias table
        2. If a definition exists, resolve it (cached when shared)
        3. Else, if the id names a class, auto-wire it without caching
        4. Else raise NotFoundError

    Resolution runs under a re-entrant lock, so factories may call back into
    the container and shared definitions are built once even under
    concurrent first access.

    Example:
        container = Container()
        container.singleton("db", lambda c: Database(c.get("dsn")))
        container.bind("dsn", lambda c: "sqlite://")
        container.tag(["db"], "closeable")

        db = container.get("db")
        closeables = container.tagged("closeable")
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize an empty container.

        Args:
            settings: Container settings; defaults are read from the environment
        """
        self.settings = settings or ContainerSettings()
        self._definitions: Dict[str, Definition] = {}
        self._aliases: Dict[str, str] = {}
        self._resolving: List[str] = []
        self._autowiring: List[str] = []
        self._depth = 0
        self._types = TypeRegistry(resolve_dotted_names=self.settings.resolve_dotted_names)
        self._autowirer = Autowirer(self)
        self._lock = threading.RLock()

    @property
    def types(self) -> TypeRegistry:
        """Registry of classes this container may construct."""
        return self._types

    # =========================================================================
    # Registration
    # =========================================================================

    def bind(self, id: ServiceId, producer: Optional[Producer] = None) -> Definition:
        """Bind a transient service, replacing any existing definition.

        Args:
            id: Service identifier (string or class)
            producer: Factory taking the container, a class, or a class name.
                Defaults to the identifier itself.

        Returns:
            The new definition, for tagging or sharing
        """
        return self._define(id, producer, shared=False)

    def singleton(self, id: ServiceId, producer: Optional[Producer] = None) -> Definition:
        """Bind a shared service whose first resolved instance is reused."""
        return self._define(id, producer, shared=True)

    def add(self, id: ServiceId, producer: Optional[Producer] = None) -> Definition:
        """Alias for bind()."""
        return self.bind(id, producer)

    def add_shared(self, id: ServiceId, producer: Optional[Producer] = None) -> Definition:
        """Alias for singleton()."""
        return self.singleton(id, producer)

    def instance(self, id: ServiceId, obj: Any) -> Definition:
        """Bind an already created object as a shared service."""
        definition = self._define(id, None, shared=True)
        definition.set_resolved(obj)
        return definition

    def alias(self, alias: ServiceId, id: ServiceId) -> "Container":
        """Redirect ``alias`` to ``id``.

        Aliases are single hop: an alias that points at another alias is not
        followed any further.
        """
        alias_key, target_key = self._key(alias), self._key(id)
        with self._lock:
            self._aliases[alias_key] = target_key
        logger.debug(f"Aliased {alias_key} -> {target_key}")
        return self

    def tag(self, ids: Iterable[ServiceId], tag: str) -> "Container":
        """Tag bound services. Identifiers without a definition are skipped."""
        with self._lock:
            for id in ids:
                definition = self._definitions.get(self._key(id))
                if definition is None:
                    logger.debug(f"Skipping tag {tag!r} for unbound service {id!r}")
                    continue
                definition.add_tag(tag)
        return self

    def forget(self, id: ServiceId) -> bool:
        """Remove a definition. Aliases pointing at it are left in place.

        Returns:
            True if a definition was removed
        """
        key = self._key(id)
        with self._lock:
            removed = self._definitions.pop(key, None) is not None
        if removed:
            logger.debug(f"Removed {key}")
        return removed

    def register_type(self, cls: Type[Any]) -> str:
        """Make a class constructible by key and return the key."""
        return self._types.register(cls)

    def _define(self, id: ServiceId, producer: Optional[Producer], shared: bool) -> Definition:
        key = self._key(id)
        if producer is None and isinstance(id, type):
            producer = id
        elif isinstance(producer, type):
            self._types.register(producer)

        definition = Definition(key, producer)
        if shared:
            definition.share()

        with self._lock:
            self._definitions[key] = definition
        logger.debug(f"Bound {key} as {'shared' if shared else 'transient'}")
        return definition

    # =========================================================================
    # Lookup
    # =========================================================================

    def keys(self) -> List[str]:
        """All bound identifiers, in binding order."""
        return list(self._definitions)

    def definition(self, id: ServiceId) -> Optional[Definition]:
        """Return the definition an identifier resolves to, if any."""
        return self._definitions.get(self._dealias(self._key(id)))

    def has(self, id: ServiceId) -> bool:
        """Check whether an identifier is bound or names a class ``get`` would auto-wire.

        Never raises and never builds anything.
        """
        try:
            key = self._dealias(self._key(id))
            if key in self._definitions:
                return True
            return self.settings.autowire and self._find_class(key) is not None
        except Exception as e:
            logger.debug(f"Treating {id!r} as unresolvable: {e}")
            return False

    def __contains__(self, id: object) -> bool:
        return self.has(id)  # type: ignore[arg-type]

    # =========================================================================
    # Resolution
    # =========================================================================

    def get(self, id: ServiceId) -> Any:
        """Resolve a service.

        Args:
            id: Service identifier (string or class)

        Returns:
            Service instance

        Raises:
            NotFoundError: If nothing is bound and the id names no class
            ContainerError: If building the service fails
        """
        key = self._dealias(self._key(id))
        with self._lock:
            definition = self._definitions.get(key)
            if definition is not None:
                return self._resolve(definition)

            if self.settings.autowire:
                cls = self._find_class(key)
                if cls is not None:
                    return self._autowire(cls)

        raise NotFoundError(key)

    def get_optional(self, id: ServiceId, default: Any = None) -> Any:
        """Resolve a service, or return ``default`` if it cannot be found.

        Build failures still raise ContainerError.
        """
        try:
            return self.get(id)
        except NotFoundError:
            return default

    def tagged(self, tag: str) -> List[Any]:
        """Resolve every service carrying ``tag``, in binding order."""
        with self._lock:
            definitions = [d for d in self._definitions.values() if d.has_tag(tag)]
            return [self.get(definition.id) for definition in definitions]

    def _resolve(self, definition: Definition) -> Any:
        if definition.shared and definition.has_resolved:
            return definition.resolved

        id = definition.id
        if id in self._resolving:
            raise CircularDependencyError(self._resolving + [id])

        with self._frame(id, self._resolving):
            if definition.is_factory:
                instance = definition.producer(self)  # type: ignore[operator]
            else:
                instance = self._autowire(definition.producer, counted=False)  # type: ignore[arg-type]

        if definition.shared:
            definition.set_resolved(instance)
        return instance

    def _autowire(self, target: Any, counted: bool = True) -> Any:
        key = self._key(target)
        if key in self._autowiring:
            raise CircularDependencyError(self._autowiring + [key])
        with self._frame(key, self._autowiring, counted):
            return self._autowirer.autowire(target)

    @contextmanager
    def _frame(self, key: str, stack: List[str], counted: bool = True) -> Iterator[None]:
        """Push ``key`` for the duration of a build, popping it on any exit.

        A bound class counts once towards the depth ceiling: the auto-wiring
        frame opened for a definition's own producer is not counted.
        """
        limit = self.settings.max_resolution_depth
        if counted and limit is not None and self._depth >= limit:
            raise ContainerError(
                f'Maximum resolution depth of {limit} exceeded while resolving "{key}".',
                service_id=key,
                category=ErrorCategory.DEPTH_EXCEEDED,
                recovery_hint="Raise CONDUIT_MAX_RESOLUTION_DEPTH or flatten the dependency graph.",
            )
        stack.append(key)
        if counted:
            self._depth += 1
        try:
            yield
        finally:
            stack.pop()
            if counted:
                self._depth -= 1

    # =========================================================================
    # Helpers
    # =========================================================================

    def _key(self, id: ServiceId) -> str:
        key = service_key(id)
        if isinstance(id, type):
            self._types.register(id)
        return key

    def _dealias(self, key: str) -> str:
        return self._aliases.get(key, key)

    def _find_class(self, key: str) -> Optional[Type[Any]]:
        cls = self._types.lookup(key)
        # Protocols play the role of interfaces: they name no class to build
        if cls is None or getattr(cls, "_is_protocol", False):
            return None
        return cls
