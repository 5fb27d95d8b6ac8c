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

"""Service definitions held by the container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

if TYPE_CHECKING:
    from conduit.core.container import Container

Factory = Callable[["Container"], Any]
Producer = Union[Factory, type, str]


class Definition:
    """A bound service: identifier, producer, lifecycle and tags.

    The producer is either a factory taking the container, a class, or a
    string naming a class. Classes and class names are auto-wired; anything
    else callable is invoked with the container.

    Example:
        container.bind("mailer", lambda c: SmtpMailer(c.get(Settings))).share()
        container.bind(Cache, RedisCache).add_tag("backends")
    """

    __slots__ = ("_id", "_producer", "_shared", "_resolved", "_has_resolved", "_tags")

    def __init__(self, id: str, producer: Optional[Producer] = None):
        self._id = id
        self._producer: Producer = id if producer is None else producer
        self._shared = False
        self._resolved: Any = None
        self._has_resolved = False
        # dict keeps insertion order; values unused
        self._tags: Dict[str, None] = {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def producer(self) -> Producer:
        return self._producer

    @property
    def is_factory(self) -> bool:
        """True when the producer is called rather than auto-wired."""
        return not isinstance(self._producer, (type, str)) and callable(self._producer)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def share(self) -> "Definition":
        """Mark this definition as shared (singleton)."""
        self._shared = True
        return self

    @property
    def shared(self) -> bool:
        return self._shared

    @property
    def has_resolved(self) -> bool:
        return self._has_resolved

    @property
    def resolved(self) -> Any:
        return self._resolved

    def set_resolved(self, instance: Any) -> None:
        """Cache the resolved instance. Only the first call has an effect."""
        if self._has_resolved:
            return
        self._resolved = instance
        self._has_resolved = True

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def add_tag(self, tag: str) -> "Definition":
        self._tags.setdefault(tag, None)
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    def __repr__(self) -> str:
        kind = "shared" if self._shared else "transient"
        return f"Definition(id={self._id!r}, {kind}, tags={self.tags!r})"
