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

"""Error types raised by the container.

Two kinds of failure surface from resolution:
- NotFoundError: nothing is registered under an identifier and it does not
  name a class. The autowirer watches for this one to apply its
  default/None fallbacks.
- ContainerError: anything that goes wrong while building (cycles, abstract
  classes, unresolvable parameters, introspection failures). Never caught by
  the fallback logic.

Both share ConduitError, which carries a category, details and a correlation
ID so hosts can log them in a structured way.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(Enum):
    """Categories of container errors."""

    SERVICE_NOT_FOUND = "service_not_found"
    CLASS_NOT_FOUND = "class_not_found"
    NOT_INSTANTIABLE = "not_instantiable"
    INTROSPECTION_FAILED = "introspection_failed"
    UNRESOLVABLE_PARAMETER = "unresolvable_parameter"
    CIRCULAR_DEPENDENCY = "circular_dependency"
    DEPTH_EXCEEDED = "depth_exceeded"
    CONFIG_INVALID = "config_invalid"
    UNKNOWN = "unknown"


class ConduitError(Exception):
    """Base exception for all container errors.

    Provides structured error information including:
    - Error category
    - Correlation ID for tracking
    - Recovery suggestions
    - Original exception chain
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        details: Optional[Dict[str, Any]] = None,
        recovery_hint: Optional[str] = None,
        correlation_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}
        self.recovery_hint = recovery_hint
        self.correlation_id = correlation_id or str(uuid.uuid4())[:8]
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.message,
            "category": self.category.value,
            "correlation_id": self.correlation_id,
            "recovery_hint": self.recovery_hint,
            "details": self.details,
            "cause": repr(self.cause) if self.cause is not None else None,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        result = f"[{self.correlation_id}] {self.message}"
        if self.recovery_hint:
            result += f"\nRecovery hint: {self.recovery_hint}"
        return result


class NotFoundError(ConduitError):
    """Nothing can be resolved under the requested identifier."""

    def __init__(self, service_id: str, **kwargs: Any):
        kwargs.setdefault("category", ErrorCategory.SERVICE_NOT_FOUND)
        kwargs.setdefault(
            "recovery_hint",
            "Bind the identifier with bind()/singleton() or pass an importable class.",
        )
        super().__init__(f'Service "{service_id}" not found in container.', **kwargs)
        self.service_id = service_id
        self.details["service_id"] = service_id


class ContainerError(ConduitError):
    """Building a service failed."""

    def __init__(
        self,
        message: str,
        service_id: Optional[str] = None,
        parameter: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.service_id = service_id
        self.parameter = parameter
        if service_id is not None:
            self.details["service_id"] = service_id
        if parameter is not None:
            self.details["parameter"] = parameter


class CircularDependencyError(ContainerError):
    """A definition was requested while it was already being resolved."""

    def __init__(self, chain: List[str], **kwargs: Any):
        super().__init__(
            f"Circular dependency detected: {' -> '.join(chain)}",
            service_id=chain[-1] if chain else None,
            category=ErrorCategory.CIRCULAR_DEPENDENCY,
            recovery_hint="Break the cycle with a factory that resolves one side lazily.",
            **kwargs,
        )
        self.chain = list(chain)
        self.details["chain"] = self.chain
