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

"""Constructor auto-wiring.

This module turns a class's ``__init__`` signature into explicit parameter
descriptors and builds instances by resolving each parameter:

- Untyped parameters and built-in types (int, str, list[str], ...) are never
  looked up in the container: they take their default, else None when the
  annotation allows it, else resolution fails.
- Class-typed parameters are requested through ``Container.get`` so that
  definitions, aliases and nested auto-wiring all apply. Only a NotFoundError
  from that lookup triggers the default/None fallback; every other error
  propagates.

Example:
    class Mailer:
        def __init__(self, transport: Transport, retries: int = 3):
            ...

    mailer = Autowirer(container).autowire(Mailer)
"""

from __future__ import annotations

import inspect
import logging
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Type, Union

from conduit.config.logging_config import TRACE
from conduit.core.errors import ContainerError, ErrorCategory, NotFoundError
from conduit.core.types import service_key

if TYPE_CHECKING:
    from conduit.core.container import Container

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_UNION_ORIGINS: Tuple[Any, ...] = (Union, getattr(types, "UnionType", Union))


class TypeKind(Enum):
    """How a parameter's annotation is treated during resolution."""

    UNTYPED = "untyped"
    BUILTIN = "builtin"
    CLASS = "class"


@dataclass(frozen=True)
class ParameterDescriptor:
    """A constructor parameter, described explicitly.

    Attributes:
        name: Parameter name
        kind: Whether the annotation is missing, built-in, or a class
        annotation: The class (for CLASS), or the raw annotation otherwise
        has_default: Whether the parameter declares a default
        default: The default value (only meaningful with has_default)
        nullable: Whether None is an acceptable value
        keyword_only: Whether the value must be passed by keyword
    """

    name: str
    kind: TypeKind
    annotation: Any = None
    has_default: bool = False
    default: Any = None
    nullable: bool = False
    keyword_only: bool = False

    @property
    def type_name(self) -> str:
        if isinstance(self.annotation, type):
            return self.annotation.__name__
        return str(self.annotation)


def _constructor(cls: Type[Any]) -> Any:
    """The callable that receives constructor arguments, or None."""
    if cls.__init__ is not object.__init__:
        return cls.__init__
    if cls.__new__ is not object.__new__:
        return cls.__new__
    return None


def has_own_constructor(cls: Type[Any]) -> bool:
    """True when the class (or a base other than object) defines __init__ or __new__."""
    return _constructor(cls) is not None


def is_instantiable(cls: Type[Any]) -> bool:
    """False for abstract classes, Protocols and enums."""
    if inspect.isabstract(cls):
        return False
    if getattr(cls, "_is_protocol", False):
        return False
    if issubclass(cls, Enum):
        return False
    return True


def is_value_type(cls: Type[Any]) -> bool:
    """True for classes that carry data rather than provide a service.

    Enums, tuple subclasses (NamedTuple) and classes built by a C-level
    ``__new__`` (datetime, Decimal, ...) are never looked up in the container.
    """
    if issubclass(cls, (Enum, tuple)):
        return True
    return (
        cls.__init__ is object.__init__
        and cls.__new__ is not object.__new__
        and not inspect.isfunction(cls.__new__)
    )


def _classify(annotation: Any) -> Tuple[TypeKind, Any, bool]:
    """Return (kind, unwrapped annotation, nullable) for an annotation."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return TypeKind.UNTYPED, None, True

    nullable = False
    if typing.get_origin(annotation) in _UNION_ORIGINS:
        args = typing.get_args(annotation)
        members = [arg for arg in args if arg is not _NONE_TYPE]
        nullable = len(members) < len(args)
        if len(members) != 1:
            # No single named type to resolve
            return TypeKind.UNTYPED, annotation, nullable
        annotation = members[0]
        if annotation is Any:
            return TypeKind.UNTYPED, None, True

    if typing.get_origin(annotation) is not None:
        # Parameterised generics (list[str], Literal["a"], ...) are data, not services
        return TypeKind.BUILTIN, annotation, nullable
    if isinstance(annotation, type):
        if annotation.__module__ == "builtins" or is_value_type(annotation):
            return TypeKind.BUILTIN, annotation, nullable
        return TypeKind.CLASS, annotation, nullable
    return TypeKind.UNTYPED, annotation, True


def describe_constructor(cls: Type[Any]) -> Optional[List[ParameterDescriptor]]:
    """Describe the parameters of ``cls.__init__``, or of ``cls.__new__`` when
    only that is overridden.

    Returns:
        Parameter descriptors in declaration order, or None if the class has
        no constructor of its own

    Raises:
        ContainerError: If the signature or its annotations cannot be read
    """
    init = _constructor(cls)
    if init is None:
        return None

    try:
        signature = inspect.signature(init)
        hints = typing.get_type_hints(init)
    except Exception as e:
        raise ContainerError(
            f'Cannot introspect constructor of "{cls.__qualname__}": {e}',
            service_id=service_key(cls),
            category=ErrorCategory.INTROSPECTION_FAILED,
            cause=e,
        ) from e

    descriptors: List[ParameterDescriptor] = []
    for index, param in enumerate(signature.parameters.values()):
        if index == 0:
            continue  # self, or cls for __new__
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        kind, annotation, nullable = _classify(hints.get(param.name, param.annotation))
        has_default = param.default is not inspect.Parameter.empty
        descriptors.append(
            ParameterDescriptor(
                name=param.name,
                kind=kind,
                annotation=annotation,
                has_default=has_default,
                default=param.default if has_default else None,
                nullable=nullable,
                keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
            )
        )
    return descriptors


class Autowirer:
    """Builds instances by resolving constructor parameters from a container."""

    def __init__(self, container: "Container"):
        self._container = container

    def autowire(self, target: Union[str, Type[Any]]) -> Any:
        """Instantiate a class, resolving its constructor dependencies.

        Args:
            target: A class, or a string naming one

        Returns:
            New instance of the class

        Raises:
            ContainerError: If the class does not exist, is not instantiable,
                or a parameter cannot be resolved
        """
        cls = self._load(target)
        if not is_instantiable(cls):
            raise ContainerError(
                f'Class "{service_key(cls)}" is not instantiable.',
                service_id=service_key(cls),
                category=ErrorCategory.NOT_INSTANTIABLE,
            )

        parameters = describe_constructor(cls)
        if parameters is None:
            logger.debug(f"Autowiring {cls.__qualname__} without constructor arguments")
            return cls()

        args, kwargs = self.resolve_parameters(parameters)
        logger.debug(f"Autowiring {cls.__qualname__} with {len(parameters)} parameter(s)")
        return cls(*args, **kwargs)

    def resolve_parameters(
        self, parameters: List[ParameterDescriptor]
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Resolve descriptors into positional and keyword arguments."""
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for param in parameters:
            value = self.resolve_parameter(param)
            if param.keyword_only:
                kwargs[param.name] = value
            else:
                args.append(value)
        return args, kwargs

    def resolve_parameter(self, param: ParameterDescriptor) -> Any:
        """Resolve a single parameter value."""
        logger.log(TRACE, f"Resolving parameter {param.name!r} ({param.kind.value})")
        if param.kind is TypeKind.UNTYPED:
            if param.annotation is None:
                message = f'Cannot resolve parameter "{param.name}" without type hint.'
            else:
                message = (
                    f'Cannot resolve parameter "{param.name}" of type "{param.type_name}" '
                    f"to a single class."
                )
            return self._fallback(param, message)

        if param.kind is TypeKind.BUILTIN:
            return self._fallback(
                param,
                f'Cannot resolve built-in type "{param.type_name}" for parameter "{param.name}".',
            )

        try:
            return self._container.get(param.annotation)
        except NotFoundError as e:
            logger.log(TRACE, f"No service for {param.type_name}, falling back for {param.name!r}")
            return self._fallback(
                param,
                f'Cannot resolve dependency "{service_key(param.annotation)}" '
                f'for parameter "{param.name}".',
                cause=e,
            )

    def _fallback(
        self,
        param: ParameterDescriptor,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> Any:
        if param.has_default:
            logger.log(TRACE, f"Using default for {param.name!r}")
            return param.default
        if param.nullable:
            logger.log(TRACE, f"Using None for {param.name!r}")
            return None
        error = ContainerError(
            message,
            parameter=param.name,
            category=ErrorCategory.UNRESOLVABLE_PARAMETER,
            cause=cause,
        )
        if cause is not None:
            raise error from cause
        raise error

    def _load(self, target: Union[str, Type[Any]]) -> Type[Any]:
        if isinstance(target, type):
            return target
        try:
            return self._container.types.require(target)
        except LookupError as e:
            raise ContainerError(
                f'Class "{target}" does not exist.',
                service_id=target,
                category=ErrorCategory.CLASS_NOT_FOUND,
                cause=e,
            ) from e
