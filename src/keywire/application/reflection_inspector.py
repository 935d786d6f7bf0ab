import datetime
import enum
import inspect
import logging
import numbers
import pathlib
import uuid
from typing import Any, Dict, List, Optional, Type, get_type_hints

from keywire.application.identity import is_constructible, key_for
from keywire.application.metadata_cache import MetadataCache
from keywire.domain import (
    AutoResolutionError,
    ConstructorMetadata,
    Definition,
    IMetadataCache,
    IReflectionInspector,
    ParameterSpec,
    Reference,
    Value,
)

logger = logging.getLogger(__name__)

# Annotations from these modules are values, not services.
SCALAR_MODULES = frozenset(
    {"builtins", "datetime", "decimal", "fractions", "ipaddress", "numbers", "pathlib", "uuid"}
)

SCALAR_TYPES = (
    enum.Enum,
    numbers.Number,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    pathlib.PurePath,
    uuid.UUID,
)


def is_scalar(annotation: Any) -> bool:
    """Whether an annotation names a value type rather than a service."""
    if not isinstance(annotation, type):
        return False
    if annotation.__module__.split(".")[0] in SCALAR_MODULES:
        return True
    return issubclass(annotation, SCALAR_TYPES)


class ReflectionInspector(IReflectionInspector):
    """Synthesizes definitions from constructor signatures and type hints.

    Each constructor parameter becomes an argument token:

    - a concrete class annotation becomes a ``Reference`` to that class;
    - value types (builtins, enums, numbers, dates, paths, UUIDs) are scalars
      and are never referenced;
    - otherwise the default value becomes a ``Value`` literal;
    - a parameter with neither cannot be inferred.

    Abstract classes and Protocols count as concrete only when the parameter
    has no default; a default takes precedence over an unbound interface.

    The inspector works one level deep. Nested references are resolved by the
    container when the definition is built.

    Attributes:
        _cache: Cache for constructor metadata.
    """

    def __init__(self, cache: Optional[IMetadataCache] = None) -> None:
        self._cache = cache if cache is not None else MetadataCache()

    def get_metadata(self, cls: Type) -> ConstructorMetadata:
        """Return constructor metadata for a class, from cache when possible.

        Args:
            cls: The class to inspect.

        Returns:
            Metadata with one entry per positional constructor parameter.

        Raises:
            AutoResolutionError: If the constructor cannot be inspected.
        """
        class_key = key_for(cls)
        metadata = self._cache.load(class_key)
        if metadata is not None:
            return metadata

        metadata = self._inspect(cls, class_key)
        self._cache.store(metadata)
        return metadata

    def synthesize(self, cls: Type, supplied: int = 0) -> Definition:
        """Build a definition for a class from its constructor declaration.

        Args:
            cls: The class to synthesize a definition for.
            supplied: Number of trailing parameters provided by the caller;
                those are left out of the synthesized argument list.

        Returns:
            Definition targeting ``cls`` with one token per covered parameter.

        Raises:
            AutoResolutionError: If a covered parameter cannot be inferred.

        Example:
            >>> class UserService:
            ...     def __init__(self, repo: UserRepository, page_size: int = 20):
            ...         ...
            >>> inspector.synthesize(UserService).arguments
            [Reference(key=UserRepository), Value(value=20)]
        """
        metadata = self.get_metadata(cls)
        covered = metadata.parameters[: max(len(metadata.parameters) - supplied, 0)]

        for parameter in covered:
            if not parameter.resolvable:
                raise AutoResolutionError(metadata.class_key, parameter.name, parameter.index, parameter.reason)

        logger.debug("Synthesized definition for %s with %d argument(s)", metadata.class_key, len(covered))
        return Definition(
            key=metadata.class_key,
            target=cls,
            arguments=[parameter.token for parameter in covered],
        )

    def _inspect(self, cls: Type, class_key: str) -> ConstructorMetadata:
        if cls.__init__ is object.__init__:
            return ConstructorMetadata(class_key=class_key)

        try:
            signature = inspect.signature(cls.__init__)
            type_hints = get_type_hints(cls.__init__)
        except Exception as e:
            raise AutoResolutionError(class_key, reason=f"Cannot inspect constructor: {e}") from e

        parameters: List[ParameterSpec] = []
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            has_default = param.default is not inspect.Parameter.empty

            if param.kind == inspect.Parameter.KEYWORD_ONLY:
                if has_default:
                    continue
                raise AutoResolutionError(
                    class_key,
                    param_name,
                    len(parameters),
                    "Keyword-only parameters without a default cannot be supplied positionally",
                )

            parameters.append(self._describe(param_name, len(parameters), param, type_hints, has_default))

        return ConstructorMetadata(class_key=class_key, parameters=parameters)

    @staticmethod
    def _describe(
        name: str,
        index: int,
        param: inspect.Parameter,
        type_hints: Dict[str, Any],
        has_default: bool,
    ) -> ParameterSpec:
        annotation = type_hints.get(name, inspect.Parameter.empty)
        is_service = isinstance(annotation, type) and not is_scalar(annotation)

        if is_service and (is_constructible(annotation) or not has_default):
            return ParameterSpec(name=name, index=index, token=Reference(annotation))

        if has_default:
            return ParameterSpec(name=name, index=index, token=Value(param.default))

        if annotation is inspect.Parameter.empty:
            reason = "Parameter lacks a type hint and has no default value"
        else:
            reason = f"Type {getattr(annotation, '__name__', annotation)} cannot be inferred and has no default value"
        return ParameterSpec(name=name, index=index, resolvable=False, reason=reason)
