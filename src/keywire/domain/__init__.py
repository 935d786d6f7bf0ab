"""
Domain layer - Core models and contracts.

This layer contains the definition model, argument tokens, error taxonomy and
the interfaces the application layer implements. It has no dependencies on
other layers.
"""

from .enums import Lifetime
from .exceptions import (
    AutoResolutionError,
    ConfigurationError,
    CycleError,
    DefinitionLockedError,
    DIException,
    NotFoundError,
    ResolutionError,
)
from .interfaces import (
    IArgumentResolver,
    IContainer,
    ILifetimeManager,
    IMetadataCache,
    IMetadataCacheStore,
    IReflectionInspector,
)
from .models import (
    ConstructorMetadata,
    Definition,
    DefinitionConfig,
    MethodCall,
    ParameterSpec,
    Reference,
    Value,
)

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "NotFoundError",
    "AutoResolutionError",
    "CycleError",
    "ResolutionError",
    "ConfigurationError",
    "DefinitionLockedError",
    # Interfaces
    "IContainer",
    "IArgumentResolver",
    "IReflectionInspector",
    "IMetadataCache",
    "IMetadataCacheStore",
    "ILifetimeManager",
    # Models
    "Definition",
    "MethodCall",
    "Reference",
    "Value",
    "ParameterSpec",
    "ConstructorMetadata",
    "DefinitionConfig",
]
