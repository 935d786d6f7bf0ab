"""
keywire: Inversion-of-control container with keyed definitions and constructor auto-wiring.

Public API exports for the keywire package.
"""

# Application exports
from keywire.application.container import Container

# Domain exports
from keywire.domain.enums import Lifetime
from keywire.domain.exceptions import (
    AutoResolutionError,
    ConfigurationError,
    CycleError,
    DefinitionLockedError,
    DIException,
    NotFoundError,
    ResolutionError,
)
from keywire.domain.interfaces import IMetadataCacheStore
from keywire.domain.models import Definition, Reference, Value

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    # Definitions
    "Definition",
    "Reference",
    "Value",
    "Lifetime",
    # Collaborators
    "IMetadataCacheStore",
    # Exceptions
    "DIException",
    "NotFoundError",
    "AutoResolutionError",
    "CycleError",
    "ResolutionError",
    "ConfigurationError",
    "DefinitionLockedError",
]
