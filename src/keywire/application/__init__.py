"""
Application layer - Resolution engine.

This layer implements the container and the components it delegates to.
It depends only on the Domain layer.
"""

from .argument_resolver import ArgumentResolver
from .container import Container
from .identity import is_constructible, key_for, locate, looks_like_class_path
from .lifetime_manager import LifetimeManager
from .metadata_cache import MetadataCache
from .reflection_inspector import ReflectionInspector
from .resolution_chain import ResolutionChain

__all__ = [
    "Container",
    "ArgumentResolver",
    "ReflectionInspector",
    "MetadataCache",
    "ResolutionChain",
    "LifetimeManager",
    "key_for",
    "locate",
    "looks_like_class_path",
    "is_constructible",
]
