"""
Metadata cache store adapters.

Provides stores implementing the cache collaborator contract used by the
reflection inspector.
"""

from .in_memory import InMemoryMetadataCache

__all__ = [
    "InMemoryMetadataCache",
]
