"""
Infrastructure layer - External collaborators and integrations.

This layer contains adapters for the metadata cache store and configuration
files, plus integrations with external frameworks and tools.
It depends on both Application and Domain layers.
"""

from . import cache, config, testing

__all__ = [
    "cache",
    "config",
    "testing",
]
