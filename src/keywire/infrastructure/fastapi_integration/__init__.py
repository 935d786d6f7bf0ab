"""
FastAPI integration module.

Provides helpers for resolving container keys through FastAPI's ``Depends``.
"""

from .integration import create_fastapi_dependency

__all__ = [
    "create_fastapi_dependency",
]
