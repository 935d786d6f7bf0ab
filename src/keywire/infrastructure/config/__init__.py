"""
Configuration file loading.

Reads definition mappings from YAML or JSON files for ``Container(config=...)``.
"""

from .loader import load_config, load_container

__all__ = [
    "load_config",
    "load_container",
]
