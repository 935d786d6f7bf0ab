"""Application layer - Class identity helpers.

Keys are strings. Classes are addressed by ``"<module>.<qualname>"`` so that a
class object and its dotted path resolve to the same registry entry.
"""

import importlib
import inspect
from typing import Any, Optional

_MISSING = object()


def key_for(key: Any) -> str:
    """Return the canonical registry key for a class or string key.

    Args:
        key: A class or a string key.

    Returns:
        ``"<module>.<qualname>"`` for classes, the string itself otherwise.

    Raises:
        TypeError: If the key is neither a class nor a string.

    Example:
        >>> key_for(collections.OrderedDict)
        'collections.OrderedDict'
    """
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    if isinstance(key, str):
        return key
    raise TypeError(f"Keys must be classes or strings, got {type(key).__name__}")


def locate(path: str) -> Optional[Any]:
    """Import the object a dotted path points to.

    The longest importable module prefix is imported and the remaining parts
    are looked up as attributes, which allows nested classes.

    Args:
        path: Dotted path such as ``"package.module.ClassName"``.

    Returns:
        The located object, or ``None`` when the path does not point to anything.
    """
    if not path or "." not in path or "<" in path:
        return None

    parts = path.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # A missing prefix means try a shorter one; a missing import inside
            # an existing module is a real error.
            if e.name and module_name != e.name and not module_name.startswith(e.name + "."):
                raise
            continue
        except (ValueError, TypeError):
            return None

        for attribute in parts[split:]:
            obj = getattr(obj, attribute, _MISSING)
            if obj is _MISSING:
                return None
        return obj

    return None


def looks_like_class_path(path: str) -> bool:
    """Whether a string has the shape ``"package.module.ClassName"``.

    Example:
        >>> looks_like_class_path("app.mail.SmtpMailer")
        True
        >>> looks_like_class_path("smtp.example.com")
        False
    """
    parts = path.split(".")
    if len(parts) < 2 or not all(part.isidentifier() for part in parts):
        return False
    return parts[-1][0].isupper()


def is_constructible(obj: Any) -> bool:
    """Whether the object is a class that can be instantiated directly."""
    if not isinstance(obj, type):
        return False
    if inspect.isabstract(obj):
        return False
    return not getattr(obj, "_is_protocol", False)
