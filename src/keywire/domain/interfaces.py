from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from keywire.domain.models import ConstructorMetadata, Definition


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def add(self, key: Any, target: Any = None, shared: bool = False) -> Definition:
        """Register a definition and return it for fluent configuration.

        Args:
            key: The key or class to register.
            target: Class, dotted class path or zero-argument factory. Defaults to ``key``.
            shared: Whether the first built instance is reused.
        """

    @abstractmethod
    def get(self, key: Any, *extra_args: Any) -> Any:
        """Resolve and return an instance for the requested key.

        Args:
            key: The key or class identity to resolve.
            *extra_args: Per-call arguments for the trailing constructor parameters.
        """

    @abstractmethod
    def has(self, key: Any, import_paths: bool = True) -> bool:
        """Whether the key is registered or names a constructible class.

        With ``import_paths`` false, dotted paths are not imported and only
        registered keys and class objects count.
        """


class IArgumentResolver(ABC):
    """Abstract interface for turning argument tokens into values."""

    @abstractmethod
    def resolve(self, token: Any) -> Any:
        """Return the literal value of a token or the instance it references.

        Args:
            token: The argument token to resolve.
        """


class IReflectionInspector(ABC):
    """Abstract interface for synthesizing definitions from constructors."""

    @abstractmethod
    def synthesize(self, cls: type, supplied: int = 0) -> Definition:
        """Build a definition for a class from its constructor declaration.

        Args:
            cls: The class to inspect.
            supplied: Number of trailing parameters the caller provides.

        Raises:
            AutoResolutionError: If a covered parameter cannot be inferred.
        """


class IMetadataCacheStore(ABC):
    """Abstract interface for an external key/value store with expiry."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value or ``None`` on a miss.

        Args:
            key: The cache key.
        """

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Seconds until expiry, ``None`` for no expiry.
        """


class IMetadataCache(ABC):
    """Abstract interface for the reflection metadata cache."""

    @abstractmethod
    def load(self, class_key: str) -> Optional[ConstructorMetadata]:
        """Return cached constructor metadata, or ``None`` on a miss."""

    @abstractmethod
    def store(self, metadata: ConstructorMetadata) -> None:
        """Write constructor metadata through to the backing store."""


class ILifetimeManager(ABC):
    """Abstract interface for managing instance lifetimes."""

    @abstractmethod
    def get_or_create(self, definition: Definition, factory: Callable[[], Any]) -> Any:
        """Get an existing instance or create a new one based on lifetime.

        Args:
            definition: The definition being resolved.
            factory: A callable building a new instance.
        """

    @abstractmethod
    def forget(self, key: str) -> None:
        """Drop any instance cached for the key."""

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear all cached instances."""
