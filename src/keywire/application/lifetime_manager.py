from typing import Any, Callable, Dict

from keywire.domain import Definition, ILifetimeManager, Lifetime


class LifetimeManager(ILifetimeManager):
    """Applies the lifetime of a definition to the instances it produces.

    Transient definitions build a new object graph on each call. Singleton
    definitions keep their first completely built instance, keyed by the
    definition key.

    Attributes:
        _singleton_cache: Instances of shared definitions.
    """

    def __init__(self) -> None:
        self._singleton_cache: Dict[str, Any] = {}

    def get_or_create(self, definition: Definition, factory: Callable[[], Any]) -> Any:
        """Get the shared instance or build a new one.

        Args:
            definition: The definition being resolved.
            factory: Builds a complete instance; only called when needed.

        Returns:
            A new instance for transient definitions, the cached one for singletons.
        """
        if definition.lifetime == Lifetime.SINGLETON:
            if definition.key not in self._singleton_cache:
                self._singleton_cache[definition.key] = factory()
            return self._singleton_cache[definition.key]

        return factory()

    def forget(self, key: str) -> None:
        self._singleton_cache.pop(key, None)

    def clear_cache(self) -> None:
        self._singleton_cache.clear()
