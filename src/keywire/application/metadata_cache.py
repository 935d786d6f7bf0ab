import logging
from typing import Optional

from keywire.domain import ConstructorMetadata, IMetadataCache, IMetadataCacheStore

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "keywire.reflection."


class MetadataCache(IMetadataCache):
    """Write-through cache for constructor reflection results.

    Entries are keyed by class identity and written to the optional external
    store. Without a store every lookup is a miss. Store failures are logged
    and treated as misses; they never fail a resolution.

    Classes defined inside functions share a qualified name across every call
    of the defining function, so their keys do not identify one class. They
    are never cached.

    Attributes:
        _store: The external key/value store, if any.
        _ttl: Expiry passed to the store for every write.
    """

    def __init__(self, store: Optional[IMetadataCacheStore] = None, ttl: Optional[float] = None) -> None:
        self._store = store
        self._ttl = ttl

    @property
    def enabled(self) -> bool:
        return self._store is not None

    @staticmethod
    def cache_key(class_key: str) -> str:
        return f"{CACHE_KEY_PREFIX}{class_key}"

    @staticmethod
    def is_cacheable(class_key: str) -> bool:
        return "<" not in class_key

    def load(self, class_key: str) -> Optional[ConstructorMetadata]:
        """Return cached constructor metadata for a class.

        Args:
            class_key: Canonical class identity.

        Returns:
            The cached metadata, or ``None`` on a miss, a store failure or an
            entry that does not belong to the class.
        """
        if self._store is None or not self.is_cacheable(class_key):
            return None

        try:
            value = self._store.get(self.cache_key(class_key))
        except Exception as e:
            logger.warning("Metadata cache read failed for %s: %s", class_key, e)
            return None

        if value is None:
            logger.debug("Metadata cache miss for %s", class_key)
            return None

        if not isinstance(value, ConstructorMetadata) or value.class_key != class_key:
            logger.warning("Ignoring unexpected metadata cache entry for %s", class_key)
            return None

        logger.debug("Metadata cache hit for %s", class_key)
        return value

    def store(self, metadata: ConstructorMetadata) -> None:
        """Write metadata to the store, ignoring store failures."""
        if self._store is None or not self.is_cacheable(metadata.class_key):
            return

        try:
            self._store.set(self.cache_key(metadata.class_key), metadata, self._ttl)
        except Exception as e:
            logger.warning("Metadata cache write failed for %s: %s", metadata.class_key, e)
