"""Application layer - Dependency cycle detection."""

import threading
from typing import List

from keywire.domain import CycleError


class ResolutionChain:
    """Tracks the keys currently being resolved on each thread.

    A key enters the chain when its resolution starts and leaves it once the
    instance is built or the resolution fails. Seeing a key that is already in
    the chain means the dependency graph has a cycle.

    Attributes:
        _local: Thread-local storage holding one chain per thread.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_chain(self) -> List[str]:
        if not hasattr(self._local, "chain"):
            self._local.chain = []
        return self._local.chain

    def push(self, key: str) -> None:
        """Mark a key as being resolved.

        Args:
            key: Canonical key entering resolution.

        Raises:
            CycleError: If the key is already being resolved on this thread.

        Example:
            >>> chain = ResolutionChain()
            >>> chain.push("app.Foo")
            >>> chain.push("app.Bar")
            >>> chain.push("app.Foo")  # Raises CycleError
        """
        chain = self._get_chain()

        if key in chain:
            raise CycleError(chain[chain.index(key) :] + [key])

        chain.append(key)

    def pop(self) -> None:
        """Remove the most recent key once its resolution has finished."""
        chain = self._get_chain()
        if chain:
            chain.pop()

    def snapshot(self) -> List[str]:
        """Return a copy of the current thread's chain."""
        return list(self._get_chain())

    def clear(self) -> None:
        if hasattr(self._local, "chain"):
            self._local.chain.clear()
