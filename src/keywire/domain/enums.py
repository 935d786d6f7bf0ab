from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a resolved instance lives.

    Attributes:
        TRANSIENT: New object graph built on each resolution.
        SINGLETON: First complete build is shared by every later resolution.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
