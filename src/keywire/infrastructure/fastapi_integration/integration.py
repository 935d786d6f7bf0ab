from typing import Any, Callable, Type, TypeVar, Union

from keywire.domain import IContainer

T = TypeVar("T")


def create_fastapi_dependency(
    container: IContainer,
    key: Union[str, Type[T]],
    *extra_args: Any,
) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that resolves a key from the container.

    The key is resolved on every call, so the lifetime of the instance
    follows its definition (a new object graph for transient definitions,
    the same instance for shared ones).

    Args:
        container: The container to resolve from.
        key: The key or class to resolve.
        *extra_args: Per-call arguments forwarded to ``get``.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.share("users", "app.repositories.UserRepository")
        >>>
        >>> get_users = create_fastapi_dependency(container, "users")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo = Depends(get_users)):
        ...     return await repo.get_all()
    """

    def dependency() -> T:
        """Resolve the key from the container."""
        return container.get(key, *extra_args)

    return dependency
