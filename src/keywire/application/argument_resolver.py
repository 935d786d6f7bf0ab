from typing import Any, Iterable, List

from keywire.application.identity import looks_like_class_path
from keywire.domain import IArgumentResolver, IContainer, Reference, Value


class ArgumentResolver(IArgumentResolver):
    """Turns argument tokens into the values passed to constructors and methods.

    - ``Value`` tokens are always literals.
    - ``Reference`` tokens are always resolved through the container.
    - Bare strings are resolved when the container has them (a registered key
      or an importable, constructible class path) and passed through otherwise.
      Only strings shaped like ``"module.ClassName"`` are imported to check.
      With ``strict_references`` bare strings are always literals.
    - Any other token is passed through unchanged.

    Attributes:
        _container: Container used for nested resolution.
        _strict_references: Whether bare strings are always literals.
    """

    def __init__(self, container: IContainer, strict_references: bool = False) -> None:
        self._container = container
        self._strict_references = strict_references

    def resolve(self, token: Any) -> Any:
        """Resolve a single argument token.

        Args:
            token: The token to resolve.

        Returns:
            The literal value or the resolved instance.

        Example:
            >>> container.add("greeting", lambda: "hello")
            >>> resolver.resolve("greeting")
            'hello'
            >>> resolver.resolve("plain text")
            'plain text'
        """
        if isinstance(token, Value):
            return token.value

        if isinstance(token, Reference):
            return self._container.get(token.key)

        if isinstance(token, str) and not self._strict_references:
            if self._container.has(token, import_paths=looks_like_class_path(token)):
                return self._container.get(token)

        return token

    def resolve_all(self, tokens: Iterable[Any]) -> List[Any]:
        return [self.resolve(token) for token in tokens]
