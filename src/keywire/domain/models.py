from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from keywire.domain.enums import Lifetime
from keywire.domain.exceptions import DefinitionLockedError


class Reference(BaseModel):
    """Argument token that is always resolved as a nested dependency.

    Attributes:
        key: Registered key, dotted class path or class to resolve.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: Any = Field(..., description="The key or class identity to resolve.")

    def __init__(self, key: Any, **data: Any) -> None:
        super().__init__(key=key, **data)


class Value(BaseModel):
    """Argument token that is always passed through literally.

    Attributes:
        value: The literal value handed to the constructor or method.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = Field(default=None, description="The literal value to pass through.")

    def __init__(self, value: Any, **data: Any) -> None:
        super().__init__(value=value, **data)


class MethodCall(BaseModel):
    """A post-construction method invocation.

    Attributes:
        name: Name of the method to call on the constructed instance.
        arguments: Ordered argument tokens for the call.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The method name to invoke.")
    arguments: Tuple[Any, ...] = Field(default_factory=tuple, description="Ordered argument tokens.")


class Definition(BaseModel):
    """Recipe for producing one named entity.

    A Definition is configured through its fluent builder methods right after
    registration. The container locks it the first time it is read for
    resolution; from then on it is read-only.

    Attributes:
        key: Canonical lookup key in the registry.
        target: Class, dotted class path, or zero-argument factory callable.
        arguments: Ordered constructor argument tokens.
        method_calls: Ordered post-construction method calls.
        lifetime: Whether every resolution builds a new instance or shares one.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str = Field(..., description="The canonical key of the definition.")
    target: Any = Field(..., description="Class, dotted class path or factory callable.")
    arguments: Tuple[Any, ...] = Field(default_factory=tuple, description="Ordered constructor argument tokens.")
    method_calls: Tuple[MethodCall, ...] = Field(
        default_factory=tuple,
        description="Post-construction method calls, applied in order.",
    )
    lifetime: Lifetime = Field(default=Lifetime.TRANSIENT, description="The lifetime of resolved instances.")

    _locked: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in type(self).model_fields and getattr(self, "_locked", False):
            raise DefinitionLockedError(self.key)
        super().__setattr__(name, value)

    @property
    def is_factory(self) -> bool:
        """Whether the target is a factory callable rather than a class."""
        return callable(self.target) and not isinstance(self.target, type)

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        """Mark the definition as read-only."""
        self._locked = True

    def _ensure_unlocked(self) -> None:
        if self._locked:
            raise DefinitionLockedError(self.key)

    def with_argument(self, token: Any) -> "Definition":
        """Append a constructor argument token.

        Args:
            token: A literal, a ``Reference``/``Value`` or a key string.

        Returns:
            The definition itself, for chaining.

        Raises:
            DefinitionLockedError: If the definition was already used.
        """
        self._ensure_unlocked()
        self.arguments = self.arguments + (token,)
        return self

    def with_arguments(self, *tokens: Any) -> "Definition":
        for token in tokens:
            self.with_argument(token)
        return self

    def with_method_call(self, name: str, tokens: Optional[Sequence[Any]] = None) -> "Definition":
        """Append a method call applied after construction.

        Args:
            name: Method name on the constructed instance.
            tokens: Ordered argument tokens for the call.

        Returns:
            The definition itself, for chaining.

        Raises:
            DefinitionLockedError: If the definition was already used.
        """
        self._ensure_unlocked()
        self.method_calls = self.method_calls + (MethodCall(name=name, arguments=tuple(tokens or ())),)
        return self

    def with_method_calls(self, calls: Dict[str, Sequence[Any]]) -> "Definition":
        for name, tokens in calls.items():
            self.with_method_call(name, tokens)
        return self


class ParameterSpec(BaseModel):
    """Inspection result for a single constructor parameter.

    Attributes:
        name: Parameter name.
        index: Positional index in the constructor call.
        token: Argument token to use when the parameter is resolvable.
        resolvable: Whether the token can be produced without caller input.
        reason: Why the parameter is not resolvable.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    index: int
    token: Any = None
    resolvable: bool = True
    reason: Optional[str] = None


class ConstructorMetadata(BaseModel):
    """Cached reflection result for a class constructor.

    Attributes:
        class_key: Canonical class identity the metadata belongs to.
        parameters: Positional parameters in declaration order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    class_key: str
    parameters: List[ParameterSpec] = Field(default_factory=list)


class DefinitionConfig(BaseModel):
    """Structured configuration record for one definition.

    Attributes:
        class_: Dotted path of the class to construct (``class`` in configuration).
        arguments: Ordered constructor argument tokens.
        methods: Method name to ordered argument tokens.
        shared: Whether the definition is registered as a singleton.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    class_: str = Field(..., alias="class", min_length=1)
    arguments: List[Any] = Field(default_factory=list)
    methods: Dict[str, List[Any]] = Field(default_factory=dict)
    shared: bool = False
