from typing import List, Optional


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotFoundError(DIException):
    """Raised when a key is neither registered nor a constructible class.

    This occurs when:
    - The key is a string that is not registered and not an importable class path.
    - The key names an abstract class or a Protocol with no registration.
    - A Definition's target cannot be imported.

    Attributes:
        key: The key that could not be found.
        reason: Optional reason for the failure.
    """

    def __init__(self, key: str, reason: Optional[str] = None) -> None:
        self.key = key
        self.reason = reason
        message = f"No definition or constructible class found for key: {key}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class AutoResolutionError(DIException):
    """Raised when a constructor parameter cannot be inferred from its declaration.

    Attributes:
        key: The class identity being auto-resolved.
        parameter: Name of the offending parameter.
        index: Position of the parameter in the constructor argument list.
        reason: Optional reason for the failure.
    """

    def __init__(
        self,
        key: str,
        parameter: Optional[str] = None,
        index: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.key = key
        self.parameter = parameter
        self.index = index
        self.reason = reason
        message = f"Cannot auto-resolve {key}"
        if parameter is not None:
            message += f": parameter '{parameter}' (index {index})"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class CycleError(DIException):
    """Raised when a key is requested again while it is still being resolved.

    Attributes:
        chain: Keys involved in the cycle, first and last entries being equal.
    """

    def __init__(self, chain: List[str]) -> None:
        self.chain = chain
        self.key = chain[-1] if chain else None
        super().__init__(f"Dependency cycle detected: {' -> '.join(chain)}")


class ResolutionError(DIException):
    """Raised when constructing a target or invoking a method call fails.

    Attributes:
        key: The key whose Definition failed.
        reason: Description of the underlying failure.
        argument_index: Index of the offending argument, when it can be determined.
        method: Name of the method call that failed, if the failure is not in the constructor.
    """

    def __init__(
        self,
        key: str,
        reason: str,
        argument_index: Optional[int] = None,
        method: Optional[str] = None,
    ) -> None:
        self.key = key
        self.reason = reason
        self.argument_index = argument_index
        self.method = method
        location = f"method '{method}'" if method else "constructor"
        message = f"Failed to resolve {key} ({location}"
        if argument_index is not None:
            message += f", argument {argument_index}"
        message += f"): {reason}"
        super().__init__(message)


class ConfigurationError(DIException):
    """Raised for malformed configuration input.

    This occurs when:
    - A configuration record fails validation.
    - A configuration file cannot be read or parsed.
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}: {reason}")


class DefinitionLockedError(DIException):
    """Raised when a Definition is modified after it was used for resolution."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Definition {key} is locked: it has already been used for resolution")
