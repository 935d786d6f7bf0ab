import inspect
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union, overload

from pydantic import ValidationError

from keywire.application.argument_resolver import ArgumentResolver
from keywire.application.identity import is_constructible, key_for, locate
from keywire.application.lifetime_manager import LifetimeManager
from keywire.application.metadata_cache import MetadataCache
from keywire.application.reflection_inspector import ReflectionInspector
from keywire.application.resolution_chain import ResolutionChain
from keywire.domain import (
    ConfigurationError,
    Definition,
    DefinitionConfig,
    DIException,
    IContainer,
    ILifetimeManager,
    IMetadataCacheStore,
    IReflectionInspector,
    Lifetime,
    NotFoundError,
    ResolutionError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class Container(IContainer):
    """Main dependency injection container.

    Owns the registry of definitions and drives resolution. Registered keys
    are built from their definition; unregistered classes (or dotted class
    paths) are auto-resolved from their constructor declaration.

    Attributes:
        _registry: Dictionary mapping canonical keys to definitions.
        _inspector: Component synthesizing definitions for unregistered classes.
        _arguments: Component resolving argument tokens.
        _lifetime_manager: Component sharing instances of shared definitions.
        _chain: Component detecting dependency cycles.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        cache: Optional[IMetadataCacheStore] = None,
        cache_ttl: Optional[float] = None,
        strict_references: bool = False,
    ) -> None:
        """Initialize the container.

        Args:
            config: Optional mapping of key to a dotted class path or a
                definition record (``class``, ``arguments``, ``methods``, ``shared``).
            cache: Optional external store for constructor metadata.
            cache_ttl: Expiry in seconds for cached metadata, ``None`` for no expiry.
            strict_references: Treat bare string arguments as literals only.

        Raises:
            ConfigurationError: If a configuration record is malformed.
        """
        self._registry: Dict[str, Definition] = {}
        self._inspector: IReflectionInspector = ReflectionInspector(MetadataCache(cache, cache_ttl))
        self._arguments = ArgumentResolver(self, strict_references)
        self._lifetime_manager: ILifetimeManager = LifetimeManager()
        self._chain = ResolutionChain()

        if config is not None:
            self._load_config(config)

    def _load_config(self, config: Mapping[str, Any]) -> None:
        for key, entry in config.items():
            if isinstance(entry, str):
                self.add(key, entry)
                continue

            try:
                record = DefinitionConfig.model_validate(entry)
            except ValidationError as e:
                raise ConfigurationError(key, str(e)) from e

            self.add(key, record.class_, shared=record.shared).with_arguments(*record.arguments).with_method_calls(
                record.methods
            )

        logger.debug("Loaded %d definition(s) from configuration", len(config))

    def add(self, key: Union[str, Type], target: Any = None, shared: bool = False) -> Definition:
        """Register a definition, replacing any previous one for the key.

        Args:
            key: String key or class. Classes are stored under ``"<module>.<qualname>"``.
            target: Class, dotted class path, or zero-argument factory callable.
                Defaults to the key itself.
            shared: Reuse the first built instance for every later resolution.

        Returns:
            The new definition, for fluent configuration.

        Example:
            >>> container.add("mailer", "app.mail.SmtpMailer") \\
            ...     .with_argument("smtp.example.com") \\
            ...     .with_method_call("set_logger", ["app.logging.Logger"])
        """
        canonical = key_for(key)
        definition = Definition(
            key=canonical,
            target=key if target is None else target,
            lifetime=Lifetime.SINGLETON if shared else Lifetime.TRANSIENT,
        )

        if canonical in self._registry:
            logger.debug("Replacing definition for %s", canonical)
            self._lifetime_manager.forget(canonical)

        self._registry[canonical] = definition
        logger.debug("Registered %s (%s)", canonical, definition.lifetime)
        return definition

    def share(self, key: Union[str, Type], target: Any = None) -> Definition:
        """Register a shared definition. See ``add``."""
        return self.add(key, target, shared=True)

    def has(self, key: Any, import_paths: bool = True) -> bool:
        """Whether the key is registered or names a constructible class.

        Args:
            key: String key or class.
            import_paths: Import unregistered dotted paths to check them.
                A path whose import fails does not name a class.

        Returns:
            True if ``get`` would find or synthesize a definition for the key.
        """
        try:
            canonical = key_for(key)
        except TypeError:
            return False

        if canonical in self._registry:
            return True

        if isinstance(key, type):
            return is_constructible(key)

        if not import_paths:
            return False

        try:
            return is_constructible(locate(canonical))
        except Exception as e:
            logger.debug("Cannot import %s: %s", canonical, e)
            return False

    @overload
    def get(self, key: Type[T], *extra_args: Any) -> T: ...

    @overload
    def get(self, key: str, *extra_args: Any) -> Any: ...

    def get(self, key: Any, *extra_args: Any) -> Any:
        """Resolve and return an instance for the key.

        Registered definitions are used first; otherwise the key is treated
        as a class (or dotted class path) and auto-resolved.

        Args:
            key: String key or class.
            *extra_args: Arguments appended after the definition's arguments,
                covering the trailing constructor parameters.

        Returns:
            A fully constructed instance. Transient definitions produce a new
            object graph on every call.

        Raises:
            NotFoundError: If the key is unregistered and not a constructible class.
            AutoResolutionError: If a constructor parameter cannot be inferred.
            CycleError: If the key is already being resolved.
            ResolutionError: If construction or a method call fails.

        Example:
            >>> service = container.get(UserService)
            >>> report = container.get("reports.Report", "2024-Q1")
        """
        canonical = key_for(key)
        self._chain.push(canonical)

        try:
            definition = self._registry.get(canonical)
            if definition is None:
                definition = self._synthesize(key, canonical, len(extra_args))
            else:
                definition.lock()

            if extra_args and definition.lifetime == Lifetime.SINGLETON:
                raise ResolutionError(canonical, "Per-call arguments cannot be passed to a shared definition")

            return self._lifetime_manager.get_or_create(definition, lambda: self._build(definition, extra_args))

        finally:
            self._chain.pop()

    def _synthesize(self, key: Any, canonical: str, supplied: int) -> Definition:
        cls = key if isinstance(key, type) else self._locate(canonical, canonical)

        if cls is None:
            raise NotFoundError(canonical, "Key is not registered and is not an importable class path")
        if not is_constructible(cls):
            raise NotFoundError(canonical, "Key is not registered and does not name a concrete class")

        logger.debug("Auto-resolving %s", canonical)
        return self._inspector.synthesize(cls, supplied)

    def _build(self, definition: Definition, extra_args: Sequence[Any]) -> Any:
        if definition.is_factory:
            if extra_args:
                raise ResolutionError(definition.key, "Factory definitions do not accept per-call arguments")
            return self._invoke(definition.key, definition.target, [])

        cls = self._resolve_target(definition)
        arguments = self._arguments.resolve_all(definition.arguments) + list(extra_args)
        instance = self._invoke(definition.key, cls, arguments)

        for call in definition.method_calls:
            method = getattr(instance, call.name, None)
            if not callable(method):
                raise ResolutionError(
                    definition.key,
                    f"{type(instance).__name__} has no callable method '{call.name}'",
                    method=call.name,
                )
            self._invoke(definition.key, method, self._arguments.resolve_all(call.arguments), call.name)

        return instance

    def _resolve_target(self, definition: Definition) -> Type:
        target = definition.target
        cls = self._locate(definition.key, target) if isinstance(target, str) else target

        if not is_constructible(cls):
            raise NotFoundError(definition.key, f"Target {target!r} is not a concrete class")
        return cls

    @staticmethod
    def _locate(key: str, path: str) -> Any:
        try:
            return locate(path)
        except Exception as e:
            raise NotFoundError(key, f"Importing {path!r} failed: {type(e).__name__}: {e}") from e

    def _invoke(self, key: str, func: Callable[..., Any], arguments: List[Any], method: Optional[str] = None) -> Any:
        mismatch = self._mismatched_argument(func, arguments)
        if mismatch is not None:
            raise ResolutionError(
                key,
                f"{len(arguments)} argument(s) do not match the signature of {getattr(func, '__qualname__', func)!s}",
                argument_index=mismatch,
                method=method,
            )

        try:
            return func(*arguments)
        except DIException:
            raise
        except Exception as e:
            raise ResolutionError(key, f"{type(e).__name__}: {e}", method=method) from e

    @staticmethod
    def _mismatched_argument(func: Callable[..., Any], arguments: List[Any]) -> Optional[int]:
        """Return the index of the first argument that cannot be bound, if any."""
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return None

        try:
            signature.bind(*arguments)
            return None
        except TypeError:
            pass

        parameters = list(signature.parameters.values())
        if not any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in parameters):
            positional = [p for p in parameters if p.kind in _POSITIONAL_KINDS]
            if len(arguments) > len(positional):
                return len(positional)
        return len(arguments)

    def remove(self, key: Union[str, Type]) -> None:
        canonical = key_for(key)
        self._registry.pop(canonical, None)
        self._lifetime_manager.forget(canonical)

    def get_definition(self, key: Union[str, Type]) -> Optional[Definition]:
        return self._registry.get(key_for(key))

    def get_registry_copy(self) -> Dict[str, Definition]:
        """Get a shallow copy of the registry.

        Returns:
            Copy of the current registry; definitions are shared, not copied.
        """
        return self._registry.copy()

    def clear(self) -> None:
        """Clear all registrations and shared instances.

        Useful for testing or resetting the container state.
        """
        self._registry.clear()
        self._lifetime_manager.clear_cache()
        self._chain.clear()
