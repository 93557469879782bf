import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from typing import Any, Generic, Optional, TypeVar, cast

T = TypeVar("T")

# Services are keyed either by a type (the canonical form) or by a plain
# string identifier (config, legacy aliases, controller class paths).
Key = Hashable


def describe_key(key: Key) -> str:
    if hasattr(key, "__name__"):
        return str(key.__name__)
    return str(key)


class DependencyNotFoundError(Exception):
    @classmethod
    def from_key(cls, key: Key) -> "DependencyNotFoundError":
        return cls(f"Dependency {describe_key(key)} not found")


class DependencyCircularReferenceError(Exception):
    @classmethod
    def from_container(cls, container: "DependencyContainer") -> "DependencyCircularReferenceError":
        resolving = ", ".join(describe_key(k) for k in container.all_resolving())
        return cls(f"Circular reference detected while resolving [{resolving}]")


class Dependency(ABC, Generic[T]):
    @abstractmethod
    def resolve(self, container: "DependencyContainer") -> T:
        pass


class InstanceDependency(Dependency[T]):
    def __init__(self, instance: T):
        self.instance = instance

    def resolve(self, container: "DependencyContainer") -> T:
        return self.instance


class FactoryDependency(Dependency[T]):
    def __init__(self, factory: Callable[..., T]):
        self.factory = factory

    def resolve(self, container: "DependencyContainer") -> T:
        return self.factory(**self.get_dependencies(container))

    def get_dependencies(self, container: "DependencyContainer") -> dict[str, Any]:
        # Factories asking for the container itself receive it as is
        return {
            k: container if v.annotation is DependencyContainer else container.get(v.annotation)
            for k, v in inspect.signature(self.factory).parameters.items()
            if v.annotation is not inspect.Parameter.empty
            and v.default is inspect.Parameter.empty
            and v.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        }


class SingletonDependency(Dependency[T]):
    def __init__(self, factory: FactoryDependency[T]):
        self.factory = factory
        self.instance: T | None = None
        self._resolving: bool = False

    def resolve(self, container: "DependencyContainer") -> T:
        if self._resolving:
            raise DependencyCircularReferenceError.from_container(container)

        if self.instance is None:
            self._resolving = True
            try:
                self.instance = self.factory.resolve(container)
            finally:
                self._resolving = False
        return self.instance


class DependencyContainer:
    """Service locator used to wire an application.

    Services are registered under a key and looked up with ``has`` and
    ``get``. A child container falls back to its parent for keys it does not
    know about, which lets a caller override a handful of services without
    copying the whole registry.

    Examples:
        >>> container = DependencyContainer()
        >>> container.register_instance("config", {"debug": True})
        >>> container.register_singleton(PathRouter)
        >>> container.get("config")["debug"]
        True
    """

    def __init__(self, parent: Optional["DependencyContainer"] = None):
        self.dependencies: dict[Key, Dependency[Any]] = {}
        self.parent = parent

    def child(self) -> "DependencyContainer":
        return DependencyContainer(self)

    def all_resolving(self) -> list[Key]:
        return [
            k for k in self.dependencies if getattr(self.dependencies[k], "_resolving", False)
        ] + (self.parent.all_resolving() if self.parent else [])

    def has(self, key: Key) -> bool:
        if key in self.dependencies:
            return True
        return self.parent is not None and self.parent.has(key)

    def get(self, key: Key) -> Any:
        # First check ourselves for the dependency and then fall back to the
        # parent container if it exists.
        if key in self.dependencies:
            return self.dependencies[key].resolve(self)

        if self.parent is not None:
            return self.parent.get(key)

        raise DependencyNotFoundError.from_key(key)

    def resolve(self, dependency_type: type[T]) -> T:
        """Typed variant of ``get`` for type keys."""
        return cast("T", self.get(dependency_type))

    def first_available(self, *keys: Key) -> Any | None:
        """Return the service registered under the first known key.

        Keys are tried in order, so callers list the canonical key first and
        any deprecated aliases after it.

        Args:
            *keys: Candidate keys in priority order.

        Returns:
            The resolved service, or None if none of the keys is registered.
        """
        for key in keys:
            if self.has(key):
                return self.get(key)
        return None

    def register(self, key: Key, dependency: Dependency[T]) -> None:
        self.dependencies[key] = dependency

    def register_instance(self, key: Key, instance: Any) -> None:
        self.register(key, InstanceDependency(instance))

    def register_factory(self, key: Key, factory: Callable[..., T]) -> None:
        self.register(key, FactoryDependency(factory))

    def register_singleton(self, key: Key, factory: Callable[..., T] | None = None) -> None:
        if factory is None:
            if not callable(key):
                raise TypeError(f"A factory is required to register {describe_key(key)}")
            factory = cast("Callable[..., T]", key)
        self.register(key, SingletonDependency(FactoryDependency(factory)))
