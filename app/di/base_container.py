# Standard library imports
from typing import Any, Callable, Dict, Hashable, Type, TypeVar, Union

TypeVarType = TypeVar('TypeVarType')

Key = Union[Type[Any], str]


class BaseContainer:
    """
    Minimal registry keyed by interface type or string name.

    Singletons are stored as given. Lazy registrations are built on first
    lookup and then cached, so expensive clients are only created when used.
    """

    def __init__(self) -> None:
        self.instances: Dict[Hashable, Any] = {}
        self.lazy: Dict[Hashable, Callable[[], Any]] = {}

    def register_singleton(self, interface: Key, instance: Any) -> None:
        """Register a ready-made instance (supports both types and string keys)"""
        self.instances[interface] = instance
        self.lazy.pop(interface, None)

    def register_lazy(self, interface: Key, factory: Callable[[], Any]) -> None:
        """Register a factory run once, on first lookup"""
        self.lazy[interface] = factory
        self.instances.pop(interface, None)

    def __contains__(self, interface: Key) -> bool:
        return interface in self.instances or interface in self.lazy

    def get(self, interface: Union[Type[TypeVarType], str]) -> TypeVarType:
        """Get the instance registered for a type or string key"""
        if interface in self.instances:
            return self.instances[interface]

        factory = self.lazy.pop(interface, None)
        if factory is not None:
            instance = factory()
            self.instances[interface] = instance
            return instance

        raise ValueError(f"No registration found for {interface}")
