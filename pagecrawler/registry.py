"""Name to constructor registries for services and listeners.

Registries are the extension point of the session core: a new capability
service or traffic listener becomes available to every session by registering
its class, without touching the session manager.
"""

import logging
from typing import Dict, Generic, List, Optional, Type, TypeVar

from .errors import RegistryLookupError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _key(name: object) -> str:
    # Enum members hash by member name, so look up by their value
    return str(getattr(name, 'value', name))


class Registry(Generic[T]):
    """Ordered mapping of names to component classes.

    Lookups of unknown names raise the registry's ``not_found_error`` naming
    the requested key. Iteration follows registration order.
    """

    def __init__(self, kind: str, not_found_error: Type[RegistryLookupError] = RegistryLookupError):
        self.kind = kind
        self.not_found_error = not_found_error
        self._entries: Dict[str, Type[T]] = {}

    def register(self, component_class: Type[T], name: Optional[str] = None) -> Type[T]:
        """Register a component class.

        Args:
            component_class: Class to register
            name: Optional name override (defaults to the class ``name`` tag)

        Returns:
            The class, so this can be used as a decorator
        """
        key = _key(name or getattr(component_class, 'name'))
        if key in self._entries:
            logger.warning(f"Replacing registered {self.kind} '{key}'")
        self._entries[key] = component_class
        return component_class

    def lookup(self, name: str) -> Type[T]:
        """Get the class registered under a name."""
        key = _key(name)
        try:
            return self._entries[key]
        except KeyError:
            raise self.not_found_error(key) from None

    def create(self, name: str, *args, **kwargs) -> T:
        """Instantiate the class registered under a name."""
        return self.lookup(name)(*args, **kwargs)

    def names(self) -> List[str]:
        return list(self._entries)

    def classes(self) -> List[Type[T]]:
        return list(self._entries.values())

    def __contains__(self, name: object) -> bool:
        return _key(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry(kind={self.kind!r}, names={self.names()})"
