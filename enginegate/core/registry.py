"""Name-based registries for pluggable providers and backend engines.

Plugins register a factory under a name; the dispatcher resolves the name
once and keeps the instance.

Usage:
    @backend_registry.register("docker")
    class DockerEngine(EngineBackendInterface):
        ...

    backend = backend_registry.create("docker", provider=provider)
"""

from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import structlog

from ..models import UnknownBackendError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
Factory = Callable[..., T]


class Registry(Generic[T]):
    """Mapping from a lower-case name to a factory."""

    def __init__(self, kind: str):
        self.kind = kind
        self._factories: Dict[str, Factory] = {}

    def register(self, name: str, factory: Optional[Factory] = None):
        """Register a factory under ``name``.

        Works as a plain call or, without ``factory``, as a decorator.
        Re-registering a name replaces the previous factory.
        """
        key = name.strip().lower()

        def decorator(f: Factory) -> Factory:
            if key in self._factories and self._factories[key] is not f:
                logger.warning("Replacing registered factory", kind=self.kind, name=key)
            self._factories[key] = f
            logger.debug("Registered factory", kind=self.kind, name=key)
            return f

        if factory is not None:
            return decorator(factory)
        return decorator

    def unregister(self, name: str) -> bool:
        """Remove a factory. Returns True if one was registered."""
        return self._factories.pop(name.strip().lower(), None) is not None

    def create(self, name: str, **kwargs: Any) -> T:
        """Build the instance registered under ``name``."""
        key = name.strip().lower()
        factory = self._factories.get(key)
        if factory is None:
            raise UnknownBackendError(key, available=self.names(), kind=self.kind)
        logger.info("Creating instance", kind=self.kind, name=key)
        return factory(**kwargs)

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name.strip().lower() in self._factories


# Global registries populated by the plugin packages
backend_registry: Registry = Registry("backend")
provider_registry: Registry = Registry("provider")
