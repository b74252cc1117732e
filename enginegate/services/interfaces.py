"""Capability interfaces consumed by the engine dispatcher."""

# Standard library imports
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

# Local application imports
from ..models import ContainerHandle, ContainerSummary, EngineConfig, ImageDescriptor


class ProviderInterface(ABC):
    """Interface for the host that runs a container engine.

    Query methods raise ProviderQueryError when the check itself fails; a
    negative answer is returned as False.
    """

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable provider name used in error messages."""
        pass

    @abstractmethod
    async def is_installed(self) -> bool:
        """Check whether the provider is installed."""
        pass

    @abstractmethod
    async def is_up(self) -> bool:
        """Check whether the provider is running."""
        pass

    @abstractmethod
    async def engine_config(self) -> EngineConfig:
        """Produce the configuration a backend engine connects with."""
        pass

    @abstractmethod
    async def up(self) -> None:
        """Bring the provider up."""
        pass

    @abstractmethod
    async def down(self) -> None:
        """Shut the provider down."""
        pass


class EngineBackendInterface(ABC):
    """Interface for a container engine implementation.

    Operation failures raise BackendOperationError.
    """

    @abstractmethod
    def init(self, config: EngineConfig) -> None:
        """Accept the engine configuration. Calls after the first are ignored."""
        pass

    @abstractmethod
    async def up(self) -> None:
        """Bring the engine up."""
        pass

    @abstractmethod
    async def down(self) -> None:
        """Bring the engine down."""
        pass

    @abstractmethod
    async def list(self, app_name: Optional[str] = None) -> List[ContainerSummary]:
        """List containers, optionally only those belonging to an app."""
        pass

    @abstractmethod
    def get(self, container_ref: str) -> ContainerHandle:
        """Resolve a container reference to a handle."""
        pass

    @abstractmethod
    async def inspect(self, container: ContainerHandle) -> Dict[str, Any]:
        """Return low-level details about a container."""
        pass

    @abstractmethod
    async def create(self, options: Dict[str, Any]) -> ContainerSummary:
        """Create a container from backend-specific options."""
        pass

    @abstractmethod
    async def start(self, container_ref: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Start a container."""
        pass

    @abstractmethod
    async def stop(self, container_ref: str) -> Any:
        """Stop a container."""
        pass

    @abstractmethod
    async def remove(self, container_ref: str) -> Any:
        """Remove a container."""
        pass

    @abstractmethod
    async def build(self, image: ImageDescriptor) -> Any:
        """Build an image."""
        pass

    @abstractmethod
    async def pull(self, image: ImageDescriptor) -> Any:
        """Pull an image."""
        pass

    def close(self) -> None:
        """Release any resources held by the backend."""
        pass
