"""Engine dispatcher.

Public surface for container operations. Every call is gated on provider
readiness and then forwarded, unchanged, to the selected backend engine.
"""

# Standard library imports
from typing import Any, Dict, List, Optional

# Third-party imports
import structlog

# Local application imports
from ..core.readiness import ReadinessGate, ReadinessState
from ..core.registry import Registry, backend_registry
from ..models import (
    BackendNotSelectedError,
    ContainerSummary,
    ImageDescriptor,
    ReadinessStatus,
)
from .interfaces import EngineBackendInterface, ProviderInterface

logger = structlog.get_logger(__name__)


class EngineDispatcher:
    """Readiness-gated front for a pluggable container engine."""

    def __init__(
        self,
        provider: ProviderInterface,
        registry: Registry = None,
        state: Optional[ReadinessState] = None,
    ):
        self._provider = provider
        self._registry = registry if registry is not None else backend_registry
        self._gate = ReadinessGate(provider, state)
        self._backend: Optional[EngineBackendInterface] = None
        self._backend_name: Optional[str] = None

    @property
    def gate(self) -> ReadinessGate:
        return self._gate

    @property
    def state(self) -> ReadinessState:
        return self._gate.state

    @property
    def backend(self) -> EngineBackendInterface:
        """The selected backend engine."""
        if self._backend is None:
            raise BackendNotSelectedError()
        return self._backend

    @property
    def backend_name(self) -> Optional[str]:
        return self._backend_name

    def select_backend(self, name: str) -> None:
        """Select the backend engine by name.

        The first successful call wins; later calls are ignored.
        """
        if self._backend is not None:
            if name.strip().lower() != self._backend_name:
                logger.debug(
                    "Backend already selected, ignoring",
                    selected=self._backend_name,
                    requested=name,
                )
            return

        backend = self._registry.create(name, provider=self._provider)
        self._backend = backend
        self._backend_name = name.strip().lower()
        logger.info("Backend selected", backend=self._backend_name, provider=self._provider.get_name())

    def get_provider_name(self) -> str:
        return self._provider.get_name()

    def status(self) -> ReadinessStatus:
        """Snapshot of the readiness facts. Does not query the provider."""
        return ReadinessStatus(
            provider=self._provider.get_name(),
            backend=self._backend_name,
            **self.state.as_dict(),
        )

    async def is_up(self) -> bool:
        """Live provider check, never cached."""
        return await self._provider.is_up()

    async def up(self) -> None:
        """Bring the engine up. Only requires the provider to be installed."""
        backend = self.backend
        await self._gate.verify_installed()
        return await backend.up()

    async def down(self) -> None:
        """Bring the engine down. Only requires the provider to be installed."""
        backend = self.backend
        await self._gate.verify_installed()
        return await backend.down()

    async def _ready_backend(self) -> EngineBackendInterface:
        backend = self.backend
        await self._gate.verify_ready(backend)
        return backend

    async def list(self, app_name: Optional[str] = None) -> List[ContainerSummary]:
        """List containers, optionally filtered by app name."""
        backend = await self._ready_backend()
        return await backend.list(app_name)

    async def inspect(self, container_ref: str) -> Dict[str, Any]:
        """Inspect a container and return its details."""
        backend = await self._ready_backend()
        container = backend.get(container_ref)
        return await backend.inspect(container)

    async def create(self, options: Dict[str, Any]) -> ContainerSummary:
        """Create a container. Options are backend specific."""
        backend = await self._ready_backend()
        return await backend.create(options)

    async def start(self, container_ref: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Start a container."""
        backend = await self._ready_backend()
        return await backend.start(container_ref, options)

    async def stop(self, container_ref: str) -> Any:
        """Stop a container."""
        backend = await self._ready_backend()
        return await backend.stop(container_ref)

    async def remove(self, container_ref: str) -> Any:
        """Remove a container."""
        backend = await self._ready_backend()
        return await backend.remove(container_ref)

    async def build(self, image: ImageDescriptor) -> Any:
        """Build the image if it is marked for building, otherwise pull it."""
        backend = await self._ready_backend()
        if image.build:
            return await backend.build(image)
        return await backend.pull(image)

    def close(self) -> None:
        """Release backend resources. Readiness facts are kept."""
        if self._backend is not None:
            self._backend.close()
