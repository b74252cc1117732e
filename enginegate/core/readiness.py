"""Readiness gate for the container engine provider.

Three facts are established in order and memoized for the life of the
process: the provider is installed, the provider is up, and the backend
engine has been initialized with the provider's configuration. Facts only
ever go from False to True.

Each cache fill is single-flight: concurrent first callers wait on a per-fact
lock and then reuse the result, so the provider is queried once per fact.
Failed checks are not cached; the next call queries again.
"""

import asyncio
from typing import TYPE_CHECKING, Awaitable, Callable, Dict

import structlog

from ..models import PROVIDER_NOT_INSTALLED, PROVIDER_NOT_UP, make_provider_error

if TYPE_CHECKING:
    from ..services.interfaces import EngineBackendInterface, ProviderInterface

logger = structlog.get_logger(__name__)


class ReadinessState:
    """Memoized readiness facts.

    The installed and up facts describe the provider and may be shared
    between gates over the same provider. Initialization is also tracked per
    backend by each gate, so a shared state never skips a backend's init.
    """

    def __init__(self):
        self._installed = False
        self._up = False
        self._initialized = False

    @property
    def installed(self) -> bool:
        return self._installed

    @property
    def up(self) -> bool:
        return self._up

    @property
    def initialized(self) -> bool:
        return self._initialized

    def mark_installed(self) -> None:
        self._installed = True

    def mark_up(self) -> None:
        # A running provider is necessarily installed.
        self._installed = True
        self._up = True

    def mark_initialized(self) -> None:
        if not self._up:
            raise RuntimeError("Cannot mark engine initialized before the provider is up")
        self._initialized = True

    def reset(self) -> None:
        """Forget every fact. Only meant for test isolation."""
        self._installed = False
        self._up = False
        self._initialized = False

    def as_dict(self) -> Dict[str, bool]:
        return {
            "installed": self._installed,
            "up": self._up,
            "initialized": self._initialized,
        }


class ReadinessGate:
    """Ordered verification sequence guarding every engine operation."""

    def __init__(self, provider: "ProviderInterface", state: ReadinessState = None):
        self.provider = provider
        self.state = state if state is not None else ReadinessState()
        self._installed_lock = asyncio.Lock()
        self._up_lock = asyncio.Lock()
        self._init_lock = asyncio.Lock()
        self._initialized_backend = None

    def _is_initialized(self, backend: "EngineBackendInterface") -> bool:
        # A shared state may already be initialized by another gate's backend.
        return self.state.initialized and self._initialized_backend is backend

    async def _establish(
        self,
        fact: str,
        lock: asyncio.Lock,
        check: Callable[[], Awaitable[bool]],
        condition: str,
        mark: Callable[[], None],
    ) -> None:
        if getattr(self.state, fact):
            return

        async with lock:
            if getattr(self.state, fact):
                return

            provider_name = self.provider.get_name()
            logger.debug("Querying provider", provider=provider_name, fact=fact)
            if not await check():
                logger.warning("Provider check failed", provider=provider_name, fact=fact)
                raise make_provider_error(provider_name, condition)

            mark()
            logger.info("Provider check passed", provider=provider_name, fact=fact)

    async def verify_installed(self) -> None:
        """Ensure the provider is installed."""
        await self._establish(
            "installed",
            self._installed_lock,
            self.provider.is_installed,
            PROVIDER_NOT_INSTALLED,
            self.state.mark_installed,
        )

    async def verify_up(self) -> None:
        """Ensure the provider is running.

        Does not verify installation; verify_ready does both in order.
        """
        await self._establish(
            "up",
            self._up_lock,
            self.provider.is_up,
            PROVIDER_NOT_UP,
            self.state.mark_up,
        )

    async def verify_ready(self, backend: "EngineBackendInterface") -> None:
        """Run the full gate: installed, then up, then engine initialized."""
        await self.verify_installed()
        await self.verify_up()

        if self._is_initialized(backend):
            return

        async with self._init_lock:
            if self._is_initialized(backend):
                return

            config = await self.provider.engine_config()
            backend.init(config)
            self._initialized_backend = backend
            self.state.mark_initialized()
            logger.info(
                "Engine initialized",
                provider=self.provider.get_name(),
                host=getattr(config, "host", None),
            )
