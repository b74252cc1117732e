"""Process-wide engine dispatcher wiring."""

# Standard library imports
from functools import lru_cache

# Third-party imports
import structlog

# Local application imports
from ..config import settings
from ..core.registry import provider_registry
from ..services import EngineDispatcher
from ..services.interfaces import ProviderInterface

# Plugin packages register their providers and backends on import
from ..services import docker as _docker_backends  # noqa: F401
from ..services import providers as _providers  # noqa: F401

logger = structlog.get_logger(__name__)


@lru_cache()
def get_provider() -> ProviderInterface:
    """Get the provider named by settings."""
    return provider_registry.create(settings.provider, settings=settings)


@lru_cache()
def get_engine() -> EngineDispatcher:
    """Get the engine dispatcher with the configured backend selected."""
    dispatcher = EngineDispatcher(get_provider())
    dispatcher.select_backend(settings.engine)
    logger.info("Engine dispatcher ready", provider=settings.provider, engine=settings.engine)
    return dispatcher


def reset_engine() -> None:
    """Forget the cached provider and dispatcher."""
    get_engine.cache_clear()
    get_provider.cache_clear()
