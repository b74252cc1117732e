"""Service layer for enginegate."""

from .engine import EngineDispatcher
from .interfaces import EngineBackendInterface, ProviderInterface

__all__ = [
    "EngineDispatcher",
    "EngineBackendInterface",
    "ProviderInterface",
]
