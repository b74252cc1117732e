"""Core readiness and registry machinery."""

from .readiness import ReadinessGate, ReadinessState
from .registry import Registry, backend_registry, provider_registry

__all__ = [
    "ReadinessGate",
    "ReadinessState",
    "Registry",
    "backend_registry",
    "provider_registry",
]
