"""Dependency wiring for enginegate."""

from .services import get_engine, get_provider, reset_engine

__all__ = ["get_engine", "get_provider", "reset_engine"]
