"""Docker backend engine.

This package provides the Docker engine split into:
- client.py: Docker client factory built from the provider's engine config
- engine.py: container operations, registered as the "docker" backend
"""

from .client import DockerClientFactory
from .engine import DockerEngine

__all__ = ["DockerEngine", "DockerClientFactory"]
