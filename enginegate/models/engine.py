"""Data models shared by the dispatcher, providers and backends."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Connection settings a provider hands to a backend engine."""

    host: str = Field(..., description="Daemon URL, e.g. unix:///var/run/docker.sock or tcp://192.168.99.100:2376")
    timeout: int = Field(default=60, ge=1, description="Client request timeout in seconds")
    version: str = Field(default="auto", description="Engine API version")
    tls_verify: bool = Field(default=False)
    cert_path: Optional[str] = Field(default=None, description="Directory holding ca.pem, cert.pem and key.pem")
    extra: Dict[str, Any] = Field(default_factory=dict, description="Backend-specific settings")


class ImageDescriptor(BaseModel):
    """An image to build or pull.

    ``build`` is the only field the dispatcher looks at: truthy means build
    from ``src``, falsy means pull.
    """

    name: str
    tag: str = "latest"
    build: bool = False
    src: Optional[str] = Field(default=None, description="Build context directory")

    @property
    def reference(self) -> str:
        return f"{self.name}:{self.tag}"


@dataclass
class ContainerHandle:
    """Lightweight reference to a container; creating one does no I/O."""

    id: str


@dataclass
class ContainerSummary:
    """A container as reported by a backend."""

    id: str
    name: str
    image: str = ""
    status: str = "unknown"
    app: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)

    @property
    def running(self) -> bool:
        return self.status == "running"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "status": self.status,
            "app": self.app,
            "running": self.running,
            "labels": dict(self.labels),
        }


class ReadinessStatus(BaseModel):
    """Snapshot of the dispatcher's readiness facts."""

    provider: str
    backend: Optional[str] = None
    installed: bool = False
    up: bool = False
    initialized: bool = False
