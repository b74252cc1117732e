"""Docker client factory and initialization."""

import os
import threading
from typing import Optional

import docker
import structlog
from docker.errors import DockerException
from docker.tls import TLSConfig

from ...models import BackendOperationError, EngineConfig

logger = structlog.get_logger(__name__)


def build_tls_config(config: EngineConfig) -> Optional[TLSConfig]:
    """Build TLS settings from the cert directory, or None when TLS is off."""
    if not config.tls_verify:
        return None
    if not config.cert_path:
        raise BackendOperationError("connect", "TLS verification requested without a cert path")

    return TLSConfig(
        client_cert=(
            os.path.join(config.cert_path, "cert.pem"),
            os.path.join(config.cert_path, "key.pem"),
        ),
        ca_cert=os.path.join(config.cert_path, "ca.pem"),
        verify=True,
    )


def create_client(config: EngineConfig) -> docker.DockerClient:
    """Create a Docker client for an engine config. SDK errors propagate."""
    return docker.DockerClient(
        base_url=config.host,
        version=config.version,
        timeout=config.timeout,
        tls=build_tls_config(config),
    )


class DockerClientFactory:
    """Factory for creating a Docker client from an engine configuration."""

    def __init__(self):
        """Initialize without connecting; the client is created on first use."""
        self.client: Optional[docker.DockerClient] = None
        self._config: Optional[EngineConfig] = None
        # Operations run in executor threads and may race on first use.
        self._lock = threading.Lock()

    @property
    def configured(self) -> bool:
        return self._config is not None

    def configure(self, config: EngineConfig) -> None:
        """Store the configuration used to build the client."""
        self._config = config
        logger.info("Docker client configured", host=config.host, tls=config.tls_verify)

    def _ensure_client(self) -> docker.DockerClient:
        if self.client is not None:
            return self.client

        with self._lock:
            if self.client is not None:
                return self.client

            if self._config is None:
                raise BackendOperationError("connect", "Docker client has not been configured")

            try:
                logger.info("Initializing Docker client on first use", host=self._config.host)
                self.client = create_client(self._config)
            except DockerException as e:
                logger.error("Failed to create Docker client", error=str(e))
                raise BackendOperationError("connect", f"Failed to create Docker client: {e}") from e

        return self.client

    def get_client(self) -> docker.DockerClient:
        """Get the Docker client, creating it if needed."""
        return self._ensure_client()

    def reset(self) -> None:
        """Drop the current client so the next use reconnects."""
        with self._lock:
            self.close()
            self.client = None
        logger.info("Docker client reset")

    def close(self) -> None:
        """Close Docker client connection."""
        try:
            if self.client is not None:
                self.client.close()
        except Exception as e:
            logger.error("Error closing Docker client", error=str(e))
