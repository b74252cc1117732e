"""Provider for a Docker daemon running directly on the host."""

import asyncio
import os
import shutil

import structlog
from docker.errors import DockerException

from ...config import Settings, settings as default_settings
from ...core.registry import provider_registry
from ...models import BackendOperationError, EngineConfig, ProviderQueryError
from ..docker.client import create_client
from ..interfaces import ProviderInterface
from .commands import check_command

logger = structlog.get_logger(__name__)


@provider_registry.register("docker")
class DockerDaemonProvider(ProviderInterface):
    """Local Docker daemon reached over its unix socket or DOCKER_HOST."""

    name = "Docker"

    def __init__(self, settings: Settings = None):
        settings = settings or default_settings
        self.config = settings.docker
        self.command_timeout = settings.provider_command_timeout

    def get_name(self) -> str:
        return self.name

    def _uses_local_socket(self) -> bool:
        return self.config.get_base_url().startswith("unix://")

    async def is_installed(self) -> bool:
        if shutil.which(self.config.binary):
            return True
        return self._uses_local_socket() and os.path.exists(self.config.socket_path)

    async def is_up(self) -> bool:
        if self._uses_local_socket():
            socket_path = self.config.socket_path
            if not os.path.exists(socket_path):
                logger.info("Docker socket not found", socket_path=socket_path)
                return False
            if not os.access(socket_path, os.R_OK | os.W_OK):
                raise ProviderQueryError(
                    self.name, f"No permission to access Docker socket at {socket_path}"
                )

        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self._ping)

    def _ping(self) -> bool:
        try:
            client = create_client(self._engine_config())
        except BackendOperationError as e:
            raise ProviderQueryError(self.name, e.message) from e
        except DockerException as e:
            logger.info("Docker daemon not reachable", error=str(e))
            return False

        try:
            return bool(client.ping())
        except DockerException as e:
            logger.info("Docker ping failed", error=str(e))
            return False
        finally:
            client.close()

    def _engine_config(self) -> EngineConfig:
        return EngineConfig(
            host=self.config.get_base_url(),
            timeout=self.config.timeout,
            version=self.config.api_version,
            tls_verify=self.config.tls_verify,
            cert_path=self.config.cert_path,
        )

    async def engine_config(self) -> EngineConfig:
        return self._engine_config()

    async def up(self) -> None:
        logger.info("Starting Docker daemon", command=self.config.up_command)
        await check_command(self.name, self.config.up_command, self.command_timeout)

    async def down(self) -> None:
        logger.info("Stopping Docker daemon", command=self.config.down_command)
        await check_command(self.name, self.config.down_command, self.command_timeout)
