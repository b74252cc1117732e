"""Provider for a Docker daemon hosted in a docker-machine VM."""

import shutil

import structlog

from ...config import Settings, settings as default_settings
from ...core.registry import provider_registry
from ...models import EngineConfig, ProviderQueryError
from ..interfaces import ProviderInterface
from .commands import check_command, run_command

logger = structlog.get_logger(__name__)

RUNNING_STATE = "Running"


@provider_registry.register("docker-machine")
class DockerMachineProvider(ProviderInterface):
    """VM-hosted Docker daemon controlled through the docker-machine CLI."""

    name = "Docker Machine"

    def __init__(self, settings: Settings = None):
        settings = settings or default_settings
        self.config = settings.machine
        self.docker_timeout = settings.docker_timeout

    def get_name(self) -> str:
        return self.name

    def _command(self, *args: str):
        return [self.config.binary, *args, self.config.name]

    async def is_installed(self) -> bool:
        return shutil.which(self.config.binary) is not None

    async def is_up(self) -> bool:
        result = await run_command(self.name, self._command("status"), self.config.command_timeout)
        if not result.ok:
            raise ProviderQueryError(
                self.name,
                f"Could not get status of machine '{self.config.name}': {result.stderr or result.stdout}",
            )
        state = result.stdout.splitlines()[-1].strip() if result.stdout else ""
        logger.debug("Machine status", machine=self.config.name, state=state)
        return state == RUNNING_STATE

    async def engine_config(self) -> EngineConfig:
        result = await check_command(self.name, self._command("url"), self.config.command_timeout)
        host = result.stdout.strip()
        if not host:
            raise ProviderQueryError(self.name, f"Machine '{self.config.name}' reported no URL")

        return EngineConfig(
            host=host,
            timeout=self.docker_timeout,
            tls_verify=True,
            cert_path=self.config.get_cert_path(),
            extra={"machine": self.config.name},
        )

    async def up(self) -> None:
        logger.info("Starting machine", machine=self.config.name)
        await check_command(self.name, self._command("start"), self.config.command_timeout)

    async def down(self) -> None:
        logger.info("Stopping machine", machine=self.config.name)
        await check_command(self.name, self._command("stop"), self.config.command_timeout)
