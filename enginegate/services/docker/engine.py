"""Docker backend engine."""

import asyncio
from typing import Any, Callable, Dict, List, Optional

import structlog
from docker.errors import DockerException
from docker.models.containers import Container

from ...config import Settings, settings as default_settings
from ...core.registry import backend_registry
from ...models import (
    BackendOperationError,
    ContainerHandle,
    ContainerSummary,
    EngineConfig,
    ImageDescriptor,
)
from ..interfaces import EngineBackendInterface, ProviderInterface
from .client import DockerClientFactory

logger = structlog.get_logger(__name__)


@backend_registry.register("docker")
class DockerEngine(EngineBackendInterface):
    """Container operations against a Docker daemon via the docker SDK."""

    def __init__(self, provider: ProviderInterface, settings: Settings = None):
        settings = settings or default_settings
        self._provider = provider
        self._client_factory = DockerClientFactory()
        self._label_prefix = settings.docker.label_prefix
        self._stop_timeout = settings.docker.stop_timeout

    @property
    def client(self):
        """Get the Docker client."""
        return self._client_factory.get_client()

    @property
    def app_label(self) -> str:
        return f"{self._label_prefix}.app"

    def init(self, config: EngineConfig) -> None:
        if self._client_factory.configured:
            logger.debug("Docker engine already initialized, ignoring config", host=config.host)
            return
        self._client_factory.configure(config)

    async def _run(self, operation: str, fn: Callable[[], Any]) -> Any:
        """Run a blocking SDK call off the event loop."""
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, fn)
        except DockerException as e:
            logger.error("Docker operation failed", operation=operation, error=str(e))
            raise BackendOperationError(operation, f"Docker {operation} failed: {e}") from e

    def _summarize(self, container: Container) -> ContainerSummary:
        labels = container.labels or {}
        image = container.attrs.get("Config", {}).get("Image", "")
        return ContainerSummary(
            id=container.id,
            name=container.name,
            image=image,
            status=container.status,
            app=labels.get(self.app_label),
            labels=dict(labels),
        )

    async def up(self) -> None:
        await self._provider.up()

    async def down(self) -> None:
        await self._provider.down()

    async def list(self, app_name: Optional[str] = None) -> List[ContainerSummary]:
        filters = {"label": f"{self.app_label}={app_name}"} if app_name else {}
        containers = await self._run(
            "list", lambda: self.client.containers.list(all=True, filters=filters)
        )
        return [self._summarize(c) for c in containers]

    def get(self, container_ref: str) -> ContainerHandle:
        return ContainerHandle(id=container_ref)

    async def inspect(self, container: ContainerHandle) -> Dict[str, Any]:
        return await self._run("inspect", lambda: self.client.api.inspect_container(container.id))

    async def create(self, options: Dict[str, Any]) -> ContainerSummary:
        container = await self._run("create", lambda: self.client.containers.create(**options))
        logger.info("Created container", container_id=container.id[:12], name=container.name)
        return self._summarize(container)

    async def start(self, container_ref: str, options: Optional[Dict[str, Any]] = None) -> ContainerSummary:
        """Start a container.

        Options:
            wait: poll until the container reports running (default False)
            max_wait: seconds to keep polling (default 2.0)
        """
        options = options or {}
        container = await self._run("start", lambda: self.client.containers.get(container_ref))
        await self._run("start", container.start)

        if options.get("wait"):
            await self._wait_running(container, float(options.get("max_wait", 2.0)))
        else:
            await self._run("start", container.reload)

        return self._summarize(container)

    async def _wait_running(self, container: Container, max_wait: float) -> None:
        stable_checks = 0
        interval = 0.05
        total_wait = 0.0

        while total_wait < max_wait:
            await self._run("start", container.reload)
            if container.status == "running":
                stable_checks += 1
                if stable_checks >= 3:
                    return
            else:
                stable_checks = 0
            await asyncio.sleep(interval)
            total_wait += interval

        raise BackendOperationError(
            "start",
            f"Container {container.id[:12]} not running after {max_wait} seconds (status: {container.status})",
        )

    async def stop(self, container_ref: str) -> None:
        container = await self._run("stop", lambda: self.client.containers.get(container_ref))
        await self._run("stop", lambda: container.stop(timeout=self._stop_timeout))
        logger.info("Stopped container", container_id=container.id[:12])

    async def remove(self, container_ref: str) -> None:
        container = await self._run("remove", lambda: self.client.containers.get(container_ref))
        await self._run("remove", lambda: container.remove(v=True))
        logger.info("Removed container", container_id=container.id[:12])

    async def build(self, image: ImageDescriptor) -> Dict[str, Any]:
        if not image.src:
            raise BackendOperationError("build", f"Image {image.reference} has no build context")

        logger.info("Building image", image=image.reference, src=image.src)
        built, _ = await self._run(
            "build", lambda: self.client.images.build(path=image.src, tag=image.reference, rm=True)
        )
        return {"id": built.id, "tags": built.tags}

    async def pull(self, image: ImageDescriptor) -> Dict[str, Any]:
        logger.info("Pulling image", image=image.reference)
        pulled = await self._run("pull", lambda: self.client.images.pull(image.name, tag=image.tag))
        return {"id": pulled.id, "tags": pulled.tags}

    def close(self) -> None:
        self._client_factory.close()
