"""docker-machine configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class MachineConfig(BaseSettings):
    """Settings for a VM-hosted Docker daemon managed by docker-machine."""

    binary: str = Field(default="docker-machine", alias="machine_binary")
    name: str = Field(default="default", alias="machine_name")
    storage_path: str | None = Field(default=None, alias="machine_storage_path")
    command_timeout: int = Field(default=120, ge=1, alias="provider_command_timeout")

    class Config:
        env_prefix = ""
        extra = "ignore"

    def get_cert_path(self) -> str:
        """Directory holding the machine's TLS client certificates."""
        root = Path(self.storage_path) if self.storage_path else Path.home() / ".docker" / "machine"
        return str(root / "machines" / self.name)
