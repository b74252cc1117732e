"""Docker configuration."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class DockerConfig(BaseSettings):
    """Docker daemon and backend settings."""

    base_url: str | None = Field(default=None, alias="docker_base_url")
    socket_path: str = Field(default="/var/run/docker.sock", alias="docker_socket_path")
    binary: str = Field(default="docker", alias="docker_binary")
    timeout: int = Field(default=60, ge=10, alias="docker_timeout")
    api_version: str = Field(default="auto", alias="docker_api_version")
    tls_verify: bool = Field(default=False, alias="docker_tls_verify")
    cert_path: str | None = Field(default=None, alias="docker_cert_path")
    stop_timeout: int = Field(default=10, ge=0, alias="docker_stop_timeout")

    # Container labeling used for app filtering
    label_prefix: str = Field(default="io.enginegate", alias="docker_label_prefix")

    # Provider lifecycle commands for a local daemon
    up_command: List[str] = Field(
        default_factory=lambda: ["systemctl", "start", "docker"],
        alias="docker_up_command",
    )
    down_command: List[str] = Field(
        default_factory=lambda: ["systemctl", "stop", "docker"],
        alias="docker_down_command",
    )

    class Config:
        env_prefix = ""
        extra = "ignore"

    def get_base_url(self) -> str:
        """Daemon URL, falling back to the local unix socket."""
        return self.base_url or f"unix://{self.socket_path}"
