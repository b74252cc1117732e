"""Configuration management for enginegate.

This module provides a unified Settings class with flat, environment-driven
fields and grouped read-only views.

Usage:
    from enginegate.config import settings

    # Access grouped settings
    settings.docker.get_base_url()
    settings.machine.name

    # Or the flat fields
    settings.engine
    settings.docker_timeout
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Import grouped configurations
from .docker import DockerConfig
from .logging import LoggingConfig
from .machine import MachineConfig


class Settings(BaseSettings):
    """Application settings with environment variable support.

    This class provides both:
    1. Grouped access via nested configs (settings.docker.timeout)
    2. Flat access (settings.docker_timeout)
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # ========================================================================
    # ENGINE SELECTION
    # ========================================================================

    engine: str = Field(default="docker", description="Name of the backend engine to dispatch to")
    provider: str = Field(default="docker", description="Name of the provider hosting the engine")

    # Docker Configuration
    docker_base_url: str | None = Field(default=None)
    docker_socket_path: str = Field(default="/var/run/docker.sock")
    docker_binary: str = Field(default="docker")
    docker_timeout: int = Field(default=60, ge=10)
    docker_api_version: str = Field(default="auto")
    docker_tls_verify: bool = Field(default=False)
    docker_cert_path: str | None = Field(default=None)
    docker_stop_timeout: int = Field(default=10, ge=0, description="Seconds to wait before killing a stopping container")
    docker_label_prefix: str = Field(default="io.enginegate")
    docker_up_command: List[str] = Field(default_factory=lambda: ["systemctl", "start", "docker"])
    docker_down_command: List[str] = Field(default_factory=lambda: ["systemctl", "stop", "docker"])

    # docker-machine Configuration
    machine_binary: str = Field(default="docker-machine")
    machine_name: str = Field(default="default")
    machine_storage_path: str | None = Field(default=None)

    # Provider commands (shelling out to docker-machine, systemctl, ...)
    provider_command_timeout: int = Field(default=120, ge=1, le=3600)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    log_file: str | None = Field(default=None)
    log_max_size_mb: int = Field(default=100, ge=1)
    log_backup_count: int = Field(default=5, ge=1)

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator("engine", "provider")
    @classmethod
    def normalize_name(cls, v):
        """Registry names are lower-case and trimmed."""
        v = v.strip().lower()
        if not v:
            raise ValueError("Name must not be empty")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Only json and console renderers are supported."""
        if v.lower() not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v.lower()

    # ========================================================================
    # GROUPED CONFIG ACCESS
    # ========================================================================

    @property
    def docker(self) -> DockerConfig:
        """Access Docker configuration group."""
        return DockerConfig(
            docker_base_url=self.docker_base_url,
            docker_socket_path=self.docker_socket_path,
            docker_binary=self.docker_binary,
            docker_timeout=self.docker_timeout,
            docker_api_version=self.docker_api_version,
            docker_tls_verify=self.docker_tls_verify,
            docker_cert_path=self.docker_cert_path,
            docker_stop_timeout=self.docker_stop_timeout,
            docker_label_prefix=self.docker_label_prefix,
            docker_up_command=self.docker_up_command,
            docker_down_command=self.docker_down_command,
        )

    @property
    def machine(self) -> MachineConfig:
        """Access docker-machine configuration group."""
        return MachineConfig(
            machine_binary=self.machine_binary,
            machine_name=self.machine_name,
            machine_storage_path=self.machine_storage_path,
            provider_command_timeout=self.provider_command_timeout,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(
            log_level=self.log_level,
            log_format=self.log_format,
            log_file=self.log_file,
            log_max_size_mb=self.log_max_size_mb,
            log_backup_count=self.log_backup_count,
        )


# Global settings instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    # Grouped configs
    "DockerConfig",
    "MachineConfig",
    "LoggingConfig",
]
