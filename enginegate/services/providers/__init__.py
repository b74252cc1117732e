"""Provider plugins.

Importing this package registers:
- docker: Docker daemon on the local host
- docker-machine: Docker daemon inside a docker-machine VM
"""

from .docker_daemon import DockerDaemonProvider
from .docker_machine import DockerMachineProvider

__all__ = ["DockerDaemonProvider", "DockerMachineProvider"]
