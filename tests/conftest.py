"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from enginegate.core.readiness import ReadinessState
from enginegate.core.registry import Registry
from enginegate.models import ContainerHandle, ContainerSummary, EngineConfig
from enginegate.services import EngineDispatcher
from enginegate.services.interfaces import EngineBackendInterface, ProviderInterface


@pytest.fixture
def engine_config():
    """Engine configuration as a provider would produce it."""
    return EngineConfig(host="tcp://192.168.99.100:2376", tls_verify=True, cert_path="/certs")


@pytest.fixture
def mock_provider(engine_config):
    """Provider that is installed, up and configured."""
    provider = MagicMock(spec=ProviderInterface)
    provider.get_name.return_value = "Docker"
    provider.is_installed = AsyncMock(return_value=True)
    provider.is_up = AsyncMock(return_value=True)
    provider.engine_config = AsyncMock(return_value=engine_config)
    provider.up = AsyncMock(return_value=None)
    provider.down = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def mock_backend():
    """Backend engine with canned results."""
    backend = MagicMock(spec=EngineBackendInterface)
    backend.init = MagicMock(return_value=None)
    backend.up = AsyncMock(return_value=None)
    backend.down = AsyncMock(return_value=None)
    backend.list = AsyncMock(
        return_value=[ContainerSummary(id="abc123", name="web", status="running", app="myapp")]
    )
    backend.get = MagicMock(side_effect=lambda ref: ContainerHandle(id=ref))
    backend.inspect = AsyncMock(return_value={"Id": "abc123", "State": {"Running": True}})
    backend.create = AsyncMock(return_value=ContainerSummary(id="new123", name="db"))
    backend.start = AsyncMock(return_value=None)
    backend.stop = AsyncMock(return_value=None)
    backend.remove = AsyncMock(return_value=None)
    backend.build = AsyncMock(return_value={"id": "sha256:built"})
    backend.pull = AsyncMock(return_value={"id": "sha256:pulled"})
    return backend


@pytest.fixture
def backend_factory(mock_backend):
    """Factory recording the provider it was given."""
    return MagicMock(return_value=mock_backend)


@pytest.fixture
def registry(backend_factory):
    """Isolated backend registry with a single fake backend."""
    registry = Registry("backend")
    registry.register("fake", backend_factory)
    return registry


@pytest.fixture
def readiness_state():
    """Fresh readiness state."""
    return ReadinessState()


@pytest.fixture
def dispatcher(mock_provider, registry, readiness_state):
    """Dispatcher with the fake backend selected."""
    dispatcher = EngineDispatcher(mock_provider, registry=registry, state=readiness_state)
    dispatcher.select_backend("fake")
    return dispatcher
