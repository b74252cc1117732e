"""Unit tests for the readiness state and gate."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from enginegate.core.readiness import ReadinessGate, ReadinessState
from enginegate.models import (
    ProviderNotRunningError,
    ProviderQueryError,
    ProviderUnavailableError,
)


@pytest.fixture
def gate(mock_provider, readiness_state):
    """Gate over the shared mock provider."""
    return ReadinessGate(mock_provider, readiness_state)


class TestReadinessState:
    """Tests for ReadinessState."""

    def test_starts_empty(self):
        """Test that no fact is known initially."""
        state = ReadinessState()

        assert state.as_dict() == {"installed": False, "up": False, "initialized": False}

    def test_mark_installed(self):
        """Test marking installed leaves the other facts alone."""
        state = ReadinessState()
        state.mark_installed()

        assert state.installed is True
        assert state.up is False

    def test_mark_up_implies_installed(self):
        """Test that an up provider is never reported as not installed."""
        state = ReadinessState()
        state.mark_up()

        assert state.up is True
        assert state.installed is True

    def test_mark_initialized_requires_up(self):
        """Test that initialization cannot be recorded before up."""
        state = ReadinessState()
        state.mark_installed()

        with pytest.raises(RuntimeError):
            state.mark_initialized()

        assert state.initialized is False

    def test_mark_initialized(self):
        """Test the full sequence of transitions."""
        state = ReadinessState()
        state.mark_installed()
        state.mark_up()
        state.mark_initialized()

        assert state.as_dict() == {"installed": True, "up": True, "initialized": True}

    def test_marks_are_idempotent(self):
        """Test that marking a fact twice keeps it true."""
        state = ReadinessState()
        state.mark_installed()
        state.mark_installed()

        assert state.installed is True

    def test_facts_are_read_only(self):
        """Test that facts cannot be assigned directly."""
        state = ReadinessState()

        with pytest.raises(AttributeError):
            state.installed = True

    def test_reset(self):
        """Test reset forgets every fact."""
        state = ReadinessState()
        state.mark_up()
        state.mark_initialized()

        state.reset()

        assert state.as_dict() == {"installed": False, "up": False, "initialized": False}


class TestVerifyInstalled:
    """Tests for ReadinessGate.verify_installed."""

    @pytest.mark.asyncio
    async def test_queries_provider_once(self, gate, mock_provider):
        """Test that repeated calls hit the provider only once."""
        for _ in range(5):
            await gate.verify_installed()

        mock_provider.is_installed.assert_awaited_once()
        assert gate.state.installed is True

    @pytest.mark.asyncio
    async def test_not_installed(self, gate, mock_provider):
        """Test the error raised when the provider is missing."""
        mock_provider.is_installed.return_value = False

        with pytest.raises(ProviderUnavailableError) as exc_info:
            await gate.verify_installed()

        assert str(exc_info.value) == 'Provider "Docker" is NOT installed!'
        assert gate.state.installed is False

    @pytest.mark.asyncio
    async def test_negative_result_not_cached(self, gate, mock_provider):
        """Test that a later call retries after a negative answer."""
        mock_provider.is_installed.side_effect = [False, True]

        with pytest.raises(ProviderUnavailableError):
            await gate.verify_installed()
        await gate.verify_installed()

        assert mock_provider.is_installed.await_count == 2
        assert gate.state.installed is True

    @pytest.mark.asyncio
    async def test_query_error_propagates_unchanged(self, gate, mock_provider):
        """Test that provider query errors are not wrapped."""
        error = ProviderQueryError("Docker", "boom")
        mock_provider.is_installed.side_effect = error

        with pytest.raises(ProviderQueryError) as exc_info:
            await gate.verify_installed()

        assert exc_info.value is error
        assert gate.state.installed is False

    @pytest.mark.asyncio
    async def test_arbitrary_error_propagates_unchanged(self, gate, mock_provider):
        """Test that unexpected provider errors are not wrapped either."""
        error = OSError("socket closed")
        mock_provider.is_installed.side_effect = error

        with pytest.raises(OSError) as exc_info:
            await gate.verify_installed()

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_cached_fact_skips_provider(self, gate, mock_provider):
        """Test that a known fact never queries the provider."""
        gate.state.mark_installed()

        await gate.verify_installed()

        mock_provider.is_installed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_query(self, gate, mock_provider):
        """Test that concurrent first calls cause a single provider query."""

        async def slow_check():
            await asyncio.sleep(0.01)
            return True

        mock_provider.is_installed = AsyncMock(side_effect=slow_check)

        await asyncio.gather(*(gate.verify_installed() for _ in range(10)))

        assert mock_provider.is_installed.await_count == 1


class TestVerifyUp:
    """Tests for ReadinessGate.verify_up."""

    @pytest.mark.asyncio
    async def test_queries_provider_once(self, gate, mock_provider):
        """Test that repeated calls hit the provider only once."""
        await gate.verify_up()
        await gate.verify_up()

        mock_provider.is_up.assert_awaited_once()
        assert gate.state.up is True

    @pytest.mark.asyncio
    async def test_does_not_check_installed(self, gate, mock_provider):
        """Test that verify_up alone does not run the install check."""
        await gate.verify_up()

        mock_provider.is_installed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_not_up(self, gate, mock_provider):
        """Test the error raised when the provider is down."""
        mock_provider.is_up.return_value = False

        with pytest.raises(ProviderNotRunningError) as exc_info:
            await gate.verify_up()

        assert str(exc_info.value) == 'Provider "Docker" is NOT up!'
        assert gate.state.up is False


class TestVerifyReady:
    """Tests for ReadinessGate.verify_ready."""

    @pytest.mark.asyncio
    async def test_initializes_backend_once(self, gate, mock_provider, mock_backend, engine_config):
        """Test that config is fetched and handed to the backend exactly once."""
        await gate.verify_ready(mock_backend)
        await gate.verify_ready(mock_backend)

        mock_provider.engine_config.assert_awaited_once()
        mock_backend.init.assert_called_once_with(engine_config)
        assert gate.state.initialized is True

    @pytest.mark.asyncio
    async def test_steps_run_in_order(self, gate, mock_provider, mock_backend, engine_config):
        """Test installed, up, config, init ordering."""
        calls = []
        mock_provider.is_installed.side_effect = lambda: calls.append("installed") or True
        mock_provider.is_up.side_effect = lambda: calls.append("up") or True
        mock_provider.engine_config.side_effect = lambda: calls.append("config") or engine_config
        mock_backend.init.side_effect = lambda cfg: calls.append("init")

        await gate.verify_ready(mock_backend)

        assert calls == ["installed", "up", "config", "init"]

    @pytest.mark.asyncio
    async def test_fails_fast_when_not_installed(self, gate, mock_provider, mock_backend):
        """Test that nothing after the install check runs."""
        mock_provider.is_installed.return_value = False

        with pytest.raises(ProviderUnavailableError):
            await gate.verify_ready(mock_backend)

        mock_provider.is_up.assert_not_awaited()
        mock_provider.engine_config.assert_not_awaited()
        mock_backend.init.assert_not_called()

    @pytest.mark.asyncio
    async def test_fails_fast_when_not_up(self, gate, mock_provider, mock_backend):
        """Test that config is never requested when the provider is down."""
        mock_provider.is_up.return_value = False

        with pytest.raises(ProviderNotRunningError):
            await gate.verify_ready(mock_backend)

        assert gate.state.installed is True
        mock_provider.engine_config.assert_not_awaited()
        mock_backend.init.assert_not_called()

    @pytest.mark.asyncio
    async def test_config_error_is_retryable(self, gate, mock_provider, mock_backend, engine_config):
        """Test that a config failure leaves the engine uninitialized."""
        error = ProviderQueryError("Docker", "no url")
        mock_provider.engine_config.side_effect = [error, engine_config]

        with pytest.raises(ProviderQueryError) as exc_info:
            await gate.verify_ready(mock_backend)

        assert exc_info.value is error
        assert gate.state.initialized is False
        assert gate.state.up is True

        await gate.verify_ready(mock_backend)

        mock_provider.is_installed.assert_awaited_once()
        mock_provider.is_up.assert_awaited_once()
        mock_backend.init.assert_called_once_with(engine_config)
        assert gate.state.initialized is True

    @pytest.mark.asyncio
    async def test_concurrent_initialization_happens_once(self, gate, mock_provider, mock_backend, engine_config):
        """Test that concurrent first calls initialize the backend once."""

        async def slow_config():
            await asyncio.sleep(0.01)
            return engine_config

        mock_provider.engine_config = AsyncMock(side_effect=slow_config)

        await asyncio.gather(*(gate.verify_ready(mock_backend) for _ in range(5)))

        assert mock_provider.engine_config.await_count == 1
        mock_backend.init.assert_called_once()

    @pytest.mark.asyncio
    async def test_facts_never_revert(self, gate, mock_provider, mock_backend):
        """Test monotonicity after the provider starts answering negatively."""
        await gate.verify_ready(mock_backend)

        mock_provider.is_installed.return_value = False
        mock_provider.is_up.return_value = False
        await gate.verify_ready(mock_backend)

        assert gate.state.as_dict() == {"installed": True, "up": True, "initialized": True}

    @pytest.mark.asyncio
    async def test_uses_own_state_by_default(self, mock_provider):
        """Test that a gate without an explicit state gets a fresh one."""
        gate = ReadinessGate(mock_provider)

        assert isinstance(gate.state, ReadinessState)
        assert gate.state.installed is False

    @pytest.mark.asyncio
    async def test_backend_init_error_leaves_uninitialized(self, gate, mock_backend):
        """Test that a backend rejecting the config is not recorded as initialized."""
        mock_backend.init = MagicMock(side_effect=ValueError("bad config"))

        with pytest.raises(ValueError):
            await gate.verify_ready(mock_backend)

        assert gate.state.initialized is False

    @pytest.mark.asyncio
    async def test_shared_state_initializes_each_backend(self, mock_provider, readiness_state, engine_config):
        """Test that gates sharing a state still initialize their own backends."""
        first_backend = MagicMock()
        second_backend = MagicMock()
        first_gate = ReadinessGate(mock_provider, readiness_state)
        second_gate = ReadinessGate(mock_provider, readiness_state)

        await first_gate.verify_ready(first_backend)
        await second_gate.verify_ready(second_backend)

        first_backend.init.assert_called_once_with(engine_config)
        second_backend.init.assert_called_once_with(engine_config)
        mock_provider.is_installed.assert_awaited_once()
        mock_provider.is_up.assert_awaited_once()
