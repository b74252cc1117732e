"""Unit tests for error models and exceptions."""

import pytest

from enginegate.models import (
    PROVIDER_NOT_INSTALLED,
    PROVIDER_NOT_UP,
    BackendNotSelectedError,
    BackendOperationError,
    EngineGateError,
    ErrorType,
    ProviderError,
    ProviderNotRunningError,
    ProviderQueryError,
    ProviderUnavailableError,
    UnknownBackendError,
    make_provider_error,
)


class TestMakeProviderError:
    """Tests for make_provider_error."""

    def test_not_installed(self):
        """Test the not-installed error."""
        error = make_provider_error("Docker Machine", PROVIDER_NOT_INSTALLED)

        assert isinstance(error, ProviderUnavailableError)
        assert str(error) == 'Provider "Docker Machine" is NOT installed!'
        assert error.error_type == ErrorType.PROVIDER_UNAVAILABLE

    def test_not_up(self):
        """Test the not-up error."""
        error = make_provider_error("Docker", PROVIDER_NOT_UP)

        assert isinstance(error, ProviderNotRunningError)
        assert str(error) == 'Provider "Docker" is NOT up!'
        assert error.error_type == ErrorType.PROVIDER_NOT_RUNNING

    def test_other_condition(self):
        """Test that other conditions still name the provider."""
        error = make_provider_error("Docker", "is NOT configured!")

        assert type(error) is ProviderError
        assert str(error) == 'Provider "Docker" is NOT configured!'

    def test_distinguishable(self):
        """Test that absent and down providers are different error classes."""
        absent = make_provider_error("Docker", PROVIDER_NOT_INSTALLED)
        down = make_provider_error("Docker", PROVIDER_NOT_UP)

        assert not isinstance(absent, ProviderNotRunningError)
        assert not isinstance(down, ProviderUnavailableError)
        assert isinstance(absent, ProviderError)
        assert isinstance(down, ProviderError)


class TestExceptions:
    """Tests for the exception classes."""

    def test_all_derive_from_base(self):
        """Test the common base class."""
        errors = [
            ProviderUnavailableError("Docker"),
            ProviderNotRunningError("Docker"),
            ProviderQueryError("Docker"),
            BackendOperationError("create"),
            BackendNotSelectedError(),
            UnknownBackendError("podman"),
        ]

        for error in errors:
            assert isinstance(error, EngineGateError)

    def test_query_error_default_message(self):
        """Test the default query error message."""
        error = ProviderQueryError("Docker")

        assert str(error) == 'Provider "Docker" could not be queried'
        assert error.error_type == ErrorType.PROVIDER_QUERY

    def test_backend_operation_error(self):
        """Test backend errors keep the operation name."""
        error = BackendOperationError("stop", "Docker stop failed: 404")

        assert error.operation == "stop"
        assert str(error) == "Docker stop failed: 404"

    def test_backend_operation_default_message(self):
        """Test the default backend error message."""
        assert str(BackendOperationError("pull")) == "Backend operation 'pull' failed"

    def test_unknown_backend_without_available(self):
        """Test the message when nothing is registered."""
        assert str(UnknownBackendError("podman")) == "Unknown backend 'podman'"


class TestErrorResponse:
    """Tests for converting errors to response models."""

    def test_provider_error_response(self):
        """Test the response for a provider error."""
        response = ProviderNotRunningError("Docker").to_response()

        assert response.error == 'Provider "Docker" is NOT up!'
        assert response.error_type == "provider_not_running"
        assert response.context == {"provider": "Docker", "condition": "is NOT up!"}
        assert response.details is None
        assert response.timestamp > 0

    def test_backend_error_response(self):
        """Test the response for a backend error."""
        response = BackendOperationError("create", "conflict").to_response()

        assert response.error_type == "backend_operation"
        assert response.context == {"operation": "create"}

    def test_base_error_response(self):
        """Test the response for the base error."""
        response = EngineGateError("boom").to_response()

        assert response.error_type == "internal"
        assert response.context == {}
