"""Data models for enginegate."""

from .engine import (
    ContainerHandle,
    ContainerSummary,
    EngineConfig,
    ImageDescriptor,
    ReadinessStatus,
)
from .errors import (
    PROVIDER_NOT_INSTALLED,
    PROVIDER_NOT_UP,
    BackendNotSelectedError,
    BackendOperationError,
    EngineGateError,
    ErrorDetail,
    ErrorResponse,
    ErrorType,
    ProviderError,
    ProviderNotRunningError,
    ProviderQueryError,
    ProviderUnavailableError,
    UnknownBackendError,
    make_provider_error,
)

__all__ = [
    # Engine models
    "EngineConfig",
    "ImageDescriptor",
    "ContainerHandle",
    "ContainerSummary",
    "ReadinessStatus",
    # Errors
    "PROVIDER_NOT_INSTALLED",
    "PROVIDER_NOT_UP",
    "ErrorType",
    "ErrorDetail",
    "ErrorResponse",
    "EngineGateError",
    "ProviderError",
    "ProviderUnavailableError",
    "ProviderNotRunningError",
    "ProviderQueryError",
    "BackendOperationError",
    "BackendNotSelectedError",
    "UnknownBackendError",
    "make_provider_error",
]
