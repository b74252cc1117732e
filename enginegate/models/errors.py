"""Error models and exception classes for enginegate."""

import time
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

PROVIDER_NOT_INSTALLED = "is NOT installed!"
PROVIDER_NOT_UP = "is NOT up!"


class ErrorType(str, Enum):
    """Error type enumeration."""

    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_NOT_RUNNING = "provider_not_running"
    PROVIDER_QUERY = "provider_query"
    BACKEND_OPERATION = "backend_operation"
    BACKEND_NOT_SELECTED = "backend_not_selected"
    UNKNOWN_BACKEND = "unknown_backend"
    INTERNAL = "internal"


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: Optional[str] = Field(None, description="Field name the detail refers to")
    message: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")


class ErrorResponse(BaseModel):
    """Serializable view of an enginegate error."""

    model_config = ConfigDict(use_enum_values=True)

    error: str = Field(..., description="Main error message")
    error_type: ErrorType = Field(..., description="Error category")
    details: Optional[List[ErrorDetail]] = Field(None, description="Additional error details")
    context: Dict[str, Any] = Field(default_factory=dict, description="Structured error context")
    timestamp: float = Field(default_factory=time.time, description="Error timestamp")


# Custom Exception Classes


class EngineGateError(Exception):
    """Base exception for enginegate."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INTERNAL,
        details: Optional[List[ErrorDetail]] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or []
        super().__init__(message)

    @property
    def context(self) -> Dict[str, Any]:
        return {}

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            error=self.message,
            error_type=self.error_type,
            details=self.details if self.details else None,
            context=self.context,
        )


class ProviderError(EngineGateError):
    """A provider failed one of the readiness conditions."""

    def __init__(self, provider_name: str, condition: str, error_type: ErrorType, **kwargs):
        self.provider_name = provider_name
        self.condition = condition
        super().__init__(
            message=f'Provider "{provider_name}" {condition}',
            error_type=error_type,
            **kwargs,
        )

    @property
    def context(self) -> Dict[str, Any]:
        return {"provider": self.provider_name, "condition": self.condition}


class ProviderUnavailableError(ProviderError):
    """The provider is not installed."""

    def __init__(self, provider_name: str, condition: str = PROVIDER_NOT_INSTALLED, **kwargs):
        super().__init__(provider_name, condition, ErrorType.PROVIDER_UNAVAILABLE, **kwargs)


class ProviderNotRunningError(ProviderError):
    """The provider is installed but not running."""

    def __init__(self, provider_name: str, condition: str = PROVIDER_NOT_UP, **kwargs):
        super().__init__(provider_name, condition, ErrorType.PROVIDER_NOT_RUNNING, **kwargs)


class ProviderQueryError(EngineGateError):
    """A provider check could not be carried out at all."""

    def __init__(self, provider_name: str, message: str = None, **kwargs):
        self.provider_name = provider_name
        super().__init__(
            message=message or f'Provider "{provider_name}" could not be queried',
            error_type=ErrorType.PROVIDER_QUERY,
            **kwargs,
        )

    @property
    def context(self) -> Dict[str, Any]:
        return {"provider": self.provider_name}


class BackendOperationError(EngineGateError):
    """A backend engine operation failed."""

    def __init__(self, operation: str, message: str = None, **kwargs):
        self.operation = operation
        super().__init__(
            message=message or f"Backend operation '{operation}' failed",
            error_type=ErrorType.BACKEND_OPERATION,
            **kwargs,
        )

    @property
    def context(self) -> Dict[str, Any]:
        return {"operation": self.operation}


class BackendNotSelectedError(EngineGateError):
    """No backend engine has been selected yet."""

    def __init__(self, message: str = "No backend engine has been selected", **kwargs):
        super().__init__(message=message, error_type=ErrorType.BACKEND_NOT_SELECTED, **kwargs)


class UnknownBackendError(EngineGateError):
    """A registry lookup used a name nothing is registered under."""

    def __init__(self, name: str, available: Optional[List[str]] = None, kind: str = "backend", **kwargs):
        self.name = name
        self.kind = kind
        self.available = sorted(available or [])
        message = f"Unknown {kind} '{name}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message=message, error_type=ErrorType.UNKNOWN_BACKEND, **kwargs)

    @property
    def context(self) -> Dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "available": self.available}


_CONDITION_ERRORS = {
    PROVIDER_NOT_INSTALLED: ProviderUnavailableError,
    PROVIDER_NOT_UP: ProviderNotRunningError,
}


def make_provider_error(provider_name: str, condition: str) -> ProviderError:
    """Build the error for an unmet provider condition.

    The message always reads ``Provider "<name>" <condition>``.
    """
    error_cls = _CONDITION_ERRORS.get(condition)
    if error_cls is None:
        return ProviderError(provider_name, condition, ErrorType.PROVIDER_UNAVAILABLE)
    return error_cls(provider_name, condition)
