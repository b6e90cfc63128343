from typing import Any, List, Optional

from .error_handling.error_types import ErrorType, ErrorContext


class ChatBridgeError(Exception):
    """Base class for every error raised by chatbridge."""
    error_type: ErrorType = ErrorType.PROVIDER_STREAM_ERROR

    def __init__(self, message: str, context: Optional[ErrorContext] = None, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.original_exception = original_exception

    @property
    def code(self) -> str:
        return self.error_type.code

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "code": self.code}}


class RequestValidationError(ChatBridgeError):
    """Request options were rejected by the provider schema. Raised before any network call."""
    error_type = ErrorType.INVALID_REQUEST_OPTIONS

    def __init__(self, message: str, fields: List[dict], context: Optional[ErrorContext] = None, original_exception: Optional[Exception] = None):
        super().__init__(message, context, original_exception)
        self.fields = fields

    @property
    def field_names(self) -> List[str]:
        return [".".join(str(part) for part in field["loc"]) for field in self.fields]


class APIError(ChatBridgeError):
    """Provider responded with a status outside 200-299."""
    error_type = ErrorType.PROVIDER_HTTP_ERROR

    def __init__(self, status: int, error: Any = None, context: Optional[ErrorContext] = None):
        if isinstance(error, dict) and "message" in error:
            message = error["message"]
        else:
            message = f"HTTP Error: {status}"
        super().__init__(message, context)
        self.status = status
        self.error = error

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "code": f"{self.code}_{self.status}", "provider_error": self.error}}


class ProviderNetworkError(ChatBridgeError):
    """Network or connection error while talking to a provider."""
    error_type = ErrorType.PROVIDER_NETWORK_ERROR


class ProviderStreamError(ChatBridgeError):
    """A streamed frame could not be decoded."""
    error_type = ErrorType.PROVIDER_STREAM_ERROR


class ProviderNotFoundError(ChatBridgeError):
    """Unknown provider alias."""
    error_type = ErrorType.PROVIDER_NOT_FOUND


class ProviderConfigError(ChatBridgeError):
    """Provider configuration could not be loaded."""
    error_type = ErrorType.PROVIDER_CONFIG_ERROR
