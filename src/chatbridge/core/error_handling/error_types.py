"""
Error Types and Context Definitions

Standardized error types and context information shared by every
chatbridge exception.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorType(Enum):
    """Enumeration of standard error types in the library."""

    # Raised before any network activity
    INVALID_REQUEST_OPTIONS = ("invalid_request_options", "Invalid request options for provider '{provider_name}': {error_details}")
    PROVIDER_NOT_FOUND = ("provider_not_found", "Provider '{provider_name}' not found")
    PROVIDER_CONFIG_ERROR = ("provider_config_error", "Provider configuration error: {error_details}")

    # Provider errors
    PROVIDER_HTTP_ERROR = ("provider_http_error", "{error_details}")
    PROVIDER_NETWORK_ERROR = ("provider_network_error", "Network error communicating with provider: {error_details}")
    PROVIDER_STREAM_ERROR = ("provider_stream_error", "Provider streaming error: {error_details}")

    def __init__(self, code: str, message_template: str):
        self.code = code
        self.message_template = message_template

    def format_message(self, **kwargs) -> str:
        """Format the error message with provided parameters."""
        try:
            return self.message_template.format(**kwargs)
        except KeyError:
            return self.message_template


class ErrorContext:
    """Context information for error handling."""

    def __init__(
        self,
        request_id: Optional[str] = None,
        provider_name: Optional[str] = None,
        model_id: Optional[str] = None,
        url: Optional[str] = None,
        **additional_context
    ):
        self.request_id = request_id
        self.provider_name = provider_name
        self.model_id = model_id
        self.url = url
        self.additional_context = additional_context

    def to_log_extra(self) -> Dict[str, Any]:
        """Convert context to logging extra dictionary."""
        extra = {
            "log_type": "error"
        }

        if self.request_id:
            extra["request_id"] = self.request_id
        if self.provider_name:
            extra["provider_name"] = self.provider_name
        if self.model_id:
            extra["model_id"] = self.model_id
        if self.url:
            extra["url"] = self.url

        extra.update(self.additional_context)
        return extra
