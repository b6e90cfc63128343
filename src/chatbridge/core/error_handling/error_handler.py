"""
Main Error Handler

Builds chatbridge exceptions with consistent messages and logging. Callers
``raise`` the returned exception themselves.
"""

from typing import Optional, Any, List

import httpx

from .error_types import ErrorType, ErrorContext
from .error_logger import ErrorLogger
from ..exceptions import (
    ChatBridgeError,
    RequestValidationError,
    APIError,
    ProviderNetworkError,
    ProviderStreamError,
    ProviderNotFoundError,
    ProviderConfigError,
)


class ErrorHandler:
    """Centralized error handling utility."""

    @staticmethod
    def create_exception(
        exception_class: type,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None,
        log_error: bool = True,
        **format_kwargs
    ) -> ChatBridgeError:
        """
        Create a chatbridge exception with a standardized message.

        Args:
            exception_class: ChatBridgeError subclass to instantiate
            context: Error context information
            original_exception: Original exception that caused this error
            log_error: Whether to log the error
            **format_kwargs: Additional kwargs for message formatting

        Returns:
            The exception instance, ready to be raised
        """
        if context is None:
            context = ErrorContext()

        error_type = exception_class.error_type
        format_dict = {**context.__dict__, **format_kwargs}
        message = error_type.format_message(**format_dict)

        if log_error:
            ErrorLogger.log_error(
                error_type=error_type,
                message=message,
                context=context,
                original_exception=original_exception
            )

        return exception_class(message, context=context, original_exception=original_exception)

    @staticmethod
    def handle_validation_error(fields: List[dict], context: ErrorContext, original_exception: Optional[Exception] = None) -> RequestValidationError:
        """Handle rejected request options."""
        error_details = "; ".join(
            f"{'.'.join(str(part) for part in field['loc']) or '<root>'}: {field['msg']}"
            for field in fields
        )
        message = ErrorType.INVALID_REQUEST_OPTIONS.format_message(
            provider_name=context.provider_name,
            error_details=error_details
        )
        ErrorLogger.log_error(
            error_type=ErrorType.INVALID_REQUEST_OPTIONS,
            message=message,
            context=context,
            additional_data={"invalid_fields": [".".join(str(p) for p in f["loc"]) for f in fields]}
        )
        return RequestValidationError(message, fields=fields, context=context, original_exception=original_exception)

    @staticmethod
    def handle_provider_not_found(provider_name: str, context: Optional[ErrorContext] = None) -> ProviderNotFoundError:
        """Handle provider not found error."""
        context = context or ErrorContext()
        context.provider_name = provider_name
        return ErrorHandler.create_exception(ProviderNotFoundError, context=context)

    @staticmethod
    def handle_provider_config_error(error_details: str, context: Optional[ErrorContext] = None, original_exception: Optional[Exception] = None) -> ProviderConfigError:
        """Handle provider configuration error."""
        return ErrorHandler.create_exception(
            ProviderConfigError,
            context=context,
            original_exception=original_exception,
            error_details=error_details
        )

    @staticmethod
    def handle_provider_http_error(status: int, error: Any, context: ErrorContext) -> APIError:
        """Handle a non-2xx provider response. ``error`` is the provider's decoded error payload."""
        ErrorLogger.log_provider_error(
            provider_name=context.provider_name or "unknown",
            error_details=error,
            status_code=status,
            context=context
        )
        return APIError(status, error, context=context)

    @staticmethod
    def handle_provider_network_error(original_exception: httpx.RequestError, context: ErrorContext) -> ProviderNetworkError:
        """Handle provider network errors."""
        return ErrorHandler.create_exception(
            ProviderNetworkError,
            context=context,
            original_exception=original_exception,
            error_details=str(original_exception) or type(original_exception).__name__
        )

    @staticmethod
    def handle_provider_stream_error(error_details: str, context: ErrorContext, original_exception: Optional[Exception] = None) -> ProviderStreamError:
        """Handle a frame that could not be decoded mid-stream."""
        return ErrorHandler.create_exception(
            ProviderStreamError,
            context=context,
            original_exception=original_exception,
            error_details=error_details
        )
