# error_handling must be imported before exceptions
from .error_handling import ErrorType, ErrorContext, ErrorHandler, ErrorLogger
from .exceptions import (
    ChatBridgeError,
    RequestValidationError,
    APIError,
    ProviderNetworkError,
    ProviderStreamError,
    ProviderNotFoundError,
    ProviderConfigError,
)
