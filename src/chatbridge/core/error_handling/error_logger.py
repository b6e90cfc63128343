"""
Error Logging Utility

Centralized error logging so every failure is reported with the same
structure, whichever layer raised it.
"""

from typing import Dict, Any, Optional
import json
import re

from .error_types import ErrorType, ErrorContext
from ..logging import logger


class ErrorLogger:
    """Единый логгер ошибок, использующий общую систему."""

    _unicode_pattern = re.compile(r'\\u([0-9a-fA-F]{4})')

    @staticmethod
    def _decode_unicode_escapes(text):
        """
        Decode Unicode escape sequences in error messages.

        Args:
            text (str): Text that may contain Unicode escape sequences

        Returns:
            str: Text with Unicode escape sequences decoded to actual characters
        """
        if not text:
            return text

        try:
            if '\\u' in text and text.startswith('{') and text.endswith('}'):
                decoded = json.loads(text)
                if isinstance(decoded, dict):
                    return json.dumps(decoded, ensure_ascii=False)
        except (json.JSONDecodeError, ValueError):
            pass

        def replace_unicode(match):
            try:
                return chr(int(match.group(1), 16))
            except ValueError:
                return match.group(0)

        return ErrorLogger._unicode_pattern.sub(replace_unicode, text)

    @staticmethod
    def log_error(
        error_type: ErrorType,
        message: str,
        context: ErrorContext,
        original_exception: Optional[Exception] = None,
        additional_data: Optional[Dict[str, Any]] = None
    ):
        """Логировать ошибку с использованием единой системы."""
        log_extra = context.to_log_extra()
        log_extra["error_code"] = error_type.code

        if additional_data:
            log_extra.update(additional_data)

        if original_exception:
            log_extra["original_exception"] = str(original_exception)
            log_extra["original_exception_type"] = type(original_exception).__name__

        logger.error(message, exc_info=original_exception is not None, **log_extra)

    @staticmethod
    def log_provider_error(
        provider_name: str,
        error_details: Any,
        status_code: int,
        context: ErrorContext
    ):
        """Log provider-specific errors."""
        if not isinstance(error_details, str):
            error_details = json.dumps(error_details, ensure_ascii=False, default=str)
        decoded_error_details = ErrorLogger._decode_unicode_escapes(error_details)

        log_extra = context.to_log_extra()
        log_extra.update({
            "provider_error_details": decoded_error_details,
            "provider_status_code": status_code,
            "error_code": ErrorType.PROVIDER_HTTP_ERROR.code,
        })

        logger.error(
            f"Provider '{provider_name}' returned error {status_code}: {decoded_error_details}",
            **log_extra
        )
