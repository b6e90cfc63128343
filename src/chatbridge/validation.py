from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from .core.error_handling import ErrorHandler, ErrorContext


def field_errors(error: ValidationError) -> List[dict]:
    """Reduce pydantic errors to the offending fields."""
    return [
        {"loc": tuple(item["loc"]), "msg": item["msg"], "type": item["type"]}
        for item in error.errors()
    ]


def validate(options: Mapping[str, Any], schema: Type[BaseModel], context: Optional[ErrorContext] = None) -> Dict[str, Any]:
    """
    Validate request options against a provider schema.

    Returns the normalized options (defaults applied, unset optional fields
    dropped) or raises RequestValidationError carrying every offending field.
    """
    try:
        validated = schema.model_validate(dict(options))
    except ValidationError as e:
        raise ErrorHandler.handle_validation_error(
            fields=field_errors(e),
            context=context or ErrorContext(),
            original_exception=e
        ) from e
    return validated.model_dump(exclude_none=True)
