"""
Custom exception handler for standardized API responses.

Converts DRF exceptions (including serializer validation errors) and bot
errors raised from views into:
{
    "success": false,
    "message": "Error description",
    "errors": { ... }  // Optional, for field-level validation errors
}
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from concierge.exceptions import BotError


def custom_exception_handler(exc, context):
    """
    Custom exception handler that formats all errors consistently.
    """
    if isinstance(exc, BotError):
        return Response(
            {"success": False, "message": str(exc)},
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        custom_response_data = {
            "success": False,
            "message": _get_error_message(exc),
        }

        if isinstance(exc, ValidationError) and isinstance(response.data, dict):
            # Field-level errors, not just a "detail" key
            if 'detail' not in response.data or len(response.data) > 1:
                custom_response_data["errors"] = normalize_errors(response.data)

        response.data = custom_response_data

    return response


def _get_error_message(exc):
    if isinstance(exc, ValidationError):
        return first_validation_error(exc.detail)

    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        return str(detail[0]) if detail else "An error occurred"
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        return first_validation_error(detail)

    return "An error occurred"


def first_validation_error(errors):
    """
    Extract the first validation error message from a nested structure.
    Used to provide a human-readable summary message.
    """
    if isinstance(errors, str):
        return errors

    if isinstance(errors, list):
        for item in errors:
            result = first_validation_error(item)
            if result:
                return result

    if isinstance(errors, dict):
        for key, value in errors.items():
            if key == 'non_field_errors' and isinstance(value, list) and value:
                return str(value[0])
            if isinstance(value, list) and value:
                return f"{key}: {value[0]}"
            if isinstance(value, str):
                return f"{key}: {value}"

    return "Validation error"


def normalize_errors(errors):
    """
    Converts all error values to lists of strings.
    """
    if not isinstance(errors, dict):
        return errors

    normalized = {}
    for key, value in errors.items():
        if isinstance(value, list):
            normalized[key] = [str(v) for v in value]
        elif isinstance(value, dict):
            normalized[key] = normalize_errors(value)
        else:
            normalized[key] = [str(value)]

    return normalized
