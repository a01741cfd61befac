"""
Standardized API Response Helpers

Usage:
    from frontdesk.utils.responses import success_response, error_response

    # Success with data
    return success_response(data={"activities": [...]})

    # Error with field-level details
    return error_response("Invalid activity", errors={"user_id": ["This field is required."]})
"""

from rest_framework.response import Response
from rest_framework import status as http_status


def success_response(data=None, message=None, status=http_status.HTTP_200_OK):
    """
    Return standardized success response.

    Format: {"success": true, "message"?: string, "data"?: any}
    """
    response_data = {"success": True}
    if message:
        response_data["message"] = message
    if data is not None:
        response_data["data"] = data
    return Response(response_data, status=status)


def error_response(message, errors=None, status=http_status.HTTP_400_BAD_REQUEST):
    """
    Return standardized error response.

    Format: {"success": false, "message": string, "errors"?: object}
    """
    response_data = {
        "success": False,
        "message": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status)


def unprocessable_response(message):
    """
    Return standardized 422 response, used when a turn fails on a bot error.
    """
    return error_response(message=message, status=http_status.HTTP_422_UNPROCESSABLE_ENTITY)


def server_error_response(message="An unexpected error occurred"):
    """
    Return standardized 500 response.
    """
    return error_response(message=message, status=http_status.HTTP_500_INTERNAL_SERVER_ERROR)
