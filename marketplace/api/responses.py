"""
Response envelope helpers.

Success bodies are ``{"success": true, ...payload}`` and failures are
``{"success": false, "message": str}``. The status of a failure is derived
from the service error code.
"""

import uuid

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorCodes, ServiceResult
from utils.exception_handler import flatten_detail

ERROR_STATUS = {
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.OUT_OF_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCodes.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def parse_id(value):
    """Return ``value`` as a UUID, or None when it is not a well-formed id."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def invalid_id_response(kind: str = "product") -> Response:
    return error_response(ErrorCodes.INVALID_INPUT, f"Invalid {kind} ID format")


def success_response(payload=None, status_code=status.HTTP_200_OK) -> Response:
    return Response({"success": True, **(payload or {})}, status=status_code)


def error_response(error: str, message: str, extra=None, expose_message: bool = False) -> Response:
    """
    Build the failure envelope. ``extra`` adds keys next to ``message``.

    A 500 hides ``message`` unless ``expose_message`` is set, for messages the
    service wrote itself rather than ones carrying driver text.
    """
    status_code = ERROR_STATUS.get(error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR and not expose_message:
        message = "Internal server error"
    return Response({"success": False, "message": message, **(extra or {})}, status=status_code)


def validation_error_response(errors) -> Response:
    """Shape serializer errors as a single InvalidInput message."""
    return error_response(ErrorCodes.INVALID_INPUT, flatten_detail(errors))


def service_response(result: ServiceResult, render=None, status_code=status.HTTP_200_OK) -> Response:
    """
    Translate a ServiceResult into the API envelope.

    Args:
        result: Outcome returned by a service
        render: Callable building the success payload dict from ``result.value``
        status_code: Status used on success
    """
    if not result.ok:
        return error_response(result.error, result.error_detail)
    payload = render(result.value) if render else {}
    return success_response(payload, status_code)
