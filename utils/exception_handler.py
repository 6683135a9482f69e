"""
API error envelope.

Every error leaving the API has the shape ``{"success": false, "message": str}``.
Service-level failures are shaped by ``marketplace.api.responses``; this module
covers what DRF and Django raise before a view gets to run (bad credentials,
missing role, malformed JSON, unknown routes, crashes).
"""

import logging

from django.http import Http404, JsonResponse
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def flatten_detail(detail) -> str:
    """Collapse DRF's nested error detail into one readable sentence."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = flatten_detail(value)
            parts.append(message if field == "non_field_errors" else f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return " ".join(flatten_detail(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    """DRF ``EXCEPTION_HANDLER`` producing the ``{success, message}`` envelope."""
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    response = exception_handler(exc, context)

    if response is None:
        view_name = context["view"].__class__.__name__ if context.get("view") else "unknown view"
        logger.error(f"Unhandled exception in {view_name}: {exc}", exc_info=exc)
        return Response(
            {"success": False, "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.AuthenticationFailed) and getattr(exc, "detail", None):
        # simplejwt nests token errors under "messages"; keep the top-level sentence
        detail = exc.detail.get("detail", exc.detail) if isinstance(exc.detail, dict) else exc.detail
        message = flatten_detail(detail)
    elif isinstance(exc, exceptions.ValidationError):
        message = flatten_detail(exc.detail)
    else:
        message = flatten_detail(getattr(exc, "detail", str(exc)))

    response.data = {"success": False, "message": message}
    return response


def json_page_not_found(request, exception=None):
    return JsonResponse(
        {"success": False, "message": f"Route {request.method} {request.path} not found"},
        status=status.HTTP_404_NOT_FOUND,
    )


def json_server_error(request):
    return JsonResponse(
        {"success": False, "message": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
