"""
Health Check Endpoints

``/health`` reports liveness plus a database probe; ``/api`` lists the
available endpoint groups.
"""

import logging

from django.conf import settings
from django.db import connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def check_database():
    """
    Check database connection.

    Returns:
        bool: True if database is accessible
    """
    try:
        connection.ensure_connection()
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    checks = {"database": check_database()}
    all_ok = all(checks.values())

    return Response(
        {
            "success": all_ok,
            "message": "Server is running" if all_ok else "Server is degraded",
            "timestamp": timezone.now().isoformat(),
            "environment": settings.ENVIRONMENT,
            "checks": checks,
        },
        status=status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_info(request):
    return Response(
        {
            "success": True,
            "message": "InsightMart API",
            "version": settings.SPECTACULAR_SETTINGS["VERSION"],
            "endpoints": {
                "auth": "/api/auth",
                "products": "/api/products",
                "orders": "/api/orders",
                "cart": "/api/cart",
                "reviews": "/api/reviews",
                "analytics": "/api/analytics",
                "docs": "/api/docs",
            },
        }
    )
