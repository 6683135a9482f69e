"""Custom middleware helpers for the InsightMart backend."""

from __future__ import annotations

import logging
import time
from typing import Callable

from utils.logging_utils import mask_value

logger = logging.getLogger(__name__)


class JWTCSRFBypassMiddleware:
    """Skip CSRF enforcement for stateless JWT authenticated requests.

    The API relies on Authorization headers (JWT Bearer tokens), not cookies,
    so Django's ``CsrfViewMiddleware`` is told to skip those requests. Session
    based endpoints such as the admin keep their CSRF protection.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        authorization = request.META.get("HTTP_AUTHORIZATION", "")
        if authorization.lower().startswith("bearer "):
            request._dont_enforce_csrf_checks = True  # type: ignore[attr-defined]
            request.META.setdefault("CSRF_SKIP_REASON", "jwt-bearer")
        return self.get_response(request)


class RequestLoggingMiddleware:
    """Log one line per request: method, path, status, duration and caller."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        start_time = time.time()
        response = self.get_response(request)
        elapsed_ms = (time.time() - start_time) * 1000

        user = getattr(request, "user", None)
        caller = "anonymous"
        if user is not None and getattr(user, "is_authenticated", False):
            caller = mask_value(getattr(user, "email", "") or str(user.pk))

        logger.info(
            f"{request.method} {request.path} -> {response.status_code} " f"in {elapsed_ms:.2f}ms (user={caller})"
        )
        return response
