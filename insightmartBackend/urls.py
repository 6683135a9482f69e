"""
URL configuration for insightmartBackend project.

The REST API lives under ``/api``. Paths carry no trailing slash so that the
single-page client can keep the routes it was built against.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from authentication.api.views import health_views
from marketplace.api.views import prometheus_metrics

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # Utility endpoints
    path("health", health_views.health, name="health"),
    path("api", health_views.api_info, name="api-info"),
    path("metrics", prometheus_metrics.prometheus_metrics, name="metrics"),
    # API endpoints
    path("api/auth/", include("authentication.urls")),
    path("api/", include("marketplace.urls")),
]

handler404 = "utils.exception_handler.json_page_not_found"
handler500 = "utils.exception_handler.json_server_error"
