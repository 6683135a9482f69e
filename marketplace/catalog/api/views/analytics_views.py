from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import service_response
from marketplace.api.serializers import (
    CustomerAnalyticsResponseSerializer,
    ErrorResponseSerializer,
    SellerAnalyticsResponseSerializer,
)
from marketplace.catalog.api.serializers.analytics_serializers import (
    CustomerSummarySerializer,
    SellerAnalyticsSerializer,
)
from marketplace.permissions import IsCustomerUser, IsSellerUser
from marketplace.services import AnalyticsService


class AnalyticsViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, IsSellerUser]

    def get_service(self) -> AnalyticsService:
        return container.analytics_service()

    def get_permissions(self):
        if self.action == "customer":
            return [IsAuthenticated(), IsCustomerUser()]
        return super().get_permissions()

    @extend_schema(
        operation_id="analytics_seller",
        summary="Seller sales dashboard",
        description="""
        **What it returns:**
        - `salesPerProduct`: units sold and revenue at current prices, per product
        - `mostOrdered`: top products by units sold
        - `orderCount`: distinct orders per UTC day, earliest days first
        - `categoryBreakdown`: units and revenue per category
        - `summary`: totals across all of the above
        """,
        responses={
            200: SellerAnalyticsResponseSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Seller role required"),
        },
        tags=["Marketplace - Analytics"],
    )
    def seller(self, request):
        result = self.get_service().seller_dashboard(request.user)
        return service_response(result, lambda dashboard: SellerAnalyticsSerializer(dashboard).data)

    @extend_schema(
        operation_id="analytics_customer",
        summary="Customer order summary",
        responses={
            200: CustomerAnalyticsResponseSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Customer role required"),
        },
        tags=["Marketplace - Analytics"],
    )
    def customer(self, request):
        result = self.get_service().customer_summary(request.user)
        return service_response(result, lambda summary: {"summary": CustomerSummarySerializer(summary).data})
