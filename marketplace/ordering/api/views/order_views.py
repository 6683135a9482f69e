import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import error_response, service_response, validation_error_response
from marketplace.api.serializers import ErrorResponseSerializer, OrderListResponseSerializer, OrderResponseSerializer
from marketplace.models import Order
from marketplace.ordering.api.serializers.order_serializers import CreateOrderSerializer, OrderSerializer
from marketplace.permissions import IsCustomerUser
from marketplace.services import OrderService

logger = logging.getLogger(__name__)


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, IsCustomerUser]

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order",
        description="""
        **What it receives:**
        - `products`: list of `{product, quantity}` lines

        **What it does:**
        - Checks every line against current stock before writing anything
        - Saves the order with its total at current effective prices
        - Decrements stock and empties the cart

        **What it returns:**
        - The created order with line products populated
        - 400 when a product is out of stock or has too few units
        - 500 with `orderId` when the order was saved but stock update or cart clear failed
        """,
        request=CreateOrderSerializer,
        responses={
            201: OrderResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid lines or insufficient stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        lines = [dict(line) for line in serializer.validated_data["products"]]
        result = self.get_service().place_order(request.user, lines)

        if result.ok:
            logger.info(f"Order {result.value.id} placed by user {request.user.id}")
        elif result.value is not None:
            # Saved but not completed; the client must learn which order exists
            return error_response(
                result.error, result.error_detail, extra={"orderId": str(result.value.id)}, expose_message=True
            )

        def render(order):
            # Re-read so line products reflect the decremented stock
            order = Order.objects.prefetch_related("items__product").get(id=order.id)
            return {"order": OrderSerializer(order).data}

        return service_response(result, render, status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_my_orders",
        summary="List my orders",
        responses={200: OrderListResponseSerializer},
        tags=["Marketplace - Orders"],
    )
    def my_orders(self, request):
        result = self.get_service().list_orders(request.user)
        return service_response(result, lambda orders: {"orders": OrderSerializer(orders, many=True).data})
