from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container  # For DI
from marketplace.api.responses import service_response, validation_error_response
from marketplace.api.serializers import CartResponseSerializer, ErrorResponseSerializer
from marketplace.cart.api.serializers.cart_serializers import (
    AddToCartSerializer,
    CartSerializer,
    RemoveFromCartSerializer,
    UpdateCartItemSerializer,
)
from marketplace.permissions import IsCustomerUser
from marketplace.services import CartService


def render_cart(cart):
    return {"cart": CartSerializer(cart).data if cart is not None else None}


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated, IsCustomerUser]

    def get_service(self) -> CartService:
        # Inject CartService via DI container
        return container.cart_service()

    @extend_schema(
        operation_id="cart_get",
        summary="Get my shopping cart",
        description="""
        **What it receives:**
        - Authentication token (header)

        **What it returns:**
        - Cart lines with product details, in the order they were added
        - `cart: null` when nothing was ever added
        """,
        responses={
            200: OpenApiResponse(response=CartResponseSerializer, description="Cart retrieved successfully"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Internal server error"),
        },
        tags=["Marketplace - Cart"],
    )
    def my_cart(self, request):
        result = self.get_service().get_cart(request.user)
        return service_response(result, render_cart)

    @extend_schema(
        operation_id="cart_add",
        summary="Add a product to the cart",
        description="Adding a product already in the cart increases that line's quantity.",
        request=AddToCartSerializer,
        responses={
            200: CartResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid input"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def add(self, request):
        serializer = AddToCartSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().add_to_cart(
            request.user,
            serializer.validated_data["product_id"],
            serializer.validated_data["quantity"],
        )
        return service_response(result, render_cart)

    @extend_schema(
        operation_id="cart_update",
        summary="Set the quantity of a cart line",
        request=UpdateCartItemSerializer,
        responses={
            200: CartResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Quantity must be positive"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart or line not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def update_item(self, request):
        serializer = UpdateCartItemSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().update_quantity(
            request.user,
            serializer.validated_data["product_id"],
            serializer.validated_data["quantity"],
        )
        return service_response(result, render_cart)

    @extend_schema(
        operation_id="cart_remove",
        summary="Remove a product from the cart",
        request=RemoveFromCartSerializer,
        responses={
            200: CartResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def remove(self, request):
        serializer = RemoveFromCartSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().remove_from_cart(request.user, serializer.validated_data["product_id"])
        return service_response(result, render_cart)
