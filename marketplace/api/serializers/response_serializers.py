"""
Response Serializers for Marketplace API Documentation

These serializers describe the ``{"success": ..., ...}`` envelopes for OpenAPI
schema generation. They are NOT used for validation or rendering, only for
documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from marketplace.cart.api.serializers.cart_serializers import CartSerializer
from marketplace.catalog.api.serializers.analytics_serializers import (
    CategorySalesSerializer,
    CustomerSummarySerializer,
    DailyOrderCountSerializer,
    ProductSalesSerializer,
    SellerSummarySerializer,
)
from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.catalog.api.serializers.review_serializers import ReviewSerializer
from marketplace.ordering.api.serializers.order_serializers import OrderSerializer

# ===== Common Response Serializers =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    success = serializers.BooleanField(default=False)
    message = serializers.CharField(help_text="Human-readable error message")


class SuccessResponseSerializer(serializers.Serializer):
    """Generic success response"""

    success = serializers.BooleanField(default=True)
    message = serializers.CharField(help_text="Success message")


# ===== Product Response Serializers =====


class ProductResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    product = ProductSerializer()


class ProductListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    products = ProductSerializer(many=True)


class ProductPageResponseSerializer(serializers.Serializer):
    """Paginated product list response"""

    success = serializers.BooleanField(default=True)
    page = serializers.IntegerField(help_text="Current page number")
    totalPages = serializers.IntegerField(help_text="Total number of pages")
    totalResults = serializers.IntegerField(help_text="Total number of matching products")
    products = ProductSerializer(many=True)


class DeletedCountResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    deletedCount = serializers.IntegerField(help_text="Number of products deleted")


# ===== Cart Response Serializers =====


class CartResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    cart = CartSerializer(allow_null=True, help_text="Null when the customer has never added anything")


# ===== Order Response Serializers =====


class OrderResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    order = OrderSerializer()


class OrderListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    orders = OrderSerializer(many=True)


# ===== Review Response Serializers =====


class ReviewResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    review = ReviewSerializer()


class ReviewListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    reviews = ReviewSerializer(many=True)


# ===== Analytics Response Serializers =====


class SellerAnalyticsResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    salesPerProduct = ProductSalesSerializer(many=True)
    mostOrdered = ProductSalesSerializer(many=True)
    orderCount = DailyOrderCountSerializer(many=True)
    categoryBreakdown = CategorySalesSerializer(many=True)
    summary = SellerSummarySerializer()


class CustomerAnalyticsResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    summary = CustomerSummarySerializer()
