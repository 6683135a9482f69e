# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    CartResponseSerializer,
    CustomerAnalyticsResponseSerializer,
    DeletedCountResponseSerializer,
    ErrorResponseSerializer,
    OrderListResponseSerializer,
    OrderResponseSerializer,
    ProductListResponseSerializer,
    ProductPageResponseSerializer,
    ProductResponseSerializer,
    ReviewListResponseSerializer,
    ReviewResponseSerializer,
    SellerAnalyticsResponseSerializer,
    SuccessResponseSerializer,
)


__all__ = [
    # Response serializers for documentation
    "ErrorResponseSerializer",
    "SuccessResponseSerializer",
    "ProductResponseSerializer",
    "ProductListResponseSerializer",
    "ProductPageResponseSerializer",
    "DeletedCountResponseSerializer",
    "CartResponseSerializer",
    "OrderResponseSerializer",
    "OrderListResponseSerializer",
    "ReviewResponseSerializer",
    "ReviewListResponseSerializer",
    "SellerAnalyticsResponseSerializer",
    "CustomerAnalyticsResponseSerializer",
]
