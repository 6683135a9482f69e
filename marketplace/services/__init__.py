"""
Marketplace Service Layer

This package contains all business logic for the marketplace app.

Services:
- CatalogService: Product CRUD, search and filtering
- CartService: Shopping cart operations
- OrderService: Order placement and history
- InventoryService: Stock checks and decrements
- PricingService: Effective prices and order totals
- ReviewService: Review create, delete and listing
- ReviewMetricsService: Derived rating fields on products
- AnalyticsService: Seller dashboard and customer rollups

Usage:
    from marketplace.services import OrderService

    result = OrderService().place_order(user, [{"product": product_id, "quantity": 1}])

    if result.ok:
        order = result.value
    else:
        error = result.error
"""

from .analytics_service import AnalyticsService
from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .cart_service import CartService
from .catalog_service import CatalogService
from .inventory_service import InventoryService
from .order_service import OrderService
from .pricing_service import PricingService
from .review_metrics_service import ReviewMetricsService
from .review_service import ReviewService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
    # Services
    "AnalyticsService",
    "CatalogService",
    "CartService",
    "InventoryService",
    "OrderService",
    "PricingService",
    "ReviewMetricsService",
    "ReviewService",
]
