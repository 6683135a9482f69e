"""
Dependency Injection Container
================================

Simple service locator for the marketplace domain services. Views ask the
container for a service instead of constructing it, so services that depend
on each other share one instance of each collaborator.

Usage:
    from infrastructure.container import container

    order_service = container.order_service()
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for domain services.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._reset_services()
            self._initialized = True
            logger.info("Service container initialized")

    def _reset_services(self):
        self._inventory_service = None
        self._pricing_service = None
        self._cart_service = None
        self._catalog_service = None
        self._review_metrics_service = None
        self._review_service = None
        self._order_service = None
        self._analytics_service = None

    def inventory_service(self):
        """Get InventoryService instance."""
        if self._inventory_service is None:
            from marketplace.services import InventoryService

            self._inventory_service = InventoryService()
            logger.debug("Created InventoryService")
        return self._inventory_service

    def pricing_service(self):
        """Get PricingService instance."""
        if self._pricing_service is None:
            from marketplace.services import PricingService

            self._pricing_service = PricingService()
            logger.debug("Created PricingService")
        return self._pricing_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.services import CartService

            self._cart_service = CartService()
            logger.debug("Created CartService")
        return self._cart_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.services import CatalogService

            self._catalog_service = CatalogService()
            logger.debug("Created CatalogService")
        return self._catalog_service

    def review_metrics_service(self):
        """Get ReviewMetricsService instance."""
        if self._review_metrics_service is None:
            from marketplace.services import ReviewMetricsService

            self._review_metrics_service = ReviewMetricsService()
            logger.debug("Created ReviewMetricsService")
        return self._review_metrics_service

    def review_service(self):
        """Get ReviewService instance."""
        if self._review_service is None:
            from marketplace.services import ReviewService

            self._review_service = ReviewService(review_metrics_service=self.review_metrics_service())
            logger.debug("Created ReviewService")
        return self._review_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.services import OrderService

            self._order_service = OrderService(
                cart_service=self.cart_service(),
                inventory_service=self.inventory_service(),
                pricing_service=self.pricing_service(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def analytics_service(self):
        """Get AnalyticsService instance."""
        if self._analytics_service is None:
            from marketplace.services import AnalyticsService

            self._analytics_service = AnalyticsService()
            logger.debug("Created AnalyticsService")
        return self._analytics_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing, e.g. after overriding analytics settings.
        """
        self._reset_services()
        logger.info("Service container reset")


# Global container instance
container = ServiceContainer()
