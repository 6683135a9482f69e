"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from django.test import TestCase, override_settings

from infrastructure.container import ServiceContainer, container
from marketplace.services import (
    AnalyticsService,
    CartService,
    CatalogService,
    InventoryService,
    OrderService,
    PricingService,
    ReviewService,
)


class ServiceContainerTest(TestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        """Set up test fixtures."""
        # Reset container before each test
        container.reset()

    def tearDown(self):
        container.reset()

    def test_container_is_singleton(self):
        """Test that ServiceContainer is a singleton."""
        container1 = ServiceContainer()
        container2 = ServiceContainer()

        self.assertIs(container1, container2)
        self.assertIs(container1, container)

    def test_services_are_cached(self):
        for getter, service_class in [
            (container.catalog_service, CatalogService),
            (container.cart_service, CartService),
            (container.inventory_service, InventoryService),
            (container.pricing_service, PricingService),
            (container.analytics_service, AnalyticsService),
        ]:
            service = getter()
            self.assertIsInstance(service, service_class)
            self.assertIs(service, getter())

    def test_order_service_shares_collaborators(self):
        order_service = container.order_service()

        self.assertIsInstance(order_service, OrderService)
        self.assertIs(order_service.cart_service, container.cart_service())
        self.assertIs(order_service.inventory_service, container.inventory_service())
        self.assertIs(order_service.pricing_service, container.pricing_service())

    def test_review_service_shares_metrics_service(self):
        review_service = container.review_service()

        self.assertIsInstance(review_service, ReviewService)
        self.assertIs(review_service.review_metrics_service, container.review_metrics_service())

    @override_settings(ANALYTICS_ORDER_DAYS_LIMIT=7, ANALYTICS_TOP_PRODUCTS_LIMIT=3)
    def test_reset_picks_up_new_settings(self):
        container.reset()

        analytics = container.analytics_service()

        self.assertEqual(analytics.order_days_limit, 7)
        self.assertEqual(analytics.top_products_limit, 3)

    def test_reset_clears_cache(self):
        before = container.catalog_service()

        container.reset()

        self.assertIsNot(before, container.catalog_service())
