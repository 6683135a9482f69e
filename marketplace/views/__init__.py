from marketplace.cart.api.views.cart_views import CartViewSet
from marketplace.catalog.api.views.analytics_views import AnalyticsViewSet
from marketplace.catalog.api.views.product_views import ProductViewSet, PublicProductViewSet
from marketplace.catalog.api.views.review_views import ReviewViewSet
from marketplace.ordering.api.views.order_views import OrderViewSet

__all__ = [
    "AnalyticsViewSet",
    "CartViewSet",
    "OrderViewSet",
    "ProductViewSet",
    "PublicProductViewSet",
    "ReviewViewSet",
]
