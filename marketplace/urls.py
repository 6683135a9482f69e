from django.urls import path

from .views import (
    AnalyticsViewSet,
    CartViewSet,
    OrderViewSet,
    ProductViewSet,
    PublicProductViewSet,
    ReviewViewSet,
)

app_name = "marketplace"

# Routes are declared by hand: paths carry no trailing slash and several
# collections answer to more than one verb.
urlpatterns = [
    # Public catalog (declared before products/<pk>)
    path("products/public", PublicProductViewSet.as_view({"get": "list"}), name="product-public-list"),
    path("products/public/<str:pk>", PublicProductViewSet.as_view({"get": "retrieve"}), name="product-public-detail"),
    # Seller catalog
    path(
        "products",
        ProductViewSet.as_view({"get": "list", "post": "create", "delete": "destroy_category"}),
        name="product-list",
    ),
    path("products/search", ProductViewSet.as_view({"get": "search"}), name="product-search"),
    path("products/filter", ProductViewSet.as_view({"get": "filter"}), name="product-filter"),
    path("products/bulk", ProductViewSet.as_view({"post": "bulk_create"}), name="product-bulk"),
    path(
        "products/<str:pk>",
        ProductViewSet.as_view({"get": "retrieve", "put": "update", "delete": "destroy"}),
        name="product-detail",
    ),
    path(
        "products/<str:pk>/price-discount",
        ProductViewSet.as_view({"patch": "price_discount"}),
        name="product-price-discount",
    ),
    # Orders
    path("orders/create", OrderViewSet.as_view({"post": "create"}), name="order-create"),
    path("orders/my-orders", OrderViewSet.as_view({"get": "my_orders"}), name="order-my-orders"),
    # Cart
    path("cart/add", CartViewSet.as_view({"post": "add"}), name="cart-add"),
    path("cart/my-cart", CartViewSet.as_view({"get": "my_cart"}), name="cart-my-cart"),
    path("cart/update", CartViewSet.as_view({"put": "update_item"}), name="cart-update"),
    path("cart/remove", CartViewSet.as_view({"delete": "remove"}), name="cart-remove"),
    # Reviews
    path("reviews", ReviewViewSet.as_view({"post": "create"}), name="review-create"),
    path("reviews/<str:pk>", ReviewViewSet.as_view({"get": "list", "delete": "destroy"}), name="review-detail"),
    # Analytics
    path("analytics", AnalyticsViewSet.as_view({"get": "seller"}), name="analytics-seller"),
    path("analytics/customer", AnalyticsViewSet.as_view({"get": "customer"}), name="analytics-customer"),
]
