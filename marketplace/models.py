from marketplace.cart.domain.models import Cart, CartItem
from marketplace.catalog.domain.models import Product, Review
from marketplace.ordering.domain.models import Order, OrderItem


__all__ = [
    "Product",
    "Review",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
]
