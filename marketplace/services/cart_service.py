"""
CartService - Shopping Cart Operations

One cart per customer, created on the first add. A product appears at most
once per cart; adding it again merges the quantities. Stock is not checked
here, only when an order is placed.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Prefetch

from marketplace.models import Cart, CartItem, Product

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()
logger = logging.getLogger(__name__)


class CartService(BaseService):
    """
    Service for managing shopping cart operations.

    Responsibilities:
    - Get user's cart with products populated
    - Add items (lazily creating the cart)
    - Update and remove lines
    - Clear cart (used by order placement)
    """

    def _load_cart(self, user: User) -> Optional[Cart]:
        items = CartItem.objects.select_related("product").order_by("added_at", "id")
        return Cart.objects.prefetch_related(Prefetch("items", queryset=items)).filter(user=user).first()

    @BaseService.log_performance
    def get_cart(self, user: User) -> ServiceResult[Optional[Cart]]:
        """
        Get user's shopping cart.

        Returns:
            ServiceResult with the Cart, or None when the user never added anything
        """
        try:
            return service_ok(self._load_cart(user))
        except Exception as e:
            self.logger.error(f"Error retrieving cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    @transaction.atomic
    def add_to_cart(self, user: User, product_id, quantity: int = 1) -> ServiceResult[Cart]:
        """
        Add item to cart, merging with an existing line for the same product.

        Example:
            >>> result = cart_service.add_to_cart(user, product_id, quantity=2)
            >>> if result.ok:
            ...     cart = result.value
        """
        try:
            if quantity <= 0:
                return service_err(ErrorCodes.INVALID_INPUT, "Quantity must be a positive integer")

            product = Product.objects.filter(id=product_id).first()
            if product is None:
                return service_err(ErrorCodes.NOT_FOUND, "Product not found")

            cart, _ = Cart.objects.get_or_create(user=user)

            cart_item, created = CartItem.objects.get_or_create(
                cart=cart, product=product, defaults={"quantity": quantity}
            )

            if not created:
                old_quantity = cart_item.quantity
                cart_item.quantity = old_quantity + quantity
                cart_item.save(update_fields=["quantity"])
                self.logger.info(
                    f"Updated cart item for user {user.id}: {product.name} quantity {old_quantity} -> {cart_item.quantity}"
                )
            else:
                self.logger.info(f"Added to cart for user {user.id}: {quantity}x {product.name}")

            cart.save(update_fields=["updated_at"])
            return service_ok(self._load_cart(user))

        except Exception as e:
            self.logger.error(f"Error adding to cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_quantity(self, user: User, product_id, quantity: int) -> ServiceResult[Cart]:
        """
        Set the exact quantity of an existing cart line.

        Non-positive quantities are rejected and leave the line unchanged.
        """
        try:
            if quantity <= 0:
                return service_err(ErrorCodes.INVALID_INPUT, "Quantity must be a positive integer")

            cart = Cart.objects.filter(user=user).first()
            if cart is None:
                return service_err(ErrorCodes.NOT_FOUND, "Cart not found")

            cart_item = CartItem.objects.select_related("product").filter(cart=cart, product_id=product_id).first()
            if cart_item is None:
                return service_err(ErrorCodes.NOT_FOUND, "Item not found in cart")

            old_quantity = cart_item.quantity
            cart_item.quantity = quantity
            cart_item.save(update_fields=["quantity"])

            self.logger.info(
                f"Updated cart quantity for user {user.id}: {cart_item.product.name} {old_quantity} -> {quantity}"
            )

            return service_ok(self._load_cart(user))

        except Exception as e:
            self.logger.error(f"Error updating cart quantity for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def remove_from_cart(self, user: User, product_id) -> ServiceResult[Cart]:
        """
        Remove a product's line from the cart. A missing line is not an error.
        """
        try:
            cart = Cart.objects.filter(user=user).first()
            if cart is None:
                return service_err(ErrorCodes.NOT_FOUND, "Cart not found")

            deleted, _ = CartItem.objects.filter(cart=cart, product_id=product_id).delete()
            self.logger.info(f"Removed product {product_id} from cart for user {user.id}: {deleted} line(s)")

            return service_ok(self._load_cart(user))

        except Exception as e:
            self.logger.error(f"Error removing from cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def clear_cart(self, user: User) -> ServiceResult[int]:
        """
        Clear all items from cart.

        Returns:
            ServiceResult with the number of lines removed (0 when no cart exists)
        """
        try:
            deleted, _ = CartItem.objects.filter(cart__user=user).delete()
            self.logger.info(f"Cleared cart for user {user.id}: {deleted} items removed")
            return service_ok(deleted)

        except Exception as e:
            self.logger.error(f"Error clearing cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
