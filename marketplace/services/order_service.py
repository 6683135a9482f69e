"""
OrderService - Order Placement

Turns a list of requested lines into an Order:

1. reject an empty request
2. look up every product and check stock, in submitted order; repeated
   lines for one product are checked against their running total
3. create the order (with its lines) and its frozen total
4. decrement stock for each line, without re-checking
5. clear the customer's cart

A failure in steps 1-2 aborts before anything is written. Steps 3, 4 and 5
are independent writes with no enclosing transaction: if step 4 or 5 fails
the order stays in place and the remaining effects are skipped. The caller
gets ``internal_error`` with the created order as the result value. Nothing
is compensated.
"""

import logging
from collections import defaultdict
from typing import Dict, List

from django.contrib.auth import get_user_model
from django.db import transaction

from marketplace.infra.observability.metrics import order_value, orders_placed_total
from marketplace.models import Order, OrderItem, Product
from utils.tracing import get_tracer

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .cart_service import CartService
from .inventory_service import InventoryService
from .pricing_service import PricingService

User = get_user_model()
logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class OrderService(BaseService):
    """
    Service for placing and listing orders.
    """

    def __init__(
        self,
        cart_service: CartService = None,
        inventory_service: InventoryService = None,
        pricing_service: PricingService = None,
    ):
        """
        Initialize OrderService.

        Args:
            cart_service: Service for cart operations (injected)
            inventory_service: Service for stock checks and decrements (injected)
            pricing_service: Service for price calculations (injected)
        """
        super().__init__()
        self.cart_service = cart_service or CartService()
        self.inventory_service = inventory_service or InventoryService()
        self.pricing_service = pricing_service or PricingService()

    @BaseService.log_performance
    def place_order(self, user: User, lines: List[Dict]) -> ServiceResult[Order]:
        """
        Place an order for ``lines``, each ``{"product": <id>, "quantity": <int>}``.

        Returns:
            ServiceResult with the created Order
        """
        with tracer.start_as_current_span("order_place") as span:
            span.set_attribute("user.id", str(user.id))
            span.set_attribute("order.lines", len(lines or []))

            # Step 1: Reject empty requests
            if not lines:
                orders_placed_total.labels(status="rejected").inc()
                return service_err(ErrorCodes.INVALID_INPUT, "No products given")

            # Step 2: Validate every line before writing anything
            with tracer.start_as_current_span("validate_lines"):
                checked = []
                # Units already claimed by earlier lines of this request, per product
                claimed = defaultdict(int)
                for line in lines:
                    product = Product.objects.filter(id=line["product"]).first()
                    if product is None:
                        orders_placed_total.labels(status="rejected").inc()
                        return service_err(ErrorCodes.NOT_FOUND, "Product not found")

                    claimed[product.id] += line["quantity"]
                    stock_result = self.inventory_service.check_stock(product, claimed[product.id])
                    if not stock_result.ok:
                        orders_placed_total.labels(status="rejected").inc()
                        return stock_result

                    checked.append((product, line["quantity"]))

            with tracer.start_as_current_span("calculate_total"):
                total_result = self.pricing_service.calculate_order_total(checked)
                if not total_result.ok:
                    orders_placed_total.labels(status="failure").inc()
                    return total_result

            # Step 3: Create the order; the order row and its lines land together
            try:
                with tracer.start_as_current_span("save_order"), transaction.atomic():
                    order = Order.objects.create(customer=user, total_amount=total_result.value)
                    OrderItem.objects.bulk_create(
                        [OrderItem(order=order, product=product, quantity=quantity) for product, quantity in checked]
                    )
            except Exception as e:
                self.logger.error(f"Error creating order for user {user.id}: {e}", exc_info=True)
                span.record_exception(e)
                orders_placed_total.labels(status="failure").inc()
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

            span.set_attribute("order.id", str(order.id))
            span.set_attribute("order.total", str(order.total_amount))

            # Steps 4 and 5 are not compensated: the order above survives any failure below
            try:
                with tracer.start_as_current_span("decrement_stock"):
                    for product, quantity in checked:
                        decrement_result = self.inventory_service.decrement_stock(product.id, quantity)
                        if not decrement_result.ok:
                            return self._partial_failure(order, "stock update", decrement_result.error_detail)

                with tracer.start_as_current_span("clear_cart"):
                    clear_result = self.cart_service.clear_cart(user)
                    if not clear_result.ok:
                        return self._partial_failure(order, "cart clear", clear_result.error_detail)
            except Exception as e:
                span.record_exception(e)
                return self._partial_failure(order, "post-create step", str(e))

            orders_placed_total.labels(status="success").inc()
            order_value.observe(float(order.total_amount))

            self.logger.info(
                f"Created order {order.id} for user {user.id}: {len(checked)} lines, total {order.total_amount}"
            )

            return service_ok(order)

    def _partial_failure(self, order: Order, step: str, detail: str) -> ServiceResult:
        self.logger.error(f"Order {order.id} was created but {step} failed and was not rolled back: {detail}")
        orders_placed_total.labels(status="partial").inc()
        # The order travels on the failed result so the caller can report it
        return ServiceResult(
            ok=False,
            value=order,
            error=ErrorCodes.INTERNAL_ERROR,
            error_detail=f"Order {order.id} was created but {step} failed",
        )

    @BaseService.log_performance
    def list_orders(self, user: User) -> ServiceResult[List[Order]]:
        """
        List the user's orders, newest first, with line products populated.

        Example:
            >>> result = order_service.list_orders(user)
            >>> if result.ok:
            ...     orders = result.value
        """
        try:
            orders = list(
                Order.objects.filter(customer=user).prefetch_related("items__product").order_by("-created_at")
            )
            self.logger.info(f"Listed orders for user {user.id}: {len(orders)} total")
            return service_ok(orders)

        except Exception as e:
            self.logger.error(f"Error listing orders for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
