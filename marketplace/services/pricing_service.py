"""
PricingService - Price Calculations

Effective price is ``price * (1 - discount/100)``. Money leaving the service
(order totals, analytics revenue) is rounded to cents, half-up. All
calculations use Decimal.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

from marketplace.catalog.domain.models.catalog import Product

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def effective_price(price, discount) -> Decimal:
    """Unit price after the percentage discount, unrounded."""
    price = Decimal(str(price))
    discount = Decimal(str(discount or 0))
    return price * (Decimal("1") - discount / HUNDRED)


def quantize_money(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)


class PricingService(BaseService):
    """
    Service for calculating prices and totals.

    All methods are stateless so they can be used from any flow.
    """

    @BaseService.log_performance
    def calculate_effective_price(self, product: Product) -> ServiceResult[Decimal]:
        """
        Calculate the discounted unit price for a product.

        Example:
            >>> result = pricing_service.calculate_effective_price(product)
            >>> if result.ok:
            ...     print(f"Price: {result.value}")
        """
        try:
            return service_ok(effective_price(product.price, product.discount))
        except Exception as e:
            self.logger.error(f"Error calculating price for product {product.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def calculate_order_total(self, lines: Iterable[Tuple[Product, int]]) -> ServiceResult[Decimal]:
        """
        Sum ``effective_price * quantity`` over ``(product, quantity)`` pairs.

        The sum is kept exact and rounded once, to cents, at the end.
        """
        try:
            total = sum(
                (effective_price(product.price, product.discount) * quantity for product, quantity in lines),
                Decimal("0"),
            )
            return service_ok(quantize_money(total))
        except Exception as e:
            self.logger.error(f"Error calculating order total: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
