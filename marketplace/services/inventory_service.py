"""
InventoryService - Stock Checks and Decrements

Order placement checks stock and later decrements it in two separate
statements. Nothing locks the row in between, so two concurrent placements
against the last units can both pass the check and drive stock negative.
The decrement itself is an atomic ``F()`` update and never re-checks.
"""

from django.db.models import F

from marketplace.catalog.domain.models.catalog import Product
from marketplace.infra.observability.metrics import stock_check_rejections_total

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class InventoryService(BaseService):
    """
    Service for product stock checks and decrements.
    """

    @BaseService.log_performance
    def check_stock(self, product: Product, quantity: int) -> ServiceResult[bool]:
        """
        Check a requested quantity against the product's current stock.

        Returns:
            ServiceResult with True when enough stock is on hand, otherwise
            ``out_of_stock`` (nothing left) or ``insufficient_stock``
            (some left, fewer than requested)
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_INPUT, "Quantity must be a positive integer")

        if product.stock <= 0:
            stock_check_rejections_total.labels(reason=ErrorCodes.OUT_OF_STOCK).inc()
            return service_err(ErrorCodes.OUT_OF_STOCK, f'Product "{product.name}" is out of stock')

        if product.stock < quantity:
            stock_check_rejections_total.labels(reason=ErrorCodes.INSUFFICIENT_STOCK).inc()
            return service_err(
                ErrorCodes.INSUFFICIENT_STOCK,
                f'Insufficient stock for product "{product.name}". '
                f"Available: {product.stock}, Requested: {quantity}",
            )

        self.logger.debug(
            f"Stock check passed for product {product.id}: requested={quantity}, available={product.stock}"
        )
        return service_ok(True)

    @BaseService.log_performance
    def decrement_stock(self, product_id, quantity: int) -> ServiceResult[int]:
        """
        Subtract ``quantity`` from the product's stock without re-checking it.

        Returns:
            ServiceResult with the number of rows updated (0 when the product
            vanished after the check)
        """
        try:
            updated = Product.objects.filter(id=product_id).update(stock=F("stock") - quantity)
            self.logger.info(f"Stock decremented: product={product_id}, quantity={quantity}, rows={updated}")
            return service_ok(updated)
        except Exception as e:
            self.logger.error(f"Error decrementing stock for product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
