"""
AnalyticsService - Seller and Customer Rollups

Seller revenue is recomputed at read time from each product's *current*
price and discount times the quantity sold, so it can differ from the sum of
the frozen order totals. Daily order counts are capped at the earliest
``ANALYTICS_ORDER_DAYS_LIMIT`` days that have orders; the cap counts days
present in the data, it is not a rolling window.
"""

import logging
import time
from collections import OrderedDict
from datetime import timezone as dt_timezone
from decimal import Decimal
from typing import Any, Dict

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Count, Max, Min, Sum
from django.db.models.functions import TruncDate

from marketplace.infra.observability.metrics import analytics_duration
from marketplace.models import Order, OrderItem

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .pricing_service import effective_price, quantize_money

User = get_user_model()
logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class AnalyticsService(BaseService):
    """
    Service for dashboard aggregations.
    """

    def __init__(self, order_days_limit: int = None, top_products_limit: int = None):
        super().__init__()
        if order_days_limit is None:
            order_days_limit = getattr(settings, "ANALYTICS_ORDER_DAYS_LIMIT", 30)
        if top_products_limit is None:
            top_products_limit = getattr(settings, "ANALYTICS_TOP_PRODUCTS_LIMIT", 5)
        self.order_days_limit = order_days_limit
        self.top_products_limit = top_products_limit

    @BaseService.log_performance
    def seller_dashboard(self, seller: User) -> ServiceResult[Dict[str, Any]]:
        """
        Aggregate sales of the seller's products across every order.

        Returns:
            ServiceResult with ``sales_per_product``, ``most_ordered``,
            ``order_count``, ``category_breakdown`` and ``summary``. A seller
            without sales gets empty lists and a zero summary.
        """
        start_time = time.time()
        try:
            sales_per_product = self._sales_per_product(seller)

            # sorted() is stable, so equal quantities keep aggregation order
            most_ordered = sorted(sales_per_product, key=lambda row: row["total_quantity"], reverse=True)[
                : self.top_products_limit
            ]

            order_count = self._order_count(seller)
            category_breakdown = self._category_breakdown(sales_per_product)

            summary = {
                "total_revenue": quantize_money(sum((row["total_sales"] for row in sales_per_product), ZERO)),
                "total_units": sum(row["total_quantity"] for row in sales_per_product),
                "total_products_with_sales": len(sales_per_product),
                "total_order_days": len(order_count),
            }

            self.logger.info(
                f"Seller dashboard for {seller.id}: products={summary['total_products_with_sales']}, "
                f"units={summary['total_units']}, revenue={summary['total_revenue']}"
            )

            return service_ok(
                {
                    "sales_per_product": [self._public_row(row) for row in sales_per_product],
                    "most_ordered": [self._public_row(row) for row in most_ordered],
                    "order_count": order_count,
                    "category_breakdown": category_breakdown,
                    "summary": summary,
                }
            )

        except Exception as e:
            self.logger.error(f"Error building seller dashboard for {seller.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
        finally:
            analytics_duration.observe(time.time() - start_time)

    def _sales_per_product(self, seller: User):
        rows = (
            OrderItem.objects.filter(product__owner=seller)
            .values("product_id", "product__name", "product__price", "product__discount", "product__category")
            .annotate(total_quantity=Sum("quantity"), first_line=Min("id"))
            .order_by("first_line")
        )

        result = []
        for row in rows:
            unit_price = effective_price(row["product__price"], row["product__discount"])
            result.append(
                {
                    "product_id": row["product_id"],
                    "name": row["product__name"],
                    "category": row["product__category"],
                    "total_quantity": row["total_quantity"],
                    "total_sales": unit_price * row["total_quantity"],
                }
            )
        return result

    def _order_count(self, seller: User):
        rows = (
            Order.objects.filter(items__product__owner=seller)
            .annotate(day=TruncDate("created_at", tzinfo=dt_timezone.utc))
            .values("day")
            .annotate(count=Count("id", distinct=True))
            .order_by("day")[: self.order_days_limit]
        )
        return [{"date": row["day"].isoformat(), "count": row["count"]} for row in rows]

    def _category_breakdown(self, sales_per_product):
        groups = OrderedDict()
        for row in sales_per_product:
            group = groups.setdefault(
                row["category"], {"category": row["category"], "total_quantity": 0, "total_sales": ZERO}
            )
            group["total_quantity"] += row["total_quantity"]
            group["total_sales"] += row["total_sales"]

        for group in groups.values():
            group["total_sales"] = quantize_money(group["total_sales"])
        return list(groups.values())

    def _public_row(self, row):
        return {
            "product_id": row["product_id"],
            "name": row["name"],
            "total_quantity": row["total_quantity"],
            "total_sales": quantize_money(row["total_sales"]),
        }

    @BaseService.log_performance
    def customer_summary(self, customer: User) -> ServiceResult[Dict[str, Any]]:
        """
        Roll up a customer's own orders.

        ``total_spent`` sums the frozen order totals, not current prices.
        """
        try:
            stats = Order.objects.filter(customer=customer).aggregate(
                total_orders=Count("id"),
                total_spent=Sum("total_amount"),
                first_order_at=Min("created_at"),
                last_order_at=Max("created_at"),
            )
            units = OrderItem.objects.filter(order__customer=customer).aggregate(total=Sum("quantity"))["total"]

            return service_ok(
                {
                    "total_orders": stats["total_orders"],
                    "total_spent": quantize_money(stats["total_spent"] or ZERO),
                    "total_units": units or 0,
                    "first_order_at": stats["first_order_at"],
                    "last_order_at": stats["last_order_at"],
                }
            )

        except Exception as e:
            self.logger.error(f"Error building customer summary for {customer.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
