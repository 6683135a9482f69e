"""
ReviewMetricsService - Review Aggregations

Keeps ``Product.rating`` and ``Product.review_count`` equal to the mean and
count of the product's current reviews. Recomputation is a full aggregate
over the review set and runs synchronously after every create or delete;
nothing is cached.
"""

import logging
from typing import Dict

from django.db.models import Avg, Count

from marketplace.models import Product, Review

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)


class ReviewMetricsService(BaseService):
    """
    Service for recomputing derived review fields on products.
    """

    @BaseService.log_performance
    def recompute_product_rating(self, product_id) -> ServiceResult[Dict]:
        """
        Recompute and persist a product's average rating and review count.

        Returns:
            ServiceResult with ``{"rating": float, "reviews": int}``; a product
            with no reviews gets 0 and 0

        Example:
            >>> result = review_metrics_service.recompute_product_rating(product_id)
            >>> if result.ok:
            ...     print(f"Average: {result.value['rating']:.1f} stars")
        """
        try:
            stats = Review.objects.filter(product_id=product_id).aggregate(avg=Avg("rating"), total=Count("id"))
            rating = float(stats["avg"] or 0)
            total = stats["total"] or 0

            updated = Product.objects.filter(id=product_id).update(rating=rating, review_count=total)
            if not updated:
                return service_err(ErrorCodes.NOT_FOUND, "Product not found")

            self.logger.info(f"Recomputed rating for product {product_id}: rating={rating:.2f}, reviews={total}")
            return service_ok({"rating": rating, "reviews": total})

        except Exception as e:
            self.logger.error(f"Error recomputing rating for product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
