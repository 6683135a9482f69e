"""
ReviewService - Product Review Management

One review per customer and product. Every create and delete is followed by
a rating recomputation through ReviewMetricsService.
"""

import logging
from typing import List

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from marketplace.infra.observability.metrics import review_mutations_total
from marketplace.models import Product, Review

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .review_metrics_service import ReviewMetricsService

User = get_user_model()
logger = logging.getLogger(__name__)

DUPLICATE_REVIEW_MESSAGE = "You already reviewed this product"


class ReviewService(BaseService):
    """
    Service for managing product reviews.

    Dependencies:
    - ReviewMetricsService: To update derived product fields after review changes
    """

    def __init__(self, review_metrics_service: ReviewMetricsService = None):
        """
        Initialize ReviewService.

        Args:
            review_metrics_service: Service for metrics calculations (injected)
        """
        super().__init__()
        self.review_metrics_service = review_metrics_service or ReviewMetricsService()

    @BaseService.log_performance
    def create_review(self, user: User, product_id, rating: int, comment: str = "") -> ServiceResult[Review]:
        """
        Create a new review for a product.

        Validates:
        - Rating is an integer between 1 and 5
        - Product exists
        - User hasn't already reviewed the product
        """
        try:
            if isinstance(rating, bool) or not isinstance(rating, int) or not (1 <= rating <= 5):
                return service_err(ErrorCodes.INVALID_INPUT, "Rating must be an integer between 1 and 5")

            if not Product.objects.filter(id=product_id).exists():
                return service_err(ErrorCodes.NOT_FOUND, "Product not found")

            if Review.objects.filter(customer=user, product_id=product_id).exists():
                return service_err(ErrorCodes.CONFLICT, DUPLICATE_REVIEW_MESSAGE)

            try:
                with transaction.atomic():
                    review = Review.objects.create(
                        customer=user, product_id=product_id, rating=rating, comment=comment or ""
                    )
            except IntegrityError:
                # Lost a race against a concurrent submission by the same customer
                return service_err(ErrorCodes.CONFLICT, DUPLICATE_REVIEW_MESSAGE)

            review_mutations_total.labels(action="create").inc()
            self.logger.info(f"Review {review.id} created by user {user.id} for product {product_id}")

            metrics_result = self.review_metrics_service.recompute_product_rating(product_id)
            if not metrics_result.ok:
                return metrics_result

            return service_ok(review)

        except Exception as e:
            self.logger.error(f"Error creating review for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_review(self, user: User, review_id) -> ServiceResult[None]:
        """
        Delete a review written by ``user``.

        A review that does not exist and one written by someone else both
        report ``not_found``.
        """
        try:
            review = Review.objects.filter(id=review_id, customer=user).first()
            if review is None:
                return service_err(ErrorCodes.NOT_FOUND, "Review not found")

            product_id = review.product_id
            review.delete()

            review_mutations_total.labels(action="delete").inc()
            self.logger.info(f"Review {review_id} deleted by user {user.id}")

            metrics_result = self.review_metrics_service.recompute_product_rating(product_id)
            if not metrics_result.ok:
                return metrics_result

            return service_ok(None)

        except Exception as e:
            self.logger.error(f"Error deleting review {review_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_reviews(self, product_id) -> ServiceResult[List[Review]]:
        """List a product's reviews, newest first, with the author attached."""
        try:
            reviews = list(
                Review.objects.filter(product_id=product_id).select_related("customer").order_by("-created_at")
            )
            return service_ok(reviews)

        except Exception as e:
            self.logger.error(f"Error listing reviews for product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
