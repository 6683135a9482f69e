from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated

from infrastructure.container import container
from marketplace.api.responses import invalid_id_response, parse_id, service_response, validation_error_response
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    ReviewListResponseSerializer,
    ReviewResponseSerializer,
    SuccessResponseSerializer,
)
from marketplace.catalog.api.serializers.review_serializers import ReviewCreateSerializer, ReviewSerializer
from marketplace.permissions import IsCustomerUser
from marketplace.services import ReviewService


class ReviewViewSet(viewsets.ViewSet):
    """
    ``GET reviews/<id>`` lists a product's reviews and is public;
    ``DELETE reviews/<id>`` removes the caller's own review.
    """

    permission_classes = [IsAuthenticated, IsCustomerUser]

    def get_service(self) -> ReviewService:
        return container.review_service()

    def get_permissions(self):
        if self.action == "list":
            return [AllowAny()]
        return super().get_permissions()

    def get_authenticators(self):
        if getattr(self.request, "method", None) == "GET":
            return []
        return super().get_authenticators()

    @extend_schema(
        operation_id="reviews_list",
        summary="List a product's reviews",
        responses={200: ReviewListResponseSerializer},
        tags=["Marketplace - Reviews"],
    )
    def list(self, request, pk=None):
        product_id = parse_id(pk)
        if product_id is None:
            return invalid_id_response()

        result = self.get_service().list_reviews(product_id)
        return service_response(result, lambda reviews: {"reviews": ReviewSerializer(reviews, many=True).data})

    @extend_schema(
        operation_id="reviews_create",
        summary="Review a product",
        description="One review per customer and product; the product's rating is recomputed.",
        request=ReviewCreateSerializer,
        responses={
            201: ReviewResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid rating"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Already reviewed"),
        },
        tags=["Marketplace - Reviews"],
    )
    def create(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().create_review(
            request.user,
            serializer.validated_data["product_id"],
            serializer.validated_data["rating"],
            serializer.validated_data["comment"],
        )
        return service_response(
            result, lambda review: {"review": ReviewSerializer(review).data}, status.HTTP_201_CREATED
        )

    @extend_schema(
        operation_id="reviews_destroy",
        summary="Delete my review",
        responses={
            200: SuccessResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Review not found"),
        },
        tags=["Marketplace - Reviews"],
    )
    def destroy(self, request, pk=None):
        review_id = parse_id(pk)
        if review_id is None:
            return invalid_id_response("review")

        result = self.get_service().delete_review(request.user, review_id)
        return service_response(result, lambda _: {"message": "Review deleted"})
