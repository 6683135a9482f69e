from django.contrib.auth import get_user_model
from rest_framework import serializers

from marketplace.catalog.domain.models.interaction import Review

User = get_user_model()


class ReviewAuthorSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = fields


class ReviewSerializer(serializers.ModelSerializer):
    product = serializers.UUIDField(source="product_id", read_only=True)
    user = ReviewAuthorSerializer(source="customer", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Review
        fields = ["id", "product", "user", "rating", "comment", "createdAt"]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    # Range is enforced by ReviewService
    productId = serializers.UUIDField(source="product_id")
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default="")
