from decimal import Decimal

from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import Product
from marketplace.services.catalog_service import SORT_FIELDS


class MonthlySalesSerializer(serializers.Serializer):
    month = serializers.CharField(max_length=20)
    sales = serializers.IntegerField(min_value=0)


class ProductSerializer(serializers.ModelSerializer):
    """Product as the API returns it: camelCase keys, derived review fields read-only."""

    reviews = serializers.IntegerField(source="review_count", read_only=True)
    owner = serializers.UUIDField(source="owner_id", read_only=True, allow_null=True)
    effectivePrice = serializers.SerializerMethodField()
    monthlySales = serializers.JSONField(source="monthly_sales", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "sku",
            "category",
            "price",
            "discount",
            "effectivePrice",
            "stock",
            "rating",
            "reviews",
            "owner",
            "monthlySales",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_effectivePrice(self, obj) -> Decimal:
        return obj.effective_price.quantize(Decimal("0.01"))


class ProductWriteSerializer(serializers.Serializer):
    """
    Product fields accepted on create and update.

    Every field is optional here; required fields for creation are checked by
    CatalogService so the missing-fields message stays the same for single and
    bulk creation. ``rating``, ``reviews`` and ``owner`` are never accepted.
    """

    name = serializers.CharField(max_length=200, required=False)
    sku = serializers.CharField(max_length=100, required=False)
    category = serializers.CharField(max_length=100, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False)
    discount = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100"), required=False
    )
    stock = serializers.IntegerField(min_value=0, required=False)
    monthlySales = MonthlySalesSerializer(source="monthly_sales", many=True, required=False)


class PriceDiscountSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False)
    discount = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100"), required=False
    )

    def validate(self, attrs):
        if "price" not in attrs and "discount" not in attrs:
            raise serializers.ValidationError("Price or discount is required")
        return attrs


class DeleteCategorySerializer(serializers.Serializer):
    category = serializers.CharField(max_length=100)


class ProductSearchSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    minPrice = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, source="min_price")
    maxPrice = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, source="max_price")


class ProductFilterSerializer(serializers.Serializer):
    """Query parameters of the paginated filter endpoints."""

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    minPrice = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, source="min_price")
    maxPrice = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, source="max_price")
    minDiscount = serializers.DecimalField(max_digits=5, decimal_places=2, required=False, source="min_discount")
    maxDiscount = serializers.DecimalField(max_digits=5, decimal_places=2, required=False, source="max_discount")
    rating = serializers.FloatField(required=False, min_value=0, max_value=5)
    sortBy = serializers.ChoiceField(choices=sorted(SORT_FIELDS), required=False, source="sort_by")
    sortOrder = serializers.ChoiceField(choices=["asc", "desc"], required=False, source="sort_order")
    page = serializers.IntegerField(min_value=1, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)
