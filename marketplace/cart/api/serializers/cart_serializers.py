from rest_framework import serializers

from marketplace.cart.domain.models.cart import Cart, CartItem
from marketplace.catalog.api.serializers.product_serializers import ProductSerializer


class CartItemSerializer(serializers.ModelSerializer):
    product = ProductSerializer(read_only=True)
    addedAt = serializers.DateTimeField(source="added_at", read_only=True)

    class Meta:
        model = CartItem
        fields = ["product", "quantity", "addedAt"]
        read_only_fields = fields


class CartSerializer(serializers.ModelSerializer):
    user = serializers.UUIDField(source="user_id", read_only=True)
    items = CartItemSerializer(many=True, read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Cart
        fields = ["id", "user", "items", "updatedAt"]
        read_only_fields = fields


class AddToCartSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    # Non-positive quantities are rejected by CartService, not here
    productId = serializers.UUIDField(source="product_id")
    quantity = serializers.IntegerField()


class RemoveFromCartSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")
