from rest_framework import serializers

from marketplace.catalog.api.serializers.product_serializers import ProductSerializer
from marketplace.ordering.domain.models.order import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    # Null once the product has been deleted
    product = ProductSerializer(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = ["product", "quantity"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    user = serializers.UUIDField(source="customer_id", read_only=True)
    products = OrderItemSerializer(source="items", many=True, read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=12, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "user", "products", "totalAmount", "createdAt"]
        read_only_fields = fields


class OrderLineSerializer(serializers.Serializer):
    product = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """
    Order request body. An empty ``products`` list is accepted here and
    rejected by OrderService with "No products given".
    """

    products = OrderLineSerializer(many=True, default=list)
