from rest_framework import serializers


class ProductSalesSerializer(serializers.Serializer):
    """Sales of one product across every order"""

    productId = serializers.UUIDField(source="product_id")
    name = serializers.CharField()
    totalQuantity = serializers.IntegerField(source="total_quantity")
    totalSales = serializers.DecimalField(source="total_sales", max_digits=14, decimal_places=2)


class DailyOrderCountSerializer(serializers.Serializer):
    """Distinct orders containing the seller's products on one UTC day"""

    date = serializers.CharField()
    count = serializers.IntegerField()


class CategorySalesSerializer(serializers.Serializer):
    category = serializers.CharField()
    totalQuantity = serializers.IntegerField(source="total_quantity")
    totalSales = serializers.DecimalField(source="total_sales", max_digits=14, decimal_places=2)


class SellerSummarySerializer(serializers.Serializer):
    totalRevenue = serializers.DecimalField(source="total_revenue", max_digits=14, decimal_places=2)
    totalUnits = serializers.IntegerField(source="total_units")
    totalProductsWithSales = serializers.IntegerField(source="total_products_with_sales")
    totalOrderDays = serializers.IntegerField(source="total_order_days")


class SellerAnalyticsSerializer(serializers.Serializer):
    """Main serializer for the seller dashboard"""

    salesPerProduct = ProductSalesSerializer(source="sales_per_product", many=True)
    mostOrdered = ProductSalesSerializer(source="most_ordered", many=True)
    orderCount = DailyOrderCountSerializer(source="order_count", many=True)
    categoryBreakdown = CategorySalesSerializer(source="category_breakdown", many=True)
    summary = SellerSummarySerializer()


class CustomerSummarySerializer(serializers.Serializer):
    totalOrders = serializers.IntegerField(source="total_orders")
    totalSpent = serializers.DecimalField(source="total_spent", max_digits=14, decimal_places=2)
    totalUnits = serializers.IntegerField(source="total_units")
    firstOrderAt = serializers.DateTimeField(source="first_order_at", allow_null=True)
    lastOrderAt = serializers.DateTimeField(source="last_order_at", allow_null=True)
