import uuid

from django.contrib.auth import get_user_model
from django.db import models

from marketplace.catalog.domain.models.catalog import Product

User = get_user_model()


class Order(models.Model):
    """
    Append-only record of a purchase.

    ``total_amount`` is computed once from the prices in force when the order
    was placed and is never recalculated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="orders")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["customer", "-created_at"], name="marketplace_custome_6a0d2b_idx"),
            models.Index(fields=["created_at"], name="marketplace_created_f41e87_idx"),
        ]

    def __str__(self):
        return f"Order {str(self.id)[:8]} by {self.customer.email}"


class OrderItem(models.Model):
    """A requested line, stored as submitted. Prices are not snapshotted per line."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.SET_NULL, null=True, related_name="order_items")
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["id"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.quantity}x {self.product_id} in order {str(self.order_id)[:8]}"
