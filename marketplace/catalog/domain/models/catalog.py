import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

User = get_user_model()


def normalize_category(value) -> str:
    return (value or "").strip().lower()


class Product(models.Model):
    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    sku = models.CharField(max_length=100, unique=True)
    category = models.CharField(max_length=100)

    # Seller; null marks a legacy product visible to every seller
    owner = models.ForeignKey(User, on_delete=models.CASCADE, null=True, blank=True, related_name="products")

    # Pricing and Inventory
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Percent off the list price",
    )
    # No database check: concurrent orders may drive this below zero
    stock = models.IntegerField(default=0)

    # Derived from reviews, written only by ReviewMetricsService
    rating = models.FloatField(default=0)
    review_count = models.PositiveIntegerField(default=0)

    # Seller maintained history: [{"month": "Jan", "sales": 10}, ...]
    monthly_sales = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["owner", "-created_at"], name="marketplace_owner_i_3b1f0c_idx"),  # Seller products
            models.Index(fields=["category"], name="marketplace_categor_8d2e4a_idx"),
            models.Index(fields=["price"], name="marketplace_price_5c7a91_idx"),
        ]

    @property
    def effective_price(self) -> Decimal:
        """``price * (1 - discount/100)``, unrounded."""
        return self.price * (Decimal("1") - (self.discount or Decimal("0")) / Decimal("100"))

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        self.sku = (self.sku or "").strip()
        self.category = normalize_category(self.category)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.sku})"
