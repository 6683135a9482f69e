from django.contrib import admin

from .models import Cart, CartItem, Order, OrderItem, Product, Review


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    fields = ("customer", "rating", "comment", "created_at")
    readonly_fields = ("customer", "rating", "comment", "created_at")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "sku", "owner", "category", "price", "discount", "stock", "rating", "review_count")
    list_filter = ("category", "created_at")
    search_fields = ("name", "sku", "owner__email")
    readonly_fields = ("rating", "review_count", "created_at", "updated_at")
    inlines = [ReviewInline]

    fieldsets = (
        (None, {"fields": ("name", "sku", "category", "owner")}),
        ("Pricing & Inventory", {"fields": ("price", "discount", "stock")}),
        ("Reviews", {"fields": ("rating", "review_count"), "classes": ("collapse",)}),
        ("History", {"fields": ("monthly_sales", "created_at", "updated_at"), "classes": ("collapse",)}),
    )


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ("added_at",)


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "item_count", "updated_at")
    search_fields = ("user__email",)
    inlines = [CartItemInline]

    def item_count(self, obj):
        return obj.items.count()

    item_count.short_description = "Items"


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "quantity")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "total_amount", "created_at")
    list_filter = ("created_at",)
    search_fields = ("id", "customer__email")
    readonly_fields = ("id", "customer", "total_amount", "created_at")
    date_hierarchy = "created_at"
    inlines = [OrderItemInline]

    def has_change_permission(self, request, obj=None):
        # Orders are append-only
        return False


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("product", "customer", "rating", "created_at")
    list_filter = ("rating", "created_at")
    search_fields = ("product__name", "customer__email", "comment")
    readonly_fields = ("created_at",)
