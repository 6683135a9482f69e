"""
Django management command to populate the marketplace with sample data
Usage: python manage.py populate_sample_data
"""

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from infrastructure.container import container
from marketplace.models import Cart, Order, Product, Review

User = get_user_model()

SAMPLE_PASSWORD = "insightmart123"

PRODUCT_CATALOG = [
    ("Wireless Headphones", "audio", Decimal("120.00"), Decimal("10")),
    ("Bluetooth Speaker", "audio", Decimal("45.00"), Decimal("0")),
    ("Studio Microphone", "audio", Decimal("89.90"), Decimal("5")),
    ("Mechanical Keyboard", "computers", Decimal("75.00"), Decimal("0")),
    ("Ergonomic Mouse", "computers", Decimal("29.99"), Decimal("15")),
    ("27in Monitor", "computers", Decimal("249.00"), Decimal("20")),
    ("Running Shoes", "sports", Decimal("95.00"), Decimal("25")),
    ("Yoga Mat", "sports", Decimal("22.50"), Decimal("0")),
    ("Water Bottle", "sports", Decimal("12.00"), Decimal("0")),
    ("Coffee Grinder", "kitchen", Decimal("54.00"), Decimal("10")),
]

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]


class Command(BaseCommand):
    help = "Populate the marketplace with a seller, customers, products, orders and reviews"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete existing products, orders, carts and reviews first",
        )
        parser.add_argument(
            "--customers",
            type=int,
            default=3,
            help="Number of sample customers to create",
        )
        parser.add_argument(
            "--orders",
            type=int,
            default=10,
            help="Number of sample orders to place",
        )
        parser.add_argument("--seed", type=int, default=42, help="Random seed")

    def handle(self, *args, **options):
        rng = random.Random(options["seed"])

        if options["clear"]:
            self.stdout.write("Clearing existing data...")
            Review.objects.all().delete()
            Order.objects.all().delete()
            Cart.objects.all().delete()
            Product.objects.all().delete()
            # Users are kept to preserve auth data

        self.stdout.write("Creating sample data...")

        seller = self.get_or_create_user("seller@insightmart.test", "Sample Seller", User.ROLE_SELLER)
        customers = [
            self.get_or_create_user(f"customer{i}@insightmart.test", f"Customer {i}", User.ROLE_CUSTOMER)
            for i in range(1, options["customers"] + 1)
        ]

        products = self.create_products(seller, rng)
        placed = self.place_orders(customers, products, options["orders"], rng)
        reviews = self.create_reviews(customers, products, rng)

        self.stdout.write(
            self.style.SUCCESS(
                f"Successfully populated database with sample data!\n"
                f"- 1 seller ({seller.email})\n"
                f"- {len(customers)} customers (password: {SAMPLE_PASSWORD})\n"
                f"- {len(products)} products\n"
                f"- {placed} orders\n"
                f"- {reviews} reviews"
            )
        )

    def get_or_create_user(self, email, name, role):
        user = User.objects.filter(email=email).first()
        if user is None:
            user = User.objects.create_user(email=email, password=SAMPLE_PASSWORD, name=name, role=role)
            self.stdout.write(f"  Created {role}: {email}")
        return user

    def create_products(self, seller, rng):
        catalog = container.catalog_service()
        products = []
        for index, (name, category, price, discount) in enumerate(PRODUCT_CATALOG, start=1):
            sku = f"SAMPLE-{index:03d}"
            existing = Product.objects.filter(sku=sku).first()
            if existing is not None:
                products.append(existing)
                continue

            result = catalog.create_product(
                seller,
                {
                    "name": name,
                    "sku": sku,
                    "category": category,
                    "price": price,
                    "discount": discount,
                    "stock": rng.randint(20, 80),
                    "monthly_sales": [{"month": month, "sales": rng.randint(0, 40)} for month in MONTHS],
                },
            )
            if not result.ok:
                raise CommandError(f"Could not create {sku}: {result.error_detail}")
            products.append(result.value)
        return products

    def place_orders(self, customers, products, count, rng):
        if not customers:
            return 0

        orders = container.order_service()
        placed = 0
        for _ in range(count):
            customer = rng.choice(customers)
            picks = rng.sample(products, k=rng.randint(1, 3))
            lines = [{"product": product.id, "quantity": rng.randint(1, 3)} for product in picks]
            result = orders.place_order(customer, lines)
            if result.ok:
                placed += 1
            else:
                self.stdout.write(self.style.WARNING(f"  Skipped order: {result.error_detail}"))
        return placed

    def create_reviews(self, customers, products, rng):
        reviews = container.review_service()
        created = 0
        for customer in customers:
            for product in rng.sample(products, k=min(3, len(products))):
                result = reviews.create_review(customer, product.id, rng.randint(3, 5), "Sample review")
                if result.ok:
                    created += 1
        return created
