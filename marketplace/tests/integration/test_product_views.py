import uuid
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Product
from marketplace.tests.factories import CustomerFactory, ProductFactory, SellerFactory


class SellerProductViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory(email="seller@example.com")
        self.other_seller = SellerFactory()
        self.customer = CustomerFactory()

        self.product = ProductFactory(
            owner=self.seller, name="Desk Lamp", sku="LAMP-1", category="home", price=Decimal("25.00")
        )
        self.foreign_product = ProductFactory(owner=self.other_seller, sku="FOREIGN-1")

        self.list_url = reverse("marketplace:product-list")
        self.detail_url = reverse("marketplace:product-detail", kwargs={"pk": self.product.id})

    def test_requires_authentication(self):
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
        self.assertIn("message", response.data)

    def test_customer_is_forbidden(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {"success": False, "message": "Access denied: seller role required"})

    def test_list_only_own_products(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual([p["sku"] for p in response.data["products"]], ["LAMP-1"])

    def test_create_product(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(
            self.list_url,
            {
                "name": "Speaker",
                "sku": "SPK-1",
                "price": "45.00",
                "discount": "10",
                "category": "Audio",
                "stock": 12,
                "monthlySales": [{"month": "Jan", "sales": 4}],
                "rating": 5,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        product = response.data["product"]
        self.assertEqual(product["category"], "audio")
        self.assertEqual(product["owner"], str(self.seller.id))
        self.assertEqual(product["rating"], 0)
        self.assertEqual(product["reviews"], 0)
        self.assertEqual(product["effectivePrice"], Decimal("40.50"))
        self.assertEqual(product["monthlySales"], [{"month": "Jan", "sales": 4}])

    def test_create_missing_fields(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.list_url, {"name": "Speaker"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"], "Missing required fields: name, sku, price, and category are required"
        )

    def test_create_invalid_discount(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(
            self.list_url,
            {"name": "Speaker", "sku": "SPK-1", "price": "45.00", "category": "audio", "discount": "150"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])

    def test_create_duplicate_sku(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(
            self.list_url,
            {"name": "Copy", "sku": "FOREIGN-1", "price": "1.00", "category": "misc"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], 'Product with SKU "FOREIGN-1" already exists')

    def test_bulk_create(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(
            reverse("marketplace:product-bulk"),
            [
                {"name": "A", "sku": "BULK-1", "price": "1.00", "category": "misc"},
                {"name": "B", "sku": "BULK-2", "price": "2.00", "category": "misc"},
            ],
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data["products"]), 2)

    def test_bulk_create_duplicate_creates_nothing(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(
            reverse("marketplace:product-bulk"),
            [
                {"name": "A", "sku": "BULK-1", "price": "1.00", "category": "misc"},
                {"name": "B", "sku": "LAMP-1", "price": "2.00", "category": "misc"},
            ],
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(Product.objects.filter(sku="BULK-1").exists())

    def test_retrieve_own_product(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(self.detail_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["product"]["id"], str(self.product.id))

    def test_retrieve_foreign_product_is_not_found(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(reverse("marketplace:product-detail", kwargs={"pk": self.foreign_product.id}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"success": False, "message": "Product not found"})

    def test_malformed_id(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(reverse("marketplace:product-detail", kwargs={"pk": "not-a-uuid"}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid product ID format")

    def test_update_ignores_derived_fields(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.put(
            self.detail_url, {"name": "Floor Lamp", "stock": 3, "reviews": 99, "rating": 5}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertEqual(self.product.name, "Floor Lamp")
        self.assertEqual(self.product.stock, 3)
        self.assertEqual(self.product.review_count, 0)
        self.assertEqual(self.product.owner, self.seller)

    def test_price_discount(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.patch(
            reverse("marketplace:product-price-discount", kwargs={"pk": self.product.id}),
            {"price": "99.99", "discount": "5"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertEqual(self.product.price, Decimal("99.99"))
        self.assertEqual(self.product.discount, Decimal("5"))

    def test_price_discount_requires_a_value(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.patch(
            reverse("marketplace:product-price-discount", kwargs={"pk": self.product.id}), {}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Price or discount is required")

    def test_delete_product(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.delete(self.detail_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"success": True, "message": "Product deleted"})
        self.assertFalse(Product.objects.filter(id=self.product.id).exists())

    def test_delete_by_category(self):
        ProductFactory(owner=self.seller, category="home")
        ProductFactory(owner=self.other_seller, category="home")
        self.client.force_authenticate(user=self.seller)

        response = self.client.delete(self.list_url, {"category": "Home"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["deletedCount"], 2)
        self.assertEqual(Product.objects.filter(category="home").count(), 1)

    def test_search(self):
        ProductFactory(owner=self.seller, name="Desk Organizer", price=Decimal("500.00"))
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(reverse("marketplace:product-search"), {"name": "desk", "maxPrice": "100"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["sku"] for p in response.data["products"]], ["LAMP-1"])

    def test_filter_paginates(self):
        for _ in range(11):
            ProductFactory(owner=self.seller)
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(reverse("marketplace:product-filter"), {"page": 2, "limit": 5})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["page"], 2)
        self.assertEqual(response.data["totalPages"], 3)
        self.assertEqual(response.data["totalResults"], 12)
        self.assertEqual(len(response.data["products"]), 5)

    def test_filter_rejects_unknown_sort_field(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.get(reverse("marketplace:product-filter"), {"sortBy": "password"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class PublicProductViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.products = [
            ProductFactory(price=Decimal("10.00")),
            ProductFactory(price=Decimal("20.00")),
            ProductFactory(owner=None, price=Decimal("30.00")),
        ]

    def test_public_catalog_needs_no_token(self):
        response = self.client.get(reverse("marketplace:product-public-list"), {"sortBy": "price"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalResults"], 3)
        self.assertEqual(
            [p["price"] for p in response.data["products"]], [Decimal("10.00"), Decimal("20.00"), Decimal("30.00")]
        )

    def test_public_catalog_ignores_bad_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = self.client.get(reverse("marketplace:product-public-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_public_product(self):
        product = self.products[0]

        response = self.client.get(reverse("marketplace:product-public-detail", kwargs={"pk": product.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["product"]["sku"], product.sku)

    def test_public_product_unknown(self):
        response = self.client.get(reverse("marketplace:product-public-detail", kwargs={"pk": uuid.uuid4()}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
