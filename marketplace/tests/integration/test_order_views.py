from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import CartItem, Order, OrderItem
from marketplace.services.base import ErrorCodes, service_err
from marketplace.tests.factories import CartFactory, CartItemFactory, CustomerFactory, ProductFactory, SellerFactory


class OrderViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.customer = CustomerFactory()
        self.seller = SellerFactory()

        self.product = ProductFactory(
            owner=self.seller, name="Studio Monitor", stock=1, price=Decimal("100"), discount=Decimal("10")
        )
        self.other_product = ProductFactory(owner=self.seller, stock=10, price=Decimal("20.00"))

        # Cart holds something unrelated to the order
        self.cart = CartFactory(user=self.customer)
        CartItemFactory(cart=self.cart, product=self.other_product, quantity=2)

        self.create_url = reverse("marketplace:order-create")
        self.list_url = reverse("marketplace:order-my-orders")

    def test_requires_authentication(self):
        response = self.client.post(self.create_url, {"products": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_seller_cannot_order(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(
            self.create_url, {"products": [{"product": str(self.product.id), "quantity": 1}]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Order.objects.count(), 0)

    def test_create_order_success(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(
            self.create_url, {"products": [{"product": str(self.product.id), "quantity": 1}]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        order = response.data["order"]
        self.assertEqual(order["totalAmount"], Decimal("90.00"))
        self.assertEqual(order["user"], str(self.customer.id))
        self.assertEqual(order["products"][0]["quantity"], 1)
        self.assertEqual(order["products"][0]["product"]["name"], "Studio Monitor")
        self.assertEqual(OrderItem.objects.count(), 1)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)
        self.assertEqual(CartItem.objects.filter(cart=self.cart).count(), 0)

    def test_second_order_is_out_of_stock(self):
        self.client.force_authenticate(user=self.customer)
        payload = {"products": [{"product": str(self.product.id), "quantity": 1}]}
        self.client.post(self.create_url, payload, format="json")

        response = self.client.post(self.create_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"success": False, "message": 'Product "Studio Monitor" is out of stock'})
        self.assertEqual(Order.objects.count(), 1)

    def test_insufficient_stock_keeps_cart(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(
            self.create_url, {"products": [{"product": str(self.other_product.id), "quantity": 11}]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Available: 10, Requested: 11", response.data["message"])
        self.assertEqual(CartItem.objects.filter(cart=self.cart).count(), 1)
        self.other_product.refresh_from_db()
        self.assertEqual(self.other_product.stock, 10)

    def test_repeated_lines_cannot_oversell(self):
        self.client.force_authenticate(user=self.customer)
        line = {"product": str(self.product.id), "quantity": 1}

        response = self.client.post(self.create_url, {"products": [line, line]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Available: 1, Requested: 2", response.data["message"])
        self.assertEqual(Order.objects.count(), 0)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 1)

    def test_failed_stock_update_reports_the_saved_order(self):
        self.client.force_authenticate(user=self.customer)

        with patch(
            "marketplace.services.inventory_service.InventoryService.decrement_stock",
            return_value=service_err(ErrorCodes.INTERNAL_ERROR, "db down"),
        ):
            response = self.client.post(
                self.create_url, {"products": [{"product": str(self.product.id), "quantity": 1}]}, format="json"
            )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        order = Order.objects.get()
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["orderId"], str(order.id))
        self.assertIn("was created but stock update failed", response.data["message"])
        self.assertNotIn("db down", response.data["message"])

    def test_empty_order(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(self.create_url, {"products": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "No products given")

    def test_missing_products_key(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(self.create_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "No products given")

    def test_non_positive_quantity_is_rejected_at_the_boundary(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(
            self.create_url, {"products": [{"product": str(self.other_product.id), "quantity": 0}]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Order.objects.count(), 0)

    def test_unknown_product(self):
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(
            self.create_url,
            {"products": [{"product": "00000000-0000-0000-0000-000000000000", "quantity": 1}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Product not found")

    def test_my_orders_lists_only_own_orders_with_products(self):
        self.client.force_authenticate(user=self.customer)
        self.client.post(
            self.create_url, {"products": [{"product": str(self.other_product.id), "quantity": 2}]}, format="json"
        )
        stranger = CustomerFactory()
        self.client.force_authenticate(user=stranger)
        self.client.post(
            self.create_url, {"products": [{"product": str(self.other_product.id), "quantity": 1}]}, format="json"
        )

        self.client.force_authenticate(user=self.customer)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["orders"]), 1)
        order = response.data["orders"][0]
        self.assertEqual(order["totalAmount"], Decimal("40.00"))
        self.assertEqual(order["products"][0]["product"]["id"], str(self.other_product.id))

    def test_order_survives_product_deletion(self):
        self.client.force_authenticate(user=self.customer)
        self.client.post(
            self.create_url, {"products": [{"product": str(self.other_product.id), "quantity": 1}]}, format="json"
        )
        self.other_product.delete()

        response = self.client.get(self.list_url)

        self.assertEqual(response.data["orders"][0]["products"][0]["product"], None)
