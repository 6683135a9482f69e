import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest

from marketplace.models import CartItem, Order, OrderItem
from marketplace.services import CartService, InventoryService, OrderService, PricingService
from marketplace.services.base import ErrorCodes, service_err
from marketplace.tests.factories import CartFactory, CartItemFactory, CustomerFactory, ProductFactory


@pytest.mark.unit
@pytest.mark.django_db
class TestOrderServicePlacement:
    def setup_method(self):
        self.service = OrderService()
        self.customer = CustomerFactory()

    def test_discounted_single_unit_order_then_out_of_stock(self):
        product = ProductFactory(name="Noise Cancelling Headphones", stock=1, price=Decimal("100"), discount=10)

        first = self.service.place_order(self.customer, [{"product": product.id, "quantity": 1}])

        assert first.ok
        assert first.value.total_amount == Decimal("90.00")
        product.refresh_from_db()
        assert product.stock == 0

        second = self.service.place_order(self.customer, [{"product": product.id, "quantity": 1}])

        assert not second.ok
        assert second.error == ErrorCodes.OUT_OF_STOCK
        assert "Noise Cancelling Headphones" in second.error_detail
        assert Order.objects.count() == 1

    def test_successful_order_decrements_each_line_exactly(self):
        first = ProductFactory(stock=10, price=Decimal("10.00"))
        second = ProductFactory(stock=5, price=Decimal("20.00"))

        result = self.service.place_order(
            self.customer,
            [{"product": first.id, "quantity": 3}, {"product": second.id, "quantity": 5}],
        )

        assert result.ok
        assert result.value.total_amount == Decimal("130.00")
        first.refresh_from_db()
        second.refresh_from_db()
        assert first.stock == 7
        assert second.stock == 0
        assert OrderItem.objects.filter(order=result.value).count() == 2

    def test_order_lines_are_stored_as_requested(self):
        product = ProductFactory(stock=10)

        result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 4}])

        line = result.value.items.get()
        assert line.product_id == product.id
        assert line.quantity == 4

    def test_insufficient_stock_leaves_stock_and_cart_unchanged(self):
        product = ProductFactory(stock=2, name="Desk Lamp")
        cart = CartFactory(user=self.customer)
        CartItemFactory(cart=cart, product=product, quantity=1)

        result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 5}])

        assert result.error == ErrorCodes.INSUFFICIENT_STOCK
        assert "Available: 2" in result.error_detail
        product.refresh_from_db()
        assert product.stock == 2
        assert CartItem.objects.filter(cart=cart).count() == 1
        assert Order.objects.count() == 0

    def test_later_line_failure_aborts_before_any_write(self):
        in_stock = ProductFactory(stock=10)
        sold_out = ProductFactory(stock=0)

        result = self.service.place_order(
            self.customer,
            [{"product": in_stock.id, "quantity": 1}, {"product": sold_out.id, "quantity": 1}],
        )

        assert result.error == ErrorCodes.OUT_OF_STOCK
        in_stock.refresh_from_db()
        assert in_stock.stock == 10
        assert Order.objects.count() == 0

    def test_repeated_lines_are_checked_against_their_combined_quantity(self):
        product = ProductFactory(stock=1, name="Desk Lamp")

        result = self.service.place_order(
            self.customer,
            [{"product": product.id, "quantity": 1}, {"product": product.id, "quantity": 1}],
        )

        assert result.error == ErrorCodes.INSUFFICIENT_STOCK
        assert "Available: 1" in result.error_detail
        product.refresh_from_db()
        assert product.stock == 1
        assert Order.objects.count() == 0

    def test_repeated_lines_within_stock_are_each_stored_and_decremented(self):
        product = ProductFactory(stock=3, price=Decimal("10.00"))

        result = self.service.place_order(
            self.customer,
            [{"product": product.id, "quantity": 1}, {"product": product.id, "quantity": 2}],
        )

        assert result.ok
        assert result.value.total_amount == Decimal("30.00")
        assert result.value.items.count() == 2
        product.refresh_from_db()
        assert product.stock == 0

    def test_empty_line_list_is_rejected(self):
        result = self.service.place_order(self.customer, [])

        assert result.error == ErrorCodes.INVALID_INPUT
        assert result.error_detail == "No products given"

    def test_unknown_product_is_not_found(self):
        result = self.service.place_order(self.customer, [{"product": uuid.uuid4(), "quantity": 1}])

        assert result.error == ErrorCodes.NOT_FOUND
        assert result.error_detail == "Product not found"

    def test_cart_is_emptied_even_when_it_held_other_products(self):
        ordered = ProductFactory(stock=10)
        unrelated = ProductFactory(stock=10)
        cart = CartFactory(user=self.customer)
        CartItemFactory(cart=cart, product=unrelated, quantity=2)

        result = self.service.place_order(self.customer, [{"product": ordered.id, "quantity": 1}])

        assert result.ok
        assert CartItem.objects.filter(cart=cart).count() == 0
        unrelated.refresh_from_db()
        assert unrelated.stock == 10

    def test_order_without_a_cart_succeeds(self):
        product = ProductFactory(stock=3)

        result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 1}])

        assert result.ok

    def test_total_is_frozen_after_price_change(self):
        product = ProductFactory(stock=10, price=Decimal("50.00"))
        result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 2}])

        product.price = Decimal("80.00")
        product.save()

        order = Order.objects.get(id=result.value.id)
        assert order.total_amount == Decimal("100.00")

    def test_list_orders_newest_first_and_scoped(self):
        product = ProductFactory(stock=10)
        first = self.service.place_order(self.customer, [{"product": product.id, "quantity": 1}]).value
        second = self.service.place_order(self.customer, [{"product": product.id, "quantity": 1}]).value
        self.service.place_order(CustomerFactory(), [{"product": product.id, "quantity": 1}])

        result = self.service.list_orders(self.customer)

        assert result.ok
        assert [order.id for order in result.value] == [second.id, first.id]


@pytest.mark.unit
@pytest.mark.django_db
class TestOrderServiceFailureSemantics:
    """
    Steps after the order row is written are not compensated. These tests pin
    that behavior: the order survives a failing stock update or cart clear.
    """

    def setup_method(self):
        self.inventory = InventoryService()
        self.cart_service = CartService()
        self.service = OrderService(
            cart_service=self.cart_service,
            inventory_service=self.inventory,
            pricing_service=PricingService(),
        )
        self.customer = CustomerFactory()

    def test_failed_stock_update_keeps_the_order(self):
        product = ProductFactory(stock=5)

        with patch.object(
            self.inventory, "decrement_stock", return_value=service_err(ErrorCodes.INTERNAL_ERROR, "db down")
        ):
            result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 2}])

        assert result.error == ErrorCodes.INTERNAL_ERROR
        assert result.value == Order.objects.get(customer=self.customer)
        assert str(result.value.id) in result.error_detail
        assert Order.objects.filter(customer=self.customer).count() == 1
        product.refresh_from_db()
        assert product.stock == 5

    def test_failed_cart_clear_keeps_order_and_decrement(self):
        product = ProductFactory(stock=5)
        cart = CartFactory(user=self.customer)
        CartItemFactory(cart=cart, product=product, quantity=2)

        with patch.object(self.cart_service, "clear_cart", side_effect=RuntimeError("db down")):
            result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 2}])

        assert result.error == ErrorCodes.INTERNAL_ERROR
        assert result.value == Order.objects.get(customer=self.customer)
        assert str(result.value.id) in result.error_detail
        assert Order.objects.filter(customer=self.customer).count() == 1
        product.refresh_from_db()
        assert product.stock == 3
        assert CartItem.objects.filter(cart=cart).count() == 1

    def test_check_then_decrement_race_can_drive_stock_negative(self):
        """
        Two placements both pass the stock check against the last unit before
        either decrements. Simulated by running the second placement while the
        first is between its check and its decrement.
        """
        product = ProductFactory(stock=1)
        other_customer = CustomerFactory()
        original_decrement = self.inventory.decrement_stock
        nested = []

        def interleaved_decrement(product_id, quantity):
            if not nested:
                nested.append(True)
                competing = OrderService(inventory_service=InventoryService())
                assert competing.place_order(other_customer, [{"product": product_id, "quantity": 1}]).ok
            return original_decrement(product_id, quantity)

        with patch.object(self.inventory, "decrement_stock", side_effect=interleaved_decrement):
            result = self.service.place_order(self.customer, [{"product": product.id, "quantity": 1}])

        assert result.ok
        assert Order.objects.count() == 2
        product.refresh_from_db()
        assert product.stock == -1
