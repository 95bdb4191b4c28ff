"""Application tests for checkout and administrative order management via domain.process()."""

from datetime import timedelta
from uuid import uuid4

import pytest
from ordering.cart.cart import Cart
from ordering.cart.management import AddToCart, UpdateCartQuantity, load_cart
from ordering.order import lifecycle
from ordering.order.lifecycle import CreateOrder, PlaceOrder, SetAdminNotes, SetOrderStatus
from ordering.order.order import Order, OrderStatus
from protean import current_domain
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from shared.exceptions import EmptyCartError, InvalidTransitionError, UnauthenticatedError


def _delivery(**overrides):
    fields = {
        "full_name": "Amina Khan",
        "phone": "(555) 123-4567",
        "address": "42 Saffron Street",
        "city": "Springfield",
        "zip_code": "62701",
    }
    fields.update(overrides)
    return fields


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _add(cart_id, product_id, name, price):
    _process(AddToCart(cart_id=cart_id, product_id=product_id, name=name, unit_price=price))


def _fill_cart(cart_id="c1"):
    """2 x A ($10) + 1 x B ($25) = $45."""
    _add(cart_id, "a", "Traditional Kheer", 10.0)
    _add(cart_id, "a", "Traditional Kheer", 10.0)
    _add(cart_id, "b", "Rose Kulfi", 25.0)


def _checkout(customer_id, cart_id="c1", **delivery):
    return _process(PlaceOrder(cart_id=cart_id, customer_id=customer_id, delivery_info=_delivery(**delivery)))


def _create(name="Amina Khan", phone="(555) 123-4567", item="Traditional Kheer", price=10.0, customer_id=None):
    return _process(
        CreateOrder(
            items=[{"product_id": "a", "name": item, "unit_price": price, "quantity": 1}],
            delivery_info=_delivery(full_name=name, phone=phone),
            customer_id=customer_id,
        )
    )


@pytest.fixture
def customer_id():
    return str(uuid4())


class TestPlaceOrder:
    def test_place_order(self, customer_id):
        _fill_cart()
        order = _checkout(customer_id)

        assert order.status == OrderStatus.PENDING.value
        assert order.customer_id == customer_id
        assert (order.subtotal, order.delivery_fee, order.total) == (45.0, 8.99, 53.99)
        assert [(line.product_id, line.quantity) for line in order.items] == [("a", 2), ("b", 1)]
        assert current_domain.repository_for(Order).get(order.id).total == 53.99

    def test_cart_cleared_after_checkout(self, customer_id):
        _fill_cart()
        _checkout(customer_id)
        assert current_domain.repository_for(Cart).get("c1").is_empty

    def test_free_delivery_at_threshold(self, customer_id):
        _add("c1", "a", "Tray", 25.0)
        _process(UpdateCartQuantity(cart_id="c1", product_id="a", quantity=2))
        order = _checkout(customer_id)
        assert order.delivery_fee == 0
        assert order.total == order.subtotal == 50.0

    def test_fee_follows_domain_configuration(self, customer_id, monkeypatch):
        monkeypatch.setitem(current_domain.config["custom"], "delivery_fee", 5.0)
        _fill_cart()
        assert _checkout(customer_id).delivery_fee == 5.0

    def test_later_cart_changes_do_not_touch_order(self, customer_id):
        _fill_cart()
        order = _checkout(customer_id)
        _add("c1", "a", "Traditional Kheer", 10.0)
        _process(UpdateCartQuantity(cart_id="c1", product_id="a", quantity=9))

        assert [line.quantity for line in lifecycle.get_order(order.id).items] == [2, 1]

    def test_identical_checkouts_create_distinct_orders(self, customer_id):
        _fill_cart()
        first = _checkout(customer_id)
        _fill_cart()
        second = _checkout(customer_id)

        assert first.id != second.id
        assert second.sequence == first.sequence + 1
        assert len(lifecycle.list_orders()) == 2

    def test_signed_out_checkout_creates_nothing(self):
        _fill_cart()
        with pytest.raises(UnauthenticatedError) as exc:
            _checkout(None)
        assert exc.value.args[0] == "Please sign in to place an order"
        assert lifecycle.list_orders() == []
        assert load_cart("c1").item_count == 3

    def test_unauthenticated_checked_before_delivery_and_empty_cart(self):
        with pytest.raises(UnauthenticatedError):
            _process(PlaceOrder(cart_id="empty", customer_id=None, delivery_info={}))

    def test_delivery_checked_before_empty_cart(self, customer_id):
        with pytest.raises(ValidationError) as exc:
            _process(PlaceOrder(cart_id="empty", customer_id=customer_id, delivery_info={}))
        assert not isinstance(exc.value, EmptyCartError)

    def test_invalid_delivery_info(self, customer_id):
        _fill_cart()
        with pytest.raises(ValidationError) as exc:
            _checkout(customer_id, phone="123", city="")
        assert set(exc.value.messages) == {"phone", "city"}
        assert load_cart("c1").item_count == 3

    def test_empty_cart(self, customer_id):
        with pytest.raises(EmptyCartError):
            _checkout(customer_id)
        assert lifecycle.list_orders() == []


class TestCreateOrder:
    def test_admin_order_is_pending_and_priced(self):
        order = _process(
            CreateOrder(
                items=[{"product_id": "a", "name": "Kheer", "unit_price": 30.0, "quantity": 2}],
                delivery_info=_delivery(),
            )
        )
        assert order.status == OrderStatus.PENDING.value
        assert order.customer_id is None
        assert (order.subtotal, order.delivery_fee, order.total) == (60.0, 0.0, 60.0)

    def test_needs_items(self):
        with pytest.raises(ValidationError) as exc:
            _process(CreateOrder(items=[], delivery_info=_delivery()))
        assert "items" in exc.value.messages

    def test_bad_item_rejected(self):
        with pytest.raises(ValidationError):
            _process(
                CreateOrder(
                    items=[{"product_id": "a", "name": "Kheer", "unit_price": 10.0, "quantity": 0}],
                    delivery_info=_delivery(),
                )
            )
        assert lifecycle.list_orders() == []


class TestListOrders:
    def test_newest_first(self):
        first = _create()
        second = _create()
        third = _create()
        assert [order.id for order in lifecycle.list_orders()] == [third.id, second.id, first.id]

    def test_ties_broken_by_sequence(self):
        first = _create()
        second = _create()
        repo = current_domain.repository_for(Order)
        stored = repo.get(second.id)
        stored.date = first.date
        repo.add(stored)

        assert [order.id for order in lifecycle.list_orders()] == [second.id, first.id]

    def test_date_wins_over_sequence(self):
        first = _create()
        second = _create()
        repo = current_domain.repository_for(Order)
        stored = repo.get(first.id)
        stored.date = second.date + timedelta(days=1)
        repo.add(stored)

        assert [order.id for order in lifecycle.list_orders()] == [first.id, second.id]

    def test_search_name_phone_items(self):
        amina = _create(name="Amina Khan", phone="(555) 111-2222", item="Rose Kulfi")
        zara = _create(name="Zara Ali", phone="(555) 999-8888", item="Gulab Jamun")

        assert [o.id for o in lifecycle.list_orders(search="AMINA")] == [amina.id]
        assert [o.id for o in lifecycle.list_orders(search="999")] == [zara.id]
        assert [o.id for o in lifecycle.list_orders(search="kulfi")] == [amina.id]
        assert [o.id for o in lifecycle.list_orders(search=zara.id)] == [zara.id]

    def test_filter_by_status_and_customer(self):
        mine = _create(customer_id="u1")
        other = _create(customer_id="u2")
        _process(SetOrderStatus(order_id=other.id, status="confirmed"))

        assert [o.id for o in lifecycle.list_orders(status="confirmed")] == [other.id]
        assert [o.id for o in lifecycle.list_orders(customer_id="u1")] == [mine.id]
        assert lifecycle.list_orders(customer_id="u1", status="confirmed") == []

    def test_unknown_status_filter(self):
        with pytest.raises(ValidationError):
            lifecycle.list_orders(status="lost")


class TestAdminMutations:
    def test_set_status_persists(self):
        order = _create()
        _process(SetOrderStatus(order_id=order.id, status="delivered"))

        stored = lifecycle.get_order(order.id)
        assert stored.status == OrderStatus.DELIVERED.value
        assert stored.version == 2

    def test_set_status_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            _process(SetOrderStatus(order_id="missing", status="confirmed"))

    def test_rejected_transition_not_persisted(self):
        order = _create()
        _process(SetOrderStatus(order_id=order.id, status="cancelled"))
        with pytest.raises(InvalidTransitionError):
            _process(SetOrderStatus(order_id=order.id, status="confirmed"))
        assert lifecycle.get_order(order.id).status == OrderStatus.CANCELLED.value

    def test_lost_update_prevented(self):
        order = _create()
        _process(SetOrderStatus(order_id=order.id, status="confirmed", expected_version=1))
        with pytest.raises(ExpectedVersionError):
            _process(SetOrderStatus(order_id=order.id, status="cancelled", expected_version=1))
        assert lifecycle.get_order(order.id).status == OrderStatus.CONFIRMED.value

    def test_set_admin_notes(self):
        order = _create()
        _process(SetAdminNotes(order_id=order.id, admin_notes="Call before delivery"))
        _process(SetAdminNotes(order_id=order.id, admin_notes="Leave at the door"))

        stored = lifecycle.get_order(order.id)
        assert stored.admin_notes == "Leave at the door"
        assert stored.version == 3

    def test_set_admin_notes_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            _process(SetAdminNotes(order_id="missing", admin_notes="hello"))


class TestCountByStatus:
    def test_counts_cover_statuses_only(self):
        created = [_create() for _ in range(3)]
        _process(SetOrderStatus(order_id=created[0].id, status="confirmed"))
        _process(SetOrderStatus(order_id=created[1].id, status="cancelled"))

        assert current_domain.repository_for(Order).count_by_status() == {
            "pending": 1,
            "confirmed": 1,
            "preparing": 0,
            "ready": 0,
            "delivered": 0,
            "cancelled": 1,
        }

    def test_total_reported_separately(self):
        created = [_create() for _ in range(3)]
        _process(SetOrderStatus(order_id=created[0].id, status="delivered"))

        stats = lifecycle.order_stats()
        assert "total" not in stats["counts"]
        assert stats["total"] == 3
        assert sum(stats["counts"].values()) == stats["total"]

    def test_empty(self):
        counts = current_domain.repository_for(Order).count_by_status()
        assert set(counts) == {status.value for status in OrderStatus}
        assert sum(counts.values()) == 0
