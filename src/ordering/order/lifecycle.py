"""Order lifecycle: checkout, admin-recorded orders, status and notes changes.

Commands are processed synchronously; each handler runs in its own unit of
work, so placing an order and emptying the cart commit together.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Dict, Identifier, Integer, List, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart, CartLine
from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus, parse_status, validate_delivery_info
from ordering.order.pricing import price_lines
from shared.exceptions import EmptyCartError, UnauthenticatedError
from shared.logging import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@ordering.command(part_of="Order")
class PlaceOrder:
    """Check out a cart on behalf of a signed-in customer."""

    cart_id: String(required=True, max_length=255)
    customer_id: Identifier()
    delivery_info: Dict()


@ordering.command(part_of="Order")
class CreateOrder:
    """Record an order on a customer's behalf from an admin screen."""

    items: List(content_type=Dict())
    delivery_info: Dict()
    customer_id: Identifier()


@ordering.command(part_of="Order")
class SetOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)
    expected_version: Integer()


@ordering.command(part_of="Order")
class SetAdminNotes:
    order_id: Identifier(required=True)
    admin_notes: Text()
    expected_version: Integer()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------
@ordering.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        order = self.get_or_none(order_id)
        if order is None:
            raise ObjectNotFoundError("Order not found")
        return order

    def next_sequence(self) -> int:
        latest = self.query.order_by("-sequence").limit(1).all().first
        return (latest.sequence if latest else 0) + 1

    def list_orders(self, customer_id=None, search=None, status=None) -> list[Order]:
        """Orders matching every given filter, newest first."""
        query = self.query.limit(None).order_by(["-date", "-sequence"])
        if customer_id is not None:
            query = query.filter(customer_id=customer_id)
        if status:
            query = query.filter(status=parse_status(status).value)
        orders = query.all().items
        if search:
            orders = [order for order in orders if order.matches(search)]
        return orders

    def count_by_status(self) -> dict[str, int]:
        """Every status mapped to its current count, zero included."""
        return {status.value: self.query.filter(status=status.value).count() for status in OrderStatus}

    def count_all(self) -> int:
        return self.query.count()


def _price(lines):
    custom = current_domain.config["custom"]
    return price_lines(lines, custom["delivery_fee"], custom["free_delivery_threshold"])


def _line_from_dict(item) -> CartLine:
    try:
        return CartLine(**item)
    except (TypeError, ValidationError) as exc:
        messages = exc.messages if isinstance(exc, ValidationError) else {"items": [str(exc)]}
        raise ValidationError(messages) from exc


# ---------------------------------------------------------------------------
# Command Handler
# ---------------------------------------------------------------------------
@ordering.command_handler(part_of=Order)
class OrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        """Turn the cart into a pending order and empty the cart.

        Checked in order: a signed-in customer, complete delivery details,
        a non-empty cart.
        """
        if not command.customer_id:
            raise UnauthenticatedError("Please sign in to place an order")

        delivery_info = validate_delivery_info(command.delivery_info)

        carts = current_domain.repository_for(Cart)
        cart = carts.get_or_none(command.cart_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError()

        orders = current_domain.repository_for(Order)
        lines = list(cart.lines)
        order = Order.place(
            lines,
            delivery_info,
            pricing=_price(lines),
            sequence=orders.next_sequence(),
            customer_id=command.customer_id,
        )
        orders.add(order)

        cart.clear()
        carts.add(cart)

        logger.info(
            "Order placed",
            order_id=order.id,
            cart_id=command.cart_id,
            user_id=command.customer_id,
            total=order.total,
        )
        return order

    @handle(CreateOrder)
    def create_order(self, command):
        """Record an order directly; it always starts pending."""
        lines = [_line_from_dict(item) for item in command.items or []]
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        orders = current_domain.repository_for(Order)
        order = Order.place(
            lines,
            validate_delivery_info(command.delivery_info),
            pricing=_price(lines),
            sequence=orders.next_sequence(),
            customer_id=command.customer_id,
        )
        orders.add(order)
        logger.info("Order created by admin", order_id=order.id, total=order.total)
        return order

    @handle(SetOrderStatus)
    def set_status(self, command):
        orders = current_domain.repository_for(Order)
        order = orders.get_order(command.order_id)
        previous = order.status
        if order.set_status(command.status, expected_version=command.expected_version):
            orders.add(order)
            logger.info(
                "Order status changed",
                order_id=order.id,
                from_status=previous,
                to_status=order.status,
                version=order.version,
            )
        return order

    @handle(SetAdminNotes)
    def set_admin_notes(self, command):
        orders = current_domain.repository_for(Order)
        order = orders.get_order(command.order_id)
        order.set_admin_notes(command.admin_notes, expected_version=command.expected_version)
        orders.add(order)
        logger.info("Order notes updated", order_id=order.id, version=order.version)
        return order


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def list_orders(customer_id=None, search=None, status=None) -> list[Order]:
    return current_domain.repository_for(Order).list_orders(customer_id=customer_id, search=search, status=status)


def get_order(order_id) -> Order:
    return current_domain.repository_for(Order).get_order(order_id)


def order_stats() -> dict:
    """Per-status counts and the overall order count, kept apart."""
    orders = current_domain.repository_for(Order)
    return {"counts": orders.count_by_status(), "total": orders.count_all()}
