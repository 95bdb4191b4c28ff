"""Order aggregate: an immutable record of a checkout plus its lifecycle status.

State Machine:
    PENDING → CONFIRMED → PREPARING → READY → DELIVERED
    CANCELLED (from any non-terminal state)

An order may skip ahead in the chain (``pending → delivered``) but never moves
backwards, and nothing leaves DELIVERED or CANCELLED. Only ``status`` and
``admin_notes`` change after placement; each change bumps ``version``.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, List, String, Text, ValueObject

from ordering.domain import ordering
from shared.exceptions import InvalidTransitionError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_TERMINAL_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

# State machine transition map: skipping ahead is allowed, moving back is not
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {
        OrderStatus.CONFIRMED,
        OrderStatus.PREPARING,
        OrderStatus.READY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def parse_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(status.value for status in OrderStatus)
        raise ValidationError({"status": [f"Unknown status {value!r}; expected one of {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{10,}$")


@ordering.value_object(part_of="Order")
class OrderItem:
    """A cart line frozen into the order at checkout."""

    product_id: String(required=True, max_length=64)
    name: String(required=True, max_length=200)
    unit_price: Float(required=True, min_value=0)
    image: String(max_length=1000, sanitize=False)
    quantity: Integer(required=True, min_value=1)


@ordering.value_object(part_of="Order")
class DeliveryInfo:
    """Where and to whom an order is delivered, captured at checkout."""

    full_name: String(max_length=200)
    phone: String(max_length=30)
    address: String(max_length=500)
    city: String(max_length=100)
    zip_code: String(max_length=20)
    special_instructions: Text()


def validate_delivery_info(data) -> DeliveryInfo:
    """Build trimmed delivery details, or raise ``ValidationError`` listing every bad field."""
    data = data or {}

    def _field(name):
        return str(data.get(name) or "").strip()

    errors = {}
    if not _field("full_name"):
        errors["full_name"] = ["Please enter your full name"]
    if not _field("phone"):
        errors["phone"] = ["Please enter your phone number"]
    elif not PHONE_PATTERN.match(re.sub(r"\s", "", _field("phone"))):
        errors["phone"] = ["Please enter a valid phone number"]
    if not _field("address"):
        errors["address"] = ["Please enter your delivery address"]
    if not _field("city"):
        errors["city"] = ["Please enter your city"]
    if not _field("zip_code"):
        errors["zip_code"] = ["Please enter your ZIP code"]

    if errors:
        raise ValidationError(errors)

    return DeliveryInfo(
        full_name=_field("full_name"),
        phone=_field("phone"),
        address=_field("address"),
        city=_field("city"),
        zip_code=_field("zip_code"),
        special_instructions=_field("special_instructions") or None,
    )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate(schema_name="orders")
class Order:
    sequence = Integer(required=True, min_value=1)
    customer_id = Identifier()  # Empty for orders recorded by an admin without a customer
    items = List(content_type=ValueObject(OrderItem))
    subtotal = Float(required=True, min_value=0)
    delivery_fee = Float(required=True, min_value=0)
    total = Float(required=True, min_value=0)
    status = String(max_length=20, choices=OrderStatus, default=OrderStatus.PENDING.value)
    date = DateTime(required=True)
    delivery_info = ValueObject(DeliveryInfo)
    admin_notes = Text()
    version = Integer(default=1)
    updated_at = DateTime()

    @invariant.post
    def total_is_subtotal_plus_fee(self):
        if self.total is not None and round(self.subtotal + self.delivery_fee, 2) != round(self.total, 2):
            raise ValidationError({"total": ["Total must equal subtotal plus delivery fee"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, lines, delivery_info, pricing, sequence, customer_id=None):
        """Create a pending order from a snapshot of cart lines.

        ``pricing`` is the ``(subtotal, delivery_fee, total)`` triple.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        subtotal, delivery_fee, total = pricing
        now = datetime.now(UTC)
        return cls(
            sequence=sequence,
            customer_id=customer_id,
            items=[
                OrderItem(
                    product_id=line.product_id,
                    name=line.name,
                    unit_price=line.unit_price,
                    image=line.image or "",
                    quantity=line.quantity,
                )
                for line in lines
            ],
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=total,
            status=OrderStatus.PENDING.value,
            date=now,
            delivery_info=delivery_info,
            version=1,
            updated_at=now,
        )

    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def is_terminal(self) -> bool:
        return self.current_status in _TERMINAL_STATES

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in _VALID_TRANSITIONS[self.current_status]

    def _check_version(self, expected_version):
        if expected_version is not None and expected_version != self.version:
            raise ExpectedVersionError(
                f"Order {self.id} is at version {self.version}, not {expected_version}"
            )

    def _bump(self):
        self.version += 1
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Administrative mutations
    # -------------------------------------------------------------------
    def set_status(self, new_status, expected_version=None):
        """Move the order to ``new_status``.

        Setting the current status again changes nothing and returns False.
        """
        new_status = parse_status(new_status)
        self._check_version(expected_version)

        if new_status == self.current_status:
            return False

        if not self.can_transition_to(new_status):
            raise InvalidTransitionError(f"Cannot transition from {self.status} to {new_status.value}")

        self.status = new_status.value
        self._bump()
        return True

    def set_admin_notes(self, text, expected_version=None):
        self._check_version(expected_version)
        self.admin_notes = text
        self._bump()

    def matches(self, search: str) -> bool:
        """Case-insensitive match against id, customer name, phone and item names."""
        needle = search.strip().lower()
        if not needle:
            return True
        haystack = [self.id, self.delivery_info.full_name or "", self.delivery_info.phone or ""]
        haystack.extend(item.name for item in self.items)
        return any(needle in value.lower() for value in haystack)
