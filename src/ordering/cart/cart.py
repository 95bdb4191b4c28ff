"""Shopping cart aggregate.

A cart is an ordered list of lines, unique by product. Each line keeps a copy
of the product's name, price and image taken when the product was first
added, so later catalog edits never change what is already in a cart.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, List, String, ValueObject

from ordering.domain import ordering


@ordering.value_object(part_of="Cart")
class CartLine:
    product_id: String(required=True, max_length=64)
    name: String(required=True, max_length=200)
    unit_price: Float(required=True, min_value=0)
    image: String(max_length=1000, sanitize=False)
    quantity: Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price

    def with_quantity(self, quantity):
        return CartLine(
            product_id=self.product_id,
            name=self.name,
            unit_price=self.unit_price,
            image=self.image,
            quantity=quantity,
        )


@ordering.aggregate(schema_name="carts")
class Cart:
    # ``id`` is the cart key chosen by the client
    lines = List(content_type=ValueObject(CartLine))
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, cart_id):
        if not cart_id:
            raise ValidationError({"cart_id": ["Cart key is required"]})
        return cls(id=cart_id, lines=[], updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        return round(sum(line.line_total for line in self.lines), 2)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def _line_for(self, product_id):
        return next((line for line in self.lines if line.product_id == str(product_id)), None)

    def _replace_lines(self, lines):
        # Lines are immutable value objects, so every change assigns a new list
        self.lines = lines
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, unit_price, image=None):
        """Add one unit of a product.

        An existing line is incremented by one; otherwise a new line is
        appended with the product's current name, price and image.
        """
        product_id = str(product_id)
        existing = self._line_for(product_id)
        if existing:
            lines = [
                line.with_quantity(line.quantity + 1) if line.product_id == product_id else line for line in self.lines
            ]
        else:
            lines = [
                *self.lines,
                CartLine(product_id=product_id, name=name, unit_price=unit_price, image=image or "", quantity=1),
            ]
        self._replace_lines(lines)

    def update_quantity(self, product_id, quantity):
        """Set a line's quantity exactly; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        if self._line_for(product_id) is None:
            return
        self._replace_lines(
            [line.with_quantity(quantity) if line.product_id == str(product_id) else line for line in self.lines]
        )

    def remove_item(self, product_id):
        remaining = [line for line in self.lines if line.product_id != str(product_id)]
        if len(remaining) != len(self.lines):
            self._replace_lines(remaining)

    def clear(self):
        self._replace_lines([])
