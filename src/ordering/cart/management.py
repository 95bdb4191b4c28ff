"""Cart management: commands and handler.

Each command loads the cart (or starts an empty one), applies one mutation
and persists the result. Handlers return the updated cart.
"""

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Cart")
class AddToCart:
    """Add one unit of a product, snapshotting its name, price and image."""

    cart_id: String(required=True, max_length=255)
    product_id: String(required=True, max_length=64)
    name: String(required=True, max_length=200)
    unit_price: Float(required=True, min_value=0)
    image: Text(sanitize=False)


@ordering.command(part_of="Cart")
class UpdateCartQuantity:
    cart_id: String(required=True, max_length=255)
    product_id: String(required=True, max_length=64)
    quantity: Integer(required=True)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    cart_id: String(required=True, max_length=255)
    product_id: String(required=True, max_length=64)


@ordering.command(part_of="Cart")
class ClearCart:
    cart_id: String(required=True, max_length=255)


def load_cart(cart_id: str) -> Cart:
    """Return the stored cart, or a fresh empty one (not yet persisted)."""
    return current_domain.repository_for(Cart).get_or_none(cart_id) or Cart.create(cart_id)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.add_item(command.product_id, command.name, command.unit_price, image=command.image)
        current_domain.repository_for(Cart).add(cart)
        logger.debug("Item added to cart", cart_id=command.cart_id, product_id=command.product_id)
        return cart

    @handle(UpdateCartQuantity)
    def update_quantity(self, command):
        cart = load_cart(command.cart_id)
        cart.update_quantity(command.product_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)
        logger.debug(
            "Cart quantity updated", cart_id=command.cart_id, product_id=command.product_id, quantity=command.quantity
        )
        return cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.remove_item(command.product_id)
        current_domain.repository_for(Cart).add(cart)
        logger.debug("Item removed from cart", cart_id=command.cart_id, product_id=command.product_id)
        return cart

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        logger.debug("Cart cleared", cart_id=command.cart_id)
        return cart
