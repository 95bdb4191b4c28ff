"""Application tests for cart commands via domain.process()."""

from ordering.cart.cart import Cart
from ordering.cart.management import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity, load_cart
from protean import current_domain


def _add(cart_id="guest-1", product_id="1", price=12.99):
    return current_domain.process(
        AddToCart(cart_id=cart_id, product_id=product_id, name=f"Dessert {product_id}", unit_price=price),
        asynchronous=False,
    )


def _stored(cart_id="guest-1"):
    return current_domain.repository_for(Cart).get(cart_id)


class TestCartCommands:
    def test_unknown_cart_is_empty_and_not_persisted(self):
        cart = load_cart("guest-1")
        assert cart.is_empty
        assert current_domain.repository_for(Cart).get_or_none("guest-1") is None

    def test_every_mutation_is_persisted(self):
        _add(product_id="1")
        _add(product_id="1")
        _add(product_id="2", price=5.0)
        assert _stored().item_count == 3

        current_domain.process(UpdateCartQuantity(cart_id="guest-1", product_id="1", quantity=5), asynchronous=False)
        assert _stored().lines[0].quantity == 5

        current_domain.process(RemoveFromCart(cart_id="guest-1", product_id="2"), asynchronous=False)
        assert [line.product_id for line in _stored().lines] == ["1"]

        current_domain.process(ClearCart(cart_id="guest-1"), asynchronous=False)
        assert _stored().is_empty

    def test_handler_returns_the_updated_cart(self):
        cart = _add(price=7.5)
        assert cart.id == "guest-1"
        assert cart.subtotal == 7.5

    def test_reload_restores_the_cart(self):
        _add(product_id="1")
        saved = current_domain.process(
            UpdateCartQuantity(cart_id="guest-1", product_id="1", quantity=3), asynchronous=False
        )

        reloaded = load_cart("guest-1")
        assert [(line.product_id, line.name, line.unit_price, line.quantity) for line in reloaded.lines] == [
            (line.product_id, line.name, line.unit_price, line.quantity) for line in saved.lines
        ]
        assert reloaded.subtotal == saved.subtotal

    def test_carts_are_isolated_by_key(self):
        _add(cart_id="guest-1")
        assert load_cart("guest-2").is_empty
