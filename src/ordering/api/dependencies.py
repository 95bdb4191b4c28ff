"""Lookups the Ordering API needs from other domains."""

from protean.exceptions import ObjectNotFoundError

from content import management
from content.document.document import Dessert
from content.domain import content


def active_product(product_id: str) -> Dessert:
    """Return the catalog entry for ``product_id`` if it is on sale."""
    with content.domain_context():
        product = management.get_dessert(product_id)
    if not product.is_active:
        raise ObjectNotFoundError("Product not found")
    return product
