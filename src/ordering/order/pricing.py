"""Order pricing: subtotal, flat delivery fee below the free-delivery threshold, total."""


def price_lines(lines, delivery_fee: float, free_delivery_threshold: float) -> tuple[float, float, float]:
    """Return ``(subtotal, delivery_fee, total)`` for ``lines``, rounded to cents.

    Delivery is free when the subtotal reaches the threshold, boundary included.
    """
    subtotal = round(sum(line.quantity * line.unit_price for line in lines), 2)
    fee = 0.0 if subtotal >= free_delivery_threshold else round(delivery_fee, 2)
    return subtotal, fee, round(subtotal + fee, 2)
