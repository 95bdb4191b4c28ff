"""FastAPI routes for the Ordering domain: carts, checkout and orders."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.api.dependencies import optional_user, require_user
from identity.user.user import User
from ordering.api.dependencies import active_product
from ordering.api.schemas import (
    AddToCartRequest,
    CartLineSchema,
    CartResponse,
    CheckoutRequest,
    CreateOrderRequest,
    DeliveryInfoSchema,
    OrderResponse,
    OrderStatsResponse,
    SetAdminNotesRequest,
    SetStatusRequest,
    UpdateCartQuantityRequest,
)
from ordering.cart.cart import Cart
from ordering.cart.management import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity, load_cart
from ordering.order import lifecycle
from ordering.order.lifecycle import CreateOrder, PlaceOrder, SetAdminNotes, SetOrderStatus
from ordering.order.order import Order
from shared.api import require_admin


def _line_schema(line) -> CartLineSchema:
    return CartLineSchema(
        product_id=line.product_id,
        name=line.name,
        unit_price=line.unit_price,
        image=line.image or "",
        quantity=line.quantity,
    )


def _cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        cart_id=cart.id,
        lines=[_line_schema(line) for line in cart.lines],
        item_count=cart.item_count,
        subtotal=cart.subtotal,
        updated_at=cart.updated_at,
    )


def _order_response(order: Order) -> OrderResponse:
    info = order.delivery_info
    return OrderResponse(
        id=order.id,
        sequence=order.sequence,
        customer_id=order.customer_id,
        items=[_line_schema(item) for item in order.items],
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        total=order.total,
        status=order.status,
        date=order.date,
        delivery_info=DeliveryInfoSchema(
            full_name=info.full_name,
            phone=info.phone,
            address=info.address,
            city=info.city,
            zip_code=info.zip_code,
            special_instructions=info.special_instructions,
        ),
        admin_notes=order.admin_notes,
        version=order.version,
        updated_at=order.updated_at,
    )


def _process(command):
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return _cart_response(load_cart(cart_id))


@cart_router.post("/{cart_id}/items", response_model=CartResponse)
async def add_to_cart(cart_id: str, body: AddToCartRequest) -> CartResponse:
    product = active_product(body.product_id)
    command = AddToCart(
        cart_id=cart_id,
        product_id=product.id,
        name=product.name,
        unit_price=product.price,
        image=product.image,
    )
    return _cart_response(_process(command))


@cart_router.put("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_quantity(cart_id: str, product_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    command = UpdateCartQuantity(cart_id=cart_id, product_id=product_id, quantity=body.quantity)
    return _cart_response(_process(command))


@cart_router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(cart_id: str, product_id: str) -> CartResponse:
    return _cart_response(_process(RemoveFromCart(cart_id=cart_id, product_id=product_id)))


@cart_router.delete("/{cart_id}", response_model=CartResponse)
async def clear_cart(cart_id: str) -> CartResponse:
    return _cart_response(_process(ClearCart(cart_id=cart_id)))


@cart_router.post("/{cart_id}/checkout", status_code=201, response_model=OrderResponse)
async def checkout(cart_id: str, body: CheckoutRequest, user: User | None = Depends(optional_user)) -> OrderResponse:
    command = PlaceOrder(
        cart_id=cart_id,
        customer_id=user.id if user else None,
        delivery_info=body.delivery_info.model_dump(),
    )
    return _order_response(_process(command))


# ---------------------------------------------------------------------------
# Customer Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(user: User = Depends(require_user)):
    return [_order_response(order) for order in lifecycle.list_orders(customer_id=user.id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def my_order(order_id: str, user: User = Depends(require_user)) -> OrderResponse:
    order = lifecycle.get_order(order_id)
    if order.customer_id != user.id:
        raise ObjectNotFoundError("Order not found")
    return _order_response(order)


# ---------------------------------------------------------------------------
# Admin Order Router
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"], dependencies=[Depends(require_admin)])


@admin_order_router.get("", response_model=list[OrderResponse])
async def list_orders(search: str | None = None, status: str | None = None):
    return [_order_response(order) for order in lifecycle.list_orders(search=search, status=status)]


@admin_order_router.get("/stats", response_model=OrderStatsResponse)
async def order_stats() -> OrderStatsResponse:
    return OrderStatsResponse(**lifecycle.order_stats())


@admin_order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(lifecycle.get_order(order_id))


@admin_order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    command = CreateOrder(
        items=[item.model_dump() for item in body.items],
        delivery_info=body.delivery_info.model_dump(),
        customer_id=body.customer_id,
    )
    return _order_response(_process(command))


@admin_order_router.put("/{order_id}/status", response_model=OrderResponse)
async def set_order_status(order_id: str, body: SetStatusRequest) -> OrderResponse:
    command = SetOrderStatus(order_id=order_id, status=body.status, expected_version=body.expected_version)
    return _order_response(_process(command))


@admin_order_router.put("/{order_id}/notes", response_model=OrderResponse)
async def set_order_notes(order_id: str, body: SetAdminNotesRequest) -> OrderResponse:
    command = SetAdminNotes(order_id=order_id, admin_notes=body.admin_notes, expected_version=body.expected_version)
    return _order_response(_process(command))
