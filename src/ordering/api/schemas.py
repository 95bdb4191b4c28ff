"""Pydantic request/response schemas for the Ordering API.

These are the external contracts; the aggregates in ``ordering.cart`` and
``ordering.order`` stay free to change shape behind them.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    image: str = ""
    quantity: int = Field(1, ge=1)


class DeliveryInfoSchema(BaseModel):
    full_name: str = Field("", max_length=200)
    phone: str = Field("", max_length=30)
    address: str = Field("", max_length=500)
    city: str = Field("", max_length=100)
    zip_code: str = Field("", max_length=20)
    special_instructions: str | None = Field(None, max_length=1000)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str

    model_config = {"json_schema_extra": {"examples": [{"product_id": "1"}]}}


class UpdateCartQuantityRequest(BaseModel):
    quantity: int

    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}


class CheckoutRequest(BaseModel):
    delivery_info: DeliveryInfoSchema

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "delivery_info": {
                        "full_name": "Amina Khan",
                        "phone": "(555) 123-4567",
                        "address": "42 Saffron Street",
                        "city": "Springfield",
                        "zip_code": "62701",
                        "special_instructions": "Ring the bell twice",
                    }
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    items: list[CartLineSchema]
    delivery_info: DeliveryInfoSchema
    customer_id: str | None = None


class SetStatusRequest(BaseModel):
    status: str
    expected_version: int | None = None

    model_config = {"json_schema_extra": {"examples": [{"status": "confirmed", "expected_version": 1}]}}


class SetAdminNotesRequest(BaseModel):
    admin_notes: str | None = Field(None, max_length=5000)
    expected_version: int | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    cart_id: str
    lines: list[CartLineSchema]
    item_count: int
    subtotal: float
    updated_at: datetime


class OrderStatsResponse(BaseModel):
    counts: dict[str, int]
    total: int


class OrderResponse(BaseModel):
    id: str
    sequence: int
    customer_id: str | None = None
    items: list[CartLineSchema]
    subtotal: float
    delivery_fee: float
    total: float
    status: str
    date: datetime
    delivery_info: DeliveryInfoSchema
    admin_notes: str | None = None
    version: int
    updated_at: datetime
