"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = None


class AddItemToCartRequest(BaseModel):
    product_id: str


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1, le=100)


# ---------------------------------------------------------------------------
# Checkout Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    cart_id: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart_id": "5b0f3c1e-2a51-4a5e-9b7e-0b6a4e0c2f11",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductSummary(BaseModel):
    id: str
    name: str
    price: float


class CartItemResponse(BaseModel):
    product: ProductSummary
    quantity: int
    total_price: float


class CartResponse(BaseModel):
    id: str
    created_at: datetime | None = None
    items: list[CartItemResponse] = []
    total_price: float = 0.0


class CheckoutResponse(BaseModel):
    order_id: str
    checkout_url: str | None = None


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    total_price: float


class OrderResponse(BaseModel):
    id: str
    status: str
    placed_at: datetime | None = None
    items: list[OrderItemResponse] = []
    total_price: float


class StatusResponse(BaseModel):
    status: str = "ok"
