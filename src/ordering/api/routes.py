"""FastAPI routes for the Ordering domain — carts, checkout and orders.

Domain calls block on locks and on the payment provider, so handlers are plain
``def`` and run in the worker threadpool.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from payments.gateway.port import PaymentError, WebhookSignatureError
from protean.utils.globals import current_domain

from ordering.api.identity import current_customer
from ordering.api.schemas import (
    AddItemToCartRequest,
    CartItemResponse,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    CreateCartRequest,
    OrderItemResponse,
    OrderResponse,
    ProductSummary,
    StatusResponse,
    UpdateCartItemRequest,
)
from ordering.cart.cart import load_cart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartItemQuantity
from ordering.cart.management import ClearCart, CreateCart
from ordering.checkout.saga import CheckoutSaga
from ordering.checkout.webhook import WebhookReconciler
from ordering.errors import OrderNotFoundError
from ordering.order.order import load_order, orders_placed_by
from ordering.product.product import products_by_id


def _cart_item_response(item, product) -> CartItemResponse:
    return CartItemResponse(
        product=ProductSummary(id=str(product.id), name=product.name, price=product.price),
        quantity=item.quantity,
        total_price=round(item.total_price(product.price), 2),
    )


def _cart_response(cart) -> CartResponse:
    products = products_by_id(item.product_id for item in cart.items)
    return CartResponse(
        id=str(cart.id),
        created_at=cart.created_at,
        items=[_cart_item_response(item, products[str(item.product_id)]) for item in cart.items],
        total_price=cart.total_price({pid: product.price for pid, product in products.items()}),
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        status=order.status,
        placed_at=order.placed_at,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                total_price=round(item.total_price(), 2),
            )
            for item in order.items
        ],
        total_price=order.total_price(),
    )


def _item_response(cart_id: str, product_id: str) -> CartItemResponse:
    cart = load_cart(cart_id)
    item = cart.get_item(product_id)
    product = products_by_id([product_id])[str(product_id)]
    return _cart_item_response(item, product)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartResponse)
def create_cart(body: CreateCartRequest | None = None) -> CartResponse:
    session_id = body.session_id if body else None
    cart_id = current_domain.process(CreateCart(session_id=session_id), asynchronous=False)
    return _cart_response(load_cart(cart_id))


@cart_router.get("/{cart_id}", response_model=CartResponse)
def get_cart(cart_id: str) -> CartResponse:
    return _cart_response(load_cart(cart_id))


@cart_router.post("/{cart_id}/items", status_code=201, response_model=CartItemResponse)
def add_cart_item(cart_id: str, body: AddItemToCartRequest) -> CartItemResponse:
    command = AddToCart(cart_id=cart_id, product_id=body.product_id)
    current_domain.process(command, asynchronous=False)
    return _item_response(cart_id, body.product_id)


@cart_router.put("/{cart_id}/items/{product_id}", response_model=CartItemResponse)
def update_cart_item(cart_id: str, product_id: str, body: UpdateCartItemRequest) -> CartItemResponse:
    command = UpdateCartItemQuantity(
        cart_id=cart_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _item_response(cart_id, product_id)


@cart_router.delete("/{cart_id}/items/{product_id}", status_code=204)
def remove_cart_item(cart_id: str, product_id: str) -> Response:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return Response(status_code=204)


@cart_router.delete("/{cart_id}/items", status_code=204)
def clear_cart(cart_id: str) -> Response:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", response_model=CheckoutResponse)
def checkout(body: CheckoutRequest, customer_id: str = Depends(current_customer)) -> CheckoutResponse:
    """Convert a cart into an order and open a hosted payment session.

    A response without ``checkout_url`` means the payment session could not be
    created and the order was rolled back; the cart is left intact.
    """
    result = CheckoutSaga().checkout(cart_id=body.cart_id, customer_id=customer_id)
    return CheckoutResponse(order_id=result.order_id, checkout_url=result.checkout_url)


@checkout_router.post("/webhook", response_model=StatusResponse)
async def payment_webhook(request: Request) -> StatusResponse:
    """Receive a payment provider event."""
    payload = await request.body()
    try:
        result = await run_in_threadpool(WebhookReconciler().handle, payload, request.headers)
    except WebhookSignatureError as exc:
        raise HTTPException(status_code=401, detail="Invalid webhook signature") from exc
    except PaymentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except OrderNotFoundError:
        # Correlation failure is logged by the reconciler; redelivery cannot fix it.
        return StatusResponse(status="unmatched")

    if result is None:
        return StatusResponse(status="ignored")
    return StatusResponse(status="processed")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
def list_orders(customer_id: str = Depends(current_customer)) -> list[OrderResponse]:
    return [_order_response(order) for order in orders_placed_by(customer_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, customer_id: str = Depends(current_customer)) -> OrderResponse:
    order = load_order(order_id)
    if not order.is_placed_by(customer_id):
        raise HTTPException(status_code=403, detail="Access denied")
    return _order_response(order)
