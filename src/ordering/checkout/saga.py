"""Checkout Saga — turns a cart into an order and a hosted payment session.

The saga spans the local store and the payment provider, so it cannot be one
atomic transaction. Each local step commits in its own unit of work, and a
failed remote step is compensated on the local side.

Flow:
    1. Validate → the cart exists (CartNotFoundError) and has items (CartEmptyError)
    2. PlaceOrder → order persisted before the provider is contacted, so the
       order id can travel as correlation metadata and an early webhook finds
       its row
    3a. Session created → ClearCart → CheckoutResult(order_id, checkout_url)
    3b. PaymentError → DiscardOrder (compensation) → CheckoutResult(order_id, None)
    3c. Any other gateway error → DiscardOrder → error re-raised

Concurrent checkouts of the same cart are serialised, so one cart never
yields two orders. Nothing is retried automatically.
"""

from dataclasses import dataclass

import structlog
from payments.gateway import get_gateway
from payments.gateway.port import PaymentError, PaymentGateway
from protean.utils.globals import current_domain

from ordering.cart.cart import load_cart
from ordering.cart.management import ClearCart
from ordering.checkout.locks import cart_locks
from ordering.errors import CartEmptyError
from ordering.order.order import load_order
from ordering.order.placement import DiscardOrder, PlaceOrder

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a checkout.

    ``checkout_url`` is None when the payment session could not be created;
    the order has then already been discarded.
    """

    order_id: str
    checkout_url: str | None = None


class CheckoutSaga:
    def __init__(self, gateway: PaymentGateway | None = None) -> None:
        self._gateway = gateway

    @property
    def gateway(self) -> PaymentGateway:
        return self._gateway or get_gateway()

    def checkout(self, cart_id, customer_id) -> CheckoutResult:
        with cart_locks.hold(cart_id):
            return self._run(str(cart_id), str(customer_id))

    def _run(self, cart_id: str, customer_id: str) -> CheckoutResult:
        # Step 1: validate
        cart = load_cart(cart_id)
        if cart.is_empty():
            raise CartEmptyError({"cart": [f"Cart {cart_id} is empty"]})

        # Step 2: commit the order
        order_id = current_domain.process(
            PlaceOrder(cart_id=cart_id, customer_id=customer_id),
            asynchronous=False,
        )
        order = load_order(order_id)

        # Step 3: create the remote session
        try:
            session = self.gateway.create_checkout_session(order)
        except PaymentError as exc:
            logger.warning(
                "Checkout session creation failed, discarding order",
                order_id=order_id,
                cart_id=cart_id,
                error=str(exc),
            )
            current_domain.process(DiscardOrder(order_id=order_id), asynchronous=False)
            return CheckoutResult(order_id=order_id)
        except Exception:
            logger.exception(
                "Unexpected gateway failure, discarding order",
                order_id=order_id,
                cart_id=cart_id,
            )
            current_domain.process(DiscardOrder(order_id=order_id), asynchronous=False)
            raise

        current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)

        logger.info(
            "Checkout session created",
            order_id=order_id,
            cart_id=cart_id,
            session_id=session.session_id,
        )
        return CheckoutResult(order_id=order_id, checkout_url=session.checkout_url)
