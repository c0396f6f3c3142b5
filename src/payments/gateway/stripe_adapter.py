"""Stripe payment gateway adapter.

Uses the stripe-python SDK to:
- Create hosted Checkout Sessions, one line item per order item
- Verify webhook signatures using Stripe's signing secret

The order id travels as ``order_id`` metadata on both the Checkout Session and
its PaymentIntent, so ``payment_intent.*`` events correlate back to the order.
"""

import json

import stripe
import structlog

from payments.gateway.events import result_for
from payments.gateway.port import (
    CheckoutSession,
    PaymentError,
    PaymentGateway,
    WebhookSignatureError,
    header_value,
)

logger = structlog.get_logger(__name__)

SIGNATURE_HEADER = "stripe-signature"
DEFAULT_TIMEOUT_SECONDS = 10.0


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(
        self,
        api_key: str,
        webhook_secret: str,
        website_url: str,
        currency: str = "usd",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.website_url = website_url.rstrip("/")
        self.currency = currency
        self.timeout = timeout

        # Bounded wait on the only network call of the saga; no SDK retries.
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)
        stripe.max_network_retries = 0

    def create_checkout_session(self, order) -> CheckoutSession:
        order_id = str(order.id)
        metadata = {"order_id": order_id}

        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                success_url=f"{self.website_url}/checkout-success?orderId={order_id}",
                cancel_url=f"{self.website_url}/checkout-cancel",
                line_items=[self._line_item(item) for item in order.items],
                metadata=metadata,
                payment_intent_data={"metadata": metadata},
            )
        except stripe.StripeError as exc:
            logger.warning(
                "Stripe checkout session creation failed",
                order_id=order_id,
                error=str(exc),
            )
            raise PaymentError(f"Could not create checkout session: {exc}") from exc

        return CheckoutSession(session_id=session["id"], checkout_url=session["url"])

    def parse_webhook_event(self, payload, headers):
        signature = header_value(headers, SIGNATURE_HEADER)
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureError("Invalid Stripe-Signature") from exc
        except ValueError as exc:
            raise PaymentError("Could not deserialize Stripe event") from exc

        # The SDK event object is not a mapping; read the verified body as plain JSON.
        try:
            event = json.loads(payload)
            event_type, data_object = event["type"], event["data"]["object"]
        except (ValueError, KeyError, TypeError) as exc:
            raise PaymentError("Malformed Stripe event") from exc

        return result_for(event_type, data_object)

    def _line_item(self, item) -> dict:
        return {
            "quantity": item.quantity,
            "price_data": {
                "currency": self.currency,
                "unit_amount": int(round(item.unit_price * 100)),
                "product_data": {"name": item.product_name},
            },
        }
