"""Configurable fake payment gateway for development and testing.

This adapter simulates a hosted checkout without any external calls.
It can be configured at runtime to succeed or fail, making it useful for:
- Automated tests with predictable outcomes
- Development without real gateway credentials

Webhook payloads use the same JSON shape as Stripe events, and the only
accepted signature is ``test-signature``.
"""

import json
from uuid import uuid4

from payments.gateway.events import result_for
from payments.gateway.port import (
    CheckoutSession,
    PaymentError,
    PaymentGateway,
    WebhookSignatureError,
    header_value,
)

SIGNATURE_HEADER = "x-gateway-signature"
VALID_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, website_url: str = "http://localhost:8000") -> None:
        self.website_url = website_url.rstrip("/")
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(self, order) -> CheckoutSession:
        order_id = str(order.id)
        call = {
            "method": "create_checkout_session",
            "order_id": order_id,
            "line_items": [
                {
                    "name": item.product_name,
                    "unit_price": item.unit_price,
                    "quantity": item.quantity,
                }
                for item in order.items
            ],
            "success_url": f"{self.website_url}/checkout-success?orderId={order_id}",
            "cancel_url": f"{self.website_url}/checkout-cancel",
            "metadata": {"order_id": order_id},
        }
        self.calls.append(call)

        if not self.should_succeed:
            raise PaymentError(self.failure_reason)

        session_id = f"fake_cs_{uuid4().hex[:12]}"
        return CheckoutSession(
            session_id=session_id,
            checkout_url=f"https://checkout.fake/pay/{session_id}",
        )

    def parse_webhook_event(self, payload, headers):
        self.calls.append({"method": "parse_webhook_event"})

        if header_value(headers, SIGNATURE_HEADER) != VALID_SIGNATURE:
            raise WebhookSignatureError("Invalid webhook signature")

        try:
            event = json.loads(payload)
        except (TypeError, ValueError) as exc:
            raise PaymentError("Webhook payload is not valid JSON") from exc
        if not isinstance(event, dict):
            raise PaymentError("Webhook payload is not an event object")

        return result_for(event.get("type"), (event.get("data") or {}).get("object"))
