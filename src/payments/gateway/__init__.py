"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing (default)
- StripeGateway for production, selected with PAYMENT_GATEWAY=stripe
"""

import os

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import PaymentGateway
from payments.gateway.stripe_adapter import DEFAULT_TIMEOUT_SECONDS, StripeGateway

_current_gateway: PaymentGateway | None = None


def _gateway_from_env() -> PaymentGateway:
    website_url = os.environ.get("WEBSITE_URL", "http://localhost:8000")
    if os.environ.get("PAYMENT_GATEWAY", "fake").lower() != "stripe":
        return FakeGateway(website_url=website_url)

    return StripeGateway(
        api_key=os.environ["STRIPE_SECRET_KEY"],
        webhook_secret=os.environ["STRIPE_WEBHOOK_SECRET"],
        website_url=website_url,
        timeout=float(os.environ.get("PAYMENT_GATEWAY_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
    )


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _gateway_from_env()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
