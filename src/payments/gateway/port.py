"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and StripeGateway
(production) without changing the checkout saga or the webhook reconciler.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class PaymentError(Exception):
    """The gateway rejected a call, could not be reached, or sent an unreadable event."""


class WebhookSignatureError(PaymentError):
    """A webhook payload failed authenticity verification."""


class PaymentOutcome(Enum):
    PAID = "Paid"
    FAILED = "Failed"


@dataclass(frozen=True)
class CheckoutSession:
    """A remote checkout session the customer is redirected to."""

    session_id: str
    checkout_url: str


@dataclass(frozen=True)
class PaymentResult:
    """Normalized outcome of a verified webhook event."""

    order_id: str
    outcome: PaymentOutcome


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(self, order) -> CheckoutSession:
        """Register a remote checkout session for a persisted order.

        The order id is attached as correlation metadata. Raises
        PaymentError on any provider-side failure.
        """
        ...

    @abstractmethod
    def parse_webhook_event(
        self,
        payload: bytes,
        headers: Mapping[str, str],
    ) -> PaymentResult | None:
        """Verify and normalize a webhook event.

        Raises WebhookSignatureError when the signature does not verify.
        Returns None for event kinds that carry no payment outcome.
        """
        ...


def header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup over any mapping."""
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
