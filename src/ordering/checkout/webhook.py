"""Webhook reconciliation — applies provider payment events to orders.

Signature failures propagate as PaymentError so the transport can answer with
an error status and the provider redelivers. Verified events are applied under
a per-order lock, so concurrent deliveries for one order settle it exactly
once.
"""

import structlog
from payments.gateway import get_gateway
from payments.gateway.port import PaymentGateway, PaymentOutcome, PaymentResult
from protean.utils.globals import current_domain

from ordering.checkout.locks import order_locks
from ordering.errors import OrderNotFoundError
from ordering.order.order import PaymentStatus
from ordering.order.payment import RecordPaymentOutcome

logger = structlog.get_logger(__name__)

_STATUS_FOR_OUTCOME = {
    PaymentOutcome.PAID: PaymentStatus.PAID,
    PaymentOutcome.FAILED: PaymentStatus.FAILED,
}


class WebhookReconciler:
    def __init__(self, gateway: PaymentGateway | None = None) -> None:
        self._gateway = gateway

    @property
    def gateway(self) -> PaymentGateway:
        return self._gateway or get_gateway()

    def handle(self, payload: bytes, headers) -> PaymentResult | None:
        """Verify, parse and apply one webhook delivery.

        Returns the parsed result, or None for event kinds that carry no
        payment outcome.
        """
        result = self.gateway.parse_webhook_event(payload, headers)
        if result is None:
            return None

        status = _STATUS_FOR_OUTCOME[result.outcome]
        with order_locks.hold(result.order_id):
            try:
                current_domain.process(
                    RecordPaymentOutcome(order_id=result.order_id, status=status.value),
                    asynchronous=False,
                )
            except OrderNotFoundError:
                logger.critical(
                    "Payment event references an unknown order",
                    order_id=result.order_id,
                    outcome=result.outcome.value,
                )
                raise

        return result
