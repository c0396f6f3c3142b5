"""Order payment — command and handler.

Applies a provider-reported payment outcome to an order. Orders that are
already PAID or FAILED are left untouched: a second delivery of the same
event, or a late one, is a no-op rather than an error.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, PaymentStatus, load_order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class RecordPaymentOutcome:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)  # Paid, Failed


@ordering.command_handler(part_of=Order)
class RecordPaymentHandler:
    @handle(RecordPaymentOutcome)
    def record_payment_outcome(self, command):
        order = load_order(command.order_id)
        status = PaymentStatus(command.status)

        if order.is_settled():
            logger.info(
                "Ignoring payment outcome for settled order",
                order_id=str(order.id),
                current_status=order.status,
                reported_status=status.value,
            )
            return False

        order.record_payment(status)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Payment outcome recorded",
            order_id=str(order.id),
            status=status.value,
        )
        return True
