"""Mapping of provider event kinds onto payment outcomes.

Only two kinds are meaningful to the order lifecycle; every other kind the
provider sends is accepted and ignored.
"""

from collections.abc import Mapping

from payments.gateway.port import PaymentError, PaymentOutcome, PaymentResult

PAYMENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_FAILED = "payment_intent.payment_failed"

EVENT_OUTCOMES = {
    PAYMENT_SUCCEEDED: PaymentOutcome.PAID,
    PAYMENT_FAILED: PaymentOutcome.FAILED,
}

ORDER_ID_KEY = "order_id"


def result_for(event_type: str | None, data_object: Mapping | None) -> PaymentResult | None:
    """Build a PaymentResult from an event kind and its data object.

    The order id is read from the metadata attached at session creation.
    """
    outcome = EVENT_OUTCOMES.get(event_type or "")
    if outcome is None:
        return None

    metadata = (data_object or {}).get("metadata") or {}
    order_id = metadata.get(ORDER_ID_KEY)
    if not order_id:
        raise PaymentError(f"Event {event_type} carries no {ORDER_ID_KEY} metadata")

    return PaymentResult(order_id=str(order_id), outcome=outcome)
