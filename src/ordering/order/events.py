"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A cart was snapshotted into a new, unpaid order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaid:
    """The payment provider confirmed payment for the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    total = Float(required=True)
    paid_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderPaymentFailed:
    """The payment provider reported that payment for the order failed."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    failed_at = DateTime(required=True)
