"""Order aggregate — a priced snapshot of a cart taken at checkout.

Items and their unit prices are frozen when the order is created; later
catalogue price changes never reach a placed order. Only the payment status
moves after creation.

State Machine:
    UNPAID → PAID
    UNPAID → FAILED
    PAID and FAILED are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import CartEmptyError, OrderNotFoundError
from ordering.order.events import OrderPaid, OrderPaymentFailed, OrderPlaced


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class PaymentStatus(Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    PaymentStatus.UNPAID: {PaymentStatus.PAID, PaymentStatus.FAILED},
    PaymentStatus.PAID: set(),  # Terminal
    PaymentStatus.FAILED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order with the product price frozen at checkout time."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    def total_price(self) -> float:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(
        choices=PaymentStatus,
        default=PaymentStatus.UNPAID.value,
    )
    items = HasMany(OrderItem)
    placed_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create_from_cart(cls, cart, customer_id, products):
        """Snapshot a non-empty cart into a new unpaid order.

        Args:
            cart: The ShoppingCart being checked out.
            customer_id: Identity of the customer placing the order.
            products: Mapping of product id (str) to the current Product.
        """
        if cart.is_empty():
            raise CartEmptyError({"cart": ["Cannot create an order from an empty cart"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            status=PaymentStatus.UNPAID.value,
            placed_at=now,
            updated_at=now,
        )
        for cart_item in cart.items:
            product = products[str(cart_item.product_id)]
            order.add_items(
                OrderItem(
                    product_id=str(cart_item.product_id),
                    product_name=product.name,
                    unit_price=product.price,
                    quantity=cart_item.quantity,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=len(order.items),
                total=order.total_price(),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def total_price(self) -> float:
        return round(sum(item.total_price() for item in self.items), 2)

    def is_placed_by(self, customer_id) -> bool:
        return str(self.customer_id) == str(customer_id)

    def is_settled(self) -> bool:
        return not _VALID_TRANSITIONS[PaymentStatus(self.status)]

    # -------------------------------------------------------------------
    # Payment lifecycle
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: PaymentStatus) -> None:
        current = PaymentStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def record_payment(self, status: PaymentStatus) -> None:
        """Record the provider-reported payment outcome."""
        self._assert_can_transition(status)
        now = datetime.now(UTC)
        self.status = status.value
        self.updated_at = now

        if status == PaymentStatus.PAID:
            self.raise_(
                OrderPaid(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    total=self.total_price(),
                    paid_at=now,
                )
            )
        else:
            self.raise_(
                OrderPaymentFailed(
                    order_id=str(self.id),
                    customer_id=str(self.customer_id),
                    failed_at=now,
                )
            )


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFoundError({"order_id": [f"Order {order_id} not found"]}) from None


def orders_placed_by(customer_id) -> list[Order]:
    """All orders of a customer, oldest first.

    Each order is reloaded through the repository so its items come with it,
    which costs one lookup per order. That is fine for the in-memory provider
    and short histories; a database provider would want a single joined query.
    """
    repo = current_domain.repository_for(Order)
    records = repo._dao.query.filter(customer_id=str(customer_id)).all().items
    orders = [repo.get(record.id) for record in records]
    return sorted(orders, key=lambda order: order.placed_at)
