"""Ordering bounded context — Shopping Cart, Orders and Checkout.

Handles shopping cart management, the checkout saga that converts a cart into
an order and hands it to the payment gateway, and reconciliation of payment
webhooks back onto orders.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging

configure_logging(log_dir="logs", log_file_prefix="storefront")

# Domain Composition Root
ordering = Domain(name="ordering")
