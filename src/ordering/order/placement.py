"""Order placement — commands and handler.

PlaceOrder snapshots a cart into a durable order; DiscardOrder deletes an
order whose checkout session could not be created.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import load_cart
from ordering.domain import ordering
from ordering.errors import CartEmptyError
from ordering.order.order import Order, OrderItem, load_order
from ordering.product.product import products_by_id

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@ordering.command(part_of="Order")
class DiscardOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class OrderPlacementHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = load_cart(command.cart_id)
        if cart.is_empty():
            raise CartEmptyError({"cart": [f"Cart {command.cart_id} is empty"]})

        products = products_by_id(item.product_id for item in cart.items)
        order = Order.create_from_cart(cart, command.customer_id, products)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            cart_id=str(command.cart_id),
            customer_id=str(command.customer_id),
            total=order.total_price(),
        )
        return str(order.id)

    @handle(DiscardOrder)
    def discard_order(self, command):
        order = load_order(command.order_id)
        # Child rows are not cascaded by the DAO.
        item_dao = current_domain.repository_for(OrderItem)._dao
        for item in list(order.items):
            item_dao.delete(item)
        current_domain.repository_for(Order)._dao.delete(order)
        logger.info("Order discarded", order_id=str(command.order_id))
