"""Cart management — commands and handler.

Handles cart creation and clearing. Clearing is also the final step of a
successful checkout.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart, load_cart
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class CreateCart:
    """Create a new, empty shopping cart."""

    session_id = String(max_length=255)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    """Remove every item from a cart, keeping the cart itself."""

    cart_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = ShoppingCart.create(session_id=command.session_id)
        current_domain.repository_for(ShoppingCart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)
