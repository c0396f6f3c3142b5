"""Cart item management — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import MAX_ITEM_QUANTITY, MIN_ITEM_QUANTITY, ShoppingCart, load_cart
from ordering.domain import ordering
from ordering.product.product import load_product


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class UpdateCartItemQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=MIN_ITEM_QUANTITY, max_value=MAX_ITEM_QUANTITY)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        cart = load_cart(command.cart_id)
        product = load_product(command.product_id)
        item = cart.add_item(product_id=str(product.id))
        current_domain.repository_for(ShoppingCart).add(cart)
        return item.quantity

    @handle(UpdateCartItemQuantity)
    def update_item_quantity(self, command):
        cart = load_cart(command.cart_id)
        item = cart.update_item_quantity(
            product_id=command.product_id,
            quantity=command.quantity,
        )
        current_domain.repository_for(ShoppingCart).add(cart)
        return item.quantity

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.cart_id)
        cart.remove_item(product_id=command.product_id)
        current_domain.repository_for(ShoppingCart).add(cart)
