"""Catalogue maintenance — commands and handler.

Product CRUD belongs to the catalogue collaborator; these commands let it
register products and push price changes into the ordering context.
"""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.product.product import Product, load_product


@ordering.command(part_of="Product")
class RegisterProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)


@ordering.command(part_of="Product")
class ChangeProductPrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)


@ordering.command_handler(part_of=Product)
class CatalogueHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(ChangeProductPrice)
    def change_product_price(self, command):
        product = load_product(command.product_id)
        product.change_price(command.price)
        current_domain.repository_for(Product).add(product)
