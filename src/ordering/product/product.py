"""Product catalogue view used for live cart pricing and order snapshots.

Products are maintained by the catalogue collaborator; the ordering context
only needs a name and the current unit price.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import ProductNotFoundError


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price, description=None):
        return cls(
            name=name,
            price=price,
            description=description,
            updated_at=datetime.now(UTC),
        )

    def change_price(self, new_price):
        """Update the live catalogue price. Placed orders keep their frozen price."""
        self.price = new_price
        self.updated_at = datetime.now(UTC)


def load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFoundError({"product_id": [f"Product {product_id} not found"]}) from None


def products_by_id(product_ids) -> dict[str, Product]:
    """Load the current catalogue entries for the given product ids."""
    return {str(product_id): load_product(product_id) for product_id in product_ids}
