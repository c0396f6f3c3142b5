"""Shopping Cart aggregate (CQRS) — a reusable cart that is emptied at checkout.

The cart is a standard CQRS aggregate (not event sourced). It owns its items
outright: adding, removing and clearing are aggregate operations. Items hold
a product reference and a quantity only; prices are read live from the
catalogue whenever a total is needed.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.events import CartCleared, CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from ordering.domain import ordering
from ordering.errors import CartNotFoundError, ItemNotFoundError

MIN_ITEM_QUANTITY = 1
MAX_ITEM_QUANTITY = 100


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=MIN_ITEM_QUANTITY)
    added_at = DateTime()

    def total_price(self, unit_price: float) -> float:
        return unit_price * self.quantity


@ordering.aggregate
class ShoppingCart:
    session_id = String(max_length=255)  # Optional browser session reference
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def is_empty(self) -> bool:
        return not self.items

    def total_price(self, prices) -> float:
        """Sum of live unit price times quantity.

        Args:
            prices: Mapping of product id (str) to current catalogue price.
        """
        return round(sum(item.total_price(prices[str(item.product_id)]) for item in self.items), 2)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id):
        """Add one unit of a product, bumping the existing line if present."""
        existing = self.get_item(product_id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += 1
            item = existing
        else:
            item = CartItem(product_id=product_id, quantity=1, added_at=now)
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, product_id, quantity):
        """Set the quantity of an existing cart item."""
        if quantity is None or not MIN_ITEM_QUANTITY <= quantity <= MAX_ITEM_QUANTITY:
            raise ValidationError(
                {"quantity": [f"Quantity must be between {MIN_ITEM_QUANTITY} and {MAX_ITEM_QUANTITY}"]}
            )

        item = self.get_item(product_id)
        if item is None:
            raise ItemNotFoundError({"product_id": [f"Product {product_id} is not in the cart"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return item

    def remove_item(self, product_id):
        """Remove a product's line from the cart. Absent products are ignored."""
        item = self.get_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Empty the cart. The cart id stays valid for reuse."""
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                items_removed=len(removed),
            )
        )


def load_cart(cart_id) -> ShoppingCart:
    try:
        return current_domain.repository_for(ShoppingCart).get(cart_id)
    except ObjectNotFoundError:
        raise CartNotFoundError({"cart_id": [f"Cart {cart_id} not found"]}) from None
