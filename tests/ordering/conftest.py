import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def register_product():
    """Register a catalogue product and return its id."""
    from ordering.product.catalogue import RegisterProduct
    from protean import current_domain

    def _register(name="Espresso Beans", price=10.00, description=None):
        return current_domain.process(
            RegisterProduct(name=name, price=price, description=description),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def create_cart():
    """Create a cart holding the given {product_id: quantity} lines and return its id."""
    from ordering.cart.items import AddToCart, UpdateCartItemQuantity
    from ordering.cart.management import CreateCart
    from protean import current_domain

    def _create(lines=None):
        cart_id = current_domain.process(CreateCart(), asynchronous=False)
        for product_id, quantity in (lines or {}).items():
            current_domain.process(AddToCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
            if quantity > 1:
                current_domain.process(
                    UpdateCartItemQuantity(cart_id=cart_id, product_id=product_id, quantity=quantity),
                    asynchronous=False,
                )
        return cart_id

    return _create
