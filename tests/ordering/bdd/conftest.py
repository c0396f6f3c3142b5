"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.items import AddToCart, UpdateCartItemQuantity
from ordering.cart.management import CreateCart
from ordering.checkout.saga import CheckoutSaga
from ordering.order.order import Order
from ordering.product.catalogue import RegisterProduct
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Product name to product id."""
    return {}


@pytest.fixture()
def checkout():
    """Container for the latest checkout result or rejection."""
    return {"result": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:f}'))
def _(catalogue, name, price):
    catalogue[name] = current_domain.process(RegisterProduct(name=name, price=price), asynchronous=False)


@given(parsers.cfparse('a cart with {qty:d} of "{name}"'), target_fixture="cart_id")
def _(catalogue, qty, name):
    cart_id = current_domain.process(CreateCart(), asynchronous=False)
    current_domain.process(AddToCart(cart_id=cart_id, product_id=catalogue[name]), asynchronous=False)
    if qty > 1:
        current_domain.process(
            UpdateCartItemQuantity(cart_id=cart_id, product_id=catalogue[name], quantity=qty),
            asynchronous=False,
        )
    return cart_id


@given(parsers.cfparse('customer "{customer_id}" has checked out the cart'), target_fixture="order_id")
def _(cart_id, customer_id):
    return CheckoutSaga().checkout(cart_id, customer_id).order_id


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def _(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status
