"""BDD tests for checkout."""

from ordering.cart.cart import ShoppingCart
from ordering.cart.management import ClearCart
from ordering.checkout.saga import CheckoutSaga
from ordering.errors import CartEmptyError
from ordering.order.order import Order, orders_placed_by
from ordering.product.catalogue import ChangeProductPrice
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the payment provider is unavailable")
def _(fake_gateway):
    fake_gateway.configure(should_succeed=False, failure_reason="Service unavailable")


@given("the cart has been cleared")
def _(cart_id):
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('customer "{customer_id}" checks out the cart'), target_fixture="order_id")
def _(cart_id, customer_id, checkout):
    try:
        checkout["result"] = CheckoutSaga().checkout(cart_id, customer_id)
    except CartEmptyError as exc:
        checkout["exc"] = exc
        return None
    return checkout["result"].order_id


@when(parsers.cfparse('the price of "{name}" changes to {price:f}'))
def _(catalogue, name, price):
    current_domain.process(ChangeProductPrice(product_id=catalogue[name], price=price), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("a checkout url is returned")
def _(checkout):
    assert checkout["result"].checkout_url


@then("no checkout url is returned")
def _(checkout):
    assert checkout["result"].checkout_url is None


@then(parsers.cfparse("the order total is {total:f}"))
def _(order_id, total):
    assert current_domain.repository_for(Order).get(order_id).total_price() == total


@then("the cart is empty")
def _(cart_id):
    assert current_domain.repository_for(ShoppingCart).get(cart_id).is_empty()


@then(parsers.cfparse('the cart holds {qty:d} of "{name}"'))
def _(cart_id, catalogue, qty, name):
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    assert cart.get_item(catalogue[name]).quantity == qty


@then(parsers.cfparse('customer "{customer_id}" has no orders'))
def _(customer_id):
    assert orders_placed_by(customer_id) == []


@then("the checkout is rejected because the cart is empty")
def _(checkout):
    assert isinstance(checkout["exc"], CartEmptyError)
