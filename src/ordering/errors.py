"""Ordering error taxonomy.

Not-found errors extend Protean's ObjectNotFoundError and client-input errors
extend ValidationError, so the stock FastAPI exception handlers map them to
4xx responses. Every error carries a ``messages`` dict keyed by field.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class _NotFoundError(ObjectNotFoundError):
    def __init__(self, messages, **kwargs):
        super().__init__(messages, **kwargs)
        self.messages = messages


class CartNotFoundError(_NotFoundError):
    pass


class OrderNotFoundError(_NotFoundError):
    pass


class ItemNotFoundError(_NotFoundError):
    """A cart item mutation targeted a product that is not in the cart."""


class CartEmptyError(ValidationError):
    pass


class ProductNotFoundError(ValidationError):
    pass
