"""Domain tests for the ordering error taxonomy."""

import pytest
from ordering.errors import (
    CartEmptyError,
    CartNotFoundError,
    ItemNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from protean.exceptions import ObjectNotFoundError, ValidationError


class TestNotFoundErrors:
    @pytest.mark.parametrize("exc_class", [CartNotFoundError, OrderNotFoundError, ItemNotFoundError])
    def test_carries_field_messages(self, exc_class):
        exc = exc_class({"id": ["Thing 42 not found"]})

        assert isinstance(exc, ObjectNotFoundError)
        assert exc.messages == {"id": ["Thing 42 not found"]}


class TestClientInputErrors:
    @pytest.mark.parametrize("exc_class", [CartEmptyError, ProductNotFoundError])
    def test_carries_field_messages(self, exc_class):
        exc = exc_class({"cart_id": ["Cart is empty"]})

        assert isinstance(exc, ValidationError)
        assert exc.messages == {"cart_id": ["Cart is empty"]}
