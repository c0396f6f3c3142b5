"""HTTP mapping for ordering errors.

Protean's stock handlers cover ValidationError and ObjectNotFoundError; the
handlers here pin the status of each ordering error explicitly.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import (
    CartEmptyError,
    CartNotFoundError,
    ItemNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
)

_STATUS_CODES = {
    CartNotFoundError: 404,
    ItemNotFoundError: 404,
    OrderNotFoundError: 404,
    CartEmptyError: 400,
    ProductNotFoundError: 400,
}


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    for exc_class, status_code in _STATUS_CODES.items():

        async def handler(request: Request, exc, status_code=status_code):  # noqa: ARG001
            return JSONResponse(status_code=status_code, content={"error": exc.messages})

        app.add_exception_handler(exc_class, handler)
