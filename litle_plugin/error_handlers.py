"""Map lookup and refund failures onto HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from litle_plugin.errors import (
    AmbiguousStateError,
    NoRefundableChargeError,
    NotFoundError,
    PaymentLookupError,
    RefundLimitExceededError,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    NotFoundError: 404,
    AmbiguousStateError: 409,
    RefundLimitExceededError: 422,
    NoRefundableChargeError: 422,
}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PaymentLookupError)
    async def payment_lookup_error_handler(request: Request, exc: PaymentLookupError) -> JSONResponse:
        status_code = STATUS_CODES.get(type(exc), 400)
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception while processing %s %s", request.method, request.url)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
