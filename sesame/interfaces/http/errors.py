"""Mapping of domain errors to HTTP responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sesame.domain.access import InvoiceAlreadyPending, InvoiceCreationFailed
from sesame.domain.grants import StoreUnavailable

logger = logging.getLogger(__name__)


async def invoice_already_pending_handler(request: Request, exc: InvoiceAlreadyPending) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


async def invoice_creation_failed_handler(request: Request, exc: InvoiceCreationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to create invoice"},
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("Storage unavailable", extra={"error": str(exc)})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Storage unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvoiceAlreadyPending, invoice_already_pending_handler)
    app.add_exception_handler(InvoiceCreationFailed, invoice_creation_failed_handler)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
