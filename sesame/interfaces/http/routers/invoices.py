"""Invoice request endpoint."""
import logging

from fastapi import APIRouter, Depends

from sesame.domain.access import AccessCoordinator
from sesame.interfaces.http.deps import get_coordinator
from sesame.interfaces.http.schemas import ErrorResponse, InvoiceResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/invoice",
    response_model=InvoiceResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Request a Lightning invoice that opens the door once paid",
)
async def request_invoice(coordinator: AccessCoordinator = Depends(get_coordinator)):
    logger.info("Invoice request received")
    invoice = await coordinator.request_invoice()
    return InvoiceResponse(invoice=invoice.request)
