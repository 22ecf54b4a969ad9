"""Door controller polling endpoint."""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from sesame.domain.access import AccessCoordinator, DoorSignal
from sesame.domain.grants import StoreUnavailable
from sesame.interfaces.http.deps import get_coordinator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/open-sesame", response_class=PlainTextResponse, summary="Poll whether the door should open")
async def open_sesame(request: Request, coordinator: AccessCoordinator = Depends(get_coordinator)):
    logger.info("Open sesame request received", extra={"agent": request.headers.get("user-agent")})
    try:
        signal = await coordinator.poll_door()
    except StoreUnavailable as exc:
        # the controller only understands 1 and 0
        logger.error("Door poll failed, keeping the door closed", extra={"error": str(exc)})
        signal = DoorSignal.CLOSED
    return PlainTextResponse(signal.value)
