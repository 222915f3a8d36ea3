from fastapi import APIRouter, Depends
from fluxo.auth import require_permission
from fluxo.core.logging import logger
from fluxo.core.roles import Permission
from fluxo.schemas import TicketValidation, TicketValidationRequest
from fluxo.services.ticket_service import validate_ticket

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.post("/validate", response_model=TicketValidation)
async def validate_ticket_endpoint(
    payload: TicketValidationRequest,
    user=Depends(require_permission(Permission.SCAN_TICKETS)),
):
    """Classify a scanned QR code at the door."""
    result = validate_ticket(payload.code)
    logger.info(f"Ticket scan by {user.uid}: {result.status.value}")
    return result
