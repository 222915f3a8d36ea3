"""
Ticket scanning.

No tickets are issued by this service; codes arrive from the external
registration flow. Classification is by substring only, with no ticket
ledger, no one-time-use enforcement and no per-event scoping.
"""
from fluxo.schemas import TicketStatus, TicketValidation

PLACEHOLDER_ATTENDEE = "John Doe"
PLACEHOLDER_EVENT = "Tech Summit 2024"


def validate_ticket(code: str) -> TicketValidation:
    """
    Classify a scanned code.
    
    Codes containing "TICKET" are tickets; those also containing "USED" have
    already been redeemed. Anything else is invalid.
    """
    if "TICKET" in code:
        if "USED" in code:
            return TicketValidation(
                is_valid=False,
                status=TicketStatus.USED,
                event_title=PLACEHOLDER_EVENT,
            )
        return TicketValidation(
            is_valid=True,
            status=TicketStatus.VALID,
            attendee_name=PLACEHOLDER_ATTENDEE,
            event_title=PLACEHOLDER_EVENT,
        )
    return TicketValidation(is_valid=False, status=TicketStatus.INVALID)
