"""Organizer registration and the administrator's approval queue."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fluxo.auth import require_permission
from fluxo.core.roles import Permission
from fluxo.db.stores import AccountStore, get_account_store
from fluxo.schemas import OrganizerRegistration, OrganizerRequestOut, OrganizerRequestSubmitted
from fluxo.services.accounts import RegistrationError
from fluxo.services.onboarding_service import OnboardingService
from slowapi import Limiter
from slowapi.util import get_remote_address

router = APIRouter(prefix="/organizers", tags=["organizers"])
limiter = Limiter(key_func=get_remote_address)


def get_onboarding_service(store: AccountStore = Depends(get_account_store)) -> OnboardingService:
    return OnboardingService(store)


@router.post("/requests", response_model=OrganizerRequestSubmitted, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
async def submit_request(
    request: Request,
    payload: OrganizerRegistration,
    onboarding: OnboardingService = Depends(get_onboarding_service)
):
    """
    Register an organizer. The account exists but stays blocked until approved.
    
    Rate limit: 3 requests per minute
    """
    try:
        organizer_request = await onboarding.submit_organizer_request(
            payload.name, payload.email, payload.phone, payload.password
        )
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return OrganizerRequestSubmitted(request=organizer_request)


@router.get("/requests", response_model=List[OrganizerRequestOut])
async def list_requests(
    admin=Depends(require_permission(Permission.REVIEW_ORGANIZERS)),
    onboarding: OnboardingService = Depends(get_onboarding_service)
):
    return await onboarding.get_organizer_requests()


@router.post("/requests/{request_id}/approve", status_code=status.HTTP_204_NO_CONTENT)
async def approve_request(
    request_id: str,
    admin=Depends(require_permission(Permission.REVIEW_ORGANIZERS)),
    onboarding: OnboardingService = Depends(get_onboarding_service)
):
    """Approve a pending request. Unknown or already decided requests are ignored."""
    await onboarding.approve_organizer_request(request_id)
    return None


@router.post("/requests/{request_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
async def reject_request(
    request_id: str,
    admin=Depends(require_permission(Permission.REVIEW_ORGANIZERS)),
    onboarding: OnboardingService = Depends(get_onboarding_service)
):
    """Reject a pending request. The organizer's account stays blocked."""
    await onboarding.reject_organizer_request(request_id)
    return None
