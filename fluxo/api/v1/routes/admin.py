from typing import List
from fastapi import APIRouter, Depends, HTTPException
from fluxo.api.v1.routes.organizers import get_onboarding_service
from fluxo.auth import require_permission
from fluxo.core.roles import Permission
from fluxo.schemas import UserProfile
from fluxo.services.onboarding_service import OnboardingService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=List[UserProfile])
async def list_users(
    admin=Depends(require_permission(Permission.MANAGE_USERS)),
    onboarding: OnboardingService = Depends(get_onboarding_service)
):
    return await onboarding.admin_get_all_users()


@router.post("/users/{uid}/toggle-block", response_model=UserProfile)
async def toggle_block(
    uid: str,
    admin=Depends(require_permission(Permission.MANAGE_USERS)),
    onboarding: OnboardingService = Depends(get_onboarding_service)
):
    user = await onboarding.admin_toggle_block_user(uid)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
