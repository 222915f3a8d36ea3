from fastapi import APIRouter
from typing import Dict
from fluxo.core.config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=Dict[str, str])
async def health_check():
    """
    Basic health check endpoint.
    
    Returns:
        Dict with service status and the active account store
    """
    return {"status": "healthy", "account_store": settings.ACCOUNT_STORE}
