from fastapi import APIRouter, Depends, HTTPException, status
from fluxo.auth import require_permission
from fluxo.core.roles import Permission
from fluxo.db.stores import AccountStore, get_account_store
from fluxo.schemas import EventCreate, EventOut
from fluxo.services.event_service import EventService
from typing import List

router = APIRouter(prefix="/events", tags=["events"])

def get_event_service(store: AccountStore = Depends(get_account_store)) -> EventService:
    return EventService(store)

@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    payload: EventCreate,
    user=Depends(require_permission(Permission.PUBLISH_EVENTS)),
    event_service: EventService = Depends(get_event_service)
):
    return await event_service.create_event(payload, user.uid)

@router.get("/", response_model=List[EventOut])
async def get_events(event_service: EventService = Depends(get_event_service)):
    """
    List the built-in events followed by created events, in creation order.
    """
    return await event_service.get_events()

@router.get("/{event_id}", response_model=EventOut)
async def get_event_detail(
    event_id: str,
    event_service: EventService = Depends(get_event_service)
):
    ev = await event_service.get_event_by_id(event_id)
    if not ev:
        raise HTTPException(status_code=404, detail="Event not found")
    return ev
