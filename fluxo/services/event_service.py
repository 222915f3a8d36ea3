from typing import List, Optional
from fluxo.core.logging import logger
from fluxo.db.seed import SEED_EVENTS
from fluxo.db.stores.base import AccountStore
from fluxo.schemas import EventCreate, EventOut


class EventService:
    """Event catalog: built-in seed events followed by created events."""

    def __init__(self, store: AccountStore):
        self.store = store

    async def create_event(self, payload: EventCreate, organizer_id: Optional[str] = None) -> EventOut:
        event = await self.store.create_event(payload, organizer_id)
        logger.info(f"Event {event.id} created by {organizer_id}")
        return event

    async def get_events(self) -> List[EventOut]:
        dynamic_events = await self.store.list_events()
        return [event.model_copy() for event in SEED_EVENTS] + dynamic_events

    async def get_event_by_id(self, event_id: str) -> Optional[EventOut]:
        for event in SEED_EVENTS:
            if event.id == event_id:
                return event.model_copy()
        return await self.store.get_event(event_id)
