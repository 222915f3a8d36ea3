"""
AccountStore over the local key-value persistence adapter.

Each collection is a JSON list under a fixed key; every mutation reads the
whole list, changes it and writes it back.
"""
from typing import Any, Dict, List, Optional
from fluxo.db.models.organizer_request import RequestStatusEnum
from fluxo.db.seed import SUPER_ADMIN_PROFILE
from fluxo.db.stores.base import AccountStore, UPDATABLE_USER_FIELDS, new_id, normalize_email, now_ms
from fluxo.schemas import EventCreate, EventOut, Identity, OrganizerRequestOut, UserProfile
from fluxo.storage.local_storage import (
    LocalStorage,
    USERS_KEY,
    IDENTITIES_KEY,
    ORGANIZER_REQUESTS_KEY,
    DYNAMIC_EVENTS_KEY,
)

INITIAL_USERS = [SUPER_ADMIN_PROFILE.model_dump(mode="json")]


class LocalAccountStore(AccountStore):

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def _users(self) -> List[Dict[str, Any]]:
        return self.storage.get_storage(USERS_KEY, INITIAL_USERS)

    def _identities(self) -> List[Dict[str, Any]]:
        return self.storage.get_storage(IDENTITIES_KEY, [])

    def _requests(self) -> List[Dict[str, Any]]:
        return self.storage.get_storage(ORGANIZER_REQUESTS_KEY, [])

    def _events(self) -> List[Dict[str, Any]]:
        return self.storage.get_storage(DYNAMIC_EVENTS_KEY, [])

    # --- identities ---

    async def get_identity_by_email(self, email: str) -> Optional[Identity]:
        email = normalize_email(email)
        for record in self._identities():
            if record.get("email") == email:
                return Identity(**record)
        return None

    async def create_identity(
        self,
        email: Optional[str],
        hashed_password: Optional[str] = None,
        provider: str = "password",
        uid: Optional[str] = None,
    ) -> Identity:
        identity = Identity(
            uid=uid or new_id("user"),
            email=normalize_email(email),
            hashed_password=hashed_password,
            provider=provider,
        )
        identities = self._identities()
        identities.append(identity.model_dump(mode="json"))
        self.storage.set_storage(IDENTITIES_KEY, identities)
        return identity

    # --- users ---

    async def get_user_by_id(self, uid: str) -> Optional[UserProfile]:
        for record in self._users():
            if record.get("uid") == uid:
                return UserProfile(**record)
        return None

    async def list_users(self) -> List[UserProfile]:
        return [UserProfile(**record) for record in self._users()]

    async def save_user(self, user: UserProfile) -> UserProfile:
        users = [u for u in self._users() if u.get("uid") != user.uid]
        users.append(user.model_dump(mode="json"))
        self.storage.set_storage(USERS_KEY, users)
        return user

    async def update_user(self, uid: str, changes: Dict[str, Any]) -> Optional[UserProfile]:
        users = self._users()
        for index, record in enumerate(users):
            if record.get("uid") == uid:
                for field in UPDATABLE_USER_FIELDS:
                    if field in changes:
                        record[field] = changes[field]
                users[index] = record
                self.storage.set_storage(USERS_KEY, users)
                return UserProfile(**record)
        return None

    # --- organizer requests ---

    async def create_organizer_request(
        self,
        name: str,
        email: Optional[str],
        phone: Optional[str],
        uid: Optional[str] = None,
    ) -> OrganizerRequestOut:
        request = OrganizerRequestOut(
            id=new_id("req"),
            name=name,
            email=email,
            phone=phone,
            status=RequestStatusEnum.PENDING,
            timestamp=now_ms(),
            uid=uid,
        )
        requests = self._requests()
        requests.append(request.model_dump(mode="json"))
        self.storage.set_storage(ORGANIZER_REQUESTS_KEY, requests)
        return request

    async def get_organizer_request(self, request_id: str) -> Optional[OrganizerRequestOut]:
        for record in self._requests():
            if record.get("id") == request_id:
                return OrganizerRequestOut(**record)
        return None

    async def list_organizer_requests(self) -> List[OrganizerRequestOut]:
        return [OrganizerRequestOut(**record) for record in self._requests()]

    async def set_organizer_request_status(
        self, request_id: str, status: RequestStatusEnum
    ) -> Optional[OrganizerRequestOut]:
        requests = self._requests()
        for record in requests:
            if record.get("id") == request_id:
                record["status"] = status.value
                self.storage.set_storage(ORGANIZER_REQUESTS_KEY, requests)
                return OrganizerRequestOut(**record)
        return None

    # --- events ---

    async def create_event(self, payload: EventCreate, organizer_id: Optional[str] = None) -> EventOut:
        event = EventOut(id=new_id("evt_dyn"), organizer_id=organizer_id, **payload.model_dump())
        events = self._events()
        events.append(event.model_dump(mode="json"))
        self.storage.set_storage(DYNAMIC_EVENTS_KEY, events)
        return event

    async def get_event(self, event_id: str) -> Optional[EventOut]:
        for record in self._events():
            if record.get("id") == event_id:
                return EventOut(**record)
        return None

    async def list_events(self) -> List[EventOut]:
        return [EventOut(**record) for record in self._events()]
