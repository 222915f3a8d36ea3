"""
AccountStore: the storage capability shared by every backend.

Implementations only persist and fetch records. Workflow rules (blocking,
approval, login checks) live in the service layer so that all backends
behave the same.
"""
import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from fluxo.schemas import EventCreate, EventOut, Identity, OrganizerRequestOut, UserProfile
from fluxo.db.models.organizer_request import RequestStatusEnum

# Profile fields that update_user may change
UPDATABLE_USER_FIELDS = ("name", "phone", "avatar", "bio", "blocked")


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


def now_ms() -> int:
    return int(time.time() * 1000)


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Emails are matched case-insensitively; stores keep them lowercased."""
    return email.strip().lower() if email else email


class AccountStore(ABC):
    """Users, sign-in identities, organizer requests and created events."""

    # --- identities ---

    @abstractmethod
    async def get_identity_by_email(self, email: str) -> Optional[Identity]:
        ...

    @abstractmethod
    async def create_identity(
        self,
        email: Optional[str],
        hashed_password: Optional[str] = None,
        provider: str = "password",
        uid: Optional[str] = None,
    ) -> Identity:
        """Store a new identity; a uid is generated when none is given."""

    # --- users ---

    @abstractmethod
    async def get_user_by_id(self, uid: str) -> Optional[UserProfile]:
        ...

    @abstractmethod
    async def list_users(self) -> List[UserProfile]:
        ...

    @abstractmethod
    async def save_user(self, user: UserProfile) -> UserProfile:
        """Insert the profile, replacing any stored profile with the same uid."""

    @abstractmethod
    async def update_user(self, uid: str, changes: Dict[str, Any]) -> Optional[UserProfile]:
        """Apply changes to UPDATABLE_USER_FIELDS; None when the uid is unknown."""

    # --- organizer requests ---

    @abstractmethod
    async def create_organizer_request(
        self,
        name: str,
        email: Optional[str],
        phone: Optional[str],
        uid: Optional[str] = None,
    ) -> OrganizerRequestOut:
        """Store a new PENDING request stamped with the current time."""

    @abstractmethod
    async def get_organizer_request(self, request_id: str) -> Optional[OrganizerRequestOut]:
        ...

    @abstractmethod
    async def list_organizer_requests(self) -> List[OrganizerRequestOut]:
        ...

    @abstractmethod
    async def set_organizer_request_status(
        self, request_id: str, status: RequestStatusEnum
    ) -> Optional[OrganizerRequestOut]:
        ...

    # --- events ---

    @abstractmethod
    async def create_event(self, payload: EventCreate, organizer_id: Optional[str] = None) -> EventOut:
        """Store an event under a freshly assigned id and return it."""

    @abstractmethod
    async def get_event(self, event_id: str) -> Optional[EventOut]:
        ...

    @abstractmethod
    async def list_events(self) -> List[EventOut]:
        """Created events in creation order."""
