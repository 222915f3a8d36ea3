"""
AccountStore backed by SQLAlchemy (PostgreSQL in deployment).

Each write commits on its own; there is no transaction spanning an identity
and the profile created for it.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fluxo.db.models import AuthIdentity, Event, OrganizerRequest, RequestStatusEnum, User
from fluxo.db.stores.base import AccountStore, UPDATABLE_USER_FIELDS, new_id, normalize_email, now_ms
from fluxo.schemas import EventCreate, EventOut, Identity, OrganizerRequestOut, UserProfile


class SqlAccountStore(AccountStore):

    def __init__(self, session: AsyncSession):
        """
        Initialize SqlAccountStore with database session.
        
        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _get_user_row(self, uid: str) -> Optional[User]:
        q = select(User).where(User.uid == uid)
        res = await self.session.execute(q)
        return res.scalars().first()

    async def _get_request_row(self, request_id: str) -> Optional[OrganizerRequest]:
        q = select(OrganizerRequest).where(OrganizerRequest.id == request_id)
        res = await self.session.execute(q)
        return res.scalars().first()

    # --- identities ---

    async def get_identity_by_email(self, email: str) -> Optional[Identity]:
        email = normalize_email(email)
        q = select(AuthIdentity).where(AuthIdentity.email == email)
        res = await self.session.execute(q)
        row = res.scalars().first()
        return Identity.model_validate(row) if row else None

    async def create_identity(
        self,
        email: Optional[str],
        hashed_password: Optional[str] = None,
        provider: str = "password",
        uid: Optional[str] = None,
    ) -> Identity:
        row = AuthIdentity(
            uid=uid or new_id("user"),
            email=normalize_email(email),
            hashed_password=hashed_password,
            provider=provider,
        )
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return Identity.model_validate(row)

    # --- users ---

    async def get_user_by_id(self, uid: str) -> Optional[UserProfile]:
        row = await self._get_user_row(uid)
        return UserProfile.model_validate(row) if row else None

    async def list_users(self) -> List[UserProfile]:
        q = select(User).order_by(User.created_at, User.uid)
        res = await self.session.execute(q)
        return [UserProfile.model_validate(row) for row in res.scalars().all()]

    async def save_user(self, user: UserProfile) -> UserProfile:
        row = await self._get_user_row(user.uid)
        if row is None:
            row = User(uid=user.uid)
            self.session.add(row)
        for field, value in user.model_dump(exclude={"uid"}).items():
            setattr(row, field, value)
        await self.session.commit()
        await self.session.refresh(row)
        return UserProfile.model_validate(row)

    async def update_user(self, uid: str, changes: Dict[str, Any]) -> Optional[UserProfile]:
        row = await self._get_user_row(uid)
        if row is None:
            return None
        for field in UPDATABLE_USER_FIELDS:
            if field in changes:
                setattr(row, field, changes[field])
        await self.session.commit()
        await self.session.refresh(row)
        return UserProfile.model_validate(row)

    # --- organizer requests ---

    async def create_organizer_request(
        self,
        name: str,
        email: Optional[str],
        phone: Optional[str],
        uid: Optional[str] = None,
    ) -> OrganizerRequestOut:
        row = OrganizerRequest(
            id=new_id("req"),
            name=name,
            email=email,
            phone=phone,
            status=RequestStatusEnum.PENDING,
            timestamp=now_ms(),
            uid=uid,
        )
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return OrganizerRequestOut.model_validate(row)

    async def get_organizer_request(self, request_id: str) -> Optional[OrganizerRequestOut]:
        row = await self._get_request_row(request_id)
        return OrganizerRequestOut.model_validate(row) if row else None

    async def list_organizer_requests(self) -> List[OrganizerRequestOut]:
        q = select(OrganizerRequest).order_by(OrganizerRequest.timestamp, OrganizerRequest.id)
        res = await self.session.execute(q)
        return [OrganizerRequestOut.model_validate(row) for row in res.scalars().all()]

    async def set_organizer_request_status(
        self, request_id: str, status: RequestStatusEnum
    ) -> Optional[OrganizerRequestOut]:
        row = await self._get_request_row(request_id)
        if row is None:
            return None
        row.status = status
        await self.session.commit()
        await self.session.refresh(row)
        return OrganizerRequestOut.model_validate(row)

    # --- events ---

    async def create_event(self, payload: EventCreate, organizer_id: Optional[str] = None) -> EventOut:
        row = Event(id=new_id("evt"), organizer_id=organizer_id, **payload.model_dump())
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return EventOut.model_validate(row)

    async def get_event(self, event_id: str) -> Optional[EventOut]:
        q = select(Event).where(Event.id == event_id)
        res = await self.session.execute(q)
        row = res.scalars().first()
        return EventOut.model_validate(row) if row else None

    async def list_events(self) -> List[EventOut]:
        q = select(Event).order_by(Event.created_at)
        res = await self.session.execute(q)
        return [EventOut.model_validate(row) for row in res.scalars().all()]
