"""Database models package."""
from fluxo.db.models.user import User
from fluxo.db.models.identity import AuthIdentity
from fluxo.db.models.organizer_request import OrganizerRequest, RequestStatusEnum
from fluxo.db.models.event import Event

__all__ = ["User", "AuthIdentity", "OrganizerRequest", "RequestStatusEnum", "Event"]
