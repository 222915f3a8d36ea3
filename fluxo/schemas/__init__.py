from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from enum import Enum
from fluxo.core.roles import RoleEnum
from fluxo.core.identity import GoogleIdentity
from fluxo.db.models.organizer_request import RequestStatusEnum


class UserProfile(BaseModel):
    uid: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: RoleEnum
    avatar: Optional[str] = None
    bio: Optional[str] = None
    blocked: bool = False

    class Config:
        from_attributes = True


class Identity(BaseModel):
    """Sign-in credentials belonging to a profile uid."""
    uid: str
    email: Optional[str] = None
    hashed_password: Optional[str] = None
    provider: str = "password"

    class Config:
        from_attributes = True


class OrganizerRequestOut(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    status: RequestStatusEnum
    timestamp: int
    uid: Optional[str] = None

    class Config:
        from_attributes = True


class EventCreate(BaseModel):
    title: str
    date: str
    time: str
    location: str
    description: str
    image_url: str
    registration_link: str
    map_embed_url: Optional[str] = None
    sheet_link: Optional[str] = None


class EventOut(BaseModel):
    id: str
    organizer_id: Optional[str] = None
    title: str
    date: str
    time: str
    location: str
    description: str
    image_url: str
    registration_link: str
    map_embed_url: Optional[str] = None
    sheet_link: Optional[str] = None

    class Config:
        from_attributes = True


class TicketStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    USED = "USED"


class TicketValidation(BaseModel):
    is_valid: bool
    status: TicketStatus
    attendee_name: Optional[str] = None
    event_title: Optional[str] = None


class TicketValidationRequest(BaseModel):
    code: str


class AuthFailure(str, Enum):
    """Why a login did not produce a profile."""
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    BLOCKED = "blocked"
    WRONG_ROLE = "wrong_role"
    PROFILE_MISSING = "profile_missing"
    PROVIDER_ERROR = "provider_error"


class AuthResult(BaseModel):
    """Outcome of a login: a profile on success, a reason and message otherwise."""
    user: Optional[UserProfile] = None
    failure: Optional[AuthFailure] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.user is not None

    @classmethod
    def ok(cls, user: UserProfile) -> "AuthResult":
        return cls(user=user)

    @classmethod
    def fail(cls, failure: AuthFailure, error: str) -> "AuthResult":
        return cls(failure=failure, error=error)


class GoogleLoginResult(BaseModel):
    """Google sign-in outcome; is_new_user means the caller must pick a role."""
    user: Optional[UserProfile] = None
    error: Optional[str] = None
    is_new_user: bool = False
    google_user: Optional[GoogleIdentity] = None


class OnboardingChoice(str, Enum):
    ATTENDEE = "ATTENDEE"
    ORGANIZER = "ORGANIZER"


class LoginRequest(BaseModel):
    """Schema for user login request."""
    email: EmailStr
    password: str


class SuperAdminLoginRequest(BaseModel):
    password: str


class UserSignup(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    password: str


class OrganizerRegistration(BaseModel):
    name: str = Field(..., min_length=1, description="Organization name")
    email: EmailStr
    phone: Optional[str] = None
    password: str


class GoogleLoginRequest(BaseModel):
    id_token: str


class GoogleRegistrationRequest(BaseModel):
    id_token: str
    choice: OnboardingChoice
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Partial profile edit; only fields sent are applied, null clears phone, avatar or bio."""
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be cleared")
        return v


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfile


class GoogleLoginResponse(BaseModel):
    """Either a session for a known account, or the identity to onboard."""
    is_new_user: bool = False
    access_token: Optional[str] = None
    token_type: str = "bearer"
    user: Optional[UserProfile] = None
    google_user: Optional[GoogleIdentity] = None


class OrganizerRequestSubmitted(BaseModel):
    request: OrganizerRequestOut
    message: str = "Request submitted. Your account is blocked until an administrator approves it."
