"""Authentication service: signup, the login paths and Google onboarding."""
from typing import Optional
from fluxo.core.config import settings
from fluxo.core.identity import GoogleIdentity
from fluxo.core.logging import logger
from fluxo.core.roles import RoleEnum
from fluxo.core.security import create_access_token, verify_password
from fluxo.db.seed import SUPER_ADMIN_PROFILE
from fluxo.db.stores.base import AccountStore
from fluxo.schemas import (
    AuthFailure,
    AuthResult,
    GoogleLoginResult,
    OnboardingChoice,
    ProfileUpdate,
    TokenResponse,
    UserProfile,
    UserSignup,
)
from fluxo.services.accounts import RegistrationError, create_password_account, create_profile_for_identity

BLOCKED_MESSAGE = "Access Denied: Account Deboarded/Blocked."
ORGANIZER_BLOCKED_MESSAGE = "Account Blocked/Deboarded by Super Admin"
USER_NOT_FOUND_MESSAGE = "User not found. Please Register."
ORGANIZER_NOT_FOUND_MESSAGE = "Organizer not found. Please register first."
INCORRECT_CREDENTIALS_MESSAGE = "Incorrect credentials"
WRONG_ROLE_MESSAGE = "Not an authorized institution account."
PROFILE_MISSING_MESSAGE = "User profile not found."
ROOT_LOGIN_FAILED_MESSAGE = "Invalid Root Password"


class AuthService:
    """
    Service layer for authentication operations.
    
    Login methods never raise for bad input; they return an AuthResult whose
    failure tells blocked, wrong-role and unknown accounts apart.
    """
    
    def __init__(self, store: AccountStore):
        """
        Initialize AuthService with an account store.
        
        Args:
            store: Configured AccountStore implementation
        """
        self.store = store

    async def signup_user(self, payload: UserSignup) -> UserProfile:
        """
        Register an attendee account, usable immediately.
        
        Raises:
            RegistrationError: If password is weak or email already exists
        """
        user = await create_password_account(
            self.store,
            payload.name,
            payload.email,
            payload.phone,
            payload.password,
            RoleEnum.USER,
            blocked=False,
        )
        logger.info(f"User {user.uid} signed up")
        return user

    async def _authenticate(
        self,
        email: str,
        password: str,
        institution_only: bool = False,
    ) -> AuthResult:
        not_found = ORGANIZER_NOT_FOUND_MESSAGE if institution_only else USER_NOT_FOUND_MESSAGE
        blocked = ORGANIZER_BLOCKED_MESSAGE if institution_only else BLOCKED_MESSAGE

        identity = await self.store.get_identity_by_email(email)
        if identity is None:
            logger.warning(f"Login attempt for unknown email {email}")
            return AuthResult.fail(AuthFailure.NOT_FOUND, not_found)
        
        user = await self.store.get_user_by_id(identity.uid)
        if user is None:
            logger.warning(f"Identity {identity.uid} has no profile")
            return AuthResult.fail(AuthFailure.PROFILE_MISSING, PROFILE_MISSING_MESSAGE)
        
        if institution_only and user.role != RoleEnum.INSTITUTION:
            return AuthResult.fail(AuthFailure.WRONG_ROLE, WRONG_ROLE_MESSAGE)
        
        # Blocked accounts fail the same way whatever password was given
        if user.blocked:
            logger.warning(f"Login attempt for blocked account {user.uid}")
            return AuthResult.fail(AuthFailure.BLOCKED, blocked)
        
        if not verify_password(password, identity.hashed_password):
            logger.warning(f"Incorrect password for {user.uid}")
            return AuthResult.fail(AuthFailure.INVALID_CREDENTIALS, INCORRECT_CREDENTIALS_MESSAGE)
        
        return AuthResult.ok(user)

    async def login_user(self, email: str, password: str) -> AuthResult:
        """Login for any role."""
        return await self._authenticate(email, password)

    async def login_institution(self, email: str, password: str) -> AuthResult:
        """Organizer login; other roles are refused even with correct credentials."""
        return await self._authenticate(email, password, institution_only=True)

    async def login_super_admin(self, password: str) -> AuthResult:
        """
        Administrative login, checked against SUPER_ADMIN_PASSWORD_HASH rather
        than the user store. Returns the platform admin profile, creating it
        on first use.
        """
        admin_hash = settings.SUPER_ADMIN_PASSWORD_HASH
        if not admin_hash:
            logger.warning("Administrative login attempted but SUPER_ADMIN_PASSWORD_HASH is not set")
            return AuthResult.fail(AuthFailure.INVALID_CREDENTIALS, ROOT_LOGIN_FAILED_MESSAGE)
        
        if not verify_password(password, admin_hash):
            logger.warning("Failed administrative login")
            return AuthResult.fail(AuthFailure.INVALID_CREDENTIALS, ROOT_LOGIN_FAILED_MESSAGE)
        
        users = await self.store.list_users()
        admin = next((u for u in users if u.role == RoleEnum.SUPER_ADMIN), None)
        if admin is None:
            admin = await self.store.save_user(SUPER_ADMIN_PROFILE.model_copy())
            logger.info("Platform admin profile created")
        return AuthResult.ok(admin)

    async def login_with_google(self, identity: GoogleIdentity) -> GoogleLoginResult:
        """
        Sign in a verified Google account.
        
        Unknown accounts come back with is_new_user set; the caller then picks
        attendee or organizer and calls register_google_user.
        """
        user = await self.store.get_user_by_id(identity.subject)
        if user is None:
            return GoogleLoginResult(is_new_user=True, google_user=identity)
        if user.blocked:
            logger.warning(f"Google login for blocked account {user.uid}")
            return GoogleLoginResult(error=BLOCKED_MESSAGE)
        return GoogleLoginResult(user=user)

    async def register_google_user(
        self,
        identity: GoogleIdentity,
        choice: OnboardingChoice,
        name: str,
        phone: Optional[str] = None,
    ) -> UserProfile:
        """
        Create the profile for a new Google account.
        
        Attendees are usable at once. Organizers get a blocked INSTITUTION
        profile and a pending organizer request.
        
        Raises:
            RegistrationError: If the account exists, the email is taken or an
                organizer gives no phone number
        """
        if await self.store.get_user_by_id(identity.subject):
            raise RegistrationError("Account already registered")
        if choice == OnboardingChoice.ORGANIZER and not phone:
            raise RegistrationError("Phone number is required for Organizers")
        if identity.email and await self.store.get_identity_by_email(identity.email):
            raise RegistrationError("Email already registered")
        
        stored_identity = await self.store.create_identity(
            identity.email, provider="google", uid=identity.subject
        )
        
        if choice == OnboardingChoice.ORGANIZER:
            user = await create_profile_for_identity(
                self.store, stored_identity, name, phone, RoleEnum.INSTITUTION,
                blocked=True, avatar=identity.photo_url,
            )
            request = await self.store.create_organizer_request(name, identity.email, phone, uid=user.uid)
            logger.info(f"Organizer request {request.id} submitted for Google account {user.uid}")
            return user
        
        user = await create_profile_for_identity(
            self.store, stored_identity, name, phone, RoleEnum.USER,
            blocked=False, avatar=identity.photo_url,
        )
        logger.info(f"Google account {user.uid} registered as attendee")
        return user

    async def update_profile(self, uid: str, payload: ProfileUpdate) -> Optional[UserProfile]:
        return await self.store.update_user(uid, payload.model_dump(exclude_unset=True))

    def issue_token(self, user: UserProfile) -> TokenResponse:
        """Create an access token for a logged-in profile."""
        token_data = {"sub": user.uid, "role": user.role.value}
        return TokenResponse(access_token=create_access_token(token_data), user=user)
