"""Authentication routes: signup, the three login paths, Google sign-in and profile."""
from typing import Awaitable, Callable
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fluxo.auth import get_current_user
from fluxo.core.identity import GoogleIdentity, IdentityProviderError, verify_google_id_token
from fluxo.db.stores import AccountStore, get_account_store
from fluxo.schemas import (
    AuthFailure,
    AuthResult,
    GoogleLoginRequest,
    GoogleLoginResponse,
    GoogleRegistrationRequest,
    LoginRequest,
    ProfileUpdate,
    SuperAdminLoginRequest,
    TokenResponse,
    UserProfile,
    UserSignup,
)
from fluxo.services.accounts import RegistrationError
from fluxo.services.auth_service import AuthService
from slowapi import Limiter
from slowapi.util import get_remote_address

router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)

FAILURE_STATUS = {
    AuthFailure.NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    AuthFailure.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthFailure.PROFILE_MISSING: status.HTTP_401_UNAUTHORIZED,
    AuthFailure.PROVIDER_ERROR: status.HTTP_401_UNAUTHORIZED,
    AuthFailure.BLOCKED: status.HTTP_403_FORBIDDEN,
    AuthFailure.WRONG_ROLE: status.HTTP_403_FORBIDDEN,
}

GOOGLE_FAILED_MESSAGE = "Google sign-in failed. Please try again."

GoogleVerifier = Callable[[str], Awaitable[GoogleIdentity]]


def get_auth_service(store: AccountStore = Depends(get_account_store)) -> AuthService:
    """
    Dependency injection for AuthService.
    
    Args:
        store: Configured account store
        
    Returns:
        AuthService instance
    """
    return AuthService(store)


def get_google_verifier() -> GoogleVerifier:
    """Dependency returning the Google ID token verifier."""
    return verify_google_id_token


def _session_or_raise(result: AuthResult, auth_service: AuthService) -> TokenResponse:
    if not result.success:
        raise HTTPException(status_code=FAILURE_STATUS[result.failure], detail=result.error)
    return auth_service.issue_token(result.user)


async def _verify_google(id_token: str, verifier: GoogleVerifier) -> GoogleIdentity:
    try:
        return await verifier(id_token)
    except IdentityProviderError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=GOOGLE_FAILED_MESSAGE)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
async def signup(
    request: Request,
    payload: UserSignup,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register an attendee account and log it in.
    
    Rate limit: 3 requests per minute
    """
    try:
        user = await auth_service.signup_user(payload)
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return auth_service.issue_token(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit("5/minute")
async def login(
    request: Request,
    form_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login for any account role.
    
    Rate limit: 5 requests per minute
    """
    result = await auth_service.login_user(form_data.email, form_data.password)
    return _session_or_raise(result, auth_service)


@router.post("/institution/login", response_model=TokenResponse)
@limiter.limit("5/minute")
async def institution_login(
    request: Request,
    form_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Organizer login; refuses other roles and blocked (unapproved) organizers."""
    result = await auth_service.login_institution(form_data.email, form_data.password)
    return _session_or_raise(result, auth_service)


@router.post("/super-admin/login", response_model=TokenResponse)
@limiter.limit("5/minute")
async def super_admin_login(
    request: Request,
    payload: SuperAdminLoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Platform administrator login against the configured credential."""
    result = await auth_service.login_super_admin(payload.password)
    return _session_or_raise(result, auth_service)


@router.post("/google", response_model=GoogleLoginResponse)
@limiter.limit("10/minute")
async def google_login(
    request: Request,
    payload: GoogleLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    verifier: GoogleVerifier = Depends(get_google_verifier),
):
    """
    Google sign-in.
    
    Known accounts receive a token. Unknown accounts receive is_new_user and
    the Google identity, and must complete /auth/google/register.
    """
    identity = await _verify_google(payload.id_token, verifier)
    result = await auth_service.login_with_google(identity)
    if result.is_new_user:
        return GoogleLoginResponse(is_new_user=True, google_user=result.google_user)
    if result.user is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=result.error)
    session = auth_service.issue_token(result.user)
    return GoogleLoginResponse(access_token=session.access_token, user=session.user)


@router.post("/google/register", response_model=GoogleLoginResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
async def google_register(
    request: Request,
    payload: GoogleRegistrationRequest,
    auth_service: AuthService = Depends(get_auth_service),
    verifier: GoogleVerifier = Depends(get_google_verifier),
):
    """
    Finish Google onboarding as attendee or organizer.
    
    Organizer accounts are blocked pending approval, so no token is issued.
    """
    identity = await _verify_google(payload.id_token, verifier)
    try:
        user = await auth_service.register_google_user(identity, payload.choice, payload.name, payload.phone)
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if user.blocked:
        return GoogleLoginResponse(user=user)
    session = auth_service.issue_token(user)
    return GoogleLoginResponse(access_token=session.access_token, user=user)


@router.get("/me", response_model=UserProfile)
async def get_current_user_info(current_user: UserProfile = Depends(get_current_user)):
    """
    Get current user information from JWT token.
    
    Returns:
        Current user details
    """
    return current_user


@router.patch("/me", response_model=UserProfile)
async def update_current_user(
    payload: ProfileUpdate,
    current_user: UserProfile = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Edit name, phone, avatar or bio of the caller's profile."""
    user = await auth_service.update_profile(current_user.uid, payload)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
