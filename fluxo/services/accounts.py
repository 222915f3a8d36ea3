"""
Account creation shared by signup, organizer registration and Google onboarding.
"""
from typing import Optional
from fluxo.core.logging import logger
from fluxo.core.roles import RoleEnum
from fluxo.core.security import hash_password, validate_password
from fluxo.db.seed import avatar_url
from fluxo.db.stores.base import AccountStore
from fluxo.schemas import Identity, UserProfile


class RegistrationError(ValueError):
    """Registration input rejected (weak password, taken email, missing field)."""


async def create_profile_for_identity(
    store: AccountStore,
    identity: Identity,
    name: str,
    phone: Optional[str],
    role: RoleEnum,
    blocked: bool,
    avatar: Optional[str] = None,
) -> UserProfile:
    """
    Store the profile belonging to an already created identity.
    
    The identity is not rolled back if this fails; the orphan is logged.
    """
    profile = UserProfile(
        uid=identity.uid,
        name=name,
        email=identity.email,
        phone=phone or None,
        role=role,
        avatar=avatar or avatar_url(name),
        blocked=blocked,
    )
    try:
        return await store.save_user(profile)
    except Exception:
        logger.error(f"Profile creation failed; identity {identity.uid} is left without a profile")
        raise


async def create_password_account(
    store: AccountStore,
    name: str,
    email: str,
    phone: Optional[str],
    password: str,
    role: RoleEnum,
    blocked: bool,
) -> UserProfile:
    """
    Create an email/password identity, then its profile.
    
    Raises:
        RegistrationError: If the password is weak or the email is taken
    """
    try:
        validate_password(password)
    except ValueError as e:
        raise RegistrationError(str(e))
    
    if await store.get_identity_by_email(email):
        raise RegistrationError("Email already registered")
    
    identity = await store.create_identity(email, hash_password(password))
    return await create_profile_for_identity(store, identity, name, phone, role, blocked)
