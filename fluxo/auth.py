from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fluxo.core.roles import Permission, has_permission
from fluxo.core.security import decode_token
from fluxo.db.stores import AccountStore, get_account_store
from fluxo.schemas import UserProfile

# Use HTTPBearer for JWT token authentication
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: AccountStore = Depends(get_account_store),
) -> UserProfile:
    """
    Get current user from JWT token.
    
    Args:
        credentials: HTTP Bearer credentials containing the JWT token
        store: Account store (injected)
        
    Returns:
        The caller's profile
        
    Raises:
        HTTPException: If token is invalid or the account is blocked
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise credentials_exception
    
    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    uid: Optional[str] = payload.get("sub")
    if uid is None:
        raise credentials_exception

    user = await store.get_user_by_id(uid)
    if not user:
        raise credentials_exception
    # Blocking takes effect on tokens issued before the block
    if user.blocked:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account blocked")
    return user


def require_permission(permission: Permission):
    """
    Dependency to require a permission of the caller's role.
    
    Args:
        permission: Permission the endpoint needs
        
    Returns:
        Dependency function
    """
    async def permission_checker(user: UserProfile = Depends(get_current_user)) -> UserProfile:
        if not has_permission(user.role, permission):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return user
    return permission_checker
