"""
Google ID token verification against Google's token-info endpoint.
"""
from typing import Optional
import httpx
from pydantic import BaseModel
from fluxo.core.config import settings
from fluxo.core.logging import logger


class IdentityProviderError(Exception):
    """Raised when the external identity provider rejects a token or is unreachable."""


class GoogleIdentity(BaseModel):
    """A verified Google account, as reported by the identity provider."""
    subject: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


async def verify_google_id_token(
    id_token: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GoogleIdentity:
    """
    Verify a Google ID token and return the identity it belongs to.
    
    Args:
        id_token: Raw ID token obtained by the client from Google Sign-In
        transport: Optional httpx transport, defaults to the network
        
    Returns:
        The verified GoogleIdentity
        
    Raises:
        IdentityProviderError: If the token is invalid, issued for another
            client, or the provider cannot be reached
    """
    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.get(settings.GOOGLE_TOKENINFO_URL, params={"id_token": id_token})
    except httpx.HTTPError as e:
        logger.error(f"Google token-info request failed: {e}")
        raise IdentityProviderError("Identity provider unavailable") from e
    
    if response.status_code != 200:
        logger.warning(f"Google rejected ID token (status {response.status_code})")
        raise IdentityProviderError("Invalid Google ID token")
    
    claims = response.json()
    if settings.GOOGLE_CLIENT_ID and claims.get("aud") != settings.GOOGLE_CLIENT_ID:
        logger.warning("Google ID token issued for a different client")
        raise IdentityProviderError("Invalid Google ID token")
    
    if not claims.get("sub"):
        raise IdentityProviderError("Invalid Google ID token")
    
    return GoogleIdentity(
        subject=claims["sub"],
        email=claims.get("email") or None,
        display_name=claims.get("name"),
        photo_url=claims.get("picture"),
    )
