"""AccountStore implementations and the dependency that picks one."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from fluxo.core.config import settings
from fluxo.db.session import get_session
from fluxo.db.stores.base import AccountStore
from fluxo.db.stores.local import LocalAccountStore
from fluxo.db.stores.sql import SqlAccountStore


def get_account_store(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> AccountStore:
    """
    Dependency injection for the configured AccountStore.
    
    The local store reads the LocalStorage created at startup from app state.
    """
    if settings.ACCOUNT_STORE == "local":
        return LocalAccountStore(request.app.state.local_storage)
    return SqlAccountStore(session)


__all__ = ["AccountStore", "LocalAccountStore", "SqlAccountStore", "get_account_store"]
