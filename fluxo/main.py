from fastapi import FastAPI, APIRouter
from fluxo.api.v1.routes import (
    admin as admin_router,
    auth as auth_router,
    events as events_router,
    health as health_router,
    organizers as organizers_router,
    tickets as tickets_router,
)
from fluxo.db.session import engine, Base
from fluxo.db import models  # noqa: F401  registers tables on Base.metadata
from fluxo.core.config import settings
from fluxo.core.logging import logger
from fluxo.storage import create_local_storage
from fastapi.middleware.cors import CORSMiddleware
from fluxo.middleware.security_headers import SecurityHeadersMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title="Fluxo")

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Created once and handed to every LocalAccountStore through app state
app.state.local_storage = create_local_storage()

# Add security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router.router)
api_router.include_router(organizers_router.router)
api_router.include_router(admin_router.router)
api_router.include_router(events_router.router)
api_router.include_router(tickets_router.router)
api_router.include_router(health_router.router)

app.include_router(api_router)

@app.on_event("startup")
async def on_startup():
    logger.info(f"Starting with {settings.ACCOUNT_STORE} account store")
    if settings.ACCOUNT_STORE == "sql":
        # create tables (simple approach; migrations live in alembic/)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
