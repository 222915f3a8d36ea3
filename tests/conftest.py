"""
Pytest configuration and fixtures for testing.

Store-facing fixtures are parameterized over both AccountStore
implementations so every workflow test runs against each of them.
"""
import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable, Dict
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from fluxo.main import app
from fluxo.api.v1.routes.auth import get_google_verifier
from fluxo.core.config import settings
from fluxo.core.identity import GoogleIdentity, IdentityProviderError
from fluxo.core.roles import RoleEnum
from fluxo.core.security import create_access_token
from fluxo.db.session import Base
from fluxo.db.stores import AccountStore, LocalAccountStore, SqlAccountStore, get_account_store
from fluxo.schemas import EventCreate, UserProfile, UserSignup
from fluxo.services.auth_service import AuthService
from fluxo.services.onboarding_service import OnboardingService
from fluxo.storage import LocalStorage, MemoryBackend


TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "fluxo_test.db"),
)

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,  # Disable connection pooling for tests
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

PASSWORD = "Test123!@#"
ADMIN_PASSWORD = "Root#Secret99"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database with empty tables for each test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    
    async with TestSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
    
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def local_storage() -> LocalStorage:
    """Fresh in-memory local storage."""
    return LocalStorage(MemoryBackend())


@pytest_asyncio.fixture(params=["local", "sql"])
async def account_store(request, db_session: AsyncSession, local_storage: LocalStorage) -> AccountStore:
    """Each AccountStore implementation in turn."""
    if request.param == "local":
        return LocalAccountStore(local_storage)
    return SqlAccountStore(db_session)


@pytest.fixture
def auth_service(account_store: AccountStore) -> AuthService:
    return AuthService(account_store)


@pytest.fixture
def onboarding(account_store: AccountStore) -> OnboardingService:
    return OnboardingService(account_store, legacy_recovery=True)


@pytest_asyncio.fixture
async def attendee(auth_service: AuthService) -> UserProfile:
    """An attendee account with password PASSWORD."""
    return await auth_service.signup_user(UserSignup(
        name="Test User",
        email="testuser@example.com",
        phone="555-0100",
        password=PASSWORD,
    ))


@pytest_asyncio.fixture
async def pending_organizer(onboarding: OnboardingService, account_store: AccountStore):
    """A submitted organizer request and its blocked account."""
    request = await onboarding.submit_organizer_request(
        "Robotics Club", "organizer@example.com", "555-0199", PASSWORD
    )
    user = await account_store.get_user_by_id(request.uid)
    return request, user


@pytest_asyncio.fixture
async def organizer(onboarding: OnboardingService, account_store: AccountStore, pending_organizer) -> UserProfile:
    """An approved, unblocked organizer account."""
    request, _ = pending_organizer
    await onboarding.approve_organizer_request(request.id)
    return await account_store.get_user_by_id(request.uid)


@pytest.fixture
def event_payload() -> EventCreate:
    return EventCreate(
        title="Robotics Expo",
        date="Dec 02, 2024",
        time="11:00 AM - 3:00 PM",
        location="Engineering Block Atrium",
        description="Student teams show off their robots.",
        image_url="https://images.example.com/robots.jpg",
        registration_link="https://forms.example.com/robotics",
        sheet_link="https://sheets.example.com/robotics",
    )


@pytest.fixture
def admin_password(monkeypatch, mock_password_hashing) -> str:
    """Configure the administrative credential and return its plain text."""
    from fluxo.core import security
    monkeypatch.setattr(settings, "SUPER_ADMIN_PASSWORD_HASH", security.hash_password(ADMIN_PASSWORD))
    return ADMIN_PASSWORD


@pytest.fixture
def auth_headers() -> Callable[[UserProfile], Dict[str, str]]:
    """Build an Authorization header for a profile."""
    def _headers(user: UserProfile) -> Dict[str, str]:
        token = create_access_token({"sub": user.uid, "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest_asyncio.fixture
async def super_admin(auth_service: AuthService, admin_password: str) -> UserProfile:
    result = await auth_service.login_super_admin(admin_password)
    assert result.user.role == RoleEnum.SUPER_ADMIN
    return result.user


async def fake_google_verifier(id_token: str) -> GoogleIdentity:
    """Accepts tokens of the form google:<subject>."""
    if not id_token.startswith("google:"):
        raise IdentityProviderError("Invalid Google ID token")
    subject = id_token.split(":", 1)[1]
    return GoogleIdentity(
        subject=subject,
        email=f"{subject}@gmail.com",
        display_name=f"Google {subject}",
        photo_url=f"https://photos.example.com/{subject}.png",
    )


@pytest_asyncio.fixture(scope="function")
async def client(account_store: AccountStore) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing API endpoints.
    Overrides the account store and Google verifier dependencies.
    """
    app.dependency_overrides[get_account_store] = lambda: account_store
    app.dependency_overrides[get_google_verifier] = lambda: fake_google_verifier
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_password_hashing(monkeypatch):
    """
    Mock bcrypt password hashing so tests do not depend on bcrypt or its cost.
    """
    class MockPasswordContext:
        """Mock password context that doesn't require bcrypt."""
        def hash(self, password: str) -> str:
            return f"$2b$12$mockedhash{password}"
        
        def verify(self, plain: str, hashed: str) -> bool:
            return hashed == f"$2b$12$mockedhash{plain}"
    
    from fluxo.core import security
    monkeypatch.setattr(security, "pwd_context", MockPasswordContext())


@pytest.fixture(autouse=True)
def disable_rate_limiting(monkeypatch):
    """Disable rate limiting for all tests."""
    import fluxo.api.v1.routes.auth as auth_routes
    import fluxo.api.v1.routes.organizers as organizer_routes
    import fluxo.main as main
    
    for limiter in (auth_routes.limiter, organizer_routes.limiter, main.limiter):
        monkeypatch.setattr(limiter, "enabled", False)
