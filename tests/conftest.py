"""Pytest configuration and shared fixtures."""

import os

# Configure the app BEFORE any imports from access_hub
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from access_hub.main import app  # noqa: E402
from access_hub.models import (  # noqa: E402
    AccessLevel,
    AccessRequest,
    Base,
    RequestStatus,
    Software,
    User,
    UserRole,
)
from access_hub.services import get_async_session  # noqa: E402
from access_hub.services.auth_service import create_access_token, hash_password  # noqa: E402


@pytest_asyncio.fixture
async def db_engine():
    """In-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    """Provide an HTTP client bound to the app, sharing the test session."""

    async def override_get_async_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory persisting a user with the given role."""

    async def _make_user(username: str, role: UserRole = UserRole.EMPLOYEE, password: str = "pw"):
        user = User(username=username, password_hash=hash_password(password), role=role)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_software(db_session):
    """Factory persisting a software entry."""

    async def _make_software(name: str, description: str = ""):
        software = Software(name=name, description=description)
        db_session.add(software)
        await db_session.commit()
        return software

    return _make_software


@pytest.fixture
def make_request(db_session):
    """Factory persisting an access request directly, bypassing admission."""

    async def _make_request(
        user: User,
        software: Software,
        access_type: AccessLevel = AccessLevel.READ,
        status: RequestStatus = RequestStatus.PENDING,
        reason: str = "seeded",
    ):
        request = AccessRequest(
            user_id=user.id,
            software_id=software.id,
            access_type=access_type,
            reason=reason,
            status=status,
        )
        db_session.add(request)
        await db_session.commit()
        return request

    return _make_request


@pytest_asyncio.fixture
async def employee(make_user):
    return await make_user("employee")


@pytest_asyncio.fixture
async def manager(make_user):
    return await make_user("manager", UserRole.MANAGER)


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("admin", UserRole.ADMIN)


@pytest_asyncio.fixture
async def jira(make_software):
    return await make_software("Jira", "Issue tracker")


@pytest.fixture
def auth_headers():
    """Build a Bearer header carrying a fresh access token for a user."""

    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _auth_headers
