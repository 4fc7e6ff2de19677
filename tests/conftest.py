"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.security import hash_password
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.service import Service
from app.models.specialist import Specialist
from app.models.user import User, UserRole
from tests.factories import bearer

# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client bound to the app with overridden dependencies."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def _create_user(
    session: AsyncSession,
    name: str,
    email: str,
    role: UserRole,
    password: str = "password123",
) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
        role=role,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def customer(async_session: AsyncSession) -> User:
    """Create a customer."""
    return await _create_user(async_session, "Casey Customer", "casey@example.com", UserRole.CUSTOMER)


@pytest.fixture
async def other_customer(async_session: AsyncSession) -> User:
    """Create a second, unrelated customer."""
    return await _create_user(async_session, "Robin Other", "robin@example.com", UserRole.CUSTOMER)


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    """Create an admin."""
    return await _create_user(async_session, "Ada Admin", "admin@example.com", UserRole.ADMIN)


async def _create_specialist(
    session: AsyncSession, name: str, email: str, classification: str
) -> Specialist:
    user = await _create_user(session, name, email, UserRole.SPECIALIST)
    profile = Specialist(
        user_id=user.id,
        description=f"{name} profile",
        classification=classification,
        years_experience=5,
    )
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile


@pytest.fixture
async def specialist(async_session: AsyncSession) -> Specialist:
    """Create a specialist profile with its user."""
    return await _create_specialist(async_session, "Sam Specialist", "sam@example.com", "senior")


@pytest.fixture
async def second_specialist(async_session: AsyncSession) -> Specialist:
    """Create another specialist profile with its user."""
    return await _create_specialist(async_session, "Jo Specialist", "jo@example.com", "junior")


@pytest.fixture
async def service(async_session: AsyncSession) -> Service:
    """Create an active service."""
    item = Service(title="Consultation", price=50, duration_minutes=60, is_active=True)
    async_session.add(item)
    await async_session.commit()
    await async_session.refresh(item)
    return item


@pytest.fixture
async def inactive_service(async_session: AsyncSession) -> Service:
    """Create a deactivated service."""
    item = Service(title="Retired", price=10, duration_minutes=60, is_active=False)
    async_session.add(item)
    await async_session.commit()
    await async_session.refresh(item)
    return item


@pytest.fixture
def booking_day() -> date:
    """A service date safely in the future."""
    return (datetime.now(timezone.utc) + timedelta(days=10)).date()


@pytest.fixture
def auth_headers(customer: User) -> dict[str, str]:
    """Authorization headers for the customer."""
    return bearer(customer)


@pytest.fixture
def other_auth_headers(other_customer: User) -> dict[str, str]:
    """Authorization headers for the second customer."""
    return bearer(other_customer)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict[str, str]:
    """Authorization headers for the admin."""
    return bearer(admin_user)
