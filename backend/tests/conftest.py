"""
Content Hub - Test Configuration
Pytest fixtures and configuration for testing
"""
from collections.abc import AsyncGenerator, Callable, Coroutine, Generator
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

import contenthub.models  # noqa: F401
from contenthub.core.database import Base, get_db
from contenthub.core.security import create_access_token, get_password_hash
from contenthub.main import app
from contenthub.models.user import User, UserRole


# Test database URL (use SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

# Create test engine
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=NullPool,
)

test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_maker() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def session_maker() -> async_sessionmaker[AsyncSession]:
    """Opens sessions independent of ``db_session``, to read what was committed."""
    return test_session_maker


@pytest.fixture
def failing_flush(db_session: AsyncSession) -> Generator[Callable[[], None], None, None]:
    """Call the returned function to make every later flush of ``db_session`` fail."""
    target = db_session.sync_session

    def _fail(session, flush_context, instances):
        raise OperationalError("UPDATE curriculum_documents", {}, Exception("database is unavailable"))

    def _arm() -> None:
        event.listen(target, "before_flush", _fail)

    yield _arm
    if event.contains(target, "before_flush", _fail):
        event.remove(target, "before_flush", _fail)


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Coroutine[Any, Any, User]]:
    """Factory that stores an account directly, bypassing registration."""

    async def _make_user(
        email: str,
        role: UserRole = UserRole.CONTRIBUTOR,
        full_name: str = "Test User",
        is_approved: bool = True,
        password: str = "TestPass123",
    ) -> User:
        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            full_name=full_name,
            role=role.value,
            is_active=True,
            is_approved=is_approved,
        )
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Builds a Bearer header for a stored user."""

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(subject=str(user.id), additional_claims={"role": user.role_value})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def admin(make_user) -> User:
    return await make_user("admin@example.com", role=UserRole.ADMIN, full_name="Admin")


@pytest_asyncio.fixture
async def moderator(make_user) -> User:
    return await make_user("moderator@example.com", role=UserRole.MODERATOR, full_name="Moderator")


@pytest_asyncio.fixture
async def contributor(make_user) -> User:
    return await make_user("contributor@example.com", full_name="Rina Das")


@pytest.fixture
def sample_user_data() -> dict[str, Any]:
    """Sample user registration data."""
    return {
        "email": "test@example.com",
        "password": "TestPass123!",
        "full_name": "Test User",
    }


@pytest.fixture
def sample_material_data() -> dict[str, Any]:
    """Material classified under a path of the seeded curriculum."""
    return {
        "title": "Velocity explained",
        "description": "Short video on speed versus velocity",
        "type": "mp4",
        "url": "https://storage.example.com/materials/velocity.mp4",
        "file_size": "12 MB",
        "class_name": "Class 9",
        "subject": "Science",
        "chapter": "Physics",
        "topic": "Motion",
        "subtopic": "Speed and Velocity",
        "blooms_level": "Level 1 (Remember & Understand)",
    }
