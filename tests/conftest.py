"""Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database. HTTP tests talk to
app.main:app through httpx with get_db overridden to that database.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ["RATE_LIMIT_ENABLED"] = "0"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database.base import Base  # noqa: E402
from app.core.database.engine import enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.features.permissions.models import Permission  # noqa: E402,F401
from app.features.roles.models import Role  # noqa: E402
from app.features.users.models import User  # noqa: E402,F401
from app.features.users.schemas import UserCreate  # noqa: E402
from app.features.users.service import UserDirectoryService  # noqa: E402
from app.main import app  # noqa: E402
from tests.factories import user_payload  # noqa: E402


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
def service(db_session) -> UserDirectoryService:
    return UserDirectoryService(db_session)


@pytest.fixture
async def roles(db_session) -> dict[str, Role]:
    """Two stored roles keyed by name."""
    admin = Role(name="admin", description="Administrator")
    viewer = Role(name="viewer", description="Read-only")
    db_session.add_all([admin, viewer])
    await db_session.commit()
    return {"admin": admin, "viewer": viewer}


@pytest.fixture
def make_user(service, db_session):
    """Create a user through the service, commit it and clear the identity map,
    as if the user had been created by an earlier request."""
    async def _make_user(**overrides):
        created = await service.create_user(UserCreate(**user_payload(**overrides)))
        await db_session.commit()
        db_session.expunge_all()
        return created
    return _make_user


@pytest.fixture
async def client(session_factory) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
