import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "audition_studio_test.db"

# Must be set before src.config is imported
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.auth.dependencies import get_current_active_user
from src.auth.utils import create_access_token, get_password_hash
from src.checkin.dependencies import get_check_in_service
from src.checkin.service import CheckInService
from src.database import Base, get_db
from src.main import app
from src.rewards.models import CheckInRewardConfig
from src.users.models import User, UserRole

API = "/api/v1"

test_engine = create_async_engine(f"sqlite+aiosqlite:///{TEST_DB_PATH}", poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def override_get_db():
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture(autouse=True)
async def setup_database():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db():
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def make_user(db: AsyncSession, username: str, role: UserRole = UserRole.USER, **fields) -> User:
    user = User(
        username=username,
        email=f"{username}@gmail.com",
        full_name=username.title(),
        hashed_password=get_password_hash("secret123"),
        role=role,
        is_active=True,
        **fields,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "username": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user(db):
    return await make_user(db, "linh")


@pytest.fixture
async def admin(db):
    return await make_user(db, "admin", role=UserRole.ADMIN)


async def load_user(db: AsyncSession, user_id: int) -> User:
    """Fresh copy of the row, soft-deleted or not"""
    result = await db.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True),
        execution_options={"include_deleted": True},
    )
    return result.scalar_one()


@pytest.fixture
async def deleted_user(db, user):
    """Authenticated user whose row was soft-deleted after the token was resolved"""
    user.soft_delete()
    await db.commit()
    app.dependency_overrides[get_current_active_user] = lambda: user
    return user


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
async def default_rewards(db):
    """Catalog shipped by the initial migration"""
    rows = [
        CheckInRewardConfig(consecutive_days=1, diamond_reward=5, xp_reward=10, is_active=True),
        CheckInRewardConfig(consecutive_days=7, diamond_reward=20, xp_reward=50, is_active=True),
        CheckInRewardConfig(consecutive_days=14, diamond_reward=50, xp_reward=100, is_active=True),
        CheckInRewardConfig(consecutive_days=30, diamond_reward=100, xp_reward=200, is_active=True),
    ]
    db.add_all(rows)
    await db.commit()
    return rows


class FakeClock:
    """Settable UTC clock for the check-in service"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture
def clock():
    fake = FakeClock(datetime(2026, 3, 10, 5, 0, tzinfo=timezone.utc))
    app.dependency_overrides[get_check_in_service] = lambda: CheckInService(clock=fake)
    return fake
