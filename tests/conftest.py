"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh schema on its own StaticPool engine, so no cleanup
pass is needed between tests.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from shiftdesk.client.api import ShiftDeskAPI
from shiftdesk.database import Base, get_db
from shiftdesk.main import app
from shiftdesk.models import *  # noqa: F401,F403: register all models with metadata
from shiftdesk.models.enums import RequestStatus, UserRole
from shiftdesk.models.identity import Identity
from shiftdesk.models.shift import Shift
from shiftdesk.models.user import User
from shiftdesk.utils.credentials import username_to_email
from shiftdesk.utils.jwt import create_access_token
from shiftdesk.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"
API_BASE_URL = "http://test/api/v1"

WORKER_PASSWORD = "marko123"
ADMIN_PASSWORD = "admin123"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 인메모리 엔진과 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_api(client: AsyncClient) -> AsyncGenerator:
    """ASGI 앱으로 직접 요청하는 ShiftDeskAPI 팩토리.

    Factory for ``ShiftDeskAPI`` instances wired to the app in-process. Depends
    on ``client`` so the DB override is in place.
    """
    created: list[ShiftDeskAPI] = []

    def _make() -> ShiftDeskAPI:
        api = ShiftDeskAPI(base_url=API_BASE_URL, transport=ASGITransport(app=app))
        created.append(api)
        return api

    yield _make

    for api in created:
        await api.close()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_profile(
    db: AsyncSession,
    username: str,
    name: str,
    role: UserRole,
    password: str = WORKER_PASSWORD,
) -> User:
    """자격 증명과 프로필을 함께 생성합니다."""
    identity = Identity(email=username_to_email(username), password_hash=hash_password(password))
    db.add(identity)
    await db.flush()
    user = User(id=identity.id, name=name, role=role.value)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def create_shift(
    db: AsyncSession,
    user: User,
    day,
    shift_type: str = "1",
    status: RequestStatus = RequestStatus.PENDING,
) -> Shift:
    """근무 1건을 직접 생성합니다."""
    shift = Shift(user_id=user.id, date=day, shift_type=shift_type, status=status.value)
    db.add(shift)
    await db.flush()
    await db.refresh(shift)
    return shift


@pytest_asyncio.fixture
async def worker_user(db: AsyncSession) -> User:
    """근무자 marko를 생성합니다."""
    return await create_profile(db, "marko", "Marko Marković", UserRole.WORKER)


@pytest_asyncio.fixture
async def other_worker(db: AsyncSession) -> User:
    """두 번째 근무자 ana를 생성합니다."""
    return await create_profile(db, "ana", "Ana Anić", UserRole.WORKER)


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자를 생성합니다."""
    return await create_profile(db, "admin", "Admin", UserRole.ADMIN, password=ADMIN_PASSWORD)


def make_token(identity_id) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(identity_id)})


@pytest.fixture
def worker_token(worker_user) -> str:
    return make_token(worker_user.id)


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user.id)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
