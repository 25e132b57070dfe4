"""데이터베이스 엔진 및 세션 설정 모듈.

Async SQLAlchemy engine, session factory and ORM base for the identity,
profile and shift tables. Routers own the commit; a request that fails
before committing leaves nothing behind.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from shiftdesk.config import settings

# 비동기 엔진: pool_pre_ping으로 끊긴 연결 재확인 (stale connections are re-checked)
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
)

# expire_on_commit=False: 커밋 후 응답 직렬화 시 재조회 없음 (no reload when building responses)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 (Per-request session dependency).

    Uncommitted work is rolled back when the request raises, so a refused
    shift or sign-up never reaches the database.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 (Async session)
    """
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
