"""초기 데이터 시드 스크립트 — 테이블 및 관리자 계정 생성.

Seed script — Creates the tables and a bootstrap admin account.
Sign-up lets anyone pick a role, but a fresh deployment still needs one
admin to exist before the first worker signs up.

Usage:
    python -m shiftdesk.seed

Settings:
    SEED_ADMIN_USERNAME, SEED_ADMIN_PASSWORD and SEED_ADMIN_NAME (see ``shiftdesk.config``)
"""

import asyncio
import logging

import shiftdesk.models  # noqa: F401  모든 테이블 메타데이터 등록 (registers every table)
from shiftdesk.config import settings
from shiftdesk.database import Base, async_session, engine
from shiftdesk.models.enums import UserRole
from shiftdesk.repositories.identity_repository import identity_repository
from shiftdesk.schemas.auth import SignUpRequest
from shiftdesk.services.auth_service import auth_service
from shiftdesk.utils.credentials import username_to_email

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create all tables, then register the bootstrap admin through the
    regular sign-up path.

    Idempotent: 관리자가 이미 있으면 건너뜁니다 (Skips if the admin exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    username: str = settings.SEED_ADMIN_USERNAME
    data = SignUpRequest(
        username=username,
        password=settings.SEED_ADMIN_PASSWORD,
        name=settings.SEED_ADMIN_NAME,
        role=UserRole.ADMIN,
    )

    async with async_session() as db:
        if await identity_repository.get_by_email(db, username_to_email(username)):
            logger.info("Already seeded. Skipping.")
            return
        profile = await auth_service.sign_up(db, data)
        await db.commit()
        logger.info("Seeded admin %s (%s)", username, profile.id)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
