"""근무 레포지토리 — 근무 목록 조회 쿼리.

Shift Repository — Shift listings by status, by worker, and all shifts
with their profiles.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shiftdesk.models.shift import Shift
from shiftdesk.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[Shift]):
    """근무 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the shifts table.
    Listings eager-load the owning profile so responses can carry the
    worker's name without extra round trips.
    """

    def __init__(self) -> None:
        super().__init__(Shift)

    async def get_with_user(
        self,
        db: AsyncSession,
        shift_id: UUID,
    ) -> Shift | None:
        """근무 1건을 프로필과 함께 조회합니다 (Single shift with its profile)."""
        query: Select = (
            select(Shift)
            .options(selectinload(Shift.user))
            .where(Shift.id == shift_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_status(
        self,
        db: AsyncSession,
        status: str,
    ) -> list[Shift]:
        """상태로 근무 목록을 날짜 오름차순으로 조회합니다.

        Retrieve shifts with the given status, ordered by date ascending.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            status: 요청 상태 (Request status)

        Returns:
            list[Shift]: 근무 목록 (Shifts, earliest first)
        """
        query: Select = (
            select(Shift)
            .options(selectinload(Shift.user))
            .where(Shift.status == status)
            .order_by(Shift.date.asc(), Shift.created_at.asc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_all_with_user(
        self,
        db: AsyncSession,
    ) -> list[Shift]:
        """모든 근무를 프로필과 함께 날짜 내림차순으로 조회합니다.

        Retrieve every shift joined with its profile, most recent date first.
        """
        query: Select = (
            select(Shift)
            .options(selectinload(Shift.user))
            .order_by(Shift.date.desc(), Shift.created_at.asc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[Shift]:
        """근무자 본인의 근무를 날짜 내림차순으로 조회합니다.

        Retrieve one worker's shifts, most recent date first.
        """
        query: Select = (
            select(Shift)
            .where(Shift.user_id == user_id)
            .order_by(Shift.date.desc(), Shift.created_at.asc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스: Singleton instance
shift_repository: ShiftRepository = ShiftRepository()
