"""승인 및 집계 서비스 — 근무 승인/거절, 근무 시간 집계, 날짜별 캘린더.

Approval & Aggregation Service — approve/reject pending shifts, per-worker
hour totals and the date-grouped calendar for the admin views.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.enums import RequestStatus, UserRole
from shiftdesk.models.shift import Shift
from shiftdesk.models.user import User
from shiftdesk.repositories.shift_repository import shift_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.schemas.auth import ProfileResponse
from shiftdesk.schemas.shift import CalendarDayResponse, HoursResponse, ShiftResponse
from shiftdesk.services.auth_service import auth_service
from shiftdesk.services.shift_service import shift_service
from shiftdesk.utils.exceptions import NotFoundError, ValidationError
from shiftdesk.utils.shift_rules import compute_hours, group_by_date, sorted_dates

logger = logging.getLogger(__name__)


class ApprovalService:
    """관리자용 승인/집계 서비스.

    Admin-side service. Trusts the router's role gate and performs no
    authorization of its own.
    """

    async def _decide(
        self,
        db: AsyncSession,
        shift_id: UUID,
        decision: RequestStatus,
    ) -> ShiftResponse:
        """근무 상태를 pending에서 decision으로 변경합니다.

        Move a shift from ``pending`` to ``decision``. Re-applying the same
        decision is a no-op; switching a decided shift to the other
        decision is refused.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            shift_id: 근무 UUID (Shift UUID)
            decision: approved 또는 rejected (Target status)

        Returns:
            ShiftResponse: 처리된 근무 (Decided shift, with profile)

        Raises:
            NotFoundError: 근무가 없을 때 (Shift not found)
            ValidationError: 이미 다른 결정이 내려진 근무일 때
                             (Shift already carries the opposite decision)
        """
        shift: Shift | None = await shift_repository.get_with_user(db, shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")

        if shift.status == decision:
            return shift_service.to_response(shift, include_user=True)

        if shift.status != RequestStatus.PENDING:
            raise ValidationError(f"Shift has already been {shift.status}")

        shift.status = decision.value
        await db.flush()
        logger.info("Shift %s %s", shift.id, decision.value)
        return shift_service.to_response(shift, include_user=True)

    async def approve(self, db: AsyncSession, shift_id: UUID) -> ShiftResponse:
        return await self._decide(db, shift_id, RequestStatus.APPROVED)

    async def reject(self, db: AsyncSession, shift_id: UUID) -> ShiftResponse:
        return await self._decide(db, shift_id, RequestStatus.REJECTED)

    async def list_by_status(
        self,
        db: AsyncSession,
        status: RequestStatus,
    ) -> list[ShiftResponse]:
        """상태별 근무 목록, 날짜 오름차순 (Shifts with a status, earliest first)."""
        shifts: list[Shift] = await shift_repository.get_by_status(db, status.value)
        return [shift_service.to_response(s, include_user=True) for s in shifts]

    async def list_all(self, db: AsyncSession) -> list[ShiftResponse]:
        """전체 근무 목록, 날짜 내림차순 (Every shift, most recent first)."""
        shifts: list[Shift] = await shift_repository.get_all_with_user(db)
        return [shift_service.to_response(s, include_user=True) for s in shifts]

    async def list_workers(self, db: AsyncSession) -> list[ProfileResponse]:
        """근무자 역할의 프로필 목록 (Profiles with the worker role)."""
        workers: list[User] = await user_repository.get_by_role(db, UserRole.WORKER.value)
        return [auth_service.to_profile_response(w) for w in workers]

    async def hours(self, db: AsyncSession) -> list[HoursResponse]:
        """근무자별 승인 근무 수와 시간을 계산합니다.

        Per-worker approved shift counts and hours, highest first.
        """
        workers: list[User] = await user_repository.get_by_role(db, UserRole.WORKER.value)
        shifts: list[Shift] = await shift_repository.get_all_with_user(db)
        return [
            HoursResponse(
                user=auth_service.to_profile_response(row.user),
                shift_count=row.shift_count,
                hours=row.hours,
            )
            for row in compute_hours(workers, shifts)
        ]

    async def calendar(self, db: AsyncSession) -> list[CalendarDayResponse]:
        """날짜별로 묶은 근무 캘린더, 최근 날짜 우선.

        All shifts grouped by date, most recent date first.
        """
        shifts: list[ShiftResponse] = await self.list_all(db)
        grouped = group_by_date(shifts)
        return [
            CalendarDayResponse(date=day, shifts=grouped[day])
            for day in sorted_dates(grouped)
        ]


# 싱글턴 인스턴스: Singleton instance
approval_service: ApprovalService = ApprovalService()
