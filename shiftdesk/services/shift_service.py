"""근무 요청 서비스 — 근무자 요청 및 관리자 배정.

Shift Service — worker shift requests and admin shift assignments.
Both paths run the same checks before inserting: required fields present,
and no existing shift for the same worker on the same date (any status).
The ``uq_shift_user_date`` constraint backs the scan for concurrent inserts.
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.config import settings
from shiftdesk.models.enums import RequestStatus, ShiftType, UserRole
from shiftdesk.models.shift import Shift
from shiftdesk.models.user import User
from shiftdesk.repositories.shift_repository import shift_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.schemas.shift import ShiftAssignCreate, ShiftRequestCreate, ShiftResponse
from shiftdesk.services.auth_service import auth_service
from shiftdesk.utils.exceptions import ConflictError, NotFoundError, ValidationError
from shiftdesk.utils.shift_rules import find_conflict

logger = logging.getLogger(__name__)


class ShiftService:
    """근무 생성 관련 비즈니스 로직을 처리하는 서비스.

    Service handling shift creation for workers (pending) and admins
    (approved). Role checks are done by the routers, not here.
    """

    def to_response(self, shift: Shift, include_user: bool = False) -> ShiftResponse:
        """근무 모델을 응답 스키마로 변환합니다.

        Convert a Shift model instance to a ShiftResponse schema.

        Args:
            shift: 근무 모델 (Shift model instance)
            include_user: 프로필 포함 여부, user가 로드된 경우에만 사용
                          (Embed the profile; only when ``shift.user`` is loaded)

        Returns:
            ShiftResponse: 근무 응답 (Shift response)
        """
        return ShiftResponse(
            id=str(shift.id),
            user_id=str(shift.user_id),
            date=shift.date,
            shift_type=shift.shift_type,
            status=shift.status,
            created_at=shift.created_at,
            user=auth_service.to_profile_response(shift.user) if include_user else None,
        )

    @staticmethod
    def _validate(shift_date: date | None, shift_type: ShiftType | None) -> tuple[date, ShiftType]:
        """필수 입력값을 검증합니다.

        Check that date and shift type are present (and, when configured,
        that the date is not in the past).

        Raises:
            ValidationError: 날짜 또는 근무 유형이 없을 때 (Missing date or shift type)
        """
        if shift_date is None or shift_type is None:
            raise ValidationError("Date and shift type are required")
        if settings.REJECT_PAST_DATES and shift_date < date.today():
            raise ValidationError("Shift date cannot be in the past")
        return shift_date, shift_type

    async def _insert(
        self,
        db: AsyncSession,
        user_id: UUID,
        shift_date: date,
        shift_type: ShiftType,
        status: RequestStatus,
    ) -> Shift:
        """근무를 저장합니다. 동시 요청으로 인한 중복은 409로 변환합니다.

        Insert a shift; a unique-constraint violation from a concurrent
        insert becomes a 409.
        """
        try:
            return await shift_repository.create(
                db,
                {
                    "user_id": user_id,
                    "date": shift_date,
                    "shift_type": shift_type.value,
                    "status": status.value,
                },
            )
        except IntegrityError:
            await db.rollback()
            logger.warning("Concurrent insert for %s on %s lost to the unique constraint", user_id, shift_date)
            raise ConflictError("Worker already has a shift on that date")

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[ShiftResponse]:
        """근무자 본인의 근무 목록 (One worker's shifts, most recent first)."""
        shifts: list[Shift] = await shift_repository.get_by_user(db, user_id)
        return [self.to_response(s) for s in shifts]

    async def request_shift(
        self,
        db: AsyncSession,
        user: User,
        data: ShiftRequestCreate,
    ) -> ShiftResponse:
        """근무자의 근무 요청을 생성합니다 (상태: pending).

        Create a worker's shift request with status ``pending``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 요청한 근무자 프로필 (Requesting worker profile)
            data: 요청 데이터 (Request data)

        Returns:
            ShiftResponse: 생성된 근무 (Created shift)

        Raises:
            ValidationError: 날짜 또는 근무 유형 누락 (Missing date or shift type)
            ConflictError: 해당 날짜에 이미 근무가 있을 때 (Shift already held that date)
        """
        shift_date, shift_type = self._validate(data.date, data.shift_type)

        own_shifts: list[Shift] = await shift_repository.get_by_user(db, user.id)
        if find_conflict(own_shifts, user.id, shift_date) is not None:
            logger.info("Request refused, %s already has a shift on %s", user.id, shift_date)
            raise ConflictError("You already have a shift on that date")

        shift: Shift = await self._insert(db, user.id, shift_date, shift_type, RequestStatus.PENDING)
        logger.info("Shift %s requested by %s for %s (type %s)", shift.id, user.id, shift_date, shift_type.value)
        return self.to_response(shift)

    async def assign_shift(
        self,
        db: AsyncSession,
        data: ShiftAssignCreate,
    ) -> ShiftResponse:
        """관리자가 근무자에게 근무를 직접 배정합니다 (상태: approved).

        Assign a shift to a worker directly; it is stored as ``approved``
        and needs no separate approval step.

        Raises:
            ValidationError: 입력값 누락 또는 잘못된 근무자 ID (Missing fields or bad worker id)
            NotFoundError: 근무자가 없을 때 (Worker not found)
            ConflictError: 해당 날짜에 이미 근무가 있을 때 (Shift already held that date)
        """
        if not data.user_id:
            raise ValidationError("Worker, date and shift type are required")
        shift_date, shift_type = self._validate(data.date, data.shift_type)

        try:
            worker_id: UUID = UUID(data.user_id)
        except ValueError:
            raise ValidationError("Invalid worker id")

        worker: User | None = await user_repository.get_by_id(db, worker_id)
        if worker is None or worker.role != UserRole.WORKER:
            raise NotFoundError("Worker not found")

        all_shifts: list[Shift] = await shift_repository.get_all_with_user(db)
        if find_conflict(all_shifts, worker_id, shift_date) is not None:
            logger.info("Assignment refused, %s already has a shift on %s", worker_id, shift_date)
            raise ConflictError("Worker already has a shift on that date")

        shift: Shift = await self._insert(db, worker_id, shift_date, shift_type, RequestStatus.APPROVED)
        logger.info("Shift %s assigned to %s for %s (type %s)", shift.id, worker_id, shift_date, shift_type.value)
        return self.to_response(shift)


# 싱글턴 인스턴스: Singleton instance
shift_service: ShiftService = ShiftService()
