"""근무 요청 엔진 및 승인/집계 엔진.

Shift Request Engine and Approval & Aggregation Engine.
Both keep the most recently fetched collections in memory and re-fetch
them after every successful mutation, only once the mutation response has
arrived. The duplicate check runs against that local copy, so it is only
as fresh as the last fetch; the server repeats it.
"""

import datetime as dt
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from shiftdesk.client.api import ShiftDeskAPI
from shiftdesk.client.errors import ConflictError, ValidationError
from shiftdesk.config import settings
from shiftdesk.models.enums import RequestStatus, ShiftType
from shiftdesk.schemas.auth import ProfileResponse
from shiftdesk.schemas.shift import ShiftResponse
from shiftdesk.utils.shift_rules import HoursRow, compute_hours, find_conflict, group_by_date, sorted_dates

logger = logging.getLogger(__name__)

ShiftLoader = Callable[[], Awaitable[list[ShiftResponse]]]


def _checked(day: dt.date | None, shift_type: ShiftType | str | None) -> tuple[dt.date, ShiftType]:
    if day is None or not shift_type:
        raise ValidationError("Date and shift type are required")
    if settings.REJECT_PAST_DATES and day < dt.date.today():
        raise ValidationError("Shift date cannot be in the past")
    try:
        return day, ShiftType(shift_type)
    except ValueError:
        raise ValidationError(f"Unknown shift type: {shift_type}")


class ShiftRequestEngine:
    """근무 요청/배정 엔진.

    Creates shifts after the local duplicate check. ``loader`` fetches the
    collection the check runs against: the caller's own shifts for a
    worker, every shift for an admin.

    Args:
        api: API 클라이언트 (API client)
        loader: 근무 목록 조회 함수 (Coroutine function returning the shift list)
        on_change: 변경 후 호출, 기본값은 refresh (Called after a mutation; defaults to refresh)
    """

    def __init__(
        self,
        api: ShiftDeskAPI,
        loader: ShiftLoader,
        on_change: Callable[[], Awaitable[Any]] | None = None,
    ) -> None:
        self._api: ShiftDeskAPI = api
        self._loader: ShiftLoader = loader
        self._on_change: Callable[[], Awaitable[Any]] = on_change or self.refresh
        self.shifts: list[ShiftResponse] = []

    @classmethod
    def for_worker(cls, api: ShiftDeskAPI) -> "ShiftRequestEngine":
        return cls(api, api.list_my_shifts)

    @classmethod
    def for_admin(cls, api: ShiftDeskAPI) -> "ShiftRequestEngine":
        return cls(api, api.list_shifts)

    async def refresh(self) -> list[ShiftResponse]:
        self.shifts = await self._loader()
        return self.shifts

    async def request_shift(
        self,
        user_id: str,
        day: dt.date | None,
        shift_type: ShiftType | str | None,
    ) -> ShiftResponse:
        """근무자 근무 요청 (상태: pending).

        Raises:
            ValidationError: 날짜/유형 누락 (Missing date or shift type)
            ConflictError: 같은 날짜에 이미 근무가 있음, 상태 무관
                           (A shift already exists that date, any status)
        """
        day, shift_type = _checked(day, shift_type)
        if find_conflict(self.shifts, user_id, day) is not None:
            raise ConflictError("You already have a shift on that date")

        created: ShiftResponse = await self._api.request_shift(day, shift_type)
        logger.info("Requested shift %s for %s", created.id, day)
        await self._on_change()
        return created

    async def assign_shift(
        self,
        user_id: str | None,
        day: dt.date | None,
        shift_type: ShiftType | str | None,
    ) -> ShiftResponse:
        """관리자 근무 배정 (상태: approved).

        Raises:
            ValidationError: 근무자/날짜/유형 누락 (Missing worker, date or shift type)
            ConflictError: 해당 근무자가 그 날짜에 이미 근무가 있음
                           (Worker already holds a shift that date)
        """
        if not user_id:
            raise ValidationError("Worker, date and shift type are required")
        day, shift_type = _checked(day, shift_type)
        if find_conflict(self.shifts, user_id, day) is not None:
            raise ConflictError("Worker already has a shift on that date")

        created: ShiftResponse = await self._api.assign_shift(user_id, day, shift_type)
        logger.info("Assigned shift %s to %s for %s", created.id, user_id, day)
        await self._on_change()
        return created


class ApprovalEngine:
    """관리자 화면 엔진 — 승인 대기열, 전체 근무, 근무자, 집계.

    Admin-side engine: the pending queue, all shifts, the worker list, and
    the hours and calendar views computed from them. Performs no role check
    of its own; the navigation guard keeps non-admins away.
    """

    def __init__(self, api: ShiftDeskAPI) -> None:
        self._api: ShiftDeskAPI = api
        self.requests: ShiftRequestEngine = ShiftRequestEngine(
            api, api.list_shifts, on_change=self.refresh
        )
        self.pending: list[ShiftResponse] = []
        self.workers: list[ProfileResponse] = []

    @property
    def shifts(self) -> list[ShiftResponse]:
        return self.requests.shifts

    async def refresh(self) -> None:
        """대기열, 전체 근무, 근무자 목록을 다시 조회합니다 (Re-fetch all three)."""
        self.pending = await self._api.list_shifts(RequestStatus.PENDING)
        await self.requests.refresh()
        self.workers = await self._api.list_workers()

    async def approve(self, shift_id: str) -> ShiftResponse:
        result: ShiftResponse = await self._api.approve(shift_id)
        await self.refresh()
        return result

    async def reject(self, shift_id: str) -> ShiftResponse:
        result: ShiftResponse = await self._api.reject(shift_id)
        await self.refresh()
        return result

    async def assign_shift(
        self,
        user_id: str | None,
        day: dt.date | None,
        shift_type: ShiftType | str | None,
    ) -> ShiftResponse:
        return await self.requests.assign_shift(user_id, day, shift_type)

    def hours(self) -> list[HoursRow[ProfileResponse]]:
        """근무자별 승인 근무 수와 시간 (Approved counts and hours, highest first)."""
        return compute_hours(self.workers, self.shifts)

    def calendar(self) -> list[tuple[dt.date, list[ShiftResponse]]]:
        """날짜별 근무, 최근 날짜 우선 (Shifts per date, most recent first)."""
        grouped = group_by_date(self.shifts)
        return [(day, grouped[day]) for day in sorted_dates(grouped)]
