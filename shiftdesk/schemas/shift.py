"""근무 관련 Pydantic 요청/응답 스키마 정의.

Shift-related Pydantic request/response schema definitions.
Covers worker requests, admin assignments, shift listings, hour totals
and the date-grouped calendar.
"""

import datetime as dt

from pydantic import BaseModel

from shiftdesk.models.enums import RequestStatus, ShiftType
from shiftdesk.schemas.auth import ProfileResponse


class ShiftRequestCreate(BaseModel):
    """근무자 근무 요청 스키마.

    Worker shift request. Both fields are optional here; absence is
    reported by the service as a 400.

    Attributes:
        date: 근무 날짜 YYYY-MM-DD (Calendar date)
        shift_type: 근무 유형 "1" | "2" | "3" (Shift type)
    """

    date: dt.date | None = None
    shift_type: ShiftType | None = None


class ShiftAssignCreate(BaseModel):
    """관리자 근무 배정 스키마.

    Admin shift assignment. The shift is stored as approved.

    Attributes:
        user_id: 근무자 UUID (Worker profile identifier)
        date: 근무 날짜 (Calendar date)
        shift_type: 근무 유형 (Shift type)
    """

    user_id: str | None = None
    date: dt.date | None = None
    shift_type: ShiftType | None = None


class ShiftResponse(BaseModel):
    """근무 응답 스키마.

    Shift response schema; ``user`` is filled on admin listings.
    """

    id: str
    user_id: str
    date: dt.date
    shift_type: ShiftType
    status: RequestStatus
    created_at: dt.datetime
    user: ProfileResponse | None = None


class HoursResponse(BaseModel):
    """근무자별 근무 시간 집계 응답.

    Approved-shift totals for one worker.

    Attributes:
        user: 근무자 프로필 (Worker profile)
        shift_count: 승인된 근무 수 (Approved shift count)
        hours: 인정 시간 = shift_count × 8 (Credited hours)
    """

    user: ProfileResponse
    shift_count: int
    hours: int


class CalendarDayResponse(BaseModel):
    """날짜별 근무 묶음 (Shifts of one calendar date)."""

    date: dt.date
    shifts: list[ShiftResponse]


class ShiftTypeResponse(BaseModel):
    """근무 유형 정보 (Shift type with label and time window)."""

    value: ShiftType
    label: str
    start: dt.time
    end: dt.time
