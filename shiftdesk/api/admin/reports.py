"""관리자 집계 라우터 — 근무 시간 집계 및 날짜별 캘린더.

Admin Reports Router — per-worker hour totals and the date-grouped calendar.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import require_admin
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.shift import CalendarDayResponse, HoursResponse
from shiftdesk.services.approval_service import approval_service

router: APIRouter = APIRouter()


@router.get("/hours", response_model=list[HoursResponse])
async def get_hours(
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> list[HoursResponse]:
    """근무자별 승인 근무 수와 시간, 시간 내림차순.

    Approved shift counts and hours per worker, highest first.
    """
    return await approval_service.hours(db)


@router.get("/calendar", response_model=list[CalendarDayResponse])
async def get_calendar(
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> list[CalendarDayResponse]:
    """날짜별 근무 캘린더, 최근 날짜 우선 (Shifts by date, most recent first)."""
    return await approval_service.calendar(db)
