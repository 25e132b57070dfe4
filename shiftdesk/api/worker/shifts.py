"""근무자 근무 라우터 — 내 근무 목록 조회 및 근무 요청.

Worker Shift Router — list my shifts and request a new one.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import require_worker
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.shift import ShiftRequestCreate, ShiftResponse
from shiftdesk.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_my_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_worker)],
) -> list[ShiftResponse]:
    """내 근무 목록, 최근 날짜 우선.

    List the caller's shifts, most recent date first.
    """
    return await shift_service.list_for_user(db, current_user.id)


@router.post("", response_model=ShiftResponse, status_code=201)
async def request_shift(
    data: ShiftRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_worker)],
) -> ShiftResponse:
    """근무를 요청합니다 (상태: pending).

    Request a shift. It waits for an admin decision.
    """
    result: ShiftResponse = await shift_service.request_shift(db, current_user, data)
    await db.commit()
    return result
