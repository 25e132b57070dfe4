"""관리자 근무 라우터 — 근무 목록, 직접 배정, 승인/거절.

Admin Shift Router — list shifts, assign shifts directly, and approve or
reject pending requests.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import require_admin
from shiftdesk.database import get_db
from shiftdesk.models.enums import RequestStatus
from shiftdesk.models.user import User
from shiftdesk.schemas.shift import ShiftAssignCreate, ShiftResponse
from shiftdesk.services.approval_service import approval_service
from shiftdesk.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
    status: Annotated[RequestStatus | None, Query()] = None,
) -> list[ShiftResponse]:
    """근무 목록을 조회합니다.

    Without ``status``: every shift, most recent date first.
    With ``status``: only that status, earliest date first (the approval queue).
    """
    if status is None:
        return await approval_service.list_all(db)
    return await approval_service.list_by_status(db, status)


@router.post("", response_model=ShiftResponse, status_code=201)
async def assign_shift(
    data: ShiftAssignCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    """근무자에게 근무를 직접 배정합니다 (상태: approved).

    Assign a shift to a worker; it is approved immediately.
    """
    result: ShiftResponse = await shift_service.assign_shift(db, data)
    await db.commit()
    return result


@router.post("/{shift_id}/approve", response_model=ShiftResponse)
async def approve_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    """근무 요청 승인 (Approve a pending shift)."""
    result: ShiftResponse = await approval_service.approve(db, shift_id)
    await db.commit()
    return result


@router.post("/{shift_id}/reject", response_model=ShiftResponse)
async def reject_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> ShiftResponse:
    """근무 요청 거절 (Reject a pending shift)."""
    result: ShiftResponse = await approval_service.reject(db, shift_id)
    await db.commit()
    return result
