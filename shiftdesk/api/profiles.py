"""프로필 및 근무 유형 조회 라우터.

Profile lookup and the shift-type catalogue.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_current_identity
from shiftdesk.database import get_db
from shiftdesk.models.enums import ShiftType
from shiftdesk.models.identity import Identity
from shiftdesk.schemas.auth import ProfileResponse
from shiftdesk.schemas.shift import ShiftTypeResponse
from shiftdesk.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.get("/profiles/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _identity: Annotated[Identity, Depends(get_current_identity)],
) -> ProfileResponse:
    """ID로 프로필을 조회합니다.

    Fetch one profile by id. Any session may call this; the client uses it
    to resolve its own profile right after signing in.
    """
    return await auth_service.get_profile(db, user_id)


@router.get("/shift-types", response_model=list[ShiftTypeResponse])
async def list_shift_types() -> list[ShiftTypeResponse]:
    """근무 유형과 시간대 목록 (Shift types with labels and time windows)."""
    return [
        ShiftTypeResponse(
            value=shift_type,
            label=shift_type.window.label,
            start=shift_type.window.start,
            end=shift_type.window.end,
        )
        for shift_type in ShiftType
    ]
