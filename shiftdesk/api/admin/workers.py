"""관리자 근무자 라우터 (Admin worker listing)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import require_admin
from shiftdesk.database import get_db
from shiftdesk.models.user import User
from shiftdesk.schemas.auth import ProfileResponse
from shiftdesk.services.approval_service import approval_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ProfileResponse])
async def list_workers(
    db: Annotated[AsyncSession, Depends(get_db)],
    _admin: Annotated[User, Depends(require_admin)],
) -> list[ProfileResponse]:
    """근무자 역할의 프로필 목록 (Profiles whose role is worker)."""
    return await approval_service.list_workers(db)
