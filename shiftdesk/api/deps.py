"""FastAPI 의존성 주입 모듈 — 인증 및 역할 검사.

FastAPI dependency injection module — Authentication and role gating.
This is the only place role-based access is enforced on the server: the
shift and approval services trust whatever reaches them through a router
guarded by ``require_role``. A new router must declare its guard here.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    3. 페이로드의 "sub" 필드로 자격 증명을 조회 (Identity fetched by "sub")
    4. 같은 ID로 프로필을 조회 (Profile fetched by the same id)

Authorization Flow (require_role):
    - 토큰 없음/무효 → 401 (No or invalid token → 401)
    - 프로필 미생성 → 403 (Session without a profile → 403)
    - 역할 불일치 → 403 (Wrong role → 403)
"""

from typing import Annotated, Any, Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.database import get_db
from shiftdesk.models.enums import UserRole
from shiftdesk.models.identity import Identity
from shiftdesk.models.user import User
from shiftdesk.repositories.identity_repository import identity_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.utils.exceptions import ForbiddenError, UnauthorizedError
from shiftdesk.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기: 헤더가 없으면 직접 401을 반환하도록 auto_error 비활성화
# (Extracts the bearer token; missing headers are answered with 401 below)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> dict[str, Any]:
    """Bearer 토큰을 검증하고 페이로드를 반환합니다.

    Verify the bearer access token and return its payload.

    Raises:
        UnauthorizedError: 토큰 없음, 만료, 위조, 리프레시 토큰 사용
                           (Missing, expired, forged, or refresh token)
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    try:
        payload: dict[str, Any] = decode_token(credentials.credentials)
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError):
        raise UnauthorizedError("Invalid or expired token")

    # 토큰 타입 검증: Reject refresh tokens used as access tokens
    if payload.get("type") != "access" or payload.get("sub") is None:
        raise UnauthorizedError("Invalid token")
    return payload


async def get_current_identity(
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Identity:
    """토큰의 자격 증명을 조회합니다 (Identity behind the access token).

    Raises:
        UnauthorizedError: 자격 증명이 없을 때 (Identity no longer exists)
    """
    try:
        identity_id: UUID = UUID(payload["sub"])
    except ValueError:
        raise UnauthorizedError("Invalid token")

    identity: Identity | None = await identity_repository.get_by_id(db, identity_id)
    if identity is None:
        raise UnauthorizedError("Identity not found")
    return identity


async def get_current_user(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """현재 세션의 프로필을 반환합니다.

    Return the profile of the signed-in identity.

    Raises:
        ForbiddenError: 세션은 있으나 프로필이 없을 때 (Session without a profile)
    """
    user: User | None = await user_repository.get_by_id(db, identity.id)
    if user is None:
        raise ForbiddenError("Profile not available")
    return user


def require_role(*roles: UserRole) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory that lets only profiles with one of ``roles`` through.

    Args:
        roles: 허용 역할 목록 (Allowed roles)

    Returns:
        FastAPI 의존성 함수 — 프로필 반환 또는 403 발생
        (Dependency returning the profile or raising 403)
    """
    allowed: set[str] = {r.value for r in roles}

    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return current_user
    return _check


# 편의 의존성: Pre-configured role dependencies
require_admin = require_role(UserRole.ADMIN)    # 관리자 화면 (Admin views)
require_worker = require_role(UserRole.WORKER)  # 근무자 화면 (Worker views)
