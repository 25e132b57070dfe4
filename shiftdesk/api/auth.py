"""공통 인증 라우터 — 로그인, 회원가입, 토큰 갱신, 로그아웃, 세션/프로필 조회.

Common Auth Router — sign-in, sign-up, token refresh, sign-out and the
current session/profile. Shared by worker and admin clients.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.api.deps import get_current_identity, get_current_user, get_token_payload
from shiftdesk.database import get_db
from shiftdesk.models.identity import Identity
from shiftdesk.models.user import User
from shiftdesk.schemas.auth import (
    ProfileResponse,
    RefreshRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
)
from shiftdesk.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(
    data: SignInRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 — 사용자명/비밀번호로 토큰 쌍 발급.

    Sign in with username and password; returns a token pair.
    """
    result: TokenResponse = await auth_service.sign_in(db, data)
    await db.commit()
    return result


@router.post("/sign-up", response_model=ProfileResponse, status_code=201)
async def sign_up(
    data: SignUpRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """회원가입 — 자격 증명과 프로필 생성, 자동 로그인 없음.

    Register an identity and its profile. The caller still has to sign in.
    """
    result: ProfileResponse = await auth_service.sign_up(db, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급.

    Issue a new token pair using a refresh token.
    """
    result: TokenResponse = await auth_service.refresh_tokens(db, data)
    await db.commit()
    return result


@router.post("/sign-out", status_code=204)
async def sign_out(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """로그아웃 — 리프레시 토큰 폐기 (Revoke the given refresh token)."""
    await auth_service.sign_out(db, data.refresh_token)
    await db.commit()


@router.get("/session", response_model=SessionResponse)
async def get_session(
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> SessionResponse:
    """현재 세션 조회 — 프로필 유무와 무관.

    Describe the session behind the bearer token, whether or not a
    profile exists for it yet.
    """
    return auth_service.get_session(identity, payload)


@router.get("/me", response_model=ProfileResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> ProfileResponse:
    """현재 사용자 프로필 조회 (Profile of the signed-in user)."""
    return auth_service.to_profile_response(current_user)
