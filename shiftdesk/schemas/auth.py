"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers sign-in, sign-up, token issuance/refresh, the current session and
the profile record.
"""

from datetime import datetime

from pydantic import BaseModel

from shiftdesk.models.enums import UserRole


class SignInRequest(BaseModel):
    """로그인 요청 스키마.

    Sign-in request schema. The username is mapped to the credential
    address on the server; clients never send the synthesized address.

    Attributes:
        username: 사용자 로그인 아이디 (User login identifier)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    username: str
    password: str


class SignUpRequest(BaseModel):
    """회원가입 요청 스키마.

    Sign-up request schema. Fields are optional at the schema level so the
    service can answer missing values with the same 400 messages the
    client pre-check produces.

    Attributes:
        username: 사용자 아이디 (Desired login username)
        password: 비밀번호 (Plain text, bcrypt-hashed on the server)
        name: 표시 이름 (Display name)
        role: 역할 — 기본 "worker" (Role, defaults to worker)
    """

    username: str | None = None
    password: str | None = None
    name: str | None = None
    role: UserRole = UserRole.WORKER


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after a successful sign-in or token refresh.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str  # JWT 액세스 토큰: 만료: 30분 기본 (Access token, default TTL: 30min)
    refresh_token: str  # JWT 리프레시 토큰: 만료: 7일 기본 (Refresh token, default TTL: 7 days)
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """토큰 갱신/로그아웃 요청 스키마 (Refresh and sign-out request schema)."""

    refresh_token: str


class ProfileResponse(BaseModel):
    """프로필 응답 스키마.

    Profile (users row) response schema.

    Attributes:
        id: 프로필 UUID (Profile identifier, equals identity id)
        name: 표시 이름 (Display name)
        role: 역할 (Role)
        created_at: 가입 일시 (Registration timestamp)
    """

    id: str
    name: str
    role: UserRole
    created_at: datetime


class SessionResponse(BaseModel):
    """현재 세션 응답 스키마 (GET /auth/session).

    The raw session: which identity the bearer token belongs to and when
    the token expires. Says nothing about the profile.

    Attributes:
        identity_id: 자격 증명 UUID (Identity identifier)
        email: 자격 증명 주소 (Credential address)
        username: 사용자명 (Username part of the address)
        expires_at: 액세스 토큰 만료 시각 (Access token expiry)
    """

    identity_id: str
    email: str
    username: str
    expires_at: datetime
