"""인증 서비스 — 로그인, 회원가입, 토큰 갱신, 세션/프로필 조회.

Auth Service — Business logic for sign-in, sign-up, token refresh,
sign-out and session/profile retrieval.
Usernames are mapped to credential addresses before any lookup, so the
identity table only ever sees ``username@CREDENTIAL_DOMAIN``.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.config import settings
from shiftdesk.models.identity import Identity
from shiftdesk.models.user import User
from shiftdesk.repositories.identity_repository import identity_repository
from shiftdesk.repositories.user_repository import user_repository
from shiftdesk.schemas.auth import (
    ProfileResponse,
    RefreshRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
)
from shiftdesk.utils.credentials import email_to_username, sign_up_problems, username_to_email
from shiftdesk.utils.exceptions import (
    AlreadyRegisteredError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from shiftdesk.utils.jwt import create_access_token, create_refresh_token, decode_token
from shiftdesk.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    Manages registration, sign-in, token refresh, sign-out and lookups
    of the current session and profile.
    """

    @staticmethod
    def to_profile_response(user: User) -> ProfileResponse:
        """프로필 모델을 응답 스키마로 변환합니다 (Profile model → response)."""
        return ProfileResponse(
            id=str(user.id),
            name=user.name,
            role=user.role,
            created_at=user.created_at,
        )

    async def _generate_tokens(
        self,
        db: AsyncSession,
        identity: Identity,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate an access/refresh token pair and persist the refresh token.
        Older refresh tokens of the identity are dropped first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            identity: 자격 증명 모델 (Identity model instance)

        Returns:
            TokenResponse: 토큰 응답 (Token response with access and refresh tokens)
        """
        payload: dict[str, str] = {"sub": str(identity.id), "email": identity.email}
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        # 기존 리프레시 토큰 정리: Clean up old refresh tokens to prevent accumulation
        await identity_repository.delete_identity_refresh_tokens(db, identity.id)

        expires_at: datetime = datetime.now(timezone.utc) + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await identity_repository.create_refresh_token(
            db, identity_id=identity.id, token=refresh_token, expires_at=expires_at
        )

        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def sign_up(
        self,
        db: AsyncSession,
        data: SignUpRequest,
    ) -> ProfileResponse:
        """새 자격 증명과 프로필을 생성합니다.

        Register a new identity under the synthesized credential address,
        then create its profile with the given display name and role.
        Does not sign the new account in.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Sign-up request data)

        Returns:
            ProfileResponse: 생성된 프로필 (Created profile)

        Raises:
            ValidationError: 입력값이 비었거나 비밀번호가 짧을 때
                             (Empty fields or password too short)
            AlreadyRegisteredError: 같은 사용자명이 이미 존재할 때
                                    (Username already taken)
        """
        problems: list[str] = sign_up_problems(data.username, data.password, data.name)
        if problems:
            raise ValidationError("; ".join(problems))

        email: str = username_to_email(data.username)
        existing: Identity | None = await identity_repository.get_by_email(db, email)
        if existing is not None:
            logger.info("Sign-up refused, %s is already registered", email)
            raise AlreadyRegisteredError()

        try:
            identity: Identity = await identity_repository.create(
                db,
                {"email": email, "password_hash": hash_password(data.password)},
            )
        except IntegrityError:
            await db.rollback()
            logger.warning("Concurrent sign-up for %s lost to the unique constraint", email)
            raise AlreadyRegisteredError()

        profile: User = await user_repository.create(
            db,
            {"id": identity.id, "name": data.name.strip(), "role": data.role.value},
        )
        logger.info("Registered %s as %s", email, profile.role)
        return self.to_profile_response(profile)

    async def sign_in(
        self,
        db: AsyncSession,
        data: SignInRequest,
    ) -> TokenResponse:
        """로그인을 처리합니다.

        Authenticate a username/password pair.

        Raises:
            InvalidCredentialsError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        email: str = username_to_email(data.username)
        identity: Identity | None = await identity_repository.get_by_email(db, email)
        if identity is None or not verify_password(data.password, identity.password_hash):
            logger.warning("Failed sign-in for %s", email)
            raise InvalidCredentialsError()

        return await self._generate_tokens(db, identity)

    async def refresh_tokens(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Issue a new token pair using a stored, unexpired refresh token.

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 리프레시 토큰일 때
                               (Invalid or expired refresh token)
        """
        db_token = await identity_repository.get_refresh_token(db, data.refresh_token)
        if db_token is None:
            raise UnauthorizedError("Invalid refresh token")

        expires_at: datetime = db_token.expires_at
        # SQLite는 tz 정보 없이 반환: naive timestamps are stored as UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at < datetime.now(timezone.utc):
            await identity_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("Refresh token has expired")

        try:
            payload: dict = decode_token(data.refresh_token)
        except Exception:
            await identity_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("Invalid refresh token")

        identity: Identity | None = await identity_repository.get_by_id(db, UUID(payload["sub"]))
        if identity is None:
            raise UnauthorizedError("Identity not found")

        await identity_repository.delete_refresh_token(db, data.refresh_token)
        return await self._generate_tokens(db, identity)

    async def sign_out(
        self,
        db: AsyncSession,
        refresh_token: str,
    ) -> None:
        """로그아웃 처리 — 리프레시 토큰을 삭제합니다.

        End the session by revoking its refresh token. Unknown tokens are
        ignored so signing out twice is harmless.
        """
        await identity_repository.delete_refresh_token(db, refresh_token)

    def get_session(
        self,
        identity: Identity,
        payload: dict,
    ) -> SessionResponse:
        """현재 세션 정보를 반환합니다 (Describe the session behind a token)."""
        return SessionResponse(
            identity_id=str(identity.id),
            email=identity.email,
            username=email_to_username(identity.email),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    async def get_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> ProfileResponse:
        """ID로 프로필을 조회합니다.

        Fetch one profile by id.

        Raises:
            NotFoundError: 프로필이 없을 때 (Profile not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("Profile not found")
        return self.to_profile_response(user)


# 싱글턴 인스턴스: Singleton instance
auth_service: AuthService = AuthService()
