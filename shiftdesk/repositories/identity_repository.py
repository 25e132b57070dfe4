"""자격 증명 레포지토리 — 자격 증명 조회 및 리프레시 토큰 CRUD.

Identity Repository — Credential lookup and refresh token lifecycle.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.identity import Identity, RefreshToken
from shiftdesk.repositories.base import BaseRepository


class IdentityRepository(BaseRepository[Identity]):
    """자격 증명 및 세션 토큰 쿼리를 담당하는 레포지토리.

    Repository handling identity lookups and refresh token storage.
    """

    def __init__(self) -> None:
        super().__init__(Identity)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Identity | None:
        """자격 증명 주소로 조회합니다.

        Retrieve an identity by its credential address.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 합성된 자격 증명 주소 (Synthesized credential address)

        Returns:
            Identity | None: 조회된 자격 증명 또는 None (Found identity or None)
        """
        query: Select = select(Identity).where(Identity.email == email)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create_refresh_token(
        self,
        db: AsyncSession,
        identity_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """새 리프레시 토큰을 저장합니다.

        Persist a new refresh token for an identity.
        """
        db_token: RefreshToken = RefreshToken(
            identity_id=identity_id,
            token=token,
            expires_at=expires_at,
        )
        db.add(db_token)
        await db.flush()
        await db.refresh(db_token)
        return db_token

    async def get_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> RefreshToken | None:
        """리프레시 토큰 문자열로 토큰 레코드를 조회합니다."""
        query: Select = select(RefreshToken).where(RefreshToken.token == token)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def delete_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> bool:
        """리프레시 토큰을 삭제합니다.

        Delete a specific refresh token by its token string.

        Returns:
            bool: 삭제 성공 여부 (Whether a token was deleted)
        """
        db_token: RefreshToken | None = await self.get_refresh_token(db, token)
        if db_token is None:
            return False

        await db.delete(db_token)
        await db.flush()
        return True

    async def delete_identity_refresh_tokens(
        self,
        db: AsyncSession,
        identity_id: UUID,
    ) -> None:
        """특정 자격 증명의 모든 리프레시 토큰을 삭제합니다.

        Delete all refresh tokens of an identity (ends every session).
        """
        stmt = delete(RefreshToken).where(RefreshToken.identity_id == identity_id)
        await db.execute(stmt)
        await db.flush()


# 싱글턴 인스턴스: Singleton instance
identity_repository: IdentityRepository = IdentityRepository()
