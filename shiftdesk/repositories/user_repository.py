"""프로필 레포지토리 — 사용자 프로필 조회.

User Repository — Profile lookups by id and by role.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.models.user import User
from shiftdesk.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """프로필 테이블에 대한 쿼리를 담당하는 레포지토리.

    Repository handling queries for the users (profile) table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_role(
        self,
        db: AsyncSession,
        role: str,
    ) -> list[User]:
        """역할로 프로필 목록을 조회합니다 (가입 순).

        Retrieve all profiles with the given role, in registration order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            role: 역할 — "worker" | "admin" (Role)

        Returns:
            list[User]: 프로필 목록 (Profiles)
        """
        query: Select = (
            select(User)
            .where(User.role == role)
            .order_by(User.created_at, User.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스: Singleton instance
user_repository: UserRepository = UserRepository()
