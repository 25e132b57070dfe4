"""기본 레포지토리 — 모든 레포지토리의 부모 클래스.

Base Repository — Parent class for the identity, profile and shift
repositories. Holds the two operations every table needs: lookup by
primary key and insert. Listings live on the concrete repositories.

Usage:
    class ShiftRepository(BaseRepository[Shift]):
        def __init__(self) -> None:
            super().__init__(Shift)
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리 (Generic repository over one ORM model).

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """기본 키로 단일 레코드를 조회합니다.

        Retrieve a single record by its UUID primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 레코드 UUID (Record UUID)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 삽입합니다. 커밋은 호출자가 담당합니다.

        Insert a new record and reload it so server-side defaults are
        visible. The caller owns the commit.

        Raises:
            IntegrityError: 유일성 제약 위반 시 (On a uniqueness violation)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj
