"""사용자 프로필 SQLAlchemy ORM 모델.

User profile SQLAlchemy ORM model.
The profile is the application-level record (display name + role),
distinct from the authentication identity it is keyed by.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftdesk.database import Base
from shiftdesk.models.enums import UserRole


class User(Base):
    """프로필 모델 — 이름과 역할.

    Profile model — display name and role.
    Created together with the identity on registration and never
    modified afterwards.

    Attributes:
        id: 고유 식별자 UUID, identities.id와 동일 (Same UUID as the identity)
        name: 표시 이름 (Display name)
        role: 역할 — "worker" | "admin" (Role)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        identity: 자격 증명 (Authentication identity)
        shifts: 이 사용자의 근무 목록 (Shifts owned by the user)
    """

    __tablename__ = "users"

    # 프로필 ID: identities.id를 그대로 사용 (CASCADE: 자격 증명 삭제 시 프로필도 삭제)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("identities.id", ondelete="CASCADE"), primary_key=True)
    # 표시 이름: e.g. "Marko Marković"
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 역할: "worker" (기본) 또는 "admin"
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.WORKER.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계: Relationships
    identity = relationship("Identity", back_populates="profile")
    shifts = relationship("Shift", back_populates="user", cascade="all, delete-orphan")
