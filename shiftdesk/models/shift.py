"""근무 및 결근 SQLAlchemy ORM 모델.

Shift and absence SQLAlchemy ORM models.

Tables:
    - shifts: 근무 요청/배정 (Shift requests and assignments)
    - absences: 결근 신고 — 구조만 정의 (Absence reports, shape only)
"""

import uuid
import datetime as dt
from datetime import datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftdesk.database import Base
from shiftdesk.models.enums import RequestStatus


class Shift(Base):
    """근무 모델 — 한 근무자의 특정 날짜 근무 1건.

    Shift model — one worker's shift on one calendar date.

    Status Flow:
        pending → approved | rejected
        - pending: 근무자가 요청함 (Requested by the worker)
        - approved: 관리자가 승인 또는 직접 배정 (Approved, or assigned by an admin)
        - rejected: 관리자가 거절 (Rejected by an admin)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 근무자 프로필 FK (Worker profile foreign key)
        date: 근무 날짜, 시간 정보 없음 (Calendar date, no time component)
        shift_type: 근무 유형 "1" | "2" | "3" (Shift type)
        status: 상태 (Request status)
        created_at: 생성 일시 UTC (Creation timestamp)

    Constraints:
        uq_shift_user_date: 근무자+날짜당 1건 (One shift per worker per date)
    """

    __tablename__ = "shifts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    shift_type: Mapped[str] = mapped_column(String(1), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=RequestStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_shift_user_date"),
        Index("ix_shifts_status_date", "status", "date"),
    )

    # 관계: Relationships
    user = relationship("User", back_populates="shifts")
    absences = relationship("Absence", back_populates="shift", cascade="all, delete-orphan")


class Absence(Base):
    """결근 모델 — 데이터 구조만 정의되며 처리 흐름은 없음.

    Absence model. Declared for completeness of the schema; no workflow
    reads or writes it yet.
    """

    __tablename__ = "absences"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    shift_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    replacement_user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=RequestStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계: Relationships
    shift = relationship("Shift", back_populates="absences")
    replacement_user = relationship("User", foreign_keys=[replacement_user_id])
