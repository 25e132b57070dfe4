"""인증 자격 증명 및 리프레시 토큰 모델.

Authentication identity and refresh token models.
The identity is the raw login credential (synthesized address + bcrypt hash);
the application profile lives in ``users`` and shares the same id.

Tables:
    - identities: 로그인 자격 증명 (Login credentials)
    - refresh_tokens: 세션 유지용 리프레시 토큰 (Refresh tokens backing a session)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftdesk.database import Base


class Identity(Base):
    """자격 증명 모델 — 인증 제공자가 소유하는 계정.

    Identity model — the account owned by the authentication side.
    ``email`` is never typed by a person; it is derived from the username
    as ``{username}@{CREDENTIAL_DOMAIN}``.

    Attributes:
        id: 고유 식별자 UUID, 프로필 id와 동일 (Unique identifier, equals profile id)
        email: 합성된 자격 증명 주소 (Synthesized credential address, unique)
        password_hash: bcrypt 해시 (bcrypt-hashed password)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "identities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 합성 자격 증명: username@winner-security.local
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 비밀번호 해시: bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계: Relationships
    profile = relationship("User", back_populates="identity", uselist=False, cascade="all, delete-orphan")
    refresh_tokens = relationship("RefreshToken", back_populates="identity", cascade="all, delete-orphan")


class RefreshToken(Base):
    """리프레시 토큰 테이블.

    Refresh token table backing a signed-in session.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        identity_id: 소유 자격 증명 ID (Owner identity UUID)
        token: JWT 리프레시 토큰 문자열 (JWT refresh token string)
        expires_at: 만료 일시 (Expiration timestamp)
        created_at: 생성 일시 (Creation timestamp)
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    identity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
    )
    token: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    identity = relationship("Identity", back_populates="refresh_tokens")
