"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    identity: 자격 증명, 리프레시 토큰 (Identities and refresh tokens)
    user: 사용자 프로필 (User profiles)
    shift: 근무 및 결근 (Shifts and absences)
    enums: 역할, 근무 유형, 상태 (Role, shift type, status)
"""

from shiftdesk.models.identity import Identity, RefreshToken
from shiftdesk.models.user import User
from shiftdesk.models.shift import Shift, Absence

__all__ = [
    "Identity", "RefreshToken",
    "User",
    "Shift", "Absence",
]
