"""도메인 열거형 — 역할, 근무 유형, 요청 상태.

Domain enumerations — user role, shift type and request status.
Values are stored as plain strings in the database; the `str` mixin keeps
comparisons like ``shift.status == "approved"`` working on both sides.
"""

from datetime import time
from enum import Enum
from typing import NamedTuple


class UserRole(str, Enum):
    WORKER = "worker"
    ADMIN = "admin"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


class ShiftWindow(NamedTuple):
    """근무 유형의 표시 이름과 고정 시간대 (Display label and fixed time window)."""

    label: str
    start: time
    end: time

    def describe(self) -> str:
        return f"{self.start:%H:%M} – {self.end:%H:%M}"


class ShiftType(str, Enum):
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"

    @property
    def window(self) -> ShiftWindow:
        return SHIFT_WINDOWS[self]


# 근무 유형별 시간대: 08–16, 16–00, 00–08 (모두 8시간)
SHIFT_WINDOWS: dict[ShiftType, ShiftWindow] = {
    ShiftType.FIRST: ShiftWindow("Prva", time(8, 0), time(16, 0)),
    ShiftType.SECOND: ShiftWindow("Druga", time(16, 0), time(0, 0)),
    ShiftType.THIRD: ShiftWindow("Treća", time(0, 0), time(8, 0)),
}

STATUS_LABELS: dict[RequestStatus, str] = {
    RequestStatus.PENDING: "Na čekanju",
    RequestStatus.APPROVED: "Odobreno",
    RequestStatus.REJECTED: "Odbijeno",
}
