"""근무 규칙 — 중복 검사, 근무 시간 집계, 날짜별 그룹화.

Shift rules — duplicate detection, hour aggregation and calendar grouping.
Pure functions over already-fetched collections. They accept ORM rows and
response schemas alike: anything exposing ``id``, ``user_id``, ``date`` and
``status`` attributes.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, Protocol, TypeVar

from shiftdesk.config import settings
from shiftdesk.models.enums import RequestStatus


class ShiftLike(Protocol):
    user_id: Any
    date: date
    status: str


class UserLike(Protocol):
    id: Any


S = TypeVar("S", bound=ShiftLike)
U = TypeVar("U", bound=UserLike)


@dataclass(frozen=True)
class HoursRow(Generic[U]):
    """근무자 1명의 승인 근무 집계 (Approved-shift totals for one worker)."""

    user: U
    shift_count: int
    hours: int


def _same_id(left: Any, right: Any) -> bool:
    # UUID와 문자열 ID를 모두 허용: ORM rows carry UUIDs, responses carry strings
    return str(left) == str(right)


def find_conflict(shifts: Iterable[S], user_id: Any, day: date) -> S | None:
    """같은 근무자+날짜의 근무를 찾습니다 (상태 무관).

    Linear scan for a shift held by ``user_id`` on ``day``, whatever its
    status. Only as fresh as the collection passed in.

    Args:
        shifts: 가장 최근에 조회한 근무 목록 (Most recently fetched shifts)
        user_id: 근무자 ID (Worker id)
        day: 근무 날짜 (Calendar date)

    Returns:
        S | None: 충돌하는 근무 또는 None (The conflicting shift, or None)
    """
    for shift in shifts:
        if _same_id(shift.user_id, user_id) and shift.date == day:
            return shift
    return None


def compute_hours(
    users: Iterable[U],
    shifts: Iterable[ShiftLike],
    hours_per_shift: int | None = None,
) -> list[HoursRow[U]]:
    """근무자별 승인 근무 수와 시간을 계산합니다.

    For each user count the approved shifts they own; hours are that count
    times a fixed per-shift figure, regardless of shift type. Rows are
    sorted by hours descending; ``sorted`` is stable so ties keep the
    order of ``users``.

    Args:
        users: 집계 대상 근무자 목록 (Workers to report on)
        shifts: 근무 목록, 순서 무관 (Shifts in any order)
        hours_per_shift: 근무당 시간, None이면 설정값 (Hours per shift; settings value when None)

    Returns:
        list[HoursRow]: 시간 내림차순 집계 (Rows ordered by hours, descending)
    """
    per_shift: int = settings.HOURS_PER_SHIFT if hours_per_shift is None else hours_per_shift

    approved_counts: dict[str, int] = {}
    for shift in shifts:
        if shift.status == RequestStatus.APPROVED:
            key = str(shift.user_id)
            approved_counts[key] = approved_counts.get(key, 0) + 1

    rows: list[HoursRow[U]] = []
    for user in users:
        count: int = approved_counts.get(str(user.id), 0)
        rows.append(HoursRow(user=user, shift_count=count, hours=count * per_shift))

    return sorted(rows, key=lambda row: row.hours, reverse=True)


def group_by_date(shifts: Iterable[S]) -> dict[date, list[S]]:
    """근무를 날짜별로 묶습니다 (입력 순서 유지).

    Group shifts by calendar date. Keys appear in first-seen order and each
    bucket keeps the relative order of the input.
    """
    grouped: dict[date, list[S]] = {}
    for shift in shifts:
        grouped.setdefault(shift.date, []).append(shift)
    return grouped


def sorted_dates(grouped: dict[date, Sequence[Any]]) -> list[date]:
    """최근 날짜가 먼저 오도록 정렬된 날짜 키 (Date keys, most recent first)."""
    return sorted(grouped.keys(), reverse=True)
