"""근무 규칙 단위 테스트 — 중복 검사, 근무 시간 집계, 날짜별 그룹화.

Unit tests for the pure shift rules shared by server and client.
"""

import random
from dataclasses import dataclass
from datetime import date
from uuid import uuid4

from shiftdesk.models.enums import SHIFT_WINDOWS, RequestStatus, ShiftType
from shiftdesk.utils.credentials import email_to_username, sign_up_problems, username_to_email
from shiftdesk.utils.shift_rules import compute_hours, find_conflict, group_by_date, sorted_dates


@dataclass
class FakeUser:
    id: str
    name: str


@dataclass
class FakeShift:
    user_id: str
    date: date
    status: str = "pending"
    shift_type: str = "1"
    id: str = ""


def _shift(user: FakeUser, day: date, status: RequestStatus = RequestStatus.PENDING) -> FakeShift:
    return FakeShift(user_id=user.id, date=day, status=status.value, id=uuid4().hex)


class TestFindConflict:
    """중복 검사 테스트."""

    def test_same_worker_same_date(self):
        marko = FakeUser("u1", "Marko")
        existing = _shift(marko, date(2024, 3, 15))
        assert find_conflict([existing], "u1", date(2024, 3, 15)) is existing

    def test_any_status_conflicts(self):
        marko = FakeUser("u1", "Marko")
        for status in RequestStatus:
            shifts = [_shift(marko, date(2024, 3, 15), status)]
            assert find_conflict(shifts, "u1", date(2024, 3, 15)) is not None

    def test_other_date_or_worker(self):
        marko = FakeUser("u1", "Marko")
        shifts = [_shift(marko, date(2024, 3, 15))]
        assert find_conflict(shifts, "u1", date(2024, 3, 16)) is None
        assert find_conflict(shifts, "u2", date(2024, 3, 15)) is None

    def test_uuid_and_string_ids_match(self):
        user_id = uuid4()
        shifts = [FakeShift(user_id=str(user_id), date=date(2024, 3, 15))]
        assert find_conflict(shifts, user_id, date(2024, 3, 15)) is not None

    def test_empty_collection(self):
        assert find_conflict([], "u1", date(2024, 3, 15)) is None


class TestComputeHours:
    """근무 시간 집계 테스트."""

    def _fixture(self):
        marko, ana, ivan = FakeUser("u1", "Marko"), FakeUser("u2", "Ana"), FakeUser("u3", "Ivan")
        shifts = [
            _shift(marko, date(2024, 3, 1), RequestStatus.APPROVED),
            _shift(ana, date(2024, 3, 1), RequestStatus.APPROVED),
            _shift(ana, date(2024, 3, 2), RequestStatus.APPROVED),
            _shift(ana, date(2024, 3, 3), RequestStatus.PENDING),
            _shift(ivan, date(2024, 3, 3), RequestStatus.REJECTED),
        ]
        return [marko, ana, ivan], shifts

    def test_counts_only_approved(self):
        users, shifts = self._fixture()
        rows = {row.user.name: (row.shift_count, row.hours) for row in compute_hours(users, shifts)}
        assert rows == {"Ana": (2, 16), "Marko": (1, 8), "Ivan": (0, 0)}

    def test_sorted_by_hours_descending(self):
        users, shifts = self._fixture()
        assert [row.user.name for row in compute_hours(users, shifts)] == ["Ana", "Marko", "Ivan"]

    def test_ties_keep_user_order(self):
        a, b, c = FakeUser("a", "A"), FakeUser("b", "B"), FakeUser("c", "C")
        shifts = [_shift(u, date(2024, 3, 1), RequestStatus.APPROVED) for u in (c, b, a)]
        assert [row.user.name for row in compute_hours([a, b, c], shifts)] == ["A", "B", "C"]
        assert [row.user.name for row in compute_hours([c, a, b], shifts)] == ["C", "A", "B"]

    def test_invariant_under_shift_order(self):
        users, shifts = self._fixture()
        expected = compute_hours(users, shifts)
        shuffled = list(shifts)
        random.Random(7).shuffle(shuffled)
        assert compute_hours(users, shuffled) == expected
        assert compute_hours(users, list(reversed(shifts))) == expected

    def test_hours_independent_of_shift_type(self):
        marko = FakeUser("u1", "Marko")
        shifts = [
            FakeShift(user_id="u1", date=date(2024, 3, d), status="approved", shift_type=t)
            for d, t in ((1, "1"), (2, "2"), (3, "3"))
        ]
        assert compute_hours([marko], shifts)[0].hours == 24

    def test_custom_hours_per_shift(self):
        users, shifts = self._fixture()
        rows = compute_hours(users, shifts, hours_per_shift=12)
        assert rows[0].hours == 24

    def test_shifts_of_unknown_users_ignored(self):
        marko = FakeUser("u1", "Marko")
        stranger = FakeUser("zz", "Stranger")
        shifts = [_shift(stranger, date(2024, 3, 1), RequestStatus.APPROVED)]
        assert compute_hours([marko], shifts)[0].shift_count == 0


class TestCalendarGrouping:
    """날짜별 그룹화 테스트."""

    def test_never_drops_or_merges(self):
        marko, ana = FakeUser("u1", "Marko"), FakeUser("u2", "Ana")
        shifts = [
            _shift(marko, date(2024, 3, 1)),
            _shift(ana, date(2024, 3, 9)),
            _shift(ana, date(2024, 3, 1)),
        ]
        grouped = group_by_date(shifts)
        assert sum(len(v) for v in grouped.values()) == len(shifts)
        assert grouped[date(2024, 3, 1)] == [shifts[0], shifts[2]]
        assert all(s.date == day for day, bucket in grouped.items() for s in bucket)

    def test_most_recent_first(self):
        marko = FakeUser("u1", "Marko")
        days = [date(2024, 3, 5), date(2024, 1, 20), date(2024, 3, 30)]
        grouped = group_by_date(_shift(marko, d) for d in days)
        assert sorted_dates(grouped) == [date(2024, 3, 30), date(2024, 3, 5), date(2024, 1, 20)]

    def test_empty(self):
        assert group_by_date([]) == {}
        assert sorted_dates({}) == []


class TestEnumsAndCredentials:
    """열거형 메타데이터 및 자격 증명 변환 테스트."""

    def test_shift_windows(self):
        assert ShiftType.FIRST.window.describe() == "08:00 – 16:00"
        assert ShiftType.SECOND.window.label == "Druga"
        assert set(SHIFT_WINDOWS) == set(ShiftType)

    def test_status_labels(self):
        assert RequestStatus.PENDING.label == "Na čekanju"
        assert RequestStatus.APPROVED.label == "Odobreno"
        assert RequestStatus.REJECTED.label == "Odbijeno"

    def test_username_round_trip(self):
        assert username_to_email("marko") == "marko@winner-security.local"
        assert username_to_email(" marko ", domain="example.test") == "marko@example.test"
        assert email_to_username("marko@winner-security.local") == "marko"

    def test_sign_up_problems(self):
        assert sign_up_problems("marko", "secret1", "Marko") == []
        assert sign_up_problems("marko", "12345", "Marko") == ["Password must be at least 6 characters"]
        assert sign_up_problems("", "secret1", "Marko") == ["Username is required"]
        assert sign_up_problems("marko", "secret1", " ") == ["Name is required"]
        assert len(sign_up_problems("bad name", "1", None)) == 3
        assert sign_up_problems("marko.petrovic", "secret1", "Marko") == []
        assert sign_up_problems("ana-m", "secret1", "Ana") == []
        assert sign_up_problems("ana@x", "secret1", "Ana") == ["Username may not contain spaces or @"]
        assert sign_up_problems("marko", "1234", "Marko", min_password_length=4) == []
