"""세션/프로필 해석기 — 클라이언트 전역 인증 상태.

Session/Identity Resolver. Owns the process-wide authentication state:
the raw session, the resolved profile and the ``loading`` flag, and
publishes an immutable ``SessionSnapshot`` to subscribers on every change.

States:
    UNRESOLVED   — 세션 없음 (no session known: loading, signed out)
    SESSION_ONLY — 세션 있음, 프로필 미해석 (session present, profile pending)
    RESOLVED     — 세션 + 프로필 (session and profile)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from shiftdesk.client.api import ShiftDeskAPI
from shiftdesk.client.errors import ValidationError
from shiftdesk.models.enums import UserRole
from shiftdesk.schemas.auth import ProfileResponse, SessionResponse
from shiftdesk.utils.credentials import sign_up_problems

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNRESOLVED = "unresolved"
    SESSION_ONLY = "session_only"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class SessionSnapshot:
    """세션 상태의 불변 스냅샷 (Immutable view of the session state).

    Attributes:
        session: 현재 세션 또는 None (Raw session, or None)
        profile: 해석된 프로필 또는 None (Resolved profile, or None)
        loading: 최초 세션 확인 전 True (True until the first session check ends)
    """

    session: SessionResponse | None = None
    profile: ProfileResponse | None = None
    loading: bool = True

    @property
    def state(self) -> SessionState:
        if self.session is None:
            return SessionState.UNRESOLVED
        if self.profile is None:
            return SessionState.SESSION_ONLY
        return SessionState.RESOLVED

    @property
    def role(self) -> UserRole | None:
        return self.profile.role if self.profile is not None else None


Listener = Callable[[SessionSnapshot], None]


class SessionResolver:
    """세션 상태 기계 (Session state machine).

    Construct once per client process and share it. ``loading`` stays True
    until ``restore()`` finishes its session check, whatever the outcome.
    """

    def __init__(self, api: ShiftDeskAPI) -> None:
        self._api: ShiftDeskAPI = api
        self._snapshot: SessionSnapshot = SessionSnapshot()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """상태 변경 구독 — 해지 함수를 반환.

        Register ``listener`` for every state change; listeners run in
        subscription order. Returns a function that unsubscribes (calling
        it twice is harmless).
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _publish(self, snapshot: SessionSnapshot) -> None:
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    async def _resolve_profile(self) -> None:
        session = self._snapshot.session
        if session is None:
            return
        profile: ProfileResponse | None = await self._api.get_profile(session.identity_id)
        if profile is None:
            # 세션은 있으나 프로필 없음: SESSION_ONLY 유지
            logger.warning("No profile for identity %s", session.identity_id)
            return
        self._publish(replace(self._snapshot, profile=profile))

    async def restore(self) -> SessionSnapshot:
        """기존 세션을 확인하고 프로필을 해석합니다.

        Check for an existing session. ``loading`` is cleared as soon as
        the check completes (success or failure); the profile is resolved
        afterwards, so subscribers see SESSION_ONLY before RESOLVED.
        """
        try:
            session: SessionResponse | None = await self._api.get_session()
        except Exception:
            self._publish(replace(self._snapshot, loading=False))
            raise

        self._publish(SessionSnapshot(session=session, profile=None, loading=False))
        await self._resolve_profile()
        return self._snapshot

    async def sign_in(self, username: str, password: str) -> SessionSnapshot:
        """로그인 후 세션과 프로필을 해석합니다.

        Raises:
            AuthError: 잘못된 인증 정보 (INVALID_CREDENTIALS)
            RemoteError: 그 밖의 서버 오류 (Other server failures)
        """
        await self._api.sign_in(username.strip(), password)
        session: SessionResponse | None = await self._api.get_session()
        self._publish(SessionSnapshot(session=session, profile=None, loading=False))
        await self._resolve_profile()
        return self._snapshot

    async def sign_up(
        self,
        username: str,
        password: str,
        display_name: str,
        role: UserRole = UserRole.WORKER,
    ) -> ProfileResponse:
        """회원가입 — 로그인하지 않음.

        Register a new account. Inputs are checked locally first; the
        session state does not change.

        Raises:
            ValidationError: 빈 입력, 잘못된 사용자명, 짧은 비밀번호
                             (Empty fields, bad username, short password)
            AuthError: 이미 등록된 사용자명 (ALREADY_REGISTERED)
        """
        problems: list[str] = sign_up_problems(username, password, display_name)
        if problems:
            raise ValidationError("; ".join(problems))
        return await self._api.sign_up(username.strip(), password, display_name.strip(), role)

    async def sign_out(self) -> None:
        """로그아웃 — 서버 호출 실패와 무관하게 로컬 상태를 지웁니다.

        End the session; local state is cleared even if the server call fails.
        """
        try:
            await self._api.sign_out()
        finally:
            self._publish(SessionSnapshot(session=None, profile=None, loading=False))
