"""ShiftDesk REST API 비동기 클라이언트.

Async HTTP client for the ShiftDesk REST API.
Holds the current token pair and translates error responses into the
client error taxonomy: 409 → ``ConflictError``, anything else →
``RemoteError`` with the server's ``detail`` verbatim. The auth calls
refine 401/409 into ``AuthError``.
"""

import datetime as dt
import logging
from typing import Any

import httpx

from shiftdesk.client.errors import AuthError, AuthErrorKind, ConflictError, RemoteError
from shiftdesk.config import settings
from shiftdesk.models.enums import RequestStatus, ShiftType, UserRole
from shiftdesk.schemas.auth import ProfileResponse, SessionResponse, TokenResponse
from shiftdesk.schemas.shift import CalendarDayResponse, HoursResponse, ShiftResponse, ShiftTypeResponse

logger = logging.getLogger(__name__)


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    return detail if isinstance(detail, str) else str(detail or body)


class ShiftDeskAPI:
    """ShiftDesk 서버와 통신하는 클라이언트.

    Thin wrapper over ``httpx.AsyncClient``. ``transport`` lets tests route
    requests straight into the ASGI app.

    Args:
        base_url: API 기본 주소, None이면 설정값 (Base URL; settings value when None)
        tokens: 복원할 토큰 쌍 (Token pair from a previous session)
        transport: httpx 전송 계층 (Optional httpx transport)
        timeout: 요청 타임아웃(초), None이면 설정값 (Request timeout in seconds; settings value when None)
    """

    def __init__(
        self,
        base_url: str | None = None,
        tokens: TokenResponse | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self._http: httpx.AsyncClient = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            transport=transport,
            timeout=httpx.Timeout(timeout or settings.API_TIMEOUT_SECONDS),
        )
        self.tokens: TokenResponse | None = tokens

    async def __aenter__(self) -> "ShiftDeskAPI":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None,
        params: dict[str, Any] | None,
    ) -> httpx.Response:
        headers: dict[str, str] = {}
        if self.tokens is not None:
            headers["Authorization"] = f"Bearer {self.tokens.access_token}"
        try:
            return await self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise RemoteError(str(exc) or type(exc).__name__) from exc

    async def _try_refresh(self) -> bool:
        """만료된 액세스 토큰을 리프레시 토큰으로 한 번 갱신합니다.

        Rotate the token pair once. Tokens are dropped only when the server
        refuses the refresh token; other failures propagate.
        """
        try:
            await self.refresh()
        except RemoteError as exc:
            if exc.status_code != 401:
                raise
            logger.info("Refresh refused (%s), dropping the session", exc.message)
            self.tokens = None
            return False
        return True

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        refresh_on_401: bool = True,
    ) -> Any:
        response: httpx.Response = await self._send(method, path, json, params)
        if response.status_code == 401 and refresh_on_401 and self.tokens is not None:
            if await self._try_refresh():
                response = await self._send(method, path, json, params)

        if response.is_success:
            return None if response.status_code == 204 else response.json()

        detail: str = _detail(response)
        logger.info("%s %s -> %s %s", method, path, response.status_code, detail)
        if response.status_code == 409:
            raise ConflictError(detail)
        raise RemoteError(detail, status_code=response.status_code)

    # ------------------------------------------------------------------
    # 인증: Auth
    # ------------------------------------------------------------------

    async def sign_in(self, username: str, password: str) -> TokenResponse:
        """로그인하고 토큰을 보관합니다 (Sign in and keep the token pair)."""
        try:
            data = await self._request(
                "POST",
                "/auth/sign-in",
                json={"username": username, "password": password},
                refresh_on_401=False,
            )
        except RemoteError as exc:
            if exc.status_code == 401:
                raise AuthError(AuthErrorKind.INVALID_CREDENTIALS, exc.message) from exc
            raise
        self.tokens = TokenResponse.model_validate(data)
        return self.tokens

    async def sign_up(
        self,
        username: str,
        password: str,
        name: str,
        role: UserRole = UserRole.WORKER,
    ) -> ProfileResponse:
        """회원가입 — 로그인 상태는 바뀌지 않음 (Register; does not sign in)."""
        try:
            data = await self._request(
                "POST",
                "/auth/sign-up",
                json={"username": username, "password": password, "name": name, "role": role.value},
            )
        except ConflictError as exc:
            raise AuthError(AuthErrorKind.ALREADY_REGISTERED, exc.message) from exc
        return ProfileResponse.model_validate(data)

    async def sign_out(self) -> None:
        """리프레시 토큰을 폐기하고 로컬 토큰을 지웁니다.

        Revoke the refresh token; local tokens are dropped even when the
        server call fails.
        """
        tokens, self.tokens = self.tokens, None
        if tokens is None:
            return
        await self._request("POST", "/auth/sign-out", json={"refresh_token": tokens.refresh_token})

    async def refresh(self) -> TokenResponse:
        if self.tokens is None:
            raise RemoteError("Not authenticated", status_code=401)
        data = await self._request(
            "POST", "/auth/refresh", json={"refresh_token": self.tokens.refresh_token}, refresh_on_401=False
        )
        self.tokens = TokenResponse.model_validate(data)
        return self.tokens

    async def get_session(self) -> SessionResponse | None:
        """현재 세션 조회 — 토큰이 없거나 거부되면 None.

        Current session, or None when no token is held or the server no
        longer accepts it. An expired access token is refreshed once first;
        the tokens are dropped only when that refresh is refused.
        """
        if self.tokens is None:
            return None
        try:
            data = await self._request("GET", "/auth/session")
        except RemoteError as exc:
            if exc.status_code == 401:
                self.tokens = None
                return None
            raise
        return SessionResponse.model_validate(data)

    async def get_profile(self, user_id: str) -> ProfileResponse | None:
        """ID로 프로필 조회 — 없으면 None (Profile by id, None when missing)."""
        try:
            data = await self._request("GET", f"/profiles/{user_id}")
        except RemoteError as exc:
            if exc.status_code == 404:
                return None
            raise
        return ProfileResponse.model_validate(data)

    async def shift_types(self) -> list[ShiftTypeResponse]:
        data = await self._request("GET", "/shift-types")
        return [ShiftTypeResponse.model_validate(item) for item in data]

    # ------------------------------------------------------------------
    # 근무자: Worker
    # ------------------------------------------------------------------

    async def list_my_shifts(self) -> list[ShiftResponse]:
        data = await self._request("GET", "/my/shifts")
        return [ShiftResponse.model_validate(item) for item in data]

    async def request_shift(self, day: dt.date, shift_type: ShiftType) -> ShiftResponse:
        data = await self._request(
            "POST", "/my/shifts", json={"date": day.isoformat(), "shift_type": shift_type.value}
        )
        return ShiftResponse.model_validate(data)

    # ------------------------------------------------------------------
    # 관리자: Admin
    # ------------------------------------------------------------------

    async def list_shifts(self, status: RequestStatus | None = None) -> list[ShiftResponse]:
        params = {"status": status.value} if status is not None else None
        data = await self._request("GET", "/admin/shifts", params=params)
        return [ShiftResponse.model_validate(item) for item in data]

    async def list_workers(self) -> list[ProfileResponse]:
        data = await self._request("GET", "/admin/workers")
        return [ProfileResponse.model_validate(item) for item in data]

    async def assign_shift(self, user_id: str, day: dt.date, shift_type: ShiftType) -> ShiftResponse:
        data = await self._request(
            "POST",
            "/admin/shifts",
            json={"user_id": user_id, "date": day.isoformat(), "shift_type": shift_type.value},
        )
        return ShiftResponse.model_validate(data)

    async def approve(self, shift_id: str) -> ShiftResponse:
        data = await self._request("POST", f"/admin/shifts/{shift_id}/approve")
        return ShiftResponse.model_validate(data)

    async def reject(self, shift_id: str) -> ShiftResponse:
        data = await self._request("POST", f"/admin/shifts/{shift_id}/reject")
        return ShiftResponse.model_validate(data)

    async def hours(self) -> list[HoursResponse]:
        data = await self._request("GET", "/admin/hours")
        return [HoursResponse.model_validate(item) for item in data]

    async def calendar(self) -> list[CalendarDayResponse]:
        data = await self._request("GET", "/admin/calendar")
        return [CalendarDayResponse.model_validate(item) for item in data]
