"""클라이언트 예외 계층.

Client error taxonomy. Every failure a dashboard action can hit is a
``ShiftDeskError``; ``run_action`` turns them into a one-line message.
"""

from enum import Enum


class ShiftDeskError(Exception):
    """클라이언트 예외 기본 클래스 (Base class for client errors)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message


class ValidationError(ShiftDeskError):
    """로컬 입력 검증 실패 — 네트워크 호출 전에 발생.

    Local input check failed; raised before any server call.
    """


class AuthErrorKind(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    ALREADY_REGISTERED = "already_registered"


class AuthError(ShiftDeskError):
    """인증 실패 — 잘못된 인증 정보 또는 이미 등록된 사용자명.

    Sign-in rejected or username already taken.
    """

    def __init__(self, kind: AuthErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind: AuthErrorKind = kind


class ConflictError(ShiftDeskError):
    """근무자+날짜 중복 (Worker already holds a shift on that date)."""


class RemoteError(ShiftDeskError):
    """그 밖의 서버 오류 — 서버 메시지를 그대로 전달.

    Any other server failure. ``message`` is the server's ``detail``
    verbatim; ``status_code`` is None when the request never got a response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code: int | None = status_code
