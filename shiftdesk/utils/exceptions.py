"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
Services raise these directly; FastAPI renders them as ``{"detail": ...}``.

Usage:
    from shiftdesk.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Shift not found")
    raise ConflictError("Worker already has a shift on that date")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested resource (profile, shift) does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 근무자+날짜 중복 등 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when a worker already holds a shift on the requested date, or
    when the store rejects an insert on a uniqueness constraint.
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class AlreadyRegisteredError(ConflictError):
    """409 — 이미 등록된 사용자명 (Username is already registered)."""

    def __init__(self, detail: str = "User already registered") -> None:
        super().__init__(detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 역할 불일치 시 사용.

    Raised when the authenticated profile has the wrong role for the route
    (e.g. a worker calling an admin endpoint).
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when authentication is missing, invalid, or expired.
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidCredentialsError(UnauthorizedError):
    """401 — 사용자명/비밀번호 불일치 (Username and password do not match)."""

    def __init__(self, detail: str = "Invalid login credentials") -> None:
        super().__init__(detail=detail)


class ValidationError(HTTPException):
    """400 Bad Request 예외 — 입력값 검증 실패 시 사용.

    400 Bad Request exception.
    Raised when input is missing or malformed beyond what Pydantic catches
    (missing date/shift type, short password, decided shift re-decided).
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
