"""사용자명 ↔ 자격 증명 주소 변환 및 계정 입력 검증.

Username to credential-address mapping and sign-up input checks.
Shared by the server auth service and the client session resolver so both
sides refuse the same inputs before anything is stored.
"""

import re

from shiftdesk.config import settings

# 공백과 @는 자격 증명 주소를 깨뜨림 (would break the synthesized address)
_USERNAME_FORBIDDEN = re.compile(r"[\s@]")


def username_to_email(username: str, domain: str | None = None) -> str:
    """사용자명을 자격 증명 주소로 변환합니다.

    Map a human-chosen username to the address form the identity store
    requires, e.g. ``marko`` → ``marko@winner-security.local``.
    """
    return f"{username.strip()}@{domain or settings.CREDENTIAL_DOMAIN}"


def email_to_username(email: str) -> str:
    return email.rsplit("@", 1)[0]


def sign_up_problems(
    username: str | None,
    password: str | None,
    display_name: str | None,
    min_password_length: int | None = None,
) -> list[str]:
    """회원가입 입력의 문제 목록을 반환합니다 (빈 목록 = 통과).

    Return the list of problems with a sign-up form, empty when valid.

    Args:
        username: 사용자명 (Username; no whitespace or "@")
        password: 비밀번호 (Password)
        display_name: 표시 이름 (Display name)
        min_password_length: 최소 길이, None이면 설정값 사용
                             (Minimum length; settings value when None)

    Returns:
        list[str]: 오류 메시지 목록 (Error messages)
    """
    min_length: int = min_password_length or settings.MIN_PASSWORD_LENGTH
    problems: list[str] = []
    if not display_name or not display_name.strip():
        problems.append("Name is required")
    if not username or not username.strip():
        problems.append("Username is required")
    elif _USERNAME_FORBIDDEN.search(username.strip()):
        problems.append("Username may not contain spaces or @")
    if password is None or len(password) < min_length:
        problems.append(f"Password must be at least {min_length} characters")
    return problems
