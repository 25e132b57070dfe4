"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing for identities. bcrypt only looks at the first 72 bytes
of its input and recent releases refuse anything longer, so passwords are
cut to that length before both hashing and verifying.
"""

import bcrypt

# bcrypt 입력 한계 (bcrypt input limit in bytes)
_BCRYPT_MAX_BYTES: int = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Args:
        password: 평문 비밀번호 (Plain text password, any length)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """비밀번호 검증 — 해시 형식이 잘못되면 불일치로 처리.

    A stored value that is not a bcrypt hash never matches.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
