"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing for the shared admin password.
Only the bcrypt hash is configured (ADMIN_PASSWORD_HASH); the plain
password never appears in settings.
"""

import bcrypt


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Used to produce the ADMIN_PASSWORD_HASH value for deployment.

    Example:
        hashed = hash_password("station-admin")
        # "$2b$12$LJ3m4ys3..."
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Returns False instead of raising when the configured hash is empty
    or malformed, so a misconfigured deployment simply rejects logins.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        return False
