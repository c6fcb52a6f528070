"""인증 서비스 — 관리자 공유 비밀번호 로그인.

Auth Service — Exchanges the shared admin password for a short-lived
JWT access token. Inspectors do not authenticate; only the admin
dashboard endpoints are protected.
"""

import logging

from app.config import settings
from app.schemas.auth import LoginRequest, TokenResponse
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import create_access_token
from app.utils.password import verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """관리자 인증 서비스."""

    async def admin_login(self, data: LoginRequest) -> TokenResponse:
        """관리자 로그인 — 비밀번호 검증 후 액세스 토큰 발급.

        Args:
            data: 로그인 요청 (Password and display name)

        Returns:
            TokenResponse: JWT 액세스 토큰 (Access token and lifetime in seconds)

        Raises:
            UnauthorizedError: 비밀번호 불일치 또는 미설정 (Wrong or unconfigured password)
        """
        if not verify_password(data.password, settings.ADMIN_PASSWORD_HASH):
            logger.warning("Rejected admin login for %s", data.name)
            raise UnauthorizedError("Invalid admin password")

        return TokenResponse(
            access_token=create_access_token({"sub": data.name}),
            expires_in=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )


auth_service: AuthService = AuthService()
