"""인증 관련 Pydantic 요청/응답 스키마 정의.

Admin authentication schemas. The fleet shares one admin password; the
name is only carried into the token for resolution comments.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """관리자 로그인 요청 스키마.

    Attributes:
        password: 관리자 공유 비밀번호 (Plain text, compared to ADMIN_PASSWORD_HASH)
        name: 관리자 표시 이름 (Display name recorded as resolver)
    """

    password: str  # 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)
    name: str = Field(default="Admin", min_length=1)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마."""

    access_token: str
    token_type: str = "bearer"  # 항상 "bearer" (Always "bearer" for Authorization header)
    expires_in: int  # 초 단위 만료 (Seconds until expiry)
