"""관리자 인증 라우터 — 관리자 로그인.

Admin Auth Router — Exchanges the shared admin password for a token.
"""

from fastapi import APIRouter

from app.schemas.auth import LoginRequest, TokenResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def admin_login(data: LoginRequest) -> TokenResponse:
    """관리자 로그인.

    Returns 401 when the password does not match ADMIN_PASSWORD_HASH.
    """
    return await auth_service.admin_login(data)
