"""FastAPI 의존성 주입 모듈 — 이슈 트래커와 관리자 인증.

FastAPI dependency injection module — Issue tracker and admin auth.

Tracker:
    요청마다 httpx 클라이언트를 열고 GitHub 어댑터를 주입합니다.
    (One httpx client per request, closed when the request ends.
    Tests override ``get_issue_tracker`` with an in-memory fake.)

Admin Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies the JWT and returns the payload)
    3. 페이로드의 "sub"가 관리자 표시 이름 (The "sub" claim is the admin name)
"""

from collections.abc import AsyncGenerator
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.repositories.issue_tracker import GitHubIssueTracker, IssueTracker, create_tracker_client
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import decode_token

# auto_error=False: 헤더 누락 시 403 대신 401 반환 (Missing header → 401, not 403)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_issue_tracker() -> AsyncGenerator[IssueTracker, None]:
    """요청 범위의 이슈 트래커를 생성합니다."""
    async with create_tracker_client() as client:
        yield GitHubIssueTracker(
            client,
            owner=settings.TRACKER_REPO_OWNER,
            repo=settings.TRACKER_REPO_NAME,
            max_pages=settings.TRACKER_MAX_PAGES,
        )


async def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """관리자 토큰을 검증하고 관리자 이름을 반환합니다.

    Raises:
        UnauthorizedError: 토큰 누락, 만료 또는 위조 (Missing, expired or invalid token)
    """
    if credentials is None:
        raise UnauthorizedError()
    try:
        payload: dict = decode_token(credentials.credentials)
    except jwt.InvalidTokenError:
        # ExpiredSignatureError 포함 (includes ExpiredSignatureError)
        raise UnauthorizedError("Invalid or expired token")

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")
    admin_name: str | None = payload.get("sub")
    if not admin_name:
        raise UnauthorizedError("Invalid token")
    return admin_name
