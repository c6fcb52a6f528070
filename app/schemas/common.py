"""공통 Pydantic 응답 스키마 정의.

Common response schemas shared across API domains.
"""

from typing import Any

from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    """페이지네이션 응답 스키마.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호, 1부터 시작 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
    """

    items: list[Any]
    total: int
    page: int
    per_page: int


class MessageResponse(BaseModel):
    """단순 메시지 응답 스키마 (Simple message response)."""

    message: str
