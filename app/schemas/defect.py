"""결함 관련 Pydantic 스키마 정의.

Defect-related schema definitions.
Covers the defect identity (natural key), the derived defect record view,
resolution requests and fleet analytics responses.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# 결함 상태 — 제목 인코딩에 쓰이는 고정 2값 어휘 (Fixed two-valued vocabulary)
DefectStatus = Literal["missing", "damaged"]


class DefectIdentity(BaseModel):
    """결함 식별자 — 차량/구획/품목의 자연 키.

    Natural key of a defect. Two reports with the same identity and an
    open issue reconcile to that issue.

    Attributes:
        apparatus: 차량 이름 (Fleet unit, e.g. "Engine 1")
        compartment: 구획 이름 (Compartment, e.g. "Cab")
        item: 품목 이름 (Equipment item, e.g. "Flashlight")
    """

    model_config = {"frozen": True}

    apparatus: str  # 차량 (Apparatus name, also used as a tracker label)
    compartment: str  # 구획 (Compartment name)
    item: str  # 품목 (Item name)

    @property
    def key(self) -> str:
        """결함 인덱스 키 — "compartment:item" (apparatus is implied by the index scope)."""
        return f"{self.compartment}:{self.item}"


class DecodedDefectTitle(DefectIdentity):
    """제목에서 복원한 식별자 + 상태 (Identity plus status parsed from a title)."""

    status: DefectStatus


class DefectRecord(BaseModel):
    """결함 레코드 — 트래커 이슈에서 매번 재구성되는 파생 뷰.

    Derived view rebuilt from an issue on every read; never stored.

    Attributes:
        issue_number: 트래커 이슈 번호 (Tracker issue number)
        status: "missing" | "damaged"
        notes: 이슈 본문 (Issue body)
        reported_by: 이슈 작성자 로그인 (Tracker user that opened the issue)
        resolved: 해결 여부 (True once closed with the resolved label)
    """

    issue_number: int
    apparatus: str
    compartment: str
    item: str
    status: DefectStatus
    notes: str = ""
    reported_by: str = "Unknown"
    reported_at: datetime | None = None
    updated_at: datetime | None = None
    resolved: bool = False


class ResolveDefectRequest(BaseModel):
    """결함 해결 요청 스키마.

    Attributes:
        resolution_note: 해결 내용 (What was done to resolve the defect)
        resolved_by: 해결자 이름, 생략 시 로그인한 관리자 (Defaults to the admin in the token)
    """

    resolution_note: str = Field(min_length=1)
    resolved_by: str | None = None


class LowStockEntry(BaseModel):
    """재고 부족 신호 — 기간 내 2회 이상 "분실" 보고된 품목.

    Heuristic trend signal, not an inventory count.
    """

    item: str
    compartment: str
    apparatus: list[str]  # 보고한 차량 목록, 중복 없음 (Distinct reporting apparatus)
    occurrences: int


class InspectionLogSummary(BaseModel):
    """점검 로그 요약 (Closed "Log" issue summary)."""

    issue_number: int
    apparatus: str | None
    title: str
    created_at: datetime | None = None


class DailySubmissions(BaseModel):
    """일일 제출 현황.

    Attributes:
        today: 오늘 제출한 차량 (Apparatus with a log created today, UTC)
        totals: 최근 30일 차량별 제출 수, 0 포함 (30-day totals, zero-filled roster)
        last_submission: 차량별 최근 제출일 ISO 날짜 (Latest log date per apparatus)
    """

    today: list[str]
    totals: dict[str, int]
    last_submission: dict[str, str]
