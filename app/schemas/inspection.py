"""일일 장비 점검 제출 스키마.

Daily apparatus checkout submission schemas.
"""

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.defect import DefectStatus


class Inspector(BaseModel):
    name: str = Field(min_length=1)
    rank: str  # Firefighter, DE, Lieutenant, Captain, Chief


class ReportedItem(BaseModel):
    """체크리스트 항목 — 통과한 항목 포함 전체 목록."""

    name: str
    status: Literal["present", "missing", "damaged"] = "present"
    notes: str | None = None


class ReportedDefect(BaseModel):
    """조치가 필요한 항목 (Subset of the checklist that is missing or damaged)."""

    model_config = {"str_strip_whitespace": True}

    compartment: str = Field(min_length=1)
    item: str = Field(min_length=1)
    status: DefectStatus
    notes: str = ""

    @property
    def label(self) -> str:
        """사람이 읽는 항목 라벨 — 실패 메시지에 사용."""
        return f"{self.compartment}: {self.item}"


class InspectionSubmission(BaseModel):
    """점검 제출 배치.

    Consumed once: produces zero or more defect issues and, on full
    success, exactly one closed log issue.

    Attributes:
        user: 점검자 (Inspector name and rank)
        apparatus: 차량 (Apparatus being inspected)
        date: 점검일 문자열 — 로그 제목에 그대로 사용 (Rendered verbatim into the log title)
        items: 전체 체크리스트 (Full checklist, passed items included)
        defects: 분실/파손 항목 (Items requiring action)
    """

    model_config = {"str_strip_whitespace": True}

    user: Inspector
    apparatus: str = Field(min_length=1)
    date: str = Field(min_length=1)
    items: list[ReportedItem] = []
    defects: list[ReportedDefect] = []
    shift: str | None = None  # A, B, C
    unit_number: str | None = None


class SubmissionResult(BaseModel):
    """제출 결과 — 생성/코멘트된 이슈 번호와 로그 이슈 번호."""

    apparatus: str
    created_issues: list[int] = []
    verified_issues: list[int] = []
    log_issue_number: int
