"""이슈 트래커 Pydantic 스키마.

Issue tracker response schemas — the subset of a GitHub issue payload the
services read. Unknown fields are ignored.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator


class IssueLabel(BaseModel):
    name: str


class IssueUser(BaseModel):
    login: str = "Unknown"


class Issue(BaseModel):
    """트래커 이슈 — 결함, 점검 로그, ICS-212 요약 모두 이 형태.

    Attributes:
        number: 이슈 번호 (Tracker issue number, the record key)
        title: 제목 — 결함의 경우 인코딩된 식별자 (Encoded identity for defects)
        state: "open" | "closed"
        labels: 라벨 목록 (Label objects; plain strings are accepted too)
    """

    model_config = {"extra": "ignore"}

    number: int
    title: str
    body: str | None = None
    state: str = "open"
    labels: list[IssueLabel] = []
    user: IssueUser | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("labels", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> Any:
        # 라벨 생성 요청은 문자열, 응답은 객체 (requests send names, responses return objects)
        if isinstance(value, list):
            return [{"name": v} if isinstance(v, str) else v for v in value]
        return value

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]
