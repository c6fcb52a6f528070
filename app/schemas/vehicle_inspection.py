"""ICS-212 차량 안전 점검 스키마.

ICS-212 vehicle safety inspection request/response schemas.
Field names are snake_case; the release decision is always derived
server-side from the inspection items.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ItemStatus = Literal["pass", "fail", "n/a"]
ReleaseDecision = Literal["hold", "release"]


class InspectionItem(BaseModel):
    """ICS-212 점검 항목.

    Attributes:
        item_number: 항목 번호 1~17 (Fixed position in the checklist)
        description: 항목 설명 (Item description)
        status: "pass" | "fail" | "n/a"
        is_safety_item: 안전 필수 항목 여부 — 실패 시 HOLD (Safety-critical: a fail forces hold)
        reference: 참고 문구 (Reference text from the paper form)
        comments: 점검자 코멘트 (Inspector comments)
    """

    item_number: int = Field(ge=1)
    description: str
    status: ItemStatus = "n/a"
    is_safety_item: bool = False
    reference: str | None = None
    comments: str | None = None


class DigitalSignature(BaseModel):
    """전자 서명 (Base64 PNG signature captured by the wizard)."""

    image_data: str
    signed_at: datetime
    signed_by: str
    ip_address: str | None = None
    device_id: str | None = None


class VehicleInspectionCreate(BaseModel):
    """ICS-212 양식 제출 요청 스키마.

    Validation of required fields happens in the service so that every
    violation is reported at once, matching the paper form checklist.
    """

    incident_name: str = ""
    order_no: str | None = None
    vehicle_license_no: str = ""
    agency_reg_unit: str = ""
    vehicle_type: str = ""
    odometer_reading: int = 0
    vehicle_id_no: str = ""
    inspection_items: list[InspectionItem] = []
    additional_comments: str | None = None
    release_status: ReleaseDecision = "release"  # 점검자가 선언한 결정 (Inspector's declared decision)
    inspector_date: str = ""
    inspector_time: str = ""
    inspector_name_print: str = ""
    inspector_signature: DigitalSignature | None = None
    operator_date: str | None = None
    operator_time: str | None = None
    operator_name_print: str | None = None
    operator_signature: DigitalSignature | None = None


class VehicleInspectionItemsUpdate(BaseModel):
    """관리자 항목 수정 요청 — 순서와 개수는 변경 불가.

    Admin edit of item statuses. Items are matched by item_number and the
    checklist is never reordered or resized; only status and comments are
    applied, the stored description and safety flag are kept.
    """

    inspection_items: list[InspectionItem]
    additional_comments: str | None = None


class ReleaseDecisionRequest(BaseModel):
    inspection_items: list[InspectionItem]


class ReleaseDecisionResponse(BaseModel):
    release_decision: ReleaseDecision
    failed_safety_items: list[int] = []  # 실패한 안전 항목 번호 (Failing safety item numbers)


class VehicleInspectionSummary(BaseModel):
    """ICS-212 목록 항목."""

    model_config = {"from_attributes": True}

    form_id: str
    incident_name: str
    vehicle_id_no: str
    vehicle_type: str
    release_decision: ReleaseDecision
    inspector_name_print: str
    inspector_date: str
    inspector_time: str
    tracker_issue_number: int | None = None
    created_at: datetime | None = None
    pass_count: int = 0
    fail_count: int = 0


class VehicleInspectionResponse(VehicleInspectionSummary):
    """ICS-212 상세 응답."""

    order_no: str | None = None
    vehicle_license_no: str
    agency_reg_unit: str
    odometer_reading: int
    inspection_items: list[InspectionItem]
    additional_comments: str | None = None
    operator_date: str | None = None
    operator_time: str | None = None
    operator_name_print: str | None = None
    updated_at: datetime | None = None


class VehicleInspectionDetail(BaseModel):
    form: VehicleInspectionResponse
    vehicle_history: list[VehicleInspectionSummary] = []


class VehicleCount(BaseModel):
    vehicle_id: str
    count: int
    last_inspection: datetime | None = None


class SafetyItemFailure(BaseModel):
    item: str
    count: int


class DailyCount(BaseModel):
    date: str
    count: int


class VehicleInspectionAnalytics(BaseModel):
    """ICS-212 분석 대시보드 응답.

    Attributes:
        hold_rate: HOLD 비율 % (Percentage of forms with a hold decision)
        safety_item_failures: 실패 빈도 상위 10개 안전 항목 (Top 10 failing safety items)
        forms_per_day: 최근 30일 일별 제출 수 (Forms per day, last 30 days)
    """

    total_forms: int
    forms_this_month: int
    forms_this_week: int
    hold_rate: float
    release_rate: float
    top_vehicles: list[VehicleCount]
    safety_item_failures: list[SafetyItemFailure]
    forms_per_day: list[DailyCount]
    recent_forms: list[VehicleInspectionSummary]
