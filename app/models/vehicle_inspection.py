"""ICS-212 차량 안전 점검 양식 SQLAlchemy ORM 모델.

ICS-212 vehicle safety inspection form model.

Tables:
    - ics212_forms: 제출된 ICS-212 양식 (Submitted ICS-212 forms, items stored as JSON)
"""

from datetime import datetime, timezone
from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class VehicleInspectionForm(Base):
    """ICS-212 양식 모델.

    The release decision is stored for listing and filtering but is always
    recomputed from ``inspection_items`` whenever the items change.

    Attributes:
        form_id: 공개 양식 ID "ICS212-{year}-{seq}" (Public form identifier)
        inspection_items: 17개 점검 항목 JSON (Ordered list of item dicts)
        release_decision: "hold" | "release"
        tracker_issue_number: 요약 이슈 번호 (Summary issue on the tracker, if created)
    """

    __tablename__ = "ics212_forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    form_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)

    # 사건/차량 정보 — Incident and vehicle header
    incident_name: Mapped[str] = mapped_column(String(255), nullable=False)
    order_no: Mapped[str | None] = mapped_column(String(100), nullable=True)
    vehicle_license_no: Mapped[str] = mapped_column(String(50), nullable=False)
    agency_reg_unit: Mapped[str] = mapped_column(String(100), nullable=False)
    vehicle_type: Mapped[str] = mapped_column(String(100), nullable=False)
    odometer_reading: Mapped[int] = mapped_column(Integer, nullable=False)
    vehicle_id_no: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # 점검 결과 — Inspection results
    inspection_items: Mapped[list] = mapped_column(JSON, nullable=False)
    additional_comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_decision: Mapped[str] = mapped_column(String(10), nullable=False, index=True)

    # 서명 — Inspector and operator signatures
    inspector_date: Mapped[str] = mapped_column(String(20), nullable=False)
    inspector_time: Mapped[str] = mapped_column(String(10), nullable=False)
    inspector_name_print: Mapped[str] = mapped_column(String(255), nullable=False)
    inspector_signature: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    operator_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    operator_time: Mapped[str | None] = mapped_column(String(10), nullable=True)
    operator_name_print: Mapped[str | None] = mapped_column(String(255), nullable=True)
    operator_signature: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    tracker_issue_number: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
