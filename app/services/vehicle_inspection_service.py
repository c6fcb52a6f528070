"""ICS-212 차량 안전 점검 서비스.

Vehicle safety inspection (ICS-212) service — form submission with the
safety-critical release check, admin listing/edit/delete, and analytics.

A form whose declared release status is "release" while a safety item
failed is rejected; the stored decision is always the computed one. The
admin item edit recomputes the decision on every change.
"""

import logging
import random
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.data.ics212_items import ICS212_ITEM_COUNT, ICS212_ITEMS, apply_checklist
from app.models.vehicle_inspection import VehicleInspectionForm
from app.repositories.issue_tracker import IssueTracker
from app.repositories.vehicle_inspection_repository import vehicle_inspection_repository
from app.schemas.vehicle_inspection import (
    DailyCount,
    InspectionItem,
    SafetyItemFailure,
    VehicleCount,
    VehicleInspectionAnalytics,
    VehicleInspectionCreate,
    VehicleInspectionDetail,
    VehicleInspectionItemsUpdate,
    VehicleInspectionResponse,
    VehicleInspectionSummary,
)
from app.services.release_decision import compute_release_decision
from app.utils.exceptions import BadRequestError, IssueTrackerError, NotFoundError

logger = logging.getLogger(__name__)

_FORM_ID_ATTEMPTS: int = 5


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite는 tz 정보를 저장하지 않음 — naive values are stored as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _stored_items(form: VehicleInspectionForm) -> list[InspectionItem]:
    return [InspectionItem.model_validate(raw) for raw in form.inspection_items]


def validate_form(data: VehicleInspectionCreate) -> list[str]:
    """필수 항목 검증 — 모든 위반 사항을 한 번에 반환합니다."""
    errors: list[str] = []
    if len(data.incident_name.strip()) < 3:
        errors.append("Incident name must be at least 3 characters")
    if not data.vehicle_id_no:
        errors.append("Vehicle ID is required")
    if not data.vehicle_license_no:
        errors.append("Vehicle license number is required")
    if not data.agency_reg_unit:
        errors.append("Agency Reg/Unit is required")
    if not data.vehicle_type:
        errors.append("Vehicle type is required")
    if data.odometer_reading <= 0:
        errors.append("Odometer reading is required")
    if len(data.inspection_items) != ICS212_ITEM_COUNT:
        errors.append(f"All {ICS212_ITEM_COUNT} inspection items must be completed")
    elif [i.item_number for i in data.inspection_items] != [i["item_number"] for i in ICS212_ITEMS]:
        errors.append("Inspection items must follow the ICS-212 checklist order")
    if len(data.inspector_name_print.strip()) < 2:
        errors.append("Inspector name must be at least 2 characters")
    if data.inspector_signature is None:
        errors.append("Inspector signature is required")
    if not data.inspector_date:
        errors.append("Inspector date is required")
    if not data.inspector_time:
        errors.append("Inspector time is required")
    return errors


def _issue_body(form: VehicleInspectionForm, items: list[InspectionItem]) -> str:
    counts = Counter(item.status for item in items)
    decision = "🔴 HOLD FOR REPAIRS" if form.release_decision == "hold" else "🟢 RELEASED"
    lines = [
        "# ICS-212 Vehicle Safety Inspection",
        "",
        f"**Form ID**: `{form.form_id}`",
        f"**Release Decision**: **{decision}**",
        "",
        "## Incident Information",
        f"- **Incident Name**: {form.incident_name}",
        f"- **Date/Time**: {form.inspector_date} {form.inspector_time}",
    ]
    if form.order_no:
        lines.append(f"- **Order No**: {form.order_no}")
    lines += [
        "",
        "## Vehicle Information",
        f"- **Vehicle ID**: {form.vehicle_id_no}",
        f"- **License Plate**: {form.vehicle_license_no}",
        f"- **Agency Unit**: {form.agency_reg_unit}",
        f"- **Type**: {form.vehicle_type}",
        f"- **Odometer**: {form.odometer_reading:,} miles",
        "",
        "## Inspection Results",
        "",
        f"**Summary**: {counts['pass']} Pass | {counts['fail']} Fail | {counts['n/a']} N/A",
        "",
    ]
    lines += [
        f"{i.item_number}. {i.description}: **{i.status.upper()}**{' ⚠️' if i.is_safety_item else ''}"
        for i in items
    ]
    if form.additional_comments:
        lines += ["", "## Additional Comments", "", form.additional_comments]
    lines += [
        "",
        "## Signatures",
        f"- **Inspector**: {form.inspector_name_print} ({form.inspector_date} {form.inspector_time})",
    ]
    if form.operator_name_print:
        lines.append(f"- **Operator**: {form.operator_name_print} ({form.operator_date} {form.operator_time})")
    lines += ["", "---", "*Submitted via USAR ICS-212 System*"]
    return "\n".join(lines)


class VehicleInspectionService:
    """ICS-212 양식 서비스."""

    def build_summary(self, form: VehicleInspectionForm) -> VehicleInspectionSummary:
        items = _stored_items(form)
        return VehicleInspectionSummary(
            form_id=form.form_id,
            incident_name=form.incident_name,
            vehicle_id_no=form.vehicle_id_no,
            vehicle_type=form.vehicle_type,
            release_decision=form.release_decision,
            inspector_name_print=form.inspector_name_print,
            inspector_date=form.inspector_date,
            inspector_time=form.inspector_time,
            tracker_issue_number=form.tracker_issue_number,
            created_at=_as_utc(form.created_at),
            pass_count=sum(1 for i in items if i.status == "pass"),
            fail_count=sum(1 for i in items if i.status == "fail"),
        )

    def build_response(self, form: VehicleInspectionForm) -> VehicleInspectionResponse:
        summary = self.build_summary(form)
        return VehicleInspectionResponse(
            **summary.model_dump(),
            order_no=form.order_no,
            vehicle_license_no=form.vehicle_license_no,
            agency_reg_unit=form.agency_reg_unit,
            odometer_reading=form.odometer_reading,
            inspection_items=_stored_items(form),
            additional_comments=form.additional_comments,
            operator_date=form.operator_date,
            operator_time=form.operator_time,
            operator_name_print=form.operator_name_print,
            updated_at=_as_utc(form.updated_at),
        )

    async def _generate_form_id(self, db: AsyncSession) -> str:
        year = datetime.now(timezone.utc).year
        for _ in range(_FORM_ID_ATTEMPTS):
            candidate = f"ICS212-{year}-{random.randint(0, 9999):04d}"
            if not await vehicle_inspection_repository.exists(db, {"form_id": candidate}):
                return candidate
        raise BadRequestError("Could not allocate a form ID, please resubmit")

    async def submit_form(
        self,
        db: AsyncSession,
        tracker: IssueTracker,
        data: VehicleInspectionCreate,
    ) -> VehicleInspectionForm:
        """ICS-212 양식을 제출합니다.

        Raises:
            BadRequestError: 필수 항목 누락 또는 안전 위반
                (Validation failure, or a declared release while a safety item failed)
        """
        errors = validate_form(data)
        if errors:
            raise BadRequestError({"message": "Validation failed", "errors": errors})

        items = apply_checklist(data.inspection_items)
        decision = compute_release_decision(items)
        if decision == "hold" and data.release_status != "hold":
            raise BadRequestError(
                "Safety violation: Form must be marked HOLD when safety items fail"
            )

        form = await vehicle_inspection_repository.create(db, {
            **data.model_dump(
                mode="json",
                exclude={"release_status", "inspection_items"},
            ),
            "form_id": await self._generate_form_id(db),
            "inspection_items": [i.model_dump() for i in items],
            "release_decision": decision,
        })

        # 트래커 요약 이슈는 최선 노력 — the form is kept even if this fails
        try:
            issue = await tracker.create_issue(
                f"ICS-212: {form.vehicle_id_no} - {'HOLD' if decision == 'hold' else 'RELEASED'}",
                _issue_body(form, items),
                ["ICS-212", "Vehicle Inspection", "Safety Hold" if decision == "hold" else "Released"],
            )
        except IssueTrackerError as exc:
            logger.warning("Failed to create tracker issue for %s: %s", form.form_id, exc)
        else:
            form = await vehicle_inspection_repository.update(
                db, form, {"tracker_issue_number": issue.number}
            )
        return form

    async def list_forms(
        self,
        db: AsyncSession,
        release_decision: str | None = None,
        vehicle_id_no: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[VehicleInspectionForm], int]:
        return await vehicle_inspection_repository.get_filtered(
            db, release_decision, vehicle_id_no, page, per_page
        )

    async def get_form(self, db: AsyncSession, form_id: str) -> VehicleInspectionForm:
        form = await vehicle_inspection_repository.get_by_form_id(db, form_id)
        if form is None:
            raise NotFoundError("Inspection form not found")
        return form

    async def get_detail(self, db: AsyncSession, form_id: str) -> VehicleInspectionDetail:
        form = await self.get_form(db, form_id)
        history = await vehicle_inspection_repository.get_vehicle_history(
            db, form.vehicle_id_no, form.form_id
        )
        return VehicleInspectionDetail(
            form=self.build_response(form),
            vehicle_history=[self.build_summary(f) for f in history],
        )

    async def update_items(
        self,
        db: AsyncSession,
        form_id: str,
        data: VehicleInspectionItemsUpdate,
    ) -> VehicleInspectionForm:
        """관리자 항목 수정 — 판정을 다시 계산합니다.

        The checklist keeps its size and order: the submitted item numbers
        must match the stored ones position by position. Only status and
        comments are taken from the request; description and safety flag
        stay as stored.
        """
        form = await self.get_form(db, form_id)
        stored = _stored_items(form)
        submitted_numbers = [item.item_number for item in data.inspection_items]
        if submitted_numbers != [item.item_number for item in stored]:
            raise BadRequestError("Inspection items cannot be added, removed or reordered")

        items = [
            current.model_copy(update={"status": edit.status, "comments": edit.comments})
            for current, edit in zip(stored, data.inspection_items)
        ]
        update_data: dict = {
            "inspection_items": [i.model_dump() for i in items],
            "release_decision": compute_release_decision(items),
        }
        if data.additional_comments is not None:
            update_data["additional_comments"] = data.additional_comments
        return await vehicle_inspection_repository.update(db, form, update_data)

    async def delete_form(self, db: AsyncSession, form_id: str) -> None:
        form = await self.get_form(db, form_id)
        await vehicle_inspection_repository.delete(db, form)

    async def get_analytics(self, db: AsyncSession) -> VehicleInspectionAnalytics:
        """ICS-212 대시보드 통계."""
        now = datetime.now(timezone.utc)
        total = await vehicle_inspection_repository.count_since(db)
        this_month = await vehicle_inspection_repository.count_since(
            db, now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        )
        this_week = await vehicle_inspection_repository.count_since(db, now - timedelta(days=7))
        holds = await vehicle_inspection_repository.count_by_decision(db, "hold")

        forms = await vehicle_inspection_repository.get_all(db)

        vehicle_counts: Counter[str] = Counter()
        last_inspection: dict[str, datetime] = {}
        failures: Counter[str] = Counter()
        per_day: Counter[str] = Counter()
        window_start = now - timedelta(days=30)
        for form in forms:
            created = _as_utc(form.created_at)
            vehicle_counts[form.vehicle_id_no] += 1
            if created is not None:
                if form.vehicle_id_no not in last_inspection or created > last_inspection[form.vehicle_id_no]:
                    last_inspection[form.vehicle_id_no] = created
                if created >= window_start:
                    per_day[created.date().isoformat()] += 1
            for item in _stored_items(form):
                if item.is_safety_item and item.status == "fail":
                    failures[item.description] += 1

        return VehicleInspectionAnalytics(
            total_forms=total,
            forms_this_month=this_month,
            forms_this_week=this_week,
            hold_rate=(holds / total * 100) if total else 0.0,
            release_rate=((total - holds) / total * 100) if total else 0.0,
            top_vehicles=[
                VehicleCount(vehicle_id=v, count=c, last_inspection=last_inspection.get(v))
                for v, c in vehicle_counts.most_common(10)
            ],
            safety_item_failures=[
                SafetyItemFailure(item=name, count=c) for name, c in failures.most_common(10)
            ],
            forms_per_day=[DailyCount(date=d, count=per_day[d]) for d in sorted(per_day)],
            recent_forms=[self.build_summary(f) for f in forms[:5]],
        )


vehicle_inspection_service: VehicleInspectionService = VehicleInspectionService()
