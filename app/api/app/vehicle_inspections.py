"""ICS-212 차량 안전 점검 라우터 — 점검자용.

ICS-212 Router — Checklist template, live release-decision preview and
form submission.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_issue_tracker
from app.data.ics212_items import apply_checklist, default_inspection_items
from app.database import get_db
from app.repositories.issue_tracker import IssueTracker
from app.schemas.vehicle_inspection import (
    InspectionItem,
    ReleaseDecisionRequest,
    ReleaseDecisionResponse,
    VehicleInspectionCreate,
    VehicleInspectionResponse,
)
from app.services.release_decision import compute_release_decision, failed_safety_items
from app.services.vehicle_inspection_service import vehicle_inspection_service

router: APIRouter = APIRouter()


@router.get("/template", response_model=list[InspectionItem])
async def get_inspection_template() -> list[InspectionItem]:
    """표준 17개 점검 항목 (Canonical ICS-212 checklist, all "n/a")."""
    return default_inspection_items()


@router.post("/release-decision", response_model=ReleaseDecisionResponse)
async def preview_release_decision(data: ReleaseDecisionRequest) -> ReleaseDecisionResponse:
    """입력 중인 항목으로 출고 판정을 미리 계산합니다."""
    items = apply_checklist(data.inspection_items)
    return ReleaseDecisionResponse(
        release_decision=compute_release_decision(items),
        failed_safety_items=failed_safety_items(items),
    )


@router.post("", response_model=VehicleInspectionResponse, status_code=201)
async def submit_vehicle_inspection(
    data: VehicleInspectionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
) -> VehicleInspectionResponse:
    """ICS-212 양식을 제출합니다.

    400 on validation failure or when a failed safety item is declared
    as released.
    """
    form = await vehicle_inspection_service.submit_form(db, tracker, data)
    await db.commit()
    return vehicle_inspection_service.build_response(form)
