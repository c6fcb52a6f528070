"""관리자 ICS-212 라우터 — 양식 목록, 상세, 항목 수정, 삭제, 분석.

Admin ICS-212 Router — Vehicle inspection form administration.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.vehicle_inspection import (
    ReleaseDecision,
    VehicleInspectionAnalytics,
    VehicleInspectionDetail,
    VehicleInspectionItemsUpdate,
    VehicleInspectionResponse,
)
from app.services.vehicle_inspection_service import vehicle_inspection_service

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse)
async def list_vehicle_inspections(
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[str, Depends(require_admin)],
    release_decision: ReleaseDecision | None = None,
    vehicle_id_no: str | None = None,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100),
) -> dict:
    """ICS-212 양식 목록 — 최신순, 판정/차량 필터."""
    forms, total = await vehicle_inspection_service.list_forms(
        db,
        release_decision=release_decision,
        vehicle_id_no=vehicle_id_no,
        page=page,
        per_page=per_page,
    )
    return {
        "items": [vehicle_inspection_service.build_summary(f) for f in forms],
        "total": total,
        "page": page,
        "per_page": per_page,
    }


# /analytics는 /{form_id}보다 먼저 등록 (Registered before the path parameter route)
@router.get("/analytics", response_model=VehicleInspectionAnalytics)
async def get_vehicle_inspection_analytics(
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[str, Depends(require_admin)],
) -> VehicleInspectionAnalytics:
    return await vehicle_inspection_service.get_analytics(db)


@router.get("/{form_id}", response_model=VehicleInspectionDetail)
async def get_vehicle_inspection(
    form_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[str, Depends(require_admin)],
) -> VehicleInspectionDetail:
    """양식 상세와 같은 차량의 이전 양식 목록."""
    return await vehicle_inspection_service.get_detail(db, form_id)


@router.put("/{form_id}/items", response_model=VehicleInspectionResponse)
async def update_vehicle_inspection_items(
    form_id: str,
    data: VehicleInspectionItemsUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[str, Depends(require_admin)],
) -> VehicleInspectionResponse:
    """항목 상태 수정 — 출고 판정을 다시 계산합니다.

    Recomputes the release decision from the edited items.
    """
    form = await vehicle_inspection_service.update_items(db, form_id, data)
    await db.commit()
    return vehicle_inspection_service.build_response(form)


@router.delete("/{form_id}", response_model=MessageResponse)
async def delete_vehicle_inspection(
    form_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    admin: Annotated[str, Depends(require_admin)],
) -> dict:
    await vehicle_inspection_service.delete_form(db, form_id)
    await db.commit()
    return {"message": f"Form {form_id} deleted"}
