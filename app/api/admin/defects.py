"""관리자 결함 라우터 — 열린 결함 조회 및 해결 처리.

Admin Defect Router — Lists open defects across the fleet and resolves
them. Defects live on the issue tracker; nothing here touches the DB.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_issue_tracker, require_admin
from app.repositories.issue_tracker import IssueTracker
from app.schemas.common import MessageResponse
from app.schemas.defect import DefectRecord, ResolveDefectRequest
from app.services.defect_service import defect_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[DefectRecord])
async def list_defects(
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
    admin: Annotated[str, Depends(require_admin)],
) -> list[DefectRecord]:
    """전 차량의 열린 결함 목록을 조회합니다."""
    return await defect_service.list_open_defects(tracker)


@router.post("/{issue_number}/resolve", response_model=MessageResponse)
async def resolve_defect(
    issue_number: int,
    data: ResolveDefectRequest,
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
    admin: Annotated[str, Depends(require_admin)],
) -> dict:
    """결함을 해결 처리합니다.

    Appends the resolution comment and closes the issue with the
    Resolved label. ``resolved_by`` defaults to the logged-in admin.
    """
    await defect_service.resolve_defect(
        tracker,
        issue_number,
        resolution_note=data.resolution_note,
        resolved_by=data.resolved_by or admin,
    )
    return {"message": f"Defect #{issue_number} resolved"}
