"""관리자 차량 편성 대시보드 라우터.

Admin Fleet Router — Fleet status, low-stock trend, inspection logs and
daily submission overview, all computed from the issue tracker.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_issue_tracker, require_admin
from app.repositories.issue_tracker import IssueTracker
from app.schemas.defect import DailySubmissions, InspectionLogSummary, LowStockEntry
from app.services.fleet_service import fleet_service

router: APIRouter = APIRouter()


@router.get("/status", response_model=dict[str, int])
async def get_fleet_status(
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
    admin: Annotated[str, Depends(require_admin)],
) -> dict[str, int]:
    """차량별 열린 결함 수 — 편성 목록의 모든 차량 포함 (zero-filled)."""
    return await fleet_service.get_fleet_status(tracker)


@router.get("/low-stock", response_model=list[LowStockEntry])
async def get_low_stock(
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
    admin: Annotated[str, Depends(require_admin)],
    days: int | None = Query(default=None, ge=1, le=365),
) -> list[LowStockEntry]:
    """반복적으로 분실 보고된 품목 (Items reported missing repeatedly)."""
    return await fleet_service.get_low_stock_report(tracker, window_days=days)


@router.get("/inspection-logs", response_model=list[InspectionLogSummary])
async def get_inspection_logs(
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
    admin: Annotated[str, Depends(require_admin)],
    days: int = Query(default=7, ge=1, le=90),
) -> list[InspectionLogSummary]:
    return await fleet_service.get_inspection_logs(tracker, days=days)


@router.get("/daily-submissions", response_model=DailySubmissions)
async def get_daily_submissions(
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
    admin: Annotated[str, Depends(require_admin)],
) -> DailySubmissions:
    return await fleet_service.get_daily_submissions(tracker)
