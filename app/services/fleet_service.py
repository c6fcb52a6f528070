"""차량 편성 현황 서비스 — 결함 집계 및 재고 부족 분석.

Fleet Service — aggregation over the defect store for the admin dashboard.
Provides per-apparatus open-defect counts, the low-stock trend signal and
daily submission statistics from inspection logs.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Sequence

from app.config import settings
from app.repositories.issue_tracker import IssueTracker
from app.schemas.defect import DailySubmissions, DefectRecord, InspectionLogSummary, LowStockEntry
from app.schemas.issue import Issue
from app.services.defect_service import defect_service
from app.utils.defect_title import decode_log_apparatus, decode_title
from app.utils.exceptions import IssueTrackerError, tracker_http_error

# 일일 제출 통계 기간 — Window for per-apparatus submission totals
SUBMISSION_TOTALS_DAYS: int = 30


def compute_fleet_status(
    defects: Iterable[DefectRecord],
    roster: Sequence[str],
) -> dict[str, int]:
    """차량별 열린 결함 수를 집계합니다.

    Every roster apparatus is present, with 0 when it has no defects.
    Defects for an apparatus outside the roster are counted under their
    own name.
    """
    status: dict[str, int] = {apparatus: 0 for apparatus in roster}
    for defect in defects:
        status[defect.apparatus] = status.get(defect.apparatus, 0) + 1
    return status


def analyze_low_stock(
    issues: Iterable[Issue],
    min_occurrences: int = 2,
) -> list[LowStockEntry]:
    """반복적으로 "분실" 보고된 품목을 찾습니다.

    Groups by compartment and item across apparatus, counting only titles
    that decode with status "missing" (damage is not a restocking signal).
    Keeps groups with at least ``min_occurrences`` reports, most frequent
    first.
    """
    groups: dict[str, LowStockEntry] = {}
    for issue in issues:
        decoded = decode_title(issue.title)
        if decoded is None or decoded.status != "missing":
            continue
        entry = groups.get(decoded.key)
        if entry is None:
            groups[decoded.key] = LowStockEntry(
                item=decoded.item,
                compartment=decoded.compartment,
                apparatus=[decoded.apparatus],
                occurrences=1,
            )
            continue
        entry.occurrences += 1
        if decoded.apparatus not in entry.apparatus:
            entry.apparatus.append(decoded.apparatus)

    flagged = [e for e in groups.values() if e.occurrences >= min_occurrences]
    return sorted(flagged, key=lambda e: e.occurrences, reverse=True)


def summarize_daily_submissions(
    logs: Iterable[Issue],
    roster: Sequence[str],
    today: date,
) -> DailySubmissions:
    """점검 로그에서 일일 제출 현황을 계산합니다 (Dates are UTC)."""
    totals: dict[str, int] = {apparatus: 0 for apparatus in roster}
    latest: dict[str, datetime] = {}
    submitted_today: list[str] = []

    for log in logs:
        apparatus = decode_log_apparatus(log.title)
        if apparatus is None:
            continue
        totals[apparatus] = totals.get(apparatus, 0) + 1
        if log.created_at is None:
            continue
        if apparatus not in latest or log.created_at > latest[apparatus]:
            latest[apparatus] = log.created_at
        if log.created_at.date() == today and apparatus not in submitted_today:
            submitted_today.append(apparatus)

    return DailySubmissions(
        today=submitted_today,
        totals=totals,
        last_submission={a: ts.date().isoformat() for a, ts in latest.items()},
    )


class FleetService:
    """차량 편성 현황 서비스 (Admin dashboard aggregation)."""

    async def get_fleet_status(self, tracker: IssueTracker) -> dict[str, int]:
        defects = await defect_service.list_open_defects(tracker)
        return compute_fleet_status(defects, settings.APPARATUS_LIST)

    async def get_low_stock_report(
        self,
        tracker: IssueTracker,
        window_days: int | None = None,
    ) -> list[LowStockEntry]:
        """최근 기간의 모든 결함(열림+닫힘)으로 재고 부족 신호를 계산합니다."""
        days = settings.LOW_STOCK_WINDOW_DAYS if window_days is None else window_days
        since = datetime.now(timezone.utc) - timedelta(days=days)
        try:
            issues = await tracker.list_issues(
                state="all",
                labels=[settings.DEFECT_LABEL],
                since=since,
                per_page=settings.TRACKER_PER_PAGE,
            )
        except IssueTrackerError as exc:
            raise tracker_http_error(exc) from exc
        return analyze_low_stock(issues, settings.LOW_STOCK_MIN_OCCURRENCES)

    async def _list_logs(self, tracker: IssueTracker, days: int) -> list[Issue]:
        since = datetime.now(timezone.utc) - timedelta(days=days)
        try:
            return await tracker.list_issues(
                state="closed",
                labels=[settings.LOG_LABEL],
                since=since,
                per_page=settings.TRACKER_PER_PAGE,
            )
        except IssueTrackerError as exc:
            raise tracker_http_error(exc) from exc

    async def get_inspection_logs(
        self,
        tracker: IssueTracker,
        days: int = 7,
    ) -> list[InspectionLogSummary]:
        logs = await self._list_logs(tracker, days)
        return [
            InspectionLogSummary(
                issue_number=log.number,
                apparatus=decode_log_apparatus(log.title),
                title=log.title,
                created_at=log.created_at,
            )
            for log in logs
        ]

    async def get_daily_submissions(self, tracker: IssueTracker) -> DailySubmissions:
        logs = await self._list_logs(tracker, SUBMISSION_TOTALS_DAYS)
        return summarize_daily_submissions(
            logs,
            settings.APPARATUS_LIST,
            datetime.now(timezone.utc).date(),
        )


fleet_service: FleetService = FleetService()
