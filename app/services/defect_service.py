"""결함 서비스 — 열린 결함 조회 및 해결 (관리자 전용).

Defect service — open-defect listing and the resolution protocol.
"""

from datetime import datetime, timezone

from app.config import settings
from app.repositories.issue_tracker import IssueTracker
from app.schemas.defect import DefectRecord
from app.schemas.issue import Issue
from app.utils.defect_title import decode_title
from app.utils.exceptions import IssueTrackerError, tracker_http_error


def to_defect_record(issue: Issue) -> DefectRecord | None:
    """이슈를 결함 레코드로 변환합니다. 제목이 형식에 맞지 않으면 None."""
    decoded = decode_title(issue.title)
    if decoded is None:
        return None
    return DefectRecord(
        issue_number=issue.number,
        apparatus=decoded.apparatus,
        compartment=decoded.compartment,
        item=decoded.item,
        status=decoded.status,
        notes=issue.body or "",
        reported_by=issue.user.login if issue.user else "Unknown",
        reported_at=issue.created_at,
        updated_at=issue.updated_at,
        resolved=issue.state == "closed" and settings.RESOLVED_LABEL in issue.label_names,
    )


def _resolution_body(resolution_note: str, resolved_by: str) -> str:
    return "\n".join([
        "## ✅ Defect Resolved",
        "",
        f"**Resolved By:** {resolved_by}",
        f"**Date:** {datetime.now(timezone.utc).isoformat()}",
        "",
        "### Resolution",
        resolution_note,
        "",
        "---",
        "*This defect was marked as resolved via the MBFD Admin Dashboard.*",
    ])


class DefectService:

    async def list_open_defects(self, tracker: IssueTracker) -> list[DefectRecord]:
        """전 차량의 열린 결함 목록 (Unparseable titles are skipped)."""
        try:
            issues = await tracker.list_issues(
                state="open",
                labels=[settings.DEFECT_LABEL],
                per_page=settings.TRACKER_PER_PAGE,
            )
        except IssueTrackerError as exc:
            raise tracker_http_error(exc) from exc
        records = (to_defect_record(issue) for issue in issues)
        return [r for r in records if r is not None]

    async def resolve_defect(
        self,
        tracker: IssueTracker,
        issue_number: int,
        resolution_note: str,
        resolved_by: str,
    ) -> None:
        """결함을 해결 처리합니다.

        Fetches the issue first because the caller does not know its
        apparatus label, appends the resolution comment, then closes the
        issue with labels [Defect, Resolved, <apparatus>].

        Raises:
            UnauthorizedError: 트래커가 자격 증명을 거부 (Tracker rejected credentials)
            NotFoundError: 이슈 없음 (Issue does not exist)
            TrackerUnavailableError: 기타 트래커 오류 (Any other tracker failure)
        """
        try:
            issue = await tracker.get_issue(issue_number)
            apparatus_label = next(
                (name for name in issue.label_names if name in settings.APPARATUS_LIST),
                None,
            )
            labels = [settings.DEFECT_LABEL, settings.RESOLVED_LABEL]
            if apparatus_label:
                labels.append(apparatus_label)

            await tracker.add_comment(issue_number, _resolution_body(resolution_note, resolved_by))
            await tracker.patch_issue(issue_number, state="closed", labels=labels)
        except IssueTrackerError as exc:
            raise tracker_http_error(exc) from exc


defect_service: DefectService = DefectService()
