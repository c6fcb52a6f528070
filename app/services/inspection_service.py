"""일일 점검 제출 서비스 — 결함 조정(reconciliation) 엔진.

Inspection submission service — maps a submitted checkout onto the
issue tracker.

Flow:
    1. 차량의 열린 결함 인덱스를 한 번 구성 (Build the defect index once)
    2. 결함마다 기존 이슈에 확인 코멘트 또는 새 이슈 생성
       (Per defect: verification comment on a match, otherwise a new issue)
    3. 모든 항목이 끝날 때까지 대기 — 한 항목의 실패가 다른 항목을 취소하지 않음
       (Settle every item; one failure never cancels a sibling)
    4. 실패가 있으면 실패 항목 전체를 담은 오류, 로그 생략
       (Any failure: aggregated error, no log entry)
    5. 전부 성공하면 닫힌 점검 로그 이슈 생성
       (All succeeded: create the closed log entry)
"""

import asyncio
import logging

from pydantic import ValidationError

from app.config import settings
from app.repositories.issue_tracker import IssueTracker
from app.schemas.defect import DefectIdentity
from app.schemas.inspection import InspectionSubmission, ReportedDefect, SubmissionResult
from app.services.defect_index import DefectIndex, load_defect_index
from app.utils.defect_title import defect_key, encode_log_title, encode_title
from app.utils.exceptions import DefectSubmissionError, IssueTrackerError, LogEntryError

logger = logging.getLogger(__name__)

_STATUS_BADGES: dict[str, str] = {"missing": "❌ Missing", "damaged": "⚠️ Damaged"}


def _defect_body(submission: InspectionSubmission, defect: ReportedDefect) -> str:
    return "\n".join([
        "## Defect Report",
        "",
        f"**Apparatus:** {submission.apparatus}",
        f"**Compartment:** {defect.compartment}",
        f"**Item:** {defect.item}",
        f"**Status:** {_STATUS_BADGES[defect.status]}",
        f"**Reported By:** {submission.user.name} ({submission.user.rank})",
        f"**Date:** {submission.date}",
        "",
        "### Notes",
        defect.notes,
        "",
        "---",
        "*This issue was automatically created by the MBFD Checkout System.*",
    ])


def _verification_body(submission: InspectionSubmission, defect: ReportedDefect) -> str:
    lines = [
        "### Verification Update",
        "",
        f"**Verified still present by:** {submission.user.name} ({submission.user.rank})",
        f"**Date:** {submission.date}",
        "",
    ]
    if defect.notes:
        lines += [f"**Additional Notes:** {defect.notes}", ""]
    lines += ["---", "*This comment was automatically added by the MBFD Checkout System.*"]
    return "\n".join(lines)


def _log_body(submission: InspectionSubmission) -> str:
    lines = [
        "## Daily Inspection Log",
        "",
        f"**Apparatus:** {submission.apparatus}",
        f"**Conducted By:** {submission.user.name} ({submission.user.rank})",
        f"**Date:** {submission.date}",
        "",
        "### Summary",
        f"- **Total Items Checked:** {len(submission.items)}",
        f"- **Issues Found:** {len(submission.defects)}",
        "",
    ]
    if submission.defects:
        lines.append("### Issues Reported")
        lines += [
            f"- {d.compartment}: {d.item} - {_STATUS_BADGES[d.status]}"
            for d in submission.defects
        ]
    else:
        lines.append("✅ All items present and working")
    lines += ["", "---", "*This inspection log was automatically created by the MBFD Checkout System.*"]
    return "\n".join(lines)


class InspectionService:
    """일일 점검 제출 서비스.

    Stateless; the defect index is rebuilt for every submission.
    """

    async def submit_inspection(
        self,
        tracker: IssueTracker,
        submission: InspectionSubmission,
    ) -> SubmissionResult:
        """점검 제출을 처리합니다.

        Args:
            tracker: 이슈 트래커 (Issue tracker backend)
            submission: 점검 제출 배치 (Submission batch)

        Returns:
            SubmissionResult: 생성/확인된 이슈 번호와 로그 이슈 번호

        Raises:
            DefectSubmissionError: 하나 이상의 결함 처리 실패 — 로그 미생성
                (One or more defects failed after all were attempted; no log entry)
            LogEntryError: 결함은 모두 기록됐으나 로그 생성/종료 실패
                (Defects are durable, audit log could not be created or closed)
        """
        index = await load_defect_index(tracker, submission.apparatus)

        # 동시 처리 상한 — Bounded per-item concurrency (1 = sequential)
        semaphore = asyncio.Semaphore(max(1, settings.SUBMISSION_CONCURRENCY))

        async def _bounded(defect: ReportedDefect) -> tuple[str, int]:
            async with semaphore:
                return await self._reconcile_defect(tracker, submission, defect, index)

        # 모든 항목 완료 대기 후 판단 — settle-all barrier before any decision
        outcomes = await asyncio.gather(
            *(_bounded(defect) for defect in submission.defects),
            return_exceptions=True,
        )

        result = SubmissionResult(apparatus=submission.apparatus, log_issue_number=0)
        failed_items: list[str] = []
        for defect, outcome in zip(submission.defects, outcomes):
            if isinstance(outcome, Exception):
                failed_items.append(defect.label)
                logger.error("Failed to process defect %s on %s: %s", defect.label, submission.apparatus, outcome)
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            action, issue_number = outcome
            if action == "verified":
                result.verified_issues.append(issue_number)
            else:
                result.created_issues.append(issue_number)

        if failed_items:
            raise DefectSubmissionError(failed_items)

        result.log_issue_number = await self._create_log_entry(tracker, submission)
        return result

    async def _reconcile_defect(
        self,
        tracker: IssueTracker,
        submission: InspectionSubmission,
        defect: ReportedDefect,
        index: DefectIndex,
    ) -> tuple[str, int]:
        """결함 하나를 기존 이슈 코멘트 또는 새 이슈로 반영합니다."""
        existing = index.get(defect_key(defect.compartment, defect.item))
        if existing is not None:
            # 상태와 라벨은 변경하지 않음 — state and labels untouched
            await tracker.add_comment(existing.number, _verification_body(submission, defect))
            return "verified", existing.number

        identity = DefectIdentity(
            apparatus=submission.apparatus,
            compartment=defect.compartment,
            item=defect.item,
        )
        labels = [settings.DEFECT_LABEL, submission.apparatus]
        if defect.status == "damaged":
            labels.append(settings.DAMAGED_LABEL)
        issue = await tracker.create_issue(
            encode_title(identity, defect.status),
            _defect_body(submission, defect),
            labels,
        )
        return "created", issue.number

    async def _create_log_entry(
        self,
        tracker: IssueTracker,
        submission: InspectionSubmission,
    ) -> int:
        """닫힌 점검 로그 이슈를 생성합니다 (Create, then immediately close)."""
        try:
            issue = await tracker.create_issue(
                encode_log_title(submission.apparatus, submission.date),
                _log_body(submission),
                [settings.LOG_LABEL, submission.apparatus],
            )
            await tracker.patch_issue(issue.number, state="closed")
        except (IssueTrackerError, ValidationError) as exc:
            logger.error("Failed to create inspection log for %s: %s", submission.apparatus, exc)
            raise LogEntryError(str(exc)) from exc
        return issue.number


inspection_service: InspectionService = InspectionService()
