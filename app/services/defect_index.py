"""결함 인덱스 — 차량별 열린 결함 이슈의 읽기 전용 투영.

Defect index. Maps "compartment:item" to the single open issue for one
apparatus. It is rebuilt from a live tracker query for every submission
and never shared between submissions, so there is nothing to invalidate.
"""

import logging
from typing import Iterable

from app.config import settings
from app.repositories.issue_tracker import IssueTracker
from app.schemas.issue import Issue
from app.utils.defect_title import decode_title

logger = logging.getLogger(__name__)

DefectIndex = dict[str, Issue]


def build_defect_index(issues: Iterable[Issue]) -> DefectIndex:
    """이슈 목록에서 결함 인덱스를 구성합니다.

    Issues whose titles do not decode are skipped. When two open issues
    decode to the same key the last one in iteration order wins.
    """
    index: DefectIndex = {}
    for issue in issues:
        decoded = decode_title(issue.title)
        if decoded is None:
            continue
        index[decoded.key] = issue
    return index


async def load_defect_index(tracker: IssueTracker, apparatus: str) -> DefectIndex:
    """차량의 열린 결함을 조회하여 인덱스를 만듭니다.

    A failed lookup degrades to an empty index: a possible duplicate issue
    is preferable to blocking the whole submission.
    """
    try:
        issues = await tracker.list_issues(
            state="open",
            labels=[settings.DEFECT_LABEL, apparatus],
            per_page=settings.TRACKER_PER_PAGE,
        )
    except Exception as exc:
        logger.warning("Failed to fetch open defects for %s, continuing with empty index: %s", apparatus, exc)
        return {}
    return build_defect_index(issues)
