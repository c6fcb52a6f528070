"""점검 제출 라우터.

Inspection Router — Submits a daily apparatus checkout. Each defect is
reconciled against open issues; the log entry is written only when every
defect was recorded.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_issue_tracker
from app.repositories.issue_tracker import IssueTracker
from app.schemas.inspection import InspectionSubmission, SubmissionResult
from app.services.inspection_service import inspection_service

router: APIRouter = APIRouter()


@router.post("", response_model=SubmissionResult, status_code=201)
async def submit_inspection(
    data: InspectionSubmission,
    tracker: Annotated[IssueTracker, Depends(get_issue_tracker)],
) -> SubmissionResult:
    """일일 점검을 제출합니다.

    Returns 502 naming every failed defect when any defect could not be
    recorded, or when the defects were recorded but the log entry was not.
    """
    return await inspection_service.submit_inspection(tracker, data)
