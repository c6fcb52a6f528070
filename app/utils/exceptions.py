"""커스텀 예외 클래스 모듈.

Custom exception classes module.

HTTPException subclasses are raised by services and reach the client as-is.
Tracker adapter errors (``IssueTrackerError`` and ``TrackerAuthError``) are
plain exceptions and are normalized into one of the HTTP errors at the
service boundary.

Usage:
    from app.utils.exceptions import NotFoundError, DefectSubmissionError
    raise NotFoundError("Inspection form not found")
    raise DefectSubmissionError(["Cab: Flashlight"])
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when the admin credential is missing, invalid or expired, and
    when the tracker itself rejects our token. The UI re-prompts for the
    admin password on this status instead of showing a generic error.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Unauthorized. Please enter the admin password.") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 검증 실패 또는 안전 위반 시 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str | list | dict = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class TrackerUnavailableError(HTTPException):
    """502 Bad Gateway 예외 — 이슈 트래커 호출 실패.

    Generic upstream failure after normalization of a tracker error.
    """

    def __init__(self, detail: str = "Issue tracker request failed") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class DefectSubmissionError(HTTPException):
    """결함 일괄 제출 실패 — 실패한 항목 전체를 나열.

    Aggregated batch failure. Raised only after every defect in the
    submission has been attempted; names each failed item label.

    Attributes:
        failed_items: 실패 항목 라벨 목록 ("{compartment}: {item}")
    """

    def __init__(self, failed_items: list[str]) -> None:
        self.failed_items: list[str] = failed_items
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=(
                f"Failed to submit {len(failed_items)} defect(s): "
                f"{', '.join(failed_items)}. Please try again."
            ),
        )


class LogEntryError(HTTPException):
    """점검 로그 생성 실패 — 결함은 이미 기록됨.

    Defects were durably recorded; only the audit trail is missing.
    """

    def __init__(self, reason: str) -> None:
        self.reason: str = reason
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=(
                "Defects were recorded but the inspection log entry could not "
                f"be created: {reason}"
            ),
        )


class IssueTrackerError(Exception):
    """이슈 트래커 응답 오류 (Non-2xx tracker response or transport failure).

    Attributes:
        status_code: HTTP 상태 코드, 전송 오류면 None (None for transport errors)
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code: int | None = status_code


class TrackerAuthError(IssueTrackerError):
    """이슈 트래커 인증 거부 (401/403 from the tracker)."""


def tracker_http_error(exc: IssueTrackerError) -> HTTPException:
    """트래커 예외를 HTTP 예외로 정규화합니다.

    Normalize a tracker adapter error at the service boundary: credential
    rejection stays distinguishable as 401, a missing issue becomes 404 and
    everything else is reported as an upstream failure.
    """
    if isinstance(exc, TrackerAuthError):
        return UnauthorizedError("Issue tracker rejected the request credentials")
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return NotFoundError("Issue not found")
    return TrackerUnavailableError(str(exc))
