"""이슈 트래커 레포지토리 — 결함과 점검 로그의 시스템 오브 레코드.

Issue tracker repository. The tracker is the only persistence layer for
defects and inspection logs; services talk to it through the
``IssueTracker`` protocol so the reconciliation logic does not depend on
the backend. ``GitHubIssueTracker`` implements the protocol over the
GitHub REST issues API with httpx.

Verbs:
    - list_issues: 상태/라벨/기간 필터 조회 (Filtered list query)
    - create_issue: 이슈 생성 (Create an issue)
    - add_comment: 코멘트 추가 (Append a comment)
    - patch_issue: 상태/라벨 변경 (Patch state and/or labels)
    - get_issue: 단일 이슈 조회 (Fetch one issue)
"""

from datetime import datetime
from typing import Any, Protocol, Sequence

import httpx

from app.config import settings
from app.schemas.issue import Issue
from app.utils.exceptions import IssueTrackerError, TrackerAuthError


class IssueTracker(Protocol):
    """이슈 트래커 인터페이스 (Backend-agnostic tracker verbs)."""

    async def list_issues(
        self,
        state: str,
        labels: Sequence[str],
        since: datetime | None = None,
        per_page: int = 100,
    ) -> list[Issue]: ...

    async def create_issue(self, title: str, body: str, labels: Sequence[str]) -> Issue: ...

    async def add_comment(self, issue_number: int, body: str) -> None: ...

    async def patch_issue(
        self,
        issue_number: int,
        state: str | None = None,
        labels: Sequence[str] | None = None,
    ) -> None: ...

    async def get_issue(self, issue_number: int) -> Issue: ...


def create_tracker_client() -> httpx.AsyncClient:
    """GitHub API용 httpx 클라이언트를 생성합니다.

    Build the shared httpx client with auth and API version headers.
    The caller owns the client and must close it (use ``async with``).
    """
    headers: dict[str, str] = {
        "Accept": "application/vnd.github+json",
        "User-Agent": settings.APP_NAME,
    }
    if settings.TRACKER_TOKEN:
        headers["Authorization"] = f"Bearer {settings.TRACKER_TOKEN}"
    return httpx.AsyncClient(
        base_url=settings.TRACKER_API_URL,
        headers=headers,
        timeout=settings.TRACKER_TIMEOUT_SECONDS,
    )


class GitHubIssueTracker:
    """GitHub REST 이슈 API 구현.

    Attributes:
        client: httpx 비동기 클라이언트 (base_url must point at the API root)
        owner: 저장소 소유자 (Repository owner)
        repo: 저장소 이름 (Repository name)
        max_pages: 목록 조회 최대 페이지 수 (Page cap for list queries)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        max_pages: int = 10,
    ) -> None:
        self.client: httpx.AsyncClient = client
        self.owner: str = owner
        self.repo: str = repo
        self.max_pages: int = max_pages

    @property
    def _issues_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/issues"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """요청 실행 후 오류 응답을 트래커 예외로 변환합니다.

        Raises:
            TrackerAuthError: 401/403 응답 (Tracker rejected our credentials)
            IssueTrackerError: 기타 오류 응답 또는 전송 실패 (Any other failure)
        """
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise IssueTrackerError(f"{method} {path} failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise TrackerAuthError(
                f"{method} {path} was rejected ({response.status_code})",
                status_code=response.status_code,
            )
        if response.is_error:
            raise IssueTrackerError(
                f"{method} {path} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    async def list_issues(
        self,
        state: str,
        labels: Sequence[str],
        since: datetime | None = None,
        per_page: int = 100,
    ) -> list[Issue]:
        """필터에 맞는 이슈 목록을 조회합니다.

        Pages through results until a short page or ``max_pages``.
        Pull requests, which the issues endpoint also returns, are dropped.
        A non-list payload is treated as an empty result.
        """
        params: dict[str, Any] = {
            "state": state,
            "labels": ",".join(labels),
            "per_page": per_page,
        }
        if since is not None:
            params["since"] = since.isoformat()

        issues: list[Issue] = []
        for page in range(1, self.max_pages + 1):
            params["page"] = page
            response = await self._request("GET", self._issues_path, params=params)
            data = response.json()
            if not isinstance(data, list):
                break
            issues.extend(
                Issue.model_validate(raw) for raw in data if "pull_request" not in raw
            )
            if len(data) < per_page:
                break
        return issues

    async def create_issue(self, title: str, body: str, labels: Sequence[str]) -> Issue:
        response = await self._request(
            "POST",
            self._issues_path,
            json={"title": title, "body": body, "labels": list(labels)},
        )
        return Issue.model_validate(response.json())

    async def add_comment(self, issue_number: int, body: str) -> None:
        await self._request(
            "POST",
            f"{self._issues_path}/{issue_number}/comments",
            json={"body": body},
        )

    async def patch_issue(
        self,
        issue_number: int,
        state: str | None = None,
        labels: Sequence[str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {}
        if state is not None:
            payload["state"] = state
        if labels is not None:
            payload["labels"] = list(labels)
        await self._request("PATCH", f"{self._issues_path}/{issue_number}", json=payload)

    async def get_issue(self, issue_number: int) -> Issue:
        response = await self._request("GET", f"{self._issues_path}/{issue_number}")
        return Issue.model_validate(response.json())
