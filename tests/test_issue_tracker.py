"""GitHub 이슈 트래커 어댑터 테스트 — httpx.MockTransport 사용.

GitHub issue tracker adapter tests against a mocked transport: request
shape, pagination, pull-request filtering and error mapping.
"""

import json
from datetime import datetime, timezone

import httpx
import pytest

from app.repositories.issue_tracker import GitHubIssueTracker
from app.utils.exceptions import IssueTrackerError, TrackerAuthError

ISSUES_PATH = "/repos/mbfd/checkout/issues"


def raw_issue(number: int, title: str = "[Engine 1] Cab: Flashlight - Missing", **extra) -> dict:
    return {
        "number": number,
        "title": title,
        "body": "body",
        "state": "open",
        "labels": [{"name": "Defect", "color": "d73a4a"}, {"name": "Engine 1"}],
        "user": {"login": "mbfd-bot", "id": 1},
        "created_at": "2026-10-19T12:00:00Z",
        "updated_at": "2026-10-19T12:00:00Z",
        **extra,
    }


def make_tracker(handler, max_pages: int = 10) -> GitHubIssueTracker:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://api.test")
    return GitHubIssueTracker(client, owner="mbfd", repo="checkout", max_pages=max_pages)


class TestListIssues:

    async def test_query_parameters(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[raw_issue(1)])

        tracker = make_tracker(handler)
        since = datetime(2026, 9, 19, tzinfo=timezone.utc)
        issues = await tracker.list_issues("open", ["Defect", "Engine 1"], since=since, per_page=100)

        assert [i.number for i in issues] == [1]
        assert issues[0].label_names == ["Defect", "Engine 1"]
        assert issues[0].user.login == "mbfd-bot"
        params = seen[0].url.params
        assert seen[0].url.path == ISSUES_PATH
        assert params["state"] == "open"
        assert params["labels"] == "Defect,Engine 1"
        assert params["per_page"] == "100"
        assert params["page"] == "1"
        assert params["since"] == since.isoformat()

    async def test_paginates_until_short_page(self):
        pages: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            page = request.url.params["page"]
            pages.append(page)
            if page == "1":
                return httpx.Response(200, json=[raw_issue(1), raw_issue(2)])
            return httpx.Response(200, json=[raw_issue(3)])

        issues = await make_tracker(handler).list_issues("all", ["Defect"], per_page=2)
        assert [i.number for i in issues] == [1, 2, 3]
        assert pages == ["1", "2"]

    async def test_stops_at_max_pages(self):
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(200, json=[raw_issue(len(calls))])

        issues = await make_tracker(handler, max_pages=3).list_issues("open", ["Defect"], per_page=1)
        assert len(issues) == 3
        assert len(calls) == 3

    async def test_pull_requests_filtered(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[
                raw_issue(1),
                raw_issue(2, pull_request={"url": "https://api.test/pulls/2"}),
            ])

        issues = await make_tracker(handler).list_issues("open", ["Defect"])
        assert [i.number for i in issues] == [1]

    async def test_non_list_payload_is_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "unexpected"})

        assert await make_tracker(handler).list_issues("open", ["Defect"]) == []


class TestWriteVerbs:

    async def test_create_issue(self):
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == ISSUES_PATH
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json=raw_issue(42))

        issue = await make_tracker(handler).create_issue("title", "body", ["Defect", "Engine 1"])
        assert issue.number == 42
        assert bodies == [{"title": "title", "body": "body", "labels": ["Defect", "Engine 1"]}]

    async def test_add_comment(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == f"{ISSUES_PATH}/7/comments"
            assert json.loads(request.content) == {"body": "still missing"}
            return httpx.Response(201, json={"id": 1})

        await make_tracker(handler).add_comment(7, "still missing")

    async def test_patch_sends_only_given_fields(self):
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PATCH"
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json=raw_issue(7))

        tracker = make_tracker(handler)
        await tracker.patch_issue(7, state="closed")
        await tracker.patch_issue(7, state="closed", labels=["Defect", "Resolved"])
        assert bodies == [
            {"state": "closed"},
            {"state": "closed", "labels": ["Defect", "Resolved"]},
        ]


class TestErrorMapping:

    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_auth_rejection(self, status_code: int):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"message": "Bad credentials"})

        with pytest.raises(TrackerAuthError) as exc_info:
            await make_tracker(handler).get_issue(1)
        assert exc_info.value.status_code == status_code

    async def test_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        with pytest.raises(IssueTrackerError) as exc_info:
            await make_tracker(handler).get_issue(1)
        assert exc_info.value.status_code == 404
        assert not isinstance(exc_info.value, TrackerAuthError)

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(IssueTrackerError) as exc_info:
            await make_tracker(handler).create_issue("t", "b", ["Defect"])
        assert exc_info.value.status_code is None
