"""차량 편성 집계 테스트 — 편성 현황, 재고 부족, 점검 로그, 일일 제출.

Fleet aggregation tests. Pure aggregation functions are tested directly;
the dashboard endpoints are exercised against the fake tracker.
"""

from datetime import date, datetime, timedelta, timezone

from httpx import AsyncClient

from app.schemas.defect import DefectRecord
from app.services.fleet_service import (
    analyze_low_stock,
    compute_fleet_status,
    fleet_service,
    summarize_daily_submissions,
)
from tests.conftest import FakeIssueTracker, auth_header

FLEET = "/api/v1/admin/fleet"
ROSTER = ["Engine 1", "Engine 2", "Ladder 1"]


def make_defect(number: int, apparatus: str) -> DefectRecord:
    return DefectRecord(
        issue_number=number,
        apparatus=apparatus,
        compartment="Cab",
        item=f"Item {number}",
        status="missing",
    )


class TestFleetStatus:

    def test_zero_fill(self):
        status = compute_fleet_status([], ROSTER)
        assert status == {"Engine 1": 0, "Engine 2": 0, "Ladder 1": 0}

    def test_counts_per_apparatus(self):
        defects = [make_defect(1, "Engine 1"), make_defect(2, "Engine 1"), make_defect(3, "Ladder 1")]
        status = compute_fleet_status(defects, ROSTER)
        assert status == {"Engine 1": 2, "Engine 2": 0, "Ladder 1": 1}

    def test_apparatus_outside_roster_counted(self):
        status = compute_fleet_status([make_defect(1, "Tanker 9")], ROSTER)
        assert status["Tanker 9"] == 1
        assert status["Engine 1"] == 0

    async def test_endpoint(self, client: AsyncClient, tracker: FakeIssueTracker, admin_token: str):
        tracker.seed_issue("[Engine 1] Cab: Flashlight - Missing", ["Defect", "Engine 1"])
        tracker.seed_issue("[Engine 1] Rear: Hose - Damaged", ["Defect", "Engine 1", "Damaged"])
        res = await client.get(f"{FLEET}/status", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["Engine 1"] == 2
        assert data["Rope Inventory"] == 0


class TestLowStock:

    def test_threshold(self, tracker: FakeIssueTracker):
        """2회 이상 분실 보고된 품목만 포함."""
        issues = [
            tracker.seed_issue("[Engine 1] Cab: Flashlight - Missing", ["Defect", "Engine 1"]),
            tracker.seed_issue("[Engine 2] Cab: Flashlight - Missing", ["Defect", "Engine 2"]),
            tracker.seed_issue("[Engine 1] Rear: Hose - Missing", ["Defect", "Engine 1"]),
        ]
        report = analyze_low_stock(issues)
        assert len(report) == 1
        assert report[0].item == "Flashlight"
        assert report[0].compartment == "Cab"
        assert report[0].apparatus == ["Engine 1", "Engine 2"]
        assert report[0].occurrences == 2

    def test_damaged_not_counted(self, tracker: FakeIssueTracker):
        issues = [
            tracker.seed_issue("[Engine 1] Cab: Radio - Damaged", ["Defect", "Engine 1"]),
            tracker.seed_issue("[Engine 2] Cab: Radio - Damaged", ["Defect", "Engine 2"]),
        ]
        assert analyze_low_stock(issues) == []

    def test_distinct_apparatus_and_sort(self, tracker: FakeIssueTracker):
        issues = [
            tracker.seed_issue("[Engine 1] Rear: Hose - Missing", ["Defect"]),
            tracker.seed_issue("[Engine 1] Rear: Hose - Missing", ["Defect"]),
            tracker.seed_issue("[Engine 1] Cab: Flashlight - Missing", ["Defect"]),
            tracker.seed_issue("[Ladder 1] Cab: Flashlight - Missing", ["Defect"]),
            tracker.seed_issue("[Engine 2] Cab: Flashlight - Missing", ["Defect"]),
        ]
        report = analyze_low_stock(issues)
        assert [(e.item, e.occurrences) for e in report] == [("Flashlight", 3), ("Hose", 2)]
        assert report[1].apparatus == ["Engine 1"]

    async def test_explicit_window_is_honored(self, tracker: FakeIssueTracker):
        """명시한 기간(0일 포함)은 기본값으로 대체되지 않음."""
        two_days_ago = datetime.now(timezone.utc) - timedelta(days=2)
        tracker.seed_issue("[Engine 1] Cab: Flashlight - Missing", ["Defect", "Engine 1"], created_at=two_days_ago)
        tracker.seed_issue("[Engine 2] Cab: Flashlight - Missing", ["Defect", "Engine 2"], created_at=two_days_ago)

        assert await fleet_service.get_low_stock_report(tracker, window_days=0) == []
        assert await fleet_service.get_low_stock_report(tracker, window_days=1) == []
        report = await fleet_service.get_low_stock_report(tracker)
        assert [(e.item, e.occurrences) for e in report] == [("Flashlight", 2)]

    async def test_endpoint_includes_closed_defects(
        self, client: AsyncClient, tracker: FakeIssueTracker, admin_token: str
    ):
        tracker.seed_issue("[Engine 1] Cab: Flashlight - Missing", ["Defect", "Engine 1"])
        tracker.seed_issue(
            "[Engine 2] Cab: Flashlight - Missing", ["Defect", "Engine 2", "Resolved"], state="closed"
        )
        tracker.seed_issue(
            "[Engine 3] Cab: Flashlight - Missing",
            ["Defect", "Engine 3"],
            created_at=datetime.now(timezone.utc) - timedelta(days=90),
        )
        res = await client.get(f"{FLEET}/low-stock", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 1
        assert data[0]["occurrences"] == 2
        assert ("list_issues", {"state": "all", "labels": ["Defect"]}) in tracker.calls


class TestInspectionLogs:

    async def test_recent_logs(self, client: AsyncClient, tracker: FakeIssueTracker, admin_token: str):
        recent = tracker.seed_issue(
            "[Engine 1] Daily Inspection - 2026-10-19", ["Log", "Engine 1"], state="closed"
        )
        tracker.seed_issue(
            "[Engine 2] Daily Inspection - 2026-09-01",
            ["Log", "Engine 2"],
            state="closed",
            created_at=datetime.now(timezone.utc) - timedelta(days=30),
        )
        res = await client.get(f"{FLEET}/inspection-logs?days=7", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert [log["issue_number"] for log in data] == [recent.number]
        assert data[0]["apparatus"] == "Engine 1"


class TestDailySubmissions:

    def test_summary(self, tracker: FakeIssueTracker):
        today = date(2026, 10, 19)
        now = datetime(2026, 10, 19, 14, 0, tzinfo=timezone.utc)
        logs = [
            tracker.seed_issue("[Engine 1] Daily Inspection - 10/19", ["Log"], state="closed", created_at=now),
            tracker.seed_issue(
                "[Engine 1] Daily Inspection - 10/18", ["Log"], state="closed",
                created_at=now - timedelta(days=1),
            ),
            tracker.seed_issue(
                "[Ladder 1] Daily Inspection - 10/17", ["Log"], state="closed",
                created_at=now - timedelta(days=2),
            ),
            tracker.seed_issue("Unrelated", ["Log"], state="closed", created_at=now),
        ]
        summary = summarize_daily_submissions(logs, ROSTER, today)
        assert summary.today == ["Engine 1"]
        assert summary.totals == {"Engine 1": 2, "Engine 2": 0, "Ladder 1": 1}
        assert summary.last_submission == {"Engine 1": "2026-10-19", "Ladder 1": "2026-10-17"}

    async def test_endpoint(self, client: AsyncClient, tracker: FakeIssueTracker, admin_token: str):
        tracker.seed_issue("[Engine 3] Daily Inspection - today", ["Log", "Engine 3"], state="closed")
        res = await client.get(f"{FLEET}/daily-submissions", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["today"] == ["Engine 3"]
        assert data["totals"]["Engine 3"] == 1
        assert data["totals"]["Engine 1"] == 0
