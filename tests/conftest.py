"""테스트 인프라 — 인메모리 SQLite DB, 가짜 이슈 트래커, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, fake issue tracker, and httpx
client fixtures. Each test gets a fresh database, so no cleanup is needed.
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Sequence

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.api.deps import get_issue_tracker
from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.schemas.issue import Issue, IssueLabel, IssueUser
from app.utils.exceptions import IssueTrackerError, TrackerAuthError
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite://"
ADMIN_PASSWORD = "station-admin"


# ---------------------------------------------------------------------------
# 가짜 이슈 트래커 — In-memory IssueTracker
# ---------------------------------------------------------------------------
class FakeIssueTracker:
    """인메모리 이슈 트래커.

    Records every call and can be told to fail specific operations:
        fail_titles: create_issue fails when the title contains any of these
        fail_comments / fail_list / fail_patch: that verb always fails
        unauthorized: every verb raises TrackerAuthError
    """

    def __init__(self) -> None:
        self.issues: dict[int, Issue] = {}
        self.comments: dict[int, list[str]] = defaultdict(list)
        self.calls: list[tuple[str, object]] = []
        self._next_number: int = 1
        self.fail_titles: set[str] = set()
        self.fail_comments: bool = False
        self.fail_list: bool = False
        self.fail_patch: bool = False
        self.unauthorized: bool = False

    def seed_issue(
        self,
        title: str,
        labels: Sequence[str],
        state: str = "open",
        body: str = "",
        created_at: datetime | None = None,
    ) -> Issue:
        """테스트 데이터로 이슈를 직접 추가합니다 (no call is recorded)."""
        timestamp = created_at or datetime.now(timezone.utc)
        issue = Issue(
            number=self._next_number,
            title=title,
            body=body,
            state=state,
            labels=[IssueLabel(name=name) for name in labels],
            user=IssueUser(login="mbfd-bot"),
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.issues[issue.number] = issue
        self._next_number += 1
        return issue

    def _check_auth(self) -> None:
        if self.unauthorized:
            raise TrackerAuthError("Bad credentials", status_code=401)

    async def list_issues(
        self,
        state: str,
        labels: Sequence[str],
        since: datetime | None = None,
        per_page: int = 100,
    ) -> list[Issue]:
        self.calls.append(("list_issues", {"state": state, "labels": list(labels)}))
        self._check_auth()
        if self.fail_list:
            raise IssueTrackerError("list failed", status_code=500)
        return [
            issue for issue in self.issues.values()
            if (state == "all" or issue.state == state)
            and set(labels) <= set(issue.label_names)
            and (since is None or issue.updated_at is None or issue.updated_at >= since)
        ]

    async def create_issue(self, title: str, body: str, labels: Sequence[str]) -> Issue:
        self.calls.append(("create_issue", title))
        self._check_auth()
        # 다른 항목과 교차 실행되도록 양보 (yield so sibling items interleave)
        await asyncio.sleep(0)
        if any(fragment in title for fragment in self.fail_titles):
            raise IssueTrackerError(f"create failed for {title}", status_code=500)
        return self.seed_issue(title, labels, body=body)

    async def add_comment(self, issue_number: int, body: str) -> None:
        self.calls.append(("add_comment", issue_number))
        self._check_auth()
        await asyncio.sleep(0)
        if self.fail_comments:
            raise IssueTrackerError("comment failed", status_code=500)
        if issue_number not in self.issues:
            raise IssueTrackerError("Not Found", status_code=404)
        self.comments[issue_number].append(body)

    async def patch_issue(
        self,
        issue_number: int,
        state: str | None = None,
        labels: Sequence[str] | None = None,
    ) -> None:
        self.calls.append(("patch_issue", issue_number))
        self._check_auth()
        if self.fail_patch:
            raise IssueTrackerError("patch failed", status_code=500)
        if issue_number not in self.issues:
            raise IssueTrackerError("Not Found", status_code=404)
        update: dict = {"updated_at": datetime.now(timezone.utc)}
        if state is not None:
            update["state"] = state
        if labels is not None:
            update["labels"] = [IssueLabel(name=name) for name in labels]
        self.issues[issue_number] = self.issues[issue_number].model_copy(update=update)

    async def get_issue(self, issue_number: int) -> Issue:
        self.calls.append(("get_issue", issue_number))
        self._check_auth()
        if issue_number not in self.issues:
            raise IssueTrackerError("Not Found", status_code=404)
        return self.issues[issue_number]

    # 테스트 헬퍼 — Query helpers for assertions
    def titled(self, title: str) -> Issue | None:
        return next((i for i in self.issues.values() if i.title == title), None)

    def created_titles(self) -> list[str]:
        return [title for verb, title in self.calls if verb == "create_issue"]


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 트래커, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 인메모리 SQLite 엔진 — 테스트마다 새 스키마."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def tracker() -> FakeIssueTracker:
    return FakeIssueTracker()


@pytest_asyncio.fixture
async def client(db: AsyncSession, tracker: FakeIssueTracker) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션과 이슈 트래커를 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    async def _override_get_issue_tracker() -> AsyncGenerator[FakeIssueTracker, None]:
        yield tracker

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_issue_tracker] = _override_get_issue_tracker

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 관리자 인증 헬퍼 — Admin auth helpers
# ---------------------------------------------------------------------------
@pytest.fixture
def admin_password(monkeypatch: pytest.MonkeyPatch) -> str:
    """관리자 비밀번호 해시를 설정하고 평문을 반환합니다."""
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
    return ADMIN_PASSWORD


@pytest.fixture
def admin_token() -> str:
    return create_access_token({"sub": "Chief Darley"})


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
