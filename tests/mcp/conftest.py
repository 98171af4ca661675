"""Shared fixtures for orchestration server tests."""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from orchestration_server.mcp.adapters import Comment, Issue
from orchestration_server.mcp.errors import IssueNotFoundError, IssueStoreError


class FakeIssueStore:
    """In-memory Issue Store that records every call.

    Issues are listed in insertion order, which stands in for the order
    the real tracker returns them in.
    """

    def __init__(self):
        self.issues: Dict[int, Issue] = {}
        self.comments: List[Comment] = []
        self.calls: List[Tuple] = []
        self.fail_on: Optional[str] = None
        self._next_number = 1

    def seed(self, title: str, labels: Sequence[str], body: str = "", state: str = "open") -> Issue:
        issue = Issue(
            number=self._next_number,
            title=title,
            body=body,
            state=state,
            labels=list(labels),
        )
        self.issues[issue.number] = issue
        self._next_number += 1
        return issue

    def comments_for(self, number: int) -> List[str]:
        return [c.body for c in self.comments if c.issue_number == number]

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_on == operation:
            raise IssueStoreError(f"{operation} failed: Bad credentials", status=401)

    async def create_issue(self, title, body, labels=()):
        self.calls.append(("create_issue", title, body, list(labels)))
        self._maybe_fail("create_issue")
        issue = self.seed(title, labels, body=body)
        return Issue(issue.number, issue.title, issue.body, issue.state, list(issue.labels))

    async def list_issues(self, state="open", labels=None, limit=None):
        call = ("list_issues", state, None if labels is None else list(labels))
        self.calls.append(call if limit is None else call + (limit,))
        self._maybe_fail("list_issues")
        wanted = set(labels or [])
        matches = [
            Issue(i.number, i.title, i.body, i.state, list(i.labels))
            for i in self.issues.values()
            if (state == "all" or i.state == state) and wanted.issubset(i.labels)
        ]
        return matches if limit is None else matches[:limit]

    async def get_issue(self, number):
        self.calls.append(("get_issue", number))
        self._maybe_fail("get_issue")
        if number not in self.issues:
            raise IssueNotFoundError(f"Issue #{number} not found", status=404)
        i = self.issues[number]
        return Issue(i.number, i.title, i.body, i.state, list(i.labels))

    async def update_issue(self, number, state=None, labels=None):
        self.calls.append(("update_issue", number, state, None if labels is None else list(labels)))
        self._maybe_fail("update_issue")
        if number not in self.issues:
            raise IssueNotFoundError(f"Issue #{number} not found", status=404)
        issue = self.issues[number]
        if state is not None:
            issue.state = state
        if labels is not None:
            issue.labels = list(labels)
        return issue

    async def add_comment(self, number, body):
        self.calls.append(("add_comment", number, body))
        self._maybe_fail("add_comment")
        if number not in self.issues:
            raise IssueNotFoundError(f"Issue #{number} not found", status=404)
        comment = Comment(issue_number=number, body=body, created_at=datetime.now(timezone.utc))
        self.comments.append(comment)
        return comment


FIXED_NOW = datetime(2026, 1, 31, 12, 30, 45, 123456, tzinfo=timezone.utc)


@pytest.fixture
def store():
    """Empty in-memory Issue Store."""
    return FakeIssueStore()


@pytest.fixture
def dispatcher(store):
    """Dispatcher over the fake store with a fixed clock."""
    from orchestration_server.mcp.tools import ActionDispatcher

    return ActionDispatcher(store, clock=lambda: FIXED_NOW)
