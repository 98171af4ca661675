"""
Issue Store records and contract.

Defines the records the workflow core reads and the async contract it
needs from an issue tracker. The core holds only transient copies of
issues fetched per call; the tracker is the system of record.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional, Protocol, Sequence

IssueState = Literal["open", "closed"]
ListState = Literal["open", "closed", "all"]


@dataclass
class Issue:
    """Snapshot of an issue as returned by the Issue Store."""

    number: int
    title: str
    body: str = ""
    state: IssueState = "open"
    labels: List[str] = field(default_factory=list)
    comments: int = 0

    def has_label(self, label: str) -> bool:
        return label in self.labels


@dataclass
class Comment:
    """Append-only comment on an issue."""

    issue_number: int
    body: str
    created_at: Optional[datetime] = None


class IssueStore(Protocol):
    """CRUD + query contract the workflow core requires from an issue tracker."""

    async def create_issue(
        self, title: str, body: str, labels: Sequence[str] = ()
    ) -> Issue:
        ...

    async def list_issues(
        self,
        state: ListState = "open",
        labels: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Issue]:
        """List issues; ``labels`` is an AND filter, ``None`` means no filter.

        ``limit`` caps the result to the first ``limit`` issues in store order.
        """
        ...

    async def get_issue(self, number: int) -> Issue:
        ...

    async def update_issue(
        self,
        number: int,
        state: Optional[IssueState] = None,
        labels: Optional[Sequence[str]] = None,
    ) -> Issue:
        """Update an issue; ``labels`` replaces the full label set."""
        ...

    async def add_comment(self, number: int, body: str) -> Comment:
        ...
