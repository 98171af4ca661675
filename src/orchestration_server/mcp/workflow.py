"""
Workflow engine for task status labels.

Pure decision logic with no I/O: given a snapshot of open tasks it picks
the next actionable one, and given an action it computes the label
replacement set, the target issue state and the audit comment.

State machine over the exclusive status label of a task:

    unstarted -> in-progress -> review -> approved (closed)
                                       -> in-progress + needs-changes
    in-progress -> blocked -> in-progress (via a new start)

Every transition is a full label replacement that re-includes the ``task``
kind label. Applying the same transition twice yields the same label set.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from orchestration_server.mcp.adapters import Issue, IssueState
from orchestration_server.mcp.labels import (
    NOT_ACTIONABLE,
    AgentRole,
    IssueKind,
    StatusLabel,
)

NO_ACTIONABLE_TASKS = (
    "No actionable tasks available. "
    "All tasks are either in progress, blocked, or awaiting review."
)


@dataclass(frozen=True)
class Transition:
    """
    Effects of a workflow action on a single task.

    Attributes:
        labels: Complete replacement label set (never a delta)
        comment: Audit comment appended after the label update
        state: Issue state to set, or None to leave it unchanged
    """

    labels: List[str]
    comment: str
    state: Optional[IssueState] = None


@dataclass(frozen=True)
class NextTask:
    """Task chosen by next-task selection plus the advisory role."""

    issue: Issue
    recommended_role: AgentRole


def format_timestamp(now: datetime) -> str:
    """Render ``now`` as ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _task_labels(*statuses: StatusLabel) -> List[str]:
    return [IssueKind.TASK.value] + [status.value for status in statuses]


# ----------------------------------------------------------------------
# Next-task selection
# ----------------------------------------------------------------------


def is_actionable(issue: Issue) -> bool:
    """True unless the task is in progress, blocked or awaiting review."""
    return not NOT_ACTIONABLE.intersection(issue.labels)


def actionable_tasks(open_tasks: Iterable[Issue]) -> List[Issue]:
    return [task for task in open_tasks if is_actionable(task)]


def recommend_role(task: Issue) -> AgentRole:
    """Undesigned tasks go to the architect first, designed ones to a developer."""
    if task.has_label(StatusLabel.DESIGNED.value):
        return AgentRole.DEVELOPER
    return AgentRole.ARCHITECT


def select_next_task(open_tasks: Iterable[Issue]) -> Optional[NextTask]:
    """
    Pick the first actionable task in the order the Issue Store returned them.

    There is no priority policy beyond store order.

    Args:
        open_tasks: Open issues labeled ``task``

    Returns:
        NextTask, or None when nothing is actionable
    """
    candidates = actionable_tasks(open_tasks)
    if not candidates:
        return None
    task = candidates[0]
    return NextTask(issue=task, recommended_role=recommend_role(task))


def format_next_task(next_task: Optional[NextTask]) -> str:
    if next_task is None:
        return NO_ACTIONABLE_TASKS
    task = next_task.issue
    return (
        f"**Next Task:** #{task.number} - {task.title}\n"
        f"**Status:** Ready to start\n"
        f"**Recommended Agent:** {next_task.recommended_role.value}\n"
        f"**Description:** {task.body}"
    )


# ----------------------------------------------------------------------
# Transitions
# ----------------------------------------------------------------------


def start(role: str, now: datetime) -> Transition:
    """Unstarted, blocked or rejected task -> in-progress.

    The replacement set drops ``needs-changes`` left by a rejection.
    """
    return Transition(
        labels=_task_labels(StatusLabel.IN_PROGRESS),
        comment=f"Started by **{role}** at {format_timestamp(now)}",
    )


def request_review(role: str, notes: Optional[str] = None) -> Transition:
    comment = f"**Review Requested**\n\nReviewer: **{role}**\n"
    if notes:
        comment += f"\nNotes: {notes}"
    return Transition(labels=_task_labels(StatusLabel.REVIEW), comment=comment)


def approve(role: str, feedback: Optional[str] = None) -> Transition:
    """Terminal transition: the issue is closed."""
    comment = f"✅ **Approved by {role}**\n"
    if feedback:
        comment += f"\nFeedback: {feedback}"
    return Transition(
        labels=_task_labels(StatusLabel.APPROVED),
        comment=comment,
        state="closed",
    )


def reject(role: str, reason: str) -> Transition:
    return Transition(
        labels=_task_labels(StatusLabel.IN_PROGRESS, StatusLabel.NEEDS_CHANGES),
        comment=f"❌ **Changes Requested by {role}**\n\n{reason}",
        state="open",
    )


def block(reason: str, blocked_by: Optional[str] = None) -> Transition:
    """Blocking is not cleared automatically; a later start resumes the task."""
    comment = f"🚫 **Task Blocked**\n\nReason: {reason}\n"
    if blocked_by:
        comment += f"Blocked by: {blocked_by}"
    return Transition(labels=_task_labels(StatusLabel.BLOCKED), comment=comment)
