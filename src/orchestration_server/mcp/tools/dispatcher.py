"""
Action dispatcher for orchestration tools.

Maps each named action to argument validation, a call into the workflow
engine where one is needed, and the resulting Issue Store operations, then
renders the confirmation text returned to the MCP client.

Each action is a single Issue Store round trip, except the task
transitions (start/review/approve/reject/block), which update labels and
then append a comment. Those two steps are not atomic: if the comment
fails the label update stays applied. Nothing is retried, since comments
are not deduplicated.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Type

from pydantic import ValidationError

from orchestration_server.mcp import workflow
from orchestration_server.mcp.adapters import IssueStore
from orchestration_server.mcp.errors import ActionValidationError
from orchestration_server.mcp.labels import IssueKind

from .schemas import (
    ActionArgs,
    AddCommentArgs,
    ApproveTaskArgs,
    BlockTaskArgs,
    CloseIssueArgs,
    CreateEpicArgs,
    CreateTechnicalTaskArgs,
    GetNextTaskArgs,
    ProjectStatusArgs,
    RejectTaskArgs,
    ReportBugArgs,
    RequestReviewArgs,
    StartTaskArgs,
)

logger = logging.getLogger(__name__)


# Action name -> argument schema
ACTION_SCHEMAS: Dict[str, Type[ActionArgs]] = {
    "create_epic": CreateEpicArgs,
    "create_technical_task": CreateTechnicalTaskArgs,
    "report_bug": ReportBugArgs,
    "get_project_status": ProjectStatusArgs,
    "add_comment": AddCommentArgs,
    "close_issue": CloseIssueArgs,
    "get_next_task": GetNextTaskArgs,
    "start_task": StartTaskArgs,
    "request_review": RequestReviewArgs,
    "approve_task": ApproveTaskArgs,
    "reject_task": RejectTaskArgs,
    "block_task": BlockTaskArgs,
}


@dataclass
class ActionResult:
    """Text returned to the MCP client for a completed action."""

    display_text: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for MCP response."""
        return {"displayText": self.display_text}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_arguments(action: str, arguments: Optional[Mapping[str, Any]] = None) -> ActionArgs:
    """
    Validate a tool argument record against the action's schema.

    Args:
        action: Action name (e.g. "start_task")
        arguments: Raw argument record from the client

    Returns:
        Validated argument model

    Raises:
        ActionValidationError: If the action is unknown or arguments don't match
    """
    schema = ACTION_SCHEMAS.get(action)
    if schema is None:
        raise ActionValidationError(
            f"Unknown action: {action}. Valid actions: {', '.join(ACTION_SCHEMAS)}"
        )
    try:
        return schema.model_validate(dict(arguments or {}))
    except ValidationError as e:
        raise ActionValidationError(
            f"Invalid arguments for {action}: {e}",
            errors=e.errors(include_url=False),
        ) from e


class ActionDispatcher:
    """Runs workflow actions against an Issue Store."""

    def __init__(self, store: IssueStore, clock: Callable[[], datetime] = _utcnow):
        """
        Initialize dispatcher.

        Args:
            store: Issue Store the actions read and mutate
            clock: Source of the current time for "Started by" comments
        """
        self.store = store
        self.clock = clock

    async def dispatch(
        self, action: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> ActionResult:
        """
        Validate arguments and run the named action.

        Validation happens before any Issue Store access. Issue Store errors
        propagate unchanged.
        """
        args = validate_arguments(action, arguments)
        logger.info("Dispatching %s", action)
        handler = getattr(self, f"_{action}")
        return await handler(args)

    # ========================================================================
    # Issue operations
    # ========================================================================

    async def _create_epic(self, args: CreateEpicArgs) -> ActionResult:
        issue = await self.store.create_issue(
            args.title, args.description, [IssueKind.EPIC.value]
        )
        return ActionResult(f"Created Epic #{issue.number}: {issue.title}")

    async def _create_technical_task(self, args: CreateTechnicalTaskArgs) -> ActionResult:
        body = args.description
        if args.parent_epic_id:
            body += f"\n\nRelates to Epic #{args.parent_epic_id}"
        issue = await self.store.create_issue(args.title, body, [IssueKind.TASK.value])
        return ActionResult(f"Created Task #{issue.number}: {issue.title}")

    async def _report_bug(self, args: ReportBugArgs) -> ActionResult:
        body = (
            f"**Severity:** {args.severity.value}\n\n"
            f"**Steps to Reproduce:**\n{args.steps_to_reproduce}"
        )
        issue = await self.store.create_issue(
            args.title, body, [IssueKind.BUG.value, args.severity.label]
        )
        return ActionResult(f"Logged Bug #{issue.number}: {issue.title}")

    async def _get_project_status(self, args: ProjectStatusArgs) -> ActionResult:
        # "all" sends no label filter at all
        labels = None if args.issue_type == "all" else [args.issue_type]
        issues = await self.store.list_issues("open", labels)
        summary = "\n".join(
            f"#{issue.number} [{', '.join(issue.labels)}] {issue.title}" for issue in issues
        )
        return ActionResult(summary or "No open items found.")

    async def _add_comment(self, args: AddCommentArgs) -> ActionResult:
        await self.store.add_comment(args.issue_number, args.comment)
        return ActionResult(f"Added comment to #{args.issue_number}")

    async def _close_issue(self, args: CloseIssueArgs) -> ActionResult:
        await self.store.update_issue(args.issue_number, state="closed")
        return ActionResult(f"Closed issue #{args.issue_number}")

    # ========================================================================
    # Workflow operations
    # ========================================================================

    async def _get_next_task(self, args: GetNextTaskArgs) -> ActionResult:
        open_tasks = await self.store.list_issues("open", [IssueKind.TASK.value])
        next_task = workflow.select_next_task(open_tasks)
        if next_task is None:
            logger.info("No actionable tasks among %d open tasks", len(open_tasks))
        return ActionResult(workflow.format_next_task(next_task))

    async def _apply(self, task_id: int, transition: workflow.Transition) -> None:
        """Replace labels (and state), then append the audit comment."""
        await self.store.update_issue(
            task_id, state=transition.state, labels=transition.labels
        )
        await self.store.add_comment(task_id, transition.comment)

    async def _start_task(self, args: StartTaskArgs) -> ActionResult:
        await self._apply(args.task_id, workflow.start(args.agent_role, self.clock()))
        return ActionResult(
            f"Task #{args.task_id} is now in progress. Assigned to: {args.agent_role}"
        )

    async def _request_review(self, args: RequestReviewArgs) -> ActionResult:
        await self._apply(args.task_id, workflow.request_review(args.reviewer_role, args.notes))
        return ActionResult(
            f"Review requested from {args.reviewer_role} for Task #{args.task_id}"
        )

    async def _approve_task(self, args: ApproveTaskArgs) -> ActionResult:
        await self._apply(args.task_id, workflow.approve(args.approver_role, args.feedback))
        return ActionResult(
            f"Task #{args.task_id} approved and closed by {args.approver_role}"
        )

    async def _reject_task(self, args: RejectTaskArgs) -> ActionResult:
        await self._apply(args.task_id, workflow.reject(args.reviewer_role, args.reason))
        return ActionResult(
            f"Task #{args.task_id} rejected. Changes requested by {args.reviewer_role}"
        )

    async def _block_task(self, args: BlockTaskArgs) -> ActionResult:
        await self._apply(args.task_id, workflow.block(args.reason, args.blocked_by))
        return ActionResult(f"Task #{args.task_id} marked as blocked")
