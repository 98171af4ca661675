"""MCP tools for workflow automation.

This module provides MCP tools that move tasks through the status-label
state machine:
- get_next_task: Next actionable task plus a recommended agent role
- start_task: Mark a task in-progress
- request_review: Move a task to review
- approve_task: Approve and close a reviewed task
- reject_task: Send a task back to in-progress with needs-changes
- block_task: Mark a task blocked

Tool parameters use the camelCase argument names clients send
(``taskId``, ``agentRole``, ...).
"""

import logging
from typing import Annotated, Optional

from pydantic import Field

from orchestration_server.mcp.labels import (
    ApproverRole,
    RejecterRole,
    ReviewerRole,
    StarterRole,
)

from .dispatcher import ActionDispatcher

logger = logging.getLogger(__name__)


def register_workflow_tools(mcp_server, dispatcher: ActionDispatcher):
    """Register workflow automation tools with a FastMCP server.

    Args:
        mcp_server: FastMCP server instance to register tools with
        dispatcher: Dispatcher the tools forward to
    """

    @mcp_server.tool(
        name="get_next_task",
        description=(
            "Get the next actionable task based on dependencies and priority. "
            "Returns the task details and recommended agent."
        ),
    )
    async def get_next_task() -> str:
        result = await dispatcher.dispatch("get_next_task", {})
        return result.display_text

    @mcp_server.tool(
        name="start_task",
        description="Mark a task as in-progress and assign it to the current agent role.",
    )
    async def start_task(
        taskId: Annotated[int, Field(description="The task number to start")],
        agentRole: Annotated[StarterRole, Field(description="The role starting this task")],
    ) -> str:
        result = await dispatcher.dispatch(
            "start_task", {"taskId": taskId, "agentRole": agentRole}
        )
        return result.display_text

    @mcp_server.tool(
        name="request_review",
        description="Request a review from another agent role. Changes task status to 'review'.",
    )
    async def request_review(
        taskId: Annotated[int, Field(description="The task number to request review for")],
        reviewerRole: Annotated[ReviewerRole, Field(description="The role to review this task")],
        notes: Annotated[Optional[str], Field(description="Additional notes for the reviewer")] = None,
    ) -> str:
        result = await dispatcher.dispatch(
            "request_review",
            {"taskId": taskId, "reviewerRole": reviewerRole, "notes": notes},
        )
        return result.display_text

    @mcp_server.tool(
        name="approve_task",
        description="Approve a task after review. This closes the task and marks it as complete.",
    )
    async def approve_task(
        taskId: Annotated[int, Field(description="The task number to approve")],
        approverRole: Annotated[ApproverRole, Field(description="The role approving this task")],
        feedback: Annotated[Optional[str], Field(description="Optional approval feedback")] = None,
    ) -> str:
        result = await dispatcher.dispatch(
            "approve_task",
            {"taskId": taskId, "approverRole": approverRole, "feedback": feedback},
        )
        return result.display_text

    @mcp_server.tool(
        name="reject_task",
        description="Reject a task and request changes. Moves task back to in-progress.",
    )
    async def reject_task(
        taskId: Annotated[int, Field(description="The task number to reject")],
        reviewerRole: Annotated[RejecterRole, Field(description="The role rejecting this task")],
        reason: Annotated[str, Field(description="Reason for rejection and required changes")],
    ) -> str:
        result = await dispatcher.dispatch(
            "reject_task",
            {"taskId": taskId, "reviewerRole": reviewerRole, "reason": reason},
        )
        return result.display_text

    @mcp_server.tool(
        name="block_task",
        description="Mark a task as blocked due to external dependencies.",
    )
    async def block_task(
        taskId: Annotated[int, Field(description="The task number to block")],
        reason: Annotated[str, Field(description="Reason for blocking (e.g., 'Waiting for API key')")],
        blockedBy: Annotated[Optional[str], Field(description="What/who is blocking this task")] = None,
    ) -> str:
        result = await dispatcher.dispatch(
            "block_task", {"taskId": taskId, "reason": reason, "blockedBy": blockedBy}
        )
        return result.display_text

    logger.info("Registered workflow tools with MCP server")
