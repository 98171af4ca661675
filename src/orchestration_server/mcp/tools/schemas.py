"""
Argument schemas for the orchestration tools.

One pydantic model per action. Field names are snake_case; the camelCase
wire names (``taskId``, ``agentRole``, ...) are accepted as aliases. Unknown
fields are rejected. Text fields other than titles are passed through
unchanged, since issue bodies and comments are Markdown.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel

from orchestration_server.mcp.labels import (
    ApproverRole,
    ProjectStatusFilter,
    RejecterRole,
    ReviewerRole,
    Severity,
    StarterRole,
)


class ActionArgs(BaseModel):
    """Base model for every tool argument record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class CreateEpicArgs(ActionArgs):
    title: str = Field(min_length=1, description="The title of the epic (e.g., 'User Authentication System')")
    description: str = Field(description="Detailed business requirements and acceptance criteria")


class CreateTechnicalTaskArgs(ActionArgs):
    title: str = Field(min_length=1, description="The title of the task (e.g., 'Setup JWT Middleware')")
    description: str = Field(description="Technical implementation details")
    parent_epic_id: Optional[PositiveInt] = Field(None, description="The issue number of the parent Epic")


class ReportBugArgs(ActionArgs):
    title: str = Field(min_length=1, description="Summary of the bug")
    steps_to_reproduce: str = Field(description="Steps to reproduce the issue")
    severity: Severity = Field(description="Severity of the bug")


class ProjectStatusArgs(ActionArgs):
    issue_type: ProjectStatusFilter = Field("all", alias="type", description="Filter by issue type")


class AddCommentArgs(ActionArgs):
    issue_number: PositiveInt = Field(description="The issue number to comment on")
    comment: str = Field(description="The comment text")


class CloseIssueArgs(ActionArgs):
    issue_number: PositiveInt = Field(description="The issue number to close")


class GetNextTaskArgs(ActionArgs):
    pass


class StartTaskArgs(ActionArgs):
    task_id: PositiveInt = Field(description="The task number to start")
    agent_role: StarterRole = Field(description="The role starting this task")


class RequestReviewArgs(ActionArgs):
    task_id: PositiveInt = Field(description="The task number to request review for")
    reviewer_role: ReviewerRole = Field(description="The role to review this task")
    notes: Optional[str] = Field(None, description="Additional notes for the reviewer")


class ApproveTaskArgs(ActionArgs):
    task_id: PositiveInt = Field(description="The task number to approve")
    approver_role: ApproverRole = Field(description="The role approving this task")
    feedback: Optional[str] = Field(None, description="Optional approval feedback")


class RejectTaskArgs(ActionArgs):
    task_id: PositiveInt = Field(description="The task number to reject")
    reviewer_role: RejecterRole = Field(description="The role rejecting this task")
    reason: str = Field(description="Reason for rejection and required changes")


class BlockTaskArgs(ActionArgs):
    task_id: PositiveInt = Field(description="The task number to block")
    reason: str = Field(description="Reason for blocking (e.g., 'Waiting for API key')")
    blocked_by: Optional[str] = Field(None, description="What/who is blocking this task")
