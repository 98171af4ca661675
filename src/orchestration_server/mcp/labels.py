"""
Label vocabulary for the orchestration workflow.

Labels are the only encoding of entity kind and workflow status on an
issue. This module holds the closed value sets; it has no behavior of its
own beyond rendering label strings.
"""

from enum import Enum
from typing import FrozenSet, Literal


class IssueKind(str, Enum):
    """Kind label assigned at creation and never changed."""

    EPIC = "epic"
    TASK = "task"
    BUG = "bug"


class Severity(str, Enum):
    """Bug severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        """Label string carried by the bug issue (e.g. ``severity-high``)."""
        return f"severity-{self.value}"


class StatusLabel(str, Enum):
    """Workflow status labels, plus the ``needs-changes`` overlay flag."""

    IN_PROGRESS = "status:in-progress"
    BLOCKED = "status:blocked"
    REVIEW = "status:review"
    DESIGNED = "status:designed"
    APPROVED = "status:approved"
    NEEDS_CHANGES = "needs-changes"


# At most one of these is authoritative on a task at a time
EXCLUSIVE_STATUSES: FrozenSet[str] = frozenset(
    {
        StatusLabel.IN_PROGRESS.value,
        StatusLabel.BLOCKED.value,
        StatusLabel.REVIEW.value,
        StatusLabel.APPROVED.value,
    }
)

# Tasks carrying any of these are skipped by next-task selection
NOT_ACTIONABLE: FrozenSet[str] = frozenset(
    {
        StatusLabel.IN_PROGRESS.value,
        StatusLabel.BLOCKED.value,
        StatusLabel.REVIEW.value,
    }
)


class AgentRole(str, Enum):
    """Every role an agent can act as when driving the workflow."""

    ARCHITECT = "architect"
    DEVELOPER = "developer"
    TECH_LEAD = "tech-lead"
    QA = "qa"
    DEVOPS = "devops"
    PRODUCT_OWNER = "product-owner"


class Persona(str, Enum):
    """Named role briefings exposed as MCP prompts."""

    DOMAIN_EXPERT = "domain-expert"
    ARCHITECT = "architect"
    DEVELOPER = "developer"
    QA = "qa"
    TECH_LEAD = "tech-lead"
    DEVOPS = "devops"

    @property
    def prompt_name(self) -> str:
        return f"persona-{self.value}"


# Roles accepted by each workflow action
StarterRole = Literal["architect", "developer", "tech-lead", "qa", "devops"]
ReviewerRole = Literal["tech-lead", "qa", "architect", "devops"]
ApproverRole = Literal["tech-lead", "qa", "product-owner"]
RejecterRole = Literal["tech-lead", "qa", "architect"]

SeverityLevel = Literal["low", "medium", "high", "critical"]
ProjectStatusFilter = Literal["epic", "task", "bug", "all"]
