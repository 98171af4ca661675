"""
Persona briefings.

Each persona combines a fixed role description with live, read-only
queries against the Issue Store (open epics, tasks awaiting review,
recently approved tasks). Output is one user message of plain text.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional

from orchestration_server.mcp.adapters import Issue, IssueStore
from orchestration_server.mcp.errors import ActionValidationError
from orchestration_server.mcp.labels import IssueKind, Persona, StatusLabel

logger = logging.getLogger(__name__)

# Cap on approved tasks listed for deployment
DEVOPS_RECENT_LIMIT = 5

TECH_LEAD_DUTIES = """You are the Tech Lead. Your responsibilities:
- Review code quality and design decisions
- Approve or reject tasks using 'approve_task' or 'reject_task'
- Unblock developers using 'block_task' when needed
- Coordinate between roles"""

DEVOPS_DUTIES = """You are the DevOps Engineer. Your responsibilities:
- Deploy approved code to staging and production
- Set up CI/CD pipelines
- Monitor application health
- Manage infrastructure"""


@dataclass(frozen=True)
class BriefingMessage:
    """A single prompt message."""

    text: str
    role: Literal["user"] = "user"


def _bullet_list(issues: Iterable[Issue]) -> str:
    return "\n".join(f"- #{issue.number}: {issue.title}" for issue in issues)


def parse_issue_id(value: Optional[str], name: str) -> Optional[int]:
    """
    Parse an issue number passed as a prompt argument.

    Prompt arguments always arrive as strings.

    Raises:
        ActionValidationError: If the value is not a positive integer
    """
    if value is None or not str(value).strip():
        return None
    text = str(value).strip().lstrip("#")
    if not text.isdigit() or int(text) <= 0:
        raise ActionValidationError(f"Invalid {name}: {value!r}. Must be an issue number.")
    return int(text)


class PersonaBriefings:
    """Builds persona prompt text from live Issue Store queries."""

    def __init__(self, store: IssueStore):
        self.store = store

    async def brief(self, persona: Persona, **arguments: Optional[str]) -> List[BriefingMessage]:
        """
        Render the briefing for ``persona``.

        Args:
            persona: Persona to brief
            **arguments: Optional prompt arguments (context, epic_id, task_id)

        Returns:
            A list holding exactly one user message
        """
        logger.info("Rendering %s briefing", persona.prompt_name)
        if persona is Persona.DOMAIN_EXPERT:
            text = await self.domain_expert(arguments.get("context"))
        elif persona is Persona.ARCHITECT:
            text = await self.architect(parse_issue_id(arguments.get("epic_id"), "epic_id"))
        elif persona is Persona.DEVELOPER:
            text = await self.developer(parse_issue_id(arguments.get("task_id"), "task_id"))
        elif persona is Persona.QA:
            text = self.qa()
        elif persona is Persona.TECH_LEAD:
            text = await self.tech_lead(parse_issue_id(arguments.get("task_id"), "task_id"))
        elif persona is Persona.DEVOPS:
            text = await self.devops()
        else:
            raise ActionValidationError(f"Unknown persona: {persona}")
        return [BriefingMessage(text=text)]

    async def domain_expert(self, context: Optional[str] = None) -> str:
        epics = await self.store.list_issues("open", [IssueKind.EPIC.value])
        return (
            "You are the Domain Expert. Your goal is to define the product vision through Epics.\n\n"
            f"Current Epics:\n{_bullet_list(epics)}\n\n"
            f"{context or ''}"
        )

    async def architect(self, epic_id: Optional[int] = None) -> str:
        focus = ""
        if epic_id is not None:
            epic = await self.store.get_issue(epic_id)
            focus = f"Focusing on Epic #{epic.number}: {epic.title}\n{epic.body}"
        return (
            "You are the Software Architect. Your goal is to design the system "
            "and break Epics into Technical Tasks.\n\n"
            f"{focus}"
        )

    async def developer(self, task_id: Optional[int] = None) -> str:
        if task_id is None:
            return (
                "You are the Lead Developer. Use 'get_next_task' to find actionable work, "
                "'start_task' to claim it and 'request_review' when it is done."
            )
        task = await self.store.get_issue(task_id)
        return (
            f"You are the Lead Developer. You are working on Task #{task.number}: {task.title}.\n\n"
            f"Description:\n{task.body}\n\n"
            "Please implement this task."
        )

    def qa(self) -> str:
        return (
            "You are the QA Engineer. Your goal is to test the application "
            "and log bugs using the 'report_bug' tool."
        )

    async def tech_lead(self, task_id: Optional[int] = None) -> str:
        under_review = ""
        if task_id is not None:
            task = await self.store.get_issue(task_id)
            under_review = (
                f"Reviewing Task #{task.number}: {task.title}\n\nDescription:\n{task.body}"
            )
        in_review = await self.store.list_issues(
            "open", [IssueKind.TASK.value, StatusLabel.REVIEW.value]
        )
        return (
            f"{TECH_LEAD_DUTIES}\n\n"
            f"Tasks awaiting your review:\n{_bullet_list(in_review) or 'None'}\n\n"
            f"{under_review}"
        )

    async def devops(self) -> str:
        recent = await self.store.list_issues(
            "closed",
            [IssueKind.TASK.value, StatusLabel.APPROVED.value],
            limit=DEVOPS_RECENT_LIMIT,
        )
        return (
            f"{DEVOPS_DUTIES}\n\n"
            f"Recently approved tasks ready for deployment:\n{_bullet_list(recent) or 'None'}\n\n"
            "Use 'add_comment' to log deployment status."
        )
