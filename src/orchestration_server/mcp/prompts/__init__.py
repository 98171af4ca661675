"""
MCP prompts (personas) for the orchestration workflow.

Each persona prompt steers an agent into one role of the workflow and
includes live project state read from the Issue Store. Prompts return the
briefing text, which FastMCP delivers as a single user message. Arguments
use the camelCase names clients send (``epicId``, ``taskId``).
"""

import logging
from typing import List, Optional

from orchestration_server.mcp.labels import Persona

from .personas import BriefingMessage, PersonaBriefings, parse_issue_id

logger = logging.getLogger(__name__)


def _briefing_text(messages: List[BriefingMessage]) -> str:
    return "\n\n".join(message.text for message in messages)


def register_persona_prompts(mcp_server, briefings: PersonaBriefings):
    """Register one ``persona-<name>`` prompt per persona with a FastMCP server.

    Args:
        mcp_server: FastMCP server instance to register prompts with
        briefings: Briefing generator the prompts render through
    """

    @mcp_server.prompt(
        name=Persona.DOMAIN_EXPERT.prompt_name,
        description="Act as the Domain Expert. Focus on business requirements and user value.",
    )
    async def persona_domain_expert(context: Optional[str] = None) -> str:
        return _briefing_text(await briefings.brief(Persona.DOMAIN_EXPERT, context=context))

    @mcp_server.prompt(
        name=Persona.ARCHITECT.prompt_name,
        description="Act as the Architect. Focus on system design and technical feasibility.",
    )
    async def persona_architect(epicId: Optional[str] = None) -> str:
        return _briefing_text(await briefings.brief(Persona.ARCHITECT, epic_id=epicId))

    @mcp_server.prompt(
        name=Persona.DEVELOPER.prompt_name,
        description="Act as the Developer. Focus on writing clean, working code.",
    )
    async def persona_developer(taskId: Optional[str] = None) -> str:
        return _briefing_text(await briefings.brief(Persona.DEVELOPER, task_id=taskId))

    @mcp_server.prompt(
        name=Persona.QA.prompt_name,
        description="Act as QA. Focus on finding edge cases and bugs.",
    )
    async def persona_qa() -> str:
        return _briefing_text(await briefings.brief(Persona.QA))

    @mcp_server.prompt(
        name=Persona.TECH_LEAD.prompt_name,
        description=(
            "Act as Tech Lead. Focus on code review, team coordination, "
            "and unblocking developers."
        ),
    )
    async def persona_tech_lead(taskId: Optional[str] = None) -> str:
        return _briefing_text(await briefings.brief(Persona.TECH_LEAD, task_id=taskId))

    @mcp_server.prompt(
        name=Persona.DEVOPS.prompt_name,
        description="Act as DevOps Engineer. Focus on deployment, CI/CD, and infrastructure.",
    )
    async def persona_devops() -> str:
        return _briefing_text(await briefings.brief(Persona.DEVOPS))

    logger.info("Registered persona prompts with MCP server")


__all__ = [
    "BriefingMessage",
    "PersonaBriefings",
    "parse_issue_id",
    "register_persona_prompts",
]
