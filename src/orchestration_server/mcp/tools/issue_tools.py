"""MCP tools for issue management.

This module provides MCP tools for plain issue operations:
- create_epic: Create a business requirement (Domain Expert)
- create_technical_task: Create a technical task, optionally under an epic (Architect)
- report_bug: Log a bug with a severity label (QA)
- get_project_status: List open items, optionally filtered by kind
- add_comment: Comment on an issue (handoffs, reviews)
- close_issue: Close a finished issue

Tool parameters use the camelCase argument names clients send
(``parentEpicId``, ``issueNumber``, ...).
"""

import logging
from typing import Annotated, Optional

from pydantic import Field

from orchestration_server.mcp.labels import ProjectStatusFilter, SeverityLevel

from .dispatcher import ActionDispatcher

logger = logging.getLogger(__name__)


def register_issue_tools(mcp_server, dispatcher: ActionDispatcher):
    """Register issue management tools with a FastMCP server.

    Args:
        mcp_server: FastMCP server instance to register tools with
        dispatcher: Dispatcher the tools forward to
    """

    @mcp_server.tool(
        name="create_epic",
        description="Create a high-level business requirement (Epic). Use this as the Domain Expert.",
    )
    async def create_epic(
        title: Annotated[str, Field(description="The title of the epic (e.g., 'User Authentication System')")],
        description: Annotated[str, Field(description="Detailed business requirements and acceptance criteria")],
    ) -> str:
        result = await dispatcher.dispatch(
            "create_epic", {"title": title, "description": description}
        )
        return result.display_text

    @mcp_server.tool(
        name="create_technical_task",
        description="Create a technical task derived from an Epic. Use this as the Architect.",
    )
    async def create_technical_task(
        title: Annotated[str, Field(description="The title of the task (e.g., 'Setup JWT Middleware')")],
        description: Annotated[str, Field(description="Technical implementation details")],
        parentEpicId: Annotated[Optional[int], Field(description="The issue number of the parent Epic")] = None,
    ) -> str:
        result = await dispatcher.dispatch(
            "create_technical_task",
            {"title": title, "description": description, "parentEpicId": parentEpicId},
        )
        return result.display_text

    @mcp_server.tool(
        name="report_bug",
        description="Log a bug found during testing. Use this as QA.",
    )
    async def report_bug(
        title: Annotated[str, Field(description="Summary of the bug")],
        stepsToReproduce: Annotated[str, Field(description="Steps to reproduce the issue")],
        severity: Annotated[SeverityLevel, Field(description="Severity of the bug")],
    ) -> str:
        result = await dispatcher.dispatch(
            "report_bug",
            {"title": title, "stepsToReproduce": stepsToReproduce, "severity": severity},
        )
        return result.display_text

    @mcp_server.tool(
        name="get_project_status",
        description="Get a list of open items to understand the current state.",
    )
    async def get_project_status(
        type: Annotated[ProjectStatusFilter, Field(description="Filter by issue type")] = "all",
    ) -> str:
        result = await dispatcher.dispatch("get_project_status", {"type": type})
        return result.display_text

    @mcp_server.tool(
        name="add_comment",
        description="Add a comment to an issue. Use this for handoffs or reviews.",
    )
    async def add_comment(
        issueNumber: Annotated[int, Field(description="The issue number to comment on")],
        comment: Annotated[str, Field(description="The comment text")],
    ) -> str:
        result = await dispatcher.dispatch(
            "add_comment", {"issueNumber": issueNumber, "comment": comment}
        )
        return result.display_text

    @mcp_server.tool(
        name="close_issue",
        description="Close an issue when it is completed.",
    )
    async def close_issue(
        issueNumber: Annotated[int, Field(description="The issue number to close")],
    ) -> str:
        result = await dispatcher.dispatch("close_issue", {"issueNumber": issueNumber})
        return result.display_text

    logger.info("Registered issue tools with MCP server")
