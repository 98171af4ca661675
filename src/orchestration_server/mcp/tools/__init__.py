"""
MCP tool handlers for the orchestration workflow.

Domain-grouped tools that translate MCP requests into workflow actions.
The dispatcher handles argument validation, Issue Store calls and
response text; the tool modules only register typed wrappers with FastMCP.
"""

from .dispatcher import (
    ACTION_SCHEMAS,
    ActionDispatcher,
    ActionResult,
    validate_arguments,
)
from .issue_tools import register_issue_tools
from .workflow_tools import register_workflow_tools

__all__ = [
    "ACTION_SCHEMAS",
    "ActionDispatcher",
    "ActionResult",
    "validate_arguments",
    "register_issue_tools",
    "register_workflow_tools",
]
