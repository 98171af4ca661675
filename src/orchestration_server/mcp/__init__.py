"""
MCP (Model Context Protocol) server for agent-driven project workflow.

Lets AI agents drive epics, tasks and bugs stored as GitHub issues, with
task status encoded as labels.

Architecture:
- server.py: FastMCP server initialization and configuration
- config.py: Repository, credential and transport configuration
- labels.py: Label vocabulary (kinds, severities, statuses, roles)
- workflow.py: Status-label state machine and next-task selection
- tools/: Action dispatcher and MCP tool registration
- prompts/: Persona briefings exposed as MCP prompts
- adapters/: Issue Store contract and the GitHub implementation
"""

__all__ = ["MCPServer", "OrchestratorConfig"]

from .config import OrchestratorConfig
from .server import MCPServer
