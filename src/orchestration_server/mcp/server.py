"""
FastMCP server initialization and configuration.

Main server class that wires the Issue Store, the action dispatcher and
the persona briefings into a FastMCP app, and runs it over stdio or SSE.
"""

import logging
import socket
from dataclasses import dataclass, field
from typing import Optional

from fastmcp import FastMCP

from orchestration_server.mcp.adapters import GitHubIssueStore, IssueStore
from orchestration_server.mcp.config import OrchestratorConfig
from orchestration_server.mcp.prompts import PersonaBriefings, register_persona_prompts
from orchestration_server.mcp.tools import (
    ActionDispatcher,
    register_issue_tools,
    register_workflow_tools,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "orchestration-server"


@dataclass
class MCPServer:
    """
    Main MCP server instance for the orchestration workflow.

    Attributes:
        config: Resolved configuration (repository, credential, transport)
        store: Issue Store to use; a GitHubIssueStore is built from config if omitted
    """

    config: OrchestratorConfig = field(default_factory=OrchestratorConfig)
    store: Optional[IssueStore] = None
    dispatcher: ActionDispatcher = field(init=False, repr=False)
    briefings: PersonaBriefings = field(init=False, repr=False)
    _app: Optional[FastMCP] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Validate configuration and build the FastMCP app."""
        if self.config.transport not in ("stdio", "sse"):
            raise ValueError(
                f"Invalid transport '{self.config.transport}'. "
                "Must be 'stdio' or 'sse'."
            )

        if self.store is None:
            # Missing credential or repository is fatal before anything is served
            self.config.validate()
            self.store = GitHubIssueStore(self.config)

        self.dispatcher = ActionDispatcher(self.store)
        self.briefings = PersonaBriefings(self.store)

        self._app = FastMCP(SERVER_NAME)
        self._register_tools()
        self._register_prompts()

    @property
    def app(self) -> FastMCP:
        if not self._app:
            raise RuntimeError("FastMCP app not initialized")
        return self._app

    def _check_port_available(self, host: str, port: int) -> bool:
        """
        Check if port is available for binding.

        Args:
            host: Host address to check
            port: Port number to check

        Returns:
            True if port is available, False otherwise
        """
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return True
        except OSError:
            return False

    def _register_tools(self):
        """Register all MCP tools with the server."""
        register_issue_tools(self.app, self.dispatcher)
        register_workflow_tools(self.app, self.dispatcher)

    def _register_prompts(self):
        """Register persona prompts with the server."""
        register_persona_prompts(self.app, self.briefings)

    def start(self):
        """
        Start the MCP server with configured transport.

        Raises:
            RuntimeError: If port unavailable (SSE) or FastMCP fails to start
        """
        if self.config.transport == "stdio":
            logger.info("Serving %s over stdio", self.config.repository)
            try:
                self.app.run()
            except Exception as e:
                raise RuntimeError(f"Failed to start MCP server with stdio transport: {e}") from e

        elif self.config.transport == "sse":
            host, port = self.config.host, self.config.port
            if not self._check_port_available(host, port):
                raise RuntimeError(
                    f"Port {port} already in use. "
                    f"Choose a different port or stop the conflicting service."
                )

            logger.info("Serving %s over SSE on %s:%s", self.config.repository, host, port)
            try:
                self.app.run(transport="sse", host=host, port=port)
            except Exception as e:
                raise RuntimeError(f"Failed to start MCP server on {host}:{port}: {e}") from e
