"""Orchestration server: an MCP workflow layer over GitHub Issues."""

__version__ = "0.1.0"
