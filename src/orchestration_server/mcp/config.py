"""
Orchestration server configuration.

Handles loading of the repository identity, credential and transport
settings from .orchestrator/config.yaml and the environment. The loaded
value is passed explicitly to the Issue Store and the server; nothing
else reads the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

import yaml

from orchestration_server.mcp.errors import ConfigurationError

DEFAULT_API_URL = "https://api.github.com"
CONFIG_DIR = ".orchestrator"
CONFIG_FILE = "config.yaml"

# Environment variable -> config field
_ENV_OVERRIDES = {
    "GITHUB_TOKEN": "token",
    "GITHUB_OWNER": "owner",
    "GITHUB_REPO": "repo",
    "GITHUB_API_URL": "api_url",
    "MCP_SERVER_HOST": "host",
    "MCP_SERVER_TRANSPORT": "transport",
}


@dataclass
class OrchestratorConfig:
    """
    Server configuration loaded from .orchestrator/config.yaml.

    Attributes:
        owner: Repository owner (user or organization)
        repo: Repository name
        token: Bearer credential for the issue tracker (env only, never saved)
        api_url: Base URL of the GitHub REST API
        transport: Transport mode ("stdio" or "sse", default: "stdio")
        host: Server bind address (SSE only)
        port: Server port (SSE only)
    """

    owner: Optional[str] = None
    repo: Optional[str] = None
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    transport: Literal["stdio", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def repository(self) -> str:
        """Repository in ``owner/repo`` format."""
        return f"{self.owner}/{self.repo}"

    @staticmethod
    def config_path(project_path: Path) -> Path:
        return project_path / CONFIG_DIR / CONFIG_FILE

    @classmethod
    def load(cls, project_path: Path, use_file: bool = True) -> "OrchestratorConfig":
        """
        Load configuration from .orchestrator/config.yaml and the environment.

        Falls back to defaults if the file doesn't exist. Environment
        variables override config file values.

        Args:
            project_path: Directory containing .orchestrator/
            use_file: Whether to read the config file at all

        Returns:
            OrchestratorConfig instance with loaded/default values

        Raises:
            ConfigurationError: If the config file or MCP_SERVER_PORT is malformed
        """
        config_file = cls.config_path(project_path)
        config_dict = {}

        if use_file and config_file.exists():
            try:
                with open(config_file) as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid {CONFIG_FILE}: {e}") from e
            if not isinstance(config_dict, dict):
                raise ConfigurationError(f"Invalid {CONFIG_FILE}: expected a mapping")
            # The credential is never read from disk
            config_dict.pop("token", None)

        for env_name, field_name in _ENV_OVERRIDES.items():
            if os.environ.get(env_name):
                config_dict[field_name] = os.environ[env_name]

        if "MCP_SERVER_PORT" in os.environ:
            try:
                config_dict["port"] = int(os.environ["MCP_SERVER_PORT"])
            except ValueError:
                raise ConfigurationError(
                    f"Invalid MCP_SERVER_PORT: {os.environ['MCP_SERVER_PORT']}. "
                    "Must be an integer."
                )

        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})

    def validate(self) -> None:
        """
        Check that the server can talk to the issue tracker.

        Raises:
            ConfigurationError: If the credential or repository identity is missing,
                or the transport is unknown
        """
        if not self.token:
            raise ConfigurationError("GITHUB_TOKEN environment variable is not set")
        if not self.owner or not self.repo:
            raise ConfigurationError(
                "Target repository is not configured. "
                "Set GITHUB_OWNER and GITHUB_REPO or add owner/repo to "
                f"{CONFIG_DIR}/{CONFIG_FILE}."
            )
        if self.transport not in ("stdio", "sse"):
            raise ConfigurationError(
                f"Invalid transport '{self.transport}'. Must be 'stdio' or 'sse'."
            )

    def save(self, project_path: Path) -> Path:
        """
        Save configuration to .orchestrator/config.yaml.

        Does NOT save the token (credentials come from the environment).

        Args:
            project_path: Directory that will contain .orchestrator/

        Returns:
            Path of the written file
        """
        config_file = self.config_path(project_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        config_dict = {
            "owner": self.owner,
            "repo": self.repo,
            "api_url": self.api_url,
            "transport": self.transport,
            "host": self.host,
            "port": self.port,
        }

        with open(config_file, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
        return config_file
