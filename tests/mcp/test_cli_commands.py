"""
Tests for MCP CLI commands (start, config).

Tests cover:
- orchestration-server mcp start with various options
- Configuration errors exit before serving
- orchestration-server mcp config table output
"""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from orchestration_server.cli import app
from orchestration_server.mcp.config import OrchestratorConfig

runner = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Project directory with a config file and credentials in the environment."""
    project_path = tmp_path / "project"
    (project_path / ".orchestrator").mkdir(parents=True)
    (project_path / ".orchestrator" / "config.yaml").write_text("owner: acme\nrepo: shop\n")
    monkeypatch.chdir(project_path)
    for name in ("GITHUB_OWNER", "GITHUB_REPO", "MCP_SERVER_PORT", "MCP_SERVER_TRANSPORT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_secret_token")
    return project_path


class TestStartCommand:
    """Test `orchestration-server mcp start`."""

    @patch("orchestration_server.cli.commands.mcp.MCPServer")
    def test_start_default(self, mock_server_class, project):
        mock_server = MagicMock()
        mock_server_class.return_value = mock_server

        result = runner.invoke(app, ["mcp", "start"])

        assert result.exit_code == 0
        assert "Starting MCP server" in result.output
        assert "Repository: acme/shop" in result.output
        assert "Transport: stdio" in result.output
        config = mock_server_class.call_args.kwargs["config"]
        assert isinstance(config, OrchestratorConfig)
        assert config.token == "ghp_secret_token"
        mock_server.start.assert_called_once()

    @patch("orchestration_server.cli.commands.mcp.MCPServer")
    def test_start_with_sse_transport(self, mock_server_class, project):
        result = runner.invoke(
            app, ["mcp", "start", "--transport", "sse", "--host", "0.0.0.0", "--port", "9100"]
        )

        assert result.exit_code == 0
        assert "Listening on 0.0.0.0:9100" in result.output
        config = mock_server_class.call_args.kwargs["config"]
        assert (config.transport, config.host, config.port) == ("sse", "0.0.0.0", 9100)

    @patch("orchestration_server.cli.commands.mcp.MCPServer")
    def test_missing_token_exits_before_serving(self, mock_server_class, project, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN")

        result = runner.invoke(app, ["mcp", "start"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        mock_server_class.assert_not_called()

    @patch("orchestration_server.cli.commands.mcp.MCPServer")
    def test_no_config_file_requires_env_repository(self, mock_server_class, project):
        result = runner.invoke(app, ["mcp", "start", "--no-config-file"])

        assert result.exit_code == 1
        assert "Target repository is not configured" in result.output
        mock_server_class.assert_not_called()

    @patch("orchestration_server.cli.commands.mcp.MCPServer")
    def test_server_failure_exits_nonzero(self, mock_server_class, project):
        mock_server_class.return_value.start.side_effect = RuntimeError("Port 8000 already in use")

        result = runner.invoke(app, ["mcp", "start"])

        assert result.exit_code == 1
        assert "Port 8000 already in use" in result.output

    @patch("orchestration_server.cli.commands.mcp.MCPServer")
    def test_unexpected_failure_exits_nonzero(self, mock_server_class, project):
        mock_server_class.return_value.start.side_effect = OSError("stdin closed")

        result = runner.invoke(app, ["mcp", "start"])

        assert result.exit_code == 1
        assert "Unexpected error" in result.output


class TestConfigCommand:
    """Test `orchestration-server mcp config`."""

    def test_shows_resolved_config(self, project):
        result = runner.invoke(app, ["mcp", "config"])

        assert result.exit_code == 0
        assert "acme" in result.output
        assert "shop" in result.output
        assert "ghp_secret_token" not in result.output

    def test_invalid_config_exits_nonzero(self, project, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN")

        result = runner.invoke(app, ["mcp", "config"])

        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output
