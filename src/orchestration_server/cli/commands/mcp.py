"""MCP server management commands."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from orchestration_server.mcp.config import CONFIG_DIR, OrchestratorConfig
from orchestration_server.mcp.errors import ConfigurationError
from orchestration_server.mcp.server import MCPServer

app = typer.Typer(help="MCP server management")
# stdout carries the stdio MCP channel, so all human output goes to stderr
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _get_project_root() -> Path:
    """Get project root directory (contains .orchestrator/)."""
    cwd = Path.cwd()

    current = cwd
    while current != current.parent:
        if (current / CONFIG_DIR).exists():
            return current
        current = current.parent

    return cwd


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _mask(secret: str) -> str:
    if not secret:
        return "[red]missing[/red]"
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


@app.command()
def start(
    host: str = typer.Option(None, help="Server host (SSE only, overrides config)"),
    port: int = typer.Option(None, help="Server port (SSE only, overrides config)"),
    transport: str = typer.Option(None, help="Transport: stdio or sse (overrides config)"),
    config_file: bool = typer.Option(True, help="Load from .orchestrator/config.yaml"),
    log_level: str = typer.Option("INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
):
    """
    Start the MCP server.

    Configuration is loaded from .orchestrator/config.yaml if it exists,
    then environment variables (GITHUB_TOKEN, GITHUB_OWNER, GITHUB_REPO, ...),
    then command-line options.

    Examples:
        # Start with stdio transport (uses config or defaults)
        orchestration-server mcp start

        # Start with SSE transport
        orchestration-server mcp start --transport sse --host 0.0.0.0 --port 8000
    """
    _configure_logging(log_level)
    project_root = _get_project_root()

    try:
        config = OrchestratorConfig.load(project_root, use_file=config_file)

        if host is not None:
            config.host = host
        if port is not None:
            config.port = port
        if transport is not None:
            config.transport = transport

        config.validate()
        server = MCPServer(config=config)

        console.print("[green]Starting MCP server...[/green]")
        console.print(f"Repository: {config.repository}")
        console.print(f"Transport: {config.transport}")
        if config.transport == "sse":
            console.print(f"Listening on {config.host}:{config.port}")

        server.start()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
    except RuntimeError as e:
        logger.exception("MCP server stopped with an error")
        console.print(f"[red]Error starting server:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        logger.exception("Unexpected server failure")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def config(
    config_file: bool = typer.Option(True, help="Load from .orchestrator/config.yaml"),
):
    """
    Show the resolved server configuration.

    Exits with status 1 when the configuration would prevent the server
    from starting.

    Examples:
        orchestration-server mcp config
    """
    project_root = _get_project_root()

    try:
        resolved = OrchestratorConfig.load(project_root, use_file=config_file)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Orchestration Server Configuration", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Config File", str(OrchestratorConfig.config_path(project_root)))
    table.add_row("Owner", resolved.owner or "[red]missing[/red]")
    table.add_row("Repository", resolved.repo or "[red]missing[/red]")
    table.add_row("Token", _mask(resolved.token or ""))
    table.add_row("API URL", resolved.api_url)
    table.add_row("Transport", resolved.transport)
    if resolved.transport == "sse":
        table.add_row("Host", resolved.host)
        table.add_row("Port", str(resolved.port))

    console.print(table)

    try:
        resolved.validate()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)
