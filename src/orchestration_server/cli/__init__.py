"""Command-line entry point for the orchestration server."""

import typer

from .commands import mcp

app = typer.Typer(help="Agent workflow orchestration over GitHub Issues", no_args_is_help=True)
app.add_typer(mcp.app, name="mcp")


def main():
    app()
