#!/usr/bin/env python3
"""wbtl CLI - provisioning for wbtl.app tools."""

import typer
from rich.console import Console

from wbtl.cli_deploy_commands import register_deploy_commands
from wbtl.cli_repo_commands import register_repo_commands

app = typer.Typer(
    name="wbtl",
    help="""wbtl - provisioning for wbtl.app tools

One repository and one Pages project per tool.

Quick start:
  wbtl setup-repo timer                        # GitHub repo + local copy
  wbtl deploy-page --dist dist --build 'npm run build'   # Cloudflare Pages + DNS

Cloudflare credentials are read from .env or the environment.
""",
    add_completion=False,
)

console = Console()

# Attach modular subcommands
register_repo_commands(app, console)
register_deploy_commands(app, console)

if __name__ == "__main__":
    app()
