"""Repository setup CLI command."""
from typing import Optional

import typer
from rich.console import Console

from wbtl.core.errors import WbtlError

# Module-level console instance (will be set by register function)
console: Console = Console()


def setup_repo(
    tool_name: str = typer.Argument(..., help="Tool name (e.g., timer, json-format)"),
    env_file: Optional[str] = typer.Option(None, "--env-file", help="Path to .env file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Create a new tool repository in the GitHub organization.

    Validates the name, creates <org>/<tool-name> on GitHub, pushes a README
    commit from <projects-dir>/<tool-name> and copies the page template and
    matching spec files (not committed).

    Examples:
        wbtl setup-repo timer
        wbtl setup-repo json-format
    """
    from wbtl.cli_support import (
        handle_cli_error,
        is_mock,
        load_settings,
        print_success,
        print_warning,
        setup_file_logging,
    )
    from wbtl.scaffold import RepoScaffolder
    from wbtl.services.git_manager import GitManager
    from wbtl.services.github import GitHubManager

    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    mock = is_mock()
    try:
        config = load_settings(env_file)
        scaffolder = RepoScaffolder(
            config,
            github=GitHubManager(mock=mock),
            git=GitManager(mock=mock),
        )
        result = scaffolder.setup(tool_name)
    except WbtlError as e:
        handle_cli_error(e, console, verbose=verbose)
        return

    console.print()
    print_success(console, "Tool repository setup complete!")
    console.print()
    console.print(f"Repository: {result.repo_url}")
    console.print(f"Local path: {result.local_path}")
    if result.copied_files:
        console.print(f"Copied (not committed): {', '.join(result.copied_files)}")
    for warning in result.warnings:
        print_warning(console, warning)
    console.print()
    console.print("Next steps:")
    console.print(f"  1. cd {result.local_path}")
    console.print("  2. Review copied template files (NOT committed)")
    console.print("  3. Start building your tool")
    console.print("  4. Run 'wbtl deploy-page' to set up Cloudflare hosting")


def register_repo_commands(app: typer.Typer, shared_console: Console):
    """Register repository commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command("setup-repo")(setup_repo)
