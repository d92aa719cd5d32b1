"""Cloudflare Pages deployment CLI command."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from wbtl.core.errors import WbtlError

# Module-level console instance (will be set by register function)
console: Console = Console()


def deploy_page(
    dist: Optional[str] = typer.Option(None, "--dist", "-d", help="Distribution folder (required)"),
    build: Optional[str] = typer.Option(None, "--build", "-b", help="Build command (optional)"),
    path: Optional[str] = typer.Option(None, "--path", help="Tool repository (default: current directory)"),
    env_file: Optional[str] = typer.Option(None, "--env-file", help="Path to .env file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Set up Cloudflare Pages hosting for a tool repository.

    Run from the root of a tool repository. Creates the Pages project
    (adding a random suffix if the name is taken globally), a CNAME for
    <tool>.<domain> and attaches the custom domain.

    Examples:
        wbtl deploy-page --dist dist --build 'npm run build'
        wbtl deploy-page --dist public
    """
    from wbtl.cli_support import (
        handle_cli_error,
        load_settings,
        print_error,
        print_info,
        print_success,
        print_warning,
        setup_file_logging,
    )
    from wbtl.scaffold import PagesDeployer

    if not dist:
        print_error(console, "Distribution folder is required.")
        console.print("\nUsage: wbtl deploy-page --dist <folder> [--build <command>]")
        console.print("\nExample: wbtl deploy-page --dist dist --build 'npm run build'")
        raise typer.Exit(1)

    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        config = load_settings(env_file)
        deployer = PagesDeployer(config)
        result = deployer.deploy(
            dist=dist,
            build_command=build,
            repo_dir=Path(path) if path else None,
        )
    except WbtlError as e:
        handle_cli_error(e, console, verbose=verbose)
        return

    if result.used_alternate_name:
        print_info(
            console,
            f"Using '{result.project_name}' because '{result.base_project_name}' was taken globally",
        )
    if result.pages_subdomain:
        print_info(console, f"Pages subdomain: {result.pages_subdomain}")
    for warning in result.warnings:
        print_warning(console, warning)

    console.print()
    print_success(console, "Cloudflare Pages deployment setup complete!")
    console.print()
    console.print(f"Project: {result.dashboard_url}")
    console.print(f"Pages URL: {result.pages_url}")
    console.print(f"Custom domain: https://{result.custom_domain}")
    console.print()
    console.print("Build configuration:")
    console.print(f"  Distribution folder: {result.build.destination_dir}")
    console.print(f"  Build command: {result.build.build_command or '(none)'}")
    console.print()
    console.print("Next steps:")
    console.print("  1. Push code to the main branch to trigger a deployment")
    console.print("  2. Wait for DNS propagation (usually a few minutes)")
    console.print(f"  3. Visit https://{result.custom_domain} to see your tool")


def register_deploy_commands(app: typer.Typer, shared_console: Console):
    """Register deployment commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command("deploy-page")(deploy_page)
