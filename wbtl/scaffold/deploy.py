"""Cloudflare Pages provisioning for tool repositories."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from wbtl.core.config import WbtlConfig
from wbtl.core.errors import (
    CloudflareApiError,
    ConfigurationError,
    GitCommandError,
    ResourceExistsError,
)
from wbtl.core.logger import get_logger
from wbtl.core.naming import project_name, tool_name_from_origin
from wbtl.core.retry import create_with_unique_name
from wbtl.services.cloudflare import BuildSettings, CloudflareClient
from wbtl.services.git_manager import GitManager

logger = get_logger(__name__)


@dataclass
class DeploymentResult:
    """Outcome of a Pages deployment setup."""
    tool_name: str
    project_name: str
    base_project_name: str
    custom_domain: str
    build: BuildSettings
    attempts: int = 1
    pages_subdomain: Optional[str] = None
    dns_created: bool = False
    domain_attached: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def used_alternate_name(self) -> bool:
        return self.project_name != self.base_project_name

    @property
    def pages_url(self) -> str:
        return f"https://{self.project_name}.pages.dev"

    @property
    def dashboard_url(self) -> str:
        return f"https://dash.cloudflare.com/?to=/:account/pages/view/{self.project_name}"


class PagesDeployer:
    """Sets up a Cloudflare Pages project, DNS record and custom domain for a tool."""

    def __init__(
        self,
        config: WbtlConfig,
        client: Optional[CloudflareClient] = None,
        git: Optional[GitManager] = None,
    ):
        self.config = config
        self._client = client
        self.git = git or GitManager()

    @property
    def client(self) -> CloudflareClient:
        if self._client is None:
            self.config.require_cloudflare()
            self._client = CloudflareClient(
                account_id=self.config.cloudflare_account_id,
                api_token=self.config.cloudflare_api_token,
                zone_id=self.config.cloudflare_zone_id,
                base_url=self.config.api_base_url,
                timeout=self.config.request_timeout,
            )
        return self._client

    def detect_tool(self, repo_dir: Path) -> str:
        """Return the tool name of the working copy at repo_dir.

        Raises:
            GitCommandError: If repo_dir is not a git repository or has no origin
            NotOrgRepositoryError: If origin is outside the organization
        """
        if not self.git.is_repository(repo_dir):
            raise GitCommandError(
                "Not a git repository.\n"
                f"Run this from the root of a {self.config.github_org} tool repository."
            )

        origin = self.git.get_origin_url(repo_dir)
        if not origin:
            raise GitCommandError("No git remote 'origin' found.")

        tool_name = tool_name_from_origin(origin, self.config.github_org)
        logger.info(f"Detected tool: {tool_name}")
        return tool_name

    def deploy(
        self,
        dist: str,
        build_command: Optional[str] = None,
        repo_dir: Optional[Path] = None,
    ) -> DeploymentResult:
        """Provision Pages hosting for the tool checked out at repo_dir.

        Args:
            dist: Distribution folder Pages publishes
            build_command: Build command Pages runs (optional)
            repo_dir: Tool working copy (defaults to current directory)

        Returns:
            DeploymentResult; DNS and domain failures are listed in warnings

        Raises:
            ConfigurationError: Missing dist folder or Cloudflare credentials
            ResourceExistsError: Project already exists in the account
            CloudflareApiError: Project creation failed
            NameCollisionExhaustedError: Every candidate name was taken
        """
        if not dist:
            raise ConfigurationError("Distribution folder is required.")
        self.config.require_cloudflare()

        tool_name = self.detect_tool(repo_dir or Path.cwd())
        build = BuildSettings(destination_dir=dist, build_command=build_command or "")

        base_name = project_name(tool_name, self.config.project_prefix)
        logger.info(f"Checking if project exists in your account: {base_name}")
        if self.client.project_exists(base_name):
            raise ResourceExistsError(
                f"Cloudflare Pages project '{base_name}' already exists in your account!"
            )

        name, response, attempts = create_with_unique_name(
            lambda candidate: self.client.create_project(
                candidate, self.config.github_org, tool_name, build
            ),
            base_name,
            max_attempts=self.config.max_name_attempts,
        )

        result = DeploymentResult(
            tool_name=tool_name,
            project_name=name,
            base_project_name=base_name,
            custom_domain=f"{tool_name}.{self.config.domain}",
            build=build,
            attempts=attempts,
        )
        if isinstance(response.result, dict):
            result.pages_subdomain = response.result.get("subdomain")

        if result.used_alternate_name:
            logger.info(f"✓ Cloudflare Pages project created as '{name}'")
            logger.info(f"Note: Using alternate name because '{base_name}' was taken globally")
        else:
            logger.info("✓ Cloudflare Pages project created")

        self._setup_dns(result)
        self._attach_domain(result)
        return result

    def _setup_dns(self, result: DeploymentResult) -> None:
        """Create a proxied CNAME <tool> -> <project>.pages.dev unless one exists.

        The project already exists at this point, so every failure here is
        reported as a warning.
        """
        domain = result.custom_domain
        logger.info(f"Setting up DNS for {domain}...")

        try:
            if self.client.dns_record_count(domain) > 0:
                self._warn(result, f"DNS record for {domain} already exists. Skipping DNS setup.")
                return

            response = self.client.create_dns_record(
                result.tool_name, f"{result.project_name}.pages.dev"
            )
        except CloudflareApiError as e:
            error_message = str(e)
        else:
            if response.success:
                result.dns_created = True
                logger.info("✓ DNS CNAME record created")
                return
            error_message = response.error_message

        self._warn(result, f"Failed to create DNS record: {error_message}")
        self._warn(result, "You may need to add the CNAME manually in Cloudflare DNS.")

    def _attach_domain(self, result: DeploymentResult) -> None:
        logger.info("Adding custom domain to Pages project...")
        try:
            response = self.client.add_project_domain(result.project_name, result.custom_domain)
        except CloudflareApiError as e:
            error_message = str(e)
        else:
            if response.success:
                result.domain_attached = True
                logger.info("✓ Custom domain added to Pages project")
                return
            error_message = response.error_message

        self._warn(result, f"Failed to add custom domain: {error_message}")
        self._warn(
            result,
            "You may need to add the custom domain manually in Cloudflare Pages settings.",
        )

    @staticmethod
    def _warn(result: DeploymentResult, message: str) -> None:
        logger.warning(message)
        result.warnings.append(message)
