"""wbtl runtime configuration and settings."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from wbtl.core.errors import ConfigurationError
from wbtl.core.logger import get_logger

logger = get_logger(__name__)

CLOUDFLARE_API_BASE_URL = "https://api.cloudflare.com/client/v4"


def _default_site_dir() -> Path:
    return Path(os.getenv("WBTL_SITE_DIR", Path.cwd()))


def env_file_candidates(explicit: Optional[str] = None) -> List[Path]:
    """Return .env locations to consider, ordered by priority."""
    if explicit:
        return [Path(explicit)]

    if env_file := os.environ.get("WBTL_ENV_FILE"):
        return [Path(env_file)]

    return [
        Path.cwd() / ".env",
        _default_site_dir() / "scripts" / ".env",
    ]


def load_env_file(explicit: Optional[str] = None) -> Optional[Path]:
    """Load the first existing .env file into the process environment.

    Values already present in the environment win over the file.

    Raises:
        ConfigurationError: If an explicitly requested file does not exist
    """
    for candidate in env_file_candidates(explicit):
        if candidate.is_file():
            load_dotenv(dotenv_path=candidate, override=False)
            logger.debug(f"Loaded environment from {candidate}")
            return candidate

    if explicit:
        raise ConfigurationError(f"Environment file not found: {explicit}")
    return None


@dataclass
class WbtlConfig:
    """Runtime configuration for provisioning operations.

    Attributes:
        cloudflare_account_id: Cloudflare account owning the Pages projects
        cloudflare_api_token: API token with Pages and DNS edit permissions
        cloudflare_zone_id: Zone of the apex domain
        github_org: GitHub organization hosting tool repositories
        domain: Apex domain tools are served under
        project_prefix: Prefix for Cloudflare Pages project names
        projects_dir: Parent folder for local tool working copies
        site_dir: Checkout of the marketing site holding templates and specs
        api_base_url: Cloudflare REST API root
        request_timeout: Timeout in seconds for each API request (default: 30)
        max_name_attempts: Project creation attempts under name collisions (default: 10)
    """

    cloudflare_account_id: Optional[str] = None
    cloudflare_api_token: Optional[str] = None
    cloudflare_zone_id: Optional[str] = None

    github_org: str = "wbtl-app"
    domain: str = "wbtl.app"
    project_prefix: str = "wbtl-app-"

    projects_dir: Path = field(default_factory=lambda: Path.home() / "projects" / "wbtl-app")
    site_dir: Path = field(default_factory=Path.cwd)

    api_base_url: str = CLOUDFLARE_API_BASE_URL
    request_timeout: int = 30
    max_name_attempts: int = 10

    @classmethod
    def from_env(cls) -> "WbtlConfig":
        """Create config from environment variables.

        Environment variables:
            CLOUDFLARE_ACCOUNT_ID, CLOUDFLARE_API_TOKEN, CLOUDFLARE_ZONE_ID
            WBTL_GITHUB_ORG: GitHub organization
            WBTL_DOMAIN: Apex domain
            WBTL_PROJECT_PREFIX: Pages project name prefix
            WBTL_PROJECTS_DIR: Local working copy parent folder
            WBTL_SITE_DIR: Marketing site checkout
            WBTL_REQUEST_TIMEOUT: API timeout in seconds
            WBTL_MAX_NAME_ATTEMPTS: Name collision attempts

        Returns:
            WbtlConfig instance with values from environment or defaults
        """
        defaults = cls()
        try:
            request_timeout = int(os.getenv("WBTL_REQUEST_TIMEOUT", defaults.request_timeout))
            max_name_attempts = int(
                os.getenv("WBTL_MAX_NAME_ATTEMPTS", defaults.max_name_attempts)
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        if max_name_attempts < 1:
            raise ConfigurationError("WBTL_MAX_NAME_ATTEMPTS must be at least 1")

        projects_dir = os.getenv("WBTL_PROJECTS_DIR")

        return cls(
            cloudflare_account_id=os.getenv("CLOUDFLARE_ACCOUNT_ID") or None,
            cloudflare_api_token=os.getenv("CLOUDFLARE_API_TOKEN") or None,
            cloudflare_zone_id=os.getenv("CLOUDFLARE_ZONE_ID") or None,
            github_org=os.getenv("WBTL_GITHUB_ORG", defaults.github_org),
            domain=os.getenv("WBTL_DOMAIN", defaults.domain),
            project_prefix=os.getenv("WBTL_PROJECT_PREFIX", defaults.project_prefix),
            projects_dir=Path(projects_dir).expanduser() if projects_dir else defaults.projects_dir,
            site_dir=_default_site_dir().expanduser(),
            api_base_url=os.getenv("WBTL_API_BASE_URL", defaults.api_base_url),
            request_timeout=request_timeout,
            max_name_attempts=max_name_attempts,
        )

    def require_cloudflare(self) -> None:
        """Ensure Cloudflare credentials are present.

        Raises:
            ConfigurationError: Naming the first missing variable
        """
        required = [
            ("CLOUDFLARE_ACCOUNT_ID", self.cloudflare_account_id, ""),
            ("CLOUDFLARE_API_TOKEN", self.cloudflare_api_token, ""),
            ("CLOUDFLARE_ZONE_ID", self.cloudflare_zone_id, f" (for {self.domain} domain)"),
        ]
        for name, value, note in required:
            if not value:
                raise ConfigurationError(
                    f"{name} is not set{note}.\n"
                    "Add it to a .env file or set it as an environment variable."
                )


# Global config instance (can be overridden)
_config: Optional[WbtlConfig] = None


def get_config() -> WbtlConfig:
    """Get the global wbtl configuration.

    Returns:
        WbtlConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = WbtlConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call rereads the environment."""
    global _config
    _config = None
