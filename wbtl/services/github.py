"""GitHub repository management through the gh CLI."""
import shutil
import subprocess

from wbtl.core.errors import ConfigurationError, GitHubCommandError
from wbtl.core.logger import get_logger

logger = get_logger(__name__)

GH_INSTALL_URL = "https://cli.github.com/"


class GitHubManager:
    """Checks and creates organization repositories with `gh`."""

    def __init__(self, mock: bool = False):
        self.mock = mock

    def ensure_cli(self) -> None:
        """Raise ConfigurationError when the gh binary is not on PATH."""
        if self.mock:
            return
        if shutil.which('gh') is None:
            raise ConfigurationError(
                f"GitHub CLI (gh) is required. Install: {GH_INSTALL_URL}"
            )

    def repo_exists(self, full_name: str) -> bool:
        """Return True if `gh repo view` finds the repository."""
        if self.mock:
            logger.info(f"MOCK: Would check if {full_name} exists on GitHub")
            return False

        result = subprocess.run(
            ['gh', 'repo', 'view', full_name],
            capture_output=True,
            text=True,
            check=False
        )
        return result.returncode == 0

    def create_repo(self, full_name: str, description: str, public: bool = True) -> None:
        """Create a repository on GitHub.

        Args:
            full_name: Repository as <owner>/<name>
            description: Repository description
            public: Create a public repository (default: True)

        Raises:
            GitHubCommandError: If gh exits non-zero
        """
        if self.mock:
            logger.info(f"MOCK: Would create GitHub repository {full_name}")
            return

        cmd = [
            'gh', 'repo', 'create', full_name,
            '--public' if public else '--private',
            '--description', description,
        ]

        try:
            subprocess.run(cmd, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            raise GitHubCommandError("Failed to create GitHub repository", stderr=e.stderr)
