"""Core scaffolding for new tool repositories."""
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from wbtl.core.config import WbtlConfig
from wbtl.core.errors import ResourceExistsError
from wbtl.core.logger import get_logger
from wbtl.core.naming import validate_tool_name
from wbtl.services.git_manager import GitManager
from wbtl.services.github import GitHubManager

logger = get_logger(__name__)


@dataclass
class RepoSetupResult:
    """Outcome of a tool repository setup."""
    tool_name: str
    repo_url: str
    local_path: Path
    copied_files: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class RepoScaffolder:
    """Creates a tool repository on GitHub and its local working copy."""

    def __init__(
        self,
        config: WbtlConfig,
        github: Optional[GitHubManager] = None,
        git: Optional[GitManager] = None,
    ):
        self.config = config
        self.github = github or GitHubManager()
        self.git = git or GitManager()

    def setup(self, tool_name: str) -> RepoSetupResult:
        """Create <org>/<tool> on GitHub, push an initial commit, copy templates.

        Args:
            tool_name: Tool name (e.g., "json-format")

        Returns:
            RepoSetupResult describing what was created

        Raises:
            InvalidToolNameError: If the name breaks the naming rules
            ResourceExistsError: If the repository or local folder exists
            GitCommandError: If gh or git fails
        """
        self.github.ensure_cli()
        validate_tool_name(tool_name)
        logger.info(f"Validating tool name: {tool_name}")

        org = self.config.github_org
        full_name = f"{org}/{tool_name}"

        logger.info("Checking if repo already exists on GitHub...")
        if self.github.repo_exists(full_name):
            raise ResourceExistsError(f"Repository '{full_name}' already exists on GitHub!")
        logger.info("✓ Repo name is available")

        local_dir = self.config.projects_dir / tool_name
        if local_dir.exists():
            raise ResourceExistsError(f"Local folder already exists: {local_dir}")

        logger.info(f"Creating repository '{full_name}' on GitHub...")
        self.github.create_repo(full_name, description=f"{self.config.domain} tool: {tool_name}")
        logger.info("✓ GitHub repository created")

        self._initialize_working_copy(local_dir, tool_name)

        result = RepoSetupResult(
            tool_name=tool_name,
            repo_url=f"https://github.com/{full_name}",
            local_path=local_dir,
        )
        self._copy_templates(local_dir, tool_name, result)
        return result

    def _initialize_working_copy(self, local_dir: Path, tool_name: str) -> None:
        """Create the folder, commit a README and push it to main."""
        logger.info(f"Creating local folder: {local_dir}")
        local_dir.mkdir(parents=True)

        self.git.init(local_dir, branch="main")
        self.git.add_remote(
            local_dir, f"https://github.com/{self.config.github_org}/{tool_name}.git"
        )

        logger.info("Creating initial README...")
        (local_dir / "README.md").write_text(self.render_readme(tool_name))

        logger.info("Creating initial commit...")
        self.git.commit(local_dir, ["README.md"], "Initial commit")
        self.git.push(local_dir, branch="main")
        logger.info("✓ Repository initialized and pushed to GitHub")

    def render_readme(self, tool_name: str) -> str:
        domain = self.config.domain
        return f"""# {tool_name}

A {domain} tool.

Visit: https://{tool_name}.{domain}
"""

    def _copy_templates(self, local_dir: Path, tool_name: str, result: RepoSetupResult) -> None:
        """Copy the page template and matching spec files; none are committed."""
        logger.info("Copying template files...")
        site_dir = self.config.site_dir

        template = site_dir / "template" / "tool.html"
        if template.is_file():
            shutil.copy2(template, local_dir / "tool.html")
            result.copied_files.append("tool.html")
            logger.info("✓ Copied: tool.html")
        else:
            self._warn(result, f"Template not found: {template}")

        specs_dir = site_dir / "experiment" / "tool-specs"
        spec_md = specs_dir / f"{tool_name}.md"
        spec_svg = specs_dir / f"{tool_name}.svg"

        # Spec files are copied as a pair or not at all
        if spec_md.is_file() and spec_svg.is_file():
            for source in (spec_md, spec_svg):
                shutil.copy2(source, local_dir / source.name)
                result.copied_files.append(source.name)
            logger.info(f"✓ Copied spec files: {spec_md.name} and {spec_svg.name}")
        elif spec_md.is_file():
            self._warn(result, f"Found {spec_md.name} but missing {spec_svg.name} - not copying either")
        elif spec_svg.is_file():
            self._warn(result, f"Found {spec_svg.name} but missing {spec_md.name} - not copying either")
        else:
            logger.info(f"No matching spec files found for '{tool_name}' in experiment/tool-specs/")

    @staticmethod
    def _warn(result: RepoSetupResult, message: str) -> None:
        logger.warning(message)
        result.warnings.append(message)
