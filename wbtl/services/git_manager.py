"""Local git repository management for tool working copies."""
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from wbtl.core.errors import GitCommandError
from wbtl.core.logger import get_logger

logger = get_logger(__name__)


class GitManager:
    """Manages git operations on a local working copy."""

    def __init__(self, mock: bool = False):
        self.mock = mock

    def _run(self, args: List[str], cwd: Optional[Path] = None) -> str:
        """Run a git command and return its stripped stdout.

        Raises:
            GitCommandError: If git is missing or exits non-zero
        """
        cmd = ['git'] + args
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True
            )
        except FileNotFoundError:
            raise GitCommandError("Git not found. Please install git first.")
        except subprocess.CalledProcessError as e:
            raise GitCommandError(f"git {' '.join(args)} failed", stderr=e.stderr)

        if result.stdout:
            logger.debug(f"Git output: {result.stdout.strip()}")
        return result.stdout.strip() if result.stdout else ""

    def is_repository(self, path: Path) -> bool:
        """Check whether path is inside a git work tree."""
        try:
            self._run(['rev-parse', '--git-dir'], cwd=path)
        except GitCommandError:
            return False
        return True

    def get_origin_url(self, path: Path) -> Optional[str]:
        """Return the URL of the origin remote, or None if there is none."""
        try:
            url = self._run(['remote', 'get-url', 'origin'], cwd=path)
        except GitCommandError:
            return None
        return url or None

    def init(self, path: Path, branch: str = "main") -> None:
        if self.mock:
            logger.info(f"MOCK: Would git init -b {branch} in {path}")
            return

        logger.info("Initializing local git repository...")
        self._run(['init', '-b', branch], cwd=path)

    def add_remote(self, path: Path, url: str, name: str = "origin") -> None:
        if self.mock:
            logger.info(f"MOCK: Would add remote {name} -> {url}")
            return

        logger.info(f"Setting up remote {name}...")
        self._run(['remote', 'add', name, url], cwd=path)

    def commit(self, path: Path, files: Iterable[str], message: str) -> None:
        """Stage the given files and commit them."""
        files = list(files)
        if self.mock:
            logger.info(f"MOCK: Would commit {', '.join(files)} with message '{message}'")
            return

        self._run(['add'] + files, cwd=path)
        self._run(['commit', '-m', message], cwd=path)

    def push(self, path: Path, branch: str = "main", remote: str = "origin") -> None:
        """Push a branch and set its upstream."""
        if self.mock:
            logger.info(f"MOCK: Would push {branch} to {remote}")
            return

        logger.info(f"Pushing {branch} to {remote}...")
        self._run(['push', '-u', remote, branch], cwd=path)
