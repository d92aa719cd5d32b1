"""Tests for GitHub CLI repository management."""
import subprocess
from unittest.mock import Mock, patch

import pytest

from wbtl.core.errors import ConfigurationError, GitHubCommandError
from wbtl.services.github import GitHubManager


class TestGitHubManager:
    """Test gh-backed repository checks."""

    @patch('subprocess.run')
    def test_repo_exists(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="name: wbtl-app/timer", stderr="")

        assert GitHubManager().repo_exists("wbtl-app/timer") is True
        assert mock_run.call_args[0][0] == ['gh', 'repo', 'view', 'wbtl-app/timer']

    @patch('subprocess.run')
    def test_repo_missing(self, mock_run):
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="Could not resolve to a Repository")

        assert GitHubManager().repo_exists("wbtl-app/timer") is False

    @patch('subprocess.run')
    def test_create_repo_command(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        GitHubManager().create_repo("wbtl-app/timer", description="wbtl.app tool: timer")

        assert mock_run.call_args[0][0] == [
            'gh', 'repo', 'create', 'wbtl-app/timer',
            '--public',
            '--description', 'wbtl.app tool: timer',
        ]

    @patch('subprocess.run')
    def test_create_private_repo(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        GitHubManager().create_repo("wbtl-app/timer", description="x", public=False)

        assert '--private' in mock_run.call_args[0][0]

    @patch('subprocess.run')
    def test_create_repo_failure(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ['gh'], stderr="HTTP 403: Resource not accessible"
        )

        with pytest.raises(GitHubCommandError) as exc:
            GitHubManager().create_repo("wbtl-app/timer", description="x")

        assert "Failed to create GitHub repository" in str(exc.value)
        assert "HTTP 403" in str(exc.value)

    @patch('wbtl.services.github.shutil.which', return_value=None)
    def test_ensure_cli_missing(self, mock_which):
        with pytest.raises(ConfigurationError) as exc:
            GitHubManager().ensure_cli()
        assert "cli.github.com" in str(exc.value)

    @patch('wbtl.services.github.shutil.which', return_value="/usr/bin/gh")
    def test_ensure_cli_present(self, mock_which):
        GitHubManager().ensure_cli()
        mock_which.assert_called_once_with('gh')

    @patch('subprocess.run')
    def test_mock_mode(self, mock_run):
        manager = GitHubManager(mock=True)

        manager.ensure_cli()
        assert manager.repo_exists("wbtl-app/timer") is False
        manager.create_repo("wbtl-app/timer", description="x")

        mock_run.assert_not_called()
