"""Exception hierarchy for wbtl operations."""
from typing import Optional


class WbtlError(Exception):
    """Base class for every error the CLI reports to the operator."""
    pass


class ConfigurationError(WbtlError):
    """Raised when required settings are missing or invalid."""
    pass


class InvalidToolNameError(WbtlError, ValueError):
    """Raised when a tool name does not follow the naming rules."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid tool name: '{name}'\n{reason}")


class NotOrgRepositoryError(WbtlError):
    """Raised when a git origin does not belong to the tools organization."""
    pass


class ResourceExistsError(WbtlError):
    """Raised when a resource that must be new already exists."""
    pass


class GitCommandError(WbtlError):
    """Raised when a git invocation fails."""

    def __init__(self, message: str, stderr: Optional[str] = None):
        self.stderr = stderr or ""
        if self.stderr:
            message = f"{message}\n{self.stderr}"
        super().__init__(message)


class GitHubCommandError(GitCommandError):
    """Raised when a GitHub CLI invocation fails."""
    pass


class CloudflareApiError(WbtlError):
    """Raised when a Cloudflare API call fails for a non-recoverable reason."""

    def __init__(self, message: str, response_text: Optional[str] = None):
        self.response_text = response_text
        if response_text:
            message = f"{message}\n\nFull response: {response_text}"
        super().__init__(message)


class NameCollisionExhaustedError(WbtlError):
    """Raised when every candidate project name was already taken."""

    def __init__(self, attempts: int, last_name: str):
        self.attempts = attempts
        self.last_name = last_name
        super().__init__(
            f"Failed to create project after {attempts} attempts. "
            "All names were taken globally."
        )
