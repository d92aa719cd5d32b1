"""Tool repository scaffolding."""

from .core import RepoScaffolder, RepoSetupResult
from .deploy import DeploymentResult, PagesDeployer

__all__ = [
    "DeploymentResult",
    "PagesDeployer",
    "RepoScaffolder",
    "RepoSetupResult",
]
