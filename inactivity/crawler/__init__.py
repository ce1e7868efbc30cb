"""Repository data sources."""

from .base import DataSourceError, RepositorySource
from .github_client import GitHubCLIClient, GitHubCLIError
from .models import RepositoryRecord

__all__ = [
    "DataSourceError",
    "RepositorySource",
    "GitHubCLIClient",
    "GitHubCLIError",
    "RepositoryRecord",
]
