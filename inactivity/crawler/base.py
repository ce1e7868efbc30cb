"""Abstract data source for repository metrics."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterator


class DataSourceError(Exception):
    """A repository metric could not be fetched."""


class RepositorySource(ABC):
    """The operations the analyzer needs from a hosting service."""

    @abstractmethod
    def list_organization_repositories(self, org: str) -> Iterator[str]:
        """Yield repository names of an organization in source order."""

    @abstractmethod
    def get_last_commit_date(self, repo_full_name: str) -> datetime:
        """Return the timestamp of the most recent commit.

        Raises DataSourceError when the repository has no commits.
        """

    @abstractmethod
    def get_contributors(self, repo_full_name: str) -> set[str]:
        """Return the logins of everyone who contributed to the repository."""

    @abstractmethod
    def is_org_member(self, org: str, login: str) -> bool:
        """Check whether a user is still a member of the organization."""

    @abstractmethod
    def is_archived(self, repo_full_name: str) -> bool:
        """Check whether the repository is archived."""
