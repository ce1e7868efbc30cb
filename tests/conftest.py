"""Shared test fixtures."""

import io
from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from inactivity.config import AnalysisConfig
from inactivity.crawler.base import DataSourceError, RepositorySource
from inactivity.crawler.models import RepositoryRecord

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeSource(RepositorySource):
    """In-memory stand-in for the gh-backed data source.

    ``repos`` maps ``org/name`` to a dict with ``days_ago``, ``contributors``
    and ``archived``. A repository missing from ``repos`` behaves like an
    inaccessible one; ``days_ago=None`` means the repository has no commits.
    """

    def __init__(self, repos: dict, members: dict[str, set[str]] | None = None):
        self.repos = repos
        self.members = members or {}
        self.calls: list[tuple] = []

    def _repo(self, repo_full_name: str) -> dict:
        if repo_full_name not in self.repos:
            raise DataSourceError(f"Repository {repo_full_name} not found or not accessible")
        return self.repos[repo_full_name]

    def list_organization_repositories(self, org):
        self.calls.append(("list", org))
        for full_name in self.repos:
            owner, name = full_name.split("/")
            if owner == org:
                yield name

    def get_last_commit_date(self, repo_full_name):
        self.calls.append(("commit", repo_full_name))
        days_ago = self._repo(repo_full_name).get("days_ago")
        if days_ago is None:
            raise DataSourceError(f"No commits found in {repo_full_name}")
        return NOW - timedelta(days=days_ago)

    def get_contributors(self, repo_full_name):
        self.calls.append(("contributors", repo_full_name))
        contributors = self._repo(repo_full_name).get("contributors", set())
        if contributors is None:
            raise DataSourceError(f"Failed to get contributors for {repo_full_name}")
        return set(contributors)

    def is_org_member(self, org, login):
        return login in self.members.get(org, set())

    def is_archived(self, repo_full_name):
        self.calls.append(("archived", repo_full_name))
        return self._repo(repo_full_name).get("archived", False)


@pytest.fixture
def config():
    """Default configuration with the organization-mode archived rule."""
    return AnalysisConfig(organization="acme", archived_always_flagged=True, silent=True)


@pytest.fixture
def output():
    """A plain, wide console whose output can be read back."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def fake_source():
    return FakeSource(
        repos={
            "acme/stale-abandoned": {"days_ago": 200, "contributors": {"ann", "bob"}},
            "acme/fresh": {"days_ago": 10, "contributors": {"ann", "bob"}},
            "acme/broken": {"days_ago": None},
            "acme/stale-active": {"days_ago": 400, "contributors": {"ann", "cid", "dee"}},
            "acme/archived": {"days_ago": 5, "contributors": {"ann"}, "archived": True},
        },
        members={"acme": {"ann", "cid", "dee"}},
    )


@pytest.fixture
def sample_records():
    """A flagged and an unflagged repository."""
    return [
        RepositoryRecord(
            identifier="acme/old-service",
            last_commit_at=datetime(2024, 11, 13, 8, 30, tzinfo=timezone.utc),
            days_since_last_commit=200,
            total_contributors=10,
            inactive_contributors=5,
            archived=False,
            flagged=True,
        ),
        RepositoryRecord(
            identifier="acme/web",
            last_commit_at=datetime(2025, 5, 22, 17, 0, tzinfo=timezone.utc),
            days_since_last_commit=10,
            total_contributors=3,
            inactive_contributors=1,
            archived=True,
            flagged=False,
        ),
    ]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_source():
    """Factory for FakeSource instances with custom repositories."""
    return FakeSource
