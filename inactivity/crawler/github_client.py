"""GitHub data source backed by the ``gh`` command-line client."""

import logging
import subprocess
from datetime import datetime
from typing import Iterator

from rich.console import Console

from .base import DataSourceError, RepositorySource

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class GitHubCLIError(DataSourceError):
    """The gh client is missing, unauthenticated, or a call failed."""


class GitHubCLIClient(RepositorySource):
    """Client that shells out to an authenticated ``gh`` installation.

    Every call blocks until gh exits. Nothing is retried; gh's own
    response cache is the only caching involved.
    """

    def __init__(
        self,
        executable: str = "gh",
        console: Console | None = None,
        verbose: bool = True,
    ):
        self.executable = executable
        self.console = console or Console()
        self.verbose = verbose

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.executable, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise GitHubCLIError(f"GitHub CLI ({self.executable}) is not installed or not in PATH") from e

    def _api(self, endpoint: str, *args: str) -> str:
        """Call ``gh api`` and return stdout, raising on a non-zero exit."""
        result = self._run("api", endpoint, *args)
        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise GitHubCLIError(f"gh api {endpoint} failed: {detail}")
        return result.stdout

    @staticmethod
    def _lines(output: str) -> list[str]:
        return [line.strip() for line in output.splitlines() if line.strip()]

    def validate(self) -> None:
        """Verify gh is installed and authenticated."""
        if self._run("--version").returncode != 0:
            raise GitHubCLIError(f"GitHub CLI ({self.executable}) is not installed or not in PATH")

        status = self._run("auth", "status")
        if status.returncode != 0:
            raise GitHubCLIError(f"GitHub CLI is not authenticated: {status.stderr.strip()}")

    def get_user_organizations(self) -> list[str]:
        """List organizations the authenticated user belongs to."""
        output = self._api("user/memberships/orgs", "--jq", ".[].organization.login")
        return self._lines(output)

    def list_organization_repositories(self, org: str) -> Iterator[str]:
        page = 1
        while True:
            if self.verbose:
                self.console.print(f"📄 Fetching page {page} of repositories...")
            output = self._api(
                f"orgs/{org}/repos?per_page={PAGE_SIZE}&page={page}",
                "--jq", ".[].name",
            )
            names = self._lines(output)
            if not names:
                break

            yield from names

            if len(names) < PAGE_SIZE:
                break
            page += 1

    def get_last_commit_date(self, repo_full_name: str) -> datetime:
        output = self._api(
            f"repos/{repo_full_name}/commits?per_page=1",
            "--jq", ".[0].commit.committer.date",
            "--cache", "1h",
        )
        lines = self._lines(output)
        if not lines or lines[0] == "null":
            raise GitHubCLIError(f"No commits found in {repo_full_name}")

        try:
            return datetime.fromisoformat(lines[0].replace("Z", "+00:00"))
        except ValueError as e:
            raise GitHubCLIError(f"Unparseable commit date for {repo_full_name}: {lines[0]}") from e

    def get_contributors(self, repo_full_name: str) -> set[str]:
        output = self._api(
            f"repos/{repo_full_name}/contributors",
            "--paginate",
            "--jq", ".[].login",
        )
        return set(self._lines(output))

    def is_org_member(self, org: str, login: str) -> bool:
        result = self._run("api", f"orgs/{org}/members/{login}", "--silent")
        if result.returncode == 0:
            return True
        # gh reports non-members as HTTP 404; any other failure is an error
        if "404" in result.stderr or "Not Found" in result.stderr:
            return False
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitHubCLIError(f"Membership check for {login} in {org} failed: {detail}")

    def is_archived(self, repo_full_name: str) -> bool:
        try:
            output = self._api(f"repos/{repo_full_name}", "--jq", ".archived")
        except GitHubCLIError as e:
            raise GitHubCLIError(f"Repository {repo_full_name} not found or not accessible: {e}") from e
        return output.strip() == "true"
