"""Sequential fetch-and-classify pipeline over a set of repositories."""

import logging
from datetime import datetime, timezone
from typing import Iterable

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from ..config import AnalysisConfig
from ..crawler.base import DataSourceError, RepositorySource
from ..crawler.models import RepositoryRecord
from .classifier import classify, days_between
from .repo_names import InvalidRepositoryName, normalize_repository_name

logger = logging.getLogger(__name__)


class InactivityAnalyzer:
    """Fetches metrics for repositories one at a time and classifies them."""

    def __init__(
        self,
        source: RepositorySource,
        config: AnalysisConfig,
        console: Console | None = None,
        now: datetime | None = None,
    ):
        self.source = source
        self.config = config
        self.console = console or Console()
        # Captured once so every record in a run is measured from the same instant
        self.now = now or datetime.now(timezone.utc)

    def analyze_repository(self, identifier: str) -> RepositoryRecord:
        """Fetch and classify one repository.

        Raises DataSourceError if any metric cannot be fetched.
        """
        record = RepositoryRecord(identifier=identifier)
        org = identifier.split("/")[0]

        record.archived = self.source.is_archived(identifier)

        record.last_commit_at = self.source.get_last_commit_date(identifier)
        record.days_since_last_commit = days_between(record.last_commit_at, self.now)

        contributors = self.source.get_contributors(identifier)
        record.total_contributors = len(contributors)
        record.inactive_contributors = sum(
            1 for login in contributors if not self.source.is_org_member(org, login)
        )

        record.flagged = classify(record, self.config)
        return record

    def analyze_repositories(self, entries: Iterable[str]) -> list[RepositoryRecord]:
        """Analyze each entry in order, skipping the ones that fail."""
        entries = list(entries)
        results: list[RepositoryRecord] = []

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total} repos"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            disable=self.config.silent,
            transient=True,
        ) as progress:
            task = progress.add_task("Analyzing repositories...", total=len(entries))

            for entry in entries:
                progress.update(task, description=f"Analyzing {entry}...")
                record = self._analyze_entry(entry)
                if record is not None:
                    results.append(record)
                progress.advance(task)

        if not self.config.silent:
            self.console.print(
                f"[green]✓[/green] Analysis completed for {len(results)} of {len(entries)} repositories"
            )
        return results

    def _analyze_entry(self, entry: str) -> RepositoryRecord | None:
        try:
            identifier = normalize_repository_name(entry)
        except InvalidRepositoryName as e:
            logger.warning("%s (skipping)", e)
            return None

        try:
            record = self.analyze_repository(identifier)
        except DataSourceError as e:
            logger.warning("Failed to analyze %s: %s (skipping)", identifier, e)
            return None

        logger.info(
            "%s: last commit %s (%d days ago), %d/%d contributors inactive, flagged=%s",
            identifier,
            record.last_commit_day,
            record.days_since_last_commit,
            record.inactive_contributors,
            record.total_contributors,
            record.flagged,
        )
        return record

    def analyze_organization(self, org: str) -> list[RepositoryRecord]:
        """Analyze every repository of an organization.

        A failure while listing repositories propagates; failures on
        individual repositories only skip them.
        """
        names = list(self.source.list_organization_repositories(org))
        if not self.config.silent:
            self.console.print(f"[bold]Found {len(names)} repositories in {org}[/bold]")
        return self.analyze_repositories(f"{org}/{name}" for name in names)
